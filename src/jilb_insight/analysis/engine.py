"""Metric assembly: combines the control scan, operator table and statement count.

Pipeline:
    source → clean_source → count_statements, ControlClassifier
    source → tokenize → OperatorClassifier
    both → assemble_metric → Metric
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..logging_config import get_logger
from ..scanning.preprocessor import clean_source
from ..scanning.statements import count_statements
from ..scanning.tokenizer import tokenize
from .control import ControlClassifier
from .models import ControlResult, Metric, OperatorRecord
from .operators import OperatorClassifier

logger = get_logger(__name__)


def assemble_metric(
    control: ControlResult,
    operators: Sequence[OperatorRecord],
    statements: int,
    config: Optional[AnalysisConfig] = None,
) -> Metric:
    """Combine component results into a Metric.

    The relative complexity divides the absolute complexity by the statement
    count or by the total operator frequency, depending on
    ``config.metric_variant``. The denominator is floored at 1.
    """
    config = config or DEFAULT_CONFIG
    operator_total = sum(record.frequency for record in operators)
    statement_count = max(1, statements)

    if config.metric_variant == "operator_ratio":
        denominator = max(1, operator_total)
    else:
        denominator = statement_count

    return Metric(
        absolute_complexity=control.absolute_complexity,
        relative_complexity=control.absolute_complexity / denominator,
        max_nesting_depth=max(0, control.max_nesting_depth),
        size_denominator=denominator,
        statement_count=statement_count,
        operator_total=operator_total,
        variant=config.metric_variant,
        control_hits=control.hits,
        operator_frequencies=tuple(operators),
        control_stats=control.stats,
    )


class MetricEngine:
    """Runs every component over one source text."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.control = ControlClassifier(self.config)
        self.operators = OperatorClassifier(case_arm_marker=self.config.case_arm_marker)

    def run(self, source: str) -> Metric:
        cleaned = clean_source(source)
        statements = count_statements(cleaned)
        control = self.control.classify(cleaned, source=source)
        operators = self.operators.classify(tokenize(source))

        metric = assemble_metric(control, operators, statements, self.config)
        logger.debug(
            f"Jilb metric: A={metric.absolute_complexity}, R={metric.relative_complexity:.3f}, "
            f"N={metric.size_denominator} ({metric.variant}), depth={metric.max_nesting_depth}"
        )
        return metric
