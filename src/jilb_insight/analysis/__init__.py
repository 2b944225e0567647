"""Jilb metric analysis: control classifier, operator table, assembly."""

from .control import ControlClassifier, ControlState, MatchBlockState
from .engine import MetricEngine, assemble_metric
from .models import ControlHit, ControlResult, ControlStat, Metric, OperatorRecord
from .operators import OperatorClassifier, classify_operators

__all__ = [
    "ControlClassifier",
    "ControlState",
    "MatchBlockState",
    "OperatorClassifier",
    "classify_operators",
    "MetricEngine",
    "assemble_metric",
    "ControlHit",
    "ControlResult",
    "ControlStat",
    "Metric",
    "OperatorRecord",
]
