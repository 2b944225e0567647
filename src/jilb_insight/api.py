"""Public API for jilb-insight.

Example:
    >>> from pathlib import Path
    >>> from jilb_insight import analyze
    >>>
    >>> metric = analyze(Path("Program.fs").read_text())
    >>> metric.absolute_complexity, metric.max_nesting_depth
    (28.0, 7)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .analysis.engine import MetricEngine
from .analysis.models import Metric
from .config import AnalysisConfig
from .exceptions import FileAccessError
from .logging_config import get_logger
from .scanning.tokenizer import Token
from .scanning.tokenizer import tokenize as _tokenize

logger = get_logger(__name__)


def analyze(source: str, config: Optional[AnalysisConfig] = None) -> Metric:
    """Compute the Jilb metric of F# source text.

    Pure and deterministic: the same text and config always produce an
    equal Metric. Malformed source never raises.

    Args:
        source: Raw F# source
        config: Analysis configuration (defaults to AnalysisConfig())

    Returns:
        Metric with absolute/relative complexity, depth and operator table
    """
    return MetricEngine(config).run(source)


def tokenize(source: str) -> list[Token]:
    """Return the ordered token stream of F# source text."""
    return _tokenize(source)


def analyze_file(path: Union[str, Path], config: Optional[AnalysisConfig] = None) -> Metric:
    """Read an F# file and compute its Jilb metric.

    Raises:
        FileAccessError: If the file cannot be read
    """
    filepath = Path(path)
    try:
        source = filepath.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        raise FileAccessError(filepath, f"Cannot read file: {e}")

    logger.info(f"Analyzing {filepath} ({len(source)} chars)")
    return analyze(source, config)
