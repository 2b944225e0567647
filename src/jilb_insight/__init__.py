"""
jilb-insight - Jilb complexity metric for F# source

Lexical heuristics for control-flow complexity: absolute complexity,
relative complexity, maximum nesting depth and an operator frequency table.

Named after the Jilb metric, an informal cyclomatic-style measure used in
software metrology courses.
"""

__version__ = "0.1.0"

from .analysis.models import ControlHit, ControlStat, Metric, OperatorRecord
from .api import analyze, analyze_file, tokenize
from .config import AnalysisConfig, load_config
from .scanning.tokenizer import Token

__all__ = [
    "analyze",  # Main entry point
    "analyze_file",
    "tokenize",
    "AnalysisConfig",
    "load_config",
    "Metric",
    "ControlHit",
    "ControlStat",
    "OperatorRecord",
    "Token",
]
