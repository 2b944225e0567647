"""Exception hierarchy for jilb-insight."""

from .analysis import AnalysisError, FileAccessError
from .base import JilbInsightError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "JilbInsightError",
    "AnalysisError",
    "FileAccessError",
    "ConfigurationError",
    "InvalidConfigError",
]
