"""Analysis-related exceptions.

The analysis core itself never raises on malformed source; these cover the
edges around it, such as reading the input file.
"""

from pathlib import Path

from .base import JilbInsightError


class AnalysisError(JilbInsightError):
    """Base class for analysis-related errors."""

    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason
