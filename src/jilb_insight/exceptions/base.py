"""Base exception for jilb-insight."""

from typing import Any, Dict, Optional


class JilbInsightError(Exception):
    """Root of every error jilb-insight raises on purpose.

    ``details`` holds machine-readable context (file path, config key) that
    the CLI shows after the message, or emits as JSON with ``--format json``.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": {key: str(value) for key, value in self.details.items()},
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
