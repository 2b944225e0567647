"""Base formatter interface for jilb-insight output rendering."""

from abc import ABC, abstractmethod

from ..analysis.models import Metric


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, metric: Metric, source_name: str = "<input>") -> None:
        """Render a metric to stdout."""

    @abstractmethod
    def format(self, metric: Metric, source_name: str = "<input>") -> str:
        """Return formatted string representation of a metric."""
