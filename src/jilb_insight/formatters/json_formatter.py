"""JSON formatter for jilb-insight."""

import json

from ..analysis.models import Metric
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render a metric as JSON."""

    def render(self, metric: Metric, source_name: str = "<input>") -> None:
        print(self.format(metric, source_name))

    def format(self, metric: Metric, source_name: str = "<input>") -> str:
        data = {"source": source_name, **metric.to_dict()}
        return json.dumps(data, indent=2, sort_keys=True)
