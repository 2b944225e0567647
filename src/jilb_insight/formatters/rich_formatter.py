"""Rich terminal formatter for jilb-insight."""

import io

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..analysis.models import Metric
from .base import BaseFormatter

console = Console()

_VARIANT_LABELS = {
    "statement_ratio": "statements",
    "operator_ratio": "operators",
}


def _depth_label(depth: int) -> str:
    if depth >= 6:
        return "[red bold]deep[/red bold]"
    elif depth >= 4:
        return "[yellow]moderate[/yellow]"
    else:
        return "[green]shallow[/green]"


class RichFormatter(BaseFormatter):
    """Summary panel, hit listing, control table and operator table."""

    def __init__(self, max_operators: int = 40):
        self.max_operators = max_operators

    def render(self, metric: Metric, source_name: str = "<input>") -> None:
        self._print(console, metric, source_name)

    def format(self, metric: Metric, source_name: str = "<input>") -> str:
        buffer = io.StringIO()
        self._print(Console(file=buffer, width=100, no_color=True), metric, source_name)
        return buffer.getvalue()

    def _print(self, out: Console, metric: Metric, source_name: str) -> None:
        out.print(self._summary(metric, source_name))
        out.print()

        if metric.control_hits:
            out.print("[bold]Control constructs:[/bold]")
            for hit in metric.control_hits:
                out.print(f"{hit.line:>4}  {hit.kind:<5}  ::  {escape(hit.text)}", highlight=False)
            out.print()
            out.print(self._control_table(metric))
            out.print()

        if metric.operator_frequencies:
            out.print(self._operator_table(metric))

    def _summary(self, metric: Metric, source_name: str) -> Panel:
        unit = _VARIANT_LABELS.get(metric.variant, metric.variant)
        lines = [
            f"Absolute complexity (A): [bold]{metric.absolute_complexity:.2f}[/bold]",
            f"Relative complexity (R): [bold]{metric.relative_complexity:.3f}[/bold]"
            f"  (A / {metric.size_denominator} {unit})",
            f"Max nesting depth:       [bold]{metric.max_nesting_depth}[/bold]"
            f"  {_depth_label(metric.max_nesting_depth)}",
            f"Statements: {metric.statement_count}   Operators: {metric.operator_total}",
        ]
        return Panel(
            "\n".join(lines),
            title=f"[bold cyan]Jilb metric[/bold cyan] {escape(source_name)}",
            expand=False,
        )

    def _control_table(self, metric: Metric) -> Table:
        table = Table(title="Control constructs by kind", show_lines=False)
        table.add_column("Kind", style="cyan")
        table.add_column("Count", justify="right")
        table.add_column("Weight", justify="right")
        table.add_column("Contribution", justify="right")
        for stat in metric.control_stats:
            table.add_row(
                stat.kind,
                str(stat.count),
                f"{stat.weight:g}",
                f"{stat.contribution:.2f}",
            )
        return table

    def _operator_table(self, metric: Metric) -> Table:
        table = Table(title="Operators", show_lines=False)
        table.add_column("Operator", style="cyan")
        table.add_column("Frequency", justify="right")
        for record in metric.operator_frequencies[: self.max_operators]:
            table.add_row(escape(record.name), str(record.frequency))
        hidden = len(metric.operator_frequencies) - self.max_operators
        if hidden > 0:
            table.caption = f"{hidden} more not shown"
        return table
