"""Result models for the Jilb metric."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ControlHit:
    """One recognized control-flow construct."""

    line: int
    kind: str
    text: str
    weight: float


@dataclass(frozen=True)
class ControlStat:
    """Per-kind summary of control hits.

    ``contribution`` is the amount the kind added to the absolute
    complexity. For ``case`` it is the sum of the per-block bonuses rather
    than count times weight, because the first arm of every match is free.
    """

    kind: str
    count: int
    weight: float
    contribution: float


@dataclass(frozen=True)
class OperatorRecord:
    """Frequency of one operator or collapsed idiom."""

    name: str
    frequency: int


@dataclass(frozen=True)
class ControlResult:
    """Output of the control classifier."""

    absolute_complexity: float
    max_nesting_depth: int
    hits: tuple[ControlHit, ...]
    stats: tuple[ControlStat, ...]


@dataclass(frozen=True)
class Metric:
    """Jilb metric for one source text.

    Attributes:
        absolute_complexity: Weighted count of control-flow constructs (A)
        relative_complexity: A divided by the size denominator (R)
        max_nesting_depth: Deepest indentation-tracked block nesting
        size_denominator: N used for R, never less than 1
        statement_count: Approximate number of statements
        operator_total: Sum of all operator frequencies
        variant: Which denominator was used
        control_hits: Every recognized construct in source order
        operator_frequencies: Operators by descending frequency, then name
        control_stats: Per-kind counts and contributions, sorted by kind
    """

    absolute_complexity: float
    relative_complexity: float
    max_nesting_depth: int
    size_denominator: int
    statement_count: int
    operator_total: int
    variant: str
    control_hits: tuple[ControlHit, ...]
    operator_frequencies: tuple[OperatorRecord, ...]
    control_stats: tuple[ControlStat, ...]

    def operator_count(self, name: str) -> int:
        """Frequency of a single operator, 0 when absent."""
        for record in self.operator_frequencies:
            if record.name == name:
                return record.frequency
        return 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
