"""Control-construct classifier: the absolute complexity and nesting depth.

The classifier is a fold over the lines of cleaned source (comments and
literals already masked). All mutable bookkeeping lives in an explicit
``ControlState`` so a single line can be fed and inspected in isolation.

Per non-blank line:
    1. Measure the indentation.
    2. Unwind frames. A case-arm line keeps frames at its own width (arms
       usually sit level with their ``match``); any other line also closes
       frames opened at its width, so siblings do not nest.
    3. Close the active match block unless the line is a case arm.
    4. Force-close a match block left without any enclosing frame.
    5. Scan words and case markers left to right, scoring and opening frames.

A match block contributes ``case_weight * max(0, arms - 1)`` exactly once,
when it closes.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..logging_config import get_logger
from ..scanning.lexicon import (
    CONTROL_KINDS,
    FRAME_OPENERS,
    is_identifier_char,
    is_identifier_start,
)
from .models import ControlHit, ControlResult, ControlStat

logger = get_logger(__name__)

_WORD_KINDS = frozenset(kind for kind in CONTROL_KINDS if kind != "case")

# Characters that glue onto a symbolic marker to form a different operator
# ('||', '|>', '[|', '|]', ...).
_SYMBOL_CHARS = frozenset("!%&*+-./<=>?@^|~:$[]")


@dataclass
class MatchBlockState:
    """Case-arm bookkeeping for the innermost open ``match``."""

    active: bool = False
    case_count: int = 0
    with_seen: bool = False
    opened_line: int = 0


@dataclass
class ControlState:
    """Mutable state threaded through the per-line fold."""

    depth: int = 0
    max_depth: int = 0
    frames: list[int] = field(default_factory=list)
    match: MatchBlockState = field(default_factory=MatchBlockState)
    absolute: float = 0.0
    hits: list[ControlHit] = field(default_factory=list)
    counts: Counter = field(default_factory=Counter)
    contributions: dict[str, float] = field(default_factory=dict)

    def push_frame(self, indent: int) -> None:
        self.frames.append(indent)
        self.depth += 1
        self.max_depth = max(self.max_depth, self.depth)

    def pop_frame(self) -> None:
        self.frames.pop()
        self.depth = max(0, self.depth - 1)

    def add(self, kind: str, amount: float) -> None:
        self.absolute += amount
        self.contributions[kind] = self.contributions.get(kind, 0.0) + amount


class ControlClassifier:
    """Weighted scan of control-flow constructs over cleaned source."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.weights = self.config.resolved_weights
        self.marker = self.config.case_arm_marker
        self._word_marker = is_identifier_start(self.marker[0])

    def classify(self, cleaned: str, source: Optional[str] = None) -> ControlResult:
        """Run the full fold over ``cleaned``.

        Args:
            cleaned: Source with comments and literals masked
            source: Optional raw source; when given, hit texts quote the
                original line instead of the masked one

        Returns:
            ControlResult with totals, hits and per-kind stats
        """
        raw_lines = source.split("\n") if source is not None else None
        state = ControlState()

        for number, line in enumerate(cleaned.split("\n"), start=1):
            display = None
            if raw_lines is not None and number <= len(raw_lines):
                display = raw_lines[number - 1].strip()
            self.feed_line(state, number, line, display)

        return self.finish(state)

    def feed_line(
        self, state: ControlState, number: int, line: str, display: Optional[str] = None
    ) -> None:
        """Advance ``state`` by one cleaned line."""
        trimmed = line.strip()
        if not trimmed:
            return
        text = display if display is not None else trimmed

        indent = len(line) - len(line.lstrip())
        case_line = self.is_case_line(trimmed)

        self._unwind(state, indent, keep_level=case_line)

        if state.match.active and not case_line:
            self._close_match(state, number, "block ended")
        if state.match.active and not state.frames:
            self._close_match(state, number, "indentation stack emptied")

        opened_here = False
        for pos, kind in self._scan(trimmed):
            if kind == "case":
                if pos == 0 and case_line:
                    counted = state.match.active
                else:
                    counted = opened_here and state.match.with_seen
                if counted:
                    state.match.case_count += 1
                    self._record(state, number, "case", text)
                continue

            if kind == "match":
                if state.match.active:
                    self._close_match(state, number, "nested match")
                state.match = MatchBlockState(active=True, opened_line=number)
                opened_here = True
            elif kind == "with" and state.match.active:
                state.match.with_seen = True

            self._record(state, number, kind, text)
            state.add(kind, self.weights[kind])

            if kind in FRAME_OPENERS or (kind == "else" and self.config.else_opens_frame):
                state.push_frame(indent)

    def finish(self, state: ControlState) -> ControlResult:
        """Close any open match block and build the result."""
        if state.match.active:
            self._close_match(state, None, "end of input")

        stats = tuple(
            ControlStat(
                kind=kind,
                count=state.counts[kind],
                weight=self.weights[kind],
                contribution=state.contributions.get(kind, 0.0),
            )
            for kind in sorted(state.counts)
        )
        logger.debug(
            f"Control scan: A={state.absolute}, max depth={state.max_depth}, "
            f"{len(state.hits)} hits"
        )
        return ControlResult(
            absolute_complexity=state.absolute,
            max_nesting_depth=state.max_depth,
            hits=tuple(state.hits),
            stats=stats,
        )

    def is_case_line(self, trimmed: str) -> bool:
        """True if the trimmed line starts with a standalone case marker."""
        return trimmed.startswith(self.marker) and self._is_standalone(
            trimmed, 0, len(self.marker)
        )

    def _unwind(self, state: ControlState, indent: int, keep_level: bool) -> None:
        while state.frames:
            top = state.frames[-1]
            if top > indent or (top == indent and not keep_level):
                state.pop_frame()
            else:
                break

    def _close_match(self, state: ControlState, number: Optional[int], reason: str) -> None:
        block = state.match
        bonus = self.weights["case"] * max(0, block.case_count - 1)
        state.add("case", bonus)
        logger.debug(
            f"Match block from line {block.opened_line} closed at line {number} "
            f"({reason}): {block.case_count} arms, +{bonus}"
        )
        state.match = MatchBlockState()

    def _record(self, state: ControlState, number: int, kind: str, text: str) -> None:
        state.hits.append(ControlHit(line=number, kind=kind, text=text, weight=self.weights[kind]))
        state.counts[kind] += 1

    def _scan(self, text: str) -> Iterator[tuple[int, str]]:
        """Yield (position, kind) for control words and case markers."""
        marker = self.marker
        length = len(text)
        pos = 0

        while pos < length:
            if text.startswith(marker, pos) and self._is_standalone(text, pos, pos + len(marker)):
                yield pos, "case"
                pos += len(marker)
                continue

            if is_identifier_char(text[pos]):
                end = pos + 1
                while end < length and is_identifier_char(text[end]):
                    end += 1
                word = text[pos:end]
                if word in _WORD_KINDS:
                    yield pos, word
                pos = end
                continue

            pos += 1

    def _is_standalone(self, text: str, start: int, end: int) -> bool:
        if self._word_marker:
            glue = is_identifier_char
        else:
            glue = _SYMBOL_CHARS.__contains__
        if start > 0 and glue(text[start - 1]):
            return False
        if end < len(text) and glue(text[end]):
            return False
        return True
