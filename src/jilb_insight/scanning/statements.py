"""Statement count approximation (the N of the statement-ratio metric)."""

from __future__ import annotations

from .lexicon import STATEMENT_OPENERS, STATEMENT_TERMINATOR, is_identifier_char

_BRACKET_CHARS = frozenset("{}()[]")


def count_statements(cleaned: str) -> int:
    """Approximate the number of statements in cleaned source.

    A non-blank line counts once if it ends with ``;`` or starts with a
    binding, action, yield/return, branch keyword or a printf call. Lines
    made only of brackets are ignored.

    Args:
        cleaned: Source with comments and literals already masked

    Returns:
        Statement count, never less than 1
    """
    count = 0
    for raw in cleaned.split("\n"):
        line = raw.strip()
        if not line:
            continue
        if all(char in _BRACKET_CHARS or char.isspace() for char in line):
            continue
        if line.endswith(STATEMENT_TERMINATOR):
            count += 1
            continue
        if _first_word(line) in STATEMENT_OPENERS:
            count += 1
    return max(1, count)


def _first_word(line: str) -> str:
    end = 0
    while end < len(line) and is_identifier_char(line[end]):
        end += 1
    return line[:end]
