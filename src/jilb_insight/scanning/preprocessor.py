"""Comment and literal masking for F# source.

A single left-to-right scanner splits the source into code, comment and
literal segments. Both the line-oriented control classifier and the
tokenizer work on views built from these segments, so a keyword inside a
string or comment can never be counted.

Recognized constructs, tried in order at every position:
    (* block comments *), // line comments, triple-quoted strings,
    "strings" with backslash escapes, @"verbatim strings" and 'c' characters.

Unterminated comments and strings run to the end of input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from .lexicon import is_identifier_char

SegmentKind = Literal["code", "comment", "literal"]

# Private-use code points delimit literal placeholders in masked text.
LITERAL_OPEN = "\ue000"
LITERAL_CLOSE = "\ue001"

_STRING_PREFIXES = "@$"
_MAX_CHAR_ESCAPE = 10


@dataclass(frozen=True)
class Segment:
    """A contiguous run of source text of one kind."""

    kind: SegmentKind
    text: str


def split_segments(source: str) -> list[Segment]:
    """Split source into code, comment and literal segments.

    Concatenating the segment texts always reproduces the input exactly.
    """
    segments: list[Segment] = []
    length = len(source)
    code_start = 0
    pos = 0

    while pos < length:
        special = _match_special(source, pos)
        if special is None:
            pos += 1
            continue

        end, kind = special
        if code_start < pos:
            segments.append(Segment("code", source[code_start:pos]))
        segments.append(Segment(kind, source[pos:end]))
        pos = end
        code_start = end

    if code_start < length:
        segments.append(Segment("code", source[code_start:]))
    return segments


def clean_source(source: str) -> str:
    """Replace every comment and literal with a neutral placeholder.

    The placeholder is a single space followed by the newlines the removed
    text contained, so line numbering is unchanged.
    """
    parts = []
    for segment in split_segments(source):
        if segment.kind == "code":
            parts.append(segment.text)
        else:
            parts.append(_placeholder(segment.text))
    return "".join(parts)


def mask_literals(source: str) -> tuple[str, list[str]]:
    """Strip comments and swap literals for indexed placeholders.

    Returns:
        Tuple of (masked text, literal table). Each literal is replaced by
        ``LITERAL_OPEN + index + LITERAL_CLOSE`` where ``index`` points into
        the literal table.
    """
    literals: list[str] = []
    parts = []
    for segment in split_segments(source):
        if segment.kind == "code":
            parts.append(segment.text)
        elif segment.kind == "comment":
            parts.append(_placeholder(segment.text))
        else:
            parts.append(f" {LITERAL_OPEN}{len(literals)}{LITERAL_CLOSE} ")
            literals.append(segment.text)
    return "".join(parts), literals


def restore_literal(placeholder: str, literals: list[str]) -> str:
    """Return the original literal text for a placeholder.

    Anything that is not a well-formed placeholder is returned unchanged.
    """
    if not (placeholder.startswith(LITERAL_OPEN) and placeholder.endswith(LITERAL_CLOSE)):
        return placeholder
    index_text = placeholder[len(LITERAL_OPEN) : -len(LITERAL_CLOSE)]
    if not index_text.isdigit():
        return placeholder
    index = int(index_text)
    if index >= len(literals):
        return placeholder
    return literals[index]


def _placeholder(text: str) -> str:
    return " " + "\n" * text.count("\n")


def _match_special(source: str, pos: int) -> Optional[tuple[int, SegmentKind]]:
    """Return (end, kind) if a comment or literal starts at ``pos``."""
    char = source[pos]

    if char == "(" and source.startswith("(*", pos) and not source.startswith("(*)", pos):
        return _find_end(source, "*)", pos + 2), "comment"

    if char == "/" and source.startswith("//", pos):
        newline = source.find("\n", pos)
        return (newline if newline != -1 else len(source)), "comment"

    if char == '"' or (char in _STRING_PREFIXES and _string_follows(source, pos)):
        return _scan_string(source, pos), "literal"

    if char == "'" and (pos == 0 or not is_identifier_char(source[pos - 1])):
        end = _scan_char(source, pos)
        if end is not None:
            return end, "literal"

    return None


def _find_end(source: str, terminator: str, start: int) -> int:
    found = source.find(terminator, start)
    if found == -1:
        return len(source)
    return found + len(terminator)


def _string_follows(source: str, pos: int) -> bool:
    """True if a string prefix run (``@``, ``$``, ``$@``) at pos opens a string."""
    scan = pos
    while scan < len(source) and scan - pos < 2 and source[scan] in _STRING_PREFIXES:
        scan += 1
    return scan < len(source) and source[scan] == '"'


def _scan_string(source: str, pos: int) -> int:
    """Return the end offset of the string literal starting at pos."""
    quote = pos
    while source[quote] != '"':
        quote += 1
    verbatim = "@" in source[pos:quote]

    if source.startswith('"""', quote):
        return _find_end(source, '"""', quote + 3)

    length = len(source)
    scan = quote + 1
    while scan < length:
        char = source[scan]
        if char == '"':
            if verbatim and scan + 1 < length and source[scan + 1] == '"':
                scan += 2
                continue
            return scan + 1
        if char == "\\" and not verbatim:
            scan += 2
            continue
        scan += 1
    return length


def _scan_char(source: str, pos: int) -> Optional[int]:
    """Return the end offset of a character literal at pos, if there is one."""
    length = len(source)
    if pos + 2 >= length:
        return None

    first = source[pos + 1]
    if first == "\\":
        scan = pos + 3
        limit = min(length, pos + 3 + _MAX_CHAR_ESCAPE)
        while scan < limit:
            if source[scan] == "'":
                return scan + 1
            if source[scan] == "\n":
                return None
            scan += 1
        return None

    if first not in "'\n" and source[pos + 2] == "'":
        return pos + 3
    return None
