"""Longest-match-first tokenizer for F# source.

Comments are dropped and literals are masked before lexing, then restored
into ``literal`` tokens so reports show the original text. Characters the
lexer does not recognize are skipped; tokenizing never fails.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from ..logging_config import get_logger
from .lexicon import (
    KEYWORDS,
    MULTI_CHAR_OPERATORS,
    SINGLE_CHAR_OPERATORS,
    is_digit,
    is_identifier_char,
    is_identifier_start,
)
from .preprocessor import LITERAL_CLOSE, LITERAL_OPEN, mask_literals, restore_literal

logger = get_logger(__name__)

TokenKind = Literal["operator", "identifier", "number", "literal"]

_RADIX_PREFIXES = ("0x", "0X", "0o", "0O", "0b", "0B")


@dataclass(frozen=True)
class Token:
    """A single lexeme of the token stream."""

    text: str
    kind: TokenKind

    @property
    def is_keyword(self) -> bool:
        return self.kind == "identifier" and self.text in KEYWORDS


def tokenize(source: str) -> list[Token]:
    """Produce the ordered token stream of ``source``.

    Args:
        source: Raw F# source text

    Returns:
        Tokens in source order
    """
    masked, literals = mask_literals(source)
    tokens: list[Token] = []
    length = len(masked)
    pos = 0

    while pos < length:
        char = masked[pos]

        if char.isspace():
            pos += 1
            continue

        operator = _match_operator(masked, pos)
        if operator is not None:
            tokens.append(Token(operator, "operator"))
            pos += len(operator)
            continue

        if is_digit(char):
            end = _scan_number(masked, pos)
            tokens.append(Token(masked[pos:end], "number"))
            pos = end
            continue

        if is_identifier_start(char):
            end = pos + 1
            while end < length and is_identifier_char(masked[end]):
                end += 1
            tokens.append(Token(masked[pos:end], "identifier"))
            pos = end
            continue

        if char == "`" and masked.startswith("``", pos):
            close = masked.find("``", pos + 2)
            if close != -1 and "\n" not in masked[pos:close]:
                tokens.append(Token(masked[pos : close + 2], "identifier"))
                pos = close + 2
                continue

        if char == LITERAL_OPEN:
            close = masked.find(LITERAL_CLOSE, pos)
            if close != -1:
                placeholder = masked[pos : close + 1]
                restored = restore_literal(placeholder, literals)
                # A stray delimiter from the raw source is skipped on its own
                if restored != placeholder:
                    tokens.append(Token(restored, "literal"))
                    pos = close + 1
                    continue

        pos += 1

    logger.debug(f"Tokenized {length} chars into {len(tokens)} tokens ({len(literals)} literals)")
    return tokens


def _match_operator(text: str, pos: int) -> Optional[str]:
    for operator in MULTI_CHAR_OPERATORS:
        if text.startswith(operator, pos):
            return operator
    if text[pos] in SINGLE_CHAR_OPERATORS:
        return text[pos]
    return None


def _scan_number(text: str, pos: int) -> int:
    """Return the end offset of the numeric literal starting at pos.

    A single dot belongs to the number (``3.14``, ``1.``) but a double dot
    does not, so ranges such as ``0..5`` lex as ``0``, ``.``, ``.``, ``5``.
    """
    length = len(text)

    if text.startswith(_RADIX_PREFIXES, pos):
        end = pos + 2
        while end < length and (text[end].isalnum() or text[end] == "_"):
            end += 1
        return end

    end = _skip_digits(text, pos)
    if end < length and text[end] == "." and not text.startswith("..", end):
        end += 1
        if end < length and is_digit(text[end]):
            end = _skip_digits(text, end)

    if end < length and text[end] in "eE":
        exponent = end + 1
        if exponent < length and text[exponent] in "+-":
            exponent += 1
        if exponent < length and is_digit(text[exponent]):
            end = _skip_digits(text, exponent)

    # Type suffixes: 10L, 0uy, 1.0f, 3.0m
    while end < length and text[end].isalpha():
        end += 1
    return end


def _skip_digits(text: str, pos: int) -> int:
    while pos < len(text) and (is_digit(text[pos]) or text[pos] == "_"):
        pos += 1
    return pos
