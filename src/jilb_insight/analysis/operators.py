"""Operator frequency table with multi-token idioms collapsed.

One left-to-right pass over the token stream. At each position the rules
below are tried in order and the first that applies decides what is
counted and how many tokens are consumed:

    <EntryPoint>            -> "[<EntryPoint>]"
    for .. in/to .. do      -> "for-in-do" / "for-to-do"
    match .. with           -> "match-with" (then '|' and '->' go quiet)
    while .. do             -> "while-do"
    if .. then              -> "if-then-elif-else"
    try .. with/finally     -> "try-with" / "try-finally"
    when .. ->              -> "when->"
    fun .. ->               -> "fun->"
    . .                     -> ".."
    - >                     -> "->"
    other operator lexeme   -> its own text (brackets excluded)
    non-structural keyword  -> lower-cased keyword
    name (                  -> name, as a call site

Numbers, literals and plain names are operands and are not counted.
"""

from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from ..logging_config import get_logger
from ..scanning.lexicon import BRACKETS, KEYWORDS, OPERATOR_LEXEMES, STRUCTURAL_KEYWORDS
from ..scanning.tokenizer import Token
from .models import OperatorRecord

logger = get_logger(__name__)

ENTRY_POINT = "[<EntryPoint>]"

# Lookahead limits, in tokens
LOOP_LOOKAHEAD = 10
MATCH_LOOKAHEAD = 10
IF_LOOKAHEAD = 50
TRY_LOOKAHEAD = 15
WHEN_LOOKAHEAD = 10
FUN_LOOKAHEAD = 5
SUPPRESSION_WINDOW = 50

# (name, tokens consumed, opens suppression window)
_Step = tuple[Optional[str], int, bool]


class OperatorClassifier:
    """Counts operators and idioms in a token stream."""

    def __init__(self, case_arm_marker: str = "|", suppression_window: int = SUPPRESSION_WINDOW):
        self.case_arm_marker = case_arm_marker
        self.suppression_window = suppression_window

    def classify(self, tokens: Sequence[Token]) -> list[OperatorRecord]:
        """Build the frequency table for ``tokens``.

        Returns:
            Records sorted by descending frequency, then ascending name
        """
        counts: Counter = Counter()
        suppress = 0
        pos = 0

        while pos < len(tokens):
            name, consumed, opens_window = self._step(tokens, pos, suppress > 0)
            if name is not None:
                counts[name] += 1
            pos += consumed
            if opens_window:
                suppress = self.suppression_window
            else:
                suppress = max(0, suppress - consumed)

        records = [
            OperatorRecord(name=name, frequency=frequency)
            for name, frequency in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
        ]
        logger.debug(
            f"Classified {len(tokens)} tokens into {len(records)} distinct operators "
            f"({sum(counts.values())} total)"
        )
        return records

    def _step(self, tokens: Sequence[Token], pos: int, suppressed: bool) -> _Step:
        token = tokens[pos]
        text = token.text

        if (
            text == "<"
            and _text_at(tokens, pos + 1) == "EntryPoint"
            and _text_at(tokens, pos + 2) == ">"
        ):
            return ENTRY_POINT, 3, False

        if token.kind == "identifier":
            idiom = self._idiom(tokens, pos, text.lower())
            if idiom is not None:
                return idiom

        if text == "." and _text_at(tokens, pos + 1) == ".":
            return "..", 2, False

        if text == "-" and _text_at(tokens, pos + 1) == ">":
            return (None if suppressed else "->"), 2, False

        if token.kind == "operator":
            if text in BRACKETS or text not in OPERATOR_LEXEMES:
                return None, 1, False
            if suppressed and text == self.case_arm_marker:
                return None, 1, False
            return text, 1, False

        if token.kind == "identifier":
            lower = text.lower()
            if lower in KEYWORDS:
                if lower in STRUCTURAL_KEYWORDS:
                    return None, 1, False
                return lower, 1, False
            if _text_at(tokens, pos + 1) == "(":
                return text, 1, False

        return None, 1, False

    def _idiom(self, tokens: Sequence[Token], pos: int, word: str) -> Optional[_Step]:
        if word == "for":
            seen_in = seen_to = False
            for ahead in _window(tokens, pos, LOOP_LOOKAHEAD):
                lowered = ahead.lower()
                if lowered == "in":
                    seen_in = True
                elif lowered == "to":
                    seen_to = True
                elif lowered == "do" and (seen_in or seen_to):
                    return ("for-in-do" if seen_in else "for-to-do"), 1, False
            return None

        if word == "match":
            if _find_word(tokens, pos, MATCH_LOOKAHEAD, "with"):
                return "match-with", 1, True
            return None

        if word == "while":
            if _find_word(tokens, pos, LOOP_LOOKAHEAD, "do"):
                return "while-do", 1, False
            return None

        if word == "if":
            if _find_word(tokens, pos, IF_LOOKAHEAD, "then"):
                return "if-then-elif-else", 1, False
            return None

        if word == "try":
            for ahead in _window(tokens, pos, TRY_LOOKAHEAD):
                lowered = ahead.lower()
                if lowered == "with":
                    return "try-with", 1, False
                if lowered == "finally":
                    return "try-finally", 1, False
            return None

        if word == "when":
            if _find_arrow(tokens, pos, WHEN_LOOKAHEAD):
                return "when->", 1, False
            return None

        if word == "fun":
            if _find_arrow(tokens, pos, FUN_LOOKAHEAD):
                return "fun->", 1, False
            return None

        return None


def classify_operators(tokens: Sequence[Token], case_arm_marker: str = "|") -> list[OperatorRecord]:
    """Convenience wrapper around :class:`OperatorClassifier`."""
    return OperatorClassifier(case_arm_marker=case_arm_marker).classify(tokens)


def _text_at(tokens: Sequence[Token], pos: int) -> Optional[str]:
    if 0 <= pos < len(tokens):
        return tokens[pos].text
    return None


def _window(tokens: Sequence[Token], pos: int, limit: int) -> list[str]:
    return [token.text for token in tokens[pos + 1 : pos + 1 + limit]]


def _find_word(tokens: Sequence[Token], pos: int, limit: int, word: str) -> bool:
    return any(text.lower() == word for text in _window(tokens, pos, limit))


def _find_arrow(tokens: Sequence[Token], pos: int, limit: int) -> bool:
    texts = _window(tokens, pos, limit + 1)
    return any(texts[i] == "-" and texts[i + 1] == ">" for i in range(len(texts) - 1))
