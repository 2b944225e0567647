"""Static F# lookup tables shared by the scanners and classifiers.

All tables are frozen at import time and never modified afterwards.
"""

from __future__ import annotations

KEYWORDS: frozenset[str] = frozenset(
    {
        # bindings and control flow
        "let", "in", "do", "done", "rec", "mutable", "if", "then", "elif", "else",
        "match", "with", "when", "function", "fun", "return", "yield",
        "for", "to", "downto", "while", "try", "finally", "raise", "exception",
        "use", "lazy", "assert",
        # modules/types
        "module", "open", "namespace", "type", "member", "inherit", "interface",
        "abstract", "override", "default", "static", "val", "of", "new",
        "class", "struct", "end", "begin",
        # logical
        "and", "or", "not",
        # casts and tests
        "upcast", "downcast", "null",
    }
)

# Keywords fully absorbed by an idiom in the operator classifier; never
# counted on their own.
STRUCTURAL_KEYWORDS: frozenset[str] = frozenset(
    {
        "for", "in", "do", "match", "with", "while", "if", "then",
        "elif", "else", "try", "finally", "to", "fun", "when",
    }
)

# Longest first. '->' and '..' are deliberately absent: they reach the
# classifier as '-' '>' and '.' '.' pairs.
MULTI_CHAR_OPERATORS: tuple[str, ...] = tuple(
    sorted(
        {
            ">>=", "<=", ">=", "<>", "<-", ":=", "|>", "<|", ">>", "<<", "::",
            "**", "&&", "||", "&&&", "|||", "^^^", "~~~", "<<<", ">>>",
        },
        key=lambda op: (-len(op), op),
    )
)

SINGLE_CHAR_OPERATORS: frozenset[str] = frozenset(
    {
        "+", "-", "*", "/", "%", "=", "<", ">", ".", ",", ";", "@",
        ":", "|", "&", "^", "~", "?", "!", "[", "]", "{", "}", "(", ")",
    }
)

OPERATOR_LEXEMES: frozenset[str] = frozenset(MULTI_CHAR_OPERATORS) | SINGLE_CHAR_OPERATORS

# Grouping punctuation is structural, not an operator occurrence.
BRACKETS: frozenset[str] = frozenset({"(", ")", "[", "]", "{", "}"})

# Control-flow words recognized by the control classifier, in kind order.
CONTROL_KINDS: tuple[str, ...] = (
    "if", "elif", "else", "match", "with", "when", "case", "for", "while",
)

FRAME_OPENERS: frozenset[str] = frozenset({"if", "elif", "for", "while", "match"})

# First words that make a line count as a statement.
STATEMENT_OPENERS: frozenset[str] = frozenset(
    {
        "let", "use", "do", "yield", "return",
        "match", "if", "elif", "else", "for", "while",
        "printf", "printfn",
    }
)

STATEMENT_TERMINATOR = ";"


def is_identifier_start(char: str) -> bool:
    return char == "_" or char.isalpha()


def is_identifier_char(char: str) -> bool:
    return char == "_" or char == "'" or char.isalnum()


def is_digit(char: str) -> bool:
    return "0" <= char <= "9"
