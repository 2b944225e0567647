"""Lexical layer: comment/literal masking, statement counting, tokenizing."""

from .preprocessor import Segment, clean_source, mask_literals, restore_literal, split_segments
from .statements import count_statements
from .tokenizer import Token, tokenize

__all__ = [
    "Segment",
    "split_segments",
    "clean_source",
    "mask_literals",
    "restore_literal",
    "count_statements",
    "Token",
    "tokenize",
]
