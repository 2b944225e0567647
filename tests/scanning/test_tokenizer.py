"""Tests for the F# tokenizer."""

import pytest

from jilb_insight.scanning.tokenizer import Token, tokenize


def _texts(source):
    return [token.text for token in tokenize(source)]


class TestTokenize:
    def test_simple_binding(self):
        assert tokenize("let x = 1") == [
            Token("let", "identifier"),
            Token("x", "identifier"),
            Token("=", "operator"),
            Token("1", "number"),
        ]

    def test_empty_source(self):
        assert tokenize("") == []
        assert tokenize("   \n\t\n") == []

    @pytest.mark.parametrize("operator", ["|>", "<-", ">>=", "::", ":=", "<>", "&&", "||"])
    def test_multi_char_operators_win(self, operator):
        assert _texts(f"a {operator} b") == ["a", operator, "b"]

    def test_arrow_is_two_tokens(self):
        assert _texts("fun x -> x") == ["fun", "x", "-", ">", "x"]

    def test_range_is_two_dots(self):
        tokens = tokenize("0..5")
        assert [token.text for token in tokens] == ["0", ".", ".", "5"]
        assert [token.kind for token in tokens] == ["number", "operator", "operator", "number"]

    @pytest.mark.parametrize("number", ["42", "3.14", "1e10", "2.5e-3", "10L", "0xFF", "1uy", "1_000"])
    def test_numbers_are_single_tokens(self, number):
        assert tokenize(number) == [Token(number, "number")]

    def test_trailing_dot_float(self):
        assert _texts("let x = 1. + 2.") == ["let", "x", "=", "1.", "+", "2."]
        assert _texts("1.5..2.") == ["1.5", ".", ".", "2."]

    def test_identifiers_with_apostrophes(self):
        assert _texts("x' + y''") == ["x'", "+", "y''"]

    def test_backtick_identifier(self):
        assert tokenize("``my value`` + 1")[0] == Token("``my value``", "identifier")

    def test_literals_restored(self):
        tokens = tokenize('printfn "a b" c')
        assert tokens == [
            Token("printfn", "identifier"),
            Token('"a b"', "literal"),
            Token("c", "identifier"),
        ]

    def test_char_literal(self):
        assert tokenize("'a'") == [Token("'a'", "literal")]

    def test_comments_dropped(self):
        texts = _texts("let x = 1 // if\n(* while *) y")
        assert "if" not in texts
        assert "while" not in texts
        assert texts[-1] == "y"

    def test_stray_placeholder_delimiter_skipped(self):
        tokens = tokenize("let a = \ue000 x \"s\" + y")
        assert [token.text for token in tokens] == ["let", "a", "=", "x", '"s"', "+", "y"]
        assert tokens[4].kind == "literal"

    def test_unknown_characters_skipped(self):
        assert _texts("x # y") == ["x", "y"]

    def test_entry_point_attribute(self):
        assert _texts("[<EntryPoint>]") == ["[", "<", "EntryPoint", ">", "]"]

    def test_is_keyword(self):
        let, name = tokenize("let value")
        assert let.is_keyword
        assert not name.is_keyword
        assert not Token("let", "literal").is_keyword
