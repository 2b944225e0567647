"""End-to-end tests for the public API."""

import pytest

from jilb_insight import AnalysisConfig, Token, analyze, analyze_file, tokenize
from jilb_insight.exceptions import FileAccessError


class TestAnalyzeBasics:
    def test_empty_source(self):
        metric = analyze("")
        assert metric.absolute_complexity == 0
        assert metric.relative_complexity == 0
        assert metric.max_nesting_depth == 0
        assert metric.statement_count == 1
        assert metric.control_hits == ()
        assert metric.operator_frequencies == ()

    def test_if_then_else(self):
        metric = analyze("if x > 0 then\n    printfn \"pos\"\nelse\n    printfn \"neg\"\n")
        assert metric.absolute_complexity == 1
        assert metric.max_nesting_depth == 1

    def test_five_nested_loops(self, nested_whiles):
        metric = analyze(nested_whiles)
        assert metric.max_nesting_depth == 5
        assert metric.operator_count("while-do") == 5

    def test_for_range(self):
        metric = analyze("for i in 0 .. 5 do\n    printfn \"%d\" i\n")
        assert metric.operator_count("for-in-do") == 1
        assert metric.operator_count("..") == 1
        for word in ("for", "in", "do"):
            assert metric.operator_count(word) == 0

    def test_keywords_in_literals_ignored(self):
        metric = analyze('printfn "if while for match"')
        assert metric.absolute_complexity == 0
        assert metric.control_hits == ()

    def test_deterministic(self, control_flow_source):
        assert analyze(control_flow_source) == analyze(control_flow_source)

    def test_concatenation_adds_up(self):
        first = "if x then\n    y\n"
        second = "while z do\n    w\n"
        combined = analyze(first + second).absolute_complexity
        assert combined == analyze(first).absolute_complexity + analyze(second).absolute_complexity

    @pytest.mark.parametrize(
        "source",
        [
            "(* unterminated",
            '"unterminated',
            "'",
            "|||",
            "match",
            "with |",
            "else\nelse\n  elif",
            "\t\tif\n",
            "| A -> 1\n| B -> 2",
        ],
    )
    def test_malformed_input_never_raises(self, source):
        metric = analyze(source)
        assert metric.absolute_complexity >= 0
        assert metric.max_nesting_depth >= 0
        assert metric.size_denominator >= 1


class TestControlFlowSample:
    def test_absolute_and_depth(self, control_flow_source):
        metric = analyze(control_flow_source)
        assert metric.absolute_complexity == 28
        assert metric.max_nesting_depth == 7

    def test_relative_uses_statements(self, control_flow_source):
        metric = analyze(control_flow_source)
        assert metric.variant == "statement_ratio"
        assert metric.size_denominator == metric.statement_count
        assert metric.relative_complexity == pytest.approx(28 / metric.statement_count)

    def test_operator_ratio(self, control_flow_source):
        metric = analyze(control_flow_source, AnalysisConfig(metric_variant="operator_ratio"))
        assert metric.absolute_complexity == 28
        assert metric.size_denominator == metric.operator_total
        assert metric.relative_complexity == pytest.approx(28 / metric.operator_total)

    def test_legacy_profile(self, control_flow_source):
        metric = analyze(control_flow_source, AnalysisConfig(weight_profile="legacy"))
        # five else branches, four matches at 2 and one guard at 0.5
        assert metric.absolute_complexity == pytest.approx(28 + 5 + 8 + 0.5)
        assert metric.max_nesting_depth == 7

    def test_idioms(self, control_flow_source):
        metric = analyze(control_flow_source)
        assert metric.operator_count("[<EntryPoint>]") == 1
        assert metric.operator_count("match-with") == 4
        assert metric.operator_count("while-do") == 7
        assert metric.operator_count("for-in-do") == 2
        assert metric.operator_count("if-then-elif-else") == 6
        assert metric.operator_count("when->") == 1
        assert metric.operator_count("..") == 2
        assert metric.operator_count("ReadLine") == 2
        assert metric.operator_count("if") == 0
        assert metric.operator_count("elif") == 0

    def test_operator_total(self, control_flow_source):
        metric = analyze(control_flow_source)
        assert metric.operator_total == sum(r.frequency for r in metric.operator_frequencies)


class TestTrickyLiterals:
    def test_only_real_branch_counts(self, tricky_literals_source):
        metric = analyze(tricky_literals_source)
        assert metric.absolute_complexity == 1
        assert metric.max_nesting_depth == 1
        assert [hit.kind for hit in metric.control_hits] == ["if"]

    def test_tokens_skip_hidden_keywords(self, tricky_literals_source):
        texts = [token.text for token in tokenize(tricky_literals_source)]
        assert "while" not in texts
        assert "match" not in texts
        assert "x'" in texts


class TestTokenize:
    def test_returns_tokens(self):
        assert tokenize("x + 1") == [
            Token("x", "identifier"),
            Token("+", "operator"),
            Token("1", "number"),
        ]


class TestAnalyzeFile:
    def test_reads_file(self, control_flow_path):
        assert analyze_file(control_flow_path) == analyze(control_flow_path.read_text(encoding="utf-8"))

    def test_accepts_string_path(self, tmp_path):
        path = tmp_path / "Program.fs"
        path.write_text("while true do\n    ()\n", encoding="utf-8")
        assert analyze_file(str(path)).absolute_complexity == 1

    def test_byte_order_mark_stripped(self, tmp_path):
        path = tmp_path / "Bom.fs"
        path.write_bytes("\ufeffif a then b\n".encode("utf-8"))
        metric = analyze_file(path)
        assert metric.absolute_complexity == 1
        assert metric.control_hits[0].text == "if a then b"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileAccessError) as exc_info:
            analyze_file(tmp_path / "missing.fs")
        assert "missing.fs" in str(exc_info.value)
