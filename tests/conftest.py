"""Shared test fixtures for jilb-insight tests."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def control_flow_path():
    """Nested loops, if/elif/else chains and match blocks with guards."""
    return FIXTURES_DIR / "control_flow.fsx"


@pytest.fixture
def control_flow_source(control_flow_path):
    return control_flow_path.read_text(encoding="utf-8")


@pytest.fixture
def tricky_literals_source():
    """Keywords hidden in comments, strings and character literals."""
    return (FIXTURES_DIR / "tricky_literals.fsx").read_text(encoding="utf-8")


@pytest.fixture
def nested_whiles():
    """Five directly nested while loops."""
    lines = []
    for level in range(5):
        lines.append("    " * level + "while true do")
    lines.append("    " * 5 + 'printfn "deep"')
    return "\n".join(lines) + "\n"
