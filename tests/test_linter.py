from __future__ import annotations

import pytest

import parenlint
from parenlint import (
    MESSAGE,
    LexError,
    ParseError,
    SourceCode,
    Violation,
    check_program,
    lint,
    parse_options,
    parse_source,
)
from tests.support.harness import positions

SAMPLE = """\
function area(r) {
  var sq = (r * r);
  if ((sq > 10)) {
    return (sq);
  }
  return ((function(){})).call(null, (sq));
}
"""


def test_check_program_is_idempotent() -> None:
    program = parse_source(SAMPLE)
    source_code = SourceCode(SAMPLE, program)

    first = check_program(program, source_code)
    second = check_program(program, source_code)

    assert first == second
    assert [v.node for v in first] == [v.node for v in second]


def test_reports_follow_traversal_order() -> None:
    # A call is visited before its callee, so `(sq)` comes before the callee report.
    assert positions(lint(SAMPLE)) == [(2, 12), (3, 7), (4, 12), (6, 38), (6, 11)]


def test_violation_fields() -> None:
    (violation,) = lint("x = (y);")

    assert isinstance(violation, Violation)
    assert violation.message == MESSAGE == "Gratuitous parentheses around expression."
    assert (violation.line, violation.column, violation.offset) == (1, 5, 4)
    assert violation.node.kind == "Identifier" and violation.node.name == "y"
    assert str(violation) == "1:5 Gratuitous parentheses around expression."


def test_clean_source_has_no_violations() -> None:
    assert lint("") == []
    assert lint("// nothing here\n") == []
    assert lint("var a = b * (c + d);\nif (a) { f(a); }\n") == []


def test_check_program_with_config() -> None:
    source = "if ((a = b)) {}"
    program = parse_source(source)
    source_code = SourceCode(source, program)

    assert len(check_program(program, source_code)) == 1
    config = parse_options(["all", {"conditionalAssign": False}])
    assert check_program(program, source_code, config) == []


def test_frontend_errors_propagate() -> None:
    with pytest.raises(ParseError):
        lint("a = (b;")
    with pytest.raises(LexError):
        lint("a = `template`;")


def test_tree_is_not_mutated() -> None:
    program = parse_source(SAMPLE)
    before = [(node.kind, node.range) for node in parenlint.nodes.walk(program)]
    check_program(program, SourceCode(SAMPLE, program))
    after = [(node.kind, node.range) for node in parenlint.nodes.walk(program)]
    assert before == after


def test_analysis_is_logged(debug_logs: pytest.LogCaptureFixture) -> None:
    lint("x = (y);")

    messages = [(r.name, r.getMessage()) for r in debug_logs.records]
    assert ("parenlint.report", "Identifier at 1:5") in messages
    assert any(name == "parenlint.linter" and "1 violation(s)" in msg for name, msg in messages)
    assert all(r.levelname == "DEBUG" for r in debug_logs.records if r.name.startswith("parenlint"))


def test_public_api() -> None:
    for name in parenlint.__all__:
        assert hasattr(parenlint, name), name
    assert parenlint.__version__
