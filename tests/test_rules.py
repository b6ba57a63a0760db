from __future__ import annotations

from typing import List

import pytest

from tests.support.harness import LintCase, lint_positions, run_lint_case

NO_COND_ASSIGN = ["all", {"conditionalAssign": False}]
NO_NESTED_BINARY = ["all", {"nestedBinaryExpressions": False}]
FUNCTIONS_ONLY = ["functions"]

VALID_CASES: List[LintCase] = [
    LintCase("plain-assignment", "a = b;"),
    LintCase("grouping-left", "a = (b + c) * d;"),
    LintCase("grouping-right", "a = b * (c + d);"),
    LintCase("right-same-precedence", "a - (b - c);"),
    LintCase("logical-grouping", "(a || b) && c;"),
    LintCase("unary-of-binary", "!(a && b);"),
    LintCase("typeof-binary", "typeof (a + b);"),
    LintCase("sequence-in-assignment", "a = (b, c);"),
    LintCase("sequence-single-argument", "f((a, b));"),
    LintCase("single-argument-call", "f(a);"),
    LintCase("iife", "(function(){})();"),
    LintCase("iife-method", "(function(){}).call(this);"),
    LintCase("class-head", "(class {}).name;"),
    LintCase("function-statement-head", "(function f() {});"),
    LintCase("object-pattern-statement", "({a} = b);"),
    LintCase("let-bracket-statement", "(let[a] = b);"),
    LintCase("arrow-object-body", "f = () => ({});"),
    LintCase("arrow-sequence-body", "f = () => (a, b);"),
    LintCase("conditional-test-assignment", "(a = b) ? c : d;"),
    LintCase("conditional-test-sequence", "x = (a, b) ? c : d;"),
    LintCase("integer-member", "(1).toString();"),
    LintCase("regex-member", "(/a/).test(b);"),
    LintCase("regex-declarator", "var re = (/a/);"),
    LintCase("regex-return", "function f() { return (/a/); }"),
    LintCase("new-with-call-callee", "new (a.b())();"),
    LintCase("new-without-arguments", "new (a())();"),
    LintCase("yield-sequence", "function* g() { yield (a, b); }"),
    LintCase("yield-no-argument", "function* g() { yield; }"),
    LintCase("return-line-break", "function f() { return (\n  a + b\n); }"),
    LintCase("throw-line-break", "throw (\n  a\n);"),
    LintCase("if-single-wrap", "if (a) {}"),
    LintCase("switch-single-wrap", "switch (a) { case b: break; }"),
    LintCase("for-loop", "for (var i = 0; i < n; i++) {}"),
    LintCase("for-in-declaration", "for (var k in o) {}"),
    LintCase("cond-assign-option", "if ((a = b)) {}", options=NO_COND_ASSIGN),
    LintCase("cond-assign-while-option", "while ((a = b)) {}", options=NO_COND_ASSIGN),
    LintCase("cond-assign-do-while-option", "do {} while ((a = b));", options=NO_COND_ASSIGN),
    LintCase("cond-assign-for-option", "for (; (a = b); ) {}", options=NO_COND_ASSIGN),
    LintCase("nested-binary-option", "a = (b * c) + d;", options=NO_NESTED_BINARY),
    LintCase("nested-logical-option", "(a || b) || c;", options=NO_NESTED_BINARY),
    LintCase("functions-scope-ignores-identifiers", "a = (b);", options=FUNCTIONS_ONLY),
    LintCase("functions-scope-ignores-binary", "a = (b * c) + d;", options=FUNCTIONS_ONLY),
    LintCase("functions-scope-ignores-cond-assign", "if ((x = 1)) {}", options=FUNCTIONS_ONLY),
    LintCase("functions-scope-iife", "(function(){})();", options=FUNCTIONS_ONLY),
    # keyword property names and statement heads before a slash
    LintCase("division-after-keyword-property", "x = a.default / 2;"),
    LintCase("division-after-keyword-properties", "y = a.b / c.return / 2;"),
    LintCase("regex-after-if-head", "if (ok) /x/.test(s);"),
    LintCase("regex-after-function-declaration", "function f() {}\n/x/g.exec(s);"),
    LintCase("regex-member-after-if-head", "if (ok) (/x/).test(s);"),
]

INVALID_CASES: List[LintCase] = [
    # assignment and declarations
    LintCase("assignment-right", "a = (b * c);", ((1, 5),)),
    LintCase("assignment-chain", "a = (b = c);", ((1, 5),)),
    LintCase("declarator-init", "var a = (b);", ((1, 9),)),
    # binary and logical
    LintCase("binary-left", "a = (b * c) + d;", ((1, 5),)),
    LintCase("binary-right", "a = b + (c * d);", ((1, 9),)),
    LintCase("binary-identifier", "a = (b) + c;", ((1, 5),)),
    LintCase("logical-left-same", "(a || b) || c;", ((1, 1),)),
    LintCase("logical-right-higher", "a || (b && c);", ((1, 6),)),
    LintCase("both-operands", "a = (b) + (c);", ((1, 5), (1, 11))),
    # unary and update
    LintCase("typeof-member", "typeof (a.b);", ((1, 8),)),
    LintCase("not-identifier", "!(a);", ((1, 2),)),
    LintCase("postfix-update", "(a)++;", ((1, 1),)),
    LintCase("prefix-update", "++(a.b);", ((1, 3),)),
    # calls and new
    LintCase("single-argument-double", "f((a));", ((1, 3),)),
    LintCase("multi-argument", "f((a), b);", ((1, 3),)),
    LintCase("new-callee", "new (Foo)();", ((1, 5),)),
    LintCase("call-callee", "(a)();", ((1, 1),)),
    LintCase("call-callee-member", "(a.b)();", ((1, 1),)),
    LintCase("iife-double", "((function(){}))();", ((1, 2),)),
    LintCase("argument-order", "f((a), [(b)]);", ((1, 3), (1, 9))),
    # literals
    LintCase("array-element", "[(a), b];", ((1, 2),)),
    LintCase("object-value", "x = {a: (b)};", ((1, 9),)),
    LintCase("array-binary-element", "x = [a, (b + c)];", ((1, 9),)),
    # conditional
    LintCase("conditional-test", "x = (a || b) ? c : d;", ((1, 5),)),
    LintCase("conditional-consequent", "x = a ? (b) : c;", ((1, 9),)),
    LintCase("conditional-alternate", "x = a ? b : (c = d);", ((1, 13),)),
    # sequence and arrow
    LintCase("sequence-statement", "(a, b);", ((1, 1),)),
    LintCase("sequence-element", "a, (b), c;", ((1, 4),)),
    LintCase("arrow-body", "x = (y) => (z);", ((1, 12),)),
    LintCase("arrow-object-double", "f = () => (({}));", ((1, 12),)),
    # member access
    LintCase("member-object", "(a).b;", ((1, 1),)),
    LintCase("member-property", "a[(b)];", ((1, 3),)),
    LintCase("member-float", "(1.5).toFixed();", ((1, 1),)),
    LintCase("member-integer-computed", "(1)['x'];", ((1, 1),)),
    LintCase("function-not-head", "x = (function(){}).call(y);", ((1, 5),)),
    LintCase("function-head-double", "((function(){})).call(y);", ((1, 2),)),
    # statements
    LintCase("statement-member", "(a.b);", ((1, 1),)),
    LintCase("if-double", "if ((x)) {}", ((1, 5),)),
    LintCase("if-cond-assign-default", "if ((x = 1)) {}", ((1, 5),)),
    LintCase("while-double", "while ((a)) {}", ((1, 8),)),
    LintCase("do-while-double", "do {} while ((a));", ((1, 14),)),
    LintCase("switch-double", "switch ((a)) {}", ((1, 9),)),
    LintCase("switch-case", "switch (a) { case (b): break; }", ((1, 19),)),
    LintCase("with-double", "with ((a)) {}", ((1, 7),)),
    LintCase("for-init", "for ((a); b; c) {}", ((1, 6),)),
    LintCase("for-test", "for (; (a); ) {}", ((1, 8),)),
    LintCase("for-update", "for (;; (a)) {}", ((1, 9),)),
    LintCase("for-cond-assign-default", "for (; (a = b); ) {}", ((1, 8),)),
    LintCase("for-in-right", "for (a in (b)) {}", ((1, 11),)),
    LintCase("for-of-right", "for (a of (b)) {}", ((1, 11),)),
    LintCase("return-same-line", "function f() { return (a); }", ((1, 23),)),
    LintCase("return-line-break-double", "function f() { return ((\n  a + b\n)); }", ((1, 24),)),
    LintCase("throw-same-line", "throw (a);", ((1, 7),)),
    LintCase("throw-line-break-double", "throw ((\n  a\n));", ((1, 8),)),
    LintCase("yield-same-line", "function* g() { yield (a); }", ((1, 23),)),
    LintCase("yield-line-break-double", "function* g() { yield ((\n  a\n)); }", ((1, 24),)),
    # options
    LintCase("cond-assign-option-keeps-plain-test", "if ((a)) {}", ((1, 5),), NO_COND_ASSIGN),
    LintCase("nested-binary-option-keeps-assignment", "a = (b + c);", ((1, 5),), NO_NESTED_BINARY),
    LintCase("functions-scope-assignment", "x = (function(){});", ((1, 5),), FUNCTIONS_ONLY),
    LintCase("functions-scope-arrow-argument", "f((() => a), b);", ((1, 3),), FUNCTIONS_ONLY),
    LintCase("functions-scope-iife-double", "((function(){}))();", ((1, 2),), FUNCTIONS_ONLY),
    # keyword property names and statement heads before a slash
    LintCase("division-left-keyword-property", "y = (a.b / c.return) / 2;", ((1, 5),)),
    LintCase("argument-after-regex-statement", "if (ok) /x/.test((s));", ((1, 18),)),
]


@pytest.mark.parametrize("case", VALID_CASES, ids=lambda case: case.name)
def test_valid(case: LintCase) -> None:
    run_lint_case(case)


@pytest.mark.parametrize("case", INVALID_CASES, ids=lambda case: case.name)
def test_invalid(case: LintCase) -> None:
    run_lint_case(case)


def test_conditional_assign_scenario() -> None:
    source = "if ((x = 1)) {}"
    assert len(lint_positions(source)) == 1
    assert lint_positions(source, NO_COND_ASSIGN) == []


def test_iife_scenario() -> None:
    assert lint_positions("(function(){})();") == []
    assert len(lint_positions("((function(){}))();")) == 1


def test_grouping_scenario() -> None:
    assert lint_positions("a = (b + c) * d;") == []
    assert lint_positions("a = (b * c) + d;") == [(1, 5)]


def test_return_line_terminator_scenario() -> None:
    single = "function f() {\n  return (\n    a + b\n  );\n}"
    double = "function f() {\n  return ((\n    a + b\n  ));\n}"
    assert lint_positions(single) == []
    assert lint_positions(double) == [(2, 11)]


def test_reports_are_located_on_later_lines() -> None:
    source = "var a = 1;\nif ((a)) {\n  b = (c);\n}"
    assert lint_positions(source) == [(2, 5), (3, 7)]
