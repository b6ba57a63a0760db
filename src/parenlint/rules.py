"""Construct rules for redundant parentheses.

Each handler looks at the children of one node kind and reports the ones
wrapped in parens that the grammar does not need. Handlers are stateless;
``_NODE_DISPATCH`` maps every checked kind to its handler and every other
kind is ignored.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

from .config import Config, DEFAULT_CONFIG
from .nodes import Node, is_number_literal, is_regex_literal
from .policy import ExceptionPolicy
from .precedence import ASSIGNMENT_PRECEDENCE, LOGICAL_OR_PRECEDENCE, precedence
from .report import Reporter
from .source_code import SourceCode
from .statement_head import is_head_of_expression_statement


class NoExtraParens:
    def __init__(self, source_code: SourceCode, reporter: Reporter, config: Optional[Config] = None):
        self.source_code = source_code
        self.reporter = reporter
        self.policy = ExceptionPolicy(source_code, config or DEFAULT_CONFIG)

    def check(self, node: Node) -> None:
        handler = _NODE_DISPATCH.get(node.kind)
        if handler is not None:
            handler(self, node)

    def report(self, node: Node) -> None:
        self.reporter.report(node)

    # ---------------- shared checks ----------------

    def _check_assignment_level(self, nodes: Iterable[Optional[Node]]) -> None:
        for item in nodes:
            if item is not None and self.policy.has_excess_parens(item) and precedence(item) >= ASSIGNMENT_PRECEDENCE:
                self.report(item)

    def _check_statement_test(self, node: Node) -> None:
        if self.policy.has_double_excess_parens(node.test) and not self.policy.is_cond_assign_exception(node):
            self.report(node.test)

    def unary_update(self, node: Node) -> None:
        if self.policy.has_excess_parens(node.argument) and precedence(node.argument) >= precedence(node):
            self.report(node.argument)

    def call_new(self, node: Node) -> None:
        callee = node.callee
        # One pair around an invoked function expression is conventional.
        iife_allowance = (
            node.kind == 'CallExpression'
            and callee.kind == 'FunctionExpression'
            and not self.policy.has_double_excess_parens(callee)
        )
        if self.policy.has_excess_parens(callee) and precedence(callee) >= precedence(node) and not iife_allowance:
            self.report(callee)

        if len(node.arguments) == 1:
            arg = node.arguments[0]
            if self.policy.has_double_excess_parens(arg) and precedence(arg) >= ASSIGNMENT_PRECEDENCE:
                self.report(arg)
        else:
            self._check_assignment_level(node.arguments)

    def binary_logical(self, node: Node) -> None:
        if self.policy.nested_binary_exception:
            return

        prec = precedence(node)
        if self.policy.has_excess_parens(node.left) and precedence(node.left) >= prec:
            self.report(node.left)
        if self.policy.has_excess_parens(node.right) and precedence(node.right) > prec:
            self.report(node.right)

    # ---------------- expressions ----------------

    def array_expression(self, node: Node) -> None:
        self._check_assignment_level(node.elements)

    def object_expression(self, node: Node) -> None:
        self._check_assignment_level(getattr(prop, 'value', None) for prop in node.properties)

    def sequence_expression(self, node: Node) -> None:
        prec = precedence(node)
        for expr in node.expressions:
            if self.policy.has_excess_parens(expr) and precedence(expr) >= prec:
                self.report(expr)

    def arrow_function(self, node: Node) -> None:
        body = node.body
        if body.kind == 'BlockStatement':
            return

        first = self.source_code.first_token(body)
        if first is not None and first.value != '{' and self.policy.has_excess_parens(body) \
                and precedence(body) >= ASSIGNMENT_PRECEDENCE:
            self.report(body)
            return

        # Object literal bodies need one pair to not read as a block.
        if body.kind == 'ObjectExpression' and self.policy.has_double_excess_parens(body):
            self.report(body)

    def assignment_expression(self, node: Node) -> None:
        if self.policy.has_excess_parens(node.right) and precedence(node.right) >= precedence(node):
            self.report(node.right)

    def conditional_expression(self, node: Node) -> None:
        if self.policy.has_excess_parens(node.test) and precedence(node.test) >= LOGICAL_OR_PRECEDENCE:
            self.report(node.test)
        self._check_assignment_level((node.consequent, node.alternate))

    def member_expression(self, node: Node) -> None:
        obj = node.object
        if self.policy.has_excess_parens(obj) and precedence(obj) >= precedence(node) \
                and (node.computed or not self._is_dot_ambiguous_object(obj)) \
                and not self._is_statement_head_function(node):
            self.report(obj)

        if node.computed and self.policy.has_excess_parens(node.property):
            self.report(node.property)

    def _is_dot_ambiguous_object(self, obj: Node) -> bool:
        # `(1).foo` would lex as a decimal point; regex literals keep their parens.
        if is_number_literal(obj):
            first = self.source_code.first_token(obj)
            if first is not None and first.value.isdigit():
                return True
        return is_regex_literal(obj)

    def _is_statement_head_function(self, node: Node) -> bool:
        obj = node.object
        return (
            obj.kind in ('FunctionExpression', 'ClassExpression')
            and is_head_of_expression_statement(self.source_code, node)
            and not self.policy.has_double_excess_parens(obj)
        )

    def yield_expression(self, node: Node) -> None:
        arg = node.argument
        if arg is None:
            return

        yield_token = self.source_code.first_token(node)
        if (precedence(arg) >= precedence(node) and self.policy.has_excess_parens_no_line_terminator(yield_token, arg)) \
                or self.policy.has_double_excess_parens(arg):
            self.report(arg)

    # ---------------- statements ----------------

    def expression_statement(self, node: Node) -> None:
        expr = node.expression
        if not self.policy.has_excess_parens(expr):
            return

        tokens = self.source_code.first_tokens(expr, 2)
        first = tokens[0].value if tokens else None
        second = tokens[1].value if len(tokens) > 1 else None

        # These openings would change meaning without the parens.
        if first in ('{', 'function', 'class') or (first == 'let' and second == '['):
            return
        self.report(expr)

    def do_while_statement(self, node: Node) -> None:
        self._check_statement_test(node)

    def while_statement(self, node: Node) -> None:
        self._check_statement_test(node)

    def if_statement(self, node: Node) -> None:
        self._check_statement_test(node)

    def for_statement(self, node: Node) -> None:
        if node.init is not None and self.policy.has_excess_parens(node.init):
            self.report(node.init)

        if node.test is not None and self.policy.has_excess_parens(node.test) \
                and not self.policy.is_cond_assign_exception(node):
            self.report(node.test)

        if node.update is not None and self.policy.has_excess_parens(node.update):
            self.report(node.update)

    def for_in_of_statement(self, node: Node) -> None:
        if self.policy.has_excess_parens(node.right):
            self.report(node.right)

    def return_statement(self, node: Node) -> None:
        arg = node.argument
        if arg is None or is_regex_literal(arg):
            return

        return_token = self.source_code.first_token(node)
        if self.policy.has_excess_parens_no_line_terminator(return_token, arg):
            self.report(arg)

    def throw_statement(self, node: Node) -> None:
        throw_token = self.source_code.first_token(node)
        if self.policy.has_excess_parens_no_line_terminator(throw_token, node.argument):
            self.report(node.argument)

    def switch_case(self, node: Node) -> None:
        if node.test is not None and self.policy.has_excess_parens(node.test):
            self.report(node.test)

    def switch_statement(self, node: Node) -> None:
        if self.policy.has_double_excess_parens(node.discriminant):
            self.report(node.discriminant)

    def with_statement(self, node: Node) -> None:
        if self.policy.has_double_excess_parens(node.object):
            self.report(node.object)

    def variable_declarator(self, node: Node) -> None:
        init = node.init
        if init is not None and not is_regex_literal(init):
            self._check_assignment_level((init,))


_NODE_DISPATCH: Dict[str, Callable[[NoExtraParens, Node], None]] = {
    'ArrayExpression': NoExtraParens.array_expression,
    'ArrowFunctionExpression': NoExtraParens.arrow_function,
    'AssignmentExpression': NoExtraParens.assignment_expression,
    'BinaryExpression': NoExtraParens.binary_logical,
    'CallExpression': NoExtraParens.call_new,
    'ConditionalExpression': NoExtraParens.conditional_expression,
    'DoWhileStatement': NoExtraParens.do_while_statement,
    'ExpressionStatement': NoExtraParens.expression_statement,
    'ForInStatement': NoExtraParens.for_in_of_statement,
    'ForOfStatement': NoExtraParens.for_in_of_statement,
    'ForStatement': NoExtraParens.for_statement,
    'IfStatement': NoExtraParens.if_statement,
    'LogicalExpression': NoExtraParens.binary_logical,
    'MemberExpression': NoExtraParens.member_expression,
    'NewExpression': NoExtraParens.call_new,
    'ObjectExpression': NoExtraParens.object_expression,
    'ReturnStatement': NoExtraParens.return_statement,
    'SequenceExpression': NoExtraParens.sequence_expression,
    'SwitchCase': NoExtraParens.switch_case,
    'SwitchStatement': NoExtraParens.switch_statement,
    'ThrowStatement': NoExtraParens.throw_statement,
    'UnaryExpression': NoExtraParens.unary_update,
    'UpdateExpression': NoExtraParens.unary_update,
    'VariableDeclarator': NoExtraParens.variable_declarator,
    'WhileStatement': NoExtraParens.while_statement,
    'WithStatement': NoExtraParens.with_statement,
    'YieldExpression': NoExtraParens.yield_expression,
}
