from __future__ import annotations

from lark import Token

from .config import Config
from .nodes import Node
from .parens import is_parenthesised, is_parenthesised_twice
from .source_code import SourceCode

FUNCTION_KINDS = frozenset({'FunctionExpression', 'ArrowFunctionExpression'})


class ExceptionPolicy:
    """Configuration-aware wrappers around the paren boundary checks."""

    def __init__(self, source_code: SourceCode, config: Config):
        self.source_code = source_code
        self.config = config

    def rule_applies(self, node: Node) -> bool:
        return self.config.all_nodes or node.kind in FUNCTION_KINDS

    def has_excess_parens(self, node: Node) -> bool:
        return self.rule_applies(node) and is_parenthesised(self.source_code, node)

    def has_double_excess_parens(self, node: Node) -> bool:
        """Parens beyond the one pair the construct's own grammar requires."""
        return self.rule_applies(node) and is_parenthesised_twice(self.source_code, node)

    def is_cond_assign_exception(self, statement: Node) -> bool:
        return self.config.except_cond_assign and statement.test.kind == 'AssignmentExpression'

    @property
    def nested_binary_exception(self) -> bool:
        return self.config.nested_binary

    def has_excess_parens_no_line_terminator(self, token: Token, node: Node) -> bool:
        """Excess parens after a keyword that forbids a line break before its operand.

        When the operand starts on a later line than ``token``, one pair is
        load-bearing and only a second pair counts.
        """
        if token.end_line == node.loc.start.line:
            return self.has_excess_parens(node)
        return self.has_double_excess_parens(node)
