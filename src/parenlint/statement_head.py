from __future__ import annotations

from typing import Optional

from .nodes import Node
from .parens import is_parenthesised
from .source_code import SourceCode


class TreeInvariantError(RuntimeError):
    """The tree handed to the rule engine is not properly wired"""

    def __init__(self, message: str, node: Optional[Node] = None):
        self.message = message
        self.node = node
        super().__init__(f"{message} (at {node!r})" if node is not None else message)


def _keeps_head_position(parent: Node, node: Node) -> Optional[bool]:
    """Whether ``node`` is the leftmost evaluated part of ``parent``.

    Returns None when ``parent`` is not an expression that can carry the
    head position upward.
    """
    kind = parent.kind
    if kind == 'SequenceExpression':
        return parent.expressions[0] is node
    if kind in ('UnaryExpression', 'UpdateExpression'):
        return not parent.prefix
    if kind in ('BinaryExpression', 'LogicalExpression'):
        return parent.left is node
    if kind == 'ConditionalExpression':
        return parent.test is node
    if kind == 'CallExpression':
        return parent.callee is node
    if kind == 'MemberExpression':
        return parent.object is node
    return None


def is_head_of_expression_statement(source_code: SourceCode, node: Node) -> bool:
    """True if ``node`` starts its expression statement with no parens in between.

    At that position a function or class expression would be read as a
    declaration, so it needs one pair of parens.
    """
    current = node
    parent = node.parent

    while parent is not None:
        if parent.kind == 'ExpressionStatement':
            return True

        keeps = _keeps_head_position(parent, current)
        if not keeps or is_parenthesised(source_code, current):
            return False

        current = parent
        parent = parent.parent

    raise TreeInvariantError("Reached the root without finding a statement", node)
