from __future__ import annotations

from typing import Optional

from lark import Token

from .nodes import Node
from .source_code import SourceCode


def _brackets(node: Node, before: Optional[Token], after: Optional[Token]) -> bool:
    """True when ``before``/``after`` are a ``(``/``)`` pair enclosing ``node``."""
    if before is None or after is None:
        return False
    return (
        before.value == '(' and before.end_pos <= node.range[0]
        and after.value == ')' and after.start_pos >= node.range[1]
    )


def is_parenthesised(source_code: SourceCode, node: Node) -> bool:
    return _brackets(node, source_code.token_before(node), source_code.token_after(node))


def is_parenthesised_twice(source_code: SourceCode, node: Node) -> bool:
    """Two nested pairs of parens enclose ``node`` directly."""
    return is_parenthesised(source_code, node) and _brackets(
        node,
        source_code.token_before(node, 1),
        source_code.token_after(node, 1),
    )
