"""Syntax tree nodes shared by the frontend and the rule engine.

Nodes are ESTree-shaped: a ``kind`` tag, a character ``range`` and a
``loc``, plus kind-specific attributes. The parent link is a weak
reference wired by ``attach_parents``; children are owned top-down.
"""
from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from typing_extensions import TypeAlias, TypeGuard

Span: TypeAlias = Tuple[int, int]


@dataclass(frozen=True)
class Position:
    line: int
    column: int


@dataclass(frozen=True)
class SourceLocation:
    start: Position
    end: Position


class Node:
    """One syntax tree element.

    Scalar and child attributes are passed as keyword arguments and become
    plain attributes (``node.left``, ``node.operator``, ...). ESTree's own
    ``kind`` field is stored as ``declaration_kind`` (var/let/const) or
    ``method_kind`` (init/get/set/method/constructor).
    """

    def __init__(self, kind: str, range: Span, loc: SourceLocation, **fields: Any) -> None:
        self.kind = kind
        self.range = range
        self.loc = loc
        self._parent: Optional[weakref.ReferenceType[Node]] = None
        self.__dict__.update(fields)

    @property
    def parent(self) -> Optional[Node]:
        if self._parent is None:
            return None
        return self._parent()

    def __repr__(self) -> str:
        return f'Node({self.kind!r}, {self.range[0]}..{self.range[1]})'


# Child attributes per kind, in source (visit) order.
CHILD_FIELDS: Dict[str, Tuple[str, ...]] = {
    'Program': ('body',),
    'ExpressionStatement': ('expression',),
    'BlockStatement': ('body',),
    'EmptyStatement': (),
    'DebuggerStatement': (),
    'VariableDeclaration': ('declarations',),
    'VariableDeclarator': ('id', 'init'),
    'FunctionDeclaration': ('id', 'params', 'body'),
    'FunctionExpression': ('id', 'params', 'body'),
    'ArrowFunctionExpression': ('params', 'body'),
    'ClassDeclaration': ('id', 'superClass', 'body'),
    'ClassExpression': ('id', 'superClass', 'body'),
    'ClassBody': ('body',),
    'MethodDefinition': ('key', 'value'),
    'ReturnStatement': ('argument',),
    'ThrowStatement': ('argument',),
    'IfStatement': ('test', 'consequent', 'alternate'),
    'WhileStatement': ('test', 'body'),
    'DoWhileStatement': ('body', 'test'),
    'ForStatement': ('init', 'test', 'update', 'body'),
    'ForInStatement': ('left', 'right', 'body'),
    'ForOfStatement': ('left', 'right', 'body'),
    'SwitchStatement': ('discriminant', 'cases'),
    'SwitchCase': ('test', 'consequent'),
    'WithStatement': ('object', 'body'),
    'BreakStatement': (),
    'ContinueStatement': (),
    'TryStatement': ('block', 'handler', 'finalizer'),
    'CatchClause': ('param', 'body'),
    'Identifier': (),
    'Literal': (),
    'ThisExpression': (),
    'Super': (),
    'ArrayExpression': ('elements',),
    'ArrayPattern': ('elements',),
    'ObjectExpression': ('properties',),
    'ObjectPattern': ('properties',),
    'Property': ('key', 'value'),
    'SpreadElement': ('argument',),
    'RestElement': ('argument',),
    'AssignmentPattern': ('left', 'right'),
    'SequenceExpression': ('expressions',),
    'UnaryExpression': ('argument',),
    'UpdateExpression': ('argument',),
    'BinaryExpression': ('left', 'right'),
    'LogicalExpression': ('left', 'right'),
    'AssignmentExpression': ('left', 'right'),
    'ConditionalExpression': ('test', 'consequent', 'alternate'),
    'CallExpression': ('callee', 'arguments'),
    'NewExpression': ('callee', 'arguments'),
    'MemberExpression': ('object', 'property'),
    'YieldExpression': ('argument',),
}


def is_node(value: object) -> TypeGuard[Node]:
    return isinstance(value, Node)


def named_children(node: Node) -> Iterator[Tuple[str, Node]]:
    for name in CHILD_FIELDS.get(node.kind, ()):
        value = getattr(node, name, None)
        if isinstance(value, list):
            for item in value:
                if is_node(item):
                    yield name, item
        elif is_node(value):
            yield name, value


def iter_children(node: Node) -> Iterator[Node]:
    for _, child in named_children(node):
        yield child


def walk(root: Node) -> Iterator[Node]:
    """Pre-order, left-to-right traversal with an explicit stack."""
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(iter_children(node))))


def attach_parents(root: Node) -> None:
    for node in walk(root):
        ref = weakref.ref(node)
        for child in iter_children(node):
            child._parent = ref


def is_regex_literal(node: Node) -> bool:
    return node.kind == 'Literal' and getattr(node, 'regex', None) is not None


def is_number_literal(node: Node) -> bool:
    if node.kind != 'Literal':
        return False
    value = getattr(node, 'value', None)
    return isinstance(value, (int, float)) and not isinstance(value, bool)
