"""Operator precedence levels used by the extra-parens rule.

Higher numbers bind tighter. The table follows the ECMAScript expression
grammar; everything that is not an operator (literals, identifiers, member
access, function and class expressions, ...) sits at ``DEFAULT_PRECEDENCE``.
"""
from __future__ import annotations

from typing import Dict, Optional

from .nodes import Node

SEQUENCE_PRECEDENCE = 0
IIFE_PRECEDENCE = -1
DEFAULT_PRECEDENCE = 18

LOGICAL_OPERATOR_PRECEDENCE: Dict[str, int] = {
    '||': 4,
    '&&': 5,
}

BINARY_OPERATOR_PRECEDENCE: Dict[str, int] = {
    '|': 6,
    '^': 7,
    '&': 8,
    '==': 9,
    '!=': 9,
    '===': 9,
    '!==': 9,
    '<': 10,
    '<=': 10,
    '>': 10,
    '>=': 10,
    'in': 10,
    'instanceof': 10,
    '<<': 11,
    '>>': 11,
    '>>>': 11,
    '+': 12,
    '-': 12,
    '*': 13,
    '/': 13,
    '%': 13,
}

# Every binary or logical operator the parser climbs over.
OPERATOR_PRECEDENCE: Dict[str, int] = {**LOGICAL_OPERATOR_PRECEDENCE, **BINARY_OPERATOR_PRECEDENCE}

_KIND_PRECEDENCE: Dict[str, int] = {
    'SequenceExpression': SEQUENCE_PRECEDENCE,
    'AssignmentExpression': 1,
    'ArrowFunctionExpression': 1,
    'YieldExpression': 1,
    'ConditionalExpression': 3,
    'UnaryExpression': 14,
    'UpdateExpression': 15,
    'CallExpression': 16,
    'NewExpression': 17,
}

UNARY_PRECEDENCE = _KIND_PRECEDENCE['UnaryExpression']


def precedence_of(kind: str, operator: Optional[str] = None) -> int:
    """Precedence of a node kind (and operator, for binary/logical kinds)."""
    if kind == 'LogicalExpression' and operator in LOGICAL_OPERATOR_PRECEDENCE:
        return LOGICAL_OPERATOR_PRECEDENCE[operator]

    if kind in ('LogicalExpression', 'BinaryExpression'):
        # Unknown operators fall through to the unary level.
        return BINARY_OPERATOR_PRECEDENCE.get(operator or '', UNARY_PRECEDENCE)

    return _KIND_PRECEDENCE.get(kind, DEFAULT_PRECEDENCE)


def precedence(node: Node) -> int:
    """Precedence of ``node``.

    A call whose callee is a function expression gets ``IIFE_PRECEDENCE`` so
    one pair of parens around an immediately-invoked function is never
    redundant.
    """
    if node.kind == 'CallExpression' and node.callee.kind == 'FunctionExpression':
        return IIFE_PRECEDENCE
    return precedence_of(node.kind, getattr(node, 'operator', None))


ASSIGNMENT_PRECEDENCE = precedence_of('AssignmentExpression')
LOGICAL_OR_PRECEDENCE = precedence_of('LogicalExpression', '||')
