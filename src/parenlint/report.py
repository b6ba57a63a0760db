from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .nodes import Node
from .source_code import SourceCode
from .statement_head import TreeInvariantError

logger = logging.getLogger("parenlint.report")

MESSAGE = "Gratuitous parentheses around expression."


@dataclass(frozen=True)
class Violation:
    """One redundant pair of parens, located at its opening ``(``."""

    node: Node = field(compare=False)
    line: int
    column: int
    offset: int
    message: str = MESSAGE

    def __str__(self) -> str:
        return f"{self.line}:{self.column} {self.message}"


class Reporter:
    def __init__(self, source_code: SourceCode):
        self.source_code = source_code
        self.violations: List[Violation] = []

    def report(self, node: Node) -> Violation:
        paren = self.source_code.token_before(node)
        if paren is None:
            raise TreeInvariantError("Reported node has no opening paren", node)

        violation = Violation(node=node, line=paren.line, column=paren.column, offset=paren.start_pos)
        logger.debug("%s at %d:%d", node.kind, violation.line, violation.column)
        self.violations.append(violation)
        return violation
