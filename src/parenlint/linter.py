"""
Linter driver

Wires parent links, visits every node once (top-down, left-to-right) and
runs the extra-parens rules, collecting violations in visit order.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from .config import Config, Options, parse_options
from .nodes import Node, attach_parents, walk
from .parser import parse_source
from .report import Reporter, Violation
from .rules import NoExtraParens
from .source_code import SourceCode

logger = logging.getLogger("parenlint.linter")


def check_program(program: Node, source_code: SourceCode, config: Optional[Config] = None) -> List[Violation]:
    """Run the rules over an already parsed program."""
    attach_parents(program)
    logger.debug("checking %s with %s", program.kind, config or "default config")

    reporter = Reporter(source_code)
    rule = NoExtraParens(source_code, reporter, config)

    visited = 0
    for node in walk(program):
        rule.check(node)
        visited += 1

    logger.debug("checked %d nodes, %d violation(s)", visited, len(reporter.violations))
    return reporter.violations


def lint(text: str, options: Options = None) -> List[Violation]:
    """Parse ``text`` and report every gratuitous pair of parentheses.

    Options are validated before anything is parsed; see ``parse_options``.
    """
    config = parse_options(options)
    program = parse_source(text)
    return check_program(program, SourceCode(text, program), config)
