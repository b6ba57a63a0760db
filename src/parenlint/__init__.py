"""Find redundant parentheses in JavaScript source."""

from .config import Config, ConfigError, Scope, parse_options
from .lexer import LexError, tokenize
from .linter import check_program, lint
from .parser import ParseError, parse_source
from .report import MESSAGE, Violation
from .source_code import SourceCode
from .statement_head import TreeInvariantError

__version__ = "0.1.0"

__all__ = [
    "lint",
    "check_program",
    "parse_options",
    "Config",
    "Scope",
    "ConfigError",
    "SourceCode",
    "Violation",
    "MESSAGE",
    "parse_source",
    "tokenize",
    "LexError",
    "ParseError",
    "TreeInvariantError",
]
