"""
Token Types for the JavaScript frontend

Shared between lexer and parser to avoid circular dependencies.
Tokens themselves are lark Tokens whose ``type`` is the member name.
"""

from enum import Enum, auto


class TT(Enum):
    """Token Types - one per terminal"""

    # Literals
    NUMBER = auto()
    STRING = auto()
    REGEX = auto()
    IDENT = auto()

    # Keywords
    VAR = auto()
    CONST = auto()
    FUNCTION = auto()
    CLASS = auto()
    EXTENDS = auto()
    RETURN = auto()
    THROW = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    DO = auto()
    FOR = auto()
    IN = auto()
    INSTANCEOF = auto()
    SWITCH = auto()
    CASE = auto()
    DEFAULT = auto()
    WITH = auto()
    BREAK = auto()
    CONTINUE = auto()
    TRY = auto()
    CATCH = auto()
    FINALLY = auto()
    NEW = auto()
    DELETE = auto()
    TYPEOF = auto()
    VOID = auto()
    YIELD = auto()
    THIS = auto()
    SUPER = auto()
    DEBUGGER = auto()

    # Literal keywords
    TRUE = auto()
    FALSE = auto()
    NULL = auto()

    # Arithmetic
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    MOD = auto()
    INCR = auto()  # ++
    DECR = auto()  # --

    # Bitwise / shift
    AMP = auto()
    PIPE = auto()
    CARET = auto()
    TILDE = auto()
    LSHIFT = auto()
    RSHIFT = auto()
    URSHIFT = auto()  # >>>

    # Comparison
    EQ = auto()
    NEQ = auto()
    SEQ = auto()  # ===
    SNEQ = auto()  # !==
    LT = auto()
    LTE = auto()
    GT = auto()
    GTE = auto()

    # Logical
    AND = auto()
    OR = auto()
    NEG = auto()  # !

    # Assignment
    ASSIGN = auto()
    PLUSEQ = auto()
    MINUSEQ = auto()
    STAREQ = auto()
    SLASHEQ = auto()
    MODEQ = auto()
    LSHIFTEQ = auto()
    RSHIFTEQ = auto()
    URSHIFTEQ = auto()
    AMPEQ = auto()
    PIPEEQ = auto()
    CARETEQ = auto()

    # Punctuation
    LPAR = auto()
    RPAR = auto()
    LSQB = auto()
    RSQB = auto()
    LBRACE = auto()
    RBRACE = auto()
    DOT = auto()
    COMMA = auto()
    COLON = auto()
    SEMI = auto()
    QMARK = auto()
    ARROW = auto()  # =>
    SPREAD = auto()  # ...

    # Special
    EOF = auto()


ASSIGN_OPS = frozenset({
    TT.ASSIGN, TT.PLUSEQ, TT.MINUSEQ, TT.STAREQ, TT.SLASHEQ, TT.MODEQ,
    TT.LSHIFTEQ, TT.RSHIFTEQ, TT.URSHIFTEQ, TT.AMPEQ, TT.PIPEEQ, TT.CARETEQ,
})
