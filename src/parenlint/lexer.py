"""
Lexer for the JavaScript frontend

Tokenizes ES2015-subset source into a stream of lark Tokens.

Features:
- Single-pass tokenization
- Position tracking (offset, line, column) on both ends of every token
- Comments and whitespace are skipped, never emitted
- Regex-vs-division decided from the previous token, and for `)`/`}` from
  whether they close a statement head or block
"""

from typing import List

from lark import Token

from .token_types import TT

# ============================================================================
# Lexer Implementation
# ============================================================================

class LexError(Exception):
    """Lexical analysis error"""

    def __init__(self, message: str, line: int, column: int):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}, col {column}")


class Lexer:
    """
    JavaScript lexer.

    Columns are 1-based, like lark's. ``end_column`` and ``end_pos`` point
    one past the last character of the token.
    """

    # Keyword mapping (contextual words such as let/of/static stay identifiers)
    KEYWORDS = {
        'var': TT.VAR,
        'const': TT.CONST,
        'function': TT.FUNCTION,
        'class': TT.CLASS,
        'extends': TT.EXTENDS,
        'return': TT.RETURN,
        'throw': TT.THROW,
        'if': TT.IF,
        'else': TT.ELSE,
        'while': TT.WHILE,
        'do': TT.DO,
        'for': TT.FOR,
        'in': TT.IN,
        'instanceof': TT.INSTANCEOF,
        'switch': TT.SWITCH,
        'case': TT.CASE,
        'default': TT.DEFAULT,
        'with': TT.WITH,
        'break': TT.BREAK,
        'continue': TT.CONTINUE,
        'try': TT.TRY,
        'catch': TT.CATCH,
        'finally': TT.FINALLY,
        'new': TT.NEW,
        'delete': TT.DELETE,
        'typeof': TT.TYPEOF,
        'void': TT.VOID,
        'yield': TT.YIELD,
        'this': TT.THIS,
        'super': TT.SUPER,
        'debugger': TT.DEBUGGER,
        'true': TT.TRUE,
        'false': TT.FALSE,
        'null': TT.NULL,
    }

    # Operator mapping: longest matches first to handle prefixes correctly
    OPERATORS = [
        # Four-character operators
        ('>>>=', TT.URSHIFTEQ),

        # Three-character operators
        ('===', TT.SEQ),
        ('!==', TT.SNEQ),
        ('>>>', TT.URSHIFT),
        ('<<=', TT.LSHIFTEQ),
        ('>>=', TT.RSHIFTEQ),
        ('...', TT.SPREAD),

        # Two-character operators
        ('=>', TT.ARROW),
        ('==', TT.EQ),
        ('!=', TT.NEQ),
        ('<=', TT.LTE),
        ('>=', TT.GTE),
        ('&&', TT.AND),
        ('||', TT.OR),
        ('++', TT.INCR),
        ('--', TT.DECR),
        ('<<', TT.LSHIFT),
        ('>>', TT.RSHIFT),
        ('+=', TT.PLUSEQ),
        ('-=', TT.MINUSEQ),
        ('*=', TT.STAREQ),
        ('/=', TT.SLASHEQ),
        ('%=', TT.MODEQ),
        ('&=', TT.AMPEQ),
        ('|=', TT.PIPEEQ),
        ('^=', TT.CARETEQ),

        # Single-character operators
        ('+', TT.PLUS),
        ('-', TT.MINUS),
        ('*', TT.STAR),
        ('/', TT.SLASH),
        ('%', TT.MOD),
        ('&', TT.AMP),
        ('|', TT.PIPE),
        ('^', TT.CARET),
        ('~', TT.TILDE),
        ('<', TT.LT),
        ('>', TT.GT),
        ('!', TT.NEG),
        ('=', TT.ASSIGN),
        ('(', TT.LPAR),
        (')', TT.RPAR),
        ('[', TT.LSQB),
        (']', TT.RSQB),
        ('{', TT.LBRACE),
        ('}', TT.RBRACE),
        ('.', TT.DOT),
        (',', TT.COMMA),
        (':', TT.COLON),
        (';', TT.SEMI),
        ('?', TT.QMARK),
    ]

    # A '/' after one of these is division; anywhere else it opens a regex.
    # ')' and '}' are decided by what they close (see regex_allowed).
    DIVISION_PRECEDERS = frozenset({
        TT.IDENT.name, TT.NUMBER.name, TT.STRING.name, TT.REGEX.name,
        TT.RSQB.name,
        TT.THIS.name, TT.SUPER.name, TT.TRUE.name, TT.FALSE.name, TT.NULL.name,
        TT.INCR.name, TT.DECR.name,
    })

    # A '(' after these opens a head followed by a statement
    STATEMENT_HEAD_KEYWORDS = frozenset({
        TT.IF.name, TT.WHILE.name, TT.FOR.name, TT.WITH.name,
        TT.SWITCH.name, TT.CATCH.name,
    })

    # A '{' after these opens a block, not an object literal
    BLOCK_PRECEDERS = frozenset({
        TT.SEMI.name, TT.LBRACE.name, TT.RBRACE.name,
        TT.ELSE.name, TT.DO.name, TT.TRY.name, TT.FINALLY.name,
    })

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

        # One flag per open '(' / '{': does it belong to a statement head or block
        self.paren_stack: List[bool] = []
        self.brace_stack: List[bool] = []
        # Whether the last ')' or '}' closed a statement head or block
        self.closed_statement_part = False

        # Start of the token being scanned
        self.start_pos = 0
        self.start_line = 1
        self.start_column = 1

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Token]:
        """Tokenize entire source, return token list (no EOF token)"""
        while self.pos < len(self.source):
            self.scan_token()
        return self.tokens

    def scan_token(self):
        """Scan next token"""
        if self.skip_whitespace():
            return

        if self.peek() == '/' and self.peek(1) == '/':
            self.skip_line_comment()
            return

        if self.peek() == '/' and self.peek(1) == '*':
            self.skip_block_comment()
            return

        self.mark_start()
        ch = self.peek()

        if ch in ('"', "'"):
            self.scan_string()
            return

        if ch == '`':
            raise LexError("Template literals are not supported", self.line, self.column)

        if ch.isdigit() or (ch == '.' and self.peek(1).isdigit()):
            self.scan_number()
            return

        if ch.isalpha() or ch in ('_', '$'):
            self.scan_identifier()
            return

        if ch == '/' and self.regex_allowed():
            self.scan_regex()
            return

        self.scan_operator()

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_string(self):
        """Scan string literal: "..." or '...'"""
        quote = self.advance()

        while self.pos < len(self.source) and self.peek() != quote:
            if self.peek() in ('\n', '\r'):
                break
            if self.peek() == '\\':
                # Keep escape sequence as-is (this also covers line continuations)
                self.advance(2)
            else:
                self.advance()

        if self.peek() != quote:
            raise LexError("Unterminated string", self.start_line, self.start_column)

        self.advance()  # Closing quote
        self.emit(TT.STRING)

    def scan_number(self):
        """Scan number literal"""
        if self.peek() == '0' and self.peek(1) in ('x', 'X'):
            self.advance(2)
            if not self.is_hex_digit(self.peek()):
                raise LexError("Missing hexadecimal digits", self.start_line, self.start_column)
            while self.is_hex_digit(self.peek()):
                self.advance()
        else:
            # Integer part
            while self.peek().isdigit():
                self.advance()

            # Decimal part
            if self.peek() == '.':
                self.advance()
                while self.peek().isdigit():
                    self.advance()

            # Scientific notation
            if self.peek() in ('e', 'E'):
                self.advance()
                if self.peek() in ('+', '-'):
                    self.advance()
                if not self.peek().isdigit():
                    raise LexError("Missing exponent digits", self.start_line, self.start_column)
                while self.peek().isdigit():
                    self.advance()

        if self.is_ident_char(self.peek()):
            raise LexError("Identifier directly after number", self.line, self.column)

        self.emit(TT.NUMBER)

    def scan_identifier(self):
        """Scan identifier or keyword"""
        while self.is_ident_char(self.peek()):
            self.advance()

        value = self.source[self.start_pos:self.pos]
        token_type = self.KEYWORDS.get(value, TT.IDENT)
        # Property names after '.' are plain identifiers (a.default, b.return)
        if self.tokens and self.tokens[-1].type == TT.DOT.name:
            token_type = TT.IDENT
        self.emit(token_type)

    def scan_regex(self):
        """Scan regex literal: /body/flags"""
        self.advance()  # opening /
        in_class = False

        while True:
            ch = self.peek()
            if self.pos >= len(self.source) or ch in ('\n', '\r'):
                raise LexError("Unterminated regex", self.start_line, self.start_column)
            if ch == '\\':
                self.advance(2)
                continue
            if ch == '[':
                in_class = True
            elif ch == ']':
                in_class = False
            elif ch == '/' and not in_class:
                break
            self.advance()

        self.advance()  # closing /
        while self.is_ident_char(self.peek()):
            self.advance()

        self.emit(TT.REGEX)

    def scan_operator(self):
        """Scan operators and punctuation"""
        for op_str, op_type in self.OPERATORS:
            if self.source.startswith(op_str, self.pos):
                self.advance(len(op_str))
                self.emit(op_type)
                return

        ch = self.peek()
        raise LexError(f"Unexpected character '{ch}'", self.line, self.column)

    # ========================================================================
    # Utilities
    # ========================================================================

    def regex_allowed(self) -> bool:
        if not self.tokens:
            return True
        last = self.tokens[-1].type
        if last in (TT.RPAR.name, TT.RBRACE.name):
            return self.closed_statement_part
        return last not in self.DIVISION_PRECEDERS

    def type_at(self, index: int) -> str:
        """Type of tokens[index] counted from the end, or '' past the start"""
        if -index > len(self.tokens):
            return ''
        return self.tokens[index].type

    def starts_statement(self, index: int) -> bool:
        return self.type_at(index - 1) in ('', TT.SEMI.name, TT.LBRACE.name, TT.RBRACE.name)

    def opens_statement_head(self) -> bool:
        """Whether a '(' about to be emitted starts an if/while/... head or declaration params"""
        if self.type_at(-1) in self.STATEMENT_HEAD_KEYWORDS:
            return True
        if self.type_at(-1) != TT.IDENT.name:
            return False
        # function f(  /  function* f(
        if self.type_at(-2) == TT.FUNCTION.name:
            return self.starts_statement(-2)
        if self.type_at(-2) == TT.STAR.name and self.type_at(-3) == TT.FUNCTION.name:
            return self.starts_statement(-3)
        return False

    def opens_block(self) -> bool:
        """Whether a '{' about to be emitted opens a block or class body"""
        last = self.type_at(-1)
        if last == '' or last in self.BLOCK_PRECEDERS:
            return True
        if last == TT.RPAR.name:
            return self.closed_statement_part
        # class A {
        if last == TT.IDENT.name and self.type_at(-2) == TT.CLASS.name:
            return self.starts_statement(-2)
        return False

    def track_nesting(self, token_type: TT):
        if token_type is TT.LPAR:
            self.paren_stack.append(self.opens_statement_head())
        elif token_type is TT.RPAR:
            self.closed_statement_part = self.paren_stack.pop() if self.paren_stack else False
        elif token_type is TT.LBRACE:
            self.brace_stack.append(self.opens_block())
        elif token_type is TT.RBRACE:
            self.closed_statement_part = self.brace_stack.pop() if self.brace_stack else False

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self, n: int = 1) -> str:
        """Consume n characters and return them as a string"""
        if n < 0:
            raise ValueError(f"advance() requires n >= 0, got {n}")
        start = self.pos
        for _ in range(n):
            if self.pos >= len(self.source):
                break
            ch = self.source[self.pos]
            self.pos += 1
            if ch == '\n' or (ch == '\r' and self.peek() != '\n'):
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return self.source[start:self.pos]

    @staticmethod
    def is_ident_char(ch: str) -> bool:
        return ch.isalnum() or ch in ('_', '$')

    @staticmethod
    def is_hex_digit(ch: str) -> bool:
        return ch in '0123456789abcdefABCDEF'

    def skip_whitespace(self) -> bool:
        """Skip whitespace including newlines, return True if any skipped"""
        skipped = False
        while self.peek() in (' ', '\t', '\n', '\r', '\v', '\f', '\ufeff', '\xa0'):
            self.advance()
            skipped = True
        return skipped

    def skip_line_comment(self):
        """Skip comment until end of line"""
        while self.peek() not in ('\n', '\r', '\0'):
            self.advance()

    def skip_block_comment(self):
        """Skip /* ... */ comment"""
        line, column = self.line, self.column
        self.advance(2)
        while not (self.peek() == '*' and self.peek(1) == '/'):
            if self.pos >= len(self.source):
                raise LexError("Unterminated comment", line, column)
            self.advance()
        self.advance(2)

    def mark_start(self):
        self.start_pos = self.pos
        self.start_line = self.line
        self.start_column = self.column

    def emit(self, token_type: TT):
        """Emit the token scanned since mark_start()"""
        self.track_nesting(token_type)
        tok = Token(
            token_type.name,
            self.source[self.start_pos:self.pos],
            start_pos=self.start_pos,
            line=self.start_line,
            column=self.start_column,
            end_line=self.line,
            end_column=self.column,
            end_pos=self.pos,
        )
        self.tokens.append(tok)


def tokenize(source: str) -> List[Token]:
    """Convenience function to tokenize source"""
    return Lexer(source).tokenize()
