"""
Recursive Descent Parser for the JavaScript frontend

Produces ESTree-shaped ``Node`` trees for an ES2015 subset, enough to
exercise every construct the extra-parens rules look at.

Structure:
- Lexer: token stream from source (comments and whitespace dropped)
- Parser: recursive descent for statements, precedence climbing for
  binary operators
- AST: parenthesised expressions return the inner node, so node ranges
  never include the parens that wrap them
"""

from typing import List, Optional, Tuple

from lark import Token

from .lexer import Lexer, tokenize
from .nodes import Node, Position, SourceLocation
from .precedence import LOGICAL_OPERATOR_PRECEDENCE, OPERATOR_PRECEDENCE
from .token_types import ASSIGN_OPS, TT

# ============================================================================
# Parser
# ============================================================================

class ParseError(Exception):
    """Parse error with position info"""
    def __init__(self, message: str, token: Optional[Token] = None):
        self.message = message
        self.token = token
        super().__init__(
            f"{message} at line {token.line}, col {token.column}" if token else message
        )


ASSIGN_OP_NAMES = frozenset(t.name for t in ASSIGN_OPS)
KEYWORD_NAMES = frozenset(t.name for t in Lexer.KEYWORDS.values())
UNARY_OPS = (TT.NEG, TT.TILDE, TT.PLUS, TT.MINUS, TT.TYPEOF, TT.VOID, TT.DELETE)
LOWEST_BINARY_PRECEDENCE = min(OPERATOR_PRECEDENCE.values())

# Tokens after `yield` that mean it has no operand
YIELD_TERMINATORS = (TT.RPAR, TT.RSQB, TT.RBRACE, TT.COMMA, TT.SEMI, TT.COLON, TT.EOF)


class Parser:
    """
    Recursive descent parser.

    Expression precedence (lowest to highest):
    1. sequence (,)
    2. assignment, arrow functions, yield
    3. conditional (? :)
    4. binary and logical operators (precedence climbing, || up to * / %)
    5. unary (! ~ + - typeof void delete, prefix ++ --)
    6. postfix (++ --)
    7. call / member / new
    8. primary (literals, identifiers, parens, arrays, objects, functions, classes)
    """

    def __init__(self, tokens: List[Token], source: str = ''):
        self.tokens = tokens
        self.source = source
        self.pos = 0
        self.prev: Optional[Token] = None

        last = tokens[-1] if tokens else None
        self.eof = Token(
            TT.EOF.name, '',
            start_pos=len(source),
            line=last.end_line if last else 1,
            column=last.end_column if last else 1,
            end_line=last.end_line if last else 1,
            end_column=last.end_column if last else 1,
            end_pos=len(source),
        )

    # ========================================================================
    # Token Navigation
    # ========================================================================

    @property
    def current(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.eof

    def peek(self, offset: int = 0) -> Token:
        """Look ahead at token"""
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.eof

    def advance(self) -> Token:
        """Consume current token and move to next"""
        tok = self.current
        if self.pos < len(self.tokens):
            self.pos += 1
        self.prev = tok
        return tok

    def check(self, *types: TT) -> bool:
        """Check if current token matches any of the given types"""
        return any(self.current.type == t.name for t in types)

    def check_word(self, word: str) -> bool:
        """Check for a contextual keyword (let, of, static, get, set)"""
        return self.current.type == TT.IDENT.name and self.current.value == word

    def match(self, *types: TT) -> bool:
        """Check and consume if current token matches"""
        if self.check(*types):
            self.advance()
            return True
        return False

    def expect(self, token_type: TT, message: Optional[str] = None) -> Token:
        """Consume token of expected type or raise error"""
        if not self.check(token_type):
            raise ParseError(message or f"Expected {token_type.name}, got {self.current.type}", self.current)
        return self.advance()

    def at_eof(self) -> bool:
        return self.pos >= len(self.tokens)

    def on_new_line(self) -> bool:
        """Current token starts on a later line than the previous one ends"""
        return self.prev is not None and self.current.line > self.prev.end_line

    def consume_semicolon(self):
        """Semicolon, or an inserted one before `}`, end of input or a line break"""
        if self.match(TT.SEMI):
            return
        if self.check(TT.RBRACE) or self.at_eof() or self.on_new_line():
            return
        raise ParseError("Expected ';'", self.current)

    def finish(self, kind: str, start: Token, **fields) -> Node:
        """Build a node spanning from ``start`` to the last consumed token"""
        end = self.prev if self.prev is not None else start
        loc = SourceLocation(Position(start.line, start.column), Position(end.end_line, end.end_column))
        return Node(kind, (start.start_pos, end.end_pos), loc, **fields)

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse(self) -> Node:
        """Parse entire program"""
        body = []
        while not self.at_eof():
            body.append(self.parse_statement())

        loc = SourceLocation(Position(1, 1), Position(self.eof.end_line, self.eof.end_column))
        return Node('Program', (0, len(self.source)), loc, body=body, sourceType='script', tokens=self.tokens)

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self) -> Node:
        """Parse a single statement."""
        if self.check(TT.LBRACE):
            return self.parse_block()
        if self.check(TT.SEMI):
            start = self.advance()
            return self.finish('EmptyStatement', start)

        # Declarations
        if self.check(TT.VAR, TT.CONST) or self.is_let_declaration():
            return self.parse_variable_declaration(statement=True)
        if self.check(TT.FUNCTION):
            return self.parse_function(declaration=True)
        if self.check(TT.CLASS):
            return self.parse_class(declaration=True)

        # Control flow
        if self.check(TT.IF):
            return self.parse_if_stmt()
        if self.check(TT.WHILE):
            return self.parse_while_stmt()
        if self.check(TT.DO):
            return self.parse_do_while_stmt()
        if self.check(TT.FOR):
            return self.parse_for_stmt()
        if self.check(TT.SWITCH):
            return self.parse_switch_stmt()
        if self.check(TT.WITH):
            return self.parse_with_stmt()
        if self.check(TT.TRY):
            return self.parse_try_stmt()

        # Simple statements
        if self.check(TT.RETURN):
            return self.parse_return_stmt()
        if self.check(TT.THROW):
            return self.parse_throw_stmt()
        if self.check(TT.BREAK, TT.CONTINUE):
            return self.parse_jump_stmt()
        if self.check(TT.DEBUGGER):
            start = self.advance()
            self.consume_semicolon()
            return self.finish('DebuggerStatement', start)

        # Just an expression statement
        start = self.current
        expr = self.parse_expression()
        self.consume_semicolon()
        return self.finish('ExpressionStatement', start, expression=expr)

    def is_let_declaration(self) -> bool:
        return self.check_word('let') and self.peek(1).type in (TT.IDENT.name, TT.LSQB.name, TT.LBRACE.name)

    def parse_block(self) -> Node:
        start = self.expect(TT.LBRACE)
        body = []
        while not self.check(TT.RBRACE):
            if self.at_eof():
                raise ParseError("Unterminated block", start)
            body.append(self.parse_statement())
        self.expect(TT.RBRACE)
        return self.finish('BlockStatement', start, body=body)

    def parse_variable_declaration(self, statement: bool, no_in: bool = False) -> Node:
        """var/let/const declarators; the statement form also takes the `;`"""
        start = self.advance()
        declarations = []
        while True:
            decl_start = self.current
            target = self.parse_binding_target()
            init = None
            if self.match(TT.ASSIGN):
                init = self.parse_assignment(no_in)
            declarations.append(self.finish('VariableDeclarator', decl_start, id=target, init=init))
            if not self.match(TT.COMMA):
                break

        if statement:
            self.consume_semicolon()
        return self.finish('VariableDeclaration', start, declarations=declarations, declaration_kind=start.value)

    def parse_if_stmt(self) -> Node:
        """if (expr) stmt [else stmt]"""
        start = self.expect(TT.IF)
        self.expect(TT.LPAR)
        test = self.parse_expression()
        self.expect(TT.RPAR)
        consequent = self.parse_statement()

        alternate = None
        if self.match(TT.ELSE):
            alternate = self.parse_statement()

        return self.finish('IfStatement', start, test=test, consequent=consequent, alternate=alternate)

    def parse_while_stmt(self) -> Node:
        """while (expr) stmt"""
        start = self.expect(TT.WHILE)
        self.expect(TT.LPAR)
        test = self.parse_expression()
        self.expect(TT.RPAR)
        body = self.parse_statement()
        return self.finish('WhileStatement', start, test=test, body=body)

    def parse_do_while_stmt(self) -> Node:
        """do stmt while (expr)"""
        start = self.expect(TT.DO)
        body = self.parse_statement()
        self.expect(TT.WHILE)
        self.expect(TT.LPAR)
        test = self.parse_expression()
        self.expect(TT.RPAR)
        self.match(TT.SEMI)
        return self.finish('DoWhileStatement', start, body=body, test=test)

    def parse_for_stmt(self) -> Node:
        """
        Parse for loop:
        for (init; test; update) stmt
        for (left in right) stmt
        for (left of right) stmt
        """
        start = self.expect(TT.FOR)
        self.expect(TT.LPAR)

        init = None
        if not self.check(TT.SEMI):
            if self.check(TT.VAR, TT.CONST) or self.is_let_declaration():
                init = self.parse_variable_declaration(statement=False, no_in=True)
            else:
                init = self.parse_expression(no_in=True)

            if self.check(TT.IN) or self.check_word('of'):
                is_of = self.advance().value == 'of'
                left = init if init.kind == 'VariableDeclaration' else self.to_pattern(init)
                right = self.parse_assignment() if is_of else self.parse_expression()
                self.expect(TT.RPAR)
                body = self.parse_statement()
                kind = 'ForOfStatement' if is_of else 'ForInStatement'
                return self.finish(kind, start, left=left, right=right, body=body)

        self.expect(TT.SEMI)
        test = None if self.check(TT.SEMI) else self.parse_expression()
        self.expect(TT.SEMI)
        update = None if self.check(TT.RPAR) else self.parse_expression()
        self.expect(TT.RPAR)
        body = self.parse_statement()
        return self.finish('ForStatement', start, init=init, test=test, update=update, body=body)

    def parse_switch_stmt(self) -> Node:
        """switch (expr) { case expr: stmts... default: stmts... }"""
        start = self.expect(TT.SWITCH)
        self.expect(TT.LPAR)
        discriminant = self.parse_expression()
        self.expect(TT.RPAR)
        self.expect(TT.LBRACE)

        cases = []
        while not self.check(TT.RBRACE):
            case_start = self.current
            if self.match(TT.CASE):
                test = self.parse_expression()
            elif self.match(TT.DEFAULT):
                test = None
            else:
                raise ParseError("Expected 'case' or 'default'", self.current)
            self.expect(TT.COLON)

            consequent = []
            while not self.check(TT.CASE, TT.DEFAULT, TT.RBRACE):
                if self.at_eof():
                    raise ParseError("Unterminated switch", start)
                consequent.append(self.parse_statement())
            cases.append(self.finish('SwitchCase', case_start, test=test, consequent=consequent))

        self.expect(TT.RBRACE)
        return self.finish('SwitchStatement', start, discriminant=discriminant, cases=cases)

    def parse_with_stmt(self) -> Node:
        start = self.expect(TT.WITH)
        self.expect(TT.LPAR)
        obj = self.parse_expression()
        self.expect(TT.RPAR)
        body = self.parse_statement()
        return self.finish('WithStatement', start, object=obj, body=body)

    def parse_try_stmt(self) -> Node:
        """try block [catch (param) block] [finally block]"""
        start = self.expect(TT.TRY)
        block = self.parse_block()

        handler = None
        if self.check(TT.CATCH):
            catch_start = self.advance()
            self.expect(TT.LPAR)
            param = self.parse_binding_target()
            self.expect(TT.RPAR)
            body = self.parse_block()
            handler = self.finish('CatchClause', catch_start, param=param, body=body)

        finalizer = self.parse_block() if self.match(TT.FINALLY) else None
        if handler is None and finalizer is None:
            raise ParseError("Missing catch or finally after try", self.current)

        return self.finish('TryStatement', start, block=block, handler=handler, finalizer=finalizer)

    def parse_return_stmt(self) -> Node:
        """return [expr] - a line break right after `return` ends the statement"""
        start = self.expect(TT.RETURN)
        argument = None
        if not (self.check(TT.SEMI, TT.RBRACE) or self.at_eof() or self.on_new_line()):
            argument = self.parse_expression()
        self.consume_semicolon()
        return self.finish('ReturnStatement', start, argument=argument)

    def parse_throw_stmt(self) -> Node:
        start = self.expect(TT.THROW)
        if self.on_new_line():
            raise ParseError("Illegal newline after throw", self.current)
        argument = self.parse_expression()
        self.consume_semicolon()
        return self.finish('ThrowStatement', start, argument=argument)

    def parse_jump_stmt(self) -> Node:
        """break/continue with an optional label on the same line"""
        start = self.advance()
        label = None
        if self.check(TT.IDENT) and not self.on_new_line():
            label = self.parse_identifier()
        self.consume_semicolon()
        kind = 'BreakStatement' if start.type == TT.BREAK.name else 'ContinueStatement'
        return self.finish(kind, start, label=label)

    # ========================================================================
    # Functions and Classes
    # ========================================================================

    def parse_function(self, declaration: bool) -> Node:
        """function [*] [name] (params) { body }"""
        start = self.expect(TT.FUNCTION)
        generator = self.match(TT.STAR)

        fn_id = None
        if self.check(TT.IDENT):
            fn_id = self.parse_identifier()
        elif declaration:
            raise ParseError("Function declaration requires a name", self.current)

        params = self.parse_params()
        body = self.parse_block()
        kind = 'FunctionDeclaration' if declaration else 'FunctionExpression'
        return self.finish(kind, start, id=fn_id, params=params, body=body, generator=generator, expression=False)

    def parse_method_function(self, generator: bool = False) -> Node:
        """(params) { body } of an object or class method"""
        start = self.current
        params = self.parse_params()
        body = self.parse_block()
        return self.finish('FunctionExpression', start, id=None, params=params, body=body,
                           generator=generator, expression=False)

    def parse_params(self) -> List[Node]:
        self.expect(TT.LPAR)
        params = []
        while not self.check(TT.RPAR):
            param_start = self.current
            if self.match(TT.SPREAD):
                params.append(self.finish('RestElement', param_start, argument=self.parse_binding_target()))
            else:
                target = self.parse_binding_target()
                if self.match(TT.ASSIGN):
                    default = self.parse_assignment()
                    target = self.finish('AssignmentPattern', param_start, left=target, right=default)
                params.append(target)
            if not self.match(TT.COMMA):
                break
        self.expect(TT.RPAR)
        return params

    def parse_class(self, declaration: bool) -> Node:
        """class [name] [extends expr] { methods }"""
        start = self.expect(TT.CLASS)

        class_id = None
        if self.check(TT.IDENT):
            class_id = self.parse_identifier()
        elif declaration:
            raise ParseError("Class declaration requires a name", self.current)

        super_class = None
        if self.match(TT.EXTENDS):
            super_start = self.current
            super_class = self.parse_call_tail(super_start, self.parse_primary(), allow_call=True)

        body_start = self.expect(TT.LBRACE)
        methods = []
        while not self.check(TT.RBRACE):
            if self.match(TT.SEMI):
                continue
            if self.at_eof():
                raise ParseError("Unterminated class body", body_start)
            methods.append(self.parse_method_definition())
        self.expect(TT.RBRACE)
        body = self.finish('ClassBody', body_start, body=methods)

        kind = 'ClassDeclaration' if declaration else 'ClassExpression'
        return self.finish(kind, start, id=class_id, superClass=super_class, body=body)

    def parse_method_definition(self) -> Node:
        start = self.current

        is_static = False
        if self.check_word('static') and self.peek(1).type != TT.LPAR.name:
            self.advance()
            is_static = True

        kind = 'method'
        if self.is_accessor_prefix():
            kind = self.advance().value

        generator = self.match(TT.STAR)
        key, computed = self.parse_property_key()
        value = self.parse_method_function(generator)

        if kind == 'method' and not is_static and not computed and getattr(key, 'name', None) == 'constructor':
            kind = 'constructor'

        return self.finish('MethodDefinition', start, key=key, value=value, method_kind=kind,
                           static=is_static, computed=computed)

    def is_accessor_prefix(self) -> bool:
        """`get`/`set` followed by a property key, not used as a key itself"""
        if not (self.check_word('get') or self.check_word('set')):
            return False
        return self.peek(1).type not in (TT.LPAR.name, TT.COLON.name, TT.COMMA.name, TT.RBRACE.name)

    # ========================================================================
    # Patterns
    # ========================================================================

    def parse_binding_target(self) -> Node:
        """Identifier, or an array/object literal reinterpreted as a pattern"""
        if self.check(TT.LSQB, TT.LBRACE):
            return self.to_pattern(self.parse_primary())
        return self.parse_identifier()

    def to_pattern(self, node: Node) -> Node:
        """Reinterpret an assignment target expression as a pattern"""
        if node.kind == 'ArrayExpression':
            node.kind = 'ArrayPattern'
            for element in node.elements:
                if element is not None:
                    self.to_pattern(element)
        elif node.kind == 'ObjectExpression':
            node.kind = 'ObjectPattern'
            for prop in node.properties:
                self.to_pattern(prop.value)
        elif node.kind == 'AssignmentExpression' and node.operator == '=':
            node.kind = 'AssignmentPattern'
            self.to_pattern(node.left)
        elif node.kind == 'SpreadElement':
            node.kind = 'RestElement'
            self.to_pattern(node.argument)
        return node

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expression(self, no_in: bool = False) -> Node:
        """Parse expression (top level): assignment (, assignment)*"""
        start = self.current
        expr = self.parse_assignment(no_in)

        if not self.check(TT.COMMA):
            return expr

        expressions = [expr]
        while self.match(TT.COMMA):
            expressions.append(self.parse_assignment(no_in))
        return self.finish('SequenceExpression', start, expressions=expressions)

    def parse_assignment(self, no_in: bool = False) -> Node:
        """Parse assignment level: yield, arrow functions, `=` and compound assignment"""
        if self.check(TT.YIELD):
            return self.parse_yield(no_in)
        if self.is_arrow_ahead():
            return self.parse_arrow(no_in)

        start = self.current
        left = self.parse_conditional(no_in)

        if self.current.type in ASSIGN_OP_NAMES:
            op = self.advance()
            if op.value == '=':
                left = self.to_pattern(left)
            right = self.parse_assignment(no_in)
            return self.finish('AssignmentExpression', start, operator=op.value, left=left, right=right)

        return left

    def is_arrow_ahead(self) -> bool:
        """`x =>` or a balanced `( ... )` directly followed by `=>`"""
        if self.check(TT.IDENT):
            return self.peek(1).type == TT.ARROW.name
        if not self.check(TT.LPAR):
            return False

        depth = 0
        for idx in range(self.pos, len(self.tokens)):
            tok_type = self.tokens[idx].type
            if tok_type in (TT.LPAR.name, TT.LSQB.name, TT.LBRACE.name):
                depth += 1
            elif tok_type in (TT.RPAR.name, TT.RSQB.name, TT.RBRACE.name):
                depth -= 1
                if depth == 0:
                    return idx + 1 < len(self.tokens) and self.tokens[idx + 1].type == TT.ARROW.name
        return False

    def parse_arrow(self, no_in: bool) -> Node:
        """params => body"""
        start = self.current
        if self.check(TT.IDENT):
            params = [self.parse_identifier()]
        else:
            params = self.parse_params()
        self.expect(TT.ARROW)

        if self.check(TT.LBRACE):
            body = self.parse_block()
            expression = False
        else:
            body = self.parse_assignment(no_in)
            expression = True

        return self.finish('ArrowFunctionExpression', start, id=None, params=params, body=body,
                           generator=False, expression=expression)

    def parse_yield(self, no_in: bool) -> Node:
        """yield [*] [expr] - a line break right after `yield` ends the expression"""
        start = self.expect(TT.YIELD)
        delegate = False
        argument = None

        if not self.on_new_line():
            if self.match(TT.STAR):
                delegate = True
                argument = self.parse_assignment(no_in)
            elif not self.check(*YIELD_TERMINATORS) and not (no_in and self.check(TT.IN)):
                argument = self.parse_assignment(no_in)

        return self.finish('YieldExpression', start, argument=argument, delegate=delegate)

    def parse_conditional(self, no_in: bool = False) -> Node:
        """Parse ternary: test ? consequent : alternate"""
        start = self.current
        test = self.parse_binary(no_in)

        if not self.match(TT.QMARK):
            return test

        consequent = self.parse_assignment()
        self.expect(TT.COLON)
        alternate = self.parse_assignment(no_in)
        return self.finish('ConditionalExpression', start, test=test, consequent=consequent, alternate=alternate)

    def binary_precedence(self, tok: Token, no_in: bool) -> Optional[int]:
        if tok.type in (TT.STRING.name, TT.REGEX.name, TT.IDENT.name):
            return None
        if no_in and tok.type == TT.IN.name:
            return None
        return OPERATOR_PRECEDENCE.get(tok.value)

    def parse_binary(self, no_in: bool = False, min_prec: int = LOWEST_BINARY_PRECEDENCE) -> Node:
        """Parse binary/logical operators by precedence climbing (left associative)"""
        start = self.current
        left = self.parse_unary()

        while True:
            op = self.current
            prec = self.binary_precedence(op, no_in)
            if prec is None or prec < min_prec:
                return left

            self.advance()
            right = self.parse_binary(no_in, prec + 1)
            kind = 'LogicalExpression' if op.value in LOGICAL_OPERATOR_PRECEDENCE else 'BinaryExpression'
            left = self.finish(kind, start, operator=op.value, left=left, right=right)

    def parse_unary(self) -> Node:
        """Parse prefix operators: !x, -x, typeof x, ++x"""
        start = self.current

        if self.check(*UNARY_OPS):
            op = self.advance()
            argument = self.parse_unary()
            return self.finish('UnaryExpression', start, operator=op.value, prefix=True, argument=argument)

        if self.check(TT.INCR, TT.DECR):
            op = self.advance()
            argument = self.parse_unary()
            return self.finish('UpdateExpression', start, operator=op.value, prefix=True, argument=argument)

        return self.parse_postfix()

    def parse_postfix(self) -> Node:
        """Parse postfix ++/-- (must stay on the operand's line)"""
        start = self.current
        expr = self.parse_lhs()

        if self.check(TT.INCR, TT.DECR) and not self.on_new_line():
            op = self.advance()
            return self.finish('UpdateExpression', start, operator=op.value, prefix=False, argument=expr)

        return expr

    def parse_lhs(self) -> Node:
        """Parse call/member chains, including `new`"""
        start = self.current
        if self.check(TT.NEW):
            expr = self.parse_new()
        else:
            expr = self.parse_primary()
        return self.parse_call_tail(start, expr, allow_call=True)

    def parse_new(self) -> Node:
        """new callee [(args)] - the callee chain stops at the first call"""
        start = self.expect(TT.NEW)
        callee_start = self.current
        callee = self.parse_new() if self.check(TT.NEW) else self.parse_primary()
        callee = self.parse_call_tail(callee_start, callee, allow_call=False)
        arguments = self.parse_arguments() if self.check(TT.LPAR) else []
        return self.finish('NewExpression', start, callee=callee, arguments=arguments)

    def parse_call_tail(self, start: Token, expr: Node, allow_call: bool) -> Node:
        """
        Parse postfix chain operations:
        - field access: expr.field
        - indexing: expr[index]
        - calls: expr(args)
        """
        while True:
            if self.match(TT.DOT):
                prop = self.parse_identifier_name()
                expr = self.finish('MemberExpression', start, object=expr, property=prop, computed=False)
            elif self.match(TT.LSQB):
                prop = self.parse_expression()
                self.expect(TT.RSQB)
                expr = self.finish('MemberExpression', start, object=expr, property=prop, computed=True)
            elif allow_call and self.check(TT.LPAR):
                arguments = self.parse_arguments()
                expr = self.finish('CallExpression', start, callee=expr, arguments=arguments)
            else:
                return expr

    def parse_arguments(self) -> List[Node]:
        self.expect(TT.LPAR)
        arguments = []
        while not self.check(TT.RPAR):
            arg_start = self.current
            if self.match(TT.SPREAD):
                arguments.append(self.finish('SpreadElement', arg_start, argument=self.parse_assignment()))
            else:
                arguments.append(self.parse_assignment())
            if not self.match(TT.COMMA):
                break
        self.expect(TT.RPAR)
        return arguments

    def parse_primary(self) -> Node:
        """
        Parse primary expressions:
        - Literals (numbers, strings, regexes, true, false, null)
        - Identifiers, this, super
        - Parenthesized expressions
        - Arrays, objects
        - Function and class expressions
        """
        tok = self.current

        if self.check(TT.IDENT):
            return self.parse_identifier()
        if self.check(TT.THIS):
            self.advance()
            return self.finish('ThisExpression', tok)
        if self.check(TT.SUPER):
            self.advance()
            return self.finish('Super', tok)
        if self.check(TT.NUMBER):
            self.advance()
            return self.finish('Literal', tok, value=self.number_value(tok.value), raw=tok.value)
        if self.check(TT.STRING):
            self.advance()
            return self.finish('Literal', tok, value=tok.value[1:-1], raw=tok.value)
        if self.check(TT.REGEX):
            self.advance()
            body_end = tok.value.rindex('/')
            regex = {'pattern': tok.value[1:body_end], 'flags': tok.value[body_end + 1:]}
            return self.finish('Literal', tok, value=None, raw=tok.value, regex=regex)
        if self.check(TT.TRUE, TT.FALSE):
            self.advance()
            return self.finish('Literal', tok, value=tok.type == TT.TRUE.name, raw=tok.value)
        if self.check(TT.NULL):
            self.advance()
            return self.finish('Literal', tok, value=None, raw=tok.value)

        if self.check(TT.LSQB):
            return self.parse_array()
        if self.check(TT.LBRACE):
            return self.parse_object()
        if self.check(TT.FUNCTION):
            return self.parse_function(declaration=False)
        if self.check(TT.CLASS):
            return self.parse_class(declaration=False)

        if self.match(TT.LPAR):
            expr = self.parse_expression()
            self.expect(TT.RPAR, "Expected ')'")
            return expr

        if self.at_eof():
            raise ParseError("Unexpected end of input", tok)
        raise ParseError(f"Unexpected token {tok.value!r}", tok)

    @staticmethod
    def number_value(text: str):
        if text[:2] in ('0x', '0X'):
            return int(text, 16)
        if any(ch in text for ch in '.eE'):
            return float(text)
        return int(text)

    def parse_identifier(self) -> Node:
        tok = self.expect(TT.IDENT, f"Expected identifier, got {self.current.type}")
        return self.finish('Identifier', tok, name=tok.value)

    def is_identifier_name(self, tok: Token) -> bool:
        """Identifiers and reserved words are both valid property names"""
        return tok.type == TT.IDENT.name or tok.type in KEYWORD_NAMES

    def parse_identifier_name(self) -> Node:
        tok = self.current
        if not self.is_identifier_name(tok):
            raise ParseError("Expected property name after '.'", tok)
        self.advance()
        return self.finish('Identifier', tok, name=tok.value)

    def parse_array(self) -> Node:
        """[a, , ...b] - holes are None"""
        start = self.expect(TT.LSQB)
        elements: List[Optional[Node]] = []

        while not self.check(TT.RSQB):
            if self.match(TT.COMMA):
                elements.append(None)
                continue

            elem_start = self.current
            if self.match(TT.SPREAD):
                elements.append(self.finish('SpreadElement', elem_start, argument=self.parse_assignment()))
            else:
                elements.append(self.parse_assignment())

            if not self.check(TT.RSQB):
                self.expect(TT.COMMA, "Expected ',' or ']'")

        self.expect(TT.RSQB)
        return self.finish('ArrayExpression', start, elements=elements)

    def parse_object(self) -> Node:
        """{key: value, shorthand, method() {}, get x() {}, [computed]: value}"""
        start = self.expect(TT.LBRACE)
        properties = []

        while not self.check(TT.RBRACE):
            properties.append(self.parse_property())
            if not self.check(TT.RBRACE):
                self.expect(TT.COMMA, "Expected ',' or '}'")

        self.expect(TT.RBRACE)
        return self.finish('ObjectExpression', start, properties=properties)

    def parse_property(self) -> Node:
        start = self.current

        if self.is_accessor_prefix():
            kind = self.advance().value
            key, computed = self.parse_property_key()
            value = self.parse_method_function()
            return self.finish('Property', start, key=key, value=value, method_kind=kind,
                               computed=computed, method=False, shorthand=False)

        generator = self.match(TT.STAR)
        key, computed = self.parse_property_key()
        method = False
        shorthand = False

        if generator or self.check(TT.LPAR):
            value = self.parse_method_function(generator)
            method = True
        elif self.match(TT.COLON):
            value = self.parse_assignment()
        elif key.kind == 'Identifier' and not computed:
            # Shorthand: the value is its own node, never the key itself.
            shorthand = True
            value = Node('Identifier', key.range, key.loc, name=key.name)
            if self.match(TT.ASSIGN):
                default = self.parse_assignment()
                value = self.finish('AssignmentPattern', start, left=value, right=default)
        else:
            raise ParseError("Expected ':' after property key", self.current)

        return self.finish('Property', start, key=key, value=value, method_kind='init',
                           computed=computed, method=method, shorthand=shorthand)

    def parse_property_key(self) -> Tuple[Node, bool]:
        """Returns (key, computed)"""
        if self.match(TT.LSQB):
            key = self.parse_assignment()
            self.expect(TT.RSQB)
            return key, True

        if self.check(TT.STRING, TT.NUMBER):
            return self.parse_primary(), False

        tok = self.current
        if not self.is_identifier_name(tok):
            raise ParseError(f"Unexpected token {tok.value!r} as property key", tok)
        self.advance()
        return self.finish('Identifier', tok, name=tok.value), False

# ============================================================================
# Entry Points
# ============================================================================

def parse_source(source: str) -> Node:
    """
    Parse source text to a Program node.

    The token stream is kept on the program as ``program.tokens``.
    """
    tokens = tokenize(source)
    return Parser(tokens, source).parse()


def parse_expr_fragment(source: str) -> Node:
    """
    Parse a standalone expression fragment.
    Used where only an expression (not a statement list) is wanted.
    """
    parser = Parser(tokenize(source), source)
    expr = parser.parse_expression()

    # Ensure we've consumed the entire fragment
    if not parser.at_eof():
        raise ParseError("Unexpected tokens after expression fragment", parser.current)
    return expr
