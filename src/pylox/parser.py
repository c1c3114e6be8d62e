"""Recursive-descent parser for Lox.

Each grammar rule is one method; precedence climbs from `assignment` (lowest)
down to `primary`. On a syntax error the parser records it, unwinds to the
enclosing declaration and skips ahead to the next statement boundary, so a
single run can report several independent errors.
"""

from __future__ import annotations

from typing import List, Optional

from loguru import logger

from . import nodes
from .common import LoxSyntaxError
from .tokens import Token, TokenType

MAX_ARGUMENTS = 255

_STATEMENT_STARTS = frozenset(
    {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }
)


class _ParseError(Exception):
    """Unwinds the parser to the nearest declaration after a recorded error."""


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.errors: List[LoxSyntaxError] = []
        self._current = 0

    def parse(self) -> List[nodes.Stmt]:
        statements: List[nodes.Stmt] = []
        while not self._is_at_end():
            declaration = self._declaration()
            if declaration is not None:
                statements.append(declaration)
        logger.debug("parsed {} statements ({} errors)", len(statements), len(self.errors))
        return statements

    # ----- declarations -----

    def _declaration(self) -> Optional[nodes.Stmt]:
        try:
            if self._match(TokenType.CLASS):
                return self._class_declaration()
            if self._match(TokenType.FUN):
                return self._function("function")
            if self._match(TokenType.VAR):
                return self._var_declaration()
            return self._statement()
        except _ParseError:
            self._synchronize()
            return None

    def _class_declaration(self) -> nodes.Class:
        name = self._consume(TokenType.IDENTIFIER, "Expect class name.")

        superclass = None
        if self._match(TokenType.LESS):
            self._consume(TokenType.IDENTIFIER, "Expect superclass name.")
            superclass = nodes.Variable(self._previous())

        self._consume(TokenType.LEFT_BRACE, "Expect '{' before class body.")
        methods: List[nodes.Function] = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
            methods.append(self._function("method"))
        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after class body.")

        return nodes.Class(name, superclass, methods)

    def _function(self, kind: str) -> nodes.Function:
        name = self._consume(TokenType.IDENTIFIER, f"Expect {kind} name.")
        self._consume(TokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")
        params: List[Token] = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self._error(self._peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
                params.append(self._consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self._match(TokenType.COMMA):
                    break
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")

        self._consume(TokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        body = self._block()
        return nodes.Function(name, params, body)

    def _var_declaration(self) -> nodes.Var:
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self._match(TokenType.EQUAL):
            initializer = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return nodes.Var(name, initializer)

    # ----- statements -----

    def _statement(self) -> nodes.Stmt:
        if self._match(TokenType.FOR):
            return self._for_statement()
        if self._match(TokenType.IF):
            return self._if_statement()
        if self._match(TokenType.PRINT):
            return self._print_statement()
        if self._match(TokenType.RETURN):
            return self._return_statement()
        if self._match(TokenType.WHILE):
            return self._while_statement()
        if self._match(TokenType.LEFT_BRACE):
            return nodes.Block(self._block())
        return self._expression_statement()

    def _for_statement(self) -> nodes.Stmt:
        """`for` has no node of its own: it desugars to a While inside Blocks."""
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        initializer: Optional[nodes.Stmt]
        if self._match(TokenType.SEMICOLON):
            initializer = None
        elif self._match(TokenType.VAR):
            initializer = self._var_declaration()
        else:
            initializer = self._expression_statement()

        condition = None
        if not self._check(TokenType.SEMICOLON):
            condition = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self._check(TokenType.RIGHT_PAREN):
            increment = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self._statement()

        if increment is not None:
            body = nodes.Block([body, nodes.Expression(increment)])
        if condition is None:
            condition = nodes.Literal(True)
        body = nodes.While(condition, body)
        if initializer is not None:
            body = nodes.Block([initializer, body])
        return body

    def _if_statement(self) -> nodes.If:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self._statement()
        else_branch = None
        if self._match(TokenType.ELSE):
            else_branch = self._statement()
        return nodes.If(condition, then_branch, else_branch)

    def _print_statement(self) -> nodes.Print:
        value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return nodes.Print(value)

    def _return_statement(self) -> nodes.Return:
        keyword = self._previous()
        value = None
        if not self._check(TokenType.SEMICOLON):
            value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return nodes.Return(keyword, value)

    def _while_statement(self) -> nodes.While:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        return nodes.While(condition, self._statement())

    def _block(self) -> List[nodes.Stmt]:
        statements: List[nodes.Stmt] = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
            declaration = self._declaration()
            if declaration is not None:
                statements.append(declaration)
        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def _expression_statement(self) -> nodes.Expression:
        expr = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return nodes.Expression(expr)

    # ----- expressions -----

    def _expression(self) -> nodes.Expr:
        return self._assignment()

    def _assignment(self) -> nodes.Expr:
        expr = self._or()

        if self._match(TokenType.EQUAL):
            equals = self._previous()
            value = self._assignment()

            if isinstance(expr, nodes.Variable):
                return nodes.Assign(expr.name, value)
            if isinstance(expr, nodes.Get):
                return nodes.Set(expr.object, expr.name, value)

            # Reported but not thrown: the parser is not confused.
            self._error(equals, "Invalid assignment target.")

        return expr

    def _or(self) -> nodes.Expr:
        expr = self._and()
        while self._match(TokenType.OR):
            operator = self._previous()
            expr = nodes.Logical(expr, operator, self._and())
        return expr

    def _and(self) -> nodes.Expr:
        expr = self._equality()
        while self._match(TokenType.AND):
            operator = self._previous()
            expr = nodes.Logical(expr, operator, self._equality())
        return expr

    def _equality(self) -> nodes.Expr:
        expr = self._comparison()
        while self._match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self._previous()
            expr = nodes.Binary(expr, operator, self._comparison())
        return expr

    def _comparison(self) -> nodes.Expr:
        expr = self._term()
        while self._match(
            TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL
        ):
            operator = self._previous()
            expr = nodes.Binary(expr, operator, self._term())
        return expr

    def _term(self) -> nodes.Expr:
        expr = self._factor()
        while self._match(TokenType.MINUS, TokenType.PLUS):
            operator = self._previous()
            expr = nodes.Binary(expr, operator, self._factor())
        return expr

    def _factor(self) -> nodes.Expr:
        expr = self._unary()
        while self._match(TokenType.SLASH, TokenType.STAR):
            operator = self._previous()
            expr = nodes.Binary(expr, operator, self._unary())
        return expr

    def _unary(self) -> nodes.Expr:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            return nodes.Unary(operator, self._unary())
        return self._call()

    def _call(self) -> nodes.Expr:
        expr = self._primary()
        while True:
            if self._match(TokenType.LEFT_PAREN):
                expr = self._finish_call(expr)
            elif self._match(TokenType.DOT):
                name = self._consume(TokenType.IDENTIFIER, "Expect property name after '.'.")
                expr = nodes.Get(expr, name)
            else:
                break
        return expr

    def _finish_call(self, callee: nodes.Expr) -> nodes.Call:
        arguments: List[nodes.Expr] = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self._error(self._peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
                arguments.append(self._expression())
                if not self._match(TokenType.COMMA):
                    break
        paren = self._consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return nodes.Call(callee, paren, arguments)

    def _primary(self) -> nodes.Expr:
        if self._match(TokenType.FALSE):
            return nodes.Literal(False)
        if self._match(TokenType.TRUE):
            return nodes.Literal(True)
        if self._match(TokenType.NIL):
            return nodes.Literal(None)
        if self._match(TokenType.NUMBER, TokenType.STRING):
            return nodes.Literal(self._previous().literal)
        if self._match(TokenType.SUPER):
            keyword = self._previous()
            self._consume(TokenType.DOT, "Expect '.' after 'super'.")
            method = self._consume(TokenType.IDENTIFIER, "Expect superclass method name.")
            return nodes.Super(keyword, method)
        if self._match(TokenType.THIS):
            return nodes.This(self._previous())
        if self._match(TokenType.IDENTIFIER):
            return nodes.Variable(self._previous())
        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return nodes.Grouping(expr)

        raise self._error(self._peek(), "Expect expression.")

    # ----- token helpers -----

    def _match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _consume(self, token_type: TokenType, message: str) -> Token:
        if self._check(token_type):
            return self._advance()
        raise self._error(self._peek(), message)

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type is token_type

    def _advance(self) -> Token:
        if not self._is_at_end():
            self._current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type is TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self._current]

    def _previous(self) -> Token:
        return self.tokens[self._current - 1]

    def _error(self, token: Token, message: str) -> _ParseError:
        error = LoxSyntaxError.at_token(token, message)
        logger.debug("parse error: {}", error.report())
        self.errors.append(error)
        return _ParseError(message)

    def _synchronize(self) -> None:
        self._advance()
        while not self._is_at_end():
            if self._previous().type is TokenType.SEMICOLON:
                return
            if self._peek().type in _STATEMENT_STARTS:
                return
            self._advance()
