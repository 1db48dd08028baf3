"""Recursive-descent parser building Lox ASTs from tokens."""

import logging
from typing import List, cast

from lox.lox_ast import (
    LoxExpr, LoxLiteralExpr, LoxGroupingExpr, LoxUnaryExpr, LoxBinaryExpr, LoxLogicalExpr,
    LoxVariableExpr, LoxAssignExpr, LoxCallExpr,
    LoxStmt, LoxExpressionStmt, LoxPrintStmt, LoxVarStmt, LoxBlockStmt, LoxIfStmt,
    LoxWhileStmt, LoxFunctionStmt, LoxReturnStmt
)
from lox.lox_error import LoxParseError
from lox.lox_error_reporter import LoxErrorReporter
from lox.lox_token import LoxToken, LoxTokenType
from lox.lox_value import LoxNumber, LoxString, LOX_FALSE, LOX_NIL, LOX_TRUE


class LoxParser:
    """
    Parses a token list into a list of statements.

    Syntax errors are reported to the error reporter; the parser then discards
    tokens up to the next statement boundary and carries on, so one pass reports
    as many independent errors as it can.
    """

    MAX_ARGUMENTS = 255

    # Keywords that start a statement, used to find a resynchronisation point
    STATEMENT_STARTS = {
        LoxTokenType.CLASS,
        LoxTokenType.FUN,
        LoxTokenType.VAR,
        LoxTokenType.FOR,
        LoxTokenType.IF,
        LoxTokenType.WHILE,
        LoxTokenType.PRINT,
        LoxTokenType.RETURN,
    }

    def __init__(self, tokens: List[LoxToken], error_reporter: LoxErrorReporter):
        """
        Initialize parser.

        Args:
            tokens: Token list ending with an EOF token
            error_reporter: Sink for syntax errors
        """
        self.tokens = tokens
        self.current = 0
        self._error_reporter = error_reporter
        self._logger = logging.getLogger("LoxParser")

    def parse(self) -> List[LoxStmt]:
        """
        Parse the whole token list.

        Returns:
            Statements that parsed successfully; declarations containing syntax
            errors are dropped
        """
        statements: List[LoxStmt] = []
        while not self._is_at_end():
            declaration = self._declaration()
            if declaration is not None:
                statements.append(declaration)

        self._logger.debug("parsed %d top-level statements", len(statements))
        return statements

    # Declarations and statements

    def _declaration(self) -> LoxStmt | None:
        try:
            if self._match(LoxTokenType.FUN):
                return self._function("function")

            if self._match(LoxTokenType.VAR):
                return self._var_declaration()

            return self._statement()

        except LoxParseError as e:
            self._logger.debug("synchronizing after parse error on line %d: %s", e.token.line, e.message)
            self._synchronize()
            return None

    def _var_declaration(self) -> LoxStmt:
        name = self._consume(LoxTokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self._match(LoxTokenType.EQUAL):
            initializer = self._expression()

        self._consume(LoxTokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return LoxVarStmt(name, initializer)

    def _function(self, kind: str) -> LoxFunctionStmt:
        name = self._consume(LoxTokenType.IDENTIFIER, f"Expect {kind} name.")
        self._consume(LoxTokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")

        parameters: List[LoxToken] = []
        if not self._check(LoxTokenType.RIGHT_PAREN):
            while True:
                if len(parameters) >= self.MAX_ARGUMENTS:
                    self._error(self._peek(), f"Can't have more than {self.MAX_ARGUMENTS} parameters.")

                parameters.append(self._consume(LoxTokenType.IDENTIFIER, "Expect parameter name."))
                if not self._match(LoxTokenType.COMMA):
                    break

        self._consume(LoxTokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        self._consume(LoxTokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        body = self._block()
        return LoxFunctionStmt(name, tuple(parameters), tuple(body))

    def _statement(self) -> LoxStmt:
        if self._match(LoxTokenType.FOR):
            return self._for_statement()

        if self._match(LoxTokenType.IF):
            return self._if_statement()

        if self._match(LoxTokenType.PRINT):
            return self._print_statement()

        if self._match(LoxTokenType.RETURN):
            return self._return_statement()

        if self._match(LoxTokenType.WHILE):
            return self._while_statement()

        if self._match(LoxTokenType.LEFT_BRACE):
            return LoxBlockStmt(tuple(self._block()))

        return self._expression_statement()

    def _for_statement(self) -> LoxStmt:
        """
        Parse a `for` loop and desugar it into a while loop.

        `for (init; cond; incr) body` becomes
        `{ init; while (cond) { body; incr; } }`, with `true` as the condition
        when it is omitted.
        """
        self._consume(LoxTokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        initializer: LoxStmt | None
        if self._match(LoxTokenType.SEMICOLON):
            initializer = None

        elif self._match(LoxTokenType.VAR):
            initializer = self._var_declaration()

        else:
            initializer = self._expression_statement()

        condition = None
        if not self._check(LoxTokenType.SEMICOLON):
            condition = self._expression()

        self._consume(LoxTokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self._check(LoxTokenType.RIGHT_PAREN):
            increment = self._expression()

        self._consume(LoxTokenType.RIGHT_PAREN, "Expect ')' after for clauses.")
        body = self._statement()

        if increment is not None:
            body = LoxBlockStmt((body, LoxExpressionStmt(increment)))

        if condition is None:
            condition = LoxLiteralExpr(LOX_TRUE)

        body = LoxWhileStmt(condition, body)

        if initializer is not None:
            body = LoxBlockStmt((initializer, body))

        return body

    def _if_statement(self) -> LoxStmt:
        self._consume(LoxTokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(LoxTokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self._statement()
        else_branch = None
        if self._match(LoxTokenType.ELSE):
            else_branch = self._statement()

        return LoxIfStmt(condition, then_branch, else_branch)

    def _print_statement(self) -> LoxStmt:
        value = self._expression()
        self._consume(LoxTokenType.SEMICOLON, "Expect ';' after value.")
        return LoxPrintStmt(value)

    def _return_statement(self) -> LoxStmt:
        keyword = self._previous()
        value = None
        if not self._check(LoxTokenType.SEMICOLON):
            value = self._expression()

        self._consume(LoxTokenType.SEMICOLON, "Expect ';' after return value.")
        return LoxReturnStmt(keyword, value)

    def _while_statement(self) -> LoxStmt:
        self._consume(LoxTokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self._consume(LoxTokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body = self._statement()
        return LoxWhileStmt(condition, body)

    def _block(self) -> List[LoxStmt]:
        statements: List[LoxStmt] = []

        while not self._check(LoxTokenType.RIGHT_BRACE) and not self._is_at_end():
            declaration = self._declaration()
            if declaration is not None:
                statements.append(declaration)

        self._consume(LoxTokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def _expression_statement(self) -> LoxStmt:
        expr = self._expression()
        self._consume(LoxTokenType.SEMICOLON, "Expect ';' after expression.")
        return LoxExpressionStmt(expr)

    # Expressions, lowest precedence first

    def _expression(self) -> LoxExpr:
        return self._assignment()

    def _assignment(self) -> LoxExpr:
        expr = self._or()

        if self._match(LoxTokenType.EQUAL):
            equals = self._previous()
            value = self._assignment()

            if isinstance(expr, LoxVariableExpr):
                return LoxAssignExpr(expr.name, value)

            # Reported but not raised: the parser is not confused about where it is
            self._error(equals, "Invalid assignment target.")

        return expr

    def _or(self) -> LoxExpr:
        expr = self._and()

        while self._match(LoxTokenType.OR):
            operator = self._previous()
            right = self._and()
            expr = LoxLogicalExpr(expr, operator, right)

        return expr

    def _and(self) -> LoxExpr:
        expr = self._equality()

        while self._match(LoxTokenType.AND):
            operator = self._previous()
            right = self._equality()
            expr = LoxLogicalExpr(expr, operator, right)

        return expr

    def _equality(self) -> LoxExpr:
        expr = self._comparison()

        while self._match(LoxTokenType.BANG_EQUAL, LoxTokenType.EQUAL_EQUAL):
            operator = self._previous()
            right = self._comparison()
            expr = LoxBinaryExpr(expr, operator, right)

        return expr

    def _comparison(self) -> LoxExpr:
        expr = self._term()

        while self._match(
            LoxTokenType.GREATER, LoxTokenType.GREATER_EQUAL, LoxTokenType.LESS, LoxTokenType.LESS_EQUAL
        ):
            operator = self._previous()
            right = self._term()
            expr = LoxBinaryExpr(expr, operator, right)

        return expr

    def _term(self) -> LoxExpr:
        expr = self._factor()

        while self._match(LoxTokenType.MINUS, LoxTokenType.PLUS):
            operator = self._previous()
            right = self._factor()
            expr = LoxBinaryExpr(expr, operator, right)

        return expr

    def _factor(self) -> LoxExpr:
        expr = self._unary()

        while self._match(LoxTokenType.SLASH, LoxTokenType.STAR):
            operator = self._previous()
            right = self._unary()
            expr = LoxBinaryExpr(expr, operator, right)

        return expr

    def _unary(self) -> LoxExpr:
        if self._match(LoxTokenType.BANG, LoxTokenType.MINUS):
            operator = self._previous()
            right = self._unary()
            return LoxUnaryExpr(operator, right)

        return self._call()

    def _call(self) -> LoxExpr:
        expr = self._primary()

        while self._match(LoxTokenType.LEFT_PAREN):
            expr = self._finish_call(expr)

        return expr

    def _finish_call(self, callee: LoxExpr) -> LoxExpr:
        arguments: List[LoxExpr] = []
        if not self._check(LoxTokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= self.MAX_ARGUMENTS:
                    self._error(self._peek(), f"Can't have more than {self.MAX_ARGUMENTS} arguments.")

                arguments.append(self._expression())
                if not self._match(LoxTokenType.COMMA):
                    break

        paren = self._consume(LoxTokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return LoxCallExpr(callee, paren, tuple(arguments))

    def _primary(self) -> LoxExpr:
        if self._match(LoxTokenType.FALSE):
            return LoxLiteralExpr(LOX_FALSE)

        if self._match(LoxTokenType.TRUE):
            return LoxLiteralExpr(LOX_TRUE)

        if self._match(LoxTokenType.NIL):
            return LoxLiteralExpr(LOX_NIL)

        if self._match(LoxTokenType.NUMBER):
            return LoxLiteralExpr(LoxNumber(cast(float, self._previous().literal)))

        if self._match(LoxTokenType.STRING):
            return LoxLiteralExpr(LoxString(cast(str, self._previous().literal)))

        if self._match(LoxTokenType.IDENTIFIER):
            return LoxVariableExpr(self._previous())

        if self._match(LoxTokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(LoxTokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return LoxGroupingExpr(expr)

        raise self._error(self._peek(), "Expect expression.")

    # Token helpers

    def _match(self, *token_types: LoxTokenType) -> bool:
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True

        return False

    def _consume(self, token_type: LoxTokenType, message: str) -> LoxToken:
        if self._check(token_type):
            return self._advance()

        raise self._error(self._peek(), message)

    def _check(self, token_type: LoxTokenType) -> bool:
        if self._is_at_end():
            return False

        return self._peek().type == token_type

    def _advance(self) -> LoxToken:
        if not self._is_at_end():
            self.current += 1

        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == LoxTokenType.EOF

    def _peek(self) -> LoxToken:
        return self.tokens[self.current]

    def _previous(self) -> LoxToken:
        return self.tokens[self.current - 1]

    def _error(self, token: LoxToken, message: str) -> LoxParseError:
        """Report a syntax error and return (not raise) the matching exception."""
        self._error_reporter.parse_error(token, message)
        return LoxParseError(token, message)

    def _synchronize(self) -> None:
        """Discard tokens until the start of what looks like the next statement."""
        self._advance()

        while not self._is_at_end():
            if self._previous().type == LoxTokenType.SEMICOLON:
                return

            if self._peek().type in self.STATEMENT_STARTS:
                return

            self._advance()
