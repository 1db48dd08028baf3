"""Static resolution pass computing scope distances for Lox variable references."""

import logging
from enum import Enum
from typing import Dict, List, Sequence

from lox.lox_ast import (
    LoxExpr, LoxLiteralExpr, LoxGroupingExpr, LoxUnaryExpr, LoxBinaryExpr, LoxLogicalExpr,
    LoxVariableExpr, LoxAssignExpr, LoxCallExpr,
    LoxStmt, LoxExpressionStmt, LoxPrintStmt, LoxVarStmt, LoxBlockStmt, LoxIfStmt,
    LoxWhileStmt, LoxFunctionStmt, LoxReturnStmt
)
from lox.lox_error_reporter import LoxErrorReporter
from lox.lox_interpreter import LoxInterpreter
from lox.lox_token import LoxToken


class LoxFunctionType(Enum):
    """Kind of function body the resolver is currently inside."""
    NONE = "none"
    FUNCTION = "function"


class LoxResolver:
    """
    Walks the AST once before execution and records, for each local variable
    reference, how many scopes separate it from its declaration.

    Only block and function scopes are tracked. A name not found in any of
    them is left unrecorded and is looked up in the global scope at runtime.
    The resolver never evaluates anything, so it terminates even for programs
    that would loop forever.
    """

    def __init__(self, interpreter: LoxInterpreter, error_reporter: LoxErrorReporter) -> None:
        """
        Initialize resolver.

        Args:
            interpreter: Interpreter whose locals table receives the distances
            error_reporter: Sink for scoping errors
        """
        self._interpreter = interpreter
        self._error_reporter = error_reporter
        self._logger = logging.getLogger("LoxResolver")

        # Each scope maps a name to whether its initializer has finished
        self.scopes: List[Dict[str, bool]] = []
        self.current_function = LoxFunctionType.NONE
        self._resolved_count = 0

    def resolve(self, statements: Sequence[LoxStmt]) -> None:
        """Resolve a list of statements."""
        for statement in statements:
            self._resolve_stmt(statement)

        self._logger.debug("resolved %d local variable references", self._resolved_count)

    def _resolve_stmt(self, stmt: LoxStmt) -> None:
        if isinstance(stmt, LoxBlockStmt):
            self._begin_scope()
            self.resolve(stmt.statements)
            self._end_scope()
            return

        if isinstance(stmt, LoxVarStmt):
            self._declare(stmt.name)
            if stmt.initializer is not None:
                self._resolve_expr(stmt.initializer)

            self._define(stmt.name)
            return

        if isinstance(stmt, LoxFunctionStmt):
            # Define before resolving the body so the function can call itself
            self._declare(stmt.name)
            self._define(stmt.name)
            self._resolve_function(stmt, LoxFunctionType.FUNCTION)
            return

        if isinstance(stmt, LoxExpressionStmt):
            self._resolve_expr(stmt.expression)
            return

        if isinstance(stmt, LoxIfStmt):
            self._resolve_expr(stmt.condition)
            self._resolve_stmt(stmt.then_branch)
            if stmt.else_branch is not None:
                self._resolve_stmt(stmt.else_branch)

            return

        if isinstance(stmt, LoxPrintStmt):
            self._resolve_expr(stmt.expression)
            return

        if isinstance(stmt, LoxReturnStmt):
            if self.current_function == LoxFunctionType.NONE:
                self._error_reporter.resolve_error(stmt.keyword, "Can't return from top-level code.")

            if stmt.value is not None:
                self._resolve_expr(stmt.value)

            return

        if isinstance(stmt, LoxWhileStmt):
            self._resolve_expr(stmt.condition)
            self._resolve_stmt(stmt.body)
            return

        raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def _resolve_expr(self, expr: LoxExpr) -> None:
        if isinstance(expr, LoxVariableExpr):
            if self.scopes and self.scopes[-1].get(expr.name.lexeme) is False:
                self._error_reporter.resolve_error(
                    expr.name, "Can't read local variable in its own initializer."
                )

            self._resolve_local(expr, expr.name)
            return

        if isinstance(expr, LoxAssignExpr):
            self._resolve_expr(expr.value)
            self._resolve_local(expr, expr.name)
            return

        if isinstance(expr, (LoxBinaryExpr, LoxLogicalExpr)):
            self._resolve_expr(expr.left)
            self._resolve_expr(expr.right)
            return

        if isinstance(expr, LoxCallExpr):
            self._resolve_expr(expr.callee)
            for argument in expr.arguments:
                self._resolve_expr(argument)

            return

        if isinstance(expr, LoxGroupingExpr):
            self._resolve_expr(expr.expression)
            return

        if isinstance(expr, LoxUnaryExpr):
            self._resolve_expr(expr.right)
            return

        if isinstance(expr, LoxLiteralExpr):
            return

        raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def _resolve_function(self, function: LoxFunctionStmt, function_type: LoxFunctionType) -> None:
        enclosing_function = self.current_function
        self.current_function = function_type

        self._begin_scope()
        for param in function.params:
            self._declare(param)
            self._define(param)

        self.resolve(function.body)
        self._end_scope()

        self.current_function = enclosing_function

    def _begin_scope(self) -> None:
        self.scopes.append({})

    def _end_scope(self) -> None:
        self.scopes.pop()

    def _declare(self, name: LoxToken) -> None:
        if not self.scopes:
            return

        scope = self.scopes[-1]
        if name.lexeme in scope:
            self._error_reporter.resolve_error(name, "Already a variable with this name in this scope.")

        scope[name.lexeme] = False

    def _define(self, name: LoxToken) -> None:
        if not self.scopes:
            return

        self.scopes[-1][name.lexeme] = True

    def _resolve_local(self, expr: LoxExpr, name: LoxToken) -> None:
        for index in range(len(self.scopes) - 1, -1, -1):
            if name.lexeme in self.scopes[index]:
                self._interpreter.resolve(expr, len(self.scopes) - 1 - index)
                self._resolved_count += 1
                return
