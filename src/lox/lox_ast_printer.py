"""Render Lox ASTs as parenthesised prefix text for debugging and tooling."""

from typing import Sequence

from lox.lox_ast import (
    LoxExpr, LoxLiteralExpr, LoxGroupingExpr, LoxUnaryExpr, LoxBinaryExpr, LoxLogicalExpr,
    LoxVariableExpr, LoxAssignExpr, LoxCallExpr,
    LoxStmt, LoxExpressionStmt, LoxPrintStmt, LoxVarStmt, LoxBlockStmt, LoxIfStmt,
    LoxWhileStmt, LoxFunctionStmt, LoxReturnStmt
)
from lox.lox_value import LoxString


class LoxASTPrinter:
    """
    Prints ASTs in a LISP-like prefix form, e.g. `1 + 2 * 3` as `(+ 1 (* 2 3))`.

    The output makes grouping explicit, which is what precedence and
    desugaring tests want to look at.
    """

    def print_program(self, statements: Sequence[LoxStmt]) -> str:
        """Print one statement per line."""
        return "\n".join(self.print_stmt(statement) for statement in statements)

    def print_stmt(self, stmt: LoxStmt) -> str:
        """Print a single statement."""
        if isinstance(stmt, LoxExpressionStmt):
            return self._parenthesize(";", self.print_expr(stmt.expression))

        if isinstance(stmt, LoxPrintStmt):
            return self._parenthesize("print", self.print_expr(stmt.expression))

        if isinstance(stmt, LoxVarStmt):
            if stmt.initializer is None:
                return self._parenthesize("var", stmt.name.lexeme)

            return self._parenthesize("var", stmt.name.lexeme, self.print_expr(stmt.initializer))

        if isinstance(stmt, LoxBlockStmt):
            return self._parenthesize("block", *(self.print_stmt(s) for s in stmt.statements))

        if isinstance(stmt, LoxIfStmt):
            parts = [self.print_expr(stmt.condition), self.print_stmt(stmt.then_branch)]
            if stmt.else_branch is not None:
                parts.append(self.print_stmt(stmt.else_branch))

            return self._parenthesize("if", *parts)

        if isinstance(stmt, LoxWhileStmt):
            return self._parenthesize("while", self.print_expr(stmt.condition), self.print_stmt(stmt.body))

        if isinstance(stmt, LoxFunctionStmt):
            params = "(" + " ".join(param.lexeme for param in stmt.params) + ")"
            body = (self.print_stmt(s) for s in stmt.body)
            return self._parenthesize("fun", stmt.name.lexeme, params, *body)

        if isinstance(stmt, LoxReturnStmt):
            if stmt.value is None:
                return "(return)"

            return self._parenthesize("return", self.print_expr(stmt.value))

        raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def print_expr(self, expr: LoxExpr) -> str:
        """Print a single expression."""
        if isinstance(expr, LoxLiteralExpr):
            if isinstance(expr.value, LoxString):
                return f'"{expr.value.value}"'

            return expr.value.describe()

        if isinstance(expr, LoxGroupingExpr):
            return self._parenthesize("group", self.print_expr(expr.expression))

        if isinstance(expr, LoxUnaryExpr):
            return self._parenthesize(expr.operator.lexeme, self.print_expr(expr.right))

        if isinstance(expr, (LoxBinaryExpr, LoxLogicalExpr)):
            return self._parenthesize(expr.operator.lexeme, self.print_expr(expr.left), self.print_expr(expr.right))

        if isinstance(expr, LoxVariableExpr):
            return expr.name.lexeme

        if isinstance(expr, LoxAssignExpr):
            return self._parenthesize("=", expr.name.lexeme, self.print_expr(expr.value))

        if isinstance(expr, LoxCallExpr):
            return self._parenthesize("call", self.print_expr(expr.callee), *(self.print_expr(a) for a in expr.arguments))

        raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    @staticmethod
    def _parenthesize(name: str, *parts: str) -> str:
        return "(" + " ".join((name,) + parts) + ")"
