"""Tree-walking evaluator for resolved Lox ASTs."""

import logging
import math
import sys
from typing import Dict, Sequence, TextIO

from lox.lox_ast import (
    LoxExpr, LoxLiteralExpr, LoxGroupingExpr, LoxUnaryExpr, LoxBinaryExpr, LoxLogicalExpr,
    LoxVariableExpr, LoxAssignExpr, LoxCallExpr,
    LoxStmt, LoxExpressionStmt, LoxPrintStmt, LoxVarStmt, LoxBlockStmt, LoxIfStmt,
    LoxWhileStmt, LoxFunctionStmt, LoxReturnStmt
)
from lox.lox_builtins import create_builtins
from lox.lox_environment import LoxEnvironment
from lox.lox_error import LoxRuntimeError
from lox.lox_error_reporter import LoxErrorReporter
from lox.lox_function import LoxFunction, LoxReturn
from lox.lox_token import LoxToken, LoxTokenType
from lox.lox_value import (
    LoxValue, LoxBoolean, LoxNumber, LoxString, LoxCallable, LoxNil, LOX_FALSE, LOX_NIL, LOX_TRUE
)


class LoxInterpreter:
    """
    Executes Lox statements against a chain of environments.

    The resolver must have been run over every statement before it is executed:
    variable references it recorded in `locals` are read from the scope that
    many links up the chain, and everything else is looked up in `globals`.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        error_reporter: LoxErrorReporter | None = None,
        max_call_depth: int = 255,
        native_functions: bool = True
    ) -> None:
        """
        Initialize interpreter.

        Args:
            output: Stream `print` writes to (stdout if None)
            error_reporter: Sink for runtime errors (a stderr reporter if None)
            max_call_depth: Maximum nesting of Lox function calls
            native_functions: Define the native functions in the global scope
        """
        self._output = output if output is not None else sys.stdout
        self._error_reporter = error_reporter if error_reporter is not None else LoxErrorReporter()
        self._logger = logging.getLogger("LoxInterpreter")
        self.max_call_depth = max_call_depth
        self._call_depth = 0

        self.globals = LoxEnvironment(name="global")
        self.environment = self.globals

        # Scope distances for local variable references, keyed by expression node_id.
        # Entries are never dropped: functions from earlier runs still evaluate their nodes.
        self.locals: Dict[int, int] = {}

        if native_functions:
            for name, native in create_builtins().items():
                self.globals.define(name, native)

    def interpret(self, statements: Sequence[LoxStmt]) -> None:
        """
        Execute statements in order, stopping at the first runtime error.

        Runtime errors are sent to the error reporter rather than raised.

        Args:
            statements: Resolved program statements
        """
        self._logger.debug("interpreting %d statements", len(statements))
        try:
            for statement in statements:
                self.execute(statement)

        except LoxRuntimeError as e:
            self._error_reporter.runtime_error(e)

    def resolve(self, expr: LoxExpr, depth: int) -> None:
        """Record that `expr` refers to a variable `depth` scopes out from its use."""
        self.locals[expr.node_id] = depth

    # Statements

    def execute(self, stmt: LoxStmt) -> None:
        """Execute a single statement."""
        if isinstance(stmt, LoxExpressionStmt):
            self.evaluate(stmt.expression)
            return

        if isinstance(stmt, LoxPrintStmt):
            value = self.evaluate(stmt.expression)
            self._output.write(self.stringify(value) + "\n")
            return

        if isinstance(stmt, LoxVarStmt):
            value = LOX_NIL
            if stmt.initializer is not None:
                value = self.evaluate(stmt.initializer)

            self.environment.define(stmt.name.lexeme, value)
            return

        if isinstance(stmt, LoxBlockStmt):
            self.execute_block(stmt.statements, LoxEnvironment(self.environment))
            return

        if isinstance(stmt, LoxIfStmt):
            if self.is_truthy(self.evaluate(stmt.condition)):
                self.execute(stmt.then_branch)

            elif stmt.else_branch is not None:
                self.execute(stmt.else_branch)

            return

        if isinstance(stmt, LoxWhileStmt):
            while self.is_truthy(self.evaluate(stmt.condition)):
                self.execute(stmt.body)

            return

        if isinstance(stmt, LoxFunctionStmt):
            function = LoxFunction(stmt, self.environment)
            self.environment.define(stmt.name.lexeme, function)
            return

        if isinstance(stmt, LoxReturnStmt):
            return_value: LoxValue = LOX_NIL
            if stmt.value is not None:
                return_value = self.evaluate(stmt.value)

            raise LoxReturn(return_value)

        raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def execute_block(self, statements: Sequence[LoxStmt], environment: LoxEnvironment) -> None:
        """
        Execute statements in the given environment, restoring the current one afterwards.

        The previous environment is restored however the block exits: normally,
        through a runtime error, or through a return signal.
        """
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                self.execute(statement)

        finally:
            self.environment = previous

    # Expressions

    def evaluate(self, expr: LoxExpr) -> LoxValue:
        """Evaluate an expression to a value."""
        if isinstance(expr, LoxLiteralExpr):
            return expr.value

        if isinstance(expr, LoxGroupingExpr):
            return self.evaluate(expr.expression)

        if isinstance(expr, LoxVariableExpr):
            return self._look_up_variable(expr.name, expr)

        if isinstance(expr, LoxAssignExpr):
            value = self.evaluate(expr.value)
            distance = self.locals.get(expr.node_id)
            if distance is not None:
                self.environment.assign_at(distance, expr.name, value)

            else:
                self.globals.assign(expr.name, value)

            return value

        if isinstance(expr, LoxUnaryExpr):
            return self._evaluate_unary(expr)

        if isinstance(expr, LoxBinaryExpr):
            return self._evaluate_binary(expr)

        if isinstance(expr, LoxLogicalExpr):
            left = self.evaluate(expr.left)

            if expr.operator.type == LoxTokenType.OR:
                if self.is_truthy(left):
                    return left

            elif not self.is_truthy(left):
                return left

            return self.evaluate(expr.right)

        if isinstance(expr, LoxCallExpr):
            return self._evaluate_call(expr)

        raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def _look_up_variable(self, name: LoxToken, expr: LoxExpr) -> LoxValue:
        distance = self.locals.get(expr.node_id)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)

        return self.globals.get(name)

    def _evaluate_unary(self, expr: LoxUnaryExpr) -> LoxValue:
        right = self.evaluate(expr.right)

        if expr.operator.type == LoxTokenType.MINUS:
            operand = self._check_number_operand(expr.operator, right)
            return LoxNumber(-operand)

        # BANG is the only other unary operator
        return LOX_FALSE if self.is_truthy(right) else LOX_TRUE

    def _evaluate_binary(self, expr: LoxBinaryExpr) -> LoxValue:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator
        op_type = operator.type

        if op_type == LoxTokenType.EQUAL_EQUAL:
            return LoxBoolean(self.is_equal(left, right))

        if op_type == LoxTokenType.BANG_EQUAL:
            return LoxBoolean(not self.is_equal(left, right))

        if op_type == LoxTokenType.PLUS:
            if isinstance(left, LoxNumber) and isinstance(right, LoxNumber):
                return LoxNumber(left.value + right.value)

            if isinstance(left, LoxString) and isinstance(right, LoxString):
                return LoxString(left.value + right.value)

            raise LoxRuntimeError(
                operator,
                "Operands must be two numbers or two strings.",
                received=f"{left.type_name()} and {right.type_name()}"
            )

        a, b = self._check_number_operands(operator, left, right)

        if op_type == LoxTokenType.MINUS:
            return LoxNumber(a - b)

        if op_type == LoxTokenType.STAR:
            return LoxNumber(a * b)

        if op_type == LoxTokenType.SLASH:
            return LoxNumber(self._divide(a, b))

        if op_type == LoxTokenType.GREATER:
            return LoxBoolean(a > b)

        if op_type == LoxTokenType.GREATER_EQUAL:
            return LoxBoolean(a >= b)

        if op_type == LoxTokenType.LESS:
            return LoxBoolean(a < b)

        if op_type == LoxTokenType.LESS_EQUAL:
            return LoxBoolean(a <= b)

        raise TypeError(f"Unknown binary operator: {operator.lexeme}")

    @staticmethod
    def _divide(a: float, b: float) -> float:
        """Divide with IEEE-754 semantics for a zero divisor."""
        if b != 0:
            return a / b

        if a == 0 or math.isnan(a):
            return math.nan

        return math.copysign(math.inf, a) * math.copysign(1.0, b)

    def _evaluate_call(self, expr: LoxCallExpr) -> LoxValue:
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(
                expr.paren, "Can only call functions and classes.", received=callee.type_name()
            )

        if len(arguments) != callee.arity():
            raise LoxRuntimeError(
                expr.paren, f"Expected {callee.arity()} arguments but got {len(arguments)}."
            )

        if self._call_depth >= self.max_call_depth:
            raise LoxRuntimeError(expr.paren, "Stack overflow.")

        self._call_depth += 1
        try:
            return callee.call(self, arguments)

        except RecursionError as e:
            raise LoxRuntimeError(expr.paren, "Stack overflow.") from e

        finally:
            self._call_depth -= 1

    def _check_number_operand(self, operator: LoxToken, operand: LoxValue) -> float:
        if isinstance(operand, LoxNumber):
            return operand.value

        raise LoxRuntimeError(operator, "Operand must be a number.", received=operand.type_name())

    def _check_number_operands(self, operator: LoxToken, left: LoxValue, right: LoxValue) -> tuple[float, float]:
        if isinstance(left, LoxNumber) and isinstance(right, LoxNumber):
            return left.value, right.value

        raise LoxRuntimeError(
            operator, "Operands must be numbers.", received=f"{left.type_name()} and {right.type_name()}"
        )

    # Value semantics

    @staticmethod
    def is_truthy(value: LoxValue) -> bool:
        """Only nil and false are falsy."""
        if isinstance(value, LoxNil):
            return False

        if isinstance(value, LoxBoolean):
            return value.value

        return True

    @staticmethod
    def is_equal(left: LoxValue, right: LoxValue) -> bool:
        """Same kind and same contents; callables are equal only to themselves."""
        if isinstance(left, LoxNumber) and isinstance(right, LoxNumber):
            # IEEE comparison, so NaN is not equal to itself
            return left.value == right.value

        return left == right

    @staticmethod
    def stringify(value: LoxValue) -> str:
        """Format a value the way `print` shows it."""
        return value.describe()

