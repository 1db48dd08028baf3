"""User-defined Lox functions and the return signal that ends a call."""

from typing import TYPE_CHECKING, List

from lox.lox_ast import LoxFunctionStmt
from lox.lox_environment import LoxEnvironment
from lox.lox_value import LoxCallable, LoxValue, LOX_NIL

if TYPE_CHECKING:
    from lox.lox_interpreter import LoxInterpreter


class LoxReturn(Exception):
    """
    Carries a `return` value out of nested statements to the enclosing call.

    This is control flow, not an error: only `LoxFunction.call` catches it.
    """

    def __init__(self, value: LoxValue):
        super().__init__()
        self.value = value


class LoxFunction(LoxCallable):
    """
    A function value: its declaration plus the environment it closes over.

    This is a first-class value that can be stored in variables, passed as an
    argument and returned from other functions.
    """

    def __init__(self, declaration: LoxFunctionStmt, closure: LoxEnvironment, is_initializer: bool = False):
        """
        Initialize a function object.

        Args:
            declaration: The `fun` declaration node
            closure: Environment that was current when the declaration executed
            is_initializer: Reserved for class initializers; always False
        """
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: 'LoxInterpreter', arguments: List[LoxValue]) -> LoxValue:
        environment = LoxEnvironment(self.closure, name=self.name)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        try:
            interpreter.execute_block(self.declaration.body, environment)

        except LoxReturn as return_value:
            return return_value.value

        return LOX_NIL

    def describe(self) -> str:
        return f"<fn {self.name}>"

    def __repr__(self) -> str:
        return f"LoxFunction({self.name!r}, arity={self.arity()})"
