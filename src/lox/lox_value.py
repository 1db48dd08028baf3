"""Lox value hierarchy - the dynamically typed runtime values of the language."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List

if TYPE_CHECKING:
    from lox.lox_interpreter import LoxInterpreter


class LoxValue(ABC):
    """Abstract base class for all Lox runtime values."""

    @abstractmethod
    def type_name(self) -> str:
        """Return Lox type name for error messages."""

    @abstractmethod
    def describe(self) -> str:
        """Return the text `print` writes for this value."""


@dataclass(frozen=True)
class LoxNil(LoxValue):
    """The single nil value."""

    def type_name(self) -> str:
        return "nil"

    def describe(self) -> str:
        return "nil"


@dataclass(frozen=True)
class LoxBoolean(LoxValue):
    """Represents true and false."""
    value: bool

    def type_name(self) -> str:
        return "boolean"

    def describe(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class LoxNumber(LoxValue):
    """Represents numbers; every Lox number is a 64-bit float."""
    value: float

    def type_name(self) -> str:
        return "number"

    def describe(self) -> str:
        if math.isnan(self.value):
            return "NaN"

        if math.isinf(self.value):
            return "Infinity" if self.value > 0 else "-Infinity"

        # Whole numbers print in positional form with no fraction
        if self.value.is_integer():
            if self.value == 0 and math.copysign(1.0, self.value) < 0:
                return "-0"

            return str(int(self.value))

        return repr(self.value)


@dataclass(frozen=True)
class LoxString(LoxValue):
    """Represents string values."""
    value: str

    def type_name(self) -> str:
        return "string"

    def describe(self) -> str:
        return self.value


class LoxCallable(LoxValue):
    """
    Base class for values that can be called with `f(...)`.

    Callables compare by identity.
    """

    @abstractmethod
    def arity(self) -> int:
        """Number of arguments the callable requires."""

    @abstractmethod
    def call(self, interpreter: 'LoxInterpreter', arguments: List[LoxValue]) -> LoxValue:
        """Invoke the callable with already-evaluated arguments."""

    def type_name(self) -> str:
        return "function"


class LoxNativeFunction(LoxCallable):
    """A function implemented in Python and exposed to Lox programs."""

    def __init__(self, name: str, arity: int, native_impl: Callable[[List[LoxValue]], LoxValue]):
        """
        Initialize a native function.

        Args:
            name: Global name the function is bound to
            arity: Number of arguments it takes
            native_impl: Python callable receiving the argument list
        """
        self.name = name
        self._arity = arity
        self.native_impl = native_impl

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter: 'LoxInterpreter', arguments: List[LoxValue]) -> LoxValue:
        return self.native_impl(arguments)

    def describe(self) -> str:
        return "<native fn>"

    def __repr__(self) -> str:
        return f"LoxNativeFunction({self.name!r}, arity={self._arity})"


LOX_NIL = LoxNil()
LOX_TRUE = LoxBoolean(True)
LOX_FALSE = LoxBoolean(False)
