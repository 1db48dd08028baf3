"""Environment management for Lox variable scoping."""

import difflib
from typing import Dict, List

from lox.lox_error import LoxRuntimeError
from lox.lox_token import LoxToken
from lox.lox_value import LoxValue


class LoxEnvironment:
    """
    One lexical scope: a mutable name-to-value map plus a link to the enclosing scope.

    Environments form a chain ending at the global scope. Closures keep a
    reference to the environment they were declared in, so several functions
    may share (and mutate) the same environment.
    """

    def __init__(self, enclosing: 'LoxEnvironment | None' = None, name: str = "block") -> None:
        """
        Initialize environment.

        Args:
            enclosing: Scope that contains this one, None for the global scope
            name: Label used in debugging output
        """
        self.values: Dict[str, LoxValue] = {}
        self.enclosing = enclosing
        self.name = name

    def define(self, name: str, value: LoxValue) -> None:
        """
        Bind a name in this scope, replacing any existing binding.

        Args:
            name: Variable name
            value: Value to bind
        """
        self.values[name] = value

    def get(self, name: LoxToken) -> LoxValue:
        """
        Look up a variable in this scope or any enclosing one.

        Args:
            name: Identifier token being read

        Returns:
            The bound value

        Raises:
            LoxRuntimeError: If no scope in the chain binds the name
        """
        if name.lexeme in self.values:
            return self.values[name.lexeme]

        if self.enclosing is not None:
            return self.enclosing.get(name)

        raise self._undefined(name)

    def assign(self, name: LoxToken, value: LoxValue) -> None:
        """
        Rebind an existing variable in the nearest scope that defines it.

        Args:
            name: Identifier token being assigned
            value: New value

        Raises:
            LoxRuntimeError: If no scope in the chain binds the name
        """
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return

        if self.enclosing is not None:
            self.enclosing.assign(name, value)
            return

        raise self._undefined(name)

    def ancestor(self, distance: int) -> 'LoxEnvironment':
        """Return the environment `distance` links up the chain."""
        environment = self
        for _ in range(distance):
            if environment.enclosing is None:
                raise IndexError(f"Scope distance {distance} exceeds the environment chain")

            environment = environment.enclosing

        return environment

    def get_at(self, distance: int, name: str) -> LoxValue:
        """Read a variable the resolver located `distance` scopes away."""
        return self.ancestor(distance).values[name]

    def assign_at(self, distance: int, name: LoxToken, value: LoxValue) -> None:
        """Write a variable the resolver located `distance` scopes away."""
        self.ancestor(distance).values[name.lexeme] = value

    def get_available_bindings(self) -> List[str]:
        """Get all binding names visible from this environment."""
        available = list(self.values.keys())

        if self.enclosing is not None:
            available.extend(self.enclosing.get_available_bindings())

        return available

    def _undefined(self, name: LoxToken) -> LoxRuntimeError:
        similar = difflib.get_close_matches(name.lexeme, self.get_available_bindings(), n=3, cutoff=0.6)
        suggestion = None
        if similar:
            suggestion = f"Did you mean: {', '.join(similar)}?"

        return LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.", suggestion)

    def __repr__(self) -> str:
        """String representation for debugging."""
        parent_info = f" (parent: {self.enclosing.name})" if self.enclosing else ""
        return f"LoxEnvironment({self.name}: {list(self.values.keys())}{parent_info})"
