"""Tests for Lox runtime values and native functions."""

import math

import pytest

from lox import (
    LoxBoolean, LoxCallable, LoxInterpreter, LoxNativeFunction, LoxNil, LoxNumber, LoxString,
    LOX_FALSE, LOX_NIL, LOX_TRUE
)
from lox.lox_builtins import create_builtins


class TestLoxValues:
    """Test the value classes directly."""

    @pytest.mark.parametrize("value,type_name", [
        (LOX_NIL, "nil"),
        (LOX_TRUE, "boolean"),
        (LoxNumber(1.5), "number"),
        (LoxString("s"), "string"),
    ])
    def test_type_names(self, value, type_name):
        """Test the type names used in error reports."""
        assert value.type_name() == type_name

    @pytest.mark.parametrize("number,text", [
        (0.0, "0"),
        (-0.0, "-0"),
        (3.0, "3"),
        (3.25, "3.25"),
        (-12.0, "-12"),
        (1e-05, "1e-05"),
        (1e17, "100000000000000000"),
        (1e21, "1000000000000000000000"),
        (-1e21, "-1000000000000000000000"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
        (math.nan, "NaN"),
    ])
    def test_number_describe(self, number, text):
        """Test the printed form of numbers."""
        assert LoxNumber(number).describe() == text

    def test_structural_equality(self):
        """Test that values of the same kind compare by contents."""
        assert LoxNil() == LOX_NIL
        assert LoxBoolean(False) == LOX_FALSE
        assert LoxNumber(2.0) == LoxNumber(2.0)
        assert LoxString("a") == LoxString("a")
        assert LoxNumber(1.0) != LoxBoolean(True)
        assert LoxString("1") != LoxNumber(1.0)

    def test_interpreter_equality_rules(self):
        """Test the equality used by '==' and '!='."""
        assert LoxInterpreter.is_equal(LOX_NIL, LOX_NIL)
        assert not LoxInterpreter.is_equal(LOX_NIL, LOX_FALSE)
        assert not LoxInterpreter.is_equal(LoxNumber(math.nan), LoxNumber(math.nan))
        assert LoxInterpreter.is_equal(LoxNumber(0.0), LoxNumber(-0.0))

    def test_truthiness_rules(self):
        """Test the truthiness used by conditions and '!'."""
        assert not LoxInterpreter.is_truthy(LOX_NIL)
        assert not LoxInterpreter.is_truthy(LOX_FALSE)
        assert LoxInterpreter.is_truthy(LOX_TRUE)
        assert LoxInterpreter.is_truthy(LoxNumber(0.0))
        assert LoxInterpreter.is_truthy(LoxString(""))


class TestLoxNativeFunctions:
    """Test native functions."""

    def test_builtins_contains_clock(self):
        """Test the set of natives."""
        builtins = create_builtins()
        assert list(builtins) == ["clock"]
        clock = builtins["clock"]
        assert isinstance(clock, LoxCallable)
        assert clock.arity() == 0
        assert clock.describe() == "<native fn>"
        assert clock.type_name() == "function"

    def test_clock_is_wall_time(self, monkeypatch):
        """Test that clock() reports seconds from the system clock."""
        monkeypatch.setattr("lox.lox_builtins.time.time", lambda: 1234.5)
        result = create_builtins()["clock"].call(LoxInterpreter(), [])
        assert result == LoxNumber(1234.5)

    def test_custom_native_function(self):
        """Test wrapping a Python callable as a Lox function."""
        double = LoxNativeFunction("double", 1, lambda args: LoxNumber(args[0].value * 2))
        assert double.call(LoxInterpreter(), [LoxNumber(4.0)]) == LoxNumber(8.0)
        assert repr(double) == "LoxNativeFunction('double', arity=1)"

    def test_native_defined_in_globals(self):
        """Test that the interpreter installs natives when asked."""
        assert "clock" in LoxInterpreter().globals.values
        assert "clock" not in LoxInterpreter(native_functions=False).globals.values


class TestLoxFunctionValues:
    """Test user-defined function values."""

    def test_function_value_attributes(self, lox, helpers):
        """Test the function value created by a declaration."""
        helpers.assert_prints(lox, "fun add(a, b) { return a + b; }", [])
        add = lox.interpreter.globals.values["add"]
        assert add.arity() == 2
        assert add.describe() == "<fn add>"
        assert add.type_name() == "function"
        assert add.closure is lox.interpreter.globals
        assert not add.is_initializer
        assert repr(add) == "LoxFunction('add', arity=2)"
