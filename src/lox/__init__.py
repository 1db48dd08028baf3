"""Lox tree-walking interpreter package."""

# Main API
from lox.lox import Lox, LoxExitStatus
from lox.lox_config import LoxConfig

# Exceptions and error reporting
from lox.lox_error import LoxError, LoxParseError, LoxRuntimeError
from lox.lox_error_reporter import LoxDiagnostic, LoxDiagnosticKind, LoxErrorReporter

# Value types
from lox.lox_value import (
    LoxValue, LoxNil, LoxBoolean, LoxNumber, LoxString, LoxCallable, LoxNativeFunction,
    LOX_NIL, LOX_TRUE, LOX_FALSE
)
from lox.lox_function import LoxFunction, LoxReturn

# Lower-level components (for advanced usage)
from lox.lox_token import LoxToken, LoxTokenType
from lox.lox_scanner import LoxScanner
from lox.lox_parser import LoxParser
from lox.lox_resolver import LoxResolver
from lox.lox_interpreter import LoxInterpreter
from lox.lox_environment import LoxEnvironment
from lox.lox_ast_printer import LoxASTPrinter


__all__ = [
    # Main API
    "Lox", "LoxExitStatus", "LoxConfig",

    # Exceptions and error reporting
    "LoxError", "LoxParseError", "LoxRuntimeError",
    "LoxDiagnostic", "LoxDiagnosticKind", "LoxErrorReporter",

    # Value types
    "LoxValue", "LoxNil", "LoxBoolean", "LoxNumber", "LoxString", "LoxCallable", "LoxNativeFunction",
    "LOX_NIL", "LOX_TRUE", "LOX_FALSE", "LoxFunction", "LoxReturn",

    # Lower-level components
    "LoxToken", "LoxTokenType", "LoxScanner", "LoxParser", "LoxResolver", "LoxInterpreter",
    "LoxEnvironment", "LoxASTPrinter"
]
