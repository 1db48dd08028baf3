"""Error sink collecting compile-time and runtime diagnostics for Lox programs."""

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, TextIO

from lox.lox_error import LoxError, LoxRuntimeError
from lox.lox_token import LoxToken, LoxTokenType


class LoxDiagnosticKind(Enum):
    """Phase that produced a diagnostic."""
    SCAN = "scan"
    PARSE = "parse"
    RESOLVE = "resolve"
    RUNTIME = "runtime"


@dataclass(frozen=True)
class LoxDiagnostic:
    """A single reported problem."""
    kind: LoxDiagnosticKind
    line: int
    message: str
    where: str = ""

    def format(self) -> str:
        """Render the diagnostic in the form written to the error stream."""
        if self.kind == LoxDiagnosticKind.RUNTIME:
            return f"{self.message}\n[line {self.line}]"

        return f"[line {self.line}] Error{self.where}: {self.message}"


class LoxErrorReporter:
    """
    Receives errors from the scanner, parser, resolver and interpreter.

    Compile-time reports set `had_error`; runtime reports set `had_runtime_error`.
    Neither stops the reporting phase: callers check the flags between phases.
    """

    def __init__(self, stream: TextIO | None = None, detailed: bool = False) -> None:
        """
        Initialize the reporter.

        Args:
            stream: Where formatted reports are written (stderr if None)
            detailed: Also write source context and suggestions after each report
        """
        self._stream = stream if stream is not None else sys.stderr
        self._detailed = detailed
        self._logger = logging.getLogger("LoxErrorReporter")
        self._source = ""
        self.diagnostics: List[LoxDiagnostic] = []
        self.had_error = False
        self.had_runtime_error = False

    def reset(self, source: str = "") -> None:
        """Clear the error flags and recorded diagnostics before a new run."""
        self._source = source
        self.diagnostics = []
        self.had_error = False
        self.had_runtime_error = False

    def scan_error(self, line: int, message: str) -> None:
        """Report a problem found while scanning."""
        self._report(LoxDiagnostic(LoxDiagnosticKind.SCAN, line, message))

    def parse_error(self, token: LoxToken, message: str) -> None:
        """Report a syntax error at a token."""
        self._report(LoxDiagnostic(LoxDiagnosticKind.PARSE, token.line, message, self._where(token)))

    def resolve_error(self, token: LoxToken, message: str) -> None:
        """Report a static scoping error at a token."""
        self._report(LoxDiagnostic(LoxDiagnosticKind.RESOLVE, token.line, message, self._where(token)))

    def runtime_error(self, error: LoxRuntimeError) -> None:
        """Report a runtime error that aborted execution."""
        diagnostic = LoxDiagnostic(LoxDiagnosticKind.RUNTIME, error.token.line, error.message)
        self._report(diagnostic, error)

    @staticmethod
    def _where(token: LoxToken) -> str:
        if token.type == LoxTokenType.EOF:
            return " at end"

        return f" at '{token.lexeme}'"

    def _report(self, diagnostic: LoxDiagnostic, error: LoxError | None = None) -> None:
        self.diagnostics.append(diagnostic)
        if diagnostic.kind == LoxDiagnosticKind.RUNTIME:
            self.had_runtime_error = True

        else:
            self.had_error = True

        text = diagnostic.format()
        self._logger.info("%s error: %s", diagnostic.kind.value, text.replace("\n", " "))
        self._stream.write(text + "\n")

        if not self._detailed:
            return

        if error is None:
            error = LoxError(diagnostic.message, diagnostic.line)

        if self._source:
            context = error.format_with_context(self._source)
            if context:
                self._stream.write(context + "\n")

        if error.received:
            self._stream.write(f"Received: {error.received}\n")

        if error.suggestion:
            self._stream.write(f"Suggestion: {error.suggestion}\n")
