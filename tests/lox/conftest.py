"""Shared fixtures and utilities for Lox tests."""

import io
from typing import List, Tuple

import pytest

from lox import Lox, LoxConfig, LoxErrorReporter, LoxExitStatus, LoxParser, LoxScanner
from lox.lox_ast import LoxStmt
from lox.lox_token import LoxToken


@pytest.fixture
def lox():
    """Create a fresh Lox instance writing to in-memory streams."""
    return Lox(output=io.StringIO(), error_output=io.StringIO())


@pytest.fixture
def lox_factory():
    """Factory for Lox instances with custom configuration."""
    def _create_lox(**settings) -> Lox:
        return Lox(output=io.StringIO(), error_output=io.StringIO(), config=LoxConfig(**settings))
    return _create_lox


class LoxTestHelpers:
    """Helper utilities for Lox testing."""

    @staticmethod
    def run(lox: Lox, source: str) -> Tuple[LoxExitStatus, List[str], List[str]]:
        """Run source and return the status plus the output and error lines it produced."""
        for stream in (lox.output, lox.error_output):
            stream.seek(0)
            stream.truncate()

        status = lox.run(source)
        return status, lox.output.getvalue().splitlines(), lox.error_output.getvalue().splitlines()

    @staticmethod
    def assert_prints(lox: Lox, source: str, expected: List[str]) -> None:
        """Assert that source runs cleanly and prints exactly the expected lines."""
        status, output, errors = LoxTestHelpers.run(lox, source)
        assert errors == [], f"Unexpected errors: {errors}"
        assert status == LoxExitStatus.OK
        assert output == expected, f"Expected output {expected!r}, got {output!r}"

    @staticmethod
    def assert_runtime_error(lox: Lox, source: str, message: str, line: int) -> List[str]:
        """Assert that source fails at runtime with the given message; return what it printed first."""
        status, output, errors = LoxTestHelpers.run(lox, source)
        assert status == LoxExitStatus.RUNTIME_ERROR
        assert errors == [message, f"[line {line}]"], f"Unexpected errors: {errors}"
        return output

    @staticmethod
    def assert_compile_error(lox: Lox, source: str, expected: List[str]) -> None:
        """Assert that source is rejected before running, with exactly the expected reports."""
        status, output, errors = LoxTestHelpers.run(lox, source)
        assert status == LoxExitStatus.COMPILE_ERROR
        assert output == [], "Nothing should run when compile errors are reported"
        assert errors == expected, f"Expected errors {expected!r}, got {errors!r}"

    @staticmethod
    def scan(source: str) -> Tuple[List[LoxToken], LoxErrorReporter]:
        """Scan source with a reporter writing to memory."""
        reporter = LoxErrorReporter(io.StringIO())
        return LoxScanner(reporter).scan(source), reporter

    @staticmethod
    def parse(source: str) -> Tuple[List[LoxStmt], LoxErrorReporter]:
        """Scan and parse source with a reporter writing to memory."""
        tokens, reporter = LoxTestHelpers.scan(source)
        return LoxParser(tokens, reporter).parse(), reporter


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return LoxTestHelpers
