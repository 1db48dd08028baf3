"""Main Lox class running source text through the whole interpreter pipeline."""

import logging
import sys
from enum import IntEnum
from typing import List, TextIO

from lox.lox_ast import LoxStmt
from lox.lox_config import LoxConfig
from lox.lox_error_reporter import LoxErrorReporter
from lox.lox_interpreter import LoxInterpreter
from lox.lox_parser import LoxParser
from lox.lox_resolver import LoxResolver
from lox.lox_scanner import LoxScanner
from lox.lox_token import LoxToken


class LoxExitStatus(IntEnum):
    """Process exit statuses, following the BSD sysexits conventions."""
    OK = 0
    USAGE = 64
    COMPILE_ERROR = 65
    RUNTIME_ERROR = 70
    IO_ERROR = 74


class Lox:
    """
    Lox interpreter: scan, parse, resolve and execute programs.

    A single instance keeps its global environment between `run` calls, so a
    REPL can feed it one line at a time.
    """

    # Python frames used by one Lox call nested inside a few statements
    FRAMES_PER_CALL = 16
    MAX_RECURSION_LIMIT = 6000

    def __init__(
        self,
        output: TextIO | None = None,
        error_output: TextIO | None = None,
        config: LoxConfig | None = None
    ):
        """
        Initialize Lox.

        Args:
            output: Stream for `print` output (stdout if None)
            error_output: Stream for error reports (stderr if None)
            config: Interpreter settings (defaults if None)
        """
        self.config = config if config is not None else LoxConfig()
        self.output = output if output is not None else sys.stdout
        self.error_output = error_output if error_output is not None else sys.stderr
        self._logger = logging.getLogger("Lox")
        self._ensure_recursion_limit(self.config.max_call_depth)

        self.error_reporter = LoxErrorReporter(self.error_output, detailed=self.config.detailed_errors)
        self.interpreter = LoxInterpreter(
            output=self.output,
            error_reporter=self.error_reporter,
            max_call_depth=self.config.max_call_depth,
            native_functions=self.config.native_functions
        )

    def _ensure_recursion_limit(self, max_call_depth: int) -> None:
        """Raise the host recursion limit so that max_call_depth nested calls fit."""
        required = min(max_call_depth * self.FRAMES_PER_CALL + 1000, self.MAX_RECURSION_LIMIT)
        if sys.getrecursionlimit() < required:
            self._logger.debug("raising recursion limit to %d", required)
            sys.setrecursionlimit(required)

    def tokens(self, source: str) -> List[LoxToken]:
        """Scan source text, reporting any scan errors."""
        self.error_reporter.reset(source)
        return LoxScanner(self.error_reporter).scan(source)

    def parse(self, source: str) -> List[LoxStmt]:
        """Scan and parse source text, reporting any compile-time errors."""
        tokens = self.tokens(source)
        return LoxParser(tokens, self.error_reporter).parse()

    def run(self, source: str) -> LoxExitStatus:
        """
        Run a complete program.

        Execution only starts if scanning, parsing and resolution reported no
        errors; all errors go to the error stream.

        Args:
            source: Program text

        Returns:
            OK, COMPILE_ERROR or RUNTIME_ERROR
        """
        statements = self.parse(source)
        if self.error_reporter.had_error:
            self._logger.info("not running: compile errors reported")
            return LoxExitStatus.COMPILE_ERROR

        LoxResolver(self.interpreter, self.error_reporter).resolve(statements)
        if self.error_reporter.had_error:
            self._logger.info("not running: resolution errors reported")
            return LoxExitStatus.COMPILE_ERROR

        self.interpreter.interpret(statements)
        if self.error_reporter.had_runtime_error:
            return LoxExitStatus.RUNTIME_ERROR

        return LoxExitStatus.OK

    def run_file(self, path: str) -> LoxExitStatus:
        """
        Read a UTF-8 source file and run it.

        Args:
            path: Path to the script

        Returns:
            Exit status of the run, or IO_ERROR if the file cannot be read
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                source = f.read()

        except OSError as e:
            self._logger.info("cannot read %s: %s", path, e)
            self.error_output.write(f"Could not read file '{path}': {e.strerror or e}\n")
            return LoxExitStatus.IO_ERROR

        self._logger.debug("running %s", path)
        return self.run(source)
