"""Exception classes for Lox with source line information."""

from typing import List, Tuple

from lox.lox_token import LoxToken


class LoxError(Exception):
    """Base exception for Lox errors, carrying the source line where known."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        suggestion: str | None = None,
        received: str | None = None
    ):
        """
        Initialize error.

        Args:
            message: Core error description
            line: Source line (1-indexed) the error refers to
            suggestion: Optional hint for fixing the error
            received: Optional description of the value that caused the error
        """
        self.message = message
        self.line = line
        self.suggestion = suggestion
        self.received = received

        super().__init__(message)

    def _get_context_lines(
        self,
        source: str,
        line_num: int,
        before: int = 2,
        after: int = 1
    ) -> List[Tuple[int, str]]:
        """
        Get lines of context around a specific line.

        Args:
            source: The source code string
            line_num: Line number (1-indexed)
            before: Number of lines before to include
            after: Number of lines after to include

        Returns:
            List of (line_number, line_content) tuples
        """
        lines = source.split('\n')
        start_line = max(1, line_num - before)
        end_line = min(len(lines), line_num + after)

        return [(i, lines[i - 1]) for i in range(start_line, end_line + 1)]

    def format_with_context(self, source: str) -> str:
        """
        Format the source lines around the error with a marker on the error line.

        Args:
            source: The program text the error was found in

        Returns:
            Multi-line context block, or an empty string if the line is unknown
        """
        if self.line is None:
            return ""

        context_lines = self._get_context_lines(source, self.line)
        if not context_lines:
            return ""

        line_num_width = len(str(context_lines[-1][0]))

        result_lines = []
        for ln, content in context_lines:
            indicator = "→" if ln == self.line else " "
            result_lines.append(f"  {indicator} {ln:>{line_num_width}}: {content}")

        return "\n".join(result_lines)


class LoxParseError(LoxError):
    """
    Raised inside the parser to unwind to the nearest statement boundary.

    The parser reports the problem before raising, so this never escapes `parse()`.
    """

    def __init__(self, token: LoxToken, message: str):
        self.token = token
        super().__init__(message, token.line)


class LoxRuntimeError(LoxError):
    """Evaluation errors, tagged with the token whose operation failed."""

    def __init__(
        self,
        token: LoxToken,
        message: str,
        suggestion: str | None = None,
        received: str | None = None
    ):
        self.token = token
        super().__init__(message, token.line, suggestion, received)
