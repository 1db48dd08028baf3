"""Scanner turning Lox source text into tokens."""

import logging
from typing import List

from lox.lox_error_reporter import LoxErrorReporter
from lox.lox_token import KEYWORDS, LoxToken, LoxTokenType


class LoxScanner:
    """
    Maximal-munch scanner for Lox source text.

    Problems are sent to the error reporter and scanning continues with the next
    character, so `scan` always returns a token list ending in a single EOF.
    """

    SINGLE_CHAR_TOKENS = {
        '(': LoxTokenType.LEFT_PAREN,
        ')': LoxTokenType.RIGHT_PAREN,
        '{': LoxTokenType.LEFT_BRACE,
        '}': LoxTokenType.RIGHT_BRACE,
        ',': LoxTokenType.COMMA,
        '.': LoxTokenType.DOT,
        '-': LoxTokenType.MINUS,
        '+': LoxTokenType.PLUS,
        ';': LoxTokenType.SEMICOLON,
        '*': LoxTokenType.STAR,
    }

    # Operators that gain a trailing '=' form: char -> (single, with '=')
    EQUAL_SUFFIX_TOKENS = {
        '!': (LoxTokenType.BANG, LoxTokenType.BANG_EQUAL),
        '=': (LoxTokenType.EQUAL, LoxTokenType.EQUAL_EQUAL),
        '<': (LoxTokenType.LESS, LoxTokenType.LESS_EQUAL),
        '>': (LoxTokenType.GREATER, LoxTokenType.GREATER_EQUAL),
    }

    def __init__(self, error_reporter: LoxErrorReporter) -> None:
        """
        Initialize scanner.

        Args:
            error_reporter: Sink for unexpected characters and unterminated strings
        """
        self._error_reporter = error_reporter
        self._logger = logging.getLogger("LoxScanner")
        self._source = ""
        self._tokens: List[LoxToken] = []
        self._start = 0
        self._current = 0
        self._line = 1

    def scan(self, source: str) -> List[LoxToken]:
        """
        Scan a complete program.

        Args:
            source: Program text

        Returns:
            List of tokens terminated by exactly one EOF token
        """
        self._source = source
        self._tokens = []
        self._start = 0
        self._current = 0
        self._line = 1

        while not self._is_at_end():
            self._start = self._current
            self._scan_token()

        self._tokens.append(LoxToken(LoxTokenType.EOF, "", None, self._line))
        self._logger.debug("scanned %d tokens over %d lines", len(self._tokens), self._line)
        return self._tokens

    def _scan_token(self) -> None:
        char = self._advance()

        if char in self.SINGLE_CHAR_TOKENS:
            self._add_token(self.SINGLE_CHAR_TOKENS[char])
            return

        if char in self.EQUAL_SUFFIX_TOKENS:
            single, double = self.EQUAL_SUFFIX_TOKENS[char]
            self._add_token(double if self._match('=') else single)
            return

        if char == '/':
            if self._match('/'):
                # Comment runs to the end of the line
                while self._peek() != '\n' and not self._is_at_end():
                    self._advance()

                return

            self._add_token(LoxTokenType.SLASH)
            return

        if char in (' ', '\r', '\t'):
            return

        if char == '\n':
            self._line += 1
            return

        if char == '"':
            self._string()
            return

        if self._is_digit(char):
            self._number()
            return

        if self._is_alpha(char):
            self._identifier()
            return

        self._error_reporter.scan_error(self._line, "Unexpected character.")

    def _string(self) -> None:
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == '\n':
                self._line += 1

            self._advance()

        if self._is_at_end():
            self._error_reporter.scan_error(self._line, "Unterminated string.")
            return

        # The closing quote
        self._advance()

        value = self._source[self._start + 1:self._current - 1]
        self._add_token(LoxTokenType.STRING, value)

    def _number(self) -> None:
        while self._is_digit(self._peek()):
            self._advance()

        # A fractional part needs at least one digit after the '.'
        if self._peek() == '.' and self._is_digit(self._peek_next()):
            self._advance()

            while self._is_digit(self._peek()):
                self._advance()

        self._add_token(LoxTokenType.NUMBER, float(self._source[self._start:self._current]))

    def _identifier(self) -> None:
        while self._is_alpha_numeric(self._peek()):
            self._advance()

        text = self._source[self._start:self._current]
        self._add_token(KEYWORDS.get(text, LoxTokenType.IDENTIFIER))

    def _match(self, expected: str) -> bool:
        if self._is_at_end() or self._source[self._current] != expected:
            return False

        self._current += 1
        return True

    def _peek(self) -> str:
        if self._is_at_end():
            return '\0'

        return self._source[self._current]

    def _peek_next(self) -> str:
        if self._current + 1 >= len(self._source):
            return '\0'

        return self._source[self._current + 1]

    @staticmethod
    def _is_digit(char: str) -> bool:
        return '0' <= char <= '9'

    @staticmethod
    def _is_alpha(char: str) -> bool:
        return 'a' <= char <= 'z' or 'A' <= char <= 'Z' or char == '_'

    def _is_alpha_numeric(self, char: str) -> bool:
        return self._is_alpha(char) or self._is_digit(char)

    def _is_at_end(self) -> bool:
        return self._current >= len(self._source)

    def _advance(self) -> str:
        char = self._source[self._current]
        self._current += 1
        return char

    def _add_token(self, token_type: LoxTokenType, literal: float | str | None = None) -> None:
        text = self._source[self._start:self._current]
        self._tokens.append(LoxToken(token_type, text, literal, self._line))
