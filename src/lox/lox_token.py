"""Token types and token representation for Lox source text."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class LoxTokenType(Enum):
    """Token types for Lox programs."""
    # Single-character tokens
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","
    DOT = "."
    MINUS = "-"
    PLUS = "+"
    SEMICOLON = ";"
    SLASH = "/"
    STAR = "*"

    # One or two character tokens
    BANG = "!"
    BANG_EQUAL = "!="
    EQUAL = "="
    EQUAL_EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Keywords
    AND = "and"
    CLASS = "class"
    ELSE = "else"
    FALSE = "false"
    FUN = "fun"
    FOR = "for"
    IF = "if"
    NIL = "nil"
    OR = "or"
    PRINT = "print"
    RETURN = "return"
    SUPER = "super"
    THIS = "this"
    TRUE = "true"
    VAR = "var"
    WHILE = "while"

    EOF = "EOF"


KEYWORDS: Dict[str, LoxTokenType] = {
    "and": LoxTokenType.AND,
    "class": LoxTokenType.CLASS,
    "else": LoxTokenType.ELSE,
    "false": LoxTokenType.FALSE,
    "for": LoxTokenType.FOR,
    "fun": LoxTokenType.FUN,
    "if": LoxTokenType.IF,
    "nil": LoxTokenType.NIL,
    "or": LoxTokenType.OR,
    "print": LoxTokenType.PRINT,
    "return": LoxTokenType.RETURN,
    "super": LoxTokenType.SUPER,
    "this": LoxTokenType.THIS,
    "true": LoxTokenType.TRUE,
    "var": LoxTokenType.VAR,
    "while": LoxTokenType.WHILE,
}


@dataclass(frozen=True)
class LoxToken:
    """
    Represents a single scanned token.

    `literal` holds the decoded value for NUMBER (a float) and STRING (the text
    between the quotes) tokens and is None for everything else.
    """
    type: LoxTokenType
    lexeme: str
    literal: float | str | None
    line: int

    def __str__(self) -> str:
        return f"{self.type.name} {self.lexeme} {self.literal}"

    def __repr__(self) -> str:
        return f"LoxToken({self.type.name}, {self.lexeme!r}, line={self.line})"
