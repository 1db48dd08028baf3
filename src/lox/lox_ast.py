"""Lox AST node hierarchy - expressions and statements produced by the parser.

Nodes are immutable. Structural equality compares the fields that describe the
program, so two parses of the same tokens compare equal. Each expression also
gets a `node_id` that is unique for the lifetime of the process and excluded
from equality: the resolver keys its scope-depth table on it, because equal
subtrees in different positions can resolve to different scopes.
"""

import itertools
from dataclasses import dataclass, field
from typing import Tuple

from lox.lox_token import LoxToken
from lox.lox_value import LoxValue


_node_ids = itertools.count(1)


def _next_node_id() -> int:
    return next(_node_ids)


@dataclass(frozen=True)
class LoxExpr:
    """Base class for expression nodes."""
    node_id: int = field(default_factory=_next_node_id, compare=False, repr=False, kw_only=True)


@dataclass(frozen=True)
class LoxLiteralExpr(LoxExpr):
    """A constant value written in the source."""
    value: LoxValue


@dataclass(frozen=True)
class LoxGroupingExpr(LoxExpr):
    """A parenthesised expression."""
    expression: LoxExpr


@dataclass(frozen=True)
class LoxUnaryExpr(LoxExpr):
    """Prefix `-` or `!`."""
    operator: LoxToken
    right: LoxExpr


@dataclass(frozen=True)
class LoxBinaryExpr(LoxExpr):
    """Arithmetic, comparison and equality operators."""
    left: LoxExpr
    operator: LoxToken
    right: LoxExpr


@dataclass(frozen=True)
class LoxLogicalExpr(LoxExpr):
    """Short-circuiting `and` / `or`."""
    left: LoxExpr
    operator: LoxToken
    right: LoxExpr


@dataclass(frozen=True)
class LoxVariableExpr(LoxExpr):
    """A reference to a named variable."""
    name: LoxToken


@dataclass(frozen=True)
class LoxAssignExpr(LoxExpr):
    """Assignment to an existing variable."""
    name: LoxToken
    value: LoxExpr


@dataclass(frozen=True)
class LoxCallExpr(LoxExpr):
    """A call; `paren` is the closing parenthesis, kept for error lines."""
    callee: LoxExpr
    paren: LoxToken
    arguments: Tuple[LoxExpr, ...]


@dataclass(frozen=True)
class LoxStmt:
    """Base class for statement nodes."""


@dataclass(frozen=True)
class LoxExpressionStmt(LoxStmt):
    """An expression evaluated for its side effects."""
    expression: LoxExpr


@dataclass(frozen=True)
class LoxPrintStmt(LoxStmt):
    """`print expr;`"""
    expression: LoxExpr


@dataclass(frozen=True)
class LoxVarStmt(LoxStmt):
    """`var name = initializer;` with an optional initializer."""
    name: LoxToken
    initializer: LoxExpr | None


@dataclass(frozen=True)
class LoxBlockStmt(LoxStmt):
    """A braced sequence of declarations with its own scope."""
    statements: Tuple[LoxStmt, ...]


@dataclass(frozen=True)
class LoxIfStmt(LoxStmt):
    """`if (condition) then_branch else else_branch`."""
    condition: LoxExpr
    then_branch: LoxStmt
    else_branch: LoxStmt | None


@dataclass(frozen=True)
class LoxWhileStmt(LoxStmt):
    """`while (condition) body`; `for` loops are desugared into this."""
    condition: LoxExpr
    body: LoxStmt


@dataclass(frozen=True)
class LoxFunctionStmt(LoxStmt):
    """A named function declaration."""
    name: LoxToken
    params: Tuple[LoxToken, ...]
    body: Tuple[LoxStmt, ...]


@dataclass(frozen=True)
class LoxReturnStmt(LoxStmt):
    """`return value;` with an optional value."""
    keyword: LoxToken
    value: LoxExpr | None
