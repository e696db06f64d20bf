"""Syntax tree for component source files: expressions, statements and declarations."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


@dataclass
class Span:
    """A region of source text with its starting line and column."""

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"span end {self.end} precedes start {self.start}")

    def __len__(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def merge(self, other: Span) -> Span:
        """Return the smallest span covering both; the column is kept from ``self``."""
        return Span(
            start=min(self.start, other.start),
            end=max(self.end, other.end),
            line=min(self.line, other.line),
            column=self.column,
        )

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


class LiteralKind(Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    BIGINT = "bigint"


def _default_raw(kind: LiteralKind, value: Any) -> str:
    if kind is LiteralKind.STRING:
        return json.dumps(str(value))
    if kind is LiteralKind.BOOLEAN:
        return "true" if value else "false"
    if kind is LiteralKind.NULL:
        return "null"
    if kind is LiteralKind.UNDEFINED:
        return "undefined"
    if kind is LiteralKind.BIGINT:
        return f"{value}n"
    return str(value)


@dataclass
class Literal:
    """A literal value together with its source spelling."""

    kind: LiteralKind
    value: Any = None
    raw: str = ""

    def __post_init__(self) -> None:
        if not self.raw:
            self.raw = _default_raw(self.kind, self.value)


@dataclass
class Ident:
    name: str
    global_: bool = False


class BinaryOp(Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    POW = "pow"
    EQ = "eq"
    NOT_EQ = "not_eq"
    STRICT_EQ = "strict_eq"
    STRICT_NOT_EQ = "strict_not_eq"
    LT = "lt"
    LT_EQ = "lt_eq"
    GT = "gt"
    GT_EQ = "gt_eq"
    AND = "and"
    OR = "or"
    NULLISH = "nullish"
    IN = "in"
    INSTANCE_OF = "instance_of"


class UnaryOp(Enum):
    NOT = "not"
    NEG = "neg"
    PLUS = "plus"
    TYPEOF = "typeof"
    VOID = "void"
    DELETE = "delete"
    BITWISE_NOT = "bitwise_not"


@dataclass
class BinaryExpr:
    left: Expr
    op: BinaryOp
    right: Expr


@dataclass
class UnaryExpr:
    op: UnaryOp
    expr: Expr


@dataclass
class CallExpr:
    callee: Expr
    args: list[Expr] = field(default_factory=list)
    optional: bool = False


@dataclass
class MemberExpr:
    obj: Expr
    prop: str
    computed: bool = False
    optional: bool = False


@dataclass
class ObjectProp:
    key: str
    value: Expr
    shorthand: bool = False


@dataclass
class ObjectExpr:
    props: list[ObjectProp] = field(default_factory=list)


@dataclass
class ArrayExpr:
    elements: list[Expr] = field(default_factory=list)


@dataclass
class TernaryExpr:
    cond: Expr
    then: Expr
    else_: Expr


@dataclass
class LambdaExpr:
    params: list[str]
    body: Expr


@dataclass
class TemplateExpr:
    """A template string: ``quasis`` are the text parts between ``expressions``."""

    quasis: list[str] = field(default_factory=list)
    expressions: list[Expr] = field(default_factory=list)


@dataclass
class AwaitExpr:
    expr: Expr


@dataclass
class SpreadExpr:
    expr: Expr


Expr = Union[
    Literal,
    Ident,
    BinaryExpr,
    UnaryExpr,
    CallExpr,
    MemberExpr,
    ObjectExpr,
    ArrayExpr,
    TernaryExpr,
    LambdaExpr,
    TemplateExpr,
    AwaitExpr,
    SpreadExpr,
]


def is_constant(expr: Expr) -> bool:
    """True if the expression is built from literals and operators only."""
    if isinstance(expr, Literal):
        return True
    if isinstance(expr, BinaryExpr):
        return is_constant(expr.left) and is_constant(expr.right)
    if isinstance(expr, UnaryExpr):
        return is_constant(expr.expr)
    return False


_LITERAL_TYPE_NAMES = {
    LiteralKind.STRING: "string",
    LiteralKind.NUMBER: "number",
    LiteralKind.INTEGER: "number",
    LiteralKind.BOOLEAN: "boolean",
    LiteralKind.NULL: "null",
    LiteralKind.UNDEFINED: "undefined",
    LiteralKind.BIGINT: "bigint",
}

_EXPR_TYPE_NAMES: dict[type, str] = {
    Ident: "any",
    BinaryExpr: "any",
    UnaryExpr: "any",
    CallExpr: "any",
    MemberExpr: "any",
    ObjectExpr: "object",
    ArrayExpr: "array",
    TernaryExpr: "any",
    LambdaExpr: "function",
    TemplateExpr: "string",
    AwaitExpr: "promise",
    SpreadExpr: "array",
}


def expr_type_name(expr: Expr) -> str:
    """Return the runtime type name an expression statically evaluates to."""
    if isinstance(expr, Literal):
        return _LITERAL_TYPE_NAMES[expr.kind]
    try:
        return _EXPR_TYPE_NAMES[type(expr)]
    except KeyError:
        raise TypeError(f"not an expression: {expr!r}") from None


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class AssignOp(Enum):
    EQ = "="
    ADD_EQ = "+="
    SUB_EQ = "-="


@dataclass
class ExprStmt:
    expr: Expr


@dataclass
class ReturnStmt:
    value: Expr


@dataclass
class IfStmt:
    cond: Expr
    body: list[Stmt] = field(default_factory=list)
    else_if: list[tuple[Expr, list[Stmt]]] = field(default_factory=list)
    else_body: Optional[list[Stmt]] = None


@dataclass
class ForStmt:
    item: str
    iter: Expr
    body: list[Stmt] = field(default_factory=list)
    key: Optional[str] = None


@dataclass
class WhileStmt:
    cond: Expr
    body: list[Stmt] = field(default_factory=list)


@dataclass
class AssignStmt:
    target: str
    value: Expr
    op: AssignOp = AssignOp.EQ


@dataclass
class VarStmt:
    name: str
    value: Expr
    is_const: bool = False


@dataclass
class BlockStmt:
    body: list[Stmt] = field(default_factory=list)


Stmt = Union[
    ExprStmt,
    ReturnStmt,
    IfStmt,
    ForStmt,
    WhileStmt,
    AssignStmt,
    VarStmt,
    BlockStmt,
]


def stmt_is_empty(stmt: Stmt) -> bool:
    """True only for a block with no statements."""
    return isinstance(stmt, BlockStmt) and not stmt.body


def _body_returns(body: list[Stmt]) -> bool:
    return any(stmt_contains_return(s) for s in body)


def stmt_contains_return(stmt: Stmt) -> bool:
    """True if every path through the statement reaches a return."""
    if isinstance(stmt, ReturnStmt):
        return True
    if isinstance(stmt, BlockStmt):
        return _body_returns(stmt.body)
    if isinstance(stmt, IfStmt):
        if stmt.else_body is None:
            return False
        branches = [stmt.body, *(body for _, body in stmt.else_if), stmt.else_body]
        return all(_body_returns(branch) for branch in branches)
    return False


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class SignalScope(Enum):
    COMPONENT = "component"
    GLOBAL = "global"
    CONTEXT = "context"


@dataclass
class Signal:
    name: str
    initial: Expr
    scope: SignalScope = SignalScope.COMPONENT


@dataclass
class Computed:
    name: str
    body: Expr
    deps: list[str] = field(default_factory=list)


@dataclass
class Effect:
    body: list[Stmt] = field(default_factory=list)
    deps: list[str] = field(default_factory=list)
    immediate: bool = False


@dataclass
class Param:
    name: str
    type_hint: Optional[str] = None
    default: Optional[Expr] = None


@dataclass
class Component:
    name: str
    params: list[Param] = field(default_factory=list)
    body: list[Stmt] = field(default_factory=list)
    signals: list[Signal] = field(default_factory=list)
    computed: list[Computed] = field(default_factory=list)
    effects: list[Effect] = field(default_factory=list)
    css_scope: Optional[str] = None


@dataclass
class Function:
    name: str
    params: list[Param] = field(default_factory=list)
    body: list[Stmt] = field(default_factory=list)
    return_type: Optional[str] = None
    is_async: bool = False


@dataclass
class Import:
    path: str
    names: list[str] = field(default_factory=list)
    is_default: bool = False
    alias: Optional[str] = None


@dataclass
class Export:
    name: str
    is_default: bool = False


@dataclass
class CssRule:
    property: str
    value: str


@dataclass
class CssBlock:
    selector: str
    rules: list[CssRule] = field(default_factory=list)
    scoped: bool = False


@dataclass
class Program:
    components: list[Component] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)
    imports: list[Import] = field(default_factory=list)
    exports: list[Export] = field(default_factory=list)
    css: list[CssBlock] = field(default_factory=list)