"""JavaScript module output for components and functions."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from pysuals.config import CompilerConfig
from pysuals.syntax import (
    ArrayExpr,
    AssignStmt,
    AwaitExpr,
    BinaryExpr,
    BinaryOp,
    BlockStmt,
    CallExpr,
    Component,
    Expr,
    ExprStmt,
    ForStmt,
    Function,
    Ident,
    IfStmt,
    LambdaExpr,
    Literal,
    MemberExpr,
    ObjectExpr,
    ReturnStmt,
    SpreadExpr,
    Stmt,
    TemplateExpr,
    TernaryExpr,
    UnaryExpr,
    UnaryOp,
    VarStmt,
    WhileStmt,
)

_INDENT = "  "

_BINARY_OPS = {
    BinaryOp.ADD: "+",
    BinaryOp.SUB: "-",
    BinaryOp.MUL: "*",
    BinaryOp.DIV: "/",
    BinaryOp.MOD: "%",
    BinaryOp.POW: "**",
    BinaryOp.EQ: "===",
    BinaryOp.NOT_EQ: "!==",
    BinaryOp.STRICT_EQ: "===",
    BinaryOp.STRICT_NOT_EQ: "!==",
    BinaryOp.LT: "<",
    BinaryOp.GT: ">",
    BinaryOp.LT_EQ: "<=",
    BinaryOp.GT_EQ: ">=",
    BinaryOp.AND: "&&",
    BinaryOp.OR: "||",
    BinaryOp.NULLISH: "??",
    BinaryOp.IN: "in",
    BinaryOp.INSTANCE_OF: "instanceof",
}

_UNARY_OPS = {
    UnaryOp.NOT: "!",
    UnaryOp.NEG: "-",
    UnaryOp.PLUS: "+",
    UnaryOp.TYPEOF: "typeof ",
    UnaryOp.VOID: "void ",
    UnaryOp.DELETE: "delete ",
    UnaryOp.BITWISE_NOT: "~",
}


class JSGenerator:
    """Renders a program as an ES module that mounts its first component."""

    def __init__(self, config: Optional[CompilerConfig] = None) -> None:
        self.config = config if config is not None else CompilerConfig()
        self._lines: list[str] = []
        self._indent = 0

    def generate(self, program) -> str:
        self._lines = []
        self._indent = 0
        self._emit_line("import { signal, effect, h, mount } from '@pysuals/runtime';")
        self._emit_line("")
        for component in program.components:
            self._generate_component(component)
        for function in program.functions:
            self._generate_function(function)
        self._emit_line("")
        self._emit_line("// Mount application")
        self._emit_line("const root = document.getElementById('app');")
        if program.components:
            self._emit_line(f"mount({program.components[0].name}, root);")
        return "".join(self._lines)

    def _generate_component(self, component: Component) -> None:
        self._emit_line(f"export function {component.name}() {{")
        with self._indented():
            for signal in component.signals:
                initial = self.expr_to_string(signal.initial)
                self._emit_line(
                    f"const [get{signal.name}, set{signal.name}] = signal({initial});"
                )
            for computed in component.computed:
                self._emit_line(f"const {computed.name} = computed(() => {{")
                with self._indented():
                    self._emit_line(f"return {self.expr_to_string(computed.body)};")
                self._emit_line("});")
            for effect in component.effects:
                self._emit_line("effect(() => {")
                self._generate_body(effect.body)
                self._emit_line("});")
            self._emit_line("return (")
            with self._indented():
                first = component.body[0] if component.body else None
                if isinstance(first, ReturnStmt):
                    self._emit_line(self.expr_to_string(first.value))
            self._emit_line(");")
        self._emit_line("}")
        self._emit_line("")

    def _generate_function(self, function: Function) -> None:
        self._emit_line(f"export function {function.name}(")
        self._emit_line(_INDENT + ", ".join(param.name for param in function.params))
        self._emit_line(") {")
        self._generate_body(function.body)
        self._emit_line("}")
        self._emit_line("")

    def _generate_body(self, body: list[Stmt]) -> None:
        with self._indented():
            for stmt in body:
                self._generate_stmt(stmt)

    def _generate_stmt(self, stmt: Stmt) -> None:
        text = self.expr_to_string
        if isinstance(stmt, ExprStmt):
            self._emit_line(f"{text(stmt.expr)};")
        elif isinstance(stmt, ReturnStmt):
            self._emit_line(f"return {text(stmt.value)};")
        elif isinstance(stmt, AssignStmt):
            self._emit_line(f"{stmt.target} {stmt.op.value} {text(stmt.value)};")
        elif isinstance(stmt, VarStmt):
            kind = "const" if stmt.is_const else "let"
            self._emit_line(f"{kind} {stmt.name} = {text(stmt.value)};")
        elif isinstance(stmt, IfStmt):
            self._emit_line(f"if ({text(stmt.cond)}) {{")
            self._generate_body(stmt.body)
            for cond, body in stmt.else_if:
                self._emit_line(f"}} else if ({text(cond)}) {{")
                self._generate_body(body)
            if stmt.else_body is not None:
                self._emit_line("} else {")
                self._generate_body(stmt.else_body)
            self._emit_line("}")
        elif isinstance(stmt, ForStmt):
            self._emit_line(f"for (const {stmt.item} of {text(stmt.iter)}) {{")
            self._generate_body(stmt.body)
            self._emit_line("}")
        elif isinstance(stmt, WhileStmt):
            self._emit_line(f"while ({text(stmt.cond)}) {{")
            self._generate_body(stmt.body)
            self._emit_line("}")
        elif isinstance(stmt, BlockStmt):
            self._emit_line("{")
            self._generate_body(stmt.body)
            self._emit_line("}")
        else:
            raise TypeError(f"not a statement: {stmt!r}")

    def expr_to_string(self, expr: Expr) -> str:
        """Render an expression as JavaScript source."""
        text = self.expr_to_string
        if isinstance(expr, Literal):
            return expr.raw
        if isinstance(expr, Ident):
            return expr.name
        if isinstance(expr, CallExpr):
            args = ", ".join(text(arg) for arg in expr.args)
            return f"{text(expr.callee)}({args})"
        if isinstance(expr, BinaryExpr):
            return f"({text(expr.left)} {_BINARY_OPS[expr.op]} {text(expr.right)})"
        if isinstance(expr, UnaryExpr):
            return f"{_UNARY_OPS[expr.op]}{text(expr.expr)}"
        if isinstance(expr, MemberExpr):
            obj = text(expr.obj)
            return f"{obj}[{expr.prop}]" if expr.computed else f"{obj}.{expr.prop}"
        if isinstance(expr, ObjectExpr):
            props = ", ".join(f"{prop.key}: {text(prop.value)}" for prop in expr.props)
            return f"{{ {props} }}"
        if isinstance(expr, ArrayExpr):
            return "[" + ", ".join(text(el) for el in expr.elements) + "]"
        if isinstance(expr, LambdaExpr):
            return f"({', '.join(expr.params)}) => {text(expr.body)}"
        if isinstance(expr, TernaryExpr):
            return f"{text(expr.cond)} ? {text(expr.then)} : {text(expr.else_)}"
        if isinstance(expr, TemplateExpr):
            parts = ["`"]
            for i, quasi in enumerate(expr.quasis):
                parts.append(quasi)
                if i < len(expr.expressions):
                    parts.append(f"${{{text(expr.expressions[i])}}}")
            parts.append("`")
            return "".join(parts)
        if isinstance(expr, AwaitExpr):
            return f"await {text(expr.expr)}"
        if isinstance(expr, SpreadExpr):
            return f"...{text(expr.expr)}"
        raise TypeError(f"not an expression: {expr!r}")

    @contextmanager
    def _indented(self) -> Iterator[None]:
        self._indent += 1
        try:
            yield
        finally:
            self._indent -= 1

    def _emit_line(self, text: str) -> None:
        if text:
            self._lines.append(_INDENT * self._indent + text)
        self._lines.append("\n")