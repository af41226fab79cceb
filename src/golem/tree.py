"""AST node classes for Golem programs.

Nodes are frozen dataclasses built once by the parser and never mutated.
Every node carries the token it starts at, exposes `token_literal()` for
diagnostics and renders back to source-like text through `str()`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .token_types import Tok


@dataclass(frozen=True)
class Node:
    token: Tok

    def token_literal(self) -> str:
        return self.token.value


class Statement(Node):
    """Marker base for statement nodes."""


class Expression(Node):
    """Marker base for expression nodes."""


@dataclass(frozen=True)
class Identifier(Expression):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return self.token.value


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class Boolean(Expression):
    value: bool

    def __str__(self) -> str:
        return self.token.value


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class BlockStatement(Statement):
    statements: Tuple[Statement, ...] = ()

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        body = "".join(f"  {s}\n" for s in self.statements)
        return "{\n" + body + "}"


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass(frozen=True)
class WhileStatement(Statement):
    condition: Expression
    body: BlockStatement

    def __str__(self) -> str:
        return f"while ({self.condition}) {self.body}"


@dataclass(frozen=True)
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


# older name for let declarations
VariableDeclaration = LetStatement


@dataclass(frozen=True)
class ReturnStatement(Statement):
    return_value: Optional[Expression] = None

    def __str__(self) -> str:
        if self.return_value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.return_value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    function: Expression
    arguments: Tuple[Expression, ...] = ()

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    elements: Tuple[Expression, ...] = ()

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass(frozen=True)
class IndexExpression(Expression):
    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


@dataclass(frozen=True)
class HashLiteral(Expression):
    pairs: Tuple[Tuple[Expression, Expression], ...] = ()

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.pairs) + "}"


@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Statement, ...] = ()

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(f"{s}\n" for s in self.statements)


def node_label(node: Node) -> str:
    return type(node).__name__
