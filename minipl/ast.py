"""Abstract Syntax Tree (AST) definitions for Mini-PL.

Every node exclusively owns its children; the parser builds the tree once
and the interpreter only reads it. Nodes keep the token that introduced
them so runtime errors can point back at the source, but that token takes
no part in node equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .tokens import Token, TokenType
from .types import TypeSpec


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class NoOp(Node):
    """Empty statement; also fills absent operands of boolean expressions."""
    pass


@dataclass
class Program(Node):
    children: List[Node]


@dataclass
class Var(Node):
    name: str
    token: Optional[Token] = field(default=None, compare=False, repr=False)


@dataclass
class VarDecl(Node):
    var: Var
    type_spec: TypeSpec


@dataclass
class DeclAssign(Node):
    var: Var
    type_spec: TypeSpec
    expr: Node


@dataclass
class Assign(Node):
    var: Var
    expr: Node
    token: Optional[Token] = field(default=None, compare=False, repr=False)


@dataclass
class Num(Node):
    value: int
    token: Optional[Token] = field(default=None, compare=False, repr=False)


@dataclass
class Str(Node):
    value: str
    token: Optional[Token] = field(default=None, compare=False, repr=False)


@dataclass
class UnaryOp(Node):
    op: TokenType
    operand: Node
    token: Optional[Token] = field(default=None, compare=False, repr=False)


@dataclass
class BinOp(Node):
    left: Node
    op: TokenType
    right: Node
    token: Optional[Token] = field(default=None, compare=False, repr=False)


@dataclass
class BoolExpr(Node):
    """Boolean expression.

    `op` is LESS_THAN, EQUAL or AND for the binary forms. NOT keeps its
    operand in `right` with a NoOp `left`. When no operator follows an
    expression, `op` is None and `left` is passed through unchanged
    (it must already evaluate to a boolean).
    """
    left: Node
    op: Optional[TokenType]
    right: Node
    token: Optional[Token] = field(default=None, compare=False, repr=False)


@dataclass
class ForLoop(Node):
    var: Var
    start: Node
    end: Node
    body: List[Node]


@dataclass
class IfStatement(Node):
    condition: Node
    then_body: List[Node]
    else_body: List[Node]
    token: Optional[Token] = field(default=None, compare=False, repr=False)


@dataclass
class PrintStr(Node):
    value: str


@dataclass
class PrintVar(Node):
    var: Var


@dataclass
class Read(Node):
    var: Var
