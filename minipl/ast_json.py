"""JSON dump of a Mini-PL AST.

Converts AST dataclasses into plain dict/list structures for inspection
with `python -m minipl --emit-ast`. Source positions are left out.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Assign, BinOp, BoolExpr, DeclAssign, ForLoop, IfStatement, NoOp, Num,
    PrintStr, PrintVar, Program, Read, Str, UnaryOp, Var, VarDecl,
)
from .tokens import TokenType
from .types import TypeSpec


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (int, str, bool)):
        return node
    if isinstance(node, TypeSpec):
        return node.kind
    if isinstance(node, TokenType):
        return node.value
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    if isinstance(node, Program):
        return {"type": "Program", "children": ast_to_obj(node.children)}
    if isinstance(node, NoOp):
        return {"type": "NoOp"}
    if isinstance(node, Var):
        return {"type": "Var", "name": node.name}
    if isinstance(node, VarDecl):
        return {"type": "VarDecl", "name": node.var.name, "type_spec": ast_to_obj(node.type_spec)}
    if isinstance(node, DeclAssign):
        return {
            "type": "DeclAssign",
            "name": node.var.name,
            "type_spec": ast_to_obj(node.type_spec),
            "expr": ast_to_obj(node.expr),
        }
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.var.name, "expr": ast_to_obj(node.expr)}
    if isinstance(node, Num):
        return {"type": "Num", "value": node.value}
    if isinstance(node, Str):
        return {"type": "Str", "value": node.value}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": ast_to_obj(node.op), "operand": ast_to_obj(node.operand)}
    if isinstance(node, BinOp):
        return {"type": "BinOp", "op": ast_to_obj(node.op), "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, BoolExpr):
        return {"type": "BoolExpr", "op": ast_to_obj(node.op), "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, ForLoop):
        return {
            "type": "ForLoop",
            "var": node.var.name,
            "start": ast_to_obj(node.start),
            "end": ast_to_obj(node.end),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, IfStatement):
        return {
            "type": "IfStatement",
            "condition": ast_to_obj(node.condition),
            "then_body": ast_to_obj(node.then_body),
            "else_body": ast_to_obj(node.else_body),
        }
    if isinstance(node, PrintStr):
        return {"type": "PrintStr", "value": node.value}
    if isinstance(node, PrintVar):
        return {"type": "PrintVar", "name": node.var.name}
    if isinstance(node, Read):
        return {"type": "Read", "name": node.var.name}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")
