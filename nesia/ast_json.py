"""JSON serialization/deserialization for Nesia AST.

This module converts between Nesia AST dataclasses and plain Python
dict/list structures suitable for JSON encoding, so that a parsed program
can be stored with ``--emit-ast`` and executed later with ``--ast``.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    ExprStmt,
    VarDecl,
    PrintStmt,
    FuncDecl,
    Literal,
    Ident,
    BinaryOp,
    Call,
)


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, VarDecl):
        return {"type": "VarDecl", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, FuncDecl):
        return {
            "type": "FuncDecl",
            "name": node.name,
            "params": list(node.params),
            "body": [ast_to_obj(s) for s in node.body],
        }
    if isinstance(node, Literal):
        return {"type": "Literal", "value": node.value, "literal_type": node.literal_type}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Call):
        return {"type": "Call", "func": ast_to_obj(node.func), "args": [ast_to_obj(a) for a in node.args]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def literal_from_obj(obj: Dict[str, Any]) -> Literal:
    literal_type = obj["literal_type"]
    if literal_type == "Number":
        return Literal(float(obj["value"]), "Number")
    if literal_type == "String":
        return Literal(str(obj["value"]), "String")
    raise ValueError(f"Unknown literal type: {literal_type}")


def ast_from_obj(obj: Any) -> Any:
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "VarDecl":
        return VarDecl(name=obj["name"], value=ast_from_obj(obj["value"]))
    if t == "PrintStmt":
        return PrintStmt(expr=ast_from_obj(obj["expr"]))
    if t == "FuncDecl":
        return FuncDecl(
            name=obj["name"],
            params=[str(p) for p in obj["params"]],
            body=[ast_from_obj(s) for s in obj["body"]],
        )
    if t == "Literal":
        return literal_from_obj(obj)
    if t == "Ident":
        return Ident(name=obj["name"])
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "Call":
        return Call(func=ast_from_obj(obj["func"]), args=[ast_from_obj(a) for a in obj["args"]])

    raise ValueError(f"Unknown AST node type: {t}")
