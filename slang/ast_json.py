"""JSON serialization/deserialization for the Slang AST.

This module converts between Slang AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node becomes a
dict tagged with its class name under "type"; source positions are kept
under "line" and "column".
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    NumberLiteral,
    StringLiteral,
    ListLiteral,
    Block,
    Identifier,
    BinaryOp,
    UnaryOp,
    Index,
    Call,
    LetStmt,
    ExprStmt,
)


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, NumberLiteral):
        obj: Dict[str, Any] = {"type": "NumberLiteral", "value": node.value}
    elif isinstance(node, StringLiteral):
        obj = {"type": "StringLiteral", "value": node.value}
    elif isinstance(node, ListLiteral):
        obj = {"type": "ListLiteral", "elements": [ast_to_obj(e) for e in node.elements]}
    elif isinstance(node, Block):
        obj = {
            "type": "Block",
            "statements": [ast_to_obj(s) for s in node.statements],
            "tail": ast_to_obj(node.tail),
        }
    elif isinstance(node, Identifier):
        obj = {"type": "Identifier", "name": node.name}
    elif isinstance(node, BinaryOp):
        obj = {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    elif isinstance(node, UnaryOp):
        obj = {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    elif isinstance(node, Index):
        obj = {"type": "Index", "target": ast_to_obj(node.target), "index": ast_to_obj(node.index)}
    elif isinstance(node, Call):
        obj = {"type": "Call", "name": node.name, "args": [ast_to_obj(a) for a in node.args]}
    elif isinstance(node, LetStmt):
        obj = {"type": "LetStmt", "name": node.name, "expr": ast_to_obj(node.expr)}
    elif isinstance(node, ExprStmt):
        obj = {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    else:
        raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")

    obj["line"] = node.line
    obj["column"] = node.column
    return obj


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    pos = {"line": obj.get("line", 0), "column": obj.get("column", 0)}
    t = obj.get("type")
    if t == "NumberLiteral":
        return NumberLiteral(int(obj["value"]), **pos)
    if t == "StringLiteral":
        return StringLiteral(obj["value"], **pos)
    if t == "ListLiteral":
        return ListLiteral([ast_from_obj(e) for e in obj["elements"]], **pos)
    if t == "Block":
        return Block(
            [ast_from_obj(s) for s in obj["statements"]],
            ast_from_obj(obj.get("tail")),
            **pos,
        )
    if t == "Identifier":
        return Identifier(obj["name"], **pos)
    if t == "BinaryOp":
        return BinaryOp(obj["op"], ast_from_obj(obj["left"]), ast_from_obj(obj["right"]), **pos)
    if t == "UnaryOp":
        return UnaryOp(obj["op"], ast_from_obj(obj["operand"]), **pos)
    if t == "Index":
        return Index(ast_from_obj(obj["target"]), ast_from_obj(obj["index"]), **pos)
    if t == "Call":
        return Call(obj["name"], [ast_from_obj(a) for a in obj["args"]], **pos)
    if t == "LetStmt":
        return LetStmt(obj["name"], ast_from_obj(obj["expr"]), **pos)
    if t == "ExprStmt":
        return ExprStmt(ast_from_obj(obj["expr"]), **pos)

    raise ValueError(f"Unknown AST node type: {t}")
