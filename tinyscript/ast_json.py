"""JSON serialization/deserialization for the TinyScript AST.

This module converts between TinyScript AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node is encoded as
an object whose "type" is the node's `NodeKind` value; the encoding
round-trips for all node types.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Block,
    Boolean,
    Float,
    For,
    FunctionCall,
    If,
    Integer,
    Nop,
    Operator,
    ReadVar,
    String,
    WriteVar,
)


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, ReadVar):
        return {"type": "ReadVar", "name": node.name}
    if isinstance(node, WriteVar):
        return {"type": "WriteVar", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, Operator):
        return {
            "type": "Operator",
            "symbol": node.symbol,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, FunctionCall):
        return {"type": "FunctionCall", "name": node.name, "argument": ast_to_obj(node.argument)}
    if isinstance(node, If):
        return {"type": "If", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, For):
        return {
            "type": "For",
            "init": ast_to_obj(node.init),
            "condition": ast_to_obj(node.condition),
            "advance": ast_to_obj(node.advance),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Nop):
        return {"type": "Nop"}
    if isinstance(node, (Boolean, Integer, Float, String)):
        return {"type": node.kind.value, "value": node.value}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def _literal_value(obj: Any, expected: Any) -> Any:
    value = obj["value"]
    # bool is an int subclass; only a Boolean literal may hold one
    if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
        raise ValueError(f"invalid {obj['type']} literal value: {value!r}")
    return value


def _block_from_obj(obj: Any) -> Block:
    block = ast_from_obj(obj)
    if not isinstance(block, Block):
        raise ValueError(f"expected a Block body, got {type(block).__name__}")
    return block


def ast_from_obj(obj: Any) -> Any:
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "ReadVar":
        return ReadVar(name=obj["name"])
    if t == "WriteVar":
        return WriteVar(name=obj["name"], value=ast_from_obj(obj["value"]))
    if t == "Operator":
        return Operator(symbol=obj["symbol"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "FunctionCall":
        return FunctionCall(name=obj["name"], argument=ast_from_obj(obj["argument"]))
    if t == "If":
        return If(condition=ast_from_obj(obj["condition"]), body=_block_from_obj(obj["body"]))
    if t == "For":
        return For(
            init=ast_from_obj(obj["init"]),
            condition=ast_from_obj(obj["condition"]),
            advance=ast_from_obj(obj["advance"]),
            body=_block_from_obj(obj["body"]),
        )
    if t == "Nop":
        return Nop()
    if t == "Boolean":
        return Boolean(value=_literal_value(obj, bool))
    if t == "Integer":
        return Integer(value=_literal_value(obj, int))
    if t == "Float":
        return Float(value=float(_literal_value(obj, (int, float))))
    if t == "String":
        return String(value=_literal_value(obj, str))

    raise ValueError(f"Unknown AST node type: {t}")
