"""Render an AST back to TinyScript source text.

The output parses back to an equal tree: statements that need one get a
`;`, operands that are themselves operator expressions are parenthesised,
strings are escaped, floats are printed exactly, and `Nop` renders as
nothing.
"""

from __future__ import annotations

from .ast import Block, Boolean, Float, For, FunctionCall, If, Integer, Node, Nop, Operator, ReadVar, String, WriteVar
from .types import format_float

INDENT = '    '

_ESCAPES = {'\\': '\\\\', '"': '\\"', '\n': '\\n', '\r': '\\r', '\t': '\\t'}


def quote_string(value: str) -> str:
    return '"' + ''.join(_ESCAPES.get(c, c) for c in value) + '"'


def _operand(node: Node) -> str:
    if isinstance(node, Operator):
        return '(' + unparse(node) + ')'
    return unparse(node)


def _statement(node: Node, depth: int) -> str:
    if isinstance(node, (If, For)):
        return INDENT * depth + unparse(node, depth)
    return INDENT * depth + unparse(node, depth) + ';'


def unparse(node: Node, depth: int = 0) -> str:
    """Return source text for `node`; `depth` is the indentation level of nested bodies."""
    if isinstance(node, Block):
        return ''.join(_statement(stmt, depth) + '\n' for stmt in node.statements)
    if isinstance(node, ReadVar):
        return node.name
    if isinstance(node, WriteVar):
        return f"{node.name} = {unparse(node.value)}"
    if isinstance(node, Operator):
        return f"{_operand(node.left)} {node.symbol} {_operand(node.right)}"
    if isinstance(node, FunctionCall):
        return f"{node.name}({unparse(node.argument)})"
    if isinstance(node, If):
        return f"if ({unparse(node.condition)}) {{\n{unparse(node.body, depth + 1)}{INDENT * depth}}}"
    if isinstance(node, For):
        header = f"{unparse(node.init)}; {unparse(node.condition)}; {unparse(node.advance)}"
        return f"for ({header}) {{\n{unparse(node.body, depth + 1)}{INDENT * depth}}}"
    if isinstance(node, Nop):
        return ''
    if isinstance(node, Boolean):
        return 'true' if node.value else 'false'
    if isinstance(node, Integer):
        return str(node.value)
    if isinstance(node, Float):
        return format_float(node.value)
    if isinstance(node, String):
        return quote_string(node.value)
    raise TypeError(f"Unsupported node for unparsing: {type(node).__name__}")
