"""Abstract Syntax Tree (AST) definitions for the TinyScript language.

The AST is a closed set of node classes. Every class carries a `kind`
discriminant (a `NodeKind`) naming its variant, which the type checker,
the interpreter and the serialisers dispatch on. The tree is built once by
the parser and is read-only afterwards, so the nodes are frozen
dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Union


class NodeKind(Enum):
    BLOCK = 'Block'
    READ_VAR = 'ReadVar'
    WRITE_VAR = 'WriteVar'
    OPERATOR = 'Operator'
    FUNCTION_CALL = 'FunctionCall'
    IF = 'If'
    FOR = 'For'
    NOP = 'Nop'
    BOOLEAN = 'Boolean'
    INTEGER = 'Integer'
    FLOAT = 'Float'
    STRING = 'String'


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    kind: ClassVar[NodeKind]


@dataclass(frozen=True)
class Block(Node):
    kind: ClassVar[NodeKind] = NodeKind.BLOCK
    statements: List['Expr'] = field(default_factory=list)


@dataclass(frozen=True)
class ReadVar(Node):
    kind: ClassVar[NodeKind] = NodeKind.READ_VAR
    name: str


@dataclass(frozen=True)
class WriteVar(Node):
    kind: ClassVar[NodeKind] = NodeKind.WRITE_VAR
    name: str
    value: 'Expr'


@dataclass(frozen=True)
class Operator(Node):
    kind: ClassVar[NodeKind] = NodeKind.OPERATOR
    symbol: str
    left: 'Expr'
    right: 'Expr'


@dataclass(frozen=True)
class FunctionCall(Node):
    kind: ClassVar[NodeKind] = NodeKind.FUNCTION_CALL
    name: str
    argument: 'Expr'  # Nop when the call has no argument


@dataclass(frozen=True)
class If(Node):
    kind: ClassVar[NodeKind] = NodeKind.IF
    condition: 'Expr'
    body: Block


@dataclass(frozen=True)
class For(Node):
    kind: ClassVar[NodeKind] = NodeKind.FOR
    init: 'Expr'       # WriteVar or Nop
    condition: 'Expr'  # Nop loops forever
    advance: 'Expr'    # WriteVar or Nop
    body: Block


@dataclass(frozen=True)
class Nop(Node):
    """Placeholder for an absent for-loop clause or call argument."""
    kind: ClassVar[NodeKind] = NodeKind.NOP


@dataclass(frozen=True)
class Boolean(Node):
    kind: ClassVar[NodeKind] = NodeKind.BOOLEAN
    value: bool


@dataclass(frozen=True)
class Integer(Node):
    kind: ClassVar[NodeKind] = NodeKind.INTEGER
    value: int


@dataclass(frozen=True)
class Float(Node):
    kind: ClassVar[NodeKind] = NodeKind.FLOAT
    value: float


@dataclass(frozen=True)
class String(Node):
    kind: ClassVar[NodeKind] = NodeKind.STRING
    value: str


Expr = Union[Block, ReadVar, WriteVar, Operator, FunctionCall, If, For, Nop, Boolean, Integer, Float, String]

NODE_TYPES = (Block, ReadVar, WriteVar, Operator, FunctionCall, If, For, Nop, Boolean, Integer, Float, String)

NODE_CLASSES = {cls.kind: cls for cls in NODE_TYPES}
