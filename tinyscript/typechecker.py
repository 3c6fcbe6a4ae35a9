"""Static type checker for TinyScript.

The checker walks a parsed program before it runs and rejects it at the
first statement whose types do not line up. It tracks the type of every
variable in scope with the same frame discipline the interpreter uses for
values: each nested Block checks its statements in a fresh child frame that
is discarded when the block ends, so a variable introduced or retyped inside
an `if` or `for` body reverts to its outer type afterwards.

Expression typing returns a `ValueType`, or None when the expression has no
valid type. Statement checking raises `TypeCheckError` carrying the
offending node.
"""

from __future__ import annotations

from typing import Optional

from .ast import Block, Boolean, Float, For, FunctionCall, If, Integer, Node, Nop, Operator, ReadVar, String, WriteVar
from .builtin_function import SIGNATURES
from .debug import DebugLog
from .environment import Environment
from .errors import TypeCheckError
from .types import NUMERIC_TYPES, ValueType
from .unparse import unparse

EQUALITY_OPS = ('==', '!=')
LOGICAL_OPS = ('&&', '||')
COMPARISON_OPS = ('>', '<', '>=', '<=')
ARITHMETIC_OPS = ('+', '-', '*', '/')

LITERAL_VALUE_TYPES = {
    Boolean: ValueType.BOOLEAN,
    Integer: ValueType.INTEGER,
    Float: ValueType.FLOAT,
    String: ValueType.STRING,
}


def operator_result_type(symbol: str, left: Optional[ValueType], right: Optional[ValueType]) -> Optional[ValueType]:
    """Result type of `left symbol right`, or None if the combination is invalid."""
    if left is None or right is None:
        return None
    if symbol in EQUALITY_OPS:
        return ValueType.BOOLEAN if left == right else None
    if symbol in LOGICAL_OPS:
        if left == ValueType.BOOLEAN and right == ValueType.BOOLEAN:
            return ValueType.BOOLEAN
        return None
    if symbol in COMPARISON_OPS:
        if left in NUMERIC_TYPES and right in NUMERIC_TYPES:
            return ValueType.BOOLEAN
        return None
    if symbol in ARITHMETIC_OPS:
        if left in NUMERIC_TYPES and right in NUMERIC_TYPES:
            if ValueType.FLOAT in (left, right):
                return ValueType.FLOAT
            return ValueType.INTEGER
        if symbol == '+' and left == ValueType.STRING and right == ValueType.STRING:
            return ValueType.STRING
    return None


class TypeChecker:
    """Checks one program. Create a new instance for every program checked."""
    def __init__(self, debug: Optional[DebugLog] = None):
        self.global_env = Environment()
        self.debug = debug if debug is not None else DebugLog()

    def check(self, program: Block) -> Environment:
        """Check the top-level block and return the frame of top-level variable types."""
        for stmt in program.statements:
            self.check_statement(stmt, self.global_env)
        self.debug.write(1, f"type check accepted {len(program.statements)} statements")
        return self.global_env

    def check_block(self, block: Block, env: Environment):
        scope = env.child()
        self.debug.write(3, f"enter scope depth={scope.depth}")
        for stmt in block.statements:
            self.check_statement(stmt, scope)
        self.debug.write(3, f"exit scope depth={scope.depth}")

    def check_statement(self, node: Node, env: Environment):
        if isinstance(node, WriteVar):
            self.check_write_var(node, env)
        elif isinstance(node, If):
            self.check_condition(node.condition, env, node)
            self.check_block(node.body, env)
        elif isinstance(node, For):
            self.check_for(node, env)
        elif isinstance(node, FunctionCall):
            self.check_function_call(node, env)
        else:
            raise TypeCheckError(f"`{unparse(node)}` is not a statement", node)

    def check_write_var(self, node: WriteVar, env: Environment):
        value_type = self.type_of(node.value, env)
        if value_type is None:
            raise TypeCheckError(f"cannot assign `{unparse(node.value)}` to {node.name}: expression has no valid type", node)
        env.set(node.name, value_type)
        self.debug.write(2, f"{node.name}: {value_type}")

    def check_for(self, node: For, env: Environment):
        for clause in (node.init, node.advance):
            if not isinstance(clause, (WriteVar, Nop)):
                raise TypeCheckError(f"for-loop clause `{unparse(clause)}` must be an assignment or empty", node)
        if isinstance(node.init, WriteVar):
            self.check_write_var(node.init, env)
        if not isinstance(node.condition, Nop):
            self.check_condition(node.condition, env, node)
        # the body first runs after init, before any advance
        self.check_block(node.body, env)
        if isinstance(node.advance, WriteVar):
            name = node.advance.name
            before = env.get(name)
            self.check_write_var(node.advance, env)
            after = env.get(name)
            # condition and body are re-run after advance and must see the same types
            if before is not None and after != before:
                raise TypeCheckError(
                    f"for-loop advance `{unparse(node.advance)}` changes {name} from {before} to {after}", node)

    def check_condition(self, condition: Node, env: Environment, owner: Node):
        if self.type_of(condition, env) != ValueType.BOOLEAN:
            raise TypeCheckError(f"condition `{unparse(condition)}` is not a Boolean", owner)

    def call_error(self, node: FunctionCall, env: Environment) -> Optional[str]:
        """Return why a builtin call is invalid, or None if it is valid."""
        signature = SIGNATURES.get(node.name)
        if signature is None:
            return f"unknown function {node.name}"
        if signature.param_type is None:
            if not isinstance(node.argument, Nop):
                return f"{node.name} takes no argument"
        elif self.type_of(node.argument, env) != signature.param_type:
            return f"{node.name} expects a {signature.param_type} argument"
        return None

    def check_function_call(self, node: FunctionCall, env: Environment):
        error = self.call_error(node, env)
        if error is not None:
            raise TypeCheckError(error, node)
        self.debug.write(2, f"call {node.name}")

    def type_of(self, node: Node, env: Environment) -> Optional[ValueType]:
        """Infer the type of an expression; None if it has no valid type."""
        literal_type = LITERAL_VALUE_TYPES.get(type(node))
        if literal_type is not None:
            return literal_type
        if isinstance(node, ReadVar):
            return env.get(node.name)
        if isinstance(node, Operator):
            left = self.type_of(node.left, env)
            right = self.type_of(node.right, env)
            return operator_result_type(node.symbol, left, right)
        if isinstance(node, FunctionCall):
            if self.call_error(node, env) is not None:
                return None
            # None also for println: its call has no usable value
            return SIGNATURES[node.name].return_type
        return None


def typecheck(program: Block, debug: Optional[DebugLog] = None) -> Environment:
    """Type check a program, raising TypeCheckError if it is rejected."""
    return TypeChecker(debug).check(program)


def is_well_typed(program: Block) -> bool:
    try:
        typecheck(program)
    except TypeCheckError:
        return False
    return True
