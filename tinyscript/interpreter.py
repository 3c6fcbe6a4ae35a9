"""Tree-walking interpreter for TinyScript.

The interpreter executes a program that the type checker has accepted. It
walks the AST directly: statements are executed via `execute()` and
expressions are evaluated via `evaluate()`, both dispatching on the node
class.

Variables live in a stack of `Environment` frames. Top-level statements
run in the interpreter's root frame (`global_env`); every nested Block
(an `if` body, or a `for` body on each iteration) runs in a fresh child
frame that is dropped when the block ends. All writes made inside a block
are therefore undone on exit, even writes to variables that existed before
it. The type checker applies the same discipline to variable types.

Runtime faults (integer division by zero, a value of the wrong type reaching
a condition or an operator, an unknown builtin) are raised as
`RuntimeFault` and end the run.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .ast import Block, Boolean, Float, For, FunctionCall, If, Integer, Node, Nop, Operator, ReadVar, String, WriteVar
from .builtin_function import BuiltinFunction
from .debug import DebugLog
from .environment import Environment
from .errors import RuntimeFault
from .parser import parse_program
from .std.io import Console, populate_io_builtins
from .typechecker import typecheck
from .types import float_divide, is_numeric, truncate_divide, type_name, type_of_value, wrap_int64


class Interpreter:
    """Core interpreter that executes a TinyScript AST."""
    def __init__(self, console: Optional[Console] = None, debug_level: int = 0, debug_file: str = 'debug.txt',
                 debug: Optional[DebugLog] = None):
        self.global_env = Environment()
        self.console = console if console is not None else Console()
        self.debug_log = debug if debug is not None else DebugLog(debug_level, debug_file)
        self.builtins: Dict[str, BuiltinFunction] = populate_io_builtins(self.console)

    def debug(self, level: int, msg: str):
        self.debug_log.write(level, msg)

    # Public API
    def run(self, program: Block, env: Optional[Environment] = None) -> Environment:
        """Execute the top-level statements and return the frame they ran in."""
        if env is None:
            env = self.global_env
        self.debug(1, f"run {len(program.statements)} statements")
        try:
            for stmt in program.statements:
                self.execute(stmt, env)
        finally:
            self.debug(1, "run finished")
            self.debug_log.close()
        return env

    def execute_block(self, block: Block, env: Environment):
        scope = env.child()
        self.debug(3, f"enter scope depth={scope.depth}")
        for stmt in block.statements:
            self.execute(stmt, scope)
        self.debug(3, f"exit scope depth={scope.depth}")

    def execute(self, node: Node, env: Environment):
        if isinstance(node, WriteVar):
            value = self.evaluate(node.value, env)
            env.set(node.name, value)
            self.debug(2, f"{node.name} = {value!r}")
            return
        if isinstance(node, If):
            if self.condition(node.condition, env):
                self.execute_block(node.body, env)
            return
        if isinstance(node, For):
            self.execute(node.init, env)
            while isinstance(node.condition, Nop) or self.condition(node.condition, env):
                self.execute_block(node.body, env)
                self.execute(node.advance, env)
            return
        if isinstance(node, Block):
            self.execute_block(node, env)
            return
        if isinstance(node, Nop):
            return
        # expression statement, e.g. a builtin call; the value is discarded
        self.evaluate(node, env)

    def condition(self, node: Node, env: Environment) -> bool:
        value = self.evaluate(node, env)
        if not isinstance(value, bool):
            raise RuntimeFault('TypeError', f'condition must be Boolean, got {type_name(value)}')
        return value

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, (Boolean, Integer, Float, String)):
            return node.value
        if isinstance(node, ReadVar):
            # a name never written reads as the absent value
            return env.get(node.name)
        if isinstance(node, Operator):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.symbol, left, right)
        if isinstance(node, FunctionCall):
            return self.call_builtin(node, env)
        if isinstance(node, Nop):
            return None
        raise RuntimeFault('TypeError', f'{type(node).__name__} is a statement, not an expression')

    def call_builtin(self, node: FunctionCall, env: Environment) -> Any:
        func = self.builtins.get(node.name)
        if func is None:
            raise RuntimeFault('NameError', f'unknown function {node.name}')
        self.debug(2, f"call {node.name}")
        if func.signature.param_type is None:
            return func.fn()
        return func.fn(self.evaluate(node.argument, env))

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if op in ('==', '!='):
            eq = self.equal_values(a, b)
            return eq if op == '==' else not eq
        if op in ('&&', '||'):
            if not isinstance(a, bool) or not isinstance(b, bool):
                raise RuntimeFault('TypeError', f'{op} requires Boolean operands, got {type_name(a)} and {type_name(b)}')
            return (a and b) if op == '&&' else (a or b)
        if op == '+' and isinstance(a, str) and isinstance(b, str):
            return a + b
        if not is_numeric(a) or not is_numeric(b):
            raise RuntimeFault('TypeError', f'unsupported {op} for {type_name(a)} and {type_name(b)}')
        if isinstance(a, int) and isinstance(b, int):
            return self.integer_op(op, a, b)
        return self.float_op(op, float(a), float(b))

    def integer_op(self, op: str, a: int, b: int) -> Any:
        if op == '+':
            return wrap_int64(a + b)
        if op == '-':
            return wrap_int64(a - b)
        if op == '*':
            return wrap_int64(a * b)
        if op == '/':
            if b == 0:
                raise RuntimeFault('ZeroDivisionError', 'integer division by zero')
            return truncate_divide(a, b)
        return self.compare(op, a, b)

    def float_op(self, op: str, a: float, b: float) -> Any:
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if op == '/':
            return float_divide(a, b)
        return self.compare(op, a, b)

    def compare(self, op: str, a: Any, b: Any) -> bool:
        if op == '<':
            return a < b
        if op == '>':
            return a > b
        if op == '<=':
            return a <= b
        if op == '>=':
            return a >= b
        raise RuntimeFault('TypeError', f'unknown operator {op}')

    def equal_values(self, a: Any, b: Any) -> bool:
        # values of different types are never equal, so 1 != 1.0 and true != 1
        if type_of_value(a) != type_of_value(b):
            return False
        return a == b


def run_program(source: str, console: Optional[Console] = None, debug_level: int = 0) -> Interpreter:
    """Parse, type check and run a TinyScript program from a source string."""
    debug = DebugLog(debug_level)
    try:
        program = parse_program(source)
        debug.write(1, f"parsed {len(program.statements)} statements")
        typecheck(program, debug)
        interpreter = Interpreter(console, debug=debug)
        interpreter.run(program)
    finally:
        debug.close()
    return interpreter


def compile_module(file_path: str, console: Optional[Console] = None, debug_level: int = 0) -> Interpreter:
    """Parse, type check and run a TinyScript file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, console, debug_level)
