from .console import Console
from tinyscript.builtin_function import BuiltinFunction, PRINTLN, READLN
from tinyscript.errors import RuntimeFault
from tinyscript.types import type_name
from typing import Any, Dict, Optional

__all__ = ['Console', 'populate_io_builtins']


def populate_io_builtins(console: Optional[Console] = None) -> Dict[str, BuiltinFunction]:
    console = console if console is not None else Console()

    def std_println(arg: Any) -> None:
        if not isinstance(arg, str):
            raise RuntimeFault('TypeError', f'println argument must be String, got {type_name(arg)}')
        console.write_line(arg)

    def std_readln() -> str:
        return console.read_token()

    return {
        'println': BuiltinFunction(PRINTLN, std_println),
        'readln': BuiltinFunction(READLN, std_readln),
    }
