from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from tinyscript.types import ValueType


@dataclass(frozen=True)
class BuiltinSignature:
    """Static shape of a builtin.

    `param_type` is None for a builtin that takes no argument, and
    `return_type` is None for one whose result is not a usable value.
    """
    name: str
    param_type: Optional[ValueType]
    return_type: Optional[ValueType]


@dataclass
class BuiltinFunction:
    signature: BuiltinSignature
    fn: Callable[..., Any]

    @property
    def name(self) -> str:
        return self.signature.name

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


PRINTLN = BuiltinSignature('println', ValueType.STRING, None)
READLN = BuiltinSignature('readln', None, ValueType.STRING)

SIGNATURES: Dict[str, BuiltinSignature] = {sig.name: sig for sig in (PRINTLN, READLN)}
