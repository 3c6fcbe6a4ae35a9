from typing import Any, Optional


class TinyScriptError(Exception):
    """Base class for every error reported by the TinyScript toolchain."""


class ParseError(TinyScriptError):
    """A grammar rule failed to match.

    Inside the combinators a ParseError is returned as data and never raised;
    only `parse_program` raises it, when input remains unconsumed.
    """
    def __init__(self, message: str, remaining: str = '', line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.remaining = remaining
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} at {line}:{column}"
        super().__init__(message)


class TypeCheckError(TinyScriptError):
    """Exception raised when the type checker rejects a program."""
    def __init__(self, message: str, node: Any = None):
        super().__init__(message)
        self.message = message
        self.node = node


class RuntimeFault(TinyScriptError):
    """Fatal error raised while evaluating a type-checked program."""
    def __init__(self, name: str, message: str):
        super().__init__(f"{name}: {message}")
        self.name = name
        self.message = message
