# TinyScript language package
# This package provides a parser, a static type checker and a tree-walking interpreter for TinyScript.
from .errors import TinyScriptError, ParseError, TypeCheckError, RuntimeFault
from .parser import parse_program
from .typechecker import typecheck, is_well_typed
from .interpreter import run_program, compile_module, Interpreter
from .unparse import unparse

__all__ = [
    'parse_program',
    'typecheck',
    'is_well_typed',
    'run_program',
    'compile_module',
    'Interpreter',
    'unparse',
    'TinyScriptError',
    'ParseError',
    'TypeCheckError',
    'RuntimeFault',
]
