"""CLI entry point for the TinyScript interpreter.

Usage:
    python -m tinyscript [-v|-vv|-vvv] <program_file>
    python -m tinyscript [-v...] --check <program_file>
    python -m tinyscript --format <program_file>
    python -m tinyscript --emit-ast <program_file>
    python -m tinyscript [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --check       Parse and type check the program without running it
  --format      Print the program in canonical form
  --emit-ast    Parse the given program and emit an AST JSON file
  --ast         Type check and execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. A program is only executed once it has
parsed and passed the type checker.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast import Block
from .ast_json import ast_to_obj, ast_from_obj
from .debug import DebugLog
from .errors import ParseError, TypeCheckError, RuntimeFault
from .interpreter import Interpreter
from .parser import parse_program
from .typechecker import typecheck
from .unparse import unparse


def read_file(name: str) -> str:
    path = Path(name)
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str) -> Block:
    try:
        return parse_program(source)
    except ParseError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        sys.exit(1)


def check_and_run(program: Block, debug: DebugLog, run: bool = True) -> None:
    try:
        typecheck(program, debug)
    except TypeCheckError as e:
        debug.close()
        print(f"Type error: {e}", file=sys.stderr)
        sys.exit(1)
    if not run:
        debug.close()
        print("ok")
        return
    interpreter = Interpreter(debug=debug)
    try:
        interpreter.run(program)
    except RuntimeFault as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='tinyscript', description="TinyScript language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--check', action='store_true', help='type check the program without running it')
    group.add_argument('--format', action='store_true', help='print the program in canonical form')
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='TinyScript program file to execute')
    args = parser.parse_args(argv)
    debug = DebugLog(args.v)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        program = parse_or_exit(read_file(args.emit_ast))
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        source = read_file(args.ast)
        try:
            program = ast_from_obj(json.loads(source))
        except (TypeError, ValueError, KeyError) as e:
            print(f"Error: invalid AST file {args.ast}: {e}", file=sys.stderr)
            sys.exit(1)
        if not isinstance(program, Block):
            print(f"Error: invalid AST file {args.ast}: top level must be a Block", file=sys.stderr)
            sys.exit(1)
        check_and_run(program, debug)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    program = parse_or_exit(read_file(args.program))
    debug.write(1, f"parsed {len(program.statements)} statements from {args.program}")
    if args.format:
        sys.stdout.write(unparse(program))
        return
    check_and_run(program, debug, run=not args.check)


if __name__ == '__main__':
    main()
