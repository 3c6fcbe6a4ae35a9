import io
import sys
from pathlib import Path

from tinyscript.interpreter import parse_program, Interpreter
from tinyscript.typechecker import typecheck

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_program_2_sample_script(monkeypatch, capsys):
    """Test program 2: the language tour.

    It exercises every statement form, string concatenation and both
    builtins. The single readln() call is fed the token "hello", which the
    program echoes twice.
    """
    monkeypatch.setattr(sys, 'stdin', io.StringIO('hello\n'))
    source = (EXAMPLES / 'program_2.tiny').read_text(encoding='utf-8')
    ast = parse_program(source)
    typecheck(ast)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    expected = [
        'c is true', 'a is 123', 'c && true', 'b is abc', 'abc123',
        'e', 'e', 'e',
        'hello',
        '*', '*', '*', '*', '*',
        'hello',
    ]
    assert out_lines == expected
    assert interp.global_env.get('d') == 4.2
    # the loop variable lives in the top-level frame
    assert interp.global_env.get('e') == 10
