import io
import math

import pytest

from tinyscript.ast import Block, FunctionCall, If, Integer, ReadVar, String
from tinyscript.environment import Environment
from tinyscript.errors import RuntimeFault, TypeCheckError
from tinyscript.interpreter import Interpreter, run_program
from tinyscript.std.io import Console
from tinyscript.types import INT64_MIN


def run(source, stdin=''):
    console = Console(stdin=io.StringIO(stdin), stdout=io.StringIO())
    interp = run_program(source, console)
    return interp, console.stdout.getvalue()


def value_of(source, name='x'):
    interp, _ = run(source)
    return interp.global_env.get(name)


def test_assignments_and_scope():
    interp, out = run('a = 1; b = 2; if (a < b) { c = a + b; }')
    assert out == ''
    assert interp.global_env.bindings() == {'a': 1, 'b': 2}


def test_echo_input():
    _, out = run('println(readln());', stdin='hi\n')
    assert out == 'hi\n'


def test_readln_reads_whitespace_delimited_tokens():
    _, out = run('a = readln(); b = readln(); println(b); println(a);', stdin='one two\n')
    assert out == 'two\none\n'


def test_readln_at_end_of_input():
    with pytest.raises(RuntimeFault) as exc:
        run('a = readln();', stdin='')
    assert exc.value.name == 'EOFError'


def test_numeric_promotion():
    assert value_of('x = 2 + 1.5;') == 3.5
    x = value_of('x = 4 / 2;')
    assert x == 2 and type(x) is int
    assert value_of('x = 3 * 0.5;') == 1.5


def test_integer_division_truncates():
    assert value_of('x = 7 / 2;') == 3
    assert value_of('x = -7 / 2;') == -3
    assert value_of('x = 7 / -2;') == -3


def test_integer_division_by_zero():
    with pytest.raises(RuntimeFault) as exc:
        run('x = 1 / 0;')
    assert exc.value.name == 'ZeroDivisionError'


def test_float_division_by_zero():
    assert value_of('x = 1.0 / 0;') == math.inf
    assert value_of('x = -1.0 / 0.0;') == -math.inf
    assert math.isnan(value_of('x = 0.0 / 0.0;'))


def test_integer_overflow_wraps():
    assert value_of('x = 9223372036854775807 + 1;') == INT64_MIN


def test_string_concatenation():
    assert value_of('x = "a" + "b";') == 'ab'


@pytest.mark.parametrize('expr, expected', [
    ('1 == 1', True),
    ('1 != 2', True),
    ('"a" != "b"', True),
    ('"a" == "a"', True),
    ('true || false', True),
    ('false || false', False),
    ('true && false', False),
    ('2 >= 2', True),
    ('1 < 1.5', True),
    ('3 <= 2', False),
    ('2.5 > 2', True),
])
def test_comparisons_and_logic(expr, expected):
    assert value_of(f'x = {expr};') is expected


def test_equality_is_type_strict():
    interp = Interpreter()
    assert interp.apply_binary_op('==', 1, 1.0) is False
    assert interp.apply_binary_op('==', True, 1) is False
    assert interp.apply_binary_op('!=', 1, 1.0) is True
    assert interp.apply_binary_op('==', 2.0, 2.0) is True


def test_block_writes_are_undone():
    interp, _ = run('x = 1; if (true) { x = 2; y = 3; }')
    assert interp.global_env.get('x') == 1
    assert 'y' not in interp.global_env


def test_for_loop():
    interp, out = run('for (i = 0; i < 3; i = i + 1) { println("tick"); }')
    assert out == 'tick\n' * 3
    assert interp.global_env.get('i') == 3


def test_for_body_writes_reset_every_iteration():
    interp, out = run('n = 0; for (i = 0; i < 2; i = i + 1) { n = n + 1; if (n == 1) { println("one"); } }')
    assert out == 'one\none\n'
    assert interp.global_env.get('n') == 0


def test_for_loop_that_never_runs():
    interp, out = run('for (i = 5; i < 3; i = i + 1) { println("never"); }')
    assert out == ''
    assert interp.global_env.get('i') == 5


def test_type_errors_stop_before_running():
    with pytest.raises(TypeCheckError):
        run('println("before"); x = "a" + 1;')


def test_unknown_variable_reads_as_absent():
    assert Interpreter().evaluate(ReadVar('nope'), Environment()) is None


def test_unknown_builtin():
    with pytest.raises(RuntimeFault) as exc:
        Interpreter().run(Block([FunctionCall('shout', String('x'))]))
    assert exc.value.name == 'NameError'


def test_condition_must_be_boolean_at_runtime():
    with pytest.raises(RuntimeFault) as exc:
        Interpreter().run(Block([If(Integer(1), Block([]))]))
    assert exc.value.name == 'TypeError'


def test_println_rejects_non_strings_at_runtime():
    with pytest.raises(RuntimeFault):
        Interpreter().run(Block([FunctionCall('println', Integer(1))]))


def test_interpreters_are_independent():
    first, _ = run('a = 1;')
    second, _ = run('b = 2;')
    assert 'a' in first.global_env
    assert 'a' not in second.global_env


def test_default_console_uses_stdout(capsys):
    run_program('println("hello");')
    assert capsys.readouterr().out == 'hello\n'


def test_debug_log(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    run('x = 1; if (true) { y = 2; }', stdin='')
    assert not (tmp_path / 'debug.txt').exists()

    console = Console(stdin=io.StringIO(''), stdout=io.StringIO())
    run_program('x = 1; if (true) { y = 2; }', console, debug_level=3)
    log = (tmp_path / 'debug.txt').read_text(encoding='utf-8').splitlines()
    assert log[0] == 'parsed 2 statements'
    assert 'x: Integer' in log
    assert 'x = 1' in log
    assert 'enter scope depth=1' in log
    assert log[-1] == 'run finished'
