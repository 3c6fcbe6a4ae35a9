from pathlib import Path

import pytest

from tinyscript.ast import Block, Float, For, Integer, Nop, Operator, ReadVar, String, WriteVar
from tinyscript.parser import parse_program
from tinyscript.unparse import quote_string, unparse

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_canonical_layout():
    program = parse_program('a = 1;   if (a<2) {println("x");}')
    assert unparse(program) == 'a = 1;\nif (a < 2) {\n    println("x");\n}\n'


def test_nested_bodies_are_indented():
    program = parse_program('for (i = 0; i < 2; i = i + 1) { if (true) { x = readln(); } }')
    assert unparse(program) == (
        'for (i = 0; i < 2; i = i + 1) {\n'
        '    if (true) {\n'
        '        x = readln();\n'
        '    }\n'
        '}\n'
    )


def test_empty_clauses():
    assert unparse(For(Nop(), Nop(), Nop(), Block([]))) == 'for (; ; ) {\n}'
    assert unparse(Block([])) == ''


def test_nested_operators_are_parenthesised():
    expr = Operator('+', Operator('+', ReadVar('a'), ReadVar('b')), ReadVar('c'))
    assert unparse(expr) == '(a + b) + c'


def test_quote_string():
    assert quote_string('say "hi"\n') == '"say \\"hi\\"\\n"'
    assert quote_string('a\\b\t\r') == '"a\\\\b\\t\\r"'


@pytest.mark.parametrize('value, text', [
    (0.1, '0.1'),
    (3.0, '3.0'),
    (-2.5, '-2.5'),
    (1e-05, '0.00001'),
    (1e16, '10000000000000000.0'),
])
def test_floats_are_written_positionally(value, text):
    assert unparse(Float(value)) == text
    assert parse_program(f'x = {text};') == Block([WriteVar('x', Float(value))])


@pytest.mark.parametrize('source', [
    'a = 1; b = -2; c = a - -3;',
    'x = "tab\\there \\"quoted\\" back\\\\slash";',
    'x = ((1 + 2) * (3 - 4)) / 5.25;',
    'if ((a == b) && (c || false)) { println(readln()); }',
    'for (;;) { } for (i = 0;; ) { x = i; }',
    'for (x = 1.0; x < 100.0; x = x * 3.0) { if (x > 10) { println("big"); } }',
])
def test_round_trip(source):
    program = parse_program(source)
    assert parse_program(unparse(program)) == program


@pytest.mark.parametrize('name', ['program_1.tiny', 'program_2.tiny', 'program_3.tiny', 'program_4.tiny', 'program_5.tiny'])
def test_examples_round_trip(name):
    program = parse_program((EXAMPLES / name).read_text(encoding='utf-8'))
    text = unparse(program)
    assert parse_program(text) == program
    # the canonical form is a fixed point
    assert unparse(parse_program(text)) == text


def test_unparse_rejects_foreign_objects():
    with pytest.raises(TypeError):
        unparse(Integer)
    with pytest.raises(TypeError):
        unparse(String)
