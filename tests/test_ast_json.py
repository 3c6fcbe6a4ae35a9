import json
from pathlib import Path

import pytest

from tinyscript.ast import Block, Boolean, Float, If, Integer, Nop, NodeKind, NODE_CLASSES, WriteVar
from tinyscript.ast_json import ast_from_obj, ast_to_obj
from tinyscript.parser import parse_program

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_every_kind_has_a_class():
    assert set(NODE_CLASSES) == set(NodeKind)
    for kind, cls in NODE_CLASSES.items():
        assert cls.kind is kind


def test_literal_encoding():
    assert ast_to_obj(Integer(3)) == {'type': 'Integer', 'value': 3}
    assert ast_to_obj(Float(0.5)) == {'type': 'Float', 'value': 0.5}
    assert ast_to_obj(Nop()) == {'type': 'Nop'}


def test_statement_encoding():
    obj = ast_to_obj(Block([WriteVar('a', Integer(1))]))
    assert obj == {
        'type': 'Block',
        'statements': [{'type': 'WriteVar', 'name': 'a', 'value': {'type': 'Integer', 'value': 1}}],
    }


@pytest.mark.parametrize('name', ['program_2.tiny', 'program_3.tiny', 'program_5.tiny'])
def test_json_round_trip(name):
    program = parse_program((EXAMPLES / name).read_text(encoding='utf-8'))
    text = json.dumps(ast_to_obj(program))
    assert ast_from_obj(json.loads(text)) == program


def test_invalid_objects():
    with pytest.raises(TypeError):
        ast_from_obj(['Block'])
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'While'})
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'If', 'condition': {'type': 'Boolean', 'value': True}, 'body': {'type': 'Nop'}})
    with pytest.raises(TypeError):
        ast_to_obj(If)


def test_literal_values_must_have_the_literal_type():
    assert ast_from_obj({'type': 'Boolean', 'value': False}) == Boolean(False)
    assert ast_from_obj({'type': 'Float', 'value': 2}) == Float(2.0)
    for obj in (
        {'type': 'Boolean', 'value': 'false'},
        {'type': 'Integer', 'value': '3'},
        {'type': 'Integer', 'value': True},
        {'type': 'Float', 'value': 'nan'},
        {'type': 'String', 'value': 5},
    ):
        with pytest.raises(ValueError):
            ast_from_obj(obj)
