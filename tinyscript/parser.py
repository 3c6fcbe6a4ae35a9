"""Parser for the TinyScript language.

The grammar is written directly as functions built from the combinators in
`tinyscript.combinators`. Every rule skips leading whitespace, takes the
remaining source text and returns a `Result` carrying the parsed node or a
`ParseError` describing what was expected.

Expressions deliberately do not nest operators: an operator expression is
exactly `operand SYMBOL operand`, where an operand is any expression
without an operator. Chains like `a + b + c` must be parenthesised,
`(a + b) + c`.

The `parse_program` function is the public entry point and returns the
top-level `Block` of the program.
"""

from __future__ import annotations

import math
import re
from typing import Any, List

from .ast import Block, Boolean, Float, For, FunctionCall, If, Integer, Nop, Operator, ReadVar, String, WriteVar
from .combinators import Result, alternative, fail, opt, pattern, sequence, skip_whitespace, token, transform
from .errors import ParseError
from .types import INT64_MAX, INT64_MIN

# Longest symbols first so that `>=` is never read as `>` followed by `=`.
OPERATORS = ('>=', '<=', '==', '!=', '&&', '||', '+', '-', '*', '/', '>', '<')

NAME_RE = re.compile(r'[A-Za-z][A-Za-z0-9]*')
INTEGER_RE = re.compile(r'-?[0-9]+')
FLOAT_RE = re.compile(r'-?[0-9]+\.[0-9]+')
NAME_CHAR_RE = re.compile(r'[A-Za-z0-9]')

STRING_ESCAPES = {'r': '\r', 'n': '\n', 't': '\t'}


def _or_nop(value: Any) -> Any:
    return Nop() if value is None else value


def parse_name(code: str) -> Result:
    return pattern(NAME_RE, 'a name')(code)


def parse_read_var(code: str) -> Result:
    return transform(parse_name, ReadVar)(code)


def parse_write_var(code: str) -> Result:
    """name = expression"""
    return transform(
        sequence(parse_name, token('='), parse_expression),
        lambda v: WriteVar(v[0], v[2]),
    )(code)


def parse_integer(code: str) -> Result:
    result = pattern(INTEGER_RE, 'an integer')(code)
    if not result.ok:
        return result
    value = int(result.value)
    if not INT64_MIN <= value <= INT64_MAX:
        return fail(code, f"integer literal {result.value} out of range")
    return Result(result.rest, Integer(value))


def parse_float(code: str) -> Result:
    result = pattern(FLOAT_RE, 'a float')(code)
    if not result.ok:
        return result
    value = float(result.value)
    if not math.isfinite(value):
        return fail(code, "float literal out of range")
    return Result(result.rest, Float(value))


def parse_string(code: str) -> Result:
    """A double-quoted string; \\r, \\n and \\t are decoded, any other \\x is x."""
    stripped = skip_whitespace(code)
    if not stripped.startswith('"'):
        return fail(code, 'expected a string')
    chars: List[str] = []
    i = 1
    length = len(stripped)
    while i < length:
        c = stripped[i]
        if c == '\\' and i + 1 < length:
            escaped = stripped[i + 1]
            chars.append(STRING_ESCAPES.get(escaped, escaped))
            i += 2
            continue
        if c == '"':
            return Result(stripped[i + 1:], String(''.join(chars)))
        chars.append(c)
        i += 1
    return fail(code, 'unterminated string literal')


def parse_boolean(code: str) -> Result:
    stripped = skip_whitespace(code)
    for word, value in (('true', True), ('false', False)):
        if stripped.startswith(word):
            rest = stripped[len(word):]
            # `trueish` is a name, not `true` followed by `ish`
            if not NAME_CHAR_RE.match(rest):
                return Result(rest, Boolean(value))
    return fail(code, 'expected true or false')


def parse_parenthesized(code: str) -> Result:
    return transform(
        sequence(token('('), parse_expression, token(')')),
        lambda v: v[1],
    )(code)


def parse_function_call(code: str) -> Result:
    """name ( [expression] ) -- at most one argument."""
    return transform(
        sequence(parse_name, token('('), opt(parse_expression), token(')')),
        lambda v: FunctionCall(v[0], _or_nop(v[2])),
    )(code)


def parse_expression_without_operator(code: str) -> Result:
    # float before integer, function call before boolean and read-var
    result = alternative(
        parse_parenthesized,
        parse_string,
        parse_float,
        parse_integer,
        parse_function_call,
        parse_boolean,
        parse_read_var,
    )(code)
    if not result.ok:
        return fail(code, 'expected an expression')
    return result


def parse_operator_symbol(code: str) -> Result:
    result = alternative(*(token(symbol) for symbol in OPERATORS))(code)
    if not result.ok:
        return fail(code, 'expected an operator')
    return result


def parse_operator(code: str) -> Result:
    """operand SYMBOL operand"""
    return transform(
        sequence(parse_expression_without_operator, parse_operator_symbol, parse_expression_without_operator),
        lambda v: Operator(v[1], v[0], v[2]),
    )(code)


def parse_expression(code: str) -> Result:
    result = alternative(parse_operator, parse_expression_without_operator)(code)
    if not result.ok:
        return fail(code, 'expected an expression')
    return result


def parse_if(code: str) -> Result:
    """if ( expression ) { block }"""
    return transform(
        sequence(token('if'), token('('), parse_expression, token(')'), token('{'), parse_block, token('}')),
        lambda v: If(v[2], v[5]),
    )(code)


def parse_for(code: str) -> Result:
    """for ( [write-var] ; [expression] ; [write-var] ) { block }"""
    return transform(
        sequence(
            token('for'),
            token('('),
            opt(parse_write_var),
            token(';'),
            opt(parse_expression),
            token(';'),
            opt(parse_write_var),
            token(')'),
            token('{'),
            parse_block,
            token('}'),
        ),
        lambda v: For(_or_nop(v[2]), _or_nop(v[4]), _or_nop(v[6]), v[9]),
    )(code)


def parse_statement(code: str) -> Result:
    return alternative(
        transform(sequence(parse_write_var, token(';')), lambda v: v[0]),
        transform(sequence(parse_function_call, token(';')), lambda v: v[0]),
        parse_if,
        parse_for,
    )(code)


def parse_block(code: str) -> Result:
    """Collect statements until none matches. Never fails."""
    statements = []
    while True:
        result = parse_statement(code)
        if not result.ok:
            return Result(code, Block(statements))
        statements.append(result.value)
        code = result.rest


def _location(source: str, rest: str):
    offset = len(source) - len(rest)
    line = source.count('\n', 0, offset) + 1
    column = offset - (source.rfind('\n', 0, offset) + 1) + 1
    return line, column


def parse_program(source: str) -> Block:
    """Parse TinyScript source code into its top-level Block.

    Raises ParseError naming the unconsumed input if anything but
    whitespace is left after the last statement that could be parsed.
    """
    result = parse_block(source)
    rest = skip_whitespace(result.rest)
    if rest:
        line, column = _location(source, rest)
        snippet = rest.splitlines()[0]
        if len(snippet) > 40:
            snippet = snippet[:40] + '...'
        raise ParseError(f"couldn't continue parsing after: `{snippet}`", rest, line, column)
    return result.value
