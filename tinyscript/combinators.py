"""Parser combinators for TinyScript.

A parser is any callable taking the remaining source text and returning a
`Result`: the text left after the parser ran, the value it produced and,
if it failed, a `ParseError`. Failures are plain data here. A combinator
that tries an alternative simply inspects the error and moves on, and
nothing is raised until `parse_program` gives up at the top level.

Small parsers are glued together with `sequence`, `alternative`, `token`
and `opt`; `pattern` matches a regular expression and `transform` turns
the value of a successful parse into an AST node.
"""

from __future__ import annotations

import re
from typing import Any, Callable, NamedTuple, Optional

from .errors import ParseError


class Result(NamedTuple):
    rest: str
    value: Any = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


Parser = Callable[[str], Result]

_WHITESPACE = re.compile(r'[\t\n\f\r ]+')


def skip_whitespace(code: str) -> str:
    match = _WHITESPACE.match(code)
    if match is None:
        return code
    return code[match.end():]


def fail(code: str, message: str) -> Result:
    return Result(code, None, ParseError(message, code))


def sequence(*parsers: Parser) -> Parser:
    """Run each parser on the input left by the previous one.

    The values are collected into a list. The first failure is returned as
    is and the input is left untouched.
    """
    def parse(code: str) -> Result:
        values = []
        rest = code
        for p in parsers:
            result = p(rest)
            if not result.ok:
                return Result(code, None, result.error)
            values.append(result.value)
            rest = result.rest
        return Result(rest, values)
    return parse


def alternative(*parsers: Parser) -> Parser:
    """Try each parser against the same input and return the first success."""
    def parse(code: str) -> Result:
        for p in parsers:
            result = p(code)
            if result.ok:
                return result
        return fail(code, "couldn't match any alternative")
    return parse


def token(literal: str) -> Parser:
    """Skip leading whitespace, then require `literal` as a prefix."""
    def parse(code: str) -> Result:
        stripped = skip_whitespace(code)
        if not stripped.startswith(literal):
            return fail(code, f"expected '{literal}'")
        return Result(stripped[len(literal):], literal)
    return parse


def opt(p: Parser) -> Parser:
    """Run `p`; if it fails, succeed anyway with no value and no input consumed."""
    def parse(code: str) -> Result:
        result = p(code)
        if not result.ok:
            return Result(code, None)
        return result
    return parse


def pattern(regex: re.Pattern, expected: str) -> Parser:
    """Skip leading whitespace, then match `regex`; the value is the matched text."""
    def parse(code: str) -> Result:
        stripped = skip_whitespace(code)
        match = regex.match(stripped)
        if match is None:
            return fail(code, f"expected {expected}")
        return Result(stripped[match.end():], match.group(0))
    return parse


def transform(p: Parser, fn: Callable[[Any], Any]) -> Parser:
    """Apply `fn` to the value of a successful parse."""
    def parse(code: str) -> Result:
        result = p(code)
        if not result.ok:
            return result
        return Result(result.rest, fn(result.value))
    return parse
