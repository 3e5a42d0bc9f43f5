# pegcut/operators.py
"""Postfix operator functions for `Parser.pipe`.

    from pegcut import operators as O
    number = P.any_of("0123456789").pipe(O.map(int))
"""

from __future__ import annotations
from typing import Any, Callable

from .combinators import Build, Map, Omit, Optional as OptionalCombinator, Parser, WhitespaceAware, WithIndices

Op = Callable[[Parser[Any]], Parser[Any]]


def map(fn: Callable[[Any], Any]) -> Op:
    return lambda p: Map(p, fn)


def optional() -> Op:
    return lambda p: OptionalCombinator(p)


def build(ctor: Callable[..., Any]) -> Op:
    return lambda p: Build(p, ctor)


def omit() -> Op:
    return lambda p: Omit(p)


def whitespace(ws: Parser[Any]) -> Op:
    def _apply(p: Parser[Any]) -> Parser[Any]:
        if not isinstance(p, WhitespaceAware):
            raise TypeError(f"{p.describe()} has no internal whitespace step")
        return p.whitespace(ws)
    return _apply


def with_indices() -> Op:
    return lambda p: WithIndices(p)
