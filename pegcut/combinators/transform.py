# pegcut/combinators/transform.py
"""Value-shaping wrappers. None of them touch the cursor or the cut flag."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Generic

from ..core.context import ParseContext
from ..core.outcome import NOTHING, VOID, Failure, Outcome, success
from .base import Parser, T, U


@dataclass(frozen=True)
class Located(Generic[T]):
    value: T
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


class Map(Parser[U]):
    def __init__(self, parser: Parser[T], fn: Callable[[T], U]):
        self.parser = parser
        self.fn = fn

    def parse(self, ctx: ParseContext) -> Outcome[U]:
        r = self.parser.parse(ctx)
        if isinstance(r, Failure):
            return r
        return success(self.fn(r.value))


class Omit(Parser[Any]):
    """Run `parser` and drop its value."""

    def __init__(self, parser: Parser[Any]):
        self.parser = parser

    def parse(self, ctx: ParseContext) -> Outcome[Any]:
        r = self.parser.parse(ctx)
        if isinstance(r, Failure):
            return r
        return VOID


class Build(Parser[U]):
    """Instantiate `ctor(*values)` from a sequence result.

    A non-list value is passed as the single argument; a void value calls
    `ctor()`.
    """

    def __init__(self, parser: Parser[Any], ctor: Callable[..., U]):
        self.parser = parser
        self.ctor = ctor

    def parse(self, ctx: ParseContext) -> Outcome[U]:
        r = self.parser.parse(ctx)
        if isinstance(r, Failure):
            return r
        v = r.value
        if isinstance(v, list):
            return success(self.ctor(*v))
        if v is NOTHING:
            return success(self.ctor())
        return success(self.ctor(v))


class WithIndices(Parser[Located[T]]):
    def __init__(self, parser: Parser[T]):
        self.parser = parser

    def parse(self, ctx: ParseContext) -> Outcome[Located[T]]:
        start = ctx.input.tell()
        r = self.parser.parse(ctx)
        if isinstance(r, Failure):
            return r
        return success(Located(r.value, start, ctx.input.tell() - start))
