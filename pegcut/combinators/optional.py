# pegcut/combinators/optional.py
from __future__ import annotations
from typing import Any, Optional as _Opt

from ..core.context import ParseContext
from ..core.outcome import VOID, Failure, Outcome, ParseError, failure, success
from .base import Parser, T


class Optional(Parser[_Opt[T]]):
    """Zero or one `parser`.

    Absence (a failure without cut) rolls back and yields None. A failure
    after a cut is not absence and propagates. The caller's cut flag is
    restored either way.
    """

    def __init__(self, parser: Parser[T]):
        self.parser = parser

    def parse(self, ctx: ParseContext) -> Outcome[_Opt[T]]:
        cursor = ctx.input
        bm = cursor.bookmark()
        pce = ctx.cut_encountered
        ctx.cut_encountered = False
        ret: Outcome[Any] = self.parser.parse(ctx)
        if isinstance(ret, Failure) and not ctx.cut_encountered:
            cursor.restore(bm)
            ret = success(None)
        ctx.cut_encountered = pce
        return ret


class Lookahead(Parser[Any]):
    """Zero-width predicate: `&p` (negate=False) or `!p` (negate=True).

    The cursor and the caller's cut flag are always restored; the
    predicate never commits.
    """

    def __init__(self, parser: Parser[Any], negate: bool = False):
        self.parser = parser
        self.negate = negate

    def parse(self, ctx: ParseContext) -> Outcome[Any]:
        cursor = ctx.input
        bm = cursor.bookmark()
        pce = ctx.cut_encountered
        ctx.cut_encountered = False
        r = self.parser.parse(ctx)
        cursor.restore(bm)
        ctx.cut_encountered = pce
        matched = not isinstance(r, Failure)
        if matched != self.negate:
            return VOID
        if self.negate:
            return failure(ParseError.rejected(self, ctx, f"Unexpected {self.parser.describe()}"))
        return r

    def describe(self) -> str:
        if self.label:
            return self.label
        return ("!" if self.negate else "&") + self.parser.describe()
