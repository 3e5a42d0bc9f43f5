# pegcut/combinators/choice.py
from __future__ import annotations
import logging
from typing import Any

from ..core.context import ParseContext
from ..core.outcome import Outcome, ParseError, Success, failure
from .base import Parser, trace_log


class Choice(Parser[Any]):
    """Ordered alternation: the first alternative to succeed wins.

    The cursor is rolled back between failed alternatives. An alternative
    that fails after setting the cut flag ends the choice with its own
    failure; siblings are not tried.
    """

    def __init__(self, *alternatives: Parser[Any]):
        self.alternatives = tuple(alternatives)

    def parse(self, ctx: ParseContext) -> Outcome[Any]:
        cursor = ctx.input
        bm = cursor.bookmark()
        tl = trace_log
        for i, alt in enumerate(self.alternatives):
            r = alt.parse(ctx)
            if isinstance(r, Success):
                return r
            if ctx.cut_encountered:
                if tl.isEnabledFor(logging.DEBUG):
                    tl.debug(f"{self.describe()}: alternative #{i} ({alt.describe()}) "
                             f"failed after cut at {cursor.tell()}; not backtracking")
                return r
            cursor.restore(bm)
        return failure(ParseError.rejected(self, ctx, f"No alternative matched in {self.describe()}"))
