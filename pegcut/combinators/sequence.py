# pegcut/combinators/sequence.py
from __future__ import annotations
from typing import Any, List, Optional

from ..core.context import ParseContext
from ..core.outcome import NOTHING, Failure, Outcome, success
from .base import Parser, WhitespaceAware


class Sequence(WhitespaceAware[List[Any]]):
    """Ordered conjunction.

    Whitespace is skipped before every element except the first. The
    first failing element (or whitespace step) ends the sequence and its
    failure is returned as is, cut state included. Void results are left
    out of the output list.
    """

    def __init__(self, *parsers: Parser[Any], whitespace: Optional[Parser[Any]] = None):
        self.parsers = tuple(parsers)
        self.ws = whitespace

    def parse(self, ctx: ParseContext) -> Outcome[List[Any]]:
        results: List[Any] = []
        for i, p in enumerate(self.parsers):
            if i:
                wsr = self._skip_ws(ctx)
                if isinstance(wsr, Failure):
                    return wsr
            r = p.parse(ctx)
            if isinstance(r, Failure):
                return r
            if r.value is not NOTHING:
                results.append(r.value)
        return success(results)
