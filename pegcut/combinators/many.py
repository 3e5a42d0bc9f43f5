# pegcut/combinators/many.py
from __future__ import annotations
import logging
from typing import Any, List, Optional

from ..core.context import ParseContext
from ..core.outcome import ErrorKind, Failure, Outcome, ParseError, failure, success
from .base import Parser, WhitespaceAware, trace_log


class Many(WhitespaceAware[List[Any]]):
    """Repetition of `element`, optionally separated by `separator`.

    Loop:
      1) reset the cut flag, parse an element from a fresh bookmark
         - failure ends the loop (rolled back) unless the element was
           mandatory or a cut was hit, in which case it propagates
      2) skip whitespace
      3) reset the cut flag, try the separator from a fresh bookmark
         - success makes the next element mandatory, then skip whitespace
         - failure ends the loop (rolled back) unless a cut was hit
    Afterwards `min <= count` and, if `max > 0`, `count <= max` must hold.
    The caller's cut flag is restored on every exit.

    An iteration (element, whitespace and separator together) that
    consumes no input ends the loop and is rolled back; its element is
    dropped unless it was mandatory. A zero-width element followed by a
    separator that consumes input is kept.
    """

    def __init__(self,
            element: Parser[Any],
            separator: Optional[Parser[Any]] = None,
            min: int = 0,
            max: int = 0,
            whitespace: Optional[Parser[Any]] = None):
        if min < 0 or max < 0:
            raise ValueError(f"Many bounds must be non-negative, got min={min} max={max}")
        if max and min > max:
            raise ValueError(f"Many min ({min}) exceeds max ({max})")
        self.element = element
        self.separator = separator
        self.min = min
        self.max = max
        self.ws = whitespace

    def parse(self, ctx: ParseContext) -> Outcome[List[Any]]:
        cursor = ctx.input
        output: List[Any] = []
        pce = ctx.cut_encountered
        must_parse = False
        try:
            while True:
                # element
                bm = cursor.bookmark()
                start = cursor.tell()
                ctx.cut_encountered = False
                r = self.element.parse(ctx)
                if isinstance(r, Failure):
                    if must_parse or ctx.cut_encountered:
                        return r
                    cursor.restore(bm)
                    break
                output.append(r.value)
                mandatory = must_parse
                must_parse = False

                ctx.cut_encountered = False
                wsr = self._skip_ws(ctx)
                if isinstance(wsr, Failure):
                    return wsr

                # separator
                if self.separator is not None:
                    ctx.cut_encountered = False
                    sep_bm = cursor.bookmark()
                    sr = self.separator.parse(ctx)
                    if isinstance(sr, Failure):
                        if ctx.cut_encountered:
                            return sr
                        cursor.restore(sep_bm)
                        break
                    must_parse = True
                    ctx.cut_encountered = False
                    wsr = self._skip_ws(ctx)
                    if isinstance(wsr, Failure):
                        return wsr

                if cursor.tell() == start:
                    # nothing consumed by element, whitespace or separator
                    self._trace_stall(start)
                    cursor.restore(bm)
                    if not mandatory:
                        output.pop()
                    break

            count = len(output)
            if count < self.min or (self.max > 0 and count > self.max):
                hi = self.max if self.max > 0 else "inf"
                return failure(ParseError.rejected(
                    self, ctx,
                    f"Expected occurrences in range {{{self.min}, {hi}}}; found {count}",
                    kind=ErrorKind.CARDINALITY,
                ))
            return success(output)
        finally:
            ctx.cut_encountered = pce

    def _trace_stall(self, pos: int) -> None:
        tl = trace_log
        if tl.isEnabledFor(logging.DEBUG):
            tl.debug(f"{self.describe()}: iteration at {pos} consumed nothing; stopping")
