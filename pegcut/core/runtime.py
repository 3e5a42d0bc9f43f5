# pegcut/core/runtime.py
"""Top-level driver.

`parse` builds a fresh `ParseContext` for every call, runs the root
parser and, unless partial parsing is allowed, requires the cursor to sit
at end of input afterwards.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import Any, Optional, Union, TYPE_CHECKING

from .context import ParseContext
from .cursor import InputCursor, StringCursor
from .outcome import (
    EXCERPT_LEN, NOTHING, ErrorKind, Failure, Outcome, ParseError, failure, result_or_raise,
)

if TYPE_CHECKING:
    from ..combinators.base import Parser

driver_log = logging.getLogger("pegcut.driver")


@dataclass(frozen=True)
class ParseOptions:
    """Driver configuration.

    - allow_partial: leftover input after a successful parse is not an error
    - whitespace: context-wide whitespace parser for sequences/repetitions
      that carry no override of their own
    - excerpt_len: characters of upcoming text quoted in the trailing-input error
    """
    allow_partial: bool = False
    whitespace: Optional["Parser[Any]"] = None
    excerpt_len: int = EXCERPT_LEN

    def with_(self, **changes: Any) -> "ParseOptions":
        return replace(self, **changes)


def _as_cursor(source: Union[str, InputCursor]) -> InputCursor:
    if isinstance(source, str):
        return StringCursor(source)
    return source


def parse_outcome(parser: "Parser[Any]",
                  source: Union[str, InputCursor],
                  options: Optional[ParseOptions] = None) -> Outcome[Any]:
    """Run `parser` over `source` without raising grammar errors."""
    opts = options or ParseOptions()
    cursor = _as_cursor(source)
    ctx = ParseContext(cursor, opts.whitespace)
    try:
        ret = parser.parse(ctx)
    except ParseError as e:
        # A read past EOF that no leaf converted.
        ret = failure(e)

    dl = driver_log
    if isinstance(ret, Failure):
        if dl.isEnabledFor(logging.DEBUG):
            dl.debug(f"parse failed: {ret.error}")
        return ret

    if not opts.allow_partial and not cursor.eof():
        err = ParseError.at(cursor, "End of input expected", kind=ErrorKind.TRAILING_INPUT,
                            parser=parser, excerpt_len=opts.excerpt_len)
        if dl.isEnabledFor(logging.DEBUG):
            dl.debug(f"parse stopped early: {err}")
        return failure(err)

    if dl.isEnabledFor(logging.DEBUG):
        dl.debug(f"parse ok: consumed {cursor.tell()} chars")
    return ret


def parse(parser: "Parser[Any]",
          source: Union[str, InputCursor],
          allow_partial: bool = False,
          *,
          whitespace: Optional["Parser[Any]"] = None,
          options: Optional[ParseOptions] = None) -> Any:
    """Parse `source` with `parser` and return the value.

    Raises `ParseError` on failure or on unconsumed trailing input (unless
    `allow_partial`). A void result is returned as None.
    """
    if options is None:
        options = ParseOptions(allow_partial=allow_partial, whitespace=whitespace)
    value = result_or_raise(parse_outcome(parser, source, options))
    return None if value is NOTHING else value
