# pegcut/combinators/base.py
"""Parser base class and the zero-width control parsers.

A parser is an immutable grammar description with one operation,
`parse(ctx) -> Outcome`. The postfix helpers on `Parser` (`map`,
`optional`, `attempt`, ...) only build new parser values; they never
change the receiver.
"""

from __future__ import annotations
import copy
import logging
from typing import Any, Callable, Generic, Optional, TypeVar, TYPE_CHECKING

from ..core.context import ParseContext
from ..core.outcome import VOID, Outcome, ParseError, failure

if TYPE_CHECKING:
    from .transform import Located

T = TypeVar("T")
U = TypeVar("U")

trace_log = logging.getLogger("pegcut.trace")


class Parser(Generic[T]):
    label: Optional[str] = None

    def parse(self, ctx: ParseContext) -> Outcome[T]:
        raise NotImplementedError

    def describe(self) -> str:
        return self.label or type(self).__name__

    def __repr__(self) -> str:
        return f"<{self.describe()}>"

    # ---- postfix construction ----
    def named(self, label: str) -> "Parser[T]":
        clone = copy.copy(self)
        clone.label = label
        return clone

    def map(self, fn: Callable[[T], U]) -> "Parser[U]":
        from .transform import Map
        return Map(self, fn)

    def omit(self) -> "Parser[Any]":
        from .transform import Omit
        return Omit(self)

    def build(self, ctor: Callable[..., U]) -> "Parser[U]":
        from .transform import Build
        return Build(self, ctor)

    def with_indices(self) -> "Parser[Located]":
        from .transform import WithIndices
        return WithIndices(self)

    def optional(self) -> "Parser[Optional[T]]":
        from .optional import Optional as OptionalCombinator
        return OptionalCombinator(self)

    def attempt(self) -> "Parser[T]":
        return Attempt(self)

    def pipe(self, op: Callable[["Parser[T]"], "Parser[U]"]) -> "Parser[U]":
        """Apply an operator function: `p.pipe(ops.map(f))`."""
        return op(self)

    def __or__(self, other: "Parser[Any]") -> "Parser[Any]":
        from .choice import Choice
        if isinstance(self, Choice) and self.label is None:
            return Choice(*self.alternatives, other)
        return Choice(self, other)


class WhitespaceAware(Parser[T]):
    """Combinator owning an interleaved whitespace step.

    An instance override wins; otherwise the context's whitespace parser
    is used; otherwise nothing is skipped.
    """
    ws: Optional[Parser[Any]] = None

    def whitespace(self, ws: Optional[Parser[Any]]) -> "WhitespaceAware[T]":
        clone = copy.copy(self)
        clone.ws = ws
        return clone

    def _skip_ws(self, ctx: ParseContext) -> Outcome[Any]:
        if self.ws is not None:
            return self.ws.parse(ctx)
        return ctx.skip_whitespace()


class Pass(Parser[Any]):
    """Always succeeds, consumes nothing, produces no value."""

    def parse(self, ctx: ParseContext) -> Outcome[Any]:
        return VOID


class Fail(Parser[Any]):
    def __init__(self, message: Optional[str] = None):
        self.message = message

    def parse(self, ctx: ParseContext) -> Outcome[Any]:
        return failure(ParseError.rejected(self, ctx, self.message))


class Cut(Parser[Any]):
    """Zero-width commit marker."""

    def parse(self, ctx: ParseContext) -> Outcome[Any]:
        ctx.cut_encountered = True
        return VOID

    def describe(self) -> str:
        return self.label or "^"


class Attempt(Parser[T]):
    """Scope a cut to the wrapped parser: the flag is cleared afterwards
    whatever the outcome, so an enclosing Choice may still try siblings.
    """

    def __init__(self, parser: Parser[T]):
        self.parser = parser

    def parse(self, ctx: ParseContext) -> Outcome[T]:
        ret = self.parser.parse(ctx)
        ctx.cut_encountered = False
        return ret


class Ref(Parser[T]):
    """Lazily resolved reference, for self/mutually recursive rules."""

    def __init__(self, supplier: Callable[[], Parser[T]], label: Optional[str] = None):
        self._supplier = supplier
        self._parser: Optional[Parser[T]] = None
        self.label = label

    def resolve(self) -> Parser[T]:
        # Resolution is idempotent, so a racing double resolve is harmless.
        if self._parser is None:
            self._parser = self._supplier()
        return self._parser

    def parse(self, ctx: ParseContext) -> Outcome[T]:
        return self.resolve().parse(ctx)

    def describe(self) -> str:
        if self.label:
            return self.label
        if self._parser is not None:
            return self._parser.describe()
        return "Ref"
