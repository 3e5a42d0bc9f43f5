# pegcut/core/outcome.py
"""Parse outcomes and the structured parse error.

Every parse step returns an `Outcome`: either `Success(value)` or
`Failure(error)`. Expected grammar mismatches never raise. Two kinds of
`ParseError` are raised during parsing: the cursor's read-past-end
error, which leaf matchers normally catch and convert, and capability
errors (a pattern leaf on a cursor without pattern support), which are
not backtracked over.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, Tuple, TypeVar, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .cursor import InputCursor

T = TypeVar("T")

EXCERPT_LEN = 5


class _Nothing:
    """Void parse result. Sequences drop it from their output."""
    _instance: Optional["_Nothing"] = None

    def __new__(cls) -> "_Nothing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOTHING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Nothing, ())


NOTHING: Any = _Nothing()


class ErrorKind(Enum):
    END_OF_INPUT = "end-of-input"
    UNEXPECTED_TOKEN = "unexpected-token"
    CARDINALITY = "cardinality-violation"
    TRAILING_INPUT = "trailing-input"
    NO_WHITESPACE_SUPPORT = "no-whitespace-support"
    NO_PATTERN_SUPPORT = "no-pattern-support"
    REJECTED = "rejected"


def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """[start, end) of the line containing pos."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end


def caret_snippet(src: str, pos: int) -> str:
    """The line holding `pos` with a caret under that column."""
    start, end = _line_bounds(src, pos)
    line = src[start:end]
    caret = " " * (pos - start) + "^"
    return f"{line}\n{caret}"


class ParseError(SyntaxError):
    """A single-shot parse failure: message, position and an excerpt of
    the upcoming text. There is no cause chain; the error that reaches
    the driver is the deepest committed one.
    """

    def __init__(self,
            message: str,
            *,
            kind: ErrorKind = ErrorKind.REJECTED,
            pos: Optional[int] = None,
            excerpt: str = "",
            line: Optional[int] = None,
            col: Optional[int] = None,
            parser: Any = None,
            source: Optional[str] = None):
        self.message = message
        self.kind = kind
        self.pos = pos
        self.excerpt = excerpt
        self.line = line
        self.col = col
        self.parser = parser
        self.source = source
        super().__init__(self._format())

    def _format(self) -> str:
        if self.pos is None:
            return self.message
        where = f"{self.line}:{self.col}" if self.line is not None else str(self.pos)
        return f"{self.message} at {where} ({self.excerpt!r})"

    @classmethod
    def at(cls,
            cursor: "InputCursor",
            message: str,
            *,
            kind: ErrorKind = ErrorKind.REJECTED,
            parser: Any = None,
            excerpt_len: int = EXCERPT_LEN) -> "ParseError":
        """Build an error positioned at the cursor's current offset."""
        pos = cursor.tell()
        line = col = None
        line_col = getattr(cursor, "line_col", None)
        if line_col is not None:
            line, col = line_col(pos)
        return cls(
            message,
            kind=kind,
            pos=pos,
            excerpt=cursor.peek(excerpt_len),
            line=line,
            col=col,
            parser=parser,
            source=getattr(cursor, "text", None),
        )

    @classmethod
    def rejected(cls, parser: Any, ctx, message: Optional[str] = None,
                 kind: ErrorKind = ErrorKind.REJECTED) -> "ParseError":
        return cls.at(ctx.input, message or "Parser rejected input", kind=kind, parser=parser)

    def snippet(self) -> str:
        if self.source is None or self.pos is None:
            return ""
        return caret_snippet(self.source, self.pos)

    def __reduce__(self):
        return (_rebuild_error, (self.message, self.kind, self.pos, self.excerpt,
                                 self.line, self.col, self.source))


def _rebuild_error(message, kind, pos, excerpt, line, col, source) -> ParseError:
    return ParseError(message, kind=kind, pos=pos, excerpt=excerpt,
                      line=line, col=col, source=source)


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: ParseError

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success[T], Failure]

VOID: Success[Any] = Success(NOTHING)


def success(value: T) -> Success[T]:
    return Success(value)


def failure(error: ParseError) -> Failure:
    return Failure(error)


def result_or_raise(outcome: "Outcome[T]") -> T:
    if isinstance(outcome, Success):
        return outcome.value
    raise outcome.error
