# pegcut/builder.py
"""ParserBuilder: construction sugar over the combinator classes.

A builder carries an optional whitespace parser; every whitespace-aware
combinator it builds (Sequence, Many) gets that parser as its own
override. Everything else is passed through unchanged.

    P = ParserBuilder(Whitespace())
    pair = P.sequence(P.token("("), P.cut(), P.regex(r"\\d+"), P.token(")"))
"""

from __future__ import annotations
from typing import Any, Callable, Optional, TypeVar

from .combinators import (
    Attempt, Build, Choice, Cut, Fail, Lookahead, Many, Map, Omit, Optional as OptionalCombinator,
    Parser, Pass, Ref, Sequence, WhitespaceAware,
)
from .lex import AnyChar, AnyOf, CharClass, Regex, Token

T = TypeVar("T")
P = TypeVar("P", bound=Parser[Any])


class ParserBuilder:
    def __init__(self, whitespace: Optional[Parser[Any]] = None):
        self._ws = whitespace

    @property
    def ws(self) -> Optional[Parser[Any]]:
        return self._ws

    def post_process(self, parser: P) -> P:
        if self._ws is not None and isinstance(parser, WhitespaceAware) and parser.ws is None:
            return parser.whitespace(self._ws)  # type: ignore[return-value]
        return parser

    def parser(self, p: P) -> P:
        return self.post_process(p)

    # ---- leaves ----
    def token(self, text: str) -> Token:
        return Token(text)

    def any_of(self, chars: str, min_len: Optional[int] = 1, max_len: Optional[int] = None) -> AnyOf:
        return AnyOf(chars, min_len, max_len)

    def char_class(self, ranges=(), singles=(), negated: bool = False) -> CharClass:
        return CharClass(ranges, singles, negated)

    def any_char(self) -> AnyChar:
        return AnyChar()

    def regex(self, pattern: str, flags: str = "") -> Regex:
        return Regex(pattern, flags)

    # ---- control ----
    def fail(self, message: Optional[str] = None) -> Fail:
        return Fail(message)

    def pass_(self) -> Pass:
        return Pass()

    def cut(self) -> Cut:
        return Cut()

    def ref(self, supplier: Callable[[], Parser[T]], label: Optional[str] = None) -> Ref[T]:
        return Ref(supplier, label)

    def attempt(self, p: Parser[T]) -> Attempt[T]:
        return Attempt(p)

    def map(self, p: Parser[Any], fn: Callable[[Any], T]) -> Map[T]:
        return Map(p, fn)

    def omit(self, p: Parser[Any]) -> Omit:
        return Omit(p)

    def build(self, p: Parser[Any], ctor: Callable[..., T]) -> Build[T]:
        return Build(p, ctor)

    def followed_by(self, p: Parser[Any]) -> Lookahead:
        return Lookahead(p)

    def not_followed_by(self, p: Parser[Any]) -> Lookahead:
        return Lookahead(p, negate=True)

    # ---- structure ----
    def sequence(self, *parsers: Parser[Any]) -> Sequence:
        return self.post_process(Sequence(*parsers))

    def choice(self, *parsers: Parser[Any]) -> Choice:
        return Choice(*parsers)

    def many(self,
            element: Parser[Any],
            sep: Optional[Parser[Any]] = None,
            min: int = 0,
            max: int = 0) -> Many:
        return self.post_process(Many(element, sep, min, max))

    def optional(self, p: Parser[T]) -> OptionalCombinator[T]:
        return OptionalCombinator(p)
