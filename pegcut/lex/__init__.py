# pegcut/lex/__init__.py
"""Leaf matchers: terminal parsers with no sub-parsers.

- `Token(text)`            exact text
- `AnyOf(chars, min, max)` greedy run of characters from a set
- `CharClass(...)`         one character from code-point ranges/singles
- `AnyChar()`              any one character
- `Regex(pattern, flags)`  anchored pattern match (needs pattern support)
- `Whitespace(mandatory)`  skip blanks; void result

Leaves signal mismatches through the outcome and never touch the cut
flag. A read past end of input raised by the cursor is caught and turned
into an END_OF_INPUT failure.
"""

from __future__ import annotations
from typing import Any, FrozenSet, List, Optional, Sequence, Tuple

import regex as re

from ..combinators.base import Parser
from ..core.context import ParseContext
from ..core.outcome import VOID, ErrorKind, Outcome, ParseError, failure, success

_FLAG_MAP = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    'x': re.VERBOSE,
    'A': re.ASCII,
}

DEFAULT_BLANKS = " \t\n"


def compile_regex(pat: str, flags: str = "") -> "re.Pattern[str]":
    f = 0
    for ch in flags:
        if ch not in _FLAG_MAP:
            raise ValueError(f"Unknown regex flag {ch!r} in {flags!r}")
        f |= _FLAG_MAP[ch]
    return re.compile(pat, f)


class Token(Parser[str]):
    def __init__(self, text: str):
        self.text = text

    def parse(self, ctx: ParseContext) -> Outcome[str]:
        cursor = ctx.input
        bm = cursor.bookmark()
        try:
            got = cursor.read(len(self.text))
        except ParseError as e:
            return failure(e)
        if got != self.text:
            # report where the token should have started
            cursor.restore(bm)
            return failure(ParseError.rejected(self, ctx, f"Expected token {self.text}",
                                               kind=ErrorKind.UNEXPECTED_TOKEN))
        return success(got)

    def describe(self) -> str:
        return self.label or repr(self.text)


class AnyOf(Parser[str]):
    def __init__(self, chars: str, min_len: Optional[int] = 1, max_len: Optional[int] = None):
        self.chars: FrozenSet[str] = frozenset(chars)
        self.alphabet = chars
        self.min_len = min_len
        self.max_len = max_len

    def parse(self, ctx: ParseContext) -> Outcome[str]:
        cursor = ctx.input
        out: List[str] = []
        while not cursor.eof():
            ch = cursor.peek(1)
            if ch not in self.chars:
                break
            out.append(cursor.read(1))
        n = len(out)
        if (self.max_len is not None and n > self.max_len) or \
           (self.min_len is not None and n < self.min_len):
            return failure(ParseError.rejected(self, ctx, f"Expecting AnyOf {self.alphabet}",
                                               kind=ErrorKind.UNEXPECTED_TOKEN))
        return success("".join(out))

    def describe(self) -> str:
        return self.label or f"AnyOf({self.alphabet!r})"


def _class_match(ranges: Sequence[Tuple[int, int]], singles: FrozenSet[str],
                 negated: bool, ch: str) -> bool:
    ok = ch in singles
    if not ok:
        cp = ord(ch)
        for (lo, hi) in ranges:
            if lo <= cp <= hi:
                ok = True
                break
    return (not ok) if negated else ok


class CharClass(Parser[str]):
    """One character from inclusive code-point `ranges` and `singles`."""

    def __init__(self,
            ranges: Sequence[Tuple[int, int]] = (),
            singles: Sequence[str] = (),
            negated: bool = False):
        self.ranges = tuple(ranges)
        self.singles = frozenset(singles)
        self.negated = negated

    def parse(self, ctx: ParseContext) -> Outcome[str]:
        cursor = ctx.input
        ch = cursor.peek(1)
        if not ch:
            return failure(ParseError.rejected(self, ctx, f"Expected {self.describe()}, got end of input",
                                               kind=ErrorKind.END_OF_INPUT))
        if not _class_match(self.ranges, self.singles, self.negated, ch):
            return failure(ParseError.rejected(self, ctx, f"Expected {self.describe()}",
                                               kind=ErrorKind.UNEXPECTED_TOKEN))
        return success(cursor.read(1))

    def describe(self) -> str:
        if self.label:
            return self.label
        parts = [f"{chr(lo)}-{chr(hi)}" for (lo, hi) in self.ranges]
        parts.extend(sorted(self.singles))
        return "[" + ("^" if self.negated else "") + "".join(parts) + "]"


class AnyChar(Parser[str]):
    def parse(self, ctx: ParseContext) -> Outcome[str]:
        if ctx.input.eof():
            return failure(ParseError.rejected(self, ctx, "Expected any character, got end of input",
                                               kind=ErrorKind.END_OF_INPUT))
        return success(ctx.input.read(1))

    def describe(self) -> str:
        return self.label or "."


class Regex(Parser[str]):
    def __init__(self, pattern: str, flags: str = ""):
        self.pattern = pattern
        self.flags = flags
        self._rx = compile_regex(pattern, flags)

    def parse(self, ctx: ParseContext) -> Outcome[str]:
        cursor = ctx.input
        if not cursor.supports_patterns():
            # Capability mismatch: a programming error, not a grammar failure.
            raise ParseError.rejected(self, ctx, "Input doesn't support regex parsing",
                                      kind=ErrorKind.NO_PATTERN_SUPPORT)
        got = cursor.read_pattern(self._rx)  # type: ignore[attr-defined]
        if got is None:
            return failure(ParseError.rejected(self, ctx, f"Expected {self.pattern}",
                                               kind=ErrorKind.UNEXPECTED_TOKEN))
        return success(got)

    def describe(self) -> str:
        return self.label or f"/{self.pattern}/{self.flags}"


class Whitespace(Parser[Any]):
    """Skip blanks (space, tab, newline by default).

    With `pattern`, blanks are whatever the pattern matches at the cursor;
    that needs pattern support from the cursor. Fails only when
    `mandatory` and nothing was skipped.
    """

    def __init__(self, mandatory: bool = False, pattern: Optional[str] = None,
                 blanks: str = DEFAULT_BLANKS):
        self.mandatory = mandatory
        self.pattern = pattern
        self.blanks = frozenset(blanks)
        self._rx = compile_regex(pattern) if pattern is not None else None

    def parse(self, ctx: ParseContext) -> Outcome[Any]:
        cursor = ctx.input
        if self._rx is not None:
            if not cursor.supports_patterns():
                raise ParseError.rejected(self, ctx, "Input doesn't support pattern-based whitespace",
                                          kind=ErrorKind.NO_WHITESPACE_SUPPORT)
            got = cursor.read_pattern(self._rx)  # type: ignore[attr-defined]
            found = bool(got)
        else:
            found = False
            while not cursor.eof() and cursor.peek(1) in self.blanks:
                cursor.read(1)
                found = True

        if self.mandatory and not found:
            return failure(ParseError.rejected(self, ctx, "Expected whitespace",
                                               kind=ErrorKind.UNEXPECTED_TOKEN))
        return VOID

    def describe(self) -> str:
        return self.label or "ws"
