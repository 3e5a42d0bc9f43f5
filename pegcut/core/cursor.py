# pegcut/core/cursor.py
"""Input cursor: a position-addressable view over source text.

`InputCursor` is the minimal interface the combinators rely on.
`read_pattern`/`peek_pattern` are an optional capability; leaf matchers
check for it with `supports_patterns()` before using it.
"""

from __future__ import annotations
from bisect import bisect_right
from typing import Any, List, Optional, Tuple, Union

import regex as re

from .outcome import ErrorKind, ParseError

PatternLike = Union[str, "re.Pattern[str]"]

# Bookmarks are opaque to callers; the string cursor uses the offset itself.
Bookmark = Any


class InputCursor:
    """Interface the engine expects from an input source."""

    def read(self, n: int) -> str:
        raise NotImplementedError

    def peek(self, n: int) -> str:
        raise NotImplementedError

    def bookmark(self) -> Bookmark:
        raise NotImplementedError

    def restore(self, bm: Bookmark) -> None:
        raise NotImplementedError

    def eof(self) -> bool:
        raise NotImplementedError

    def tell(self) -> int:
        raise NotImplementedError

    def supports_patterns(self) -> bool:
        return False


def _compile(pattern: PatternLike) -> "re.Pattern[str]":
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


class StringCursor(InputCursor):
    """Cursor over an in-memory string."""

    def __init__(self, text: str):
        self.text = text
        self._i = 0
        self._line_starts: Optional[List[int]] = None

    def __repr__(self) -> str:
        return f"StringCursor(@{self._i}/{len(self.text)})"

    # ---- reads ----
    def read(self, n: int) -> str:
        if self._i + n > len(self.text):
            self._i = len(self.text)
            raise ParseError.at(self, "Attempt to read beyond EOF", kind=ErrorKind.END_OF_INPUT)
        ret = self.text[self._i:self._i + n]
        self._i += n
        return ret

    def peek(self, n: int) -> str:
        return self.text[self._i:self._i + n]

    def skip(self, n: int) -> None:
        self._i = min(self._i + n, len(self.text))

    def remainder(self) -> str:
        return self.text[self._i:]

    # ---- patterns ----
    def supports_patterns(self) -> bool:
        return True

    def peek_pattern(self, pattern: PatternLike) -> Optional[str]:
        # `match` with a start offset is anchored there; it never searches ahead.
        m = _compile(pattern).match(self.text, self._i)
        if m is None:
            return None
        return m.group(0)

    def read_pattern(self, pattern: PatternLike) -> Optional[str]:
        ret = self.peek_pattern(pattern)
        if ret is not None:
            self._i += len(ret)
        return ret

    # ---- position ----
    def bookmark(self) -> Bookmark:
        return self._i

    def restore(self, bm: Bookmark) -> None:
        self._i = bm

    def eof(self) -> bool:
        return self._i >= len(self.text)

    def tell(self) -> int:
        return self._i

    def line_col(self, pos: int) -> Tuple[int, int]:
        """1-based (line, col) of an absolute offset."""
        if self._line_starts is None:
            starts = [0]
            j = self.text.find("\n")
            while j != -1:
                starts.append(j + 1)
                j = self.text.find("\n", j + 1)
            self._line_starts = starts
        idx = bisect_right(self._line_starts, pos) - 1
        return idx + 1, pos - self._line_starts[idx] + 1
