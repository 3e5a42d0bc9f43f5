# pegcut/core/context.py
from __future__ import annotations
from typing import Any, Optional, TYPE_CHECKING

from .cursor import InputCursor
from .outcome import VOID, Outcome

if TYPE_CHECKING:
    from ..combinators.base import Parser


class ParseContext:
    """Per-parse session state.

    - `input`: the cursor, owned for the duration of one parse
    - `whitespace`: optional parser run between sequence/repetition steps
    - `cut_encountered`: "did the most recently attempted alternative
      commit". Only Cut, Attempt, Many, Optional and the lookahead
      predicates write it; leaf matchers must leave it alone.
    """

    def __init__(self, input: InputCursor, whitespace: Optional["Parser[Any]"] = None):
        self.input = input
        self.whitespace = whitespace
        self.cut_encountered = False

    def skip_whitespace(self) -> Outcome[Any]:
        # A failure here is an ordinary failure of the whitespace step.
        if self.whitespace is None:
            return VOID
        return self.whitespace.parse(self)

    def __repr__(self) -> str:
        return f"ParseContext({self.input!r}, cut={self.cut_encountered})"
