# pegcut/core/__init__.py
from .outcome import (
    NOTHING, VOID, ErrorKind, ParseError, Success, Failure, Outcome,
    success, failure, result_or_raise, caret_snippet,
)
from .cursor import InputCursor, StringCursor, Bookmark
from .context import ParseContext
from .runtime import ParseOptions, parse, parse_outcome
