# pegcut/grammar/loader.py
"""Loading .peg grammar files."""

from __future__ import annotations
from pathlib import Path
from typing import Any, Optional, Union

from ..combinators import Parser
from ..peg import CompiledGrammar, compile_grammar


def load_grammar_text(path: Union[str, Path]) -> str:
    """Read a grammar file (BOM tolerated) with newlines normalised to "\\n"."""
    text = Path(path).read_text(encoding="utf-8-sig")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_grammar(path: Union[str, Path], whitespace: Optional[Parser[Any]] = None) -> CompiledGrammar:
    src = load_grammar_text(path)
    try:
        return compile_grammar(src, whitespace)
    except SyntaxError as e:
        raise SyntaxError(f"{path}: {e}") from e
