# pegcut/__init__.py
r"""pegcut: PEG parser combinators with an explicit commit (cut).

Grammars are composed from parser values. Ordered choice backtracks
freely until a `cut` is reached; after that, a failure is reported where
it happened instead of being hidden by sibling alternatives.

    from pegcut import ParserBuilder, Whitespace, parse

    P = ParserBuilder(Whitespace())
    call = P.sequence(P.regex(r"[a-z]+"), P.token("("), P.cut(), P.many(P.regex(r"\d+"), P.token(",")), P.token(")"))
    parse(call, "f(1, 2)")
"""

from .core import (
    NOTHING, ErrorKind, ParseError, Success, Failure, Outcome,
    InputCursor, StringCursor, ParseContext, ParseOptions, parse, parse_outcome,
)
from .combinators import (
    Parser, WhitespaceAware, Pass, Fail, Cut, Attempt, Ref,
    Sequence, Choice, Many, Optional, Lookahead,
    Map, Omit, Build, WithIndices, Located,
)
from .lex import Token, AnyOf, CharClass, AnyChar, Regex, Whitespace
from .builder import ParserBuilder
from .peg import CompiledGrammar, compile_grammar, parse_peg_grammar

__version__ = "0.3.0"
