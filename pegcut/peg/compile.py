# pegcut/peg/compile.py
from __future__ import annotations
import logging
from typing import Any as _Any, Dict, Optional, Tuple

from .. import combinators as C
from .. import lex
from ..core.cursor import StringCursor
from ..core.outcome import Outcome, Success
from ..core.runtime import ParseOptions, parse, parse_outcome
from .ast import (
    Literal, CharClass, Any, CutMark, Ref, And, Not, Try, Repeat, Seq, Choice,
    PegGrammar, Node
)
from .parser import parse_peg_grammar

log = logging.getLogger("pegcut.peg")

# Compilation is a one-shot tree walk. Rule references become lazy `Ref`s,
# so rules may refer to themselves or to rules defined further down.
# Left recursion is not supported (typical PEG restriction): a left-recursive
# rule recurses without consuming input.


class CompiledGrammar:
    """A PEG grammar compiled into combinators; reusable across parses."""

    def __init__(self, grammar: PegGrammar, rules: Dict[str, C.Parser[_Any]],
                 whitespace: Optional[C.Parser[_Any]] = None,
                 options: Optional[ParseOptions] = None):
        self.grammar = grammar
        self.rules = rules
        self.whitespace = whitespace
        self.options = options or ParseOptions()

    @property
    def start(self) -> str:
        return self.grammar.start

    def parser(self, name: Optional[str] = None) -> C.Parser[_Any]:
        name = name or self.grammar.start
        try:
            return self.rules[name]
        except KeyError:
            raise SyntaxError(f"PEG: undefined rule '{name}'")

    def parse(self, text: str, rule: Optional[str] = None, allow_partial: bool = False) -> _Any:
        return parse(self.parser(rule), text, options=self.options.with_(allow_partial=allow_partial))

    def parse_outcome(self, text: str, rule: Optional[str] = None,
                      allow_partial: bool = False) -> Outcome[_Any]:
        return parse_outcome(self.parser(rule), text, self.options.with_(allow_partial=allow_partial))

    def match(self, text: str, rule: Optional[str] = None, pos: int = 0) -> Tuple[bool, int]:
        """Match `rule` at `pos` without requiring end of input; returns (ok, end)."""
        cursor = StringCursor(text)
        cursor.skip(pos)
        r = parse_outcome(self.parser(rule), cursor, self.options.with_(allow_partial=True))
        if isinstance(r, Success):
            return True, cursor.tell()
        return False, pos


class _Compiler:
    def __init__(self, g: PegGrammar, whitespace: Optional[C.Parser[_Any]]):
        self.g = g
        self.ws = whitespace
        self.compiled: Dict[str, C.Parser[_Any]] = {}

    def run(self) -> Dict[str, C.Parser[_Any]]:
        for name in self.g.order or list(self.g.rules):
            rd = self.g.rules[name]
            self.compiled[name] = self._node(rd.expr).named(name)
        if log.isEnabledFor(logging.DEBUG):
            log.debug(f"compiled {len(self.compiled)} rules, start={self.g.start}")
        return self.compiled

    def _ref(self, name: str) -> C.Parser[_Any]:
        self.g.require_rule(name)
        compiled = self.compiled
        return C.Ref(lambda: compiled[name], label=name)

    def _node(self, node: Node) -> C.Parser[_Any]:
        if isinstance(node, Literal):
            return lex.Token(node.text)

        if isinstance(node, Any):
            return lex.AnyChar()

        if isinstance(node, CharClass):
            return lex.CharClass(node.ranges, node.singles, node.negated)

        if isinstance(node, CutMark):
            return C.Cut()

        if isinstance(node, Ref):
            return self._ref(node.name)

        if isinstance(node, And):
            return C.Lookahead(self._node(node.node))

        if isinstance(node, Not):
            return C.Lookahead(self._node(node.node), negate=True)

        if isinstance(node, Try):
            return C.Attempt(self._node(node.node))

        if isinstance(node, Repeat):
            inner = self._node(node.node)
            if node.kind == "?":
                return C.Optional(inner)
            elif node.kind == "*":
                return C.Many(inner, whitespace=self.ws)
            elif node.kind == "+":
                return C.Many(inner, min=1, whitespace=self.ws)
            else:
                raise AssertionError(f"unknown repeat kind {node.kind!r}")

        if isinstance(node, Seq):
            return C.Sequence(*(self._node(it) for it in node.items), whitespace=self.ws)

        if isinstance(node, Choice):
            return C.Choice(*(self._node(it) for it in node.alts))

        raise AssertionError(f"unknown node: {node!r}")


def compile_peg(g: PegGrammar, whitespace: Optional[C.Parser[_Any]] = None,
                options: Optional[ParseOptions] = None) -> CompiledGrammar:
    return CompiledGrammar(g, _Compiler(g, whitespace).run(), whitespace, options)


def compile_grammar(src: str, whitespace: Optional[C.Parser[_Any]] = None,
                    options: Optional[ParseOptions] = None) -> CompiledGrammar:
    """Parse PEG notation and compile it; `whitespace` is skipped between
    the items of every sequence and repetition. `options` are the driver
    defaults for every parse; `allow_partial` is set per call."""
    return compile_peg(parse_peg_grammar(src), whitespace, options)
