# pegcut/peg/ast.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Union

# ---- PEG notation AST ----

@dataclass(frozen=True)
class Literal:
    text: str  # unescaped text

@dataclass(frozen=True)
class CharClass:
    negated: bool
    # ranges are inclusive (lo..hi). singles is a tuple of single characters
    ranges: Tuple[Tuple[int, int], ...] = ()
    singles: Tuple[str, ...] = ()

@dataclass(frozen=True)
class Any:
    pass

@dataclass(frozen=True)
class CutMark:
    pass  # '^'

@dataclass(frozen=True)
class Ref:
    name: str

@dataclass(frozen=True)
class And:
    node: "Node"  # positive lookahead (&)

@dataclass(frozen=True)
class Not:
    node: "Node"  # negative lookahead (!)

@dataclass(frozen=True)
class Try:
    node: "Node"  # attempt (~): cuts inside stay inside

@dataclass(frozen=True)
class Repeat:
    node: "Node"
    kind: str  # '?', '*', '+'

@dataclass(frozen=True)
class Seq:
    items: Tuple["Node", ...]

@dataclass(frozen=True)
class Choice:
    alts: Tuple["Node", ...]

Node = Union[Literal, CharClass, Any, CutMark, Ref, And, Not, Try, Repeat, Seq, Choice]

@dataclass
class RuleDef:
    name: str
    expr: Node

@dataclass
class PegGrammar:
    rules: Dict[str, RuleDef]
    start: str
    order: List[str] = field(default_factory=list)

    def require_rule(self, name: str) -> RuleDef:
        try:
            return self.rules[name]
        except KeyError:
            raise SyntaxError(f"PEG: undefined rule '{name}'")


# ---- rendering back to notation ----

def _escape(text: str, specials: str) -> str:
    out = []
    for ch in text:
        if ch == "\n": out.append("\\n")
        elif ch == "\r": out.append("\\r")
        elif ch == "\t": out.append("\\t")
        elif ch == "\\" or ch in specials: out.append("\\" + ch)
        else: out.append(ch)
    return "".join(out)


def _wrap(node: Node, needs_parens: tuple) -> str:
    s = render(node)
    return f"({s})" if isinstance(node, needs_parens) else s


def render(node: Node) -> str:
    """Render a node as PEG notation that parses back to an equal node."""
    if isinstance(node, Literal):
        return '"' + _escape(node.text, '"') + '"'
    if isinstance(node, CharClass):
        parts = [f"{_escape(chr(lo), ']^-')}-{_escape(chr(hi), ']^-')}" for (lo, hi) in node.ranges]
        parts.extend(_escape(ch, "]^-") for ch in node.singles)
        return "[" + ("^" if node.negated else "") + "".join(parts) + "]"
    if isinstance(node, Any):
        return "."
    if isinstance(node, CutMark):
        return "^"
    if isinstance(node, Ref):
        return node.name
    if isinstance(node, (And, Not, Try)):
        op = {And: "&", Not: "!", Try: "~"}[type(node)]
        return op + _wrap(node.node, (Seq, Choice, And, Not, Try))
    if isinstance(node, Repeat):
        return _wrap(node.node, (Seq, Choice, And, Not, Try, Repeat)) + node.kind
    if isinstance(node, Seq):
        return " ".join(_wrap(it, (Seq, Choice)) for it in node.items)
    if isinstance(node, Choice):
        return " / ".join(_wrap(alt, (Choice,)) for alt in node.alts)
    raise AssertionError(f"unknown node: {node!r}")
