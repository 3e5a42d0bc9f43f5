# pegcut/peg/parser.py
"""Parser for the textual PEG notation, written with pegcut's own combinators.

Notation:
    grammar  := rule+
    rule     := IDENT "<-" ^ expr
    expr     := seq ("/" seq)*
    seq      := prefix+
    prefix   := ("&" | "!" | "~")? suffix
    suffix   := primary ("?" | "*" | "+")?
    primary  := "(" ^ expr ")" | literal | class | "." | "^" | IDENT !"<-"

    literal  := ' ... ' | " ... "  (escapes \\n \\r \\t \\\\ \\" \\' \\xHH \\uXXXX)
    class    := "[" "^"? (range | escaped | raw_char)+ "]"
    comments/space allowed between items:
        - whitespace
        - "#" ... endline
        - "//" ... endline
        - "/*" ... "*/"

`^` commits: once a rule head or an opening parenthesis is seen, a later
mismatch is reported where it happens instead of backtracking.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from ..builder import ParserBuilder
from ..combinators import Parser
from ..core.outcome import ParseError
from ..core.runtime import parse
from ..lex import Whitespace, compile_regex
from .ast import (
    Literal, CharClass, Any, CutMark, Ref, And, Not, Try, Repeat, Seq, Choice,
    RuleDef, PegGrammar, Node
)

_WS_PATTERN = r"(?:[ \t\r\n]+|#[^\n]*|//[^\n]*|/\*[\s\S]*?\*/)*"
_WS_RE = compile_regex(_WS_PATTERN)

_PREFIX = {"&": And, "!": Not, "~": Try}


# ---- escapes ----

def _hexval(ch: Optional[str]) -> int:
    if ch is not None:
        if "0" <= ch <= "9": return ord(ch) - ord("0")
        if "a" <= ch <= "f": return ord(ch) - ord("a") + 10
        if "A" <= ch <= "F": return ord(ch) - ord("A") + 10
    raise SyntaxError(f"PEG: invalid hex digit {ch!r}")


def _read_escape(s: str, i: int) -> Tuple[str, int]:
    """Decode the escape whose backslash is at s[i-1]; return (char, next index)."""
    c = s[i]
    if c in "'\"\\": return c, i + 1
    if c == "n": return "\n", i + 1
    if c == "r": return "\r", i + 1
    if c == "t": return "\t", i + 1
    if c == "x":
        digits = s[i + 1:i + 3]
        if len(digits) != 2:
            raise SyntaxError("PEG: truncated \\x escape")
        return chr(_hexval(digits[0]) * 16 + _hexval(digits[1])), i + 3
    if c == "u":
        digits = s[i + 1:i + 5]
        if len(digits) != 4:
            raise SyntaxError("PEG: truncated \\u escape")
        val = 0
        for h in digits:
            val = (val << 4) + _hexval(h)
        return chr(val), i + 5
    # fallback: literal next char
    return c, i + 1


def _unescape(body: str) -> str:
    out: List[str] = []
    i = 0
    while i < len(body):
        c = body[i]
        if c == "\\":
            ch, i = _read_escape(body, i + 1)
            out.append(ch)
        else:
            out.append(c)
            i += 1
    return "".join(out)


def _literal(lexeme: str) -> Literal:
    return Literal(_unescape(lexeme[1:-1]))


def _char_class(lexeme: str) -> CharClass:
    body = lexeme[1:-1]
    neg = body.startswith("^")
    if neg:
        body = body[1:]
    chars: List[str] = []
    i = 0
    while i < len(body):
        if body[i] == "\\":
            ch, i = _read_escape(body, i + 1)
            # escaped chars never start a range marker
            chars.append("\\" + ch)
        else:
            chars.append(body[i])
            i += 1

    ranges: List[Tuple[int, int]] = []
    singles: List[str] = []
    j = 0
    while j < len(chars):
        a = chars[j][-1]
        if j + 2 < len(chars) and chars[j + 1] == "-":
            b = chars[j + 2][-1]
            if ord(a) > ord(b):
                a, b = b, a
            ranges.append((ord(a), ord(b)))
            j += 3
        else:
            singles.append(a)
            j += 1
    if not ranges and not singles:
        raise SyntaxError(f"PEG: empty char class {lexeme!r}")
    return CharClass(negated=neg, ranges=tuple(ranges), singles=tuple(singles))


# ---- node folding ----

def _fold_suffix(v: list) -> Node:
    node, op = v
    return node if op is None else Repeat(node, op)


def _fold_prefix(v: list) -> Node:
    op, node = v
    return node if op is None else _PREFIX[op](node)


def _fold_seq(items: list) -> Node:
    return items[0] if len(items) == 1 else Seq(tuple(items))


def _fold_choice(alts: list) -> Node:
    return alts[0] if len(alts) == 1 else Choice(tuple(alts))


def _build_notation() -> Parser:
    P = ParserBuilder(Whitespace(pattern=_WS_PATTERN))

    ident = P.regex(r"[A-Za-z_][A-Za-z0-9_]*").named("IDENT")
    literal = P.regex(r"'(?:\\.|[^'\\])*'|\"(?:\\.|[^\"\\])*\"").map(_literal).named("literal")
    char_class = P.regex(r"\[(?:\\.|[^\]\\])*\]").map(_char_class).named("class")

    expr: Parser = P.ref(lambda: expr_body, "expr")

    group = P.sequence(P.token("(").omit(), P.cut(), expr, P.token(")").omit()).map(lambda v: v[0])
    rule_ref = P.sequence(ident, P.not_followed_by(P.token("<-"))).map(lambda v: Ref(v[0]))
    primary = P.choice(
        group,
        literal,
        char_class,
        P.token(".").map(lambda _: Any()),
        P.token("^").map(lambda _: CutMark()),
        rule_ref,
    ).named("primary")

    suffix = P.sequence(primary, P.optional(P.regex(r"[?*+]"))).map(_fold_suffix)
    prefix = P.sequence(P.optional(P.regex(r"[&!~]")), suffix).map(_fold_prefix)
    seq = P.many(prefix, min=1).map(_fold_seq)
    expr_body = P.many(seq, P.token("/"), min=1).map(_fold_choice)

    rule = P.sequence(ident, P.token("<-").omit(), P.cut(), expr).map(lambda v: RuleDef(v[0], v[1]))
    return P.sequence(P.ws, P.many(rule, min=1)).map(lambda v: v[0])


_NOTATION = _build_notation()


def parse_peg_grammar(src: str) -> PegGrammar:
    """Parse PEG notation into a `PegGrammar`; the first rule is the start rule."""
    if _WS_RE.fullmatch(src):
        raise SyntaxError("PEG: empty grammar")
    try:
        rule_list: List[RuleDef] = parse(_NOTATION, src)
    except ParseError as e:
        raise SyntaxError(f"PEG parse error: {e}\n{e.snippet()}") from e

    rules: Dict[str, RuleDef] = {}
    for rd in rule_list:
        if rd.name in rules:
            raise SyntaxError(f"PEG: duplicate rule '{rd.name}'")
        rules[rd.name] = rd
    order = [rd.name for rd in rule_list]
    return PegGrammar(rules=rules, start=order[0], order=order)
