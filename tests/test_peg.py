import pytest

from pegcut import ErrorKind, ParseError, ParseOptions, Whitespace
from pegcut.grammar import load_grammar, load_grammar_text
from pegcut.peg import (
    Any, And, CharClass, Choice, CutMark, Literal, Not, Ref, Repeat, Seq, Try,
    compile_grammar, parse_peg_grammar, render,
)

LIST_GRAMMAR = r"""
# Bracketed, comma separated list of integers or nested lists.
list  <- "[" ^ (item ("," item)*)? "]"
item  <- list / int
int   <- [0-9]+
"""


# ---- notation ----

def test_parse_rules_in_order():
    g = parse_peg_grammar(LIST_GRAMMAR)
    assert g.start == "list"
    assert g.order == ["list", "item", "int"]
    assert g.rules["item"].expr == Choice((Ref("list"), Ref("int")))
    assert g.rules["int"].expr == Repeat(CharClass(False, ((ord("0"), ord("9")),), ()), "+")


def test_parse_sequence_with_cut_and_group():
    g = parse_peg_grammar(LIST_GRAMMAR)
    expr = g.rules["list"].expr
    assert isinstance(expr, Seq)
    assert expr.items[0] == Literal("[")
    assert expr.items[1] == CutMark()
    assert isinstance(expr.items[2], Repeat) and expr.items[2].kind == "?"
    assert expr.items[3] == Literal("]")


def test_prefix_operators_and_any():
    g = parse_peg_grammar("s <- &'a' !'b' ~('c' ^ 'd') .")
    assert g.rules["s"].expr == Seq((
        And(Literal("a")),
        Not(Literal("b")),
        Try(Seq((Literal("c"), CutMark(), Literal("d")))),
        Any(),
    ))


def test_escapes_and_classes():
    g = parse_peg_grammar(r"""s <- '\n\t\'' "\x41é" [^a-c\]_]""")
    lit1, lit2, cls = g.rules["s"].expr.items
    assert lit1 == Literal("\n\t'")
    assert lit2 == Literal("Aé")
    assert cls == CharClass(True, ((ord("a"), ord("c")),), ("]", "_"))


def test_comments_are_whitespace():
    g = parse_peg_grammar("""
        /* block
           comment */
        a <- 'x'   // trailing
        # hash comment
        b <- a
    """)
    assert g.order == ["a", "b"]
    assert g.rules["b"].expr == Ref("a")


def test_empty_grammar():
    with pytest.raises(SyntaxError, match="empty grammar"):
        parse_peg_grammar("  # nothing here\n")


def test_duplicate_rule():
    with pytest.raises(SyntaxError, match="duplicate rule 'a'"):
        parse_peg_grammar("a <- 'x'\na <- 'y'")


def test_unclosed_group():
    with pytest.raises(SyntaxError) as ei:
        parse_peg_grammar("a <- ('x' 'y'\nb <- 'z'")
    assert isinstance(ei.value.__cause__, ParseError)
    assert ei.value.__cause__.kind is ErrorKind.CARDINALITY
    assert ei.value.__cause__.line == 1
    assert "PEG parse error" in str(ei.value)


def test_missing_arrow():
    with pytest.raises(SyntaxError):
        parse_peg_grammar("a 'x'")


# ---- compiled grammars ----

def test_compiled_list_grammar():
    g = compile_grammar(LIST_GRAMMAR)
    assert g.start == "list"
    ok, end = g.match("[1,[2,3]]tail")
    assert (ok, end) == (True, 9)
    value = g.parse("[1,22]")
    assert value[0] == "[" and value[-1] == "]"
    assert value[1][0] == ["1"]


def test_compiled_grammar_errors():
    g = compile_grammar(LIST_GRAMMAR)
    with pytest.raises(ParseError) as ei:
        g.parse("[1,x]")
    assert "Expected token ]" in str(ei.value)
    assert ei.value.pos == 2
    with pytest.raises(ParseError) as ei:
        g.parse("[1]]")
    assert ei.value.kind is ErrorKind.TRAILING_INPUT


def test_compiled_cut_vs_attempt():
    committed = compile_grammar("s <- 'y' ^ 'z' / 'yw'")
    with pytest.raises(ParseError):
        committed.parse("yw")
    scoped = compile_grammar("s <- ~('y' ^ 'z') / 'yw'")
    assert scoped.parse("yw") == "yw"


def test_compiled_rule_selection_and_partial():
    g = compile_grammar(LIST_GRAMMAR)
    assert g.parse("42", rule="int") == ["4", "2"]
    assert g.parse("7]", rule="int", allow_partial=True) == ["7"]
    assert g.match("x", rule="int") == (False, 0)
    assert g.match("ab12", rule="int", pos=2) == (True, 4)
    with pytest.raises(SyntaxError):
        g.parser("nope")


def test_compiled_whitespace():
    g = compile_grammar("pair <- word '=' word\nword <- [a-z]+", whitespace=Whitespace())
    assert g.parse("key = value") == [["k", "e", "y"], "=", ["v", "a", "l", "u", "e"]]


def test_compiled_grammar_options():
    opts = ParseOptions(excerpt_len=2)
    g = compile_grammar("s <- 'a'", options=opts)
    with pytest.raises(ParseError) as ei:
        g.parse("abcdef")
    assert ei.value.kind is ErrorKind.TRAILING_INPUT
    assert ei.value.excerpt == "bc"
    assert g.parse("abc", allow_partial=True) == "a"
    assert g.options is opts
    assert opts.allow_partial is False


def test_undefined_rule():
    with pytest.raises(SyntaxError, match="undefined rule 'missing'"):
        compile_grammar("a <- missing")


def test_lookahead_in_notation():
    g = compile_grammar("kw <- 'if' ![a-z]")
    assert g.parse("if") == ["if"]
    assert g.match("iffy") == (False, 0)


def test_recursive_rule_reuse():
    g = compile_grammar("p <- '(' p ')' / 'x'")
    for text in ["x", "(x)", "((x))"]:
        assert g.parse_outcome(text).ok
    assert not g.parse_outcome("((x)").ok


# ---- loader ----

def test_load_grammar_file(tmp_path):
    path = tmp_path / "list.peg"
    path.write_bytes(LIST_GRAMMAR.replace("\n", "\r\n").encode("utf-8"))
    assert "\r" not in load_grammar_text(path)
    g = load_grammar(path)
    assert g.parse_outcome("[]").ok


def test_load_grammar_reports_path(tmp_path):
    path = tmp_path / "bad.peg"
    path.write_text("a <- 'x'\na <- 'y'\n", encoding="utf-8")
    with pytest.raises(SyntaxError, match="bad.peg"):
        load_grammar(path)


# ---- rendering ----

@pytest.mark.parametrize("src", [
    LIST_GRAMMAR,
    r"s <- &'a' !'b' ~('c' ^ 'd') .",
    r"""s <- '\n\t"' [^a-c\]_\-] (x / y)* ~(~x) (&x)?""",
    "s <- (a b) c / ((d / e) f)+",
])
def test_render_parses_back(src):
    g = parse_peg_grammar(src)
    for name in g.order:
        expr = g.rules[name].expr
        again = parse_peg_grammar(f"{name} <- {render(expr)}")
        assert again.rules[name].expr == expr


def test_render_shape():
    g = parse_peg_grammar(LIST_GRAMMAR)
    assert render(g.rules["list"].expr) == '"[" ^ (item ("," item)*)? "]"'
    assert render(g.rules["int"].expr) == "[0-9]+"
