# pegcut/peg/__init__.py
"""Textual PEG notation for pegcut.

This package provides:
- AST nodes for a small PEG notation (with `^` cut and `~` attempt)
- A notation parser, itself written with pegcut combinators
- A compiler from the AST to combinator values

Example:
    g = compile_grammar('''
        list <- "[" ^ item ("," item)* "]"
        item <- [0-9]+
    ''')
    g.parse("[1,22,3]")
"""

from .ast import (
    Literal, CharClass, Any, CutMark, Ref, And, Not, Try, Repeat, Seq, Choice,
    RuleDef, PegGrammar, render,
)
from .parser import parse_peg_grammar
from .compile import CompiledGrammar, compile_peg, compile_grammar
