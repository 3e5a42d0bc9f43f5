# pegcut/pegcutc.py
"""pegcutc - pegcut CLI

Usage:
    $ python -m pegcut.pegcutc check examples/list.peg -D
    $ python -m pegcut.pegcutc parse examples/list.peg --text "[1, 2, 3]" --ws
    $ python -m pegcut.pegcutc parse examples/list.peg --input data.txt --rule item --partial

Commands
--------
- check : compile a .peg grammar and summarise its rules
- parse : parse text with a grammar and print the result

Debug mode (-D/--debug) turns on DEBUG logging for the `pegcut` loggers on
stderr (backtracking decisions, driver outcomes).
"""

from __future__ import annotations
import argparse
import logging
import sys
from pprint import pformat
from typing import Optional

# ------------------------------
# helpers
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _setup_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="[DEBUG] %(name)s: %(message)s",
        )


def _load(path: str, ws: bool):
    from .grammar.loader import load_grammar
    from .lex import Whitespace
    return load_grammar(path, whitespace=Whitespace() if ws else None)


def _print_rules(g) -> None:
    from .peg.ast import render
    _eprint("\n[Rules]")
    for name in g.grammar.order:
        mark = "  # start" if name == g.start else ""
        _eprint(f"  {name} <- {render(g.grammar.rules[name].expr)}{mark}")

# ------------------------------
# commands
# ------------------------------

def cmd_check(args) -> int:
    try:
        g = _load(args.file, ws=False)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except OSError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug:
        _print_rules(g)

    print(f"[CHECK OK] rules={len(g.rules)} start={g.start}")
    return 0


def cmd_parse(args) -> int:
    from .core.outcome import ParseError
    try:
        g = _load(args.file, ws=args.ws)
        if args.text is not None:
            text = args.text
        else:
            with open(args.input, "r", encoding="utf-8") as f:
                text = f.read()
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except OSError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    try:
        value = g.parse(text, rule=args.rule, allow_partial=args.partial)
    except ParseError as e:
        _eprint(f"[PARSE ERROR] ({e.kind.value}) {e}")
        snippet = e.snippet()
        if snippet:
            _eprint(snippet)
        return 2
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2

    print(pformat(value))
    return 0

# ------------------------------
# entry point
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="pegcutc", description="pegcut grammar CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="compile a grammar and report its rules")
    p_check.add_argument("file", help=".peg grammar file")
    p_check.add_argument("-D", "--debug", action="store_true", help="verbose debug output")
    p_check.set_defaults(func=cmd_check)

    p_parse = sub.add_parser("parse", help="parse input text with a grammar")
    p_parse.add_argument("file", help=".peg grammar file")
    src_group = p_parse.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="input text given directly")
    src_group.add_argument("--input", help="path of an input text file")
    p_parse.add_argument("--rule", help="rule to start from (default: first rule)")
    p_parse.add_argument("--partial", action="store_true", help="allow unconsumed trailing input")
    p_parse.add_argument("--ws", action="store_true", help="skip blanks between sequence/repetition items")
    p_parse.add_argument("-D", "--debug", action="store_true", help="verbose debug output")
    p_parse.set_defaults(func=cmd_parse)

    args = ap.parse_args(argv)
    _setup_logging(args.debug)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
