import pytest

from pegcut.pegcutc import main

LIST_GRAMMAR = """\
list  <- "[" ^ (item ("," item)*)? "]"
item  <- list / int
int   <- [0-9]+
"""


@pytest.fixture
def grammar(tmp_path):
    path = tmp_path / "list.peg"
    path.write_text(LIST_GRAMMAR, encoding="utf-8")
    return str(path)


def test_check(grammar, capsys):
    assert main(["check", grammar]) == 0
    out = capsys.readouterr().out
    assert "[CHECK OK] rules=3 start=list" in out


def test_check_syntax_error(tmp_path, capsys):
    path = tmp_path / "bad.peg"
    path.write_text("a <- missing\n", encoding="utf-8")
    assert main(["check", str(path)]) == 2
    err = capsys.readouterr().err
    assert "[SYNTAX ERROR]" in err
    assert "undefined rule 'missing'" in err


def test_check_missing_file(tmp_path, capsys):
    assert main(["check", str(tmp_path / "nope.peg")]) == 2
    assert "FileNotFoundError" in capsys.readouterr().err


def test_parse_text(grammar, capsys):
    assert main(["parse", grammar, "--text", "[1,2]"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("['['")
    assert "'2'" in out


def test_parse_with_whitespace(grammar, capsys):
    assert main(["parse", grammar, "--text", "[1, 2]"]) == 2
    capsys.readouterr()
    assert main(["parse", grammar, "--text", "[1, 2]", "--ws"]) == 0


def test_parse_input_file_rule_and_partial(grammar, tmp_path, capsys):
    data = tmp_path / "data.txt"
    data.write_text("12]", encoding="utf-8")
    assert main(["parse", grammar, "--input", str(data), "--rule", "int", "--partial"]) == 0
    assert capsys.readouterr().out.strip() == "['1', '2']"


def test_parse_error_report(grammar, capsys):
    assert main(["parse", grammar, "--text", "[1,x]"]) == 2
    err = capsys.readouterr().err
    assert "[PARSE ERROR] (unexpected-token)" in err
    assert "Expected token ]" in err
    assert "[1,x]\n  ^" in err


def test_parse_unknown_rule(grammar, capsys):
    assert main(["parse", grammar, "--text", "1", "--rule", "nope"]) == 2
    assert "undefined rule 'nope'" in capsys.readouterr().err


def test_parse_requires_a_source(grammar):
    with pytest.raises(SystemExit):
        main(["parse", grammar])


def test_check_debug_lists_rules(grammar, capsys, monkeypatch):
    monkeypatch.setattr("pegcut.pegcutc._setup_logging", lambda debug: None)
    assert main(["check", grammar, "-D"]) == 0
    err = capsys.readouterr().err
    assert "[Rules]" in err
    assert "list <- \"[\" ^ (item (\",\" item)*)? \"]\"  # start" in err
    assert "int <- [0-9]+" in err
