"""A small imperative language: blocks of literals, stores, frames and
IF/WHILE/REPEAT statements. Keywords commit with a cut, so a broken
statement is reported where it breaks."""

from dataclasses import dataclass
from typing import List, Optional

import pytest

from pegcut import ParseError, ParserBuilder, Whitespace, parse
from pegcut import operators as O


@dataclass
class Block:
    statements: List[object]


@dataclass
class IfThenElse:
    condition: Block
    then: Block
    orelse: Optional[Block]


@dataclass
class While:
    condition: Block
    body: Block


@dataclass
class Repeat:
    body: Block
    condition: Block


@dataclass
class Literal:
    content: str


@dataclass
class FrameInvoke:
    captured: List[str]
    block: Block


@dataclass
class LocalStore:
    var: str


P = ParserBuilder(Whitespace(False))

tok_start_program = P.token("<<")
tok_end_program = P.token(">>")
tok_frame_start = P.token("->")

object_literal = P.any_of("0123456789").pipe(O.map(Literal))
var_name = P.any_of("abcdefghijklmnopqrstuvwxyz")

block = P.ref(lambda: block_body, "block")

frame_invoke = P.sequence(
    tok_frame_start.omit(),
    P.cut(),
    P.many(var_name),
    tok_start_program.omit(),
    block,
    tok_end_program.omit(),
).build(FrameInvoke)

ite_statement = P.sequence(
    P.token("IF").omit(),
    P.cut(),
    block,
    P.token("THEN").omit(),
    block,
    P.sequence(P.token("ELSE").omit(), block).map(lambda s: s[0]).optional(),
    P.token("END").omit(),
).build(IfThenElse)

while_statement = P.sequence(
    P.token("WHILE").omit(),
    P.cut(),
    block,
    P.token("DO").omit(),
    block,
    P.token("END").omit(),
).build(While)

repeat_statement = P.sequence(
    P.token("REPEAT").omit(),
    P.cut(),
    block,
    P.token("UNTIL").omit(),
    block,
    P.token("END").omit(),
).build(Repeat)

local_store = (
    P.sequence(var_name, P.token("=").omit())
    .pipe(O.whitespace(P.pass_()))
    .build(LocalStore)
)

block_body = P.sequence(
    P.many(
        P.choice(
            frame_invoke,
            ite_statement,
            while_statement,
            repeat_statement,
            local_store,
            object_literal,
        )
    )
).build(Block)

program = P.sequence(tok_start_program, block, tok_end_program).map(lambda v: v[1])


def test_linear_program():
    assert parse(program, "<< 123 456 >>") == Block([Literal("123"), Literal("456")])


def test_if_then():
    assert parse(program, "<< IF 23 THEN 11 END >>") == Block([
        IfThenElse(Block([Literal("23")]), Block([Literal("11")]), None),
    ])


def test_if_then_else():
    ret = parse(program, "<< 123 456 IF 23 22 THEN 11 ELSE 99 END >>")
    assert ret.statements[2] == IfThenElse(
        Block([Literal("23"), Literal("22")]),
        Block([Literal("11")]),
        Block([Literal("99")]),
    )


def test_while():
    ret = parse(program, "<< 123 456 WHILE 23  DO 11  END >>")
    assert ret.statements[2] == While(Block([Literal("23")]), Block([Literal("11")]))


def test_repeat():
    ret = parse(program, "<< 123 456 REPEAT 23 22 UNTIL 11  END >>")
    assert ret.statements[2] == Repeat(Block([Literal("23"), Literal("22")]), Block([Literal("11")]))


def test_store_and_frame():
    ret = parse(program, "<< 1 x= -> a b << y= 2 >> >>")
    assert ret == Block([
        Literal("1"),
        LocalStore("x"),
        FrameInvoke(["a", "b"], Block([LocalStore("y"), Literal("2")])),
    ])


def test_store_takes_no_inner_whitespace():
    with pytest.raises(ParseError):
        parse(program, "<< x = >>")


def test_missing_end_is_reported_in_place():
    with pytest.raises(ParseError) as ei:
        parse(program, "<< 123 456 IF 23 22 THEN 11 >>  ")
    assert "Expected token END" in str(ei.value)
    assert ei.value.pos == 28


def test_complex_program():
    ret = parse(program, "<< WHILE 2 DO 123 456 IF 23 22 THEN 11 ELSE REPEAT 99 UNTIL 22 END END END >>")
    loop = ret.statements[0]
    assert isinstance(loop, While)
    inner_if = loop.body.statements[2]
    assert isinstance(inner_if, IfThenElse)
    assert inner_if.orelse == Block([Repeat(Block([Literal("99")]), Block([Literal("22")]))])
