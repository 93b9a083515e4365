"""Tests for the parser machine."""

from __future__ import annotations

from collections import deque

import pytest

from wordcalc.interp.errors import ErrorKind, InvalidSyntaxError
from wordcalc.interp.lexer import lex
from wordcalc.interp.parser import (
    PARSER_DELTAS,
    ParserContext,
    ParserEvent,
    ParserState,
    parse,
)
from wordcalc.interp.tokens import Token, TokenKind

Q = Token.question
N = Token.number
O = Token.operand  # noqa: E741
P = Token.punctuation


@pytest.mark.parametrize(
    "tokens, expected",
    [
        ([Q(), N("10"), P()], [N("10")]),
        (
            [Q(), N("10"), O("plus"), N("20"), P()],
            [N("10"), O("plus"), N("20")],
        ),
        (
            [Q(), N("3"), O("plus"), N("10"), O("minus"), N("5"), P()],
            [N("3"), O("plus"), N("10"), O("minus"), N("5")],
        ),
    ],
)
def test_parse_keeps_significant_tokens(tokens: list[Token], expected: list[Token]) -> None:
    assert parse(tokens) == expected


@pytest.mark.parametrize(
    "name, tokens",
    [
        ("missing question", [N("10")]),
        ("missing punctuation", [Q(), N("10")]),
        ("empty statement", []),
        ("only question", [Q()]),
        ("ends on operand", [Q(), N("10"), O("plus"), P()]),
        ("ends on operand without punctuation", [Q(), N("10"), O("plus")]),
        ("two questions", [Q(), N("10"), O("plus"), N("20"), Q(), P()]),
        ("starts with operand", [Q(), O("plus"), N("10"), P()]),
        ("two numbers", [Q(), N("1"), N("2"), P()]),
        ("two operands", [Q(), N("1"), O("plus"), O("minus"), N("2"), P()]),
        ("punctuation right after question", [Q(), P()]),
        (
            "tokens after punctuation",
            [Q(), N("10"), P(), O("plus"), N("20"), P()],
        ),
        (
            "operand after second punctuation",
            [Q(), N("10"), P(), O("plus"), N("20"), P(), O("multiplied by")],
        ),
        ("number after punctuation", [Q(), N("10"), P(), N("42")]),
    ],
)
def test_parse_invalid_syntax(name: str, tokens: list[Token]) -> None:
    with pytest.raises(InvalidSyntaxError) as exc_info:
        parse(tokens)

    assert exc_info.value.kind is ErrorKind.INVALID_SYNTAX


def test_syntax_error_points_at_offending_token() -> None:
    with pytest.raises(InvalidSyntaxError) as exc_info:
        parse([Q(), N("1"), O("plus"), O("minus"), N("2"), P()])

    assert exc_info.value.fragment == "minus"
    assert exc_info.value.position == 3


def test_truncated_statement_points_past_the_end() -> None:
    with pytest.raises(InvalidSyntaxError) as exc_info:
        parse([Q(), N("1"), O("plus")])

    assert exc_info.value.fragment is None
    assert exc_info.value.position == 3


def test_parse_does_not_mutate_input() -> None:
    tokens = [Q(), N("1"), P()]

    parse(tokens)

    assert tokens == [Q(), N("1"), P()]


@pytest.mark.parametrize(
    "text",
    [
        "What is 5?",
        "What is 5 plus 3?",
        "What is 3plus10minus5?",
        "What is 42 divided by 6 plus 3 multiplied by 8?",
        "What is 1 minus 2 minus 3 minus 4 minus 5?",
    ],
)
def test_parsed_output_alternates_number_operand(text: str) -> None:
    output = parse(lex(text))

    assert output[0].kind is TokenKind.NUMBER
    assert output[-1].kind is TokenKind.NUMBER
    for index, token in enumerate(output):
        expected = TokenKind.NUMBER if index % 2 == 0 else TokenKind.OPERAND
        assert token.kind is expected


def test_every_live_state_handles_every_event() -> None:
    live = [s for s in ParserState if s is not ParserState.SYNTAX_ERROR]
    pairs = {(d.current, d.event) for d in PARSER_DELTAS}

    for state in live:
        for event in ParserEvent:
            assert (state, event) in pairs


def test_final_state_rejects_everything() -> None:
    from_final = [d for d in PARSER_DELTAS if d.current is ParserState.FINAL]

    assert {d.event for d in from_final} == set(ParserEvent)
    assert all(d.next is ParserState.SYNTAX_ERROR for d in from_final)


def test_long_statement_is_consumed_front_to_back() -> None:
    body = [N("1")]
    for _ in range(20_000):
        body += [O("plus"), N("1")]
    tokens = [Q(), *body, P()]

    assert parse(tokens) == body


def test_context_consumes_from_the_front() -> None:
    ctx = ParserContext(pending=deque([Q(), N("1"), P()]))

    assert ctx.consume() == Q()
    assert ctx.consume() == N("1")
    assert ctx.position == 2
    assert list(ctx.pending) == [P()]
