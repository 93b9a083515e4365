"""Tests for left-to-right evaluation."""

from __future__ import annotations

import pytest

from wordcalc.interp.errors import DivisionByZeroError, ErrorKind, InvalidSyntaxError
from wordcalc.interp.evaluator import evaluate, truncating_div
from wordcalc.interp.lexer import lex
from wordcalc.interp.parser import parse
from wordcalc.interp.tokens import Token

N = Token.number
O = Token.operand  # noqa: E741


def answer(text: str) -> int:
    return evaluate(parse(lex(text)))


@pytest.mark.parametrize(
    "text, expected",
    [
        ("What is 5?", 5),
        ("What is 1 plus 1?", 2),
        ("What is 53 plus 2?", 55),
        ("What is 4 minus 12?", -8),
        ("What is 2 multiplied by 7?", 14),
        ("What is 25 divided by 5?", 5),
        ("What is 3 plus 10 minus 5?", 8),
        ("What is 3plus10minus5?", 8),
        ("What is 42 divided by 6 plus 3 multiplied by 8?", 80),
        ("What is 2 plus 3 multiplied by 4?", 20),
        ("What is 1 minus 8 divided by 3?", -2),
        ("What is 7 divided by 2?", 3),
        ("What is 0 divided by 9?", 0),
    ],
)
def test_answers(text: str, expected: int) -> None:
    assert answer(text) == expected


@pytest.mark.parametrize(
    "left, right, expected",
    [
        (7, 2, 3),
        (-7, 2, -3),
        (7, -2, -3),
        (-7, -2, 3),
        (6, 3, 2),
        (0, 5, 0),
    ],
)
def test_division_truncates_toward_zero(left: int, right: int, expected: int) -> None:
    assert truncating_div(left, right) == expected


def test_division_by_zero() -> None:
    with pytest.raises(DivisionByZeroError) as exc_info:
        answer("What is 3 plus 2 divided by 0?")

    assert exc_info.value.kind is ErrorKind.ARITHMETIC
    assert exc_info.value.fragment == "5 divided by 0"


@pytest.mark.parametrize(
    "tokens",
    [
        [],
        [N("1"), O("plus")],
        [O("plus"), N("1"), N("2")],
        [N("1"), N("2"), N("3")],
        [N("1"), O("cubed"), N("3")],
    ],
)
def test_malformed_sequences_are_syntax_errors(tokens: list[Token]) -> None:
    with pytest.raises(InvalidSyntaxError):
        evaluate(tokens)
