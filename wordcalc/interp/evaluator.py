"""Left-to-right integer evaluation of parsed questions."""

from __future__ import annotations

import operator
from typing import Callable

from wordcalc.interp.errors import DivisionByZeroError, InvalidSyntaxError
from wordcalc.interp.tokens import Token, TokenKind


def truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero."""
    if right == 0:
        raise DivisionByZeroError(fragment=f"{left} divided by {right}")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


OPERATIONS: dict[str, Callable[[int, int], int]] = {
    "plus": operator.add,
    "minus": operator.sub,
    "multiplied by": operator.mul,
    "divided by": truncating_div,
}


def evaluate(tokens: list[Token]) -> int:
    """
    Reduce parser output to an integer, strictly left to right.

    There is no operator precedence: ``42 divided by 6 plus 3 multiplied
    by 8`` is ``((42 / 6) + 3) * 8``.

    Raises:
        InvalidSyntaxError: Tokens do not alternate number/operand
        DivisionByZeroError: Division by zero
    """
    if not tokens or len(tokens) % 2 == 0:
        raise InvalidSyntaxError(position=len(tokens))

    result = _number(tokens[0], 0)
    for index in range(1, len(tokens), 2):
        op_token = tokens[index]
        if op_token.kind is not TokenKind.OPERAND or op_token.value not in OPERATIONS:
            raise InvalidSyntaxError(fragment=op_token.value, position=index)
        result = OPERATIONS[op_token.value](result, _number(tokens[index + 1], index + 1))

    return result


def _number(token: Token, position: int) -> int:
    if token.kind is not TokenKind.NUMBER:
        raise InvalidSyntaxError(fragment=token.value, position=position)
    return int(token.value)
