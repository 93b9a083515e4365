"""Parser: validates token order and keeps only the tokens that evaluate.

Accepted grammar::

    Question Number (Operand Number)* Punctuation

Validation and projection happen in one pass: the rules that accept a
Number or an Operand copy it to the output, the rules that accept the
Question or the Punctuation drop it.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto

from wordcalc.fsm import Delta, Machine
from wordcalc.interp.errors import InvalidSyntaxError
from wordcalc.interp.tokens import Token, TokenKind
from wordcalc.utils.logging import get_logger

logger = get_logger("interp.parser")


class ParserState(Enum):
    INITIAL = auto()
    AFTER_QUESTION = auto()
    AFTER_NUMBER = auto()
    AFTER_OPERAND = auto()
    FINAL = auto()
    SYNTAX_ERROR = auto()


class ParserEvent(Enum):
    QUESTION = auto()
    NUMBER = auto()
    OPERAND = auto()
    PUNCTUATION = auto()


EVENT_FOR_KIND: dict[TokenKind, ParserEvent] = {
    TokenKind.QUESTION: ParserEvent.QUESTION,
    TokenKind.NUMBER: ParserEvent.NUMBER,
    TokenKind.OPERAND: ParserEvent.OPERAND,
    TokenKind.PUNCTUATION: ParserEvent.PUNCTUATION,
}


@dataclass
class ParserContext:
    """Mutable parser state for a single token sequence."""

    pending: deque[Token]
    output: list[Token] = field(default_factory=list)
    position: int = 0

    def consume(self) -> Token:
        token = self.pending.popleft()
        self.position += 1
        return token


def keep_token(delta: Delta, ctx: ParserContext) -> None:
    ctx.output.append(ctx.consume())


def drop_token(delta: Delta, ctx: ParserContext) -> None:
    ctx.consume()


def syntax_error(delta: Delta, ctx: ParserContext) -> None:
    token = ctx.pending[0] if ctx.pending else None
    raise InvalidSyntaxError(
        fragment=token.value if token is not None else None,
        position=ctx.position,
    )


# Accepting rules; every other (state, event) pair is a syntax error
_ACCEPTING: tuple[Delta, ...] = (
    Delta(ParserState.INITIAL, ParserEvent.QUESTION, ParserState.AFTER_QUESTION, effect=drop_token),
    Delta(ParserState.AFTER_QUESTION, ParserEvent.NUMBER, ParserState.AFTER_NUMBER, effect=keep_token),
    Delta(ParserState.AFTER_NUMBER, ParserEvent.OPERAND, ParserState.AFTER_OPERAND, effect=keep_token),
    Delta(ParserState.AFTER_NUMBER, ParserEvent.PUNCTUATION, ParserState.FINAL, effect=drop_token),
    Delta(ParserState.AFTER_OPERAND, ParserEvent.NUMBER, ParserState.AFTER_NUMBER, effect=keep_token),
)


def _build_deltas() -> tuple[Delta, ...]:
    accepted = {(d.current, d.event) for d in _ACCEPTING}
    rejecting = [
        Delta(state, event, ParserState.SYNTAX_ERROR, effect=syntax_error)
        for state in ParserState
        if state is not ParserState.SYNTAX_ERROR
        for event in ParserEvent
        if (state, event) not in accepted
    ]
    return _ACCEPTING + tuple(rejecting)


PARSER_DELTAS: tuple[Delta, ...] = _build_deltas()


def parse(tokens: list[Token]) -> list[Token]:
    """
    Validate a token sequence and project out its significant tokens.

    Args:
        tokens: Output of the lexer

    Returns:
        Numbers and operands, alternating and starting/ending with a number

    Raises:
        InvalidSyntaxError: The sequence does not follow the grammar
    """
    ctx = ParserContext(pending=deque(tokens))
    machine = Machine(ParserState.INITIAL, PARSER_DELTAS, ctx, name="parser")

    for token in tokens:
        machine.exec(EVENT_FOR_KIND[token.kind])

    if machine.current is not ParserState.FINAL:
        logger.debug("parse_incomplete", state=machine.current.name)
        raise InvalidSyntaxError(fragment=None, position=ctx.position)

    logger.debug("parsed", significant_count=len(ctx.output))
    return ctx.output
