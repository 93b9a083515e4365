"""Lexer: turns a question into tokens, or classifies why it cannot.

The classification of unrecognized input lives in the transition table:
before the "What is" marker the question is assumed to be off-topic, after
it the unknown word is assumed to be an unsupported operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Optional

from wordcalc.fsm import Delta, Machine
from wordcalc.interp.errors import (
    NonMathQuestionError,
    RecognizerConfigError,
    UnsupportedOperationError,
)
from wordcalc.interp.tokens import (
    Recognizer,
    Token,
    TokenKind,
    default_recognizers,
    recognizer_union,
)
from wordcalc.utils.logging import get_logger

logger = get_logger("interp.lexer")


class LexerState(Enum):
    TOKENIZING = auto()
    DONE = auto()
    NON_MATH_QUESTION = auto()
    UNSUPPORTED_OPERATION = auto()


class LexerEvent(Enum):
    RECOGNIZED_TOKEN = auto()
    UNRECOGNIZED_TOKEN = auto()
    END_OF_INPUT = auto()


@dataclass
class LexerContext:
    """Mutable lexer state for a single question."""

    source: str
    recognizers: tuple[Recognizer, ...] = field(default_factory=default_recognizers)
    remaining: str = ""
    tokens: list[Token] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.remaining:
            self.remaining = self.source

    @property
    def position(self) -> int:
        """Offset of the remaining input within the source."""
        return len(self.source) - len(self.remaining)

    @property
    def next_word(self) -> str:
        """The first whitespace-delimited word of the remaining input."""
        parts = self.remaining.split(maxsplit=1)
        return parts[0] if parts else ""


def tokenize_effect(delta: Delta, ctx: LexerContext) -> None:
    """Consume the recognized prefix and append its token."""
    matches = []
    for recognizer in ctx.recognizers:
        value = recognizer.match(ctx.remaining)
        if value is not None:
            matches.append((recognizer, value))

    if not matches:
        raise RecognizerConfigError(
            f"no recognizer matches input at position {ctx.position}"
        )
    if len(matches) > 1:
        kinds = ", ".join(r.kind.name for r, _ in matches)
        raise RecognizerConfigError(
            f"overlapping recognizers ({kinds}) at position {ctx.position}"
        )

    recognizer, value = matches[0]
    ctx.tokens.append(recognizer.build(value))
    ctx.remaining = ctx.remaining[len(value):].lstrip()


def has_question(delta: Delta, ctx: LexerContext) -> bool:
    return any(token.kind is TokenKind.QUESTION for token in ctx.tokens)


def has_no_question(delta: Delta, ctx: LexerContext) -> bool:
    return not has_question(delta, ctx)


def non_math_question_effect(delta: Delta, ctx: LexerContext) -> None:
    raise NonMathQuestionError(fragment=ctx.source)


def unsupported_operation_effect(delta: Delta, ctx: LexerContext) -> None:
    raise UnsupportedOperationError(fragment=ctx.next_word, position=ctx.position)


LEXER_DELTAS: tuple[Delta, ...] = (
    Delta(
        LexerState.TOKENIZING, LexerEvent.RECOGNIZED_TOKEN, LexerState.TOKENIZING,
        effect=tokenize_effect,
    ),
    Delta(
        LexerState.TOKENIZING, LexerEvent.END_OF_INPUT, LexerState.DONE,
        guard=has_question,
    ),
    Delta(
        LexerState.TOKENIZING, LexerEvent.END_OF_INPUT, LexerState.NON_MATH_QUESTION,
        guard=has_no_question, effect=non_math_question_effect,
    ),
    Delta(
        LexerState.TOKENIZING, LexerEvent.UNRECOGNIZED_TOKEN, LexerState.NON_MATH_QUESTION,
        guard=has_no_question, effect=non_math_question_effect,
    ),
    Delta(
        LexerState.TOKENIZING, LexerEvent.UNRECOGNIZED_TOKEN, LexerState.UNSUPPORTED_OPERATION,
        guard=has_question, effect=unsupported_operation_effect,
    ),
)


def lex(
    text: str,
    recognizers: Optional[Iterable[Recognizer]] = None,
) -> list[Token]:
    """
    Split a question into tokens.

    Args:
        text: Raw question text
        recognizers: Recognizer set (defaults to the four token kinds)

    Returns:
        Tokens in input order

    Raises:
        NonMathQuestionError: No "What is" marker before the end of input or
            before the first unrecognized word
        UnsupportedOperationError: Unrecognized word after the marker
        RecognizerConfigError: The recognizer set is malformed
    """
    ctx = LexerContext(
        source=text.lstrip(),
        recognizers=tuple(recognizers) if recognizers is not None else default_recognizers(),
    )
    machine = Machine(LexerState.TOKENIZING, LEXER_DELTAS, ctx, name="lexer")
    supported = recognizer_union(ctx.recognizers)

    while ctx.remaining:
        if supported.match(ctx.remaining):
            machine.exec(LexerEvent.RECOGNIZED_TOKEN)
        else:
            machine.exec(LexerEvent.UNRECOGNIZED_TOKEN)

    machine.exec(LexerEvent.END_OF_INPUT)

    logger.debug("lexed", token_count=len(ctx.tokens))
    return ctx.tokens
