"""Runs a question through lexer, parser and evaluator."""

from __future__ import annotations

from typing import Callable

from wordcalc.interp.errors import InputTooLongError, InterpError
from wordcalc.interp.evaluator import evaluate
from wordcalc.interp.lexer import lex
from wordcalc.interp.parser import parse
from wordcalc.interp.tokens import Token
from wordcalc.utils.logging import get_logger

logger = get_logger("interp.interpreter")

LexFunc = Callable[[str], list[Token]]
ParseFunc = Callable[[list[Token]], list[Token]]
EvalFunc = Callable[[list[Token]], int]

DEFAULT_MAX_INPUT_LENGTH = 1000


class Interpreter:
    """
    Lex -> parse -> evaluate pipeline.

    Every call builds fresh machines and contexts, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        lex: LexFunc = lex,
        parse: ParseFunc = parse,
        evaluate: EvalFunc = evaluate,
        max_input_length: int = DEFAULT_MAX_INPUT_LENGTH,
    ) -> None:
        self._lex = lex
        self._parse = parse
        self._evaluate = evaluate
        self.max_input_length = max_input_length

    def validate(self, expression: str) -> bool:
        """
        Check that a question is well formed without evaluating it.

        Raises:
            InterpError: The question is rejected
        """
        self._significant_tokens(expression)
        return True

    def evaluate(self, expression: str) -> int:
        """
        Answer a question.

        Raises:
            InterpError: The question is rejected
        """
        return self._evaluate(self._significant_tokens(expression))

    def _significant_tokens(self, expression: str) -> list[Token]:
        if len(expression) > self.max_input_length:
            raise InputTooLongError(position=self.max_input_length)

        try:
            return self._parse(self._lex(expression))
        except InterpError as e:
            logger.debug("expression_rejected", kind=e.kind.name, error=str(e))
            raise
