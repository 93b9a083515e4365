"""Expression service: answers questions and counts the rejected ones."""

from __future__ import annotations

from typing import Protocol

from wordcalc.interp.errors import InterpError
from wordcalc.service.models import ExpressionError, Method
from wordcalc.service.repository import RepositoryError
from wordcalc.utils.logging import get_logger

logger = get_logger("service.expression")


class Interpreter(Protocol):
    def validate(self, expression: str) -> bool: ...

    def evaluate(self, expression: str) -> int: ...


class ExprErrorRepository(Protocol):
    def increment(self, error: ExpressionError) -> ExpressionError: ...

    def get_all(self) -> list[ExpressionError]: ...


class ExpressionServiceError(Exception):
    """The service could not record or report expression errors."""

    pass


class ExpressionService:
    """
    Front door for validation and evaluation.

    Rejected expressions are recorded in the error repository before the
    InterpError is re-raised. Anything that is not an InterpError is a
    programming fault and propagates unrecorded.
    """

    def __init__(self, interpreter: Interpreter, repository: ExprErrorRepository) -> None:
        self.interpreter = interpreter
        self.repository = repository

    def validate(self, expression: str) -> bool:
        """
        Validate an expression.

        Raises:
            InterpError: The expression is rejected (after being recorded)
            ExpressionServiceError: The rejection could not be recorded
        """
        try:
            return self.interpreter.validate(expression)
        except InterpError as e:
            self._record(expression, Method.VALIDATE, e)
            raise

    def evaluate(self, expression: str) -> int:
        """
        Evaluate an expression.

        Raises:
            InterpError: The expression is rejected (after being recorded)
            ExpressionServiceError: The rejection could not be recorded
        """
        try:
            result = self.interpreter.evaluate(expression)
        except InterpError as e:
            self._record(expression, Method.EVALUATE, e)
            raise

        logger.info("expression_evaluated", result=result)
        return result

    def get_expression_errors(self) -> list[ExpressionError]:
        try:
            return self.repository.get_all()
        except RepositoryError as e:
            raise ExpressionServiceError(str(e)) from e

    def _record(self, expression: str, method: Method, error: InterpError) -> None:
        try:
            record = self.repository.increment(
                ExpressionError(expression=expression, method=method, kind=error.kind)
            )
        except RepositoryError as e:
            logger.error("record_failed", method=method.name, error=str(e))
            raise ExpressionServiceError(str(e)) from e

        logger.info(
            "expression_rejected",
            method=method.name,
            kind=error.kind.name,
            frequency=record.frequency,
        )
