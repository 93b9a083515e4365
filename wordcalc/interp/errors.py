"""Error taxonomy for rejected questions."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Why a question was rejected. Values double as the wire messages."""

    NON_MATH_QUESTION = "non-math question"
    UNSUPPORTED_OPERATION = "unsupported operation"
    INVALID_SYNTAX = "invalid syntax"
    ARITHMETIC = "division by zero"
    INPUT_TOO_LONG = "input too long"

    @classmethod
    def from_message(cls, message: str) -> Optional[ErrorKind]:
        """Look up a kind by its wire message, or None if unknown."""
        for kind in cls:
            if kind.value == message:
                return kind
        return None


class InterpError(Exception):
    """
    A question was rejected by the lexer, parser or evaluator.

    Compare errors by ``kind``; ``fragment`` and ``position`` locate the
    offending input where known.
    """

    kind: ErrorKind = ErrorKind.INVALID_SYNTAX

    def __init__(
        self,
        fragment: Optional[str] = None,
        position: Optional[int] = None,
    ) -> None:
        self.fragment = fragment
        self.position = position
        super().__init__(self.describe())

    @property
    def message(self) -> str:
        return self.kind.value

    def describe(self) -> str:
        details = []
        if self.fragment is not None:
            details.append(repr(self.fragment))
        if self.position is not None:
            details.append(f"at position {self.position}")
        if details:
            return f"{self.message}: {' '.join(details)}"
        return self.message


class NonMathQuestionError(InterpError):
    kind = ErrorKind.NON_MATH_QUESTION


class UnsupportedOperationError(InterpError):
    kind = ErrorKind.UNSUPPORTED_OPERATION


class InvalidSyntaxError(InterpError):
    kind = ErrorKind.INVALID_SYNTAX


class DivisionByZeroError(InterpError):
    kind = ErrorKind.ARITHMETIC


class InputTooLongError(InterpError):
    kind = ErrorKind.INPUT_TOO_LONG


class RecognizerConfigError(Exception):
    """The recognizer set is malformed (no match or overlapping patterns)."""

    pass
