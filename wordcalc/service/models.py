"""Records of rejected expressions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wordcalc.interp.errors import ErrorKind


class Method(Enum):
    """Operation a rejected expression was submitted to."""

    VALIDATE = "/validate"
    EVALUATE = "/evaluate"

    @property
    def endpoint(self) -> str:
        return self.value


@dataclass
class ExpressionError:
    """How often an expression has been rejected, and why."""

    expression: str
    method: Method
    kind: ErrorKind
    frequency: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "expression": self.expression,
            "endpoint": self.method.endpoint,
            "frequency": self.frequency,
            "type": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ExpressionError:
        """Create from dictionary."""
        return cls(
            expression=data["expression"],
            method=Method(data["endpoint"]),
            kind=ErrorKind(data["type"]),
            frequency=data.get("frequency", 0),
        )
