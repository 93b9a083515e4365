"""Expression service and error-frequency stores."""

from wordcalc.service.expression import ExpressionService, ExpressionServiceError
from wordcalc.service.models import ExpressionError, Method
from wordcalc.service.repository import (
    FileExprErrorRepository,
    InMemoryExprErrorRepository,
    RepositoryError,
)

__all__ = [
    "ExpressionService",
    "ExpressionServiceError",
    "ExpressionError",
    "Method",
    "InMemoryExprErrorRepository",
    "FileExprErrorRepository",
    "RepositoryError",
]
