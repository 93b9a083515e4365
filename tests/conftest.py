"""Shared fixtures for wordcalc tests."""

from __future__ import annotations

import sys

import pytest

from wordcalc.interp.interpreter import Interpreter
from wordcalc.service.expression import ExpressionService
from wordcalc.service.repository import InMemoryExprErrorRepository
from wordcalc.utils.logging import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    """Point structlog at the current stderr; CLI tests swap the stream."""
    configure_logging(level="error", stream=sys.stderr)
    yield


@pytest.fixture
def repository() -> InMemoryExprErrorRepository:
    return InMemoryExprErrorRepository()


@pytest.fixture
def service(repository: InMemoryExprErrorRepository) -> ExpressionService:
    return ExpressionService(Interpreter(), repository)
