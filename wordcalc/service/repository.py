"""Error-frequency stores."""

from __future__ import annotations

import json
import threading
from dataclasses import replace
from pathlib import Path

from wordcalc.service.models import ExpressionError
from wordcalc.utils.atomic import AtomicWriteError, atomic_write_json
from wordcalc.utils.logging import get_logger

logger = get_logger("service.repository")


class RepositoryError(Exception):
    """The error store could not be read or written."""

    pass


class InMemoryExprErrorRepository:
    """
    Thread-safe map from expression text to its failure record.

    The first failure of an expression fixes its method and kind; later
    failures only bump the frequency.
    """

    def __init__(self) -> None:
        self._errors: dict[str, ExpressionError] = {}
        self._lock = threading.Lock()

    def increment(self, error: ExpressionError) -> ExpressionError:
        """Record one failure and return a snapshot of the updated record."""
        with self._lock:
            existing = self._errors.get(error.expression)
            if existing is None:
                updated = replace(error, frequency=1)
            else:
                updated = replace(existing, frequency=existing.frequency + 1)

            candidate = dict(self._errors)
            candidate[error.expression] = updated
            # Only commit once the new state has been persisted
            self._persist(candidate)
            self._errors = candidate
        return replace(updated)

    def get_all(self) -> list[ExpressionError]:
        """Snapshot of all records, in first-seen order."""
        with self._lock:
            return [replace(e) for e in self._errors.values()]

    def _persist(self, errors: dict[str, ExpressionError]) -> None:
        """Hook run under the lock before an increment is committed."""
        pass


class FileExprErrorRepository(InMemoryExprErrorRepository):
    """In-memory store persisted to a JSON file after every increment."""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.debug("no_existing_errors", path=str(self.path))
            return

        try:
            data = json.loads(self.path.read_text())
            if not isinstance(data, dict) or not isinstance(data.get("errors", []), list):
                raise ValueError("expected an object with an 'errors' list")
            for item in data.get("errors", []):
                record = ExpressionError.from_dict(item)
                self._errors[record.expression] = record
        except (OSError, KeyError, TypeError, ValueError) as e:
            raise RepositoryError(f"Failed to load {self.path}: {e}") from e

        logger.info("errors_loaded", count=len(self._errors), path=str(self.path))

    def _persist(self, errors: dict[str, ExpressionError]) -> None:
        data = {"errors": [e.to_dict() for e in errors.values()]}
        try:
            atomic_write_json(self.path, data)
        except AtomicWriteError as e:
            raise RepositoryError(str(e)) from e
