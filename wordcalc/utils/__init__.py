"""Utility modules for wordcalc."""

from wordcalc.utils.atomic import AtomicWriteError, atomic_write_json
from wordcalc.utils.logging import (
    configure_logging,
    get_correlation_id,
    get_logger,
    set_correlation_id,
    set_request_context,
)
from wordcalc.utils.result import ConfigError, Err, ExitCode, Ok, Result

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_correlation_id",
    "set_correlation_id",
    "set_request_context",
    # Atomic writes
    "AtomicWriteError",
    "atomic_write_json",
    # Results
    "Ok",
    "Err",
    "Result",
    "ConfigError",
    "ExitCode",
]
