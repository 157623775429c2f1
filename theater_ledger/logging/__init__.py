"""Logging infrastructure for Theater Ledger.

Example:
    >>> from theater_ledger.logging import get_ledger_logger
    >>> logger = get_ledger_logger(__name__)
    >>> logger.info("Processing started")

Note:
    Never import Python's logging module directly in library code. Always use
    get_ledger_logger() for consistent configuration.
"""

from .logging_config import LoggingConfig, get_ledger_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "get_ledger_logger",
    "setup_logging",
]
