"""Transient status notifications for ledger operations.

Every lifecycle operation reports a ``pending`` notice when it starts and a
terminal ``success`` or ``error`` notice when it ends. How long a notice
stays on screen is up to the presentation layer; ``display_seconds`` carries
the suggested duration.
"""

from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from theater_ledger.exceptions import ErrorKind
from theater_ledger.logging import get_ledger_logger

logger = get_ledger_logger(__name__)

SUCCESS_DISPLAY_SECONDS = 2.0
ERROR_DISPLAY_SECONDS = 3.0


class TransactionState(StrEnum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class TransactionStatus(BaseModel):
    """One status notice."""

    model_config = ConfigDict(frozen=True)

    state: TransactionState
    message: str
    error: ErrorKind | None = None
    display_seconds: float | None = None

    @classmethod
    def pending(cls, message: str) -> "TransactionStatus":
        return cls(state=TransactionState.PENDING, message=message)

    @classmethod
    def success(cls, message: str) -> "TransactionStatus":
        return cls(state=TransactionState.SUCCESS, message=message, display_seconds=SUCCESS_DISPLAY_SECONDS)

    @classmethod
    def failure(cls, message: str, error: ErrorKind) -> "TransactionStatus":
        return cls(
            state=TransactionState.ERROR,
            message=message,
            error=error,
            display_seconds=ERROR_DISPLAY_SECONDS,
        )


Notifier = Callable[[TransactionStatus], None]


def log_notifier(status: TransactionStatus) -> None:
    """Default notifier: write the notice to the log."""
    if status.state is TransactionState.ERROR:
        logger.warning(f"[{status.error}] {status.message}")
    else:
        logger.info(f"[{status.state}] {status.message}")


class NotificationLog:
    """Notifier that keeps every notice, newest last."""

    def __init__(self) -> None:
        self.history: list[TransactionStatus] = []

    def __call__(self, status: TransactionStatus) -> None:
        self.history.append(status)

    @property
    def latest(self) -> TransactionStatus | None:
        return self.history[-1] if self.history else None
