"""Exception hierarchy for Theater Ledger.

All exceptions inherit from TheaterLedgerError. The lifecycle manager maps
each of them to an ErrorKind so callers get a uniform status notification
instead of an exception.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Failure category reported in operation outcomes."""

    NOT_CONNECTED = "not_connected"
    REMOTE_UNAVAILABLE = "remote_unavailable"
    DECODE_ERROR = "decode_error"
    AUTHORIZATION_DENIED = "authorization_denied"
    USER_REJECTED = "user_rejected"
    INVALID_SCRIPT = "invalid_script"
    INVALID_TRANSITION = "invalid_transition"
    NOT_FOUND = "not_found"
    IN_PROGRESS = "in_progress"
    ANALYSIS_FAILED = "analysis_failed"
    ENCRYPTION_FAILED = "encryption_failed"


class TheaterLedgerError(Exception):
    """Base exception for all Theater Ledger errors."""

    kind: ErrorKind = ErrorKind.REMOTE_UNAVAILABLE
    retryable: bool = False


class NotConnectedError(TheaterLedgerError):
    """Raised when a mutating operation is attempted without a wallet session."""

    kind = ErrorKind.NOT_CONNECTED


class RemoteUnavailableError(TheaterLedgerError):
    """Raised when the ledger is unavailable or a read/write fails in transport."""

    kind = ErrorKind.REMOTE_UNAVAILABLE
    retryable = True


class DecodeError(TheaterLedgerError):
    """Base exception for payloads that cannot be decoded."""

    kind = ErrorKind.DECODE_ERROR


class IndexDecodeError(DecodeError):
    """Raised when the key index blob is not a JSON array of strings."""


class ScriptDecodeError(DecodeError):
    """Raised when a script blob is not a valid script record."""


class AuthorizationDeniedError(TheaterLedgerError):
    """Raised when the caller is not the owner of the script.

    Client-side only: the ledger itself does not enforce ownership.
    """

    kind = ErrorKind.AUTHORIZATION_DENIED


class UserRejectedError(TheaterLedgerError):
    """Raised when the signer reports that the user declined the transaction."""

    kind = ErrorKind.USER_REJECTED


class InvalidScriptError(TheaterLedgerError):
    """Raised when upload input fails validation (empty title/content, unknown era)."""

    kind = ErrorKind.INVALID_SCRIPT


class InvalidTransitionError(TheaterLedgerError):
    """Raised when a status transition is not allowed from the current status."""

    kind = ErrorKind.INVALID_TRANSITION


class ScriptNotFoundError(TheaterLedgerError):
    """Raised when a script blob is missing from the ledger."""

    kind = ErrorKind.NOT_FOUND


class OperationInProgressError(TheaterLedgerError):
    """Raised when the same action is triggered again while it is still in flight."""

    kind = ErrorKind.IN_PROGRESS


class AnalysisError(TheaterLedgerError):
    """Raised when the analysis capability fails or returns no themes."""

    kind = ErrorKind.ANALYSIS_FAILED


class EncryptionError(TheaterLedgerError):
    """Raised when the encryption capability cannot produce a ciphertext token."""

    kind = ErrorKind.ENCRYPTION_FAILED
