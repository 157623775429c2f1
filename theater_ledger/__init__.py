"""Theater Ledger - client-side index and lifecycle layer for scripts stored on a key/value ledger.

The ledger only offers ``getData``/``setData``/``isAvailable`` on opaque
blobs. This package keeps an index of script ids under ``script_keys``,
stores each script as JSON under ``script_{id}``, enforces the
pending -> analyzed -> archived status machine and ownership on the client,
and derives search, pagination and theme statistics from the reloaded
collection.

Quick Start:
    >>> from theater_ledger import LifecycleManager, MemoryBlobStore, WalletSession
    >>>
    >>> manager = LifecycleManager(MemoryBlobStore(), WalletSession("0xabc"))
    >>> outcome = await manager.create("Hamlet", "To be, or not to be", era="Elizabethan")
    >>> await manager.analyze(outcome.script_id)
    >>> manager.view("love").page(1).items

Environment Variables:
    - LEDGER_URL: Ledger gateway; empty uses a local directory store
    - THEATER_LEDGER_LOG_LEVEL: Log level for the package loggers
"""

from .blob_store import BlobStore, MemoryBlobStore, create_blob_store, get_blob_store, set_blob_store
from .collaborators import AnalysisResult, Encryptor, ScriptAnalyzer, SimulatedFheAnalyzer, SimulatedFheEncryptor
from .collection import (
    CollectionView,
    Page,
    ScriptCollection,
    StatusCounts,
    ThemeCount,
    paginate,
    search,
    status_counts,
    theme_distribution,
)
from .exceptions import (
    AnalysisError,
    AuthorizationDeniedError,
    DecodeError,
    EncryptionError,
    ErrorKind,
    IndexDecodeError,
    InvalidScriptError,
    InvalidTransitionError,
    NotConnectedError,
    OperationInProgressError,
    RemoteUnavailableError,
    ScriptDecodeError,
    ScriptNotFoundError,
    TheaterLedgerError,
    UserRejectedError,
)
from .key_index import INDEX_KEY, KeyIndex
from .lifecycle import LifecycleManager, OperationOutcome
from .logging import LoggingConfig, get_ledger_logger, setup_logging
from .notifications import NotificationLog, TransactionState, TransactionStatus
from .retry import RetryPolicy
from .scripts import Era, Script, ScriptId, ScriptStatus, decode_script, encode_script, generate_script_id, script_key
from .session import WalletSession
from .settings import Settings, settings

__version__ = "0.1.0"

__all__ = [
    "INDEX_KEY",
    "AnalysisError",
    "AnalysisResult",
    "AuthorizationDeniedError",
    "BlobStore",
    "CollectionView",
    "DecodeError",
    "EncryptionError",
    "Encryptor",
    "Era",
    "ErrorKind",
    "IndexDecodeError",
    "InvalidScriptError",
    "InvalidTransitionError",
    "KeyIndex",
    "LifecycleManager",
    "LoggingConfig",
    "MemoryBlobStore",
    "NotConnectedError",
    "NotificationLog",
    "OperationInProgressError",
    "OperationOutcome",
    "Page",
    "RemoteUnavailableError",
    "RetryPolicy",
    "Script",
    "ScriptAnalyzer",
    "ScriptCollection",
    "ScriptDecodeError",
    "ScriptId",
    "ScriptNotFoundError",
    "ScriptStatus",
    "Settings",
    "SimulatedFheAnalyzer",
    "SimulatedFheEncryptor",
    "StatusCounts",
    "TheaterLedgerError",
    "ThemeCount",
    "TransactionState",
    "TransactionStatus",
    "UserRejectedError",
    "WalletSession",
    "create_blob_store",
    "decode_script",
    "encode_script",
    "generate_script_id",
    "get_blob_store",
    "get_ledger_logger",
    "paginate",
    "script_key",
    "search",
    "set_blob_store",
    "settings",
    "setup_logging",
    "status_counts",
    "theme_distribution",
]
