"""Blob store protocol and singleton management.

Defines the BlobStore protocol that all ledger backends must implement,
along with get/set helpers for the process-global singleton.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class BlobStore(Protocol):
    """Protocol for key/value ledger backends.

    Implementations: HttpBlobStore (ledger gateway), LocalBlobStore (CLI/debug),
    MemoryBlobStore (testing).

    A missing key is not an error: ``read`` returns ``b""``. Transport and
    signing failures raise RemoteUnavailableError or UserRejectedError.
    Backends never retry.
    """

    async def read(self, key: str) -> bytes:
        """Return the blob stored under key, or b"" if absent."""
        ...

    async def write(self, key: str, data: bytes) -> None:
        """Replace the blob under key. Returns once the ledger acknowledged the write."""
        ...

    async def check_available(self) -> bool:
        """Return whether the ledger is reachable and accepting requests."""
        ...


_blob_store: BlobStore | None = None


def get_blob_store() -> BlobStore | None:
    """Get the process-global blob store singleton."""
    return _blob_store


def set_blob_store(store: BlobStore | None) -> None:
    """Set the process-global blob store singleton."""
    global _blob_store
    _blob_store = store
