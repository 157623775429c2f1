"""In-memory blob store for testing.

Simple dict-based storage implementing the BlobStore protocol, with switches
to simulate an unavailable ledger or a user declining to sign.
Not for production use: all data is lost when the process exits.
"""

from theater_ledger.exceptions import RemoteUnavailableError, UserRejectedError


class MemoryBlobStore:
    """Dict-based blob store for unit tests.

    Attributes:
        available: When False, every call fails as if the ledger were down.
        reject_writes: When True, writes fail as if the user declined to sign.
        fail_writes_for: Keys whose writes fail with RemoteUnavailableError.
        reads / writes: Keys touched, in call order.
    """

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._blobs: dict[str, bytes] = dict(initial or {})
        self.available = True
        self.reject_writes = False
        self.fail_writes_for: set[str] = set()
        self.reads: list[str] = []
        self.writes: list[str] = []

    async def read(self, key: str) -> bytes:
        """Return a copy of the stored blob, b"" if absent."""
        if not self.available:
            raise RemoteUnavailableError(f"Ledger unavailable while reading {key!r}")
        self.reads.append(key)
        return self._blobs.get(key, b"")

    async def write(self, key: str, data: bytes) -> None:
        """Store data under key, last writer wins."""
        if not self.available:
            raise RemoteUnavailableError(f"Ledger unavailable while writing {key!r}")
        if self.reject_writes:
            raise UserRejectedError("user rejected transaction")
        if key in self.fail_writes_for:
            raise RemoteUnavailableError(f"Write to {key!r} failed")
        self.writes.append(key)
        self._blobs[key] = bytes(data)

    async def check_available(self) -> bool:
        return self.available

    def snapshot(self) -> dict[str, bytes]:
        """Return a copy of all stored blobs."""
        return dict(self._blobs)
