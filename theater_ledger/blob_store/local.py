"""Local filesystem blob store for CLI/debug mode.

Layout:
    {base_path}/{quoted key}.blob   <- raw bytes of one key

Writes go to a temporary file that is renamed over the target, so a reader
never sees a half-written blob.
"""

import asyncio
import os
from pathlib import Path
from urllib.parse import quote

from theater_ledger.exceptions import RemoteUnavailableError
from theater_ledger.logging import get_ledger_logger

logger = get_ledger_logger(__name__)

BLOB_SUFFIX = ".blob"


class LocalBlobStore:
    """Filesystem-backed blob store for local development and debugging."""

    def __init__(self, base_path: Path | None = None) -> None:
        self._base_path = base_path or Path.cwd() / ".theater_ledger"

    @property
    def base_path(self) -> Path:
        """Root directory for all stored blobs."""
        return self._base_path

    async def read(self, key: str) -> bytes:
        return await asyncio.to_thread(self._read_sync, key)

    async def write(self, key: str, data: bytes) -> None:
        await asyncio.to_thread(self._write_sync, key, data)

    async def check_available(self) -> bool:
        return await asyncio.to_thread(self._available_sync)

    # --- Sync implementation (called via asyncio.to_thread) ---

    def _path_for(self, key: str) -> Path:
        if not key:
            raise ValueError("Blob key must not be empty")
        # quote() with safe="" escapes "/" so a key can never leave base_path
        return self._base_path / f"{quote(key, safe='')}{BLOB_SUFFIX}"

    def _read_sync(self, key: str) -> bytes:
        path = self._path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return b""
        except OSError as e:
            raise RemoteUnavailableError(f"Failed to read {key!r}: {e}") from e

    def _write_sync(self, key: str, data: bytes) -> None:
        path = self._path_for(key)
        tmp = path.with_name(path.name + ".tmp")
        try:
            self._base_path.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            os.replace(tmp, path)
        except OSError as e:
            logger.error(f"Local write of {key!r} failed: {e}")
            raise RemoteUnavailableError(f"Failed to write {key!r}: {e}") from e

    def _available_sync(self) -> bool:
        if not self._base_path.exists():
            # Created lazily on first write
            return os.access(self._nearest_existing_parent(), os.W_OK)
        return self._base_path.is_dir() and os.access(self._base_path, os.W_OK)

    def _nearest_existing_parent(self) -> Path:
        path = self._base_path
        while not path.exists() and path != path.parent:
            path = path.parent
        return path
