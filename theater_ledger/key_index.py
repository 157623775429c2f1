"""Key index: the ordered list of script ids under ``script_keys``.

The index is a single JSON array blob. It is the only record of which
scripts exist, since the ledger offers no key listing.

Known consistency gap: ``append`` is a read-modify-write of the whole blob
and the ledger has no compare-and-swap, so two clients appending at the same
time can lose one of the ids (last writer wins). The lost script's blob still
exists and can be re-linked with ``LifecycleManager.repair_index``.
"""

import json

from theater_ledger.blob_store.protocol import BlobStore
from theater_ledger.exceptions import IndexDecodeError
from theater_ledger.logging import get_ledger_logger
from theater_ledger.scripts._types import ScriptId

logger = get_ledger_logger(__name__)

INDEX_KEY = "script_keys"


def decode_index(data: bytes) -> list[ScriptId]:
    """Strictly decode an index payload. Empty payload is an empty index.

    Non-string entries are dropped and duplicates keep their first position.

    Raises:
        IndexDecodeError: If the payload is not a UTF-8 JSON array.
    """
    if not data:
        return []
    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise IndexDecodeError(f"Index is not valid JSON: {e}") from e
    if not isinstance(raw, list):
        raise IndexDecodeError(f"Index payload is {type(raw).__name__}, expected array")

    ids: list[ScriptId] = []
    seen: set[str] = set()
    for entry in raw:
        if not isinstance(entry, str) or not entry:
            logger.warning(f"Dropping invalid index entry {entry!r}")
            continue
        if entry in seen:
            continue
        seen.add(entry)
        ids.append(ScriptId(entry))
    return ids


def encode_index(ids: list[ScriptId]) -> bytes:
    return json.dumps(list(ids), separators=(",", ":")).encode("utf-8")


class KeyIndex:
    """Reads and appends to the key index blob."""

    def __init__(self, store: BlobStore, key: str = INDEX_KEY) -> None:
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> list[ScriptId]:
        """Return the ids in index order.

        A malformed payload is logged and treated as an empty index so that a
        corrupted blob does not take the whole collection down. Transport
        errors propagate.
        """
        data = await self._store.read(self._key)
        try:
            return decode_index(data)
        except IndexDecodeError as e:
            logger.error(f"Ignoring malformed key index {self._key!r}: {e}")
            return []

    async def append(self, script_id: ScriptId) -> list[ScriptId]:
        """Append an id and persist the index. Not atomic, see module docstring.

        Appending an id that is already present is a no-op write-free call.
        """
        ids = await self.load()
        if script_id in ids:
            return ids
        ids.append(script_id)
        await self._store.write(self._key, encode_index(ids))
        logger.debug(f"Appended {script_id} to {self._key!r} ({len(ids)} entries)")
        return ids
