"""Shared builders for ledger tests."""

import itertools
import json

from theater_ledger.blob_store.memory import MemoryBlobStore
from theater_ledger.key_index import INDEX_KEY
from theater_ledger.scripts import Script, ScriptId, ScriptStatus, encode_script, script_key

OWNER = "0xAbC0000000000000000000000000000000000001"
OTHER = "0xdef0000000000000000000000000000000000002"


class TickingClock:
    """Clock that advances one second per call, so created_at is strictly increasing."""

    def __init__(self, start: int = 1_700_000_000) -> None:
        self._ticks = itertools.count(start)

    def __call__(self) -> float:
        return float(next(self._ticks))


def make_script(
    script_id: str,
    *,
    title: str = "Hamlet",
    era: str = "Elizabethan",
    created_at: int = 1_700_000_000,
    owner: str = OWNER,
    status: ScriptStatus = ScriptStatus.PENDING,
    themes: tuple[str, ...] = (),
    character_network: str = "",
) -> Script:
    return Script(
        id=ScriptId(script_id),
        title=title,
        content="FHE-abc",
        created_at=created_at,
        owner=owner,
        era=era,
        status=status,
        themes=themes,
        character_network=character_network,
    )


async def seed(store: MemoryBlobStore, *scripts: Script, index: list[str] | None = None) -> None:
    """Write scripts and an index listing them (or the given ids) straight into the store."""
    for script in scripts:
        await store.write(script_key(script.id), encode_script(script))
    ids = index if index is not None else [s.id for s in scripts]
    await store.write(INDEX_KEY, json.dumps(ids).encode())
    store.writes.clear()
