"""Tests for LifecycleManager.repair_index."""

import json

import pytest

from tests.support.helpers import make_script, seed
from theater_ledger.blob_store.memory import MemoryBlobStore
from theater_ledger.exceptions import NotConnectedError
from theater_ledger.key_index import INDEX_KEY
from theater_ledger.lifecycle import LifecycleManager
from theater_ledger.scripts import encode_script, script_key
from theater_ledger.session import WalletSession


class TestRepairIndex:
    @pytest.mark.asyncio
    async def test_relinks_orphan_from_failed_create(self, manager: LifecycleManager, store: MemoryBlobStore):
        store.fail_writes_for.add(INDEX_KEY)
        await manager.create("Hamlet", "text")
        orphan = manager.orphaned_ids[0]

        store.fail_writes_for.clear()
        assert await manager.repair_index() == [orphan]
        assert manager.orphaned_ids == []
        assert [s.id for s in manager.collection.scripts] == [orphan]

    @pytest.mark.asyncio
    async def test_relinks_caller_supplied_ids(self, manager: LifecycleManager, store: MemoryBlobStore):
        await seed(store, make_script("1-a"))
        lost = make_script("2-b", created_at=2_000_000_000)
        await store.write(script_key(lost.id), encode_script(lost))

        assert await manager.repair_index(["2-b", "1-a"]) == ["2-b"]
        assert json.loads(await store.read(INDEX_KEY)) == ["1-a", "2-b"]
        assert [s.id for s in manager.collection.scripts] == ["2-b", "1-a"]

    @pytest.mark.asyncio
    async def test_skips_missing_and_malformed_blobs(self, manager: LifecycleManager, store: MemoryBlobStore):
        await store.write(script_key("bad"), b"{")
        store.writes.clear()
        assert await manager.repair_index(["ghost", "bad"]) == []
        assert store.writes == []

    @pytest.mark.asyncio
    async def test_requires_session(self, manager: LifecycleManager, session: WalletSession):
        session.disconnect()
        with pytest.raises(NotConnectedError):
            await manager.repair_index(["1-a"])
