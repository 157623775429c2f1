"""Tests for LocalBlobStore."""

from pathlib import Path

import pytest

from theater_ledger.blob_store import BlobStore
from theater_ledger.blob_store.local import LocalBlobStore


@pytest.fixture
def local_store(tmp_path: Path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "ledger")


class TestLocalBlobStore:
    def test_satisfies_protocol(self, local_store: LocalBlobStore):
        assert isinstance(local_store, BlobStore)

    @pytest.mark.asyncio
    async def test_missing_key_reads_empty(self, local_store: LocalBlobStore):
        assert await local_store.read("script_keys") == b""

    @pytest.mark.asyncio
    async def test_round_trip_creates_directory(self, local_store: LocalBlobStore):
        await local_store.write("script_1-abc", b'{"title":"Hamlet"}')
        assert local_store.base_path.is_dir()
        assert await local_store.read("script_1-abc") == b'{"title":"Hamlet"}'

    @pytest.mark.asyncio
    async def test_overwrite_leaves_no_temp_file(self, local_store: LocalBlobStore):
        await local_store.write("k", b"one")
        await local_store.write("k", b"two")
        assert await local_store.read("k") == b"two"
        assert [p.name for p in local_store.base_path.iterdir()] == ["k.blob"]

    @pytest.mark.asyncio
    async def test_key_with_slash_stays_inside_base(self, local_store: LocalBlobStore, tmp_path: Path):
        await local_store.write("../escape", b"x")
        assert not (tmp_path / "escape.blob").exists()
        assert await local_store.read("../escape") == b"x"

    @pytest.mark.asyncio
    async def test_available_before_first_write(self, local_store: LocalBlobStore):
        assert await local_store.check_available() is True

    @pytest.mark.asyncio
    async def test_unavailable_when_base_is_a_file(self, tmp_path: Path):
        blocker = tmp_path / "ledger"
        blocker.write_text("not a directory")
        assert await LocalBlobStore(blocker).check_available() is False

    @pytest.mark.asyncio
    async def test_empty_key_rejected(self, local_store: LocalBlobStore):
        with pytest.raises(ValueError):
            await local_store.read("")
