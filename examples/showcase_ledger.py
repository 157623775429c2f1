#!/usr/bin/env python3
"""Script ledger showcase: runs standalone without external services.

Demonstrates:
  - MemoryBlobStore and LocalBlobStore
  - Uploading, analyzing and archiving scripts with LifecycleManager
  - Ownership checks against a second wallet
  - Search, pagination, theme distribution and status counts
  - Re-linking a script whose index append failed

Usage:
  python examples/showcase_ledger.py
"""

import asyncio
from pathlib import Path
from tempfile import TemporaryDirectory

from theater_ledger import (
    INDEX_KEY,
    LifecycleManager,
    MemoryBlobStore,
    NotificationLog,
    RemoteUnavailableError,
    WalletSession,
)
from theater_ledger.blob_store.local import LocalBlobStore

ALICE = "0xA11CE00000000000000000000000000000000001"
BOB = "0xB0B0000000000000000000000000000000000002"

PLAYS = [
    ("Hamlet", "Elizabethan", "Who's there?"),
    ("Medea", "Ancient", "Would that the Argo had never winged its way"),
    ("Everyman", "Medieval", "I pray you all give your audience"),
    ("The Way of the World", "Restoration", "To think of a whirlwind"),
    ("Tartuffe", "Restoration", "Come, Flipote, let us leave them"),
    ("Waiting for Godot", "Modern", "Nothing to be done."),
    ("Doctor Faustus", "Elizabethan", "Not marching now in fields of Thrasimene"),
]


# ---------------------------------------------------------------------------
# 1. Lifecycle on the in-memory store
# ---------------------------------------------------------------------------


async def demo_lifecycle() -> None:
    print("\n=== Lifecycle Demo ===\n")

    store = MemoryBlobStore()
    session = WalletSession(ALICE)
    notices = NotificationLog()
    manager = LifecycleManager(store, session, notifier=notices)

    ids = []
    for title, era, content in PLAYS:
        outcome = await manager.create(title, content, era=era)
        ids.append(outcome.script_id)
        print(f"{outcome.status:8} {title:24} -> {outcome.script_id}")

    for script_id in ids[:3]:
        await manager.analyze(script_id)
    await manager.archive(ids[3])

    session.switch_account(BOB)
    refused = await manager.archive(ids[0])
    print(f"\nBob archiving Alice's script: {refused.error} ({refused.message})")
    session.switch_account(ALICE)

    view = manager.view("e", page_size=3)
    for page in view.pages():
        titles = ", ".join(s.title for s in page.items)
        print(f"page {page.page}/{page.total_pages}: {titles}")

    stats = view.stats()
    print(f"\npending={stats.pending} analyzed={stats.analyzed} archived={stats.archived}")
    for theme in view.themes():
        print(f"  {theme.theme:10} {'#' * theme.count}")

    print(f"\n{len(notices.history)} notices, last: {notices.latest.message}")


# ---------------------------------------------------------------------------
# 2. Index repair on the local filesystem store
# ---------------------------------------------------------------------------


async def demo_repair(base: Path) -> None:
    print("\n=== Index Repair Demo ===\n")

    store = LocalBlobStore(base)
    manager = LifecycleManager(store, WalletSession(ALICE))

    await manager.create("Hamlet", "Who's there?", era="Elizabethan")

    # Simulate the ledger dropping the index append after the script write
    real_write = store.write

    async def drop_index_write(key: str, data: bytes) -> None:
        if key == INDEX_KEY:
            raise RemoteUnavailableError("simulated timeout")
        await real_write(key, data)

    store.write = drop_index_write  # type: ignore[method-assign]
    failed = await manager.create("Medea", "Would that the Argo...", era="Ancient")
    store.write = real_write  # type: ignore[method-assign]

    print(f"Create: {failed.message}")
    print(f"Orphaned ids: {manager.orphaned_ids}")
    print(f"Indexed before repair: {[s.title for s in manager.collection.scripts]}")

    repaired = await manager.repair_index()
    print(f"Repaired: {repaired}")
    print(f"Indexed after repair: {[s.title for s in manager.collection.scripts]}")
    print(f"Blobs on disk: {sorted(p.name for p in base.iterdir())}")


async def main() -> None:
    await demo_lifecycle()
    with TemporaryDirectory() as tmp:
        await demo_repair(Path(tmp))


if __name__ == "__main__":
    asyncio.run(main())
