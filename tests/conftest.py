"""Common test fixtures for the ledger client."""

import pytest

from tests.support.helpers import OWNER, TickingClock
from theater_ledger.blob_store.memory import MemoryBlobStore
from theater_ledger.lifecycle import LifecycleManager
from theater_ledger.notifications import NotificationLog
from theater_ledger.session import WalletSession


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def session() -> WalletSession:
    return WalletSession(OWNER)


@pytest.fixture
def notifications() -> NotificationLog:
    return NotificationLog()


@pytest.fixture
def manager(store: MemoryBlobStore, session: WalletSession, notifications: NotificationLog) -> LifecycleManager:
    return LifecycleManager(store, session, notifier=notifications, clock=TickingClock())
