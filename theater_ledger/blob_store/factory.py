"""Factory function for creating blob store instances based on settings."""

from pathlib import Path

from theater_ledger.blob_store.protocol import BlobStore
from theater_ledger.settings import Settings


def create_blob_store(settings: Settings) -> BlobStore:
    """Create a BlobStore based on settings.

    Selects HttpBlobStore when ledger_url is configured, otherwise falls back
    to LocalBlobStore. Backends are imported lazily.
    """
    if settings.ledger_url:
        from theater_ledger.blob_store.http import HttpBlobStore

        return HttpBlobStore(
            settings.ledger_url,
            api_key=settings.ledger_api_key,
            timeout=settings.ledger_timeout,
        )

    from theater_ledger.blob_store.local import LocalBlobStore

    return LocalBlobStore(Path(settings.local_store_path) if settings.local_store_path else None)
