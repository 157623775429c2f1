"""Blob store protocol and backends for the script ledger."""

from .factory import create_blob_store
from .memory import MemoryBlobStore
from .protocol import BlobStore, get_blob_store, set_blob_store

__all__ = [
    "BlobStore",
    "MemoryBlobStore",
    "create_blob_store",
    "get_blob_store",
    "set_blob_store",
]
