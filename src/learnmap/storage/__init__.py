"""Storage layer for Learnmap."""

from learnmap.storage.firestore_client import FirestoreClient, close_client, get_client
from learnmap.storage.seed import SEED_ENTRIES, seed_entries

__all__ = [
    "FirestoreClient",
    "get_client",
    "close_client",
    "SEED_ENTRIES",
    "seed_entries",
]
