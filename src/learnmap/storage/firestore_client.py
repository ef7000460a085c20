"""Firestore client for learning entry operations."""

import asyncio
import logging
from typing import Any

import firebase_admin
from firebase_admin import credentials, firestore

from learnmap.config import settings
from learnmap.models import LearningEntry, utcnow

logger = logging.getLogger(__name__)


class FirestoreClient:
    """Async wrapper around the firebase-admin Firestore client.

    The SDK client is synchronous; every call runs in a worker thread so the
    event loop stays free.
    """

    def __init__(
        self,
        credentials_path: str | None = None,
        project_id: str | None = None,
        collection: str | None = None,
        app_name: str | None = None,
        db: Any = None,
    ) -> None:
        self.credentials_path = credentials_path or settings.firestore_credentials_path
        self.project_id = project_id or settings.firestore_project_id
        self.collection = collection or settings.firestore_collection
        self.app_name = app_name or settings.firestore_app_name
        self._app: firebase_admin.App | None = None
        self._db = db

    async def connect(self) -> None:
        """Initialize the Firebase app and Firestore client."""
        if self._db is not None:
            return

        if self.credentials_path:
            cred = credentials.Certificate(self.credentials_path)
        else:
            cred = credentials.ApplicationDefault()
        options = {"projectId": self.project_id} if self.project_id else None

        try:
            self._app = firebase_admin.get_app(self.app_name)
        except ValueError:
            self._app = firebase_admin.initialize_app(cred, options, name=self.app_name)
        self._db = firestore.client(app=self._app)
        logger.info(f"Connected to Firestore collection '{self.collection}'")

    async def close(self) -> None:
        """Release the Firebase app."""
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None
            logger.info("Disconnected from Firestore")
        self._db = None

    def _collection(self) -> Any:
        if self._db is None:
            raise RuntimeError("Firestore client not connected")
        return self._db.collection(self.collection)

    # ==========================================================================
    # Entry operations
    # ==========================================================================

    async def add_entry(self, entry: LearningEntry) -> str:
        """Store a new entry and return its document id."""
        data = entry.to_dict()
        data["createdAt"] = data["createdAt"] or utcnow()
        data["updatedAt"] = data["updatedAt"] or utcnow()

        _, doc_ref = await asyncio.to_thread(self._collection().add, data)
        entry.id = doc_ref.id
        logger.debug(f"Added entry {doc_ref.id}: {entry.main_topic} / {entry.sub_topic} / {entry.title}")
        return doc_ref.id

    async def get_entries(self) -> list[LearningEntry]:
        """All entries, newest first."""
        query = self._collection().order_by(
            "createdAt", direction=firestore.Query.DESCENDING
        )

        def _fetch() -> list[LearningEntry]:
            return [
                LearningEntry.from_dict(doc.to_dict() or {}, entry_id=doc.id)
                for doc in query.stream()
            ]

        return await asyncio.to_thread(_fetch)

    async def get_entry(self, entry_id: str) -> LearningEntry | None:
        """Get an entry by document id."""
        snapshot = await asyncio.to_thread(self._collection().document(entry_id).get)
        if not snapshot.exists:
            return None
        return LearningEntry.from_dict(snapshot.to_dict() or {}, entry_id=snapshot.id)

    async def update_entry(self, entry: LearningEntry) -> bool:
        """Update title and description of an existing entry.

        Topics and creation time are kept; ``updatedAt`` is set by the
        server. Returns False if the entry does not exist.
        """
        if not entry.id:
            raise ValueError("Cannot update an entry without id")

        doc_ref = self._collection().document(entry.id)
        snapshot = await asyncio.to_thread(doc_ref.get)
        if not snapshot.exists:
            return False

        await asyncio.to_thread(
            doc_ref.update,
            {
                "title": entry.title,
                "description": entry.description,
                "updatedAt": firestore.SERVER_TIMESTAMP,
            },
        )
        logger.debug(f"Updated entry {entry.id}")
        return True

    async def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry. Returns False if it did not exist."""
        doc_ref = self._collection().document(entry_id)
        snapshot = await asyncio.to_thread(doc_ref.get)
        if not snapshot.exists:
            return False
        await asyncio.to_thread(doc_ref.delete)
        logger.debug(f"Deleted entry {entry_id}")
        return True

    async def count_entries(self) -> int:
        """Number of entries in the collection, via a server-side count."""
        def _count() -> int:
            results = self._collection().count(alias="total").get()
            return int(results[0][0].value)

        return await asyncio.to_thread(_count)


# Global client instance
_client: FirestoreClient | None = None


async def get_client() -> FirestoreClient:
    """Get or create the global Firestore client."""
    global _client
    if _client is None:
        _client = FirestoreClient()
        await _client.connect()
    return _client


async def close_client() -> None:
    """Close the global Firestore client."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None
