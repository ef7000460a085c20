"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from learnmap.ai import LLMClient, TranscriptionResult
from learnmap.config import Settings, get_test_settings
from learnmap.models import LearningEntry, utcnow
from learnmap.storage import FirestoreClient


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults."""
    return get_test_settings()


@pytest.fixture
def sample_entries() -> list[LearningEntry]:
    """Four entries across two main topics."""
    return [
        LearningEntry(
            id="e1",
            title="Docker Basics",
            main_topic="DevOps",
            sub_topic="Containers",
            description="Einführung in Docker-Container",
            created_at=datetime(2024, 4, 14, tzinfo=timezone.utc),
        ),
        LearningEntry(
            id="e2",
            title="Kubernetes Deployment",
            main_topic="DevOps",
            sub_topic="Orchestration",
            description="Skalierbare Anwendungen mit Kubernetes",
            created_at=datetime(2024, 4, 23, tzinfo=timezone.utc),
        ),
        LearningEntry(
            id="e3",
            title="GraphQL Basics",
            main_topic="Backend",
            sub_topic="API",
            description="Datenabfragen mit GraphQL",
            created_at=datetime(2024, 4, 21, tzinfo=timezone.utc),
        ),
        LearningEntry(
            id="e4",
            title="Podman",
            main_topic="DevOps",
            sub_topic="Containers",
            description="Container ohne Daemon",
            created_at=datetime(2024, 5, 2, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def mock_store(sample_entries: list[LearningEntry]) -> FirestoreClient:
    """Mock Firestore client backed by an in-memory dict."""
    store = MagicMock(spec=FirestoreClient)
    docs = {entry.id: entry for entry in sample_entries}

    async def add_entry(entry: LearningEntry) -> str:
        entry.id = f"new-{len(docs) + 1}"
        docs[entry.id] = entry
        return entry.id

    async def get_entries() -> list[LearningEntry]:
        return sorted(docs.values(), key=lambda e: e.created_at, reverse=True)

    async def get_entry(entry_id: str) -> LearningEntry | None:
        return docs.get(entry_id)

    async def update_entry(entry: LearningEntry) -> bool:
        if entry.id not in docs:
            return False
        entry.updated_at = utcnow()
        docs[entry.id] = entry
        return True

    async def delete_entry(entry_id: str) -> bool:
        return docs.pop(entry_id, None) is not None

    async def count_entries() -> int:
        return len(docs)

    store.add_entry = AsyncMock(side_effect=add_entry)
    store.get_entries = AsyncMock(side_effect=get_entries)
    store.get_entry = AsyncMock(side_effect=get_entry)
    store.update_entry = AsyncMock(side_effect=update_entry)
    store.delete_entry = AsyncMock(side_effect=delete_entry)
    store.count_entries = AsyncMock(side_effect=count_entries)
    store.connect = AsyncMock()
    store.close = AsyncMock()
    store.docs = docs

    return store


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Mock AI client for testing without the remote endpoint."""
    client = MagicMock(spec=LLMClient)
    client.complete = AsyncMock(
        return_value="# Docker\n\nDocker ist eine Plattform für Container."
    )
    client.chat = AsyncMock(return_value="Test response")
    client.transcribe = AsyncMock(
        return_value=TranscriptionResult(text="Was ist Docker?", language="de")
    )
    client.close = AsyncMock()

    return client


@pytest.fixture
def api_app(mock_store, mock_llm_client, monkeypatch):
    """FastAPI app wired to the mock store and AI client."""
    from learnmap.api import main
    from learnmap.mindmap import MindmapSession

    monkeypatch.setattr(main.settings, "seed_on_startup", False)
    app = main.create_app()
    app.state.store = mock_store
    app.state.llm = mock_llm_client
    app.state.mindmap = MindmapSession(width=1200, height=800, seed=1)
    return app


@pytest.fixture
def api_client(api_app):
    """Test client with the app lifespan running."""
    from fastapi.testclient import TestClient

    with TestClient(api_app) as client:
        yield client
