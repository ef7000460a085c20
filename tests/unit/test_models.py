"""Unit tests for data models."""

from datetime import datetime, timezone

from learnmap.models import (
    GROUP_TITLE,
    LearningEntry,
    MindmapData,
    MindmapLink,
    MindmapNode,
    MindmapPath,
)


class TestLearningEntry:
    """Tests for LearningEntry."""

    def test_defaults(self) -> None:
        entry = LearningEntry(title="Docker Basics", main_topic="DevOps")
        assert entry.id is None
        assert entry.description == ""
        assert entry.sub_topic == ""
        assert entry.created_at.tzinfo is not None
        assert entry.updated_at is None

    def test_path(self) -> None:
        entry = LearningEntry(
            title="Docker Basics", main_topic="DevOps", sub_topic="Containers"
        )
        assert entry.path == MindmapPath("DevOps", "Containers", "Docker Basics")

    def test_to_dict_uses_document_field_names(self) -> None:
        created = datetime(2024, 4, 14, tzinfo=timezone.utc)
        entry = LearningEntry(
            id="abc",
            title="Docker Basics",
            main_topic="DevOps",
            sub_topic="Containers",
            description="Einführung",
            created_at=created,
        )
        data = entry.to_dict()
        assert data == {
            "title": "Docker Basics",
            "description": "Einführung",
            "mainTopic": "DevOps",
            "subTopic": "Containers",
            "createdAt": created,
            "updatedAt": None,
        }
        assert "id" not in data

    def test_from_dict(self) -> None:
        created = datetime(2024, 4, 14, tzinfo=timezone.utc)
        entry = LearningEntry.from_dict(
            {
                "title": "Docker Basics",
                "mainTopic": "DevOps",
                "subTopic": "Containers",
                "description": "Einführung",
                "createdAt": created,
                "updatedAt": "2024-05-01T10:00:00+00:00",
            },
            entry_id="doc-1",
        )
        assert entry.id == "doc-1"
        assert entry.main_topic == "DevOps"
        assert entry.sub_topic == "Containers"
        assert entry.created_at == created
        assert entry.updated_at == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)

    def test_from_dict_missing_fields(self) -> None:
        entry = LearningEntry.from_dict({"title": "T", "mainTopic": "M", "subTopic": None})
        assert entry.sub_topic == ""
        assert entry.description == ""
        assert entry.created_at is None
        assert entry.updated_at is None

    def test_from_dict_ignores_unreadable_timestamps(self) -> None:
        entry = LearningEntry.from_dict(
            {"title": "T", "mainTopic": "M", "updatedAt": object()}
        )
        assert entry.updated_at is None


class TestMindmapModels:
    """Tests for mindmap nodes, links and graph."""

    def test_node_to_dict(self) -> None:
        created = datetime(2024, 4, 14, tzinfo=timezone.utc)
        node = MindmapNode(
            id="DevOps-Containers-Docker",
            name="Docker",
            group=GROUP_TITLE,
            parent="DevOps-Containers",
            entry_id="e1",
            created_at=created,
            x=10.0,
            y=20.0,
        )
        data = node.to_dict()
        assert data["id"] == "DevOps-Containers-Docker"
        assert data["group"] == 3
        assert data["collapsed"] is True
        assert data["created_at"] == "2024-04-14T00:00:00+00:00"
        assert data["updated_at"] is None
        assert (data["x"], data["y"]) == (10.0, 20.0)

    def test_link_to_dict(self) -> None:
        assert MindmapLink("a", "b").to_dict() == {"source": "a", "target": "b"}

    def test_path_to_dict(self) -> None:
        assert MindmapPath("DevOps").to_dict() == {
            "main_topic": "DevOps",
            "sub_topic": "",
            "title": "",
        }

    def test_get_node(self) -> None:
        data = MindmapData(nodes=[MindmapNode(id="a", name="a", group=1)])
        assert data.get_node("a").name == "a"
        assert data.get_node("missing") is None
        assert list(data.node_index()) == ["a"]
