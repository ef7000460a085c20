"""Learning entry model - one Firestore document per entry."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from learnmap.models.mindmap import MindmapPath


def utcnow() -> datetime:
    """Timezone-aware current time, matching what Firestore hands back."""
    return datetime.now(timezone.utc)


def _to_datetime(value: Any) -> datetime | None:
    """Coerce a Firestore timestamp, ISO string or None into a datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    # Sentinels such as SERVER_TIMESTAMP are not readable values
    return None


@dataclass
class LearningEntry:
    """
    A single thing learned, filed under main topic and sub topic.

    The three levels (main_topic, sub_topic, title) become the three
    node groups of the mindmap.
    """

    title: str
    main_topic: str
    description: str = ""
    sub_topic: str = ""
    id: str | None = None  # Firestore document id

    # None only for stored documents that never had a createdAt
    created_at: datetime | None = field(default_factory=utcnow)
    updated_at: datetime | None = None

    @property
    def path(self) -> MindmapPath:
        """Position of this entry in the mindmap hierarchy."""
        return MindmapPath(
            main_topic=self.main_topic,
            sub_topic=self.sub_topic,
            title=self.title,
        )

    def to_dict(self) -> dict:
        """Convert to a Firestore document (the id lives on the reference)."""
        return {
            "title": self.title,
            "description": self.description,
            "mainTopic": self.main_topic,
            "subTopic": self.sub_topic,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict, entry_id: str | None = None) -> "LearningEntry":
        """Create from a Firestore document snapshot dict."""
        return cls(
            id=entry_id or data.get("id"),
            title=data.get("title", ""),
            description=data.get("description", ""),
            main_topic=data.get("mainTopic", ""),
            sub_topic=data.get("subTopic") or "",
            created_at=_to_datetime(data.get("createdAt")),
            updated_at=_to_datetime(data.get("updatedAt")),
        )
