"""Demo entries for an empty collection."""

import logging
from datetime import datetime, timezone

from learnmap.models import LearningEntry
from learnmap.storage.firestore_client import FirestoreClient

logger = logging.getLogger(__name__)


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


SEED_ENTRIES: list[LearningEntry] = [
    LearningEntry(
        title="Docker Basics",
        main_topic="DevOps",
        sub_topic="Containers",
        description="Einführung in Docker-Container und ihre Verwaltung",
        created_at=_day(2024, 4, 14),
    ),
    LearningEntry(
        title="Git Workflow",
        main_topic="Version Control",
        sub_topic="Collaboration",
        description="Best Practices für Git-Branches und Merge-Strategien",
        created_at=_day(2024, 4, 15),
    ),
    LearningEntry(
        title="API Design",
        main_topic="Backend",
        sub_topic="Development",
        description="Grundlagen der API-Entwicklung mit REST und GraphQL",
        created_at=_day(2024, 4, 16),
    ),
    LearningEntry(
        title="JWT Authentication",
        main_topic="Security",
        sub_topic="User Management",
        description="Sichere Authentifizierung mit JSON Web Tokens",
        created_at=_day(2024, 4, 17),
    ),
    LearningEntry(
        title="WebSocket Basics",
        main_topic="Backend",
        sub_topic="Communication",
        description="Echtzeitkommunikation mit WebSockets einrichten",
        created_at=_day(2024, 4, 18),
    ),
    LearningEntry(
        title="CSS Grid Layout",
        main_topic="Frontend",
        sub_topic="Styling",
        description="Erstellen von responsiven Layouts mit CSS Grid",
        created_at=_day(2024, 4, 19),
    ),
    LearningEntry(
        title="Accessibility Guidelines",
        main_topic="Frontend",
        sub_topic="Best Practices",
        description="Webseiten barrierefrei gestalten mit WAI-ARIA",
        created_at=_day(2024, 4, 20),
    ),
    LearningEntry(
        title="GraphQL Basics",
        main_topic="Backend",
        sub_topic="API",
        description="Datenabfragen mit GraphQL implementieren",
        created_at=_day(2024, 4, 21),
    ),
    LearningEntry(
        title="Service Workers",
        main_topic="Frontend",
        sub_topic="Performance",
        description="Offlinefähigkeit mit Service Workern verbessern",
        created_at=_day(2024, 4, 22),
    ),
    LearningEntry(
        title="Kubernetes Deployment",
        main_topic="DevOps",
        sub_topic="Orchestration",
        description="Skalierbare Anwendungen mit Kubernetes bereitstellen",
        created_at=_day(2024, 4, 23),
    ),
    LearningEntry(
        title="Node.js Streams",
        main_topic="Backend",
        sub_topic="Programming",
        description="Effiziente Datenverarbeitung mit Node.js Streams",
        created_at=_day(2024, 4, 24),
    ),
    LearningEntry(
        title="Responsive Images",
        main_topic="Frontend",
        sub_topic="Media",
        description="Optimierung von Bildern für verschiedene Bildschirmgrößen",
        created_at=_day(2024, 4, 25),
    ),
    LearningEntry(
        title="OAuth2 Integration",
        main_topic="Security",
        sub_topic="Authorization",
        description="OAuth2 für Drittanbieter-Anwendungen integrieren",
        created_at=_day(2024, 4, 26),
    ),
    LearningEntry(
        title="Code Review Best Practices",
        main_topic="Collaboration",
        sub_topic="Quality Assurance",
        description="Effektive Code Reviews im Team durchführen",
        created_at=_day(2024, 4, 27),
    ),
    LearningEntry(
        title="JSON Schema Validation",
        main_topic="Backend",
        sub_topic="Data Integrity",
        description="Validierung von Daten mit JSON Schema",
        created_at=_day(2024, 5, 21),
    ),
    LearningEntry(
        title="Firebase Authentication",
        main_topic="Backend",
        sub_topic="Security",
        description="Benutzerauthentifizierung mit Firebase implementieren",
        created_at=_day(2024, 5, 22),
    ),
]


async def seed_entries(
    store: FirestoreClient, entries: list[LearningEntry] | None = None
) -> int:
    """Insert demo entries if the collection is empty.

    Returns the number of entries inserted (0 when data already exists).
    """
    existing = await store.count_entries()
    if existing > 0:
        logger.info(f"Collection already holds {existing} entries, skipping seeding")
        return 0

    to_insert = SEED_ENTRIES if entries is None else entries
    for entry in to_insert:
        # Copy so the module-level templates never get ids assigned
        await store.add_entry(
            LearningEntry(
                title=entry.title,
                main_topic=entry.main_topic,
                sub_topic=entry.sub_topic,
                description=entry.description,
                created_at=entry.created_at,
            )
        )
    logger.info(f"Seeded {len(to_insert)} entries")
    return len(to_insert)
