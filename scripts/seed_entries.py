#!/usr/bin/env python3
"""Seed demo learning entries into Firestore for development."""

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

# Add src to path for development
sys.path.insert(0, str(project_root / "src"))

from learnmap.storage import FirestoreClient, seed_entries

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def main() -> None:
    """Main entry point."""
    store = FirestoreClient()
    await store.connect()

    try:
        inserted = await seed_entries(store)
        total = await store.count_entries()
        logger.info(
            f"\nSeeding complete:\n"
            f"  Inserted: {inserted}\n"
            f"  Entries in collection: {total}"
        )
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
