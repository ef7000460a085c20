"""FastAPI application for Learnmap.

Serves the mindmap page, the entry CRUD endpoints and the AI helpers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from learnmap.ai import LLMClient
from learnmap.api.mindmap import router as mindmap_router
from learnmap.api.routes import router
from learnmap.config import settings
from learnmap.mindmap import MindmapSession
from learnmap.storage import FirestoreClient, seed_entries

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan - startup and shutdown."""
    # Startup
    logger.info("Starting Learnmap API...")

    # Tests inject their own store and AI client on app.state
    store: FirestoreClient | None = getattr(app.state, "store", None)
    owns_store = store is None
    if owns_store:
        store = FirestoreClient()
        await store.connect()
        app.state.store = store
        logger.info("Connected to Firestore")

    if getattr(app.state, "llm", None) is None:
        app.state.llm = LLMClient()
        logger.info(f"AI client ready (model: {settings.llm_model})")

    if getattr(app.state, "mindmap", None) is None:
        app.state.mindmap = MindmapSession()

    if settings.seed_on_startup:
        inserted = await seed_entries(store)
        if inserted:
            logger.info(f"Seeded {inserted} demo entries")

    yield

    # Shutdown
    logger.info("Shutting down Learnmap API...")
    await app.state.llm.close()
    if owns_store:
        await store.close()
        logger.info("Disconnected from Firestore")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Learnmap",
        description="Mindmap of learning entries with AI drafting and dictation",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    app.include_router(router)
    app.include_router(mindmap_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "learnmap.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
