"""API routes for Learnmap.

Provides:
- /v1/entries CRUD for learning entries
- /v1/ai/completions Markdown drafting helper
- /v1/audio/transcriptions dictation helper
- Admin endpoints for health and seeding
"""

import asyncio
import logging
from datetime import datetime
from typing import Annotated, Literal

import requests
from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from pydantic import BaseModel, StringConstraints

from learnmap.ai import (
    LLMClient,
    TranscriptionError,
    TranscriptionOptions,
    extract_markdown_title,
)
from learnmap.mindmap import MindmapSession
from learnmap.models import LearningEntry, MindmapPath
from learnmap.storage import FirestoreClient, seed_entries

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Entry Models
# ============================================================================


class PathModel(BaseModel):
    """Position of an entry in the mindmap."""

    main_topic: str
    sub_topic: str = ""
    title: str = ""


class EntryResponse(BaseModel):
    """A learning entry as returned by the API."""

    id: str | None
    title: str
    description: str
    main_topic: str
    sub_topic: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EntryCreateRequest(BaseModel):
    """New entry, optionally with a description drafted by the AI."""

    main_topic: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]
    sub_topic: str = ""
    title: str = ""
    description: str = ""
    ai_prompt: str | None = None


class EntryUpdateRequest(BaseModel):
    """Changes to title and description of an entry."""

    title: str
    description: str = ""
    ai_prompt: str | None = None


class DialogResult(BaseModel):
    """Outcome of a create/update/delete, with the path to keep open."""

    status: Literal["created", "updated", "deleted"]
    path: PathModel | None = None
    entry: EntryResponse | None = None


# ============================================================================
# AI Models
# ============================================================================


class CompletionRequest(BaseModel):
    """Prompt for the Markdown drafting helper."""

    prompt: str
    language: str | None = None


class CompletionResponse(BaseModel):
    """Markdown completion and the title suggested by its first heading."""

    content: str
    suggested_title: str | None = None


class TranscriptionResponse(BaseModel):
    """Transcribed text of an audio upload."""

    text: str
    language: str


# ============================================================================
# Admin Models
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    firestore_connected: bool
    version: str = "0.1.0"


class SeedResponse(BaseModel):
    """Result of seeding demo entries."""

    inserted: int


# ============================================================================
# Helper Functions
# ============================================================================


def get_store(request: Request) -> FirestoreClient:
    """Get entry store from app state."""
    return request.app.state.store


def get_llm(request: Request) -> LLMClient:
    """Get AI client from app state."""
    return request.app.state.llm


def get_mindmap(request: Request) -> MindmapSession:
    """Get mindmap session from app state."""
    return request.app.state.mindmap


def entry_to_response(entry: LearningEntry) -> EntryResponse:
    return EntryResponse(
        id=entry.id,
        title=entry.title,
        description=entry.description,
        main_topic=entry.main_topic,
        sub_topic=entry.sub_topic,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )


def path_to_model(path: MindmapPath) -> PathModel:
    return PathModel(
        main_topic=path.main_topic,
        sub_topic=path.sub_topic,
        title=path.title,
    )


async def reload_mindmap(request: Request, keep_open: MindmapPath | None = None) -> None:
    """Rebuild the mindmap from the store after a change."""
    entries = await get_store(request).get_entries()
    await asyncio.to_thread(get_mindmap(request).load, entries, keep_open)


async def _complete(llm: LLMClient, prompt: str, language: str | None = None) -> str:
    """Run a completion, mapping upstream failures to 502."""
    try:
        return await llm.complete(prompt, language=language)
    except (requests.RequestException, ValueError) as e:
        logger.exception(f"AI completion failed: {e}")
        raise HTTPException(
            status_code=502,
            detail=f"AI completion failed: {str(e)}",
        )


# ============================================================================
# Entry Endpoints
# ============================================================================


@router.get("/v1/entries", response_model=list[EntryResponse])
async def list_entries(request: Request) -> list[EntryResponse]:
    """All learning entries, newest first."""
    entries = await get_store(request).get_entries()
    return [entry_to_response(e) for e in entries]


@router.post("/v1/entries", response_model=DialogResult, status_code=201)
async def create_entry(request: Request, body: EntryCreateRequest) -> DialogResult:
    """
    Create a learning entry.

    With ``ai_prompt`` the description is drafted by the AI helper. An AI
    prompt needs a title to attach the draft to.
    """
    description = body.description
    if body.ai_prompt and body.ai_prompt.strip():
        if not body.title.strip():
            raise HTTPException(
                status_code=400,
                detail="An AI prompt requires a title",
            )
        description = await _complete(get_llm(request), body.ai_prompt)

    entry = LearningEntry(
        title=body.title.strip(),
        main_topic=body.main_topic.strip(),
        sub_topic=body.sub_topic.strip(),
        description=description,
    )
    await get_store(request).add_entry(entry)
    logger.info(f"Created entry {entry.id} under {entry.main_topic}")

    await reload_mindmap(request, keep_open=entry.path)
    return DialogResult(
        status="created",
        path=path_to_model(entry.path),
        entry=entry_to_response(entry),
    )


@router.get("/v1/entries/{entry_id}", response_model=EntryResponse)
async def get_entry(request: Request, entry_id: str) -> EntryResponse:
    """Get a learning entry by ID."""
    entry = await get_store(request).get_entry(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry_to_response(entry)


@router.put("/v1/entries/{entry_id}", response_model=DialogResult)
async def update_entry(
    request: Request, entry_id: str, body: EntryUpdateRequest
) -> DialogResult:
    """
    Update title and description of an entry.

    With ``ai_prompt`` the description is replaced by an AI completion.
    Topics and creation time stay unchanged.
    """
    if not body.title.strip():
        raise HTTPException(status_code=400, detail="Title is required")

    store = get_store(request)
    entry = await store.get_entry(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")

    description = body.description
    if body.ai_prompt and body.ai_prompt.strip():
        description = await _complete(get_llm(request), body.ai_prompt)
    if not description.strip():
        raise HTTPException(status_code=400, detail="Description is required")

    entry.title = body.title.strip()
    entry.description = description
    if not await store.update_entry(entry):
        raise HTTPException(status_code=404, detail="Entry not found")

    await reload_mindmap(request, keep_open=entry.path)
    return DialogResult(
        status="updated",
        path=path_to_model(entry.path),
        entry=entry_to_response(entry),
    )


@router.delete("/v1/entries/{entry_id}", response_model=DialogResult)
async def delete_entry(request: Request, entry_id: str) -> DialogResult:
    """Delete an entry; the mindmap is reloaded with every branch closed."""
    if not await get_store(request).delete_entry(entry_id):
        raise HTTPException(status_code=404, detail="Entry not found")

    await reload_mindmap(request)
    return DialogResult(status="deleted")


# ============================================================================
# AI Endpoints
# ============================================================================


@router.post("/v1/ai/completions", response_model=CompletionResponse)
async def ai_completion(request: Request, body: CompletionRequest) -> CompletionResponse:
    """Draft Markdown content for a prompt."""
    if not body.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt must not be empty")

    content = await _complete(get_llm(request), body.prompt, language=body.language)
    return CompletionResponse(
        content=content,
        suggested_title=extract_markdown_title(content),
    )


@router.post("/v1/audio/transcriptions", response_model=TranscriptionResponse)
async def transcribe_audio(
    request: Request,
    file: UploadFile = File(...),
    language: str | None = Form(default=None),
    prompt: str | None = Form(default=None),
) -> TranscriptionResponse:
    """Transcribe an Opus recording."""
    audio = await file.read()
    logger.info(
        f"Transcribing {file.filename} ({file.content_type}, {len(audio)} bytes)"
    )

    try:
        result = await get_llm(request).transcribe(
            audio,
            TranscriptionOptions(language=language, prompt=prompt),
        )
    except TranscriptionError as e:
        status_code = 422 if e.status_code == 422 else 502
        raise HTTPException(status_code=status_code, detail=str(e))

    return TranscriptionResponse(text=result.text, language=result.language)


# ============================================================================
# Admin Endpoints
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint."""
    try:
        await get_store(request).count_entries()
        firestore_connected = True
    except Exception:
        firestore_connected = False

    return HealthResponse(
        status="healthy" if firestore_connected else "degraded",
        firestore_connected=firestore_connected,
    )


@router.post("/v1/admin/seed", response_model=SeedResponse)
async def seed(request: Request) -> SeedResponse:
    """Insert demo entries when the collection is empty."""
    inserted = await seed_entries(get_store(request))
    if inserted:
        await reload_mindmap(request)
    return SeedResponse(inserted=inserted)
