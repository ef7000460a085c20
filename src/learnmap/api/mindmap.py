"""Mindmap visualization endpoints."""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from learnmap.api.mindmap_template import FAVICON_SVG, MINDMAP_HTML
from learnmap.mindmap import MindmapSession
from learnmap.models import MindmapPath
from learnmap.storage import FirestoreClient

logger = logging.getLogger(__name__)

router = APIRouter()


class ClickRequest(BaseModel):
    """A click on a mindmap node."""

    node_id: str


class ReloadRequest(BaseModel):
    """Reload from the store, optionally keeping one branch open."""

    main_topic: str | None = None
    sub_topic: str = ""
    title: str = ""


def get_store(request: Request) -> FirestoreClient:
    """Get entry store from app state."""
    return request.app.state.store


def get_mindmap(request: Request) -> MindmapSession:
    """Get mindmap session from app state."""
    return request.app.state.mindmap


@router.get("/favicon.ico")
async def favicon() -> Response:
    """Return SVG favicon."""
    return Response(content=FAVICON_SVG, media_type="image/svg+xml")


@router.get("/mindmap/data")
async def get_mindmap_data(request: Request) -> dict:
    """Visible nodes and links with pre-computed positions.

    The first call loads the entries from the store.
    """
    session = get_mindmap(request)
    if not session.data.nodes:
        entries = await get_store(request).get_entries()
        await asyncio.to_thread(session.load, entries)
    return await asyncio.to_thread(session.visible_graph)


@router.post("/mindmap/reload")
async def reload_mindmap(request: Request, body: ReloadRequest | None = None) -> dict:
    """Reload entries; every branch closes except the requested path."""
    keep_open = None
    if body is not None and body.main_topic:
        keep_open = MindmapPath(
            main_topic=body.main_topic,
            sub_topic=body.sub_topic,
            title=body.title,
        )

    session = get_mindmap(request)
    entries = await get_store(request).get_entries()
    await asyncio.to_thread(session.load, entries, keep_open)
    return await asyncio.to_thread(session.visible_graph)


@router.post("/mindmap/click")
async def click_node(request: Request, body: ClickRequest) -> dict:
    """Expand or collapse the branch at a node and return the new picture."""
    session = get_mindmap(request)
    # layout runs in a worker thread; the session lock serializes it
    if not await asyncio.to_thread(session.click, body.node_id):
        raise HTTPException(status_code=404, detail="Node not found")
    return await asyncio.to_thread(session.visible_graph)


@router.get("/mindmap/nodes/detail")
async def node_detail(request: Request, node_id: str) -> dict:
    """Entry details behind a title node.

    Node ids are built from topic names and may contain slashes, so the id
    is passed as a query parameter.
    """
    detail = get_mindmap(request).node_detail(node_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Title node not found")
    return detail


@router.get("/", response_class=HTMLResponse)
@router.get("/mindmap", response_class=HTMLResponse)
async def mindmap_view() -> str:
    """Serve the mindmap page."""
    return MINDMAP_HTML
