"""AI helpers: Markdown completions and audio transcription."""

from learnmap.ai.llm_client import (
    LLMClient,
    TranscriptionError,
    TranscriptionOptions,
    TranscriptionResult,
    close_llm_client,
    extract_markdown_title,
    get_llm_client,
)

__all__ = [
    "LLMClient",
    "TranscriptionError",
    "TranscriptionOptions",
    "TranscriptionResult",
    "close_llm_client",
    "extract_markdown_title",
    "get_llm_client",
]
