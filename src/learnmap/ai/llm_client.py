"""AI client for an OpenAI-compatible endpoint (Infomaniak AI by default).

Two operations are used by the app:
1. Chat completions, to draft or rewrite entry descriptions in Markdown
2. Audio transcriptions, to dictate prompts instead of typing them
"""

import asyncio
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

import requests
from urllib3.util.retry import Retry
from requests.adapters import HTTPAdapter

from learnmap.config import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_TEMPLATE = (
    "Always use Markdown syntax for formatting. Respond in a detailed and "
    "well-structured way. Format your answer with headings, lists and other "
    "formatting elements where suitable. Answer in {language} only."
)

TRANSCRIPTION_FILENAME = "recording.opus"
TRANSCRIPTION_MIME_TYPE = "audio/opus"

_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+(.+?)\s*#*\s*$")


class TranscriptionError(Exception):
    """Transcription request failed; the message is safe to show to users."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class TranscriptionOptions:
    """Optional transcription parameters."""
    language: Optional[str] = None
    response_format: Optional[str] = None  # json, srt, text, verbose_json, vtt
    chunk_length: Optional[int] = None
    prompt: Optional[str] = None
    no_speech_threshold: Optional[float] = None


@dataclass
class TranscriptionResult:
    """Transcribed text plus the raw response."""
    text: str
    language: str
    raw: dict = field(default_factory=dict)


def extract_markdown_title(markdown: str) -> str | None:
    """Text of the first Markdown heading, if any."""
    for line in markdown.splitlines():
        match = _HEADING_RE.match(line)
        if match:
            return match.group(1).strip()
    return None


def transcription_error_message(status_code: int) -> str:
    if status_code == 422:
        return "Invalid audio format or file too large"
    if status_code == 401:
        return "Authentication error"
    return "Transcription failed"


class LLMClient:
    """Async-wrapped client for OpenAI-compatible AI APIs using requests."""

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        max_concurrent: int | None = None,
    ) -> None:
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.model = model or settings.llm_model
        self.api_key = api_key or settings.llm_api_key
        self.timeout = timeout or settings.llm_timeout
        self.max_concurrent = max_concurrent or settings.llm_max_concurrent

        self._semaphore = asyncio.Semaphore(self.max_concurrent)
        self._session: requests.Session | None = None

    def _get_session(self) -> requests.Session:
        """Get or create requests session with connection pooling."""
        if self._session is None:
            self._session = requests.Session()
            # Content-Type is set per request: JSON for chat, multipart for audio
            self._session.headers.update({
                "Authorization": f"Bearer {self.api_key}",
            })
            adapter = HTTPAdapter(
                pool_connections=self.max_concurrent,
                pool_maxsize=self.max_concurrent * 2,
                max_retries=Retry(total=2, backoff_factor=0.5),
            )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    # ==========================================================================
    # Chat completions
    # ==========================================================================

    def _sync_chat(
        self,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
        **kwargs: Any,
    ) -> str:
        """Synchronous chat request (runs in thread)."""
        session = self._get_session()

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            **kwargs,
        }

        response = session.post(
            f"{self.base_url}/chat/completions",
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        data = response.json()

        choices = data.get("choices", [])
        if not choices:
            logger.error(f"AI returned empty choices: {data}")
            raise ValueError("AI returned empty choices")

        content = choices[0].get("message", {}).get("content")
        if content is None:
            logger.error(f"AI returned None content. Full response: {data}")
            raise ValueError("AI returned no content")
        return content

    async def chat(
        self,
        messages: list[dict[str, str]],
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        """Send chat messages and get the completion text."""
        async with self._semaphore:
            try:
                # Run sync request in thread pool to not block event loop
                return await asyncio.to_thread(
                    self._sync_chat,
                    messages,
                    settings.llm_temperature if temperature is None else temperature,
                    max_tokens or settings.llm_max_tokens,
                    **kwargs,
                )
            except requests.HTTPError as e:
                logger.error(f"AI API error: {e.response.status_code} - {e.response.text}")
                raise
            except Exception as e:
                logger.error(f"AI request failed: {e}")
                raise

    async def complete(
        self,
        prompt: str,
        language: str | None = None,
        **kwargs: Any,
    ) -> str:
        """Answer ``prompt`` as formatted Markdown."""
        system_prompt = SYSTEM_PROMPT_TEMPLATE.format(
            language=language or settings.ai_response_language
        )
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": prompt},
        ]
        return await self.chat(messages=messages, **kwargs)

    # ==========================================================================
    # Transcription
    # ==========================================================================

    def _sync_transcribe(
        self, audio: bytes, options: TranscriptionOptions
    ) -> TranscriptionResult:
        """Synchronous transcription request (runs in thread)."""
        session = self._get_session()
        language = options.language or settings.transcription_language

        form: dict[str, Any] = {
            "model": settings.transcription_model,
            "language": language,
        }
        if options.response_format:
            form["response_format"] = options.response_format
        if options.chunk_length is not None:
            form["chunk_length"] = str(options.chunk_length)
        if options.prompt:
            form["prompt"] = options.prompt
        if options.no_speech_threshold is not None:
            form["no_speech_threshold"] = str(options.no_speech_threshold)

        logger.debug(f"Sending {len(audio)} bytes of audio as {TRANSCRIPTION_MIME_TYPE}")
        response = session.post(
            f"{self.base_url}/audio/transcriptions",
            files={"file": (TRANSCRIPTION_FILENAME, audio, TRANSCRIPTION_MIME_TYPE)},
            data=form,
            timeout=settings.transcription_timeout,
        )
        if not response.ok:
            logger.error(
                f"Transcription error: {response.status_code} - {response.text}"
            )
            raise TranscriptionError(
                transcription_error_message(response.status_code),
                status_code=response.status_code,
            )

        if options.response_format in ("text", "srt", "vtt"):
            return TranscriptionResult(text=response.text, language=language)

        data = response.json()
        return TranscriptionResult(
            text=data.get("text", ""),
            language=data.get("language", language),
            raw=data,
        )

    async def transcribe(
        self, audio: bytes, options: TranscriptionOptions | None = None
    ) -> TranscriptionResult:
        """Transcribe an Opus-encoded recording."""
        if not audio:
            raise TranscriptionError("Invalid audio format or file too large", status_code=422)

        async with self._semaphore:
            try:
                return await asyncio.to_thread(
                    self._sync_transcribe, audio, options or TranscriptionOptions()
                )
            except requests.RequestException as e:
                logger.error(f"Transcription request failed: {e}")
                raise TranscriptionError("Transcription failed") from e


# Global client instance
_llm_client: LLMClient | None = None


def get_llm_client() -> LLMClient:
    """Get or create the global AI client."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client


async def close_llm_client() -> None:
    """Close the global AI client."""
    global _llm_client
    if _llm_client is not None:
        await _llm_client.close()
        _llm_client = None
