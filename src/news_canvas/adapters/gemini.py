"""
Shared Gemini plumbing for the adapters: lazy client creation, response
helpers and error normalization into GenerationError.
"""

import base64
from typing import Any, Optional

from google import genai

from news_canvas import config
from news_canvas.domain.errors import GenerationError
from news_canvas.domain.media import to_data_url
from news_canvas.messages import get_message

# Finish/block reasons that mean the request was refused for content safety
SAFETY_REASONS = {
    "SAFETY",
    "IMAGE_SAFETY",
    "PROHIBITED_CONTENT",
    "IMAGE_PROHIBITED_CONTENT",
    "BLOCKLIST",
}


def create_client(api_key: Optional[str] = None, locale: Optional[str] = None):
    """Build a genai.Client. A missing key is reported as access denied."""
    key = api_key if api_key is not None else config.GEMINI_API_KEY
    if not (key or "").strip():
        raise GenerationError(get_message("access_denied", locale), reason="access_denied")
    return genai.Client(api_key=key)


def is_access_denied(exc: Exception) -> bool:
    """403 / PERMISSION_DENIED from the gateway."""
    if getattr(exc, "code", None) == 403:
        return True
    if getattr(exc, "status", None) == "PERMISSION_DENIED":
        return True
    text = str(exc)
    return "403" in text or "PERMISSION_DENIED" in text


def _reason_name(reason: Any) -> str:
    if reason is None:
        return ""
    name = getattr(reason, "name", None) or str(reason)
    return name.split(".")[-1].upper()


def first_candidate(response: Any):
    candidates = getattr(response, "candidates", None) or []
    return candidates[0] if candidates else None


def first_inline_image(response: Any):
    """First part of the first candidate that carries inline data, or None."""
    candidate = first_candidate(response)
    content = getattr(candidate, "content", None) if candidate is not None else None
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            return inline
    return None


def inline_to_data_url(inline: Any) -> str:
    mime_type = getattr(inline, "mime_type", None) or "image/png"
    data = inline.data
    if isinstance(data, str):
        # Already base64 (REST-shaped payloads)
        return f"data:{mime_type};base64,{data}"
    return to_data_url(mime_type, data)


def is_safety_blocked(response: Any) -> bool:
    feedback = getattr(response, "prompt_feedback", None)
    if feedback is not None and getattr(feedback, "block_reason", None):
        return True
    candidate = first_candidate(response)
    if candidate is None:
        return False
    return _reason_name(getattr(candidate, "finish_reason", None)) in SAFETY_REASONS


def decode_base64(data: str) -> bytes:
    return base64.b64decode(data)


class GeminiAdapter:
    """Base for the Gemini adapters: owns the client and the message locale."""

    def __init__(self, client=None, api_key: Optional[str] = None, locale: Optional[str] = None):
        self._client = client
        self._api_key = api_key
        self._locale = locale

    @property
    def client(self):
        if self._client is None:
            self._client = create_client(self._api_key, self._locale)
        return self._client

    @property
    def api_key(self) -> str:
        return self._api_key if self._api_key is not None else config.GEMINI_API_KEY

    def _message(self, key: str) -> str:
        return get_message(key, self._locale)

    def _error(self, key: str) -> GenerationError:
        return GenerationError(self._message(key), reason=key)

    def _fail(self, exc: Exception, fallback_key: str, safety: bool = False) -> GenerationError:
        """Normalize a caught fault into one user-facing GenerationError."""
        if is_access_denied(exc):
            key = "access_denied"
        elif safety and "SAFETY" in str(exc).upper():
            key = "content_blocked"
        else:
            key = fallback_key
        print(f"  ❌ Gemini error ({type(exc).__name__}): {str(exc)[:300]}")
        return self._error(key)
