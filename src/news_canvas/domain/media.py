"""Data-URL helpers for rendered images (`data:<mime>;base64,<payload>`)."""

import base64
import re
from typing import Tuple

DEFAULT_IMAGE_MIME = "image/jpeg"

_HEADER_MIME = re.compile(r":(.*?);")


def to_data_url(mime_type: str, data: bytes) -> str:
    """Embed raw bytes as a base64 data URL."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def split_data_url(url: str) -> Tuple[str, str]:
    """
    Return (mime_type, base64_payload) from a data URL.
    Falls back to image/jpeg when the header carries no mime type.
    """
    if "," not in url:
        raise ValueError("Not a data URL")
    header, payload = url.split(",", 1)
    match = _HEADER_MIME.search(header)
    mime_type = match.group(1) if match and match.group(1) else DEFAULT_IMAGE_MIME
    return mime_type, payload


def decode_data_url(url: str) -> Tuple[str, bytes]:
    mime_type, payload = split_data_url(url)
    return mime_type, base64.b64decode(payload)


def is_data_url(url: str) -> bool:
    return bool(url) and url.startswith("data:")
