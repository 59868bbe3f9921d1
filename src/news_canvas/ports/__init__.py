"""Ports (interfaces) – depend on these, implement in adapters."""

from news_canvas.ports.interfaces import (
    IMediaRenderer,
    INewsSource,
    IPromptWriter,
)

__all__ = [
    "IMediaRenderer",
    "INewsSource",
    "IPromptWriter",
]
