"""Domain models, media helpers and errors."""

from news_canvas.domain.errors import (
    ExportError,
    GenerationError,
    InvalidTransitionError,
    NewsCanvasError,
    WorkflowError,
    WorkflowPreconditionError,
)
from news_canvas.domain.models import (
    GenerationItem,
    GenerationMode,
    Headline,
    ImagePrompt,
    ImageStyle,
    ImageTextLanguage,
    MediaKind,
    NewsSource,
    RenderedMedia,
)

__all__ = [
    "ExportError",
    "GenerationError",
    "InvalidTransitionError",
    "NewsCanvasError",
    "WorkflowError",
    "WorkflowPreconditionError",
    "GenerationItem",
    "GenerationMode",
    "Headline",
    "ImagePrompt",
    "ImageStyle",
    "ImageTextLanguage",
    "MediaKind",
    "NewsSource",
    "RenderedMedia",
]
