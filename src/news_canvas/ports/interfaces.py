"""
Port interfaces (SOLID – Dependency Inversion).
Implement these in adapters; the workflow depends only on these abstractions.
Every method either returns a complete result or raises GenerationError with a user-facing message.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from news_canvas.domain.models import Headline, ImagePrompt, NewsSource, RenderedMedia


class INewsSource(ABC):
    """Today's headlines plus the citations that grounded them."""

    @abstractmethod
    def fetch_headlines(self) -> Tuple[List[Headline], List[NewsSource]]:
        """Fetch current headlines. An empty list means "no news", not an error."""
        pass


class IPromptWriter(ABC):
    """Turns one or more headlines into a bilingual image prompt."""

    @abstractmethod
    def generate_prompt(self, headlines: Sequence[Headline]) -> ImagePrompt:
        """One prompt for all given headlines (merged when more than one)."""
        pass


class IMediaRenderer(ABC):
    """Image/video generation and text-guided image editing."""

    @abstractmethod
    def generate_media(self, instruction: str, video: bool = False) -> RenderedMedia:
        """Render one image (or one video when `video` is set) for the final instruction."""
        pass

    @abstractmethod
    def edit_media(self, base64_data: str, mime_type: str, instruction: str) -> RenderedMedia:
        """Apply a free-text edit to an existing image; returns the new image."""
        pass
