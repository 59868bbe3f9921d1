"""
Adapters – concrete Gemini implementations of the ports.
To swap a provider, implement the port and pass it to default_adapters() as an override.
"""

from typing import Optional

from news_canvas.adapters.media import GeminiMediaRenderer
from news_canvas.adapters.news import GeminiNewsSource
from news_canvas.adapters.prompt import GeminiPromptWriter


def default_adapters(client=None, locale: Optional[str] = None, **overrides):
    """
    Build default adapter instances (config from news_canvas.config).
    Overrides: news_source=..., prompt_writer=..., media_renderer=... for testing.
    Adapter options (region=..., count=...) are forwarded to the news source.
    """
    news_options = {k: overrides.pop(k) for k in ("region", "audience", "language", "count") if k in overrides}
    defaults = {
        "news_source": GeminiNewsSource(client=client, locale=locale, **news_options),
        "prompt_writer": GeminiPromptWriter(client=client, locale=locale),
        "media_renderer": GeminiMediaRenderer(client=client, locale=locale),
    }
    defaults.update(overrides)
    return defaults


__all__ = [
    "GeminiMediaRenderer",
    "GeminiNewsSource",
    "GeminiPromptWriter",
    "default_adapters",
]
