"""INewsSource adapter: Gemini with Google Search grounding."""

import json
import re
from typing import Any, List, Optional, Tuple

from google.genai import types

from news_canvas import config
from news_canvas.adapters.gemini import GeminiAdapter, first_candidate
from news_canvas.domain.errors import GenerationError
from news_canvas.domain.models import Headline, NewsSource
from news_canvas.ports.interfaces import INewsSource

_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"\s*```$")


def strip_code_fences(text: str) -> str:
    """Remove an optional ```json ... ``` wrapper."""
    text = (text or "").strip()
    text = _FENCE_START.sub("", text)
    return _FENCE_END.sub("", text).strip()


def coerce_rating(value: Any) -> int:
    """Interest rating as an integer clamped to 1-5."""
    try:
        rating = int(round(float(value)))
    except (TypeError, ValueError):
        return 1
    return max(1, min(5, rating))


def parse_headlines(text: str) -> List[Headline]:
    """
    Parse the model's JSON array of news items.
    Raises ValueError when the response is not an array of objects.
    """
    data = json.loads(strip_code_fences(text))
    if not isinstance(data, list):
        raise ValueError("API did not return an array of headlines.")

    headlines = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Headline {index} is not an object")
        headlines.append(
            Headline(
                id=index,
                title=str(item.get("title") or "").strip(),
                summary=str(item.get("summary") or "").strip(),
                source_url=str(item.get("sourceUrl") or item.get("source_url") or "").strip(),
                source_title=str(item.get("sourceTitle") or item.get("source_title") or "").strip(),
                rating=coerce_rating(item.get("rating")),
            )
        )
    return headlines


def extract_sources(response: Any) -> List[NewsSource]:
    """Grounding citations (web uri + title) of the first candidate."""
    candidate = first_candidate(response)
    metadata = getattr(candidate, "grounding_metadata", None) if candidate is not None else None
    sources = []
    for chunk in getattr(metadata, "grounding_chunks", None) or []:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None) if web is not None else None
        if uri:
            sources.append(NewsSource(uri=uri, title=getattr(web, "title", None) or ""))
    return sources


class GeminiNewsSource(GeminiAdapter, INewsSource):
    """Asks Gemini (with Google Search) for today's headlines as a JSON array."""

    def __init__(
        self,
        client=None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        region: Optional[str] = None,
        audience: Optional[str] = None,
        language: Optional[str] = None,
        count: Optional[int] = None,
        locale: Optional[str] = None,
    ):
        super().__init__(client=client, api_key=api_key, locale=locale)
        self.model = model or config.TEXT_MODEL
        self.region = region or config.NEWS_REGION
        self.audience = audience or config.NEWS_AUDIENCE
        self.language = language or config.NEWS_LANGUAGE
        self.count = count or config.NEWS_COUNT

    def build_instruction(self) -> str:
        return f"""# Role: professional news curator

# Task:
Use Google Search to find {self.count} breaking, high-interest news stories happening TODAY in {self.region}.
The target readers are {self.audience}.

# Output format:
1. Your response must be ONLY a JSON array, no text before or after it.
2. Each object in the array is one story with the keys: title, summary, sourceUrl, sourceTitle, rating.
3. Write title and summary in {self.language}. rating is an integer from 1 to 5 for how interesting the story is to the readers.
4. If you cannot find any real news, return [].

# Example:
{{
  "title": "Example: stock index hits a record high",
  "summary": "Electronics stocks led the rally...",
  "sourceUrl": "https://example.com",
  "sourceTitle": "News outlet",
  "rating": 5
}}
"""

    def fetch_headlines(self) -> Tuple[List[Headline], List[NewsSource]]:
        print(f"  🔍 Searching today's headlines in {self.region} with Google Search grounding...")
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=self.build_instruction(),
                config=types.GenerateContentConfig(
                    tools=[types.Tool(google_search=types.GoogleSearch())],
                ),
            )
            headlines = parse_headlines(response.text or "")
            sources = extract_sources(response)
        except GenerationError:
            raise
        except Exception as e:
            raise self._fail(e, "news_fetch_failed") from e

        print(f"  ✅ Got {len(headlines)} headlines ({len(sources)} grounding sources)")
        return headlines, sources
