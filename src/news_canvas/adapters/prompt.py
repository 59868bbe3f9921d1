"""IPromptWriter adapter: headlines -> bilingual image prompt via structured JSON output."""

import json
from typing import Optional, Sequence

from google.genai import types

from news_canvas import config
from news_canvas.adapters.gemini import GeminiAdapter
from news_canvas.domain.errors import GenerationError
from news_canvas.domain.models import Headline, ImagePrompt
from news_canvas.ports.interfaces import IPromptWriter

PROMPT_FIELDS = ("chinese", "english")

PROMPT_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "chinese": types.Schema(
            type=types.Type.STRING,
            description="富有詩意和畫面感的繁體中文提示詞，描述場景的意境與氛圍。",
        ),
        "english": types.Schema(
            type=types.Type.STRING,
            description=(
                "A highly detailed and specific prompt for an AI image generator in English. "
                "Should include details on composition, subjects, background, lighting, and mood. "
                "No text, logos, or watermarks."
            ),
        ),
    },
    required=list(PROMPT_FIELDS),
)


def format_news_content(headlines: Sequence[Headline]) -> str:
    return "\n\n".join(
        f'News {i} title: "{h.title}"\nSummary: "{h.summary}"'
        for i, h in enumerate(headlines, 1)
    )


def build_prompt_instruction(headlines: Sequence[Headline]) -> str:
    """Single story -> one scene; several stories -> one blended concept."""
    if len(headlines) == 1:
        task = "Turn the following news story into an imaginative visual concept for an AI image generator."
    else:
        task = (
            f"Blend the following {len(headlines)} news stories into ONE cohesive, imaginative visual concept "
            "for an AI image generator. The scene must connect the stories through a shared metaphor."
        )
    return f"""# Role: creative concept artist.
# Task: {task}
# Output: JSON matching the schema, with a Traditional Chinese version (chinese) and an English version (english).
# News content:
{format_news_content(headlines)}
"""


def parse_prompt(text: str) -> ImagePrompt:
    """Raises ValueError unless both language fields are non-empty strings."""
    data = json.loads((text or "").strip())
    if not isinstance(data, dict):
        raise ValueError("Prompt response is not a JSON object")
    for name in PROMPT_FIELDS:
        value = data.get(name)
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Prompt response is missing '{name}'")
    return ImagePrompt(chinese=data["chinese"].strip(), english=data["english"].strip())


class GeminiPromptWriter(GeminiAdapter, IPromptWriter):
    def __init__(
        self,
        client=None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        locale: Optional[str] = None,
    ):
        super().__init__(client=client, api_key=api_key, locale=locale)
        self.model = model or config.TEXT_MODEL

    def generate_prompt(self, headlines: Sequence[Headline]) -> ImagePrompt:
        if not headlines:
            raise ValueError("At least one headline is required")

        print(f"  ✍️  Writing image prompt for {len(headlines)} headline(s): {headlines[0].title[:40]}")
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=build_prompt_instruction(headlines),
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=PROMPT_SCHEMA,
                ),
            )
            prompt = parse_prompt(response.text)
        except GenerationError:
            raise
        except Exception as e:
            raise self._fail(e, "prompt_failed") from e
        return prompt
