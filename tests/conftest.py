"""Fakes for the ports and for the google-genai client."""

import threading
from types import SimpleNamespace
from typing import List

import pytest

from news_canvas.application.workflow import NewsCanvasWorkflow
from news_canvas.domain.errors import GenerationError
from news_canvas.domain.media import to_data_url
from news_canvas.domain.models import (
    Headline,
    ImagePrompt,
    MediaKind,
    NewsSource,
    RenderedMedia,
)
from news_canvas.ports.interfaces import IMediaRenderer, INewsSource, IPromptWriter

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


def make_headlines(*ratings: int) -> List[Headline]:
    return [
        Headline(
            title=f"Headline {i}",
            summary=f"Summary {i}",
            source_url=f"https://news.example/{i}",
            source_title="Example News",
            rating=rating,
        )
        for i, rating in enumerate(ratings)
    ]


class FakeNewsSource(INewsSource):
    def __init__(self, headlines=None, sources=None, error=None):
        self.headlines = headlines if headlines is not None else make_headlines(3, 4, 5)
        self.sources = sources if sources is not None else [NewsSource(uri="https://src.example", title="src")]
        self.error = error
        self.calls = 0

    def fetch_headlines(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.headlines), list(self.sources)


class FakePromptWriter(IPromptWriter):
    def __init__(self, fail_titles=()):
        self.fail_titles = set(fail_titles)
        self.calls = []
        self._lock = threading.Lock()

    def generate_prompt(self, headlines):
        titles = " & ".join(h.title for h in headlines)
        with self._lock:
            self.calls.append([h.title for h in headlines])
        if any(h.title in self.fail_titles for h in headlines):
            raise GenerationError("prompt failed", reason="prompt_failed")
        return ImagePrompt(chinese=f"中文 {titles}", english=f"English {titles}")


class FakeMediaRenderer(IMediaRenderer):
    def __init__(self, fail=False, edit_error=None):
        self.fail = fail
        self.edit_error = edit_error
        self.generate_calls = []
        self.edit_calls = []
        self._lock = threading.Lock()

    def generate_media(self, instruction, video=False):
        with self._lock:
            self.generate_calls.append((instruction, video))
            count = len(self.generate_calls)
        if self.fail:
            raise GenerationError("render failed", reason="image_failed")
        if video:
            return RenderedMedia(url=f"/tmp/video_{count}.mp4", kind=MediaKind.VIDEO)
        return RenderedMedia(url=to_data_url("image/png", PNG_HEADER + str(count).encode()))

    def edit_media(self, base64_data, mime_type, instruction):
        self.edit_calls.append((base64_data, mime_type, instruction))
        if self.edit_error is not None:
            raise self.edit_error
        return RenderedMedia(url=to_data_url("image/png", PNG_HEADER + b"edited"))


@pytest.fixture
def news_source():
    return FakeNewsSource()


@pytest.fixture
def prompt_writer():
    return FakePromptWriter()


@pytest.fixture
def media_renderer():
    return FakeMediaRenderer()


@pytest.fixture
def workflow(news_source, prompt_writer, media_renderer, tmp_path):
    return NewsCanvasWorkflow(
        news_source=news_source,
        prompt_writer=prompt_writer,
        media_renderer=media_renderer,
        locale="en",
        output_dir=str(tmp_path),
    )


def fake_client(generate_content=None, generate_videos=None, get_operation=None):
    """Shape-compatible stand-in for google.genai.Client."""
    return SimpleNamespace(
        models=SimpleNamespace(
            generate_content=generate_content,
            generate_videos=generate_videos,
        ),
        operations=SimpleNamespace(get=get_operation),
    )


def image_response(data=PNG_HEADER, mime_type="image/png", finish_reason="STOP"):
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)
    text_part = SimpleNamespace(inline_data=None, text="Here is your image")
    candidate = SimpleNamespace(
        content=SimpleNamespace(parts=[text_part, part]),
        finish_reason=finish_reason,
    )
    return SimpleNamespace(candidates=[candidate], prompt_feedback=None, text=None)
