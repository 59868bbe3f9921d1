"""IMediaRenderer adapter: image generation/editing and Veo video generation."""

import os
import time
import uuid
from datetime import datetime
from typing import Callable, Optional

import requests
from google.genai import types

from news_canvas import config
from news_canvas.adapters.gemini import (
    GeminiAdapter,
    decode_base64,
    first_inline_image,
    inline_to_data_url,
    is_safety_blocked,
)
from news_canvas.domain.errors import GenerationError
from news_canvas.domain.models import MediaKind, RenderedMedia
from news_canvas.ports.interfaces import IMediaRenderer


class GeminiMediaRenderer(GeminiAdapter, IMediaRenderer):
    """
    Images come back as data URLs; videos are polled until the long-running
    operation finishes, then downloaded into the temp directory.
    """

    def __init__(
        self,
        client=None,
        api_key: Optional[str] = None,
        image_model: Optional[str] = None,
        video_model: Optional[str] = None,
        poll_seconds: Optional[float] = None,
        temp_dir: Optional[str] = None,
        locale: Optional[str] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__(client=client, api_key=api_key, locale=locale)
        self.image_model = image_model or config.IMAGE_MODEL
        self.video_model = video_model or config.VIDEO_MODEL
        self.poll_seconds = poll_seconds if poll_seconds is not None else config.VIDEO_POLL_SECONDS
        self.temp_dir = temp_dir or config.TEMP_DIR
        self._sleep = sleep

    def _image_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            image_config=types.ImageConfig(
                aspect_ratio=config.IMAGE_ASPECT_RATIO,
                image_size=config.IMAGE_SIZE,
            ),
        )

    def generate_media(self, instruction: str, video: bool = False) -> RenderedMedia:
        if video:
            return self._generate_video(instruction)

        print(f"  🎨 Rendering image with {self.image_model}...")
        try:
            response = self.client.models.generate_content(
                model=self.image_model,
                contents=instruction,
                config=self._image_config(),
            )
            inline = first_inline_image(response)
            if inline is None:
                raise self._error("image_missing")
            url = inline_to_data_url(inline)
        except GenerationError:
            raise
        except Exception as e:
            raise self._fail(e, "image_failed") from e

        print("  ✅ Image received")
        return RenderedMedia(url=url, kind=MediaKind.IMAGE)

    def edit_media(self, base64_data: str, mime_type: str, instruction: str) -> RenderedMedia:
        print(f"  🖌️  Editing image: {instruction[:60]}")
        try:
            response = self.client.models.generate_content(
                model=self.image_model,
                contents=[
                    types.Part.from_bytes(data=decode_base64(base64_data), mime_type=mime_type),
                    types.Part.from_text(text=f"Edit instruction: {instruction}"),
                ],
                config=self._image_config(),
            )
            if is_safety_blocked(response):
                print("  ⚠️  Edit rejected by content safety filters")
                raise self._error("content_blocked")
            inline = first_inline_image(response)
            if inline is None:
                raise self._error("edit_missing")
            url = inline_to_data_url(inline)
        except GenerationError:
            raise
        except Exception as e:
            raise self._fail(e, "edit_failed", safety=True) from e

        print("  ✅ Edited image received")
        return RenderedMedia(url=url, kind=MediaKind.IMAGE)

    def _generate_video(self, instruction: str) -> RenderedMedia:
        print(f"  🎬 Starting video render with {self.video_model}...")
        try:
            operation = self.client.models.generate_videos(
                model=self.video_model,
                prompt=instruction,
                config=types.GenerateVideosConfig(
                    number_of_videos=1,
                    resolution=config.VIDEO_RESOLUTION,
                    aspect_ratio=config.IMAGE_ASPECT_RATIO,
                ),
            )
            while not operation.done:
                print(f"  ⏳ Video still rendering, checking again in {self.poll_seconds:g}s...")
                self._sleep(self.poll_seconds)
                operation = self.client.operations.get(operation)

            if getattr(operation, "error", None):
                raise RuntimeError(f"Video operation failed: {operation.error}")
            videos = getattr(operation.response, "generated_videos", None) or []
            video = getattr(videos[0], "video", None) if videos else None
            uri = getattr(video, "uri", None) if video is not None else None
            if not uri:
                raise self._error("video_failed")
            path = self._download_video(uri)
        except GenerationError:
            raise
        except Exception as e:
            raise self._fail(e, "video_failed") from e

        print(f"  ✅ Video saved to: {path}")
        return RenderedMedia(url=path, kind=MediaKind.VIDEO)

    def _download_video(self, uri: str) -> str:
        response = requests.get(
            uri,
            headers={"x-goog-api-key": self.api_key},
            timeout=300,
        )
        response.raise_for_status()

        os.makedirs(self.temp_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.abspath(os.path.join(self.temp_dir, f"video_{timestamp}_{uuid.uuid4().hex[:8]}.mp4"))
        with open(path, "wb") as f:
            f.write(response.content)
        return path
