"""Save rendered media to disk under a name derived from its first headline."""

import io
import os
import re
import shutil
from typing import Optional

from PIL import Image

from news_canvas import config
from news_canvas.domain.errors import ExportError, WorkflowPreconditionError
from news_canvas.domain.media import decode_data_url, is_data_url
from news_canvas.domain.models import GenerationItem, MediaKind

# Characters most filesystems refuse in a file name
_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|]')
FILENAME_TITLE_LENGTH = 10
DEFAULT_FILENAME = "news_canvas"


def suggest_filename(item: GenerationItem) -> str:
    """First headline title, unsafe characters removed, first 10 chars + extension."""
    extension = ".mp4" if item.media_kind == MediaKind.VIDEO else ".png"
    title = item.source[0].title if item.source else ""
    safe_title = _UNSAFE_CHARS.sub("", title)[:FILENAME_TITLE_LENGTH].strip()
    return (safe_title or DEFAULT_FILENAME) + extension


def unique_path(directory: str, filename: str) -> str:
    """`directory/filename`, or `name (1).ext`, `name (2).ext`... when it is already taken."""
    path = os.path.join(directory, filename)
    stem, extension = os.path.splitext(filename)
    counter = 1
    while os.path.exists(path):
        path = os.path.join(directory, f"{stem} ({counter}){extension}")
        counter += 1
    return path


def save_media(item: GenerationItem, directory: Optional[str] = None) -> str:
    """Write the item's media into `directory` (config.OUTPUT_DIR by default); returns the path."""
    if not item.media_url:
        raise WorkflowPreconditionError(f"Item {item.id} has no media to save")
    if item.media_kind != MediaKind.VIDEO and not is_data_url(item.media_url):
        raise WorkflowPreconditionError(f"Item {item.id} has no embedded image data")

    directory = directory or config.OUTPUT_DIR
    try:
        os.makedirs(directory, exist_ok=True)
        path = unique_path(directory, suggest_filename(item))
        if item.media_kind == MediaKind.VIDEO:
            shutil.copyfile(item.media_url, path)
        else:
            _, data = decode_data_url(item.media_url)
            with Image.open(io.BytesIO(data)) as image:
                # The model may answer with JPEG; the export is always PNG
                image.save(path, format="PNG")
    except OSError as e:
        print(f"  ❌ Could not save item {item.id}: {e}")
        raise ExportError(f"Could not save item {item.id}: {e}") from e

    print(f"  💾 Saved {item.media_kind.value if item.media_kind else 'media'} to: {path}")
    return path
