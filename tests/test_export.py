"""Media export: file names and the files written."""

import io

import pytest
from PIL import Image

from conftest import make_headlines
from news_canvas.application.export import save_media, suggest_filename
from news_canvas.domain.errors import ExportError, WorkflowPreconditionError
from news_canvas.domain.media import to_data_url
from news_canvas.domain.models import GenerationItem, Headline, MediaKind


def jpeg_data_url():
    buffer = io.BytesIO()
    Image.new("RGB", (8, 6), "blue").save(buffer, format="JPEG")
    return to_data_url("image/jpeg", buffer.getvalue())


def item_for(title, **kwargs):
    return GenerationItem(id="0", source=[Headline(title=title)], **kwargs)


def test_filename_strips_unsafe_characters_and_truncates():
    item = item_for('台股/再創"新高":電子股*領漲?')
    assert suggest_filename(item) == "台股再創新高電子股領漲"[:10] + ".png"


def test_filename_uses_first_headline_and_trims_whitespace():
    item = GenerationItem(id="merged", source=make_headlines(1, 2))
    assert suggest_filename(item) == "Headline 0.png"
    assert suggest_filename(item_for("  Short   ")) == "Short.png"


def test_filename_falls_back_when_title_is_empty():
    assert suggest_filename(item_for('<>|')) == "news_canvas.png"


def test_video_filename_uses_mp4():
    assert suggest_filename(item_for("Typhoon", media_kind=MediaKind.VIDEO)).endswith(".mp4")


def test_save_image_converts_to_png(tmp_path):
    item = item_for("Harbor", media_url=jpeg_data_url(), media_kind=MediaKind.IMAGE)

    path = save_media(item, str(tmp_path))

    assert path == str(tmp_path / "Harbor.png")
    with Image.open(path) as saved:
        assert saved.format == "PNG"
        assert saved.size == (8, 6)


def test_save_video_copies_file(tmp_path):
    source = tmp_path / "render.mp4"
    source.write_bytes(b"mp4")
    item = item_for("Typhoon", media_url=str(source), media_kind=MediaKind.VIDEO)

    path = save_media(item, str(tmp_path / "out"))

    with open(path, "rb") as f:
        assert f.read() == b"mp4"


def test_save_without_media_is_rejected(tmp_path):
    with pytest.raises(WorkflowPreconditionError):
        save_media(item_for("Nothing yet"), str(tmp_path))


def test_same_prefix_titles_do_not_overwrite_each_other(tmp_path):
    first = item_for("Taiwan stocks rally", media_url=jpeg_data_url(), media_kind=MediaKind.IMAGE)
    second = item_for("Taiwan stock exchange halts", media_url=jpeg_data_url(), media_kind=MediaKind.IMAGE)

    paths = [save_media(first, str(tmp_path)), save_media(second, str(tmp_path)), save_media(first, str(tmp_path))]

    assert paths == [
        str(tmp_path / "Taiwan sto.png"),
        str(tmp_path / "Taiwan sto (1).png"),
        str(tmp_path / "Taiwan sto (2).png"),
    ]


def test_missing_video_file_is_an_export_error(tmp_path):
    item = item_for("Typhoon", media_url=str(tmp_path / "gone.mp4"), media_kind=MediaKind.VIDEO)

    with pytest.raises(ExportError):
        save_media(item, str(tmp_path / "out"))
