"""Domain models – dataclasses that serialize to plain dicts."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class GenerationMode(str, Enum):
    MERGE = "merge"  # all selected headlines -> one item
    INDIVIDUAL = "individual"  # one item per selected headline


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class ImageStyle(Enum):
    """Visual styles offered after prompts are generated. Value is the display label."""

    REALISTIC = "寫實"
    OIL_PAINTING = "油畫"
    CARTOON = "卡通"
    WATERCOLOR = "水彩"
    ILLUSTRATION = "插畫"
    CHALKBOARD = "黑板彩色"
    CONCEPT_ART = "概念藝術"
    VISUAL_GUIDE = "視覺引導"
    DYNAMIC_VIDEO = "動態影像"

    @property
    def prompt_prefix(self) -> str:
        return _STYLE_PREFIXES[self]

    @property
    def is_video(self) -> bool:
        return self is ImageStyle.DYNAMIC_VIDEO

    @classmethod
    def parse(cls, value: Any) -> "ImageStyle":
        return _parse_enum(cls, value)


_STYLE_PREFIXES = {
    ImageStyle.REALISTIC: "Photorealistic, cinematic style",
    ImageStyle.OIL_PAINTING: "An expressive oil painting",
    ImageStyle.CARTOON: "A vibrant, detailed cartoon style",
    ImageStyle.WATERCOLOR: "A beautiful watercolor painting",
    ImageStyle.ILLUSTRATION: "A clean editorial illustration with bold shapes",
    ImageStyle.CHALKBOARD: "Colorful chalk drawing on a dark blackboard",
    ImageStyle.CONCEPT_ART: "Atmospheric concept art, dramatic lighting",
    ImageStyle.VISUAL_GUIDE: "An infographic-style visual guide with clear visual hierarchy",
    ImageStyle.DYNAMIC_VIDEO: "A short cinematic video clip with smooth camera motion",
}


class ImageTextLanguage(Enum):
    """Optional preference for text rendered inside the image."""

    NONE = "無文字"
    CHINESE = "繁體中文"
    ENGLISH = "英文"

    @property
    def instruction(self) -> str:
        return _LANGUAGE_INSTRUCTIONS[self]

    @classmethod
    def parse(cls, value: Any) -> "ImageTextLanguage":
        return _parse_enum(cls, value)


_LANGUAGE_INSTRUCTIONS = {
    ImageTextLanguage.NONE: "Do not include any text, letters, logos or watermarks.",
    ImageTextLanguage.CHINESE: "Any text shown in the image must be written in Traditional Chinese.",
    ImageTextLanguage.ENGLISH: "Any text shown in the image must be written in English.",
}


def _parse_enum(enum_cls, value):
    """Accept a member, its value or its (case-insensitive) name."""
    if isinstance(value, enum_cls):
        return value
    name = str(value).strip().upper().replace(" ", "_").replace("-", "_")
    for member in enum_cls:
        if value == member.value or name == member.name:
            return member
    raise ValueError(f"Unknown {enum_cls.__name__}: {value!r}")


@dataclass
class Headline:
    """One candidate news item. `id` is assigned per fetch batch."""

    title: str
    summary: str = ""
    source_url: str = ""
    source_title: str = ""
    rating: int = 1
    id: int = -1
    is_selected: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class NewsSource:
    """Grounding citation attached to a fetch batch."""

    uri: str
    title: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ImagePrompt:
    chinese: str
    english: str  # used for generation

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class GenerationItem:
    """One unit of output tied to one (individual) or many (merge) headlines."""

    id: str
    source: List[Headline] = field(default_factory=list)
    prompt: Optional[ImagePrompt] = None
    media_url: Optional[str] = None
    media_kind: Optional[MediaKind] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": [h.to_dict() for h in self.source],
            "prompt": self.prompt.to_dict() if self.prompt else None,
            "media_url": self.media_url,
            "media_kind": self.media_kind.value if self.media_kind else None,
        }


@dataclass(frozen=True)
class RenderedMedia:
    """Self-contained media reference: a data URL for images, a local file path for videos."""

    url: str
    kind: MediaKind = MediaKind.IMAGE
