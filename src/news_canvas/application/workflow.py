"""
Workflow state machine – single responsibility: own the one WorkflowState and
move it through fetch → select → prompts → style → media → edit.
Depends only on port interfaces (SOLID – Dependency Inversion).

Every public method is either a synchronous action or an async-style
transition that calls the adapters. A refused action raises WorkflowError
before touching any adapter; an adapter failure is recorded as `state.error`
and the workflow starts over from INITIAL.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, FrozenSet, List, Optional

from news_canvas.application import export
from news_canvas.application.concurrency import gather_all
from news_canvas.domain.errors import (
    GenerationError,
    InvalidTransitionError,
    WorkflowPreconditionError,
)
from news_canvas.domain.media import is_data_url, split_data_url
from news_canvas.domain.models import (
    GenerationItem,
    GenerationMode,
    Headline,
    ImagePrompt,
    ImageStyle,
    ImageTextLanguage,
    MediaKind,
    NewsSource,
)
from news_canvas.messages import get_message
from news_canvas.ports.interfaces import IMediaRenderer, INewsSource, IPromptWriter

MERGED_ITEM_ID = "merged"
PROMPT_FIELDS = ("chinese", "english")


class Stage(Enum):
    INITIAL = 0
    FETCHING_NEWS = 1
    NEWS_FETCHED = 2
    GENERATING_PROMPTS = 3
    PROMPTS_GENERATED = 4
    GENERATING_MEDIA = 5
    MEDIA_GENERATED = 6
    EDITING_MEDIA = 7

    @property
    def is_busy(self) -> bool:
        return self in BUSY_STAGES


BUSY_STAGES = frozenset(
    {Stage.FETCHING_NEWS, Stage.GENERATING_PROMPTS, Stage.GENERATING_MEDIA, Stage.EDITING_MEDIA}
)

# Allowed next stages. INITIAL is reachable from everywhere (reset / failure).
TRANSITIONS: Dict[Stage, FrozenSet[Stage]] = {
    Stage.INITIAL: frozenset({Stage.INITIAL, Stage.FETCHING_NEWS}),
    Stage.FETCHING_NEWS: frozenset({Stage.INITIAL, Stage.NEWS_FETCHED}),
    Stage.NEWS_FETCHED: frozenset({Stage.INITIAL, Stage.GENERATING_PROMPTS}),
    Stage.GENERATING_PROMPTS: frozenset({Stage.INITIAL, Stage.PROMPTS_GENERATED}),
    Stage.PROMPTS_GENERATED: frozenset({Stage.INITIAL, Stage.GENERATING_MEDIA, Stage.NEWS_FETCHED}),
    Stage.GENERATING_MEDIA: frozenset({Stage.INITIAL, Stage.MEDIA_GENERATED}),
    Stage.MEDIA_GENERATED: frozenset({Stage.INITIAL, Stage.EDITING_MEDIA, Stage.NEWS_FETCHED}),
    Stage.EDITING_MEDIA: frozenset({Stage.INITIAL, Stage.MEDIA_GENERATED}),
}

StageListener = Callable[[Stage, Stage, "WorkflowState"], None]


def compose_instruction(
    style: ImageStyle,
    prompt_text: str,
    language: Optional[ImageTextLanguage] = None,
) -> str:
    """Final render instruction: style prefix, then the English prompt, then the text-language rule."""
    instruction = f"{style.prompt_prefix}. {prompt_text}"
    if language is not None:
        instruction = f"{instruction} {language.instruction}"
    return instruction


@dataclass
class WorkflowState:
    """Everything the presentation layer may show. Serializable through to_dict()."""

    stage: Stage = Stage.INITIAL
    headlines: List[Headline] = field(default_factory=list)
    sources: List[NewsSource] = field(default_factory=list)
    items: List[GenerationItem] = field(default_factory=list)
    style: Optional[ImageStyle] = None
    language: Optional[ImageTextLanguage] = None
    error: Optional[str] = None
    editing_prompt_id: Optional[str] = None
    prompt_draft: Optional[ImagePrompt] = None
    editing_media_id: Optional[str] = None

    @property
    def selected_headlines(self) -> List[Headline]:
        return [h for h in self.headlines if h.is_selected]

    def find_headline(self, headline_id: int) -> Optional[Headline]:
        return next((h for h in self.headlines if h.id == headline_id), None)

    def find_item(self, item_id: str) -> Optional[GenerationItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.name,
            "headlines": [h.to_dict() for h in self.headlines],
            "sources": [s.to_dict() for s in self.sources],
            "items": [item.to_dict() for item in self.items],
            "style": self.style.name if self.style else None,
            "language": self.language.name if self.language else None,
            "error": self.error,
            "editing_prompt_id": self.editing_prompt_id,
            "prompt_draft": self.prompt_draft.to_dict() if self.prompt_draft else None,
            "editing_media_id": self.editing_media_id,
        }


class NewsCanvasWorkflow:
    """
    Owns the workflow state. All reads go through `state`, all writes through methods.
    Dependencies are injected (ports); no concrete implementations here.
    """

    def __init__(
        self,
        *,
        news_source: INewsSource,
        prompt_writer: IPromptWriter,
        media_renderer: IMediaRenderer,
        locale: Optional[str] = None,
        output_dir: Optional[str] = None,
        max_workers: Optional[int] = None,
    ):
        self._news = news_source
        self._prompts = prompt_writer
        self._media = media_renderer
        self._locale = locale
        self._output_dir = output_dir
        self._max_workers = max_workers
        self._state = WorkflowState()
        self._listeners: List[StageListener] = []

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def stage(self) -> Stage:
        return self._state.stage

    # ------------------------------------------------------------------
    # Stage plumbing
    # ------------------------------------------------------------------

    def add_listener(self, listener: StageListener) -> StageListener:
        """Call `listener(previous, current, state)` on every stage change."""
        self._listeners.append(listener)
        return listener

    def remove_listener(self, listener: StageListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def can_transition(self, target: Stage) -> bool:
        return target in TRANSITIONS[self._state.stage]

    def _check_transition(self, target: Stage) -> None:
        if not self.can_transition(target):
            raise InvalidTransitionError(self._state.stage, target)

    def _move_to(self, target: Stage) -> None:
        self._check_transition(target)
        previous = self._state.stage
        self._state.stage = target
        if previous is not target:
            for listener in list(self._listeners):
                listener(previous, target, self._state)

    def _require_stage(self, action: str, *stages: Stage) -> None:
        if self._state.stage not in stages:
            raise WorkflowPreconditionError(
                f"{action} is not available while {self._state.stage.name}"
            )

    def _clear_generation(self) -> None:
        self._state.items = []
        self._state.style = None
        self._state.language = None
        self._state.editing_prompt_id = None
        self._state.prompt_draft = None
        self._state.editing_media_id = None

    def _clear_all(self) -> None:
        self._clear_generation()
        self._state.headlines = []
        self._state.sources = []
        self._state.error = None

    def _fail(self, message: str) -> None:
        """Record the message and start over; nothing from the failed batch is kept."""
        print(f"  ❌ {message}")
        self._clear_all()
        self._state.error = message
        self._move_to(Stage.INITIAL)

    def _run(self, call: Callable[[], Any]):
        """Run an adapter call; on failure record it and return (False, None)."""
        try:
            return True, call()
        except GenerationError as e:
            self._fail(e.message)
        except Exception as e:
            print(f"  ⚠️  Unexpected {type(e).__name__}: {e}")
            self._fail(get_message("unknown_error", self._locale))
        return False, None

    def _item(self, item_id: str) -> GenerationItem:
        item = self._state.find_item(item_id)
        if item is None:
            raise WorkflowPreconditionError(f"Unknown item: {item_id}")
        return item

    # ------------------------------------------------------------------
    # News
    # ------------------------------------------------------------------

    def fetch_news(self) -> None:
        """INITIAL → FETCHING_NEWS → NEWS_FETCHED (or back to INITIAL)."""
        self._check_transition(Stage.FETCHING_NEWS)
        print("\n[1/4] Fetching today's headlines...")
        self._clear_all()
        self._move_to(Stage.FETCHING_NEWS)

        ok, result = self._run(self._news.fetch_headlines)
        if not ok:
            return
        headlines, sources = result

        if not headlines:
            print("  ⚠️  No headlines found")
            self._state.error = get_message("no_news_found", self._locale)
            self._move_to(Stage.INITIAL)
            return

        self._state.headlines = [
            replace(h, id=index, is_selected=False) for index, h in enumerate(headlines)
        ]
        self._state.sources = list(sources)
        print(f"  ✅ {len(headlines)} headlines ready for selection")
        self._move_to(Stage.NEWS_FETCHED)

    def toggle_selection(self, headline_id: int) -> None:
        self._require_stage("Selecting headlines", Stage.NEWS_FETCHED)
        headline = self._state.find_headline(headline_id)
        if headline is None:
            raise WorkflowPreconditionError(f"Unknown headline: {headline_id}")
        headline.is_selected = not headline.is_selected

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------

    def can_proceed_to_prompts(self) -> bool:
        return self.can_transition(Stage.GENERATING_PROMPTS) and bool(self._state.selected_headlines)

    def proceed_to_prompts(self, mode=GenerationMode.INDIVIDUAL) -> None:
        """
        merge: one item from one call with every selected headline.
        individual: one item per selected headline, calls issued concurrently.
        Any failed call fails the whole batch.
        """
        try:
            mode = GenerationMode(mode)
        except ValueError:
            raise WorkflowPreconditionError(f"Unknown generation mode: {mode!r}") from None
        self._check_transition(Stage.GENERATING_PROMPTS)
        selected = [replace(h) for h in self._state.selected_headlines]
        if not selected:
            raise WorkflowPreconditionError("Select at least one headline first")

        print(f"\n[2/4] Generating image prompts ({mode.value}, {len(selected)} headline(s))...")
        self._clear_generation()
        self._state.error = None
        self._move_to(Stage.GENERATING_PROMPTS)

        if mode is GenerationMode.MERGE:
            ok, prompt = self._run(partial(self._prompts.generate_prompt, selected))
            if not ok:
                return
            items = [GenerationItem(id=MERGED_ITEM_ID, source=selected, prompt=prompt)]
        else:
            calls = [partial(self._prompts.generate_prompt, [h]) for h in selected]
            ok, prompts = self._run(partial(gather_all, calls, self._max_workers))
            if not ok:
                return
            items = [
                GenerationItem(id=str(h.id), source=[h], prompt=prompt)
                for h, prompt in zip(selected, prompts)
            ]

        self._state.items = items
        print(f"  ✅ {len(items)} prompt(s) ready")
        self._move_to(Stage.PROMPTS_GENERATED)

    def begin_edit_prompt(self, item_id: str) -> None:
        """Stage a copy of the item's prompt; only one prompt is edited at a time."""
        self._require_stage("Editing prompts", Stage.PROMPTS_GENERATED)
        item = self._item(item_id)
        if item.prompt is None:
            raise WorkflowPreconditionError(f"Item {item_id} has no prompt to edit")
        self._state.editing_prompt_id = item_id
        self._state.prompt_draft = replace(item.prompt)

    def edit_prompt_text(self, item_id: str, field_name: str, value: str) -> None:
        if self._state.editing_prompt_id != item_id or self._state.prompt_draft is None:
            raise WorkflowPreconditionError(f"Item {item_id} is not being edited")
        if field_name not in PROMPT_FIELDS:
            raise WorkflowPreconditionError(f"Unknown prompt field: {field_name}")
        setattr(self._state.prompt_draft, field_name, value)

    def save_prompt(self) -> None:
        if self._state.editing_prompt_id is None or self._state.prompt_draft is None:
            raise WorkflowPreconditionError("No prompt is being edited")
        item = self._item(self._state.editing_prompt_id)
        item.prompt = self._state.prompt_draft
        self._state.editing_prompt_id = None
        self._state.prompt_draft = None

    def cancel_edit_prompt(self) -> None:
        self._state.editing_prompt_id = None
        self._state.prompt_draft = None

    # ------------------------------------------------------------------
    # Style + media
    # ------------------------------------------------------------------

    def select_style(self, style) -> None:
        self._require_stage("Choosing a style", Stage.PROMPTS_GENERATED)
        try:
            self._state.style = ImageStyle.parse(style)
        except ValueError as e:
            raise WorkflowPreconditionError(str(e)) from None

    def select_language(self, language) -> None:
        """Optional; None clears the preference."""
        self._require_stage("Choosing a text language", Stage.PROMPTS_GENERATED)
        if language is None:
            self._state.language = None
            return
        try:
            self._state.language = ImageTextLanguage.parse(language)
        except ValueError as e:
            raise WorkflowPreconditionError(str(e)) from None

    def can_generate_media(self) -> bool:
        return (
            self.can_transition(Stage.GENERATING_MEDIA)
            and self._state.style is not None
            and self._state.editing_prompt_id is None
            and any(item.prompt for item in self._state.items)
        )

    def generate_media(self) -> None:
        """One render per item with a prompt, concurrently; all-or-nothing."""
        self._check_transition(Stage.GENERATING_MEDIA)
        style = self._state.style
        if style is None:
            raise WorkflowPreconditionError("Choose a style first")
        if self._state.editing_prompt_id is not None:
            raise WorkflowPreconditionError("Save or cancel the prompt edit first")
        targets = [item for item in self._state.items if item.prompt]
        if not targets:
            raise WorkflowPreconditionError("No prompts to render")

        language = self._state.language
        kind = "video" if style.is_video else "image"
        print(f"\n[3/4] Rendering {len(targets)} {kind}(s) in style {style.name}...")
        self._state.error = None
        self._move_to(Stage.GENERATING_MEDIA)

        calls = [
            partial(
                self._media.generate_media,
                compose_instruction(style, item.prompt.english, language),
                video=style.is_video,
            )
            for item in targets
        ]
        ok, results = self._run(partial(gather_all, calls, self._max_workers))
        if not ok:
            return

        for item, media in zip(targets, results):
            item.media_url = media.url
            item.media_kind = media.kind
        print(f"  ✅ {len(results)} {kind}(s) rendered")
        self._move_to(Stage.MEDIA_GENERATED)

    def start_edit_media(self, item_id: str) -> None:
        self._require_stage("Editing media", Stage.MEDIA_GENERATED)
        self._item(item_id)
        self._state.editing_media_id = item_id

    def cancel_edit_media(self) -> None:
        self._state.editing_media_id = None

    def _editable_item(self) -> Optional[GenerationItem]:
        item_id = self._state.editing_media_id
        item = self._state.find_item(item_id) if item_id is not None else None
        if item is None or item.media_kind != MediaKind.IMAGE:
            return None
        if not item.media_url or not is_data_url(item.media_url):
            return None
        return item

    def can_confirm_edit_media(self, instruction: str) -> bool:
        return (
            self.can_transition(Stage.EDITING_MEDIA)
            and bool((instruction or "").strip())
            and self._editable_item() is not None
        )

    def confirm_edit_media(self, instruction: str) -> None:
        """Edit the image of the item chosen with start_edit_media()."""
        self._check_transition(Stage.EDITING_MEDIA)
        if self._state.editing_media_id is None:
            raise WorkflowPreconditionError("Choose an image to edit first")
        instruction = (instruction or "").strip()
        if not instruction:
            raise WorkflowPreconditionError("Edit instruction is empty")
        item = self._editable_item()
        if item is None:
            raise WorkflowPreconditionError(f"Item {self._state.editing_media_id} has no image to edit")

        mime_type, payload = split_data_url(item.media_url)
        print(f"\n[4/4] Editing image for item {item.id}...")
        self._state.error = None
        self._move_to(Stage.EDITING_MEDIA)

        ok, media = self._run(partial(self._media.edit_media, payload, mime_type, instruction))
        if not ok:
            return

        item.media_url = media.url
        item.media_kind = media.kind
        self._state.editing_media_id = None
        print("  ✅ Image updated")
        self._move_to(Stage.MEDIA_GENERATED)

    def save_media(self, item_id: str, directory: Optional[str] = None) -> str:
        self._require_stage("Saving media", Stage.MEDIA_GENERATED)
        return export.save_media(self._item(item_id), directory or self._output_dir)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def go_back_to_news(self) -> None:
        """Drop generated items and style; keep the headline batch and its selection."""
        self._check_transition(Stage.NEWS_FETCHED)
        self._clear_generation()
        self._state.error = None
        self._move_to(Stage.NEWS_FETCHED)

    def reset(self) -> None:
        self._clear_all()
        self._move_to(Stage.INITIAL)
