"""
Console presentation: `render(state)` is a pure function of the workflow
state; ConsoleSession maps typed commands onto workflow methods.
"""

from typing import Callable, List, Optional

from news_canvas.application.workflow import NewsCanvasWorkflow, Stage, WorkflowState
from news_canvas.domain.errors import ExportError, WorkflowError
from news_canvas.domain.models import GenerationItem, ImageStyle, ImageTextLanguage, MediaKind
from news_canvas.presentation.progress import ProgressTicker

RULE = "=" * 60
PROGRESS_STEP = 10

STEP_LABELS = ["Fetch news", "Pick headlines", "Prompts & style", "Artwork"]

COMMAND_HELP = {
    Stage.INITIAL: "f = fetch today's headlines, q = quit",
    Stage.NEWS_FETCHED: "<id> = toggle headline, m = merge selected, i = one per headline, r = restart, q = quit",
    Stage.PROMPTS_GENERATED: (
        "e <n> = edit prompt, s <n> = style, l <n|none> = text language, g = generate, "
        "b = back to news, r = restart, q = quit"
    ),
    Stage.MEDIA_GENERATED: "d <n> = save, x <n> = edit image, b = back to news, r = restart, q = quit",
}

LOADING_MESSAGES = {
    Stage.FETCHING_NEWS: "Searching today's headlines...",
    Stage.GENERATING_PROMPTS: "Turning the news into artistic inspiration...",
    Stage.GENERATING_MEDIA: "Rendering your artwork, please wait...",
    Stage.EDITING_MEDIA: "Applying your edit...",
}


def _step_number(stage: Stage) -> int:
    if stage in (Stage.INITIAL, Stage.FETCHING_NEWS):
        return 1
    if stage in (Stage.NEWS_FETCHED, Stage.GENERATING_PROMPTS):
        return 2
    if stage in (Stage.PROMPTS_GENERATED, Stage.GENERATING_MEDIA):
        return 3
    return 4


def render_steps(stage: Stage) -> str:
    current = _step_number(stage)
    parts = []
    for number, label in enumerate(STEP_LABELS, 1):
        marker = "●" if number == current else ("✓" if number < current else "○")
        parts.append(f"{marker} {label}")
    return "  " + "  →  ".join(parts)


def stars(rating: int) -> str:
    return "★" * rating + "☆" * (5 - rating)


def sources_line(item: GenerationItem) -> str:
    return " & ".join(h.title for h in item.source)


def _render_headlines(state: WorkflowState, lines: List[str]) -> None:
    ranked = sorted(state.headlines, key=lambda h: h.rating, reverse=True)
    lines.append("Pick the headlines you are interested in (multiple allowed):")
    for h in ranked:
        box = "[x]" if h.is_selected else "[ ]"
        lines.append(f"  {box} {h.id:>2}. {h.title}  {stars(h.rating)}")
        if h.summary:
            lines.append(f"         {h.summary}")
        if h.source_url and h.source_title:
            lines.append(f"         Source: {h.source_title} <{h.source_url}>")
    if state.sources:
        lines.append(f"  ({len(state.sources)} search sources grounded this list)")
    count = len(state.selected_headlines)
    lines.append(f"Selected: {count}" if count else "Select at least one headline")


def _render_prompts(state: WorkflowState, lines: List[str]) -> None:
    lines.append("AI-generated image prompts:")
    for n, item in enumerate(state.items, 1):
        lines.append(f"  [{n}] Inspired by: {sources_line(item)}")
        prompt = item.prompt
        if state.editing_prompt_id == item.id and state.prompt_draft is not None:
            prompt = state.prompt_draft
            lines.append("      (editing)")
        if prompt is not None:
            lines.append(f'      中文: "{prompt.chinese}"')
            lines.append(f'      English (used for generation): "{prompt.english}"')
    lines.append("Styles:")
    for n, style in enumerate(ImageStyle, 1):
        marker = "*" if state.style is style else " "
        lines.append(f"  {marker}{n}. {style.value} ({style.name.lower()})")
    lines.append("Text in image:")
    for n, language in enumerate(ImageTextLanguage, 1):
        marker = "*" if state.language is language else " "
        lines.append(f"  {marker}{n}. {language.value} ({language.name.lower()})")
    if state.style is None:
        lines.append("Choose a style first")
    else:
        lines.append(f"Ready to generate in style {state.style.value}")


def _render_media(state: WorkflowState, lines: List[str]) -> None:
    lines.append("Your news-inspired artwork:")
    for n, item in enumerate(state.items, 1):
        if item.media_kind == MediaKind.VIDEO:
            media = f"video at {item.media_url}"
        elif item.media_url:
            media = f"image ({len(item.media_url)} bytes of data URL)"
        else:
            media = "no media"
        lines.append(f"  [{n}] {media}")
        lines.append("      Inspired by:")
        for h in item.source:
            lines.append(f"        - {h.title} ({h.source_title})")
        if state.editing_media_id == item.id:
            lines.append("      (waiting for an edit instruction)")


def render(state: WorkflowState, progress: Optional[float] = None) -> str:
    """Text for the current stage. `progress` is only shown while media is rendering."""
    lines = [RULE, render_steps(state.stage), RULE]

    if state.stage.is_busy:
        lines.append(f"⏳ {LOADING_MESSAGES[state.stage]}")
        if progress is not None and state.stage in (Stage.GENERATING_MEDIA, Stage.EDITING_MEDIA):
            lines.append(f"   {round(progress)}%")
        return "\n".join(lines)

    if state.error:
        lines.append(f"❌ {state.error}")
        lines.append("r = start over, f = try again, q = quit")
        return "\n".join(lines)

    if state.stage is Stage.INITIAL:
        lines.append("Ready to turn the news into images?")
    elif state.stage is Stage.NEWS_FETCHED:
        _render_headlines(state, lines)
    elif state.stage is Stage.PROMPTS_GENERATED:
        _render_prompts(state, lines)
    elif state.stage is Stage.MEDIA_GENERATED:
        _render_media(state, lines)

    help_text = COMMAND_HELP.get(state.stage)
    if help_text:
        lines.append(help_text)
    return "\n".join(lines)


def _pick(options, arg: str):
    """Option by 1-based number or by name/value."""
    options = list(options)
    if arg.isdigit():
        index = int(arg) - 1
        if 0 <= index < len(options):
            return options[index]
        raise WorkflowError(f"No option {arg}")
    return arg


class ConsoleSession:
    """Interactive loop; commands are documented in COMMAND_HELP."""

    def __init__(
        self,
        workflow: NewsCanvasWorkflow,
        input_fn: Callable[[str], str] = input,
        output: Callable[..., None] = print,
        ticker: Optional[ProgressTicker] = None,
    ):
        self.workflow = workflow
        self._input = input_fn
        self._output = output
        self.ticker = ticker or ProgressTicker(on_tick=self._show_progress)
        self._shown_step = None
        workflow.add_listener(self._on_stage_change)

    def _show_progress(self, value: float) -> None:
        """Whole lines only, one per 10% step."""
        step = int(value // PROGRESS_STEP)
        if step == self._shown_step:
            return
        self._shown_step = step
        self._output(f"   ⏳ {round(value)}%", flush=True)

    def _on_stage_change(self, previous: Stage, current: Stage, state: WorkflowState) -> None:
        rendering = (Stage.GENERATING_MEDIA, Stage.EDITING_MEDIA)
        if current in rendering:
            self._output(render(state, progress=0))
            self._shown_step = 0
            self.ticker.start()
        elif previous in rendering and current is Stage.MEDIA_GENERATED:
            self.ticker.complete()
        else:
            self.ticker.reset()
            if current.is_busy:
                self._output(render(state))

    def run(self) -> None:
        while True:
            self._output(render(self.workflow.state))
            try:
                command = self._input("> ")
            except EOFError:
                break
            if not self.handle(command):
                break
        self.ticker.reset()

    def handle(self, command: str) -> bool:
        """Execute one command. Returns False when the session should end."""
        parts = command.strip().split(maxsplit=1)
        if not parts:
            return True
        verb, arg = parts[0].lower(), (parts[1].strip() if len(parts) > 1 else "")

        if verb in ("q", "quit", "exit"):
            return False
        try:
            self._dispatch(verb, arg)
        except (WorkflowError, ExportError, ValueError) as e:
            self._output(f"⚠️  {e}")
        return True

    def _dispatch(self, verb: str, arg: str) -> None:
        wf = self.workflow
        stage = wf.stage

        if verb == "r":
            wf.reset()
        elif verb == "f":
            wf.fetch_news()
        elif verb == "b":
            wf.go_back_to_news()
        elif stage is Stage.NEWS_FETCHED and verb.isdigit():
            wf.toggle_selection(int(verb))
        elif stage is Stage.NEWS_FETCHED and verb == "t":
            wf.toggle_selection(int(arg))
        elif verb == "m":
            wf.proceed_to_prompts("merge")
        elif verb == "i":
            wf.proceed_to_prompts("individual")
        elif verb == "e":
            self._edit_prompt(self._item_id(arg))
        elif verb == "s":
            wf.select_style(_pick(ImageStyle, arg))
        elif verb == "l":
            wf.select_language(None if arg.lower() == "none" else _pick(ImageTextLanguage, arg))
        elif verb == "g":
            wf.generate_media()
        elif verb == "d":
            wf.save_media(self._item_id(arg))
        elif verb == "x":
            self._edit_media(self._item_id(arg))
        else:
            self._output(f"⚠️  Unknown command: {verb}")

    def _item_id(self, arg: str) -> str:
        items = self.workflow.state.items
        if not arg:
            if len(items) == 1:
                return items[0].id
            raise WorkflowError("Which item? Give its number")
        return _pick([item.id for item in items], arg)

    def _edit_prompt(self, item_id: str) -> None:
        wf = self.workflow
        wf.begin_edit_prompt(item_id)
        draft = wf.state.prompt_draft
        for field_name in ("chinese", "english"):
            current = getattr(draft, field_name)
            try:
                value = self._input(f"{field_name} [{current}] (blank keeps, '!' cancels): ")
            except EOFError:
                value = "!"
            if value.strip() == "!":
                wf.cancel_edit_prompt()
                return
            if value.strip():
                wf.edit_prompt_text(item_id, field_name, value.strip())
        wf.save_prompt()

    def _edit_media(self, item_id: str) -> None:
        wf = self.workflow
        wf.start_edit_media(item_id)
        try:
            instruction = self._input("Edit instruction (e.g. add a pair of sunglasses; blank cancels): ")
        except EOFError:
            instruction = ""
        if not instruction.strip():
            wf.cancel_edit_media()
            return
        wf.confirm_edit_media(instruction)
