"""Console rendering and command handling."""

from conftest import FakeNewsSource, make_headlines
from news_canvas.application.workflow import NewsCanvasWorkflow, Stage
from news_canvas.domain.models import ImageStyle
from news_canvas.presentation.console import ConsoleSession, render, render_steps
from news_canvas.presentation.progress import ProgressTicker


class Recorder:
    def __init__(self):
        self.lines = []

    def __call__(self, text="", **_kwargs):
        self.lines.append(text)

    @property
    def text(self):
        return "\n".join(self.lines)


def session_for(workflow, answers=()):
    answers = list(answers)
    output = Recorder()
    session = ConsoleSession(
        workflow,
        input_fn=lambda _prompt: answers.pop(0),
        output=output,
        ticker=ProgressTicker(interval=10),
    )
    return session, output


def test_render_sorts_headlines_by_rating(prompt_writer, media_renderer):
    workflow = NewsCanvasWorkflow(
        news_source=FakeNewsSource(headlines=make_headlines(2, 5, 3)),
        prompt_writer=prompt_writer,
        media_renderer=media_renderer,
    )
    workflow.fetch_news()
    workflow.toggle_selection(2)

    text = render(workflow.state)

    assert text.index("Headline 1") < text.index("Headline 2") < text.index("Headline 0")
    assert "[x]  2. Headline 2" in text
    assert "Selected: 1" in text


def test_render_shows_error_instead_of_stage(workflow, news_source):
    news_source.headlines = []
    workflow.fetch_news()

    text = render(workflow.state)

    assert workflow.state.error in text
    assert "r = start over" in text


def test_render_busy_stage_shows_progress(workflow):
    workflow.state.stage = Stage.GENERATING_MEDIA

    text = render(workflow.state, progress=41.6)

    assert "42%" in text


def test_step_indicator_marks_current_step():
    assert render_steps(Stage.PROMPTS_GENERATED).count("✓") == 2
    assert "● Artwork" in render_steps(Stage.EDITING_MEDIA)


def test_session_walks_the_whole_workflow(workflow, media_renderer):
    session, output = session_for(workflow, answers=["add sunglasses"])

    for command in ["f", "0", "2", "i", "s 1", "l none", "g"]:
        assert session.handle(command)

    assert workflow.stage is Stage.MEDIA_GENERATED
    assert workflow.state.style is ImageStyle.REALISTIC
    assert session.ticker.value == 100.0
    before = workflow.state.items[1].media_url

    session.handle("x 1")

    assert media_renderer.edit_calls[0][2] == "add sunglasses"
    assert workflow.state.items[1].media_url == before


def test_session_reports_refused_actions(workflow):
    session, output = session_for(workflow)
    session.handle("f")

    session.handle("i")

    assert workflow.stage is Stage.NEWS_FETCHED
    assert "⚠️  Select at least one headline first" in output.lines


def test_prompt_edit_keeps_blank_fields(workflow):
    session, _ = session_for(workflow, answers=["", "A lighthouse in a storm"])
    for command in ["f", "0", "i"]:
        session.handle(command)

    session.handle("e 1")

    prompt = workflow.state.items[0].prompt
    assert prompt.chinese == "中文 Headline 0"
    assert prompt.english == "A lighthouse in a storm"


def test_blank_edit_instruction_cancels(workflow, media_renderer):
    session, _ = session_for(workflow, answers=["   "])
    for command in ["f", "0", "i", "s 2", "g"]:
        session.handle(command)

    session.handle("x")

    assert media_renderer.edit_calls == []
    assert workflow.state.editing_media_id is None


def test_quit_and_eof_end_the_session(workflow):
    session, _ = session_for(workflow)
    assert session.handle("q") is False

    def eof(_prompt):
        raise EOFError

    ConsoleSession(workflow, input_fn=eof, output=Recorder(), ticker=ProgressTicker(interval=10)).run()


def test_save_into_unwritable_directory_keeps_the_session(tmp_path, news_source, prompt_writer, media_renderer):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    workflow = NewsCanvasWorkflow(
        news_source=news_source,
        prompt_writer=prompt_writer,
        media_renderer=media_renderer,
        locale="en",
        output_dir=str(blocker / "sub"),
    )
    session, output = session_for(workflow)
    for command in ["f", "0", "i", "s 1", "g"]:
        session.handle(command)

    assert session.handle("d 1") is True

    assert workflow.stage is Stage.MEDIA_GENERATED
    assert workflow.state.items[0].media_url
    assert any(line.startswith("⚠️  Could not save item 0") for line in output.lines)


def test_eof_while_editing_cancels_instead_of_ending(workflow, media_renderer):
    def eof(_prompt):
        raise EOFError

    session = ConsoleSession(workflow, input_fn=eof, output=Recorder(), ticker=ProgressTicker(interval=10))
    for command in ["f", "0", "i"]:
        session.handle(command)
    original = workflow.state.items[0].prompt

    assert session.handle("e 1") is True
    assert workflow.state.editing_prompt_id is None
    assert workflow.state.items[0].prompt == original

    session.handle("s 2")
    session.handle("g")

    assert session.handle("x 1") is True
    assert media_renderer.edit_calls == []
    assert workflow.state.editing_media_id is None
    assert workflow.stage is Stage.MEDIA_GENERATED


def test_progress_is_printed_as_whole_lines_per_ten_percent(workflow):
    session, output = session_for(workflow)
    session._shown_step = 0

    for value in [3.0, 9.9, 12.4, 19.0, 25.2, 100.0]:
        session._show_progress(value)

    assert output.lines == ["   ⏳ 12%", "   ⏳ 25%", "   ⏳ 100%"]
