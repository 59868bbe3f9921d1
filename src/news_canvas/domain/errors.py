"""Error hierarchy shared by adapters and the workflow."""

from typing import Optional


class NewsCanvasError(Exception):
    """Base class for every error raised by news_canvas."""


class GenerationError(NewsCanvasError):
    """
    A gateway call failed or returned something unusable.
    `message` is already localized and safe to show to the user;
    `reason` is a stable key (see news_canvas.messages) for callers that branch on it.
    """

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.reason = reason


class WorkflowError(NewsCanvasError):
    """The workflow refused an action before doing anything."""


class InvalidTransitionError(WorkflowError):
    """Requested stage change is not in the transition table."""

    def __init__(self, current, target):
        super().__init__(f"Cannot move from {current.name} to {target.name}")
        self.current = current
        self.target = target


class WorkflowPreconditionError(WorkflowError):
    """Required user input is missing (no selection, no style, empty instruction...)."""


class ExportError(NewsCanvasError):
    """Media could not be written to disk (unwritable directory, missing temp file, unreadable image)."""
