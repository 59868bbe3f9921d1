"""Presentation layer – console rendering and the UI-only progress ticker."""

from news_canvas.presentation.console import ConsoleSession, render
from news_canvas.presentation.progress import ProgressTicker

__all__ = ["ConsoleSession", "ProgressTicker", "render"]
