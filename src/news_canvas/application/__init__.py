"""Application layer – workflow state machine and its helpers."""

from news_canvas.application.workflow import NewsCanvasWorkflow, Stage, WorkflowState

__all__ = ["NewsCanvasWorkflow", "Stage", "WorkflowState"]
