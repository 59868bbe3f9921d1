"""
News Canvas – turn today's headlines into artwork with Gemini.

Use from project root:
  from news_canvas.application.workflow import NewsCanvasWorkflow
  from news_canvas.adapters import default_adapters
  workflow = NewsCanvasWorkflow(**default_adapters())
  workflow.fetch_news()

Every workflow dependency is a port (see news_canvas.ports); inject fakes for testing.
"""

__version__ = "0.1.0"
