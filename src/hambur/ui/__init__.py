"""Terminal UI: streamed-reply rendering and raw-mode input widgets."""

from .prompt import LineEditor, ModelSelector
from .render import RenderResult, RenderSink

__all__ = [
    "LineEditor",
    "ModelSelector",
    "RenderResult",
    "RenderSink",
]
