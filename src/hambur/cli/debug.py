"""Debug tracing to stderr.

Components report through ``set_debug_callback``; this tracer is the
callback the CLI installs. It stays silent unless debugging is enabled.
"""

from rich.console import Console
from rich.control import Control

_LEVEL_STYLES = {
    "debug": "dim",
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
}


class DebugTracer:
    """Callable(level, component, message) writing ``[DEBUG]`` lines to stderr."""

    def __init__(self, enabled: bool, console: Console | None = None) -> None:
        self.enabled = enabled
        self._console = console or Console(stderr=True, highlight=False)

    def __call__(self, level: str, component: str, message: str) -> None:
        if not self.enabled:
            return
        self._console.out(
            f"[DEBUG] {component}: {message}",
            style=_LEVEL_STYLES.get(level, ""),
            highlight=False,
        )
        # stderr may be in raw mode too
        self._console.control(Control.move_to_column(0))
