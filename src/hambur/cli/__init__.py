"""Command-line entry point, settings and debug tracing."""

from .app import app, main

__all__ = ["app", "main"]
