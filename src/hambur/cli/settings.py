"""Runtime settings read from the environment.

Environment variables:
    HAMBUR_DEBUG: Any value enables timing and decode tracing on stderr
    HAMBUR_CHAR_DELAY_MS: Typewriter delay per character (default: 10)
    HAMBUR_MODEL: Model id used at startup (default: google/gemini-2.0-flash-001)
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..registry import DEFAULT_MODEL_ID
from ..ui.config import CHAR_DELAY_SECONDS


class Settings(BaseModel):
    """Settings for one process run."""

    model_config = ConfigDict(frozen=True)

    debug: bool = Field(default=False, description="Write diagnostics to stderr")
    char_delay: float = Field(
        default=CHAR_DELAY_SECONDS,
        ge=0,
        description="Seconds between rendered characters"
    )
    model_id: str = Field(default=DEFAULT_MODEL_ID, description="Initial model")


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from environment variables.

    Args:
        environ: Variables to read (default: os.environ)

    Returns:
        Validated settings

    Raises:
        ValueError: If a variable holds an invalid value
    """
    env = os.environ if environ is None else environ

    char_delay = CHAR_DELAY_SECONDS
    delay_ms = env.get("HAMBUR_CHAR_DELAY_MS")
    if delay_ms:
        try:
            char_delay = int(delay_ms) / 1000
        except ValueError:
            raise ValueError(
                f"HAMBUR_CHAR_DELAY_MS must be an integer number of milliseconds, got {delay_ms!r}"
            ) from None
        if char_delay < 0:
            raise ValueError(
                f"HAMBUR_CHAR_DELAY_MS must not be negative, got {delay_ms!r}"
            )

    return Settings(
        debug="HAMBUR_DEBUG" in env,
        char_delay=char_delay,
        model_id=env.get("HAMBUR_MODEL") or DEFAULT_MODEL_ID,
    )
