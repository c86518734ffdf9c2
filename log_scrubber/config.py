"""
Scrubber configuration loaded from environment variables.

Values come from the process environment, with a .env file in the working
directory filling in anything not already set.

    SCRUBBER_MAX_LENGTH          Output length cap (default 20000)
    SCRUBBER_MAX_STACK_FRAMES    Frames kept per stack trace run (default 10)
    SCRUBBER_NAME_DENYLIST_FILE  File of name denylist terms, one per line
    SCRUBBER_EXTRA_PROFILES      Comma separated optional profiles to load
    SCRUBBER_LOG_LEVEL           Log level for the server (default INFO)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .stack_frames import DEFAULT_MAX_FRAMES

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 20000


def load_denylist(path: str) -> list[str]:
    """
    Read name denylist terms from a text file.

    Blank lines and lines starting with '#' are ignored.
    """
    terms = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        term = line.strip()
        if term and not term.startswith("#"):
            terms.append(term)
    logger.info(f"Loaded {len(terms)} name denylist terms from {path}")
    return terms


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


@dataclass(frozen=True)
class ScrubberConfig:
    """Settings for building a RedactionEngine."""
    max_length: int = DEFAULT_MAX_LENGTH
    max_stack_frames: int = DEFAULT_MAX_FRAMES
    name_denylist: Optional[tuple[str, ...]] = None  # None keeps the built-in list
    extra_profiles: tuple[str, ...] = field(default_factory=tuple)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "ScrubberConfig":
        """
        Build a config from SCRUBBER_* environment variables.

        Args:
            dotenv: If True, load a .env file first (existing variables win).

        Raises:
            ValueError: If a numeric setting is not a positive integer.
            OSError: If SCRUBBER_NAME_DENYLIST_FILE cannot be read.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        denylist = None
        denylist_file = os.getenv("SCRUBBER_NAME_DENYLIST_FILE")
        if denylist_file:
            denylist = tuple(load_denylist(denylist_file))

        extra = tuple(
            name.strip()
            for name in os.getenv("SCRUBBER_EXTRA_PROFILES", "").split(",")
            if name.strip()
        )

        return cls(
            max_length=_int_from_env("SCRUBBER_MAX_LENGTH", DEFAULT_MAX_LENGTH),
            max_stack_frames=_int_from_env("SCRUBBER_MAX_STACK_FRAMES", DEFAULT_MAX_FRAMES),
            name_denylist=denylist,
            extra_profiles=extra,
            log_level=os.getenv("SCRUBBER_LOG_LEVEL", "INFO").upper(),
        )
