"""
Logging configuration — one-time setup for the CLI process.

The verbosity is resolved into a ``LogSettings`` value by the CLI group
and handed to ``setup_logging``; nothing else keeps a global level.
Every module logs through ``logging.getLogger(__name__)``.

Level precedence:
    --debug / --verbose / --quiet  >  ONC_LOG_LEVEL  >  config "verbose"  >  WARNING

Optional file output via ONC_LOG_FILE / ONC_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping

# ── Format strings ──────────────────────────────────────────────

# WARNING and above: the message only, the CLI prints its own framing
_FMT_PLAIN = "%(message)s"

# INFO: which service said it
_FMT_INFO = "%(asctime)s [%(name)s] %(message)s"

# DEBUG and file output: full location
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

_DATEFMT_CONSOLE = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LogSettings:
    """Resolved logging options for one CLI invocation."""

    level: int = logging.WARNING
    log_file: str | None = None
    file_level: int | None = None


def parse_level(name: str | None, default: int = logging.WARNING) -> int:
    """Convert a level name to its numeric value, falling back to *default*."""
    if not name:
        return default
    value = getattr(logging, name.strip().upper(), None)
    return value if isinstance(value, int) else default


def resolve_settings(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    config_verbose: bool = False,
    environ: Mapping[str, str] | None = None,
) -> LogSettings:
    """Work out the effective logging settings from flags, env and config."""
    env = os.environ if environ is None else environ

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    elif quiet:
        level = logging.ERROR
    elif env.get("ONC_LOG_LEVEL"):
        level = parse_level(env["ONC_LOG_LEVEL"])
    elif config_verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    log_file = env.get("ONC_LOG_FILE") or None
    file_level = parse_level(env.get("ONC_LOG_FILE_LEVEL"), default=level) if log_file else None
    return LogSettings(level=level, log_file=log_file, file_level=file_level)


def setup_logging(settings: LogSettings) -> None:
    """Install handlers on the root logger according to *settings*."""
    if settings.level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_CONSOLE
    elif settings.level <= logging.INFO:
        fmt, datefmt = _FMT_INFO, _DATEFMT_CONSOLE
    else:
        fmt, datefmt = _FMT_PLAIN, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(settings.level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = settings.level

    if settings.log_file:
        file_level = settings.file_level if settings.file_level is not None else settings.level
        fh = logging.FileHandler(settings.log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False
