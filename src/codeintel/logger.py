"""
Logging setup shared by the chunking engine and the command line.

Engine modules log through structlog (``log = get_logger(__name__)``) with an
event name plus key/value context. :func:`configure_logging` routes those
events through the standard ``logging`` handlers so a run can report on the
console, into a log file, or both.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import structlog
from structlog.stdlib import BoundLogger, ProcessorFormatter
from structlog.typing import Processor

LevelLike = Union[int, str]

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_PRE_CHAIN: tuple[Processor, ...] = (
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
)


def resolve_level(level: LevelLike) -> int:
    """Translate a configured level name (``"info"``, ``"WARNING"``) into a logging level."""
    if isinstance(level, int):
        return level
    return _LEVELS.get(level.strip().lower(), logging.INFO)


def _configure_structlog(min_level: int) -> None:
    structlog.configure(
        processors=_PRE_CHAIN + (ProcessorFormatter.wrap_for_formatter,),
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _plain_formatter() -> ProcessorFormatter:
    return ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=_PRE_CHAIN,
    )


def configure_logging(
    level: LevelLike = logging.INFO,
    enable_console: bool = True,
    console_level: Optional[LevelLike] = None,
    log_file: Optional[Path] = None,
) -> None:
    """
    Configure global logging for a chunking run.

    Parameters
    ----------
    level:
        Base level (number or name) for the root logger and the log file.
    enable_console:
        When False, nothing is written to stderr.
    console_level:
        Threshold for console output. Defaults to ``level``; the CLI raises it
        to WARNING so progress events stay out of the summary table.
    log_file:
        Optional file receiving every event at ``level``. Parent directories
        are created and the file is truncated on each run.
    """
    base_level = resolve_level(level)
    _configure_structlog(base_level)
    logging.captureWarnings(True)

    handlers: list[logging.Handler] = []
    if enable_console:
        console = logging.StreamHandler()
        console.setLevel(resolve_level(console_level) if console_level is not None else base_level)
        console.setFormatter(_plain_formatter())
        handlers.append(console)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(base_level)
        file_handler.setFormatter(_plain_formatter())
        handlers.append(file_handler)
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(level=base_level, handlers=handlers, force=True)


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Retrieve a structlog logger with the provided name."""
    return structlog.get_logger(name)
