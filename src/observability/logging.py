"""structlog loggers routed through stdlib logging."""

from __future__ import annotations

import logging
import sys
from typing import Any, Literal

import structlog

LogFormat = Literal["console", "json"]

_HANDLER: logging.Handler | None = None

_PRE_CHAIN: list[Any] = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]

# Level filtering happens first so disabled debug calls stay cheap.
_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    *_PRE_CHAIN,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def configure_logging(*, level: str | int = "WARNING", fmt: LogFormat = "console") -> None:
    """Install a structlog formatter on the root logger, writing to stderr.

    Library code never calls this; only the command line does. Each call
    replaces the handler installed by the previous one and resets the root
    level. Handlers installed by anything else stay in place.
    """
    global _HANDLER

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=_PRE_CHAIN,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    if _HANDLER is not None:
        root.removeHandler(_HANDLER)
    root.addHandler(handler)
    root.setLevel(level)
    _HANDLER = handler


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger bound to the stdlib logger ``name``."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
