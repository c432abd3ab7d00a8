# src/mockcloud/core/logging.py
"""structlog setup for mockcloud.

The engine emits ``operation_executed`` and ``record_fault_injected`` at
DEBUG, and the container emits ``container_reset``. Nothing above DEBUG is
logged during normal execution, so INFO (the default level) keeps test
output clean.

configure_logging() points structlog and the stdlib root logger at one
handler. Stdlib records from the code under test are formatted by the same
renderer as the mock's own events.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _drop_formatter_keys(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    # ProcessorFormatter always sets both keys.
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _pre_chain() -> list[Any]:
    """Processors shared by structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderers(json_output: bool, stream: TextIO) -> list[Any]:
    if json_output:
        return [
            _drop_formatter_keys,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        _drop_formatter_keys,
        structlog.dev.ConsoleRenderer(colors=stream.isatty()),
    ]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging to a single handler.

    Args:
        json_output: One JSON object per line instead of console rendering.
        level: Root level name; DEBUG shows the engine's per-operation events.
        stream: Output stream, defaulting to sys.stdout at call time.

    Raises:
        ValueError: If ``level`` is not a standard level name.
    """
    level_name = level.upper()
    if level_name not in _LEVELS:
        raise ValueError(f"Unknown log level {level!r}; expected one of {list(_LEVELS)}")
    target = stream if stream is not None else sys.stdout

    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Not cached so repeated calls (e.g. per test) take effect.
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(ProcessorFormatter(processors=_renderers(json_output, target), foreign_pre_chain=pre_chain))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level_name))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Module logger; call at import time as ``logger = get_logger(__name__)``."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
