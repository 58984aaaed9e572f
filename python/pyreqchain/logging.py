"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

import structlog

LIBRARY_LOGGER = "pyreqchain"


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a library logger writing through the standard library logger `name`.

    Level filtering and handlers belong to `logging`, so nothing is emitted unless the application enables it.
    """
    logger: structlog.stdlib.BoundLogger = structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )
    return logger


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = False,
) -> None:
    """Configure structlog and the `pyreqchain` standard library logger.

    The library only emits events; applications that already configure `logging` do not need to call this.
    The `pyreqchain` logger gets its own handler and stops propagating to the root logger.

    Args:
        level: Minimum level of emitted events.
        output: Stream the events are written to.
        json_format: Render events as JSON lines instead of the console format.
    """
    shared: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    renderer: structlog.types.Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[structlog.stdlib.filter_by_level, *shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(output)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=shared,
        )
    )
    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.handlers = [handler]
    logger.setLevel(level)
    logger.propagate = False
