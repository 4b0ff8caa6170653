"""
Structured logging for KVM Configurator using structlog.

stdout belongs to the menu, so log lines go to stderr (and optionally to a
JSON file) through the stdlib ``logging`` module.
"""

import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

import structlog

from kvmconfigurator.errors import KvmConfiguratorError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOGGER_NAME = "kvmconfigurator"


def _shared_processors() -> List:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _handler(handler: logging.Handler, renderer) -> logging.Handler:
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_shared_processors())
    )
    return handler


def configure_logging(level: str = "WARNING", json_output: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Configure structured logging.

    Args:
        level: One of LOG_LEVELS, case-insensitive
        json_output: Render stderr lines as JSON instead of key=value text
        log_file: Optional file that receives every record as JSON
    """
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")

    structlog.configure(
        processors=_shared_processors() + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if json_output:
        console_renderer = structlog.processors.JSONRenderer()
    else:
        console_renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    handlers = [_handler(logging.StreamHandler(sys.stderr), console_renderer)]
    if log_file:
        handlers.append(_handler(logging.FileHandler(log_file), structlog.processors.JSONRenderer()))

    # force: configure_logging may run again after the config file is read
    logging.basicConfig(format="%(message)s", level=getattr(logging, level), handlers=handlers, force=True)


def get_logger(name: str = LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


@contextmanager
def log_operation(logger, operation: str, **kwargs) -> Iterator[structlog.stdlib.BoundLogger]:
    """
    Log ``<operation>.started`` and ``.completed`` or ``.failed`` around a block.

    Project errors (rejected input, a failing tool) are logged at warning
    level since the menu recovers from them; anything else is an error with
    its traceback. The exception is always re-raised.

    Usage:
        with log_operation(log, "vm_rename", vm_name="my-vm") as oplog:
            ...
    """
    oplog = logger.bind(operation=operation, **kwargs)
    started = time.monotonic()
    oplog.info(f"{operation}.started")

    def elapsed_ms() -> float:
        return round((time.monotonic() - started) * 1000, 2)

    try:
        yield oplog
    except KvmConfiguratorError as e:
        oplog.warning(f"{operation}.failed", error=str(e), error_type=type(e).__name__, duration_ms=elapsed_ms())
        raise
    except Exception as e:
        oplog.error(
            f"{operation}.failed",
            error=str(e),
            error_type=type(e).__name__,
            duration_ms=elapsed_ms(),
            exc_info=True,
        )
        raise
    oplog.info(f"{operation}.completed", duration_ms=elapsed_ms())
