import logging
import sys
from typing import Optional

import structlog


def configure_logging(verbose: bool = False):
    """
    Configure structured logging for the command line tool.

    Tracing goes to stderr and is only emitted at debug level, so it stays
    silent unless ``verbose`` is set.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(colors=False),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None):
    return structlog.get_logger(name)
