"""
Structured Logging

Every write to the shared document and every external call failure is
logged as a structured event, so a misbehaving board can be debugged from
the logs alone. Logs are local only; there is no persisted edit history.
"""

import logging

import structlog

from tripboard.config import get_settings


def resolve_log_level(app_settings) -> int:
    """DEBUG in debug mode, otherwise the configured level."""
    if app_settings.debug_mode:
        return logging.DEBUG
    return getattr(logging, app_settings.log_level)


logging.basicConfig(
    format="%(message)s",
    level=resolve_log_level(get_settings().app),
)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False)
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger bound to a module name."""
    return structlog.get_logger(name)
