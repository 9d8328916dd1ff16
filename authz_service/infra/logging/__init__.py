"""Logging infrastructure.

Structured logging on top of the standard library:
- JSONL format for Loki/Elasticsearch ingestion
- Automatic context injection (user_id, action, resource)
- QueueHandler + QueueListener for non-blocking I/O
- Lazy evaluation for expensive DEBUG output

Basic usage:
    import logging
    from authz_service.infra.logging import log_context

    logger = logging.getLogger(__name__)

    with log_context(user_id="user456", action="read"):
        logger.info("Resolving")  # includes user_id and action
"""

from authz_service.infra.logging.config import configure_logging, setup_logging, shutdown
from authz_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    log_context,
    set_log_context,
)
from authz_service.infra.logging.formatters import JSONFormatter
from authz_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
