"""Lazy evaluation support for DEBUG logging.

Pattern dumps and candidate listings are only worth building when DEBUG is
enabled. ``get_lazy_logger`` returns an adapter that accepts callables as the
message or arguments and invokes them only if the level is enabled.
"""

from __future__ import annotations

import logging
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that evaluates callable messages/arguments lazily.

    Example:
        logger = get_lazy_logger(__name__)
        logger.debug(lambda: f"Patterns: {', '.join(generate_patterns(resource))}")
    """

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return

        if callable(msg):
            msg = msg()
        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)

        super().log(level, msg, *args, **kwargs)

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get a logger with lazy evaluation support and optional bound context."""
    return LazyLoggerAdapter(logging.getLogger(name), context or {})
