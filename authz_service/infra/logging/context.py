"""Context management for structured logging.

Decision logs carry the identity, action and resource being evaluated. The
authorization flow binds them once per request with ``log_context(...)`` and
every record emitted underneath (engine, store, identity resolver) picks them
up through ``ContextInjectingFilter``, without passing them around.

Built on contextvars, so concurrent requests on one event loop never see
each other's context.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Add fields to the logging context of the current task.

    Example:
        set_log_context(user_id="user456", action="read")
        logger.info("Resolving")  # record carries user_id and action
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Remove every field from the current logging context."""
    _log_context.set({})


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind fields for the duration of a ``with`` block, then restore.

    Example:
        with log_context(user_id="u1", resource="wallets/w-1"):
            decision = await engine.resolve(...)
    """
    token = _log_context.set({**_log_context.get(), **kwargs})
    try:
        yield
    finally:
        _log_context.reset(token)


class ContextInjectingFilter(logging.Filter):
    """Copy the current logging context onto each LogRecord.

    Attached to the root queue handler by ``configure_logging`` so formatters (the
    JSON formatter in particular) see the fields as record attributes.
    Attributes already present on the record, such as those passed through
    ``extra=``, are not overwritten.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
