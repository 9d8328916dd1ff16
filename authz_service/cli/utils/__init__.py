"""CLI utilities for running async operations and formatting output."""

from authz_service.cli.utils.async_runner import coro, run_async
from authz_service.cli.utils.formatters import error, info, success

__all__ = ["coro", "error", "info", "run_async", "success"]
