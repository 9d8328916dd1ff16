"""Run async code from synchronous click commands."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from authz_service.infra.database import close_database

T = TypeVar("T")


def run_async(awaitable: Awaitable[T]) -> T:
    """Run ``awaitable`` on a fresh event loop, then dispose of the database engine.

    The engine's pooled connections belong to the loop that opened them, so
    each command invocation gets its own engine.
    """

    async def _run() -> T:
        try:
            return await awaitable
        finally:
            await close_database()

    return asyncio.run(_run())


def coro(f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """Decorator that makes an async function synchronous for Click.

    Usage:
        @cli.command()
        @coro
        async def my_command():
            result = await some_async_function()
            click.echo(result)
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        return run_async(f(*args, **kwargs))

    return wrapper
