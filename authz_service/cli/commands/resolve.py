"""Offline resolution commands: evaluate a request, inspect candidate patterns.

Example:
    authz-service check user456 GET /wallets/wallet-123
    authz-service check --sample user789 PUT /wallets/w-1/transactions/t-9
    authz-service patterns /wallets/wallet-123/transactions/txn-456
"""

import json

import click

from authz_service.cli.utils import run_async
from authz_service.core.exceptions import AppException, ResourceTooDeepError
from authz_service.core.resolution import (
    ConflictStrategy,
    Decision,
    PermissionResolutionEngine,
    count_segments,
    generate_patterns,
    map_action,
    map_resource,
    score,
)
from authz_service.core.settings import get_resolution_settings

_STRATEGIES = click.Choice([s.value for s in ConflictStrategy])


def _bounded_resource(path: str) -> str:
    """Normalize ``path`` and enforce AUTHZ_MAX_RESOURCE_DEPTH."""
    max_depth = get_resolution_settings().max_resource_depth
    resource = map_resource(path)
    depth = count_segments(resource)
    if depth > max_depth:
        raise ResourceTooDeepError(depth, max_depth)
    return resource


async def _resolve(
    user_id: str,
    method: str,
    path: str,
    *,
    sample: bool,
    strategy: ConflictStrategy | None,
) -> Decision:
    settings = get_resolution_settings()
    action = map_action(method)
    resource = _bounded_resource(path)

    if sample:
        from authz_service.features.permissions import SAMPLE_PERMISSIONS, InMemoryPermissionStore

        engine = PermissionResolutionEngine(
            InMemoryPermissionStore(SAMPLE_PERMISSIONS), settings, strategy=strategy
        )
        return await engine.resolve(user_id, action, resource)

    from authz_service.features.permissions import SqlPermissionStore
    from authz_service.infra.database import get_async_session

    async with get_async_session() as session:
        engine = PermissionResolutionEngine(SqlPermissionStore(session), settings, strategy=strategy)
        return await engine.resolve(user_id, action, resource)


@click.command()
@click.argument("user_id")
@click.argument("method")
@click.argument("path")
@click.option(
    "--sample",
    is_flag=True,
    help="Evaluate against the built-in sample permissions instead of the database",
)
@click.option(
    "--strategy",
    type=_STRATEGIES,
    default=None,
    help="Conflict strategy (default: AUTHZ_CONFLICT_STRATEGY)",
)
@click.pass_context
def check(
    ctx: click.Context,
    user_id: str,
    method: str,
    path: str,
    sample: bool,
    strategy: str | None,
) -> None:
    """Decide whether USER_ID may send METHOD to PATH.

    Prints the decision as JSON. Exit status is 0 for ALLOW, 1 for DENY.
    """
    try:
        decision = run_async(
            _resolve(
                user_id,
                method,
                path,
                sample=sample,
                strategy=ConflictStrategy(strategy) if strategy else None,
            )
        )
    except AppException as e:
        raise click.UsageError(e.detail, ctx=ctx) from e

    click.echo(json.dumps({**decision.to_dict(), "basis": decision.basis.value}, indent=2))
    ctx.exit(0 if decision.allowed else 1)


@click.command()
@click.argument("resource")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def patterns(ctx: click.Context, resource: str, as_json: bool) -> None:
    """List the patterns that may govern RESOURCE, with their scores.

    RESOURCE may be a resource identifier ("wallets/w-1") or a request path
    ("/wallets/w-1?x=1"); both are normalized the same way.
    """
    try:
        resource = _bounded_resource(resource)
    except ResourceTooDeepError as e:
        raise click.UsageError(e.detail, ctx=ctx) from e

    scored = [(pattern, score(resource, pattern)) for pattern in generate_patterns(resource)]
    if as_json:
        click.echo(
            json.dumps(
                {
                    "resource": resource,
                    "patterns": [
                        {"pattern": p, "score": str(s)}
                        for p, s in scored
                    ],
                },
                indent=2,
            )
        )
        return

    width = max(len(p) for p, _ in scored)
    for pattern, pattern_score in scored:
        click.echo(f"{pattern:<{width}}  {pattern_score}")
