"""End-to-end tests for POST /authorize."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from httpx import ASGITransport, AsyncClient
import pytest

from authz_service.core.dependencies import get_db_session
from authz_service.core.exceptions import StoreUnavailableError
from authz_service.features.authorization.dependencies import get_permission_store
from authz_service.features.permissions import SAMPLE_PERMISSIONS, SqlPermissionStore

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncSession

    from authz_service.features.permissions import InMemoryPermissionStore
    from authz_service.infra.auth import StaticIdentityResolver

pytestmark = pytest.mark.integration


def authorize_body(token: str, method: str, path: str) -> dict[str, str]:
    return {"access_token": token, "method": method, "path": path}


class TestAuthorizeDecisions:
    async def test_pattern_allow(self, client: AsyncClient) -> None:
        response = await client.post(
            "/authorize", json=authorize_body("Bearer token-user456", "GET", "/wallets/wallet-123")
        )

        assert response.status_code == 200
        assert response.json() == {
            "decision": "ALLOW",
            "user_id": "user456",
            "reason": "granted by pattern wallets/*",
            "matched_permissions": [{"action": "read", "resource": "wallets/*", "effect": "allow"}],
        }

    async def test_explicit_deny_is_403(self, client: AsyncClient) -> None:
        response = await client.post(
            "/authorize", json=authorize_body("token-user123", "DELETE", "/transactions")
        )

        assert response.status_code == 403
        data = response.json()
        assert data["decision"] == "DENY"
        assert data["reason"] == "explicitly denied delete on transactions"
        assert data["matched_permissions"] == [
            {"action": "delete", "resource": "transactions", "effect": "deny"}
        ]

    async def test_no_match_is_403(self, client: AsyncClient) -> None:
        response = await client.post(
            "/authorize", json=authorize_body("token-nobody", "PATCH", "/wallets/wallet-1")
        )

        assert response.status_code == 403
        data = response.json()
        assert data["user_id"] == "nobody"
        assert data["reason"] == "no permissions found for write on wallets/wallet-1"
        assert data["matched_permissions"] == []

    async def test_query_string_and_trailing_slash_are_ignored(self, client: AsyncClient) -> None:
        response = await client.post(
            "/authorize",
            json=authorize_body("token-user456", "PUT", "/wallets/wallet-789/?force=1"),
        )

        assert response.status_code == 200
        assert response.json()["reason"] == "explicitly granted write on wallets/wallet-789"

    async def test_admin_global_allow(self, client: AsyncClient) -> None:
        response = await client.post(
            "/authorize", json=authorize_body("token-admin789", "DELETE", "/")
        )

        assert response.status_code == 200
        assert response.json()["matched_permissions"][0]["resource"] == "*"


class TestIdentityFailures:
    async def test_unknown_token(self, client: AsyncClient) -> None:
        response = await client.post("/authorize", json=authorize_body("forged", "GET", "/wallets"))

        assert response.status_code == 403
        assert response.json() == {
            "decision": "DENY",
            "user_id": "unknown",
            "reason": "Unknown token",
            "matched_permissions": [],
        }

    async def test_identity_provider_outage(
        self, client: AsyncClient, identity_resolver: StaticIdentityResolver
    ) -> None:
        identity_resolver.fail_with(httpx.ConnectError("idp.internal:443 unreachable"))

        response = await client.post(
            "/authorize", json=authorize_body("token-user456", "GET", "/wallets")
        )

        assert response.status_code == 403
        data = response.json()
        assert data["user_id"] == "unknown"
        assert data["reason"] == "system error"
        assert "idp.internal" not in response.text


class TestRequestErrors:
    async def test_unsupported_method(self, client: AsyncClient) -> None:
        response = await client.post(
            "/authorize", json=authorize_body("token-user456", "OPTIONS", "/wallets")
        )

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/problem+json")
        data = response.json()
        assert data["type"] == "unsupported-method"
        assert data["detail"] == "Unsupported HTTP method: OPTIONS"
        assert data["method"] == "OPTIONS"

    async def test_relative_path_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/authorize", json=authorize_body("token-user456", "GET", "wallets")
        )

        assert response.status_code == 422
        data = response.json()
        assert data["type"] == "validation-error"
        assert data["errors"][0]["field"] == "body.path"

    async def test_missing_field(self, client: AsyncClient) -> None:
        response = await client.post("/authorize", json={"method": "GET", "path": "/wallets"})

        assert response.status_code == 422
        assert any(e["field"] == "body.access_token" for e in response.json()["errors"])

    async def test_resource_too_deep(self, client: AsyncClient) -> None:
        path = "/" + "/".join(f"s{i}" for i in range(17))

        response = await client.post("/authorize", json=authorize_body("token-user456", "GET", path))

        assert response.status_code == 422
        data = response.json()
        assert data["type"] == "resource-too-deep"
        assert data["depth"] == 17
        assert data["max_depth"] == 16

    async def test_request_errors_precede_token_check(self, client: AsyncClient) -> None:
        unsupported = await client.post("/authorize", json=authorize_body("forged", "HEAD", "/wallets"))
        too_deep = await client.post(
            "/authorize",
            json=authorize_body("forged", "GET", "/" + "/".join(f"s{i}" for i in range(40))),
        )

        assert unsupported.status_code == 400
        assert unsupported.json()["type"] == "unsupported-method"
        assert too_deep.status_code == 422
        assert too_deep.json()["type"] == "resource-too-deep"

    async def test_identity_provider_not_called_for_invalid_request(
        self, client: AsyncClient, identity_resolver: StaticIdentityResolver
    ) -> None:
        identity_resolver.fail_with(httpx.ConnectError("must not be reached"))

        response = await client.post(
            "/authorize", json=authorize_body("token-user456", "OPTIONS", "/wallets")
        )

        assert response.status_code == 400


class TestStoreFailures:
    async def test_store_outage_is_fail_secure(
        self, client: AsyncClient, sample_store: InMemoryPermissionStore
    ) -> None:
        sample_store.fail_with(StoreUnavailableError(extra={"host": "db-primary"}))

        response = await client.post(
            "/authorize", json=authorize_body("token-admin789", "GET", "/wallets")
        )

        assert response.status_code == 403
        data = response.json()
        assert data["user_id"] == "admin789"
        assert data["reason"] == "system error"
        assert data["matched_permissions"] == []
        assert "db-primary" not in response.text


class TestSqlBackedEndpoint:
    @pytest.fixture
    async def sql_client(self, app: FastAPI, db_session: AsyncSession):
        await SqlPermissionStore(db_session).replace_all(SAMPLE_PERMISSIONS)

        async def _session_override():
            yield db_session

        app.dependency_overrides.pop(get_permission_store)
        app.dependency_overrides[get_db_session] = _session_override
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac

    async def test_decisions_from_database(self, sql_client: AsyncClient) -> None:
        allowed = await sql_client.post(
            "/authorize",
            json=authorize_body("token-user789", "POST", "/wallets/w-1/transactions/t-9"),
        )
        denied = await sql_client.post(
            "/authorize", json=authorize_body("token-user789", "GET", "/wallets/w-1")
        )

        assert allowed.status_code == 200
        assert allowed.json()["matched_permissions"][0]["resource"] == "wallets/*/transactions/*"
        assert denied.status_code == 403
