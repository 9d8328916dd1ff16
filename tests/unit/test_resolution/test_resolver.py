"""Tests for candidate ordering and conflict resolution."""

from __future__ import annotations

import pytest

from authz_service.core.resolution import (
    Action,
    ConflictStrategy,
    Effect,
    MatchedPermission,
    Outcome,
    PermissionRecord,
    ResolutionBasis,
    ScoredPermission,
    order_candidates,
    resolve_candidates,
    score,
)


def scored(resource: str, pattern: str, effect: str, action: str = "read") -> ScoredPermission:
    record = PermissionRecord(user_id="u1", action=Action(action), resource=pattern, effect=Effect(effect))
    return ScoredPermission(permission=record, score=score(resource, pattern))


@pytest.mark.unit
class TestOrderCandidates:
    def test_deny_first_puts_every_deny_ahead(self) -> None:
        resource = "wallets/wallet-123"
        candidates = [
            scored(resource, "wallets/wallet-123", "allow"),
            scored(resource, "*", "deny"),
            scored(resource, "wallets/*", "deny"),
        ]

        ordered = order_candidates(candidates, ConflictStrategy.DENY_FIRST)

        assert [c.resource for c in ordered] == ["wallets/*", "*", "wallets/wallet-123"]

    def test_specificity_first_orders_by_score_only(self) -> None:
        resource = "wallets/wallet-123"
        candidates = [
            scored(resource, "*", "deny"),
            scored(resource, "wallets/*", "deny"),
            scored(resource, "wallets/wallet-123", "allow"),
        ]

        ordered = order_candidates(candidates, ConflictStrategy.SPECIFICITY_FIRST)

        assert [c.resource for c in ordered] == ["wallets/wallet-123", "wallets/*", "*"]

    def test_is_stable_for_equal_keys(self) -> None:
        resource = "wallets/wallet-123"
        first = scored(resource, "wallets/*", "allow")
        second = scored(resource, "wallets/*", "allow")

        assert order_candidates([first, second]) == [first, second]

    def test_empty(self) -> None:
        assert order_candidates([]) == []


@pytest.mark.unit
class TestResolveCandidates:
    def test_exact_grant(self) -> None:
        resource = "wallets/wallet-123"
        decision = resolve_candidates(
            "u1", Action.READ, resource, [scored(resource, resource, "allow")]
        )

        assert decision.outcome is Outcome.ALLOW
        assert decision.user_id == "u1"
        assert decision.reason == "explicitly granted read on wallets/wallet-123"
        assert decision.basis is ResolutionBasis.EXACT
        assert decision.matched_permissions == (
            MatchedPermission(action=Action.READ, resource=resource, effect=Effect.ALLOW),
        )

    def test_wildcard_grant_is_inherited(self) -> None:
        resource = "wallets/wallet-456/transactions/txn-789"
        decision = resolve_candidates(
            "u1", Action.READ, resource, [scored(resource, "wallets/*", "allow")]
        )

        assert decision.outcome is Outcome.ALLOW
        assert decision.reason == "granted by pattern wallets/*"
        assert decision.basis is ResolutionBasis.PATTERN
        assert decision.matched_permissions[0].resource == "wallets/*"

    def test_no_candidates_is_default_deny(self) -> None:
        decision = resolve_candidates("u1", Action.WRITE, "admin/settings", [])

        assert decision.outcome is Outcome.DENY
        assert decision.reason == "no permissions found for write on admin/settings"
        assert decision.matched_permissions == ()
        assert decision.basis is ResolutionBasis.NO_MATCH

    def test_broad_deny_beats_exact_allow_by_default(self) -> None:
        resource = "wallets/wallet-123"
        candidates = [
            scored(resource, "wallets/wallet-123", "allow", "write"),
            scored(resource, "wallets/*", "deny", "write"),
        ]

        decision = resolve_candidates("u1", Action.WRITE, resource, candidates)

        assert decision.outcome is Outcome.DENY
        assert decision.reason == "denied by pattern wallets/*"
        assert decision.matched_permissions == (
            MatchedPermission(action=Action.WRITE, resource="wallets/*", effect=Effect.DENY),
        )

    def test_specificity_first_lets_exact_allow_win(self) -> None:
        resource = "wallets/wallet-123"
        candidates = [
            scored(resource, "wallets/wallet-123", "allow", "write"),
            scored(resource, "wallets/*", "deny", "write"),
        ]

        decision = resolve_candidates(
            "u1", Action.WRITE, resource, candidates, ConflictStrategy.SPECIFICITY_FIRST
        )

        assert decision.outcome is Outcome.ALLOW
        assert decision.reason == "explicitly granted write on wallets/wallet-123"

    @pytest.mark.parametrize("strategy", list(ConflictStrategy))
    def test_deny_wins_a_tie(self, strategy: ConflictStrategy) -> None:
        resource = "wallets/wallet-9"
        candidates = [
            scored(resource, "wallets/*", "allow"),
            scored(resource, "wallets/*", "deny"),
        ]

        decision = resolve_candidates("u1", Action.READ, resource, candidates, strategy)

        assert decision.outcome is Outcome.DENY
        assert decision.matched_permissions[0].effect is Effect.DENY

    def test_exact_deny(self) -> None:
        decision = resolve_candidates(
            "user123", Action.DELETE, "transactions", [scored("transactions", "transactions", "deny", "delete")]
        )

        assert decision.outcome is Outcome.DENY
        assert decision.reason == "explicitly denied delete on transactions"
        assert decision.basis is ResolutionBasis.EXACT

    def test_global_phrasing(self) -> None:
        resource = "accounts/acc-1"
        granted = resolve_candidates("u1", Action.READ, resource, [scored(resource, "*", "allow")])
        denied = resolve_candidates("u1", Action.READ, resource, [scored(resource, "*", "deny")])

        assert granted.reason == "globally granted"
        assert granted.basis is ResolutionBasis.GLOBAL
        assert denied.reason == "globally denied"
        assert denied.basis is ResolutionBasis.GLOBAL

    def test_matched_permissions_is_a_single_record(self) -> None:
        resource = "wallets/wallet-123/transactions/txn-456"
        candidates = [
            scored(resource, "*", "allow"),
            scored(resource, "wallets/*", "allow"),
            scored(resource, "wallets/wallet-123/*", "allow"),
        ]

        decision = resolve_candidates("u1", Action.READ, resource, candidates)

        assert len(decision.matched_permissions) == 1
        assert decision.matched_permissions[0].resource == "wallets/wallet-123/*"


@pytest.mark.unit
def test_decision_to_dict() -> None:
    resource = "wallets/wallet-123"
    decision = resolve_candidates("u1", Action.READ, resource, [scored(resource, "wallets/*", "allow")])

    assert decision.allowed is True
    assert decision.to_dict() == {
        "decision": "ALLOW",
        "user_id": "u1",
        "reason": "granted by pattern wallets/*",
        "matched_permissions": [{"action": "read", "resource": "wallets/*", "effect": "allow"}],
    }
