"""Tests for specificity scoring."""

from __future__ import annotations

import math

import pytest

from authz_service.core.resolution import GLOBAL_SCORE, SpecificityScore, generate_patterns, score

RESOURCE = "wallets/wallet-123/transactions/txn-456"


@pytest.mark.unit
class TestScore:
    def test_exact_match(self) -> None:
        assert score("wallets/wallet-123", "wallets/wallet-123") == (1, 2, 0)

    def test_trailing_wildcard(self) -> None:
        assert score("wallets/wallet-123", "wallets/*") == (0, 1, -1)

    def test_two_wildcards(self) -> None:
        assert score(RESOURCE, "wallets/*/transactions/*") == (0, 2, -2)

    def test_global_is_sentinel(self) -> None:
        result = score(RESOURCE, "*")

        assert result == GLOBAL_SCORE
        assert result.exactness == 0
        assert result.specificity == 0
        assert math.isinf(result.negated_wildcards)
        assert result.negated_wildcards < 0

    def test_global_score_does_not_depend_on_resource(self) -> None:
        assert score("*", "*") == score("a/b/c", "*") == GLOBAL_SCORE

    def test_returns_named_tuple(self) -> None:
        result = score(RESOURCE, RESOURCE)

        assert isinstance(result, SpecificityScore)
        assert str(result) == "(1, 4, 0)"

    @pytest.mark.parametrize(
        "resource",
        ["transactions", "wallets/wallet-123", RESOURCE, "a/b/c/d/e/f"],
    )
    def test_exact_dominates_every_other_generated_pattern(self, resource: str) -> None:
        exact = score(resource, resource)

        for pattern in generate_patterns(resource):
            if pattern != resource:
                assert exact > score(resource, pattern)

    def test_more_literal_segments_rank_higher(self) -> None:
        assert score(RESOURCE, "wallets/wallet-123/*") > score(RESOURCE, "wallets/*")
        assert score(RESOURCE, "wallets/*/txn-456") > score(RESOURCE, "wallets/*/transactions/*")

    def test_fewer_wildcards_break_specificity_ties(self) -> None:
        assert score(RESOURCE, "wallets/*/txn-456") > score(RESOURCE, "wallets/*/transactions/*")
        assert score(RESOURCE, "wallets/*/txn-456")[1] == score(RESOURCE, "wallets/*/transactions/*")[1]

    def test_any_pattern_outranks_global(self) -> None:
        for pattern in generate_patterns(RESOURCE)[:-1]:
            assert score(RESOURCE, pattern) > GLOBAL_SCORE
