"""Tests for candidate pattern generation."""

from __future__ import annotations

import pytest

from authz_service.core.resolution import generate_patterns


@pytest.mark.unit
class TestGeneratePatterns:
    def test_four_segment_resource(self) -> None:
        patterns = generate_patterns("wallets/wallet-123/transactions/txn-456")

        assert patterns == (
            "wallets/wallet-123/transactions/txn-456",
            "wallets/wallet-123/transactions/*",
            "wallets/wallet-123/*",
            "wallets/*",
            "wallets/*/txn-456",
            "wallets/*/transactions/txn-456",
            "wallets/wallet-123/*/txn-456",
            "wallets/*/transactions/*",
            "*",
        )

    def test_single_segment(self) -> None:
        assert generate_patterns("transactions") == ("transactions", "*")

    def test_two_segments(self) -> None:
        assert set(generate_patterns("wallets/wallet-789")) == {
            "wallets/wallet-789",
            "wallets/*",
            "*",
        }

    def test_three_segments_has_only_the_collapsed_middle_wildcard(self) -> None:
        assert set(generate_patterns("wallets/wallet-789/transactions")) == {
            "wallets/wallet-789/transactions",
            "wallets/wallet-789/*",
            "wallets/*",
            "wallets/*/transactions",
            "*",
        }

    def test_five_segments(self) -> None:
        patterns = set(generate_patterns("a/b/c/d/e"))

        assert patterns == {
            "a/b/c/d/e",
            # trailing wildcards
            "a/b/c/d/*",
            "a/b/c/*",
            "a/b/*",
            "a/*",
            # first and last literal
            "a/*/e",
            # one internal wildcard
            "a/*/c/d/e",
            "a/b/*/d/e",
            "a/b/c/*/e",
            # internal plus trailing wildcard
            "a/*/c/d/*",
            "a/b/*/d/*",
            "*",
        }

    def test_global_resource(self) -> None:
        assert generate_patterns("*") == ("*",)

    def test_collapsed_duplicates(self) -> None:
        patterns = generate_patterns("a/*/c")

        assert len(patterns) == len(set(patterns))
        assert patterns.count("a/*/c") == 1

    @pytest.mark.parametrize(
        "resource",
        [
            "transactions",
            "wallets/wallet-123",
            "wallets/wallet-123/transactions",
            "wallets/wallet-123/transactions/txn-456",
            "a/b/c/d/e/f/g",
        ],
    )
    def test_contains_exact_and_global(self, resource: str) -> None:
        patterns = generate_patterns(resource)

        assert patterns[0] == resource
        assert patterns[-1] == "*"

    def test_is_deterministic(self) -> None:
        first = generate_patterns("wallets/wallet-123/transactions/txn-456")
        generate_patterns.cache_clear()
        second = generate_patterns("wallets/wallet-123/transactions/txn-456")

        assert first == second

    def test_stored_seed_patterns_are_reachable(self) -> None:
        assert "wallets/*/transactions/*" in generate_patterns("wallets/w-1/transactions/t-9")
        assert "wallets/*" in generate_patterns("wallets/wallet-456/transactions/txn-789")
