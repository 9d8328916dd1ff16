"""Sample permission data.

Covers exact grants, an exact deny, a single-segment wildcard, an exact
write under a read wildcard, a two-wildcard pattern and a global admin.
"""

from __future__ import annotations

from authz_service.core.resolution import Action, Effect, PermissionRecord

_ROWS: tuple[tuple[str, str, str, str], ...] = (
    ("user123", "read", "transactions", "allow"),
    ("user123", "write", "transactions", "allow"),
    ("user123", "delete", "transactions", "deny"),
    ("user123", "read", "accounts", "allow"),
    ("user456", "read", "wallets/*", "allow"),
    ("user456", "write", "wallets/wallet-789", "allow"),
    ("user456", "read", "wallets/wallet-789/transactions", "allow"),
    ("user789", "write", "wallets/*/transactions/*", "allow"),
    ("admin789", "read", "*", "allow"),
    ("admin789", "write", "*", "allow"),
    ("admin789", "delete", "*", "allow"),
)

SAMPLE_PERMISSIONS: tuple[PermissionRecord, ...] = tuple(
    PermissionRecord(user_id=u, action=Action(a), resource=r, effect=Effect(e))
    for u, a, r, e in _ROWS
)
