"""Authorization decision service.

Resolves ALLOW/DENY for (user, action, resource) against stored wildcard
permission patterns, with deny-first conflict resolution and fail-secure
error handling.
"""

__version__ = "1.0.0"
