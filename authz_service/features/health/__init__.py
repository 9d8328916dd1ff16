"""Liveness and database connectivity check."""
