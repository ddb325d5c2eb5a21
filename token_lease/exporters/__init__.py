"""Audit exporter implementations."""

from __future__ import annotations

import os
from typing import Optional

from .base import AuditExporter
from .memory import InMemoryAuditExporter

__all__ = ["AuditExporter", "InMemoryAuditExporter", "PostgresAuditExporter", "create_exporter_from_env"]


def create_exporter_from_env() -> Optional[AuditExporter]:
    """Create a Postgres audit exporter if env configured, otherwise none."""
    dsn = os.getenv("TOKEN_LEASE_AUDIT_DSN") or os.getenv("TOKEN_LEASE_PG_DSN") or os.getenv("DATABASE_URL")
    if not dsn:
        return None
    from .postgres import PostgresAuditExporter

    return PostgresAuditExporter(dsn=dsn)


def __getattr__(name: str):
    if name == "PostgresAuditExporter":
        from .postgres import PostgresAuditExporter

        return PostgresAuditExporter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
