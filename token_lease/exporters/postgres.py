"""PostgreSQL exporter for collection audit records."""

from __future__ import annotations

import json
from typing import Optional

import asyncpg

from ..collection.records import ActionRecord
from .base import AuditExporter


INSERT_SQL = """
INSERT INTO lease_audit_log (
    record_id,
    collection,
    action,
    sender,
    token_id,
    attributes,
    created_at
)
VALUES ($1::uuid, $2, $3, $4, $5, $6::jsonb, $7)
"""


class PostgresAuditExporter(AuditExporter):
    """Exporter that persists action records into PostgreSQL using ``asyncpg``."""

    def __init__(
        self,
        dsn: Optional[str] = None,
        *,
        pool: Optional[asyncpg.Pool] = None,
        min_size: int = 1,
        max_size: int = 10,
    ) -> None:
        self._dsn = dsn
        self._pool = pool
        self._min_size = min_size
        self._max_size = max_size

    async def connect(self) -> None:
        """Initialize a connection pool if one was not supplied."""
        if self._pool is not None:
            return
        if not self._dsn:
            raise ValueError("Either `dsn` or `pool` must be provided for PostgresAuditExporter.")

        self._pool = await asyncpg.create_pool(
            dsn=self._dsn,
            min_size=self._min_size,
            max_size=self._max_size,
        )

    async def export(self, record: ActionRecord, *, collection: str) -> None:
        """Insert one action record."""
        if self._pool is None:
            await self.connect()

        assert self._pool is not None
        payload = record.to_dict()

        async with self._pool.acquire() as conn:
            await conn.execute(
                INSERT_SQL,
                payload["record_id"],
                collection,
                payload["action"],
                payload["sender"],
                record.token_id,
                json.dumps({"attributes": payload["attributes"], "messages": payload["messages"]}),
                payload["created_at"],
            )

    async def close(self) -> None:
        """Close the underlying pool if it exists."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
