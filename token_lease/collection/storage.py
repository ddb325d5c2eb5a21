"""Storage adapters for token records, operator grants and collection settings."""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from typing import Optional

import asyncpg

from ..core.errors import TokenAlreadyExists
from ..core.expiration import Expiration
from ..core.types import CollectionConfig, ContractInfo, TokenInfo


class TokenStore(ABC):
    """Abstract storage backend for a single collection."""

    @abstractmethod
    async def load_token(self, token_id: str) -> Optional[TokenInfo]:
        """Fetch a token record, or None if it does not exist."""

    @abstractmethod
    async def save_token(self, token: TokenInfo) -> None:
        """Overwrite an existing token record."""

    @abstractmethod
    async def add_token(self, token: TokenInfo) -> None:
        """Insert a new token record and increment the supply counter.

        Raises :class:`TokenAlreadyExists` if the id is taken.
        """

    @abstractmethod
    async def remove_token(self, token_id: str) -> None:
        """Delete a token record and decrement the supply counter."""

    @abstractmethod
    async def token_count(self) -> int:
        """Return the number of live tokens."""

    @abstractmethod
    async def load_operator(self, owner: str, operator: str) -> Optional[Expiration]:
        """Fetch the blanket grant from ``owner`` to ``operator``."""

    @abstractmethod
    async def save_operator(self, owner: str, operator: str, expires: Expiration) -> None:
        """Create or overwrite a blanket grant."""

    @abstractmethod
    async def remove_operator(self, owner: str, operator: str) -> None:
        """Delete a blanket grant; absent grants are ignored."""

    @abstractmethod
    async def load_contract_info(self) -> Optional[ContractInfo]:
        """Fetch collection name, symbol and creator."""

    @abstractmethod
    async def save_contract_info(self, info: ContractInfo) -> None:
        """Persist collection name, symbol and creator."""

    @abstractmethod
    async def load_config(self) -> CollectionConfig:
        """Fetch the royalty configuration."""

    @abstractmethod
    async def save_config(self, config: CollectionConfig) -> None:
        """Persist the royalty configuration."""


class InMemoryTokenStore(TokenStore):
    """In-memory storage fallback backend.

    Records are stored as dicts so callers never share mutable state with the
    store.
    """

    def __init__(self) -> None:
        self.tokens: dict[str, dict] = {}
        self.operators: dict[tuple[str, str], dict] = {}
        self.contract_info: Optional[ContractInfo] = None
        self.config = CollectionConfig()
        self.count = 0

    async def load_token(self, token_id: str) -> Optional[TokenInfo]:
        data = self.tokens.get(token_id)
        return TokenInfo.from_dict(data) if data is not None else None

    async def save_token(self, token: TokenInfo) -> None:
        self.tokens[token.token_id] = token.to_dict()

    async def add_token(self, token: TokenInfo) -> None:
        if token.token_id in self.tokens:
            raise TokenAlreadyExists(f"Token {token.token_id!r} already claimed", context={"token_id": token.token_id})
        self.tokens[token.token_id] = token.to_dict()
        self.count += 1

    async def remove_token(self, token_id: str) -> None:
        if self.tokens.pop(token_id, None) is not None:
            self.count -= 1

    async def token_count(self) -> int:
        return self.count

    async def load_operator(self, owner: str, operator: str) -> Optional[Expiration]:
        data = self.operators.get((owner, operator))
        return Expiration.from_dict(data) if data is not None else None

    async def save_operator(self, owner: str, operator: str, expires: Expiration) -> None:
        self.operators[(owner, operator)] = expires.to_dict()

    async def remove_operator(self, owner: str, operator: str) -> None:
        self.operators.pop((owner, operator), None)

    async def load_contract_info(self) -> Optional[ContractInfo]:
        return self.contract_info

    async def save_contract_info(self, info: ContractInfo) -> None:
        self.contract_info = info

    async def load_config(self) -> CollectionConfig:
        return self.config

    async def save_config(self, config: CollectionConfig) -> None:
        self.config = config


class PostgresTokenStore(TokenStore):
    """Postgres-backed storage using asyncpg; schema in ``schema/postgres.sql``."""

    def __init__(self, dsn: str, *, collection: str = "default") -> None:
        self.dsn = dsn
        self.collection = collection
        self.pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self.pool is None:
            self.pool = await asyncpg.create_pool(dsn=self.dsn, min_size=1, max_size=4)

    async def close(self) -> None:
        if self.pool is not None:
            await self.pool.close()
            self.pool = None

    async def load_token(self, token_id: str) -> Optional[TokenInfo]:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT token_id, owner, approvals, token_uri, extension FROM lease_tokens WHERE collection=$1 AND token_id=$2",
                self.collection,
                token_id,
            )
            if row is None:
                return None
            return TokenInfo.from_dict(
                {
                    "token_id": row["token_id"],
                    "owner": row["owner"],
                    "approvals": json.loads(row["approvals"]),
                    "token_uri": row["token_uri"],
                    "extension": json.loads(row["extension"]) if row["extension"] is not None else None,
                }
            )

    async def save_token(self, token: TokenInfo) -> None:
        await self.connect()
        assert self.pool is not None
        payload = token.to_dict()
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                UPDATE lease_tokens
                SET owner = $3, approvals = $4::jsonb, token_uri = $5, extension = $6::jsonb
                WHERE collection = $1 AND token_id = $2
                """,
                self.collection,
                token.token_id,
                token.owner,
                json.dumps(payload["approvals"]),
                token.token_uri,
                json.dumps(payload["extension"]) if payload["extension"] is not None else None,
            )

    async def add_token(self, token: TokenInfo) -> None:
        await self.connect()
        assert self.pool is not None
        payload = token.to_dict()
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                try:
                    await conn.execute(
                        """
                        INSERT INTO lease_tokens (collection, token_id, owner, approvals, token_uri, extension)
                        VALUES ($1, $2, $3, $4::jsonb, $5, $6::jsonb)
                        """,
                        self.collection,
                        token.token_id,
                        token.owner,
                        json.dumps(payload["approvals"]),
                        token.token_uri,
                        json.dumps(payload["extension"]) if payload["extension"] is not None else None,
                    )
                except asyncpg.UniqueViolationError as exc:
                    raise TokenAlreadyExists(
                        f"Token {token.token_id!r} already claimed", context={"token_id": token.token_id}
                    ) from exc
                await conn.execute(
                    "UPDATE lease_collections SET token_count = token_count + 1 WHERE collection=$1",
                    self.collection,
                )

    async def remove_token(self, token_id: str) -> None:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                removed = await conn.fetchrow(
                    "DELETE FROM lease_tokens WHERE collection=$1 AND token_id=$2 RETURNING token_id",
                    self.collection,
                    token_id,
                )
                if removed is not None:
                    await conn.execute(
                        "UPDATE lease_collections SET token_count = token_count - 1 WHERE collection=$1",
                        self.collection,
                    )

    async def token_count(self) -> int:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow("SELECT token_count FROM lease_collections WHERE collection=$1", self.collection)
            return int(row["token_count"]) if row else 0

    async def load_operator(self, owner: str, operator: str) -> Optional[Expiration]:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT expires FROM lease_operators WHERE collection=$1 AND owner=$2 AND operator=$3",
                self.collection,
                owner,
                operator,
            )
            return Expiration.from_dict(json.loads(row["expires"])) if row else None

    async def save_operator(self, owner: str, operator: str, expires: Expiration) -> None:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO lease_operators (collection, owner, operator, expires)
                VALUES ($1, $2, $3, $4::jsonb)
                ON CONFLICT (collection, owner, operator) DO UPDATE SET expires = EXCLUDED.expires
                """,
                self.collection,
                owner,
                operator,
                json.dumps(expires.to_dict()),
            )

    async def remove_operator(self, owner: str, operator: str) -> None:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            await conn.execute(
                "DELETE FROM lease_operators WHERE collection=$1 AND owner=$2 AND operator=$3",
                self.collection,
                owner,
                operator,
            )

    async def load_contract_info(self) -> Optional[ContractInfo]:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT name, symbol, creator FROM lease_collections WHERE collection=$1",
                self.collection,
            )
            if row is None:
                return None
            return ContractInfo(name=row["name"], symbol=row["symbol"], creator=row["creator"])

    async def save_contract_info(self, info: ContractInfo) -> None:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO lease_collections (collection, name, symbol, creator, token_count)
                VALUES ($1, $2, $3, $4, 0)
                ON CONFLICT (collection) DO UPDATE
                SET name = EXCLUDED.name, symbol = EXCLUDED.symbol, creator = EXCLUDED.creator
                """,
                self.collection,
                info.name,
                info.symbol,
                info.creator,
            )

    async def load_config(self) -> CollectionConfig:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT royalty_percentage, royalty_payment_address FROM lease_collections WHERE collection=$1",
                self.collection,
            )
            if row is None:
                return CollectionConfig()
            return CollectionConfig(
                royalty_percentage=row["royalty_percentage"],
                royalty_payment_address=row["royalty_payment_address"],
            )

    async def save_config(self, config: CollectionConfig) -> None:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                UPDATE lease_collections
                SET royalty_percentage = $2, royalty_payment_address = $3
                WHERE collection = $1
                """,
                self.collection,
                config.royalty_percentage,
                config.royalty_payment_address,
            )


def create_store_from_env() -> TokenStore:
    """Create Postgres storage if env configured, otherwise in-memory."""
    dsn = os.getenv("TOKEN_LEASE_PG_DSN") or os.getenv("DATABASE_URL")
    if dsn:
        return PostgresTokenStore(dsn=dsn, collection=os.getenv("TOKEN_LEASE_COLLECTION", "default"))
    return InMemoryTokenStore()
