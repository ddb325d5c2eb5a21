"""High-level helpers for standing up a time-limited collection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .collection.engine import TimeLimitedCollection
from .collection.storage import TokenStore, create_store_from_env
from .exporters.base import AuditExporter
from .policy.admin import AdministratorOracle, StaticAdministrator
from .router.dispatcher import MessageRouter
from .utils.time import TimeSource


@dataclass(frozen=True)
class InstantiateMsg:
    """Collection settings supplied once at instantiation.

    ``minter`` becomes the administrator: the only address allowed to mint,
    and the one that reclaims tokens whose lease has expired.
    """

    name: str
    symbol: str
    minter: str
    royalty_percentage: Optional[int] = None
    royalty_payment_address: Optional[str] = None
    creator: Optional[str] = None


def build_router(
    minter: str,
    *,
    store: Optional[TokenStore] = None,
    admin: Optional[AdministratorOracle] = None,
    time_source: TimeSource,
    exporter: Optional[AuditExporter] = None,
    collection_name: str = "default",
) -> MessageRouter:
    """Create a ready-to-use router over a collection."""
    collection = TimeLimitedCollection(
        store=store or create_store_from_env(),
        admin=admin or StaticAdministrator(minter),
        time_source=time_source,
    )
    return MessageRouter(collection, exporter=exporter, collection_name=collection_name)


async def instantiate_collection(
    msg: InstantiateMsg,
    *,
    sender: Optional[str] = None,
    store: Optional[TokenStore] = None,
    time_source: TimeSource,
    exporter: Optional[AuditExporter] = None,
    collection_name: str = "default",
) -> MessageRouter:
    """Build a router and persist the collection's name, symbol and royalty config."""
    router = build_router(
        msg.minter,
        store=store,
        time_source=time_source,
        exporter=exporter,
        collection_name=collection_name,
    )
    record = await router.collection.instantiate(
        sender or msg.minter,
        name=msg.name,
        symbol=msg.symbol,
        royalty_percentage=msg.royalty_percentage,
        royalty_payment_address=msg.royalty_payment_address,
        creator=msg.creator,
    )
    if exporter:
        await exporter.export(record, collection=collection_name)
    return router
