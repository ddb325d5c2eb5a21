"""Token Lease package.

Time-leased ownership and authorization for uniquely identified tokens, with
administrator reclaim once a lease expires and per-sale royalty computation.
"""

from .collection import InMemoryTokenStore, TimeLimitedCollection
from .core import BlockInfo, CollectionConfig, Expiration, Metadata
from .policy import AuthorizationOracle, StaticAdministrator
from .royalty import compute_royalty
from .service import InstantiateMsg, build_router, instantiate_collection

__all__ = [
    "AuthorizationOracle",
    "BlockInfo",
    "CollectionConfig",
    "Expiration",
    "InMemoryTokenStore",
    "InstantiateMsg",
    "Metadata",
    "StaticAdministrator",
    "TimeLimitedCollection",
    "build_router",
    "compute_royalty",
    "instantiate_collection",
]
