"""Time-limited collection engine and its storage adapters."""

from .engine import TimeLimitedCollection
from .records import ActionRecord, NftInfoResponse, OwnerOfResponse, ReceiveMessage
from .storage import InMemoryTokenStore, PostgresTokenStore, TokenStore, create_store_from_env

__all__ = [
    "TimeLimitedCollection",
    "ActionRecord",
    "NftInfoResponse",
    "OwnerOfResponse",
    "ReceiveMessage",
    "InMemoryTokenStore",
    "PostgresTokenStore",
    "TokenStore",
    "create_store_from_env",
]
