"""Core token lease datatypes and errors."""

from .errors import (
    AlreadyInstantiated,
    ErrorCode,
    Expired,
    InvalidConfiguration,
    InvalidInput,
    NotFound,
    TokenAlreadyExists,
    TokenLeaseError,
    Unauthorized,
)
from .expiration import BlockInfo, Expiration, ExpirationKind
from .types import Approval, CollectionConfig, ContractInfo, LeaseState, Metadata, TokenInfo, Trait

__all__ = [
    "AlreadyInstantiated",
    "Approval",
    "BlockInfo",
    "CollectionConfig",
    "ContractInfo",
    "ErrorCode",
    "Expiration",
    "ExpirationKind",
    "Expired",
    "InvalidConfiguration",
    "InvalidInput",
    "LeaseState",
    "Metadata",
    "NotFound",
    "TokenAlreadyExists",
    "TokenInfo",
    "TokenLeaseError",
    "Trait",
    "Unauthorized",
]
