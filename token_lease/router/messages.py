"""Typed execute and query messages accepted by the router."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.expiration import Expiration
from ..core.types import CollectionConfig, Metadata


@dataclass(frozen=True)
class Mint:
    token_id: str
    owner: str
    token_uri: Optional[str] = None
    extension: Optional[Metadata] = None


@dataclass(frozen=True)
class Approve:
    spender: str
    token_id: str
    expires: Optional[Expiration] = None


@dataclass(frozen=True)
class Revoke:
    spender: str
    token_id: str


@dataclass(frozen=True)
class ApproveAll:
    operator: str
    expires: Optional[Expiration] = None


@dataclass(frozen=True)
class RevokeAll:
    operator: str


@dataclass(frozen=True)
class TransferNft:
    recipient: str
    token_id: str


@dataclass(frozen=True)
class SendNft:
    contract: str
    token_id: str
    msg: bytes = b""


@dataclass(frozen=True)
class Burn:
    token_id: str


@dataclass(frozen=True)
class UpdateConfig:
    config: CollectionConfig


ExecuteMsg = Union[Mint, Approve, Revoke, ApproveAll, RevokeAll, TransferNft, SendNft, Burn, UpdateConfig]


@dataclass(frozen=True)
class RoyaltyInfo:
    """Called on sale to find the royalty owed for ``token_id``."""

    token_id: str
    sale_price: int


@dataclass(frozen=True)
class CheckRoyalties:
    pass


@dataclass(frozen=True)
class ContractInfoQuery:
    pass


@dataclass(frozen=True)
class OwnerOf:
    token_id: str
    include_expired: bool = False


@dataclass(frozen=True)
class NftInfo:
    token_id: str


@dataclass(frozen=True)
class NumTokens:
    pass


@dataclass(frozen=True)
class OperatorQuery:
    owner: str
    operator: str
    include_expired: bool = False


QueryMsg = Union[RoyaltyInfo, CheckRoyalties, ContractInfoQuery, OwnerOf, NftInfo, NumTokens, OperatorQuery]
