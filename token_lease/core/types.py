"""Token, approval and collection datatypes."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from .expiration import BlockInfo, Expiration


class LeaseState(str, Enum):
    """Lease lifecycle of a single token."""

    ACTIVE_UNLEASED = "ACTIVE_UNLEASED"
    ACTIVE_LEASED = "ACTIVE_LEASED"
    EXPIRED = "EXPIRED"


@dataclass(frozen=True)
class Trait:
    trait_type: str
    value: str
    display_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"display_type": self.display_type, "trait_type": self.trait_type, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Trait":
        return cls(trait_type=data["trait_type"], value=data["value"], display_type=data.get("display_type"))


@dataclass(frozen=True)
class Metadata:
    """Token-level extension carrying display fields, royalties and the lease."""

    image: Optional[str] = None
    image_data: Optional[str] = None
    external_url: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
    attributes: Optional[List[Trait]] = None
    background_color: Optional[str] = None
    animation_url: Optional[str] = None
    youtube_url: Optional[str] = None
    # Copied from the collection config at mint time.
    royalty_percentage: Optional[int] = None
    royalty_payment_address: Optional[str] = None
    expires: Optional[Expiration] = None

    @property
    def has_royalty_fields(self) -> bool:
        return self.royalty_percentage is not None or self.royalty_payment_address is not None

    def with_royalties(self, config: "CollectionConfig") -> "Metadata":
        return replace(
            self,
            royalty_percentage=config.royalty_percentage,
            royalty_payment_address=config.royalty_payment_address,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "image": self.image,
            "image_data": self.image_data,
            "external_url": self.external_url,
            "description": self.description,
            "name": self.name,
            "attributes": [t.to_dict() for t in self.attributes] if self.attributes is not None else None,
            "background_color": self.background_color,
            "animation_url": self.animation_url,
            "youtube_url": self.youtube_url,
            "royalty_percentage": self.royalty_percentage,
            "royalty_payment_address": self.royalty_payment_address,
            "expires": self.expires.to_dict() if self.expires is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Metadata":
        attributes = data.get("attributes")
        expires = data.get("expires")
        return cls(
            image=data.get("image"),
            image_data=data.get("image_data"),
            external_url=data.get("external_url"),
            description=data.get("description"),
            name=data.get("name"),
            attributes=[Trait.from_dict(a) for a in attributes] if attributes is not None else None,
            background_color=data.get("background_color"),
            animation_url=data.get("animation_url"),
            youtube_url=data.get("youtube_url"),
            royalty_percentage=data.get("royalty_percentage"),
            royalty_payment_address=data.get("royalty_payment_address"),
            expires=Expiration.from_dict(expires) if expires is not None else None,
        )


@dataclass(frozen=True)
class Approval:
    """Per-token delegate allowed to send until ``expires``."""

    spender: str
    expires: Expiration = field(default_factory=Expiration.never)

    def is_expired(self, now: BlockInfo) -> bool:
        return self.expires.is_expired(now)

    def to_dict(self) -> Dict[str, Any]:
        return {"spender": self.spender, "expires": self.expires.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Approval":
        return cls(spender=data["spender"], expires=Expiration.from_dict(data.get("expires")))


@dataclass
class TokenInfo:
    """Stored token record."""

    token_id: str
    owner: str
    approvals: List[Approval] = field(default_factory=list)
    token_uri: Optional[str] = None
    extension: Optional[Metadata] = None

    @property
    def lease(self) -> Expiration:
        """Token expiration, with a missing extension or field read as never."""
        if self.extension is None or self.extension.expires is None:
            return Expiration.never()
        return self.extension.expires

    def lease_state(self, now: BlockInfo) -> LeaseState:
        lease = self.lease
        if lease.is_never:
            return LeaseState.ACTIVE_UNLEASED
        if lease.is_expired(now):
            return LeaseState.EXPIRED
        return LeaseState.ACTIVE_LEASED

    def live_approvals(self, now: BlockInfo) -> List[Approval]:
        return [a for a in self.approvals if not a.is_expired(now)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token_id": self.token_id,
            "owner": self.owner,
            "approvals": [a.to_dict() for a in self.approvals],
            "token_uri": self.token_uri,
            "extension": self.extension.to_dict() if self.extension is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenInfo":
        extension = data.get("extension")
        return cls(
            token_id=data["token_id"],
            owner=data["owner"],
            approvals=[Approval.from_dict(a) for a in data.get("approvals") or []],
            token_uri=data.get("token_uri"),
            extension=Metadata.from_dict(extension) if extension is not None else None,
        )


@dataclass(frozen=True)
class CollectionConfig:
    """Collection-wide royalty settings inherited by every minted token."""

    royalty_percentage: Optional[int] = None
    royalty_payment_address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "royalty_percentage": self.royalty_percentage,
            "royalty_payment_address": self.royalty_payment_address,
        }


@dataclass(frozen=True)
class ContractInfo:
    name: str
    symbol: str
    creator: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "symbol": self.symbol, "creator": self.creator}
