"""Royalty computation for token sales.

Amounts are computed in integer arithmetic and rounded down; a 10% royalty on
a sale price of 43 is 4. Royalties are tracked per token, so
:func:`supports_royalties` always answers True and marketplaces must check
each token's amount, which may be zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.errors import InvalidConfiguration, InvalidInput
from ..core.types import CollectionConfig, Metadata

MAX_ROYALTY_PERCENTAGE = 100


@dataclass(frozen=True)
class RoyaltyInfo:
    """Beneficiary and amount owed for one sale."""

    address: str
    royalty_amount: int

    def to_dict(self) -> dict:
        return {"address": self.address, "royalty_amount": self.royalty_amount}


def compute_royalty(sale_price: int, metadata: Optional[Metadata]) -> RoyaltyInfo:
    """Return the royalty owed on ``sale_price`` for a token's metadata."""
    if sale_price < 0:
        raise InvalidInput("sale_price must be non-negative.", context={"sale_price": sale_price})
    if metadata is None:
        return RoyaltyInfo(address="", royalty_amount=0)

    percentage = metadata.royalty_percentage or 0
    address = metadata.royalty_payment_address or ""
    return RoyaltyInfo(address=address, royalty_amount=sale_price * percentage // 100)


def supports_royalties() -> bool:
    return True


def validate_royalty_percentage(percentage: Optional[int]) -> None:
    """Reject percentages outside [0, 100] at configuration time."""
    if percentage is None:
        return
    if isinstance(percentage, bool) or not isinstance(percentage, int):
        raise InvalidConfiguration(
            "Royalty percentage must be an integer",
            context={"royalty_percentage": percentage},
        )
    if percentage < 0 or percentage > MAX_ROYALTY_PERCENTAGE:
        raise InvalidConfiguration(
            "Royalty percentage cannot be greater than 100",
            context={"royalty_percentage": percentage},
        )


def validate_config(config: CollectionConfig) -> CollectionConfig:
    validate_royalty_percentage(config.royalty_percentage)
    return config
