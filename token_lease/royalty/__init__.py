"""Royalty calculation and configuration validation."""

from .calculator import (
    MAX_ROYALTY_PERCENTAGE,
    RoyaltyInfo,
    compute_royalty,
    supports_royalties,
    validate_config,
    validate_royalty_percentage,
)

__all__ = [
    "MAX_ROYALTY_PERCENTAGE",
    "RoyaltyInfo",
    "compute_royalty",
    "supports_royalties",
    "validate_config",
    "validate_royalty_percentage",
]
