"""Message routing for collection execute and query calls."""

from .dispatcher import MessageRouter
from .messages import (
    Approve,
    ApproveAll,
    Burn,
    CheckRoyalties,
    ContractInfoQuery,
    ExecuteMsg,
    Mint,
    NftInfo,
    NumTokens,
    OperatorQuery,
    OwnerOf,
    QueryMsg,
    Revoke,
    RevokeAll,
    RoyaltyInfo,
    SendNft,
    TransferNft,
    UpdateConfig,
)
from .templates import action_response_template, error_response_template

__all__ = [
    "MessageRouter",
    "Approve",
    "ApproveAll",
    "Burn",
    "CheckRoyalties",
    "ContractInfoQuery",
    "ExecuteMsg",
    "Mint",
    "NftInfo",
    "NumTokens",
    "OperatorQuery",
    "OwnerOf",
    "QueryMsg",
    "Revoke",
    "RevokeAll",
    "RoyaltyInfo",
    "SendNft",
    "TransferNft",
    "UpdateConfig",
    "action_response_template",
    "error_response_template",
]
