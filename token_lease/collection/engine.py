"""Time-limited token collection: approvals, transfers, burns and royalties."""

from __future__ import annotations

import asyncio
from typing import Optional

from ..core.errors import (
    AlreadyInstantiated,
    Expired,
    InvalidConfiguration,
    InvalidInput,
    NotFound,
    TokenAlreadyExists,
    Unauthorized,
)
from ..core.expiration import BlockInfo, Expiration
from ..core.types import Approval, CollectionConfig, ContractInfo, Metadata, TokenInfo
from ..policy.admin import AdministratorOracle
from ..policy.engine import AuthorizationOracle
from ..policy.types import AuthorizationResult
from ..royalty.calculator import RoyaltyInfo, compute_royalty, supports_royalties, validate_config
from ..utils.time import TimeSource
from .records import ActionRecord, NftInfoResponse, OwnerOfResponse, ReceiveMessage
from .storage import TokenStore


def _require_address(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise InvalidInput(f"`{field_name}` must be a non-empty address.", context={"field": field_name})
    return value


class TimeLimitedCollection:
    """Mutations and queries over one collection of leasable tokens.

    Each mutation reads ``now`` once, asks the :class:`AuthorizationOracle`,
    and performs at most one store write. Denials raise before anything is
    written, so a failed call leaves the store unchanged.
    """

    def __init__(
        self,
        *,
        store: TokenStore,
        admin: AdministratorOracle,
        time_source: TimeSource,
    ) -> None:
        self.store = store
        self.admin = admin
        self.time_source = time_source
        self.oracle = AuthorizationOracle(admin)
        self._lock = asyncio.Lock()

    def _now(self, now: Optional[BlockInfo]) -> BlockInfo:
        return now if now is not None else self.time_source.now()

    async def _load(self, token_id: str) -> TokenInfo:
        token = await self.store.load_token(token_id)
        if token is None:
            raise NotFound(f"Token {token_id!r} not found", context={"token_id": token_id})
        return token

    def _require_admin(self, sender: str, action: str) -> None:
        if not self.admin.is_admin(sender):
            raise Unauthorized(
                f"Only the administrator may {action}",
                context={"sender": sender, "action": action},
            )

    @staticmethod
    def _enforce(result: AuthorizationResult, *, sender: str, token_id: str) -> None:
        if not result.allowed:
            raise Unauthorized(
                "Caller is not the token owner",
                context={"sender": sender, "token_id": token_id, "permission": result.permission.value},
            )

    async def _check_can_approve(self, token: TokenInfo, sender: str, now: BlockInfo) -> None:
        grant = await self.store.load_operator(token.owner, sender)
        result = self.oracle.check_can_approve(token=token, sender=sender, now=now, operator_grant=grant)
        self._enforce(result, sender=sender, token_id=token.token_id)

    async def _check_can_send(self, token: TokenInfo, sender: str, now: BlockInfo) -> None:
        grant = await self.store.load_operator(token.owner, sender)
        result = self.oracle.check_can_send(token=token, sender=sender, now=now, operator_grant=grant)
        self._enforce(result, sender=sender, token_id=token.token_id)

    # -- collection lifecycle -------------------------------------------------

    async def instantiate(
        self,
        sender: str,
        *,
        name: str,
        symbol: str,
        royalty_percentage: Optional[int] = None,
        royalty_payment_address: Optional[str] = None,
        creator: Optional[str] = None,
    ) -> ActionRecord:
        config = validate_config(
            CollectionConfig(royalty_percentage=royalty_percentage, royalty_payment_address=royalty_payment_address)
        )
        async with self._lock:
            if await self.store.load_contract_info() is not None:
                raise AlreadyInstantiated("Collection is already instantiated", context={"sender": sender})
            await self.store.save_contract_info(ContractInfo(name=name, symbol=symbol, creator=creator))
            await self.store.save_config(config)
        return ActionRecord.build("instantiate", sender, minter=self.admin.current_admin(), name=name, symbol=symbol)

    async def update_config(self, sender: str, *, config: CollectionConfig) -> ActionRecord:
        """Replace the royalty config; tokens already minted keep their values."""
        self._require_admin(sender, "update the collection config")
        validate_config(config)
        async with self._lock:
            await self.store.save_config(config)
        return ActionRecord.build(
            "update_config",
            sender,
            royalty_percentage="" if config.royalty_percentage is None else str(config.royalty_percentage),
            royalty_payment_address=config.royalty_payment_address or "",
        )

    async def mint(
        self,
        sender: str,
        *,
        token_id: str,
        owner: str,
        token_uri: Optional[str] = None,
        extension: Optional[Metadata] = None,
    ) -> ActionRecord:
        self._require_admin(sender, "mint")
        _require_address(owner, "owner")
        if extension is not None and extension.has_royalty_fields:
            raise InvalidConfiguration(
                "Cannot set royalty information in mint message",
                context={"token_id": token_id},
            )

        async with self._lock:
            if await self.store.load_contract_info() is None:
                raise NotFound("Collection has not been instantiated", context={"token_id": token_id})
            if await self.store.load_token(token_id) is not None:
                raise TokenAlreadyExists(f"Token {token_id!r} already claimed", context={"token_id": token_id})
            config = await self.store.load_config()
            token = TokenInfo(
                token_id=token_id,
                owner=owner,
                token_uri=token_uri,
                extension=(extension or Metadata()).with_royalties(config),
            )
            await self.store.add_token(token)

        return ActionRecord.build("mint", sender, owner=owner, token_id=token_id)

    # -- approvals ------------------------------------------------------------

    async def _update_approvals(
        self,
        sender: str,
        *,
        spender: str,
        token_id: str,
        add: bool,
        expires: Optional[Expiration],
        now: BlockInfo,
    ) -> TokenInfo:
        token = await self._load(token_id)
        await self._check_can_approve(token, sender, now)

        approvals = [a for a in token.approvals if a.spender != spender]
        if add:
            expires = expires or Expiration.never()
            if expires.is_expired(now):
                raise Expired("Approval has already expired", context={"expires": expires.to_dict()})
            approvals.append(Approval(spender=spender, expires=expires))

        token.approvals = approvals
        await self.store.save_token(token)
        return token

    async def approve(
        self,
        sender: str,
        *,
        spender: str,
        token_id: str,
        expires: Optional[Expiration] = None,
        now: Optional[BlockInfo] = None,
    ) -> ActionRecord:
        _require_address(spender, "spender")
        async with self._lock:
            await self._update_approvals(
                sender, spender=spender, token_id=token_id, add=True, expires=expires, now=self._now(now)
            )
        return ActionRecord.build("approve", sender, spender=spender, token_id=token_id)

    async def revoke(
        self,
        sender: str,
        *,
        spender: str,
        token_id: str,
        now: Optional[BlockInfo] = None,
    ) -> ActionRecord:
        async with self._lock:
            await self._update_approvals(
                sender, spender=spender, token_id=token_id, add=False, expires=None, now=self._now(now)
            )
        return ActionRecord.build("revoke", sender, spender=spender, token_id=token_id)

    async def approve_all(
        self,
        sender: str,
        *,
        operator: str,
        expires: Optional[Expiration] = None,
        now: Optional[BlockInfo] = None,
    ) -> ActionRecord:
        """Grant ``operator`` send and approve rights over all of the sender's tokens."""
        _require_address(operator, "operator")
        expires = expires or Expiration.never()
        if expires.is_expired(self._now(now)):
            raise Expired("Approval has already expired", context={"expires": expires.to_dict()})
        async with self._lock:
            await self.store.save_operator(sender, operator, expires)
        return ActionRecord.build("approve_all", sender, operator=operator)

    async def revoke_all(self, sender: str, *, operator: str) -> ActionRecord:
        async with self._lock:
            await self.store.remove_operator(sender, operator)
        return ActionRecord.build("revoke_all", sender, operator=operator)

    # -- transfers ------------------------------------------------------------

    async def _transfer(self, sender: str, *, recipient: str, token_id: str, now: BlockInfo) -> TokenInfo:
        token = await self._load(token_id)
        await self._check_can_send(token, sender, now)
        token.owner = recipient
        token.approvals = []
        await self.store.save_token(token)
        return token

    async def transfer_nft(
        self,
        sender: str,
        *,
        recipient: str,
        token_id: str,
        now: Optional[BlockInfo] = None,
    ) -> ActionRecord:
        _require_address(recipient, "recipient")
        async with self._lock:
            await self._transfer(sender, recipient=recipient, token_id=token_id, now=self._now(now))
        return ActionRecord.build("transfer_nft", sender, recipient=recipient, token_id=token_id)

    async def send_nft(
        self,
        sender: str,
        *,
        contract: str,
        token_id: str,
        msg: bytes = b"",
        now: Optional[BlockInfo] = None,
    ) -> ActionRecord:
        """Transfer to ``contract`` and attach the receive notification for it."""
        _require_address(contract, "contract")
        async with self._lock:
            await self._transfer(sender, recipient=contract, token_id=token_id, now=self._now(now))
        receive = ReceiveMessage(contract=contract, sender=sender, token_id=token_id, msg=msg)
        return ActionRecord.build("send_nft", sender, messages=(receive,), recipient=contract, token_id=token_id)

    async def burn(self, sender: str, *, token_id: str, now: Optional[BlockInfo] = None) -> ActionRecord:
        async with self._lock:
            token = await self._load(token_id)
            await self._check_can_send(token, sender, self._now(now))
            await self.store.remove_token(token_id)
        return ActionRecord.build("burn", sender, token_id=token_id)

    # -- queries --------------------------------------------------------------

    async def royalty_info(self, token_id: str, sale_price: int) -> RoyaltyInfo:
        token = await self._load(token_id)
        return compute_royalty(sale_price, token.extension)

    async def check_royalties(self) -> bool:
        return supports_royalties()

    async def contract_info(self) -> ContractInfo:
        info = await self.store.load_contract_info()
        if info is None:
            raise NotFound("Collection has not been instantiated")
        return info

    async def config(self) -> CollectionConfig:
        return await self.store.load_config()

    async def owner_of(
        self,
        token_id: str,
        *,
        include_expired: bool = False,
        now: Optional[BlockInfo] = None,
    ) -> OwnerOfResponse:
        token = await self._load(token_id)
        approvals = list(token.approvals) if include_expired else token.live_approvals(self._now(now))
        return OwnerOfResponse(owner=token.owner, approvals=approvals)

    async def nft_info(self, token_id: str) -> NftInfoResponse:
        token = await self._load(token_id)
        return NftInfoResponse(token_uri=token.token_uri, extension=token.extension)

    async def num_tokens(self) -> int:
        return await self.store.token_count()

    async def operator(
        self,
        owner: str,
        operator: str,
        *,
        include_expired: bool = False,
        now: Optional[BlockInfo] = None,
    ) -> Approval:
        grant = await self.store.load_operator(owner, operator)
        if grant is None or (not include_expired and grant.is_expired(self._now(now))):
            raise NotFound("Approval not found", context={"owner": owner, "operator": operator})
        return Approval(spender=operator, expires=grant)
