"""Routes typed messages to the collection and exports audit records."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from ..collection.engine import TimeLimitedCollection
from ..collection.records import ActionRecord
from ..core.errors import TokenLeaseError
from ..core.expiration import BlockInfo
from ..exporters.base import AuditExporter
from . import messages as m
from .templates import action_response_template, error_response_template

logger = logging.getLogger(__name__)

ExecuteHandler = Callable[[str, Any, BlockInfo], Awaitable[ActionRecord]]
QueryHandler = Callable[[Any, BlockInfo], Awaitable[Any]]


class MessageRouter:
    """Entry point translating messages into collection calls and responses."""

    def __init__(
        self,
        collection: TimeLimitedCollection,
        *,
        exporter: Optional[AuditExporter] = None,
        collection_name: str = "default",
    ) -> None:
        self.collection = collection
        self.exporter = exporter
        self.collection_name = collection_name
        c = collection
        self._execute_routes: Dict[type, Tuple[str, ExecuteHandler]] = {
            m.Mint: ("mint", lambda s, msg, now: c.mint(
                s, token_id=msg.token_id, owner=msg.owner, token_uri=msg.token_uri, extension=msg.extension
            )),
            m.Approve: ("approve", lambda s, msg, now: c.approve(
                s, spender=msg.spender, token_id=msg.token_id, expires=msg.expires, now=now
            )),
            m.Revoke: ("revoke", lambda s, msg, now: c.revoke(s, spender=msg.spender, token_id=msg.token_id, now=now)),
            m.ApproveAll: ("approve_all", lambda s, msg, now: c.approve_all(
                s, operator=msg.operator, expires=msg.expires, now=now
            )),
            m.RevokeAll: ("revoke_all", lambda s, msg, now: c.revoke_all(s, operator=msg.operator)),
            m.TransferNft: ("transfer_nft", lambda s, msg, now: c.transfer_nft(
                s, recipient=msg.recipient, token_id=msg.token_id, now=now
            )),
            m.SendNft: ("send_nft", lambda s, msg, now: c.send_nft(
                s, contract=msg.contract, token_id=msg.token_id, msg=msg.msg, now=now
            )),
            m.Burn: ("burn", lambda s, msg, now: c.burn(s, token_id=msg.token_id, now=now)),
            m.UpdateConfig: ("update_config", lambda s, msg, now: c.update_config(s, config=msg.config)),
        }
        self._query_routes: Dict[type, Tuple[str, QueryHandler]] = {
            m.RoyaltyInfo: ("royalty_info", self._royalty_info),
            m.CheckRoyalties: ("check_royalties", self._check_royalties),
            m.ContractInfoQuery: ("contract_info", self._contract_info),
            m.OwnerOf: ("owner_of", self._owner_of),
            m.NftInfo: ("nft_info", self._nft_info),
            m.NumTokens: ("num_tokens", self._num_tokens),
            m.OperatorQuery: ("operator", self._operator),
        }

    async def execute(self, sender: str, msg: m.ExecuteMsg) -> dict:
        """Run one execute message; failures come back as error responses."""
        route = self._execute_routes.get(type(msg))
        if route is None:
            raise ValueError(f"Unsupported execute message: {type(msg).__name__}")
        action, handler = route

        now = self.collection.time_source.now()
        try:
            record = await handler(sender, msg, now)
        except TokenLeaseError as exc:
            logger.warning("rejected %s from %s: %s", action, sender, exc)
            return error_response_template(action, exc)

        logger.info("executed %s from %s at height %d", action, sender, now.height)
        if self.exporter:
            await self.exporter.export(record, collection=self.collection_name)
        return action_response_template(record)

    async def query(self, msg: m.QueryMsg) -> dict:
        route = self._query_routes.get(type(msg))
        if route is None:
            raise ValueError(f"Unsupported query message: {type(msg).__name__}")
        action, handler = route

        now = self.collection.time_source.now()
        try:
            return await handler(msg, now)
        except TokenLeaseError as exc:
            logger.debug("query %s failed: %s", action, exc)
            return error_response_template(action, exc)

    async def close(self) -> None:
        if self.exporter:
            await self.exporter.close()
        close = getattr(self.collection.store, "close", None)
        if callable(close):
            await close()

    async def _royalty_info(self, msg: m.RoyaltyInfo, now: BlockInfo) -> dict:
        info = await self.collection.royalty_info(msg.token_id, msg.sale_price)
        return info.to_dict()

    async def _check_royalties(self, msg: m.CheckRoyalties, now: BlockInfo) -> dict:
        return {"royalty_payments": await self.collection.check_royalties()}

    async def _contract_info(self, msg: m.ContractInfoQuery, now: BlockInfo) -> dict:
        info = await self.collection.contract_info()
        return info.to_dict()

    async def _owner_of(self, msg: m.OwnerOf, now: BlockInfo) -> dict:
        res = await self.collection.owner_of(msg.token_id, include_expired=msg.include_expired, now=now)
        return res.to_dict()

    async def _nft_info(self, msg: m.NftInfo, now: BlockInfo) -> dict:
        res = await self.collection.nft_info(msg.token_id)
        return res.to_dict()

    async def _num_tokens(self, msg: m.NumTokens, now: BlockInfo) -> dict:
        return {"count": await self.collection.num_tokens()}

    async def _operator(self, msg: m.OperatorQuery, now: BlockInfo) -> dict:
        approval = await self.collection.operator(
            msg.owner, msg.operator, include_expired=msg.include_expired, now=now
        )
        return {"approval": approval.to_dict()}
