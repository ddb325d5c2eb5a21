import asyncio

import pytest

from token_lease.collection import InMemoryTokenStore
from token_lease.core.errors import AlreadyInstantiated
from token_lease.core.expiration import Expiration
from token_lease.core.types import CollectionConfig, Metadata
from token_lease.exporters import InMemoryAuditExporter
from token_lease.router import messages as m
from token_lease.service import InstantiateMsg, build_router, instantiate_collection
from token_lease.utils.time import ManualClock

MINTER = "minter"


async def make_router():
    clock = ManualClock()
    exporter = InMemoryAuditExporter()
    router = await instantiate_collection(
        InstantiateMsg(
            name="SpaceShips",
            symbol="SPACE",
            minter=MINTER,
            royalty_percentage=10,
            royalty_payment_address="jeanluc",
            creator="creator",
        ),
        store=InMemoryTokenStore(),
        time_source=clock,
        exporter=exporter,
        collection_name="spaceships",
    )
    return router, exporter, clock


def test_execute_returns_attributes_and_exports_record() -> None:
    async def run() -> None:
        router, exporter, _ = await make_router()
        res = await router.execute(MINTER, m.Mint(token_id="Enterprise", owner="jeanluc"))
        assert res["status"] == "ok"
        assert res["action"] == "mint"
        assert ("token_id", "Enterprise") in res["attributes"]

        res = await router.execute("jeanluc", m.Approve(spender="riker", token_id="Enterprise"))
        assert res["attributes"] == [
            ("action", "approve"),
            ("sender", "jeanluc"),
            ("spender", "riker"),
            ("token_id", "Enterprise"),
        ]

        collection_names = {name for name, _ in exporter.records}
        assert collection_names == {"spaceships"}
        assert exporter.actions() == ["instantiate", "mint", "approve"]

    asyncio.run(run())


def test_execute_failures_become_error_responses_and_are_not_exported() -> None:
    async def run() -> None:
        router, exporter, clock = await make_router()
        await router.execute(MINTER, m.Mint(token_id="t", owner="alice"))

        denied = await router.execute("mallory", m.TransferNft(recipient="mallory", token_id="t"))
        assert denied == {
            "status": "error",
            "action": "transfer_nft",
            "code": 3002,
            "reason": "not_owner",
            "message": "Caller is not the token owner",
            "context": {"sender": "mallory", "token_id": "t", "permission": "SEND"},
        }

        expired = await router.execute("alice", m.ApproveAll(operator="op", expires=Expiration.at_height(clock.height)))
        assert expired["reason"] == "expired"

        missing = await router.execute("alice", m.Burn(token_id="nope"))
        assert missing["reason"] == "not_found"

        rejected = await router.execute(MINTER, m.Mint(token_id="u", owner="a", extension=Metadata(royalty_percentage=1)))
        assert rejected["reason"] == "invalid_configuration"

        assert exporter.actions() == ["instantiate", "mint"]

    asyncio.run(run())


def test_queries_dispatch_by_message_type() -> None:
    async def run() -> None:
        router, _, _ = await make_router()
        await router.execute(MINTER, m.Mint(token_id="Voyager", owner="janeway", extension=Metadata(name="Voyager")))
        await router.execute("janeway", m.ApproveAll(operator="tuvok"))

        assert await router.query(m.RoyaltyInfo(token_id="Voyager", sale_price=43)) == {
            "address": "jeanluc",
            "royalty_amount": 4,
        }
        assert await router.query(m.CheckRoyalties()) == {"royalty_payments": True}
        assert await router.query(m.ContractInfoQuery()) == {
            "name": "SpaceShips",
            "symbol": "SPACE",
            "creator": "creator",
        }
        assert await router.query(m.OwnerOf(token_id="Voyager")) == {"owner": "janeway", "approvals": []}
        assert (await router.query(m.NftInfo(token_id="Voyager")))["extension"]["name"] == "Voyager"
        assert await router.query(m.NumTokens()) == {"count": 1}
        assert await router.query(m.OperatorQuery(owner="janeway", operator="tuvok")) == {
            "approval": {"spender": "tuvok", "expires": {"never": {}}}
        }
        assert (await router.query(m.OwnerOf(token_id="missing")))["reason"] == "not_found"

    asyncio.run(run())


def test_update_config_through_router() -> None:
    async def run() -> None:
        router, _, _ = await make_router()
        denied = await router.execute("jeanluc", m.UpdateConfig(config=CollectionConfig(royalty_percentage=5)))
        assert denied["reason"] == "not_owner"

        ok = await router.execute(MINTER, m.UpdateConfig(config=CollectionConfig(royalty_percentage=100)))
        assert ok["status"] == "ok"
        await router.execute(MINTER, m.Mint(token_id="t", owner="a"))
        assert (await router.query(m.RoyaltyInfo(token_id="t", sale_price=7)))["royalty_amount"] == 7

    asyncio.run(run())


def test_send_nft_response_carries_receive_message() -> None:
    async def run() -> None:
        router, _, _ = await make_router()
        await router.execute(MINTER, m.Mint(token_id="t", owner="alice"))
        res = await router.execute("alice", m.SendNft(contract="market", token_id="t", msg=b"hi"))
        assert res["messages"] == [
            {"contract": "market", "receive_nft": {"sender": "alice", "token_id": "t", "msg": "aGk="}}
        ]

    asyncio.run(run())


def test_unknown_message_type_raises() -> None:
    async def run() -> None:
        router = build_router(MINTER, store=InMemoryTokenStore(), time_source=ManualClock())
        with pytest.raises(ValueError):
            await router.execute(MINTER, object())
        with pytest.raises(ValueError):
            await router.query(object())

    asyncio.run(run())


def test_invalid_input_becomes_error_response() -> None:
    async def run() -> None:
        router, exporter, _ = await make_router()
        await router.execute(MINTER, m.Mint(token_id="t", owner="alice"))

        blank = await router.execute("alice", m.TransferNft(recipient="", token_id="t"))
        assert blank["status"] == "error"
        assert blank["action"] == "transfer_nft"
        assert blank["reason"] == "invalid_input"
        assert blank["code"] == 3006
        assert (await router.query(m.OwnerOf(token_id="t")))["owner"] == "alice"

        negative = await router.query(m.RoyaltyInfo(token_id="t", sale_price=-1))
        assert negative["status"] == "error"
        assert negative["action"] == "royalty_info"
        assert negative["reason"] == "invalid_input"

        assert exporter.actions() == ["instantiate", "mint"]

    asyncio.run(run())


def test_second_instantiate_is_rejected() -> None:
    async def run() -> None:
        router, _, clock = await make_router()
        with pytest.raises(AlreadyInstantiated):
            await instantiate_collection(
                InstantiateMsg(name="Other", symbol="O", minter="mallory", royalty_percentage=100),
                store=router.collection.store,
                time_source=clock,
            )
        assert (await router.query(m.ContractInfoQuery()))["name"] == "SpaceShips"

    asyncio.run(run())
