import asyncio

import pytest

from token_lease.collection import InMemoryTokenStore, TimeLimitedCollection
from token_lease.core.errors import Unauthorized
from token_lease.core.expiration import Expiration
from token_lease.core.types import LeaseState, Metadata
from token_lease.demo import run_lease_scenario
from token_lease.policy import StaticAdministrator
from token_lease.utils.time import ManualClock, SystemClock

MINTER = "minter"


def test_token_expires_and_admin_reclaims() -> None:
    async def run() -> None:
        clock = ManualClock()
        store = InMemoryTokenStore()
        collection = TimeLimitedCollection(store=store, admin=StaticAdministrator(MINTER), time_source=clock)
        await collection.instantiate(
            MINTER, name="SpaceShips", symbol="SPACE", royalty_percentage=10, royalty_payment_address="jeanluc"
        )
        lease_end = clock.height + 100
        await collection.mint(
            MINTER,
            token_id="Enterprise",
            owner="jeanluc",
            extension=Metadata(name="Starship USS Enterprise", expires=Expiration.at_height(lease_end)),
        )
        assert (await collection.royalty_info("Enterprise", 100)).royalty_amount == 10
        assert (await collection.nft_info("Enterprise")).extension.expires == Expiration.at_height(lease_end)

        await collection.transfer_nft("jeanluc", recipient="picard1", token_id="Enterprise")
        assert (await collection.owner_of("Enterprise")).owner == "picard1"

        with pytest.raises(Unauthorized):
            await collection.burn(MINTER, token_id="Enterprise")

        clock.advance(blocks=101)
        token = await store.load_token("Enterprise")
        assert token is not None and token.lease_state(clock.now()) == LeaseState.EXPIRED

        with pytest.raises(Unauthorized):
            await collection.transfer_nft("picard1", recipient="riker", token_id="Enterprise")
        with pytest.raises(Unauthorized):
            await collection.send_nft("picard1", contract="riker", token_id="Enterprise", msg=b"hello")
        with pytest.raises(Unauthorized):
            await collection.approve("picard1", spender="riker", token_id="Enterprise")

        await collection.burn(MINTER, token_id="Enterprise")
        assert await collection.num_tokens() == 0

    asyncio.run(run())


def test_expired_token_ignores_prior_approvals_and_operators() -> None:
    async def run() -> None:
        clock = ManualClock()
        collection = TimeLimitedCollection(
            store=InMemoryTokenStore(), admin=StaticAdministrator(MINTER), time_source=clock
        )
        await collection.instantiate(MINTER, name="S", symbol="S")
        await collection.mint(
            MINTER, token_id="t", owner="alice", extension=Metadata(expires=Expiration.at_time(clock.time + 30))
        )
        await collection.approve("alice", spender="bob", token_id="t")
        await collection.approve_all("alice", operator="op")

        clock.advance(seconds=30)
        for sender in ("alice", "bob", "op"):
            with pytest.raises(Unauthorized):
                await collection.transfer_nft(sender, recipient=sender, token_id="t")
        with pytest.raises(Unauthorized):
            await collection.revoke("op", spender="bob", token_id="t")

        # admin may manage approvals and move the token out
        await collection.revoke(MINTER, spender="bob", token_id="t")
        await collection.transfer_nft(MINTER, recipient="zoe", token_id="t")
        assert (await collection.owner_of("t")).owner == "zoe"

    asyncio.run(run())


def test_demo_scenario_outcomes() -> None:
    steps = asyncio.run(run_lease_scenario())

    assert steps["mint"]["status"] == "ok"
    assert steps["royalty"] == {"address": "jeanluc", "royalty_amount": 10}
    assert steps["transfer_while_leased"]["status"] == "ok"
    assert steps["admin_burn_while_leased"]["status"] == "error"
    assert steps["admin_burn_while_leased"]["reason"] == "not_owner"
    assert steps["transfer_after_expiry"]["status"] == "error"
    assert steps["send_after_expiry"]["status"] == "error"
    assert steps["admin_burn_after_expiry"]["status"] == "ok"
    assert steps["num_tokens"] == {"count": 0}
    assert steps["audit_actions"] == ["instantiate", "mint", "transfer_nft", "burn"]


def test_lease_locks_at_exactly_the_expiry_height() -> None:
    async def run() -> None:
        clock = ManualClock()
        collection = TimeLimitedCollection(
            store=InMemoryTokenStore(), admin=StaticAdministrator(MINTER), time_source=clock
        )
        await collection.instantiate(MINTER, name="S", symbol="S")
        lease_end = clock.height + 100
        await collection.mint(
            MINTER, token_id="t", owner="alice", extension=Metadata(expires=Expiration.at_height(lease_end))
        )

        clock.advance(blocks=99)
        assert clock.height == lease_end - 1
        await collection.transfer_nft("alice", recipient="bob", token_id="t")
        with pytest.raises(Unauthorized):
            await collection.burn(MINTER, token_id="t")

        clock.advance(blocks=1)
        assert clock.height == lease_end
        with pytest.raises(Unauthorized):
            await collection.transfer_nft("bob", recipient="alice", token_id="t")
        await collection.burn(MINTER, token_id="t")
        assert await collection.num_tokens() == 0

    asyncio.run(run())


def test_system_clock_height_drives_height_leases() -> None:
    async def run() -> None:
        chain = {"height": 10}
        clock = SystemClock(height_provider=lambda: chain["height"])
        collection = TimeLimitedCollection(
            store=InMemoryTokenStore(), admin=StaticAdministrator(MINTER), time_source=clock
        )
        await collection.instantiate(MINTER, name="S", symbol="S")
        await collection.mint(
            MINTER, token_id="t", owner="alice", extension=Metadata(expires=Expiration.at_height(11))
        )
        assert clock.now().height == 10
        await collection.transfer_nft("alice", recipient="bob", token_id="t")

        chain["height"] = 11
        with pytest.raises(Unauthorized):
            await collection.transfer_nft("bob", recipient="alice", token_id="t")
        assert (await collection.owner_of("t")).owner == "bob"

    asyncio.run(run())


def test_system_clock_requires_a_height_provider() -> None:
    with pytest.raises(TypeError):
        SystemClock()
