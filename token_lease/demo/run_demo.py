"""Run the end-to-end lease scenario: transfer while leased, reclaim after expiry."""

from __future__ import annotations

import asyncio

from ..collection.storage import InMemoryTokenStore
from ..core.expiration import Expiration
from ..core.types import Metadata
from ..exporters.memory import InMemoryAuditExporter
from ..router import messages as m
from ..service import InstantiateMsg, instantiate_collection
from ..utils.time import ManualClock

MINTER = "minter"
TOKEN_ID = "Enterprise"


async def run_lease_scenario() -> dict:
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
    )
    steps: dict = {}
    try:
        lease_end = clock.height + 100
        steps["mint"] = await router.execute(
            MINTER,
            m.Mint(
                token_id=TOKEN_ID,
                owner="jeanluc",
                extension=Metadata(name="Starship USS Enterprise", expires=Expiration.at_height(lease_end)),
            ),
        )
        steps["royalty"] = await router.query(m.RoyaltyInfo(token_id=TOKEN_ID, sale_price=100))
        steps["transfer_while_leased"] = await router.execute("jeanluc", m.TransferNft(recipient="picard", token_id=TOKEN_ID))
        steps["admin_burn_while_leased"] = await router.execute(MINTER, m.Burn(token_id=TOKEN_ID))

        clock.advance(blocks=101)
        steps["transfer_after_expiry"] = await router.execute("picard", m.TransferNft(recipient="riker", token_id=TOKEN_ID))
        steps["send_after_expiry"] = await router.execute(
            "picard", m.SendNft(contract="riker", token_id=TOKEN_ID, msg=b"hello")
        )
        steps["admin_burn_after_expiry"] = await router.execute(MINTER, m.Burn(token_id=TOKEN_ID))
        steps["num_tokens"] = await router.query(m.NumTokens())
        steps["audit_actions"] = exporter.actions()
    finally:
        await router.close()
    return steps


async def main() -> None:
    steps = await run_lease_scenario()
    for name, outcome in steps.items():
        print(f"{name.upper()}:", outcome)


if __name__ == "__main__":
    asyncio.run(main())
