"""Administrator oracles consulted for expired-lease reclaim."""

from __future__ import annotations

from typing import Protocol


class AdministratorOracle(Protocol):
    """Answers who the current collection administrator is."""

    def is_admin(self, address: str) -> bool:
        ...

    def current_admin(self) -> str:
        ...


class StaticAdministrator:
    """Administrator fixed at instantiation time (the collection minter)."""

    def __init__(self, address: str) -> None:
        if not address:
            raise ValueError("Administrator address must be non-empty.")
        self._address = address

    def is_admin(self, address: str) -> bool:
        return address == self._address

    def current_admin(self) -> str:
        return self._address
