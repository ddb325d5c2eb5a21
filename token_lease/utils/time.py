"""UTC time helpers and block time sources."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Protocol

from ..core.expiration import BlockInfo


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


class TimeSource(Protocol):
    """Supplies the logical time an operation is evaluated at."""

    def now(self) -> BlockInfo:
        ...


class ManualClock:
    """Block clock advanced explicitly; used by tests and the demo."""

    def __init__(self, *, height: int = 12_345, time: int = 1_571_797_419) -> None:
        self.height = height
        self.time = time

    def now(self) -> BlockInfo:
        return BlockInfo(height=self.height, time=self.time)

    def advance(self, *, blocks: int = 0, seconds: int = 0) -> BlockInfo:
        if blocks < 0 or seconds < 0:
            raise ValueError("Block time is monotonically non-decreasing.")
        self.height += blocks
        self.time += seconds
        return self.now()


class SystemClock:
    """Wall-clock time paired with a block height read from the host."""

    def __init__(self, height_provider: Callable[[], int]) -> None:
        self._height_provider = height_provider

    def now(self) -> BlockInfo:
        return BlockInfo(height=self._height_provider(), time=int(utc_now().timestamp()))
