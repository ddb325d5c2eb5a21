"""Expiration markers evaluated against the current block."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import InvalidInput


@dataclass(frozen=True)
class BlockInfo:
    """Logical time for one request: block height and block time in seconds."""

    height: int
    time: int


class ExpirationKind(str, Enum):
    """Expiration families."""

    NEVER = "never"
    AT_HEIGHT = "at_height"
    AT_TIME = "at_time"


@dataclass(frozen=True)
class Expiration:
    """A point in logical time, or never.

    Height-based and time-based expirations are compared against the matching
    component of :class:`BlockInfo`, so both families can coexist in one
    collection.
    """

    kind: ExpirationKind = ExpirationKind.NEVER
    value: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind == ExpirationKind.NEVER:
            if self.value is not None:
                raise InvalidInput("Expiration.never() does not take a value.")
        elif self.value is None or self.value < 0:
            raise InvalidInput(f"Expiration {self.kind.value} requires a non-negative value.")

    @classmethod
    def never(cls) -> "Expiration":
        return cls(ExpirationKind.NEVER)

    @classmethod
    def at_height(cls, height: int) -> "Expiration":
        return cls(ExpirationKind.AT_HEIGHT, height)

    @classmethod
    def at_time(cls, seconds: int) -> "Expiration":
        return cls(ExpirationKind.AT_TIME, seconds)

    @property
    def is_never(self) -> bool:
        return self.kind == ExpirationKind.NEVER

    def is_expired(self, now: BlockInfo) -> bool:
        """Return True once ``now`` has reached the threshold."""
        if self.kind == ExpirationKind.AT_HEIGHT:
            assert self.value is not None
            return now.height >= self.value
        if self.kind == ExpirationKind.AT_TIME:
            assert self.value is not None
            return now.time >= self.value
        return False

    def to_dict(self) -> Dict[str, Any]:
        if self.kind == ExpirationKind.NEVER:
            return {"never": {}}
        return {self.kind.value: self.value}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Expiration":
        if not data or "never" in data:
            return cls.never()
        if "at_height" in data:
            return cls.at_height(int(data["at_height"]))
        if "at_time" in data:
            return cls.at_time(int(data["at_time"]))
        raise InvalidInput(f"Unknown expiration payload: {data!r}")

    def __str__(self) -> str:
        if self.kind == ExpirationKind.NEVER:
            return "expiration: never"
        if self.kind == ExpirationKind.AT_HEIGHT:
            return f"expiration height: {self.value}"
        return f"expiration time: {self.value}"
