"""Authorization datatypes and enums."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Decision(str, Enum):
    """Authorization outcome for an attempted action."""

    ALLOW = "ALLOW"
    DENY = "DENY"


class Permission(str, Enum):
    """Permission class an action is evaluated under."""

    APPROVE = "APPROVE"
    SEND = "SEND"


@dataclass(frozen=True)
class AuthorizationResult:
    """Result of evaluating one permission class for one sender."""

    decision: Decision
    reason: str
    permission: Permission

    @property
    def allowed(self) -> bool:
        return self.decision == Decision.ALLOW
