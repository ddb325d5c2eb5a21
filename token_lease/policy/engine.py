"""Authorization oracle for approve-class and send-class token actions."""

from __future__ import annotations

from typing import Optional

from ..core.expiration import BlockInfo, Expiration
from ..core.types import TokenInfo
from .admin import AdministratorOracle
from .types import AuthorizationResult, Decision, Permission

NOT_OWNER = "not_owner"


class AuthorizationOracle:
    """Decide whether a sender may act on a token at a given block.

    The lease is checked before ownership. Once a token's expiration has
    passed, every path except the administrator's is denied, including the
    recorded owner's. ``operator_grant`` is the grant from ``token.owner`` to
    the sender, loaded by the caller, so evaluation never touches storage.
    """

    def __init__(self, admin: AdministratorOracle) -> None:
        self.admin = admin

    def check_can_approve(
        self,
        *,
        token: TokenInfo,
        sender: str,
        now: BlockInfo,
        operator_grant: Optional[Expiration] = None,
    ) -> AuthorizationResult:
        p = Permission.APPROVE
        lease = token.lease

        if not lease.is_never and lease.is_expired(now):
            if self.admin.is_admin(sender):
                return AuthorizationResult(Decision.ALLOW, "admin_reclaim", p)
            return AuthorizationResult(Decision.DENY, NOT_OWNER, p)

        if token.owner == sender:
            return AuthorizationResult(Decision.ALLOW, "owner", p)

        # Per-token delegates cannot approve or revoke; only operators can.
        return self._check_operator(operator_grant, now, p)

    def check_can_send(
        self,
        *,
        token: TokenInfo,
        sender: str,
        now: BlockInfo,
        operator_grant: Optional[Expiration] = None,
    ) -> AuthorizationResult:
        p = Permission.SEND
        lease = token.lease

        if not lease.is_never and lease.is_expired(now):
            if self.admin.is_admin(sender):
                return AuthorizationResult(Decision.ALLOW, "admin_reclaim", p)
            return AuthorizationResult(Decision.DENY, NOT_OWNER, p)

        if token.owner == sender:
            return AuthorizationResult(Decision.ALLOW, "owner", p)

        if any(a.spender == sender and not a.is_expired(now) for a in token.approvals):
            return AuthorizationResult(Decision.ALLOW, "approved_spender", p)

        return self._check_operator(operator_grant, now, p)

    @staticmethod
    def _check_operator(grant: Optional[Expiration], now: BlockInfo, p: Permission) -> AuthorizationResult:
        if grant is None or grant.is_expired(now):
            return AuthorizationResult(Decision.DENY, NOT_OWNER, p)
        return AuthorizationResult(Decision.ALLOW, "operator", p)
