"""
Token lease errors.

Every failure surfaced by the collection is a :class:`TokenLeaseError`
subclass carrying a stable integer code, so the routing layer can classify
failures without string matching. Errors are terminal for the request that
raised them; nothing is retried.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Mapping, Optional


class ErrorCode(IntEnum):
    """Stable error codes for collection-level exceptions."""

    GENERIC = 3000
    NOT_FOUND = 3001
    UNAUTHORIZED = 3002
    EXPIRED = 3003
    INVALID_CONFIGURATION = 3004
    TOKEN_ALREADY_EXISTS = 3005
    INVALID_INPUT = 3006
    ALREADY_INSTANTIATED = 3007


class TokenLeaseError(Exception):
    """Base class for collection exceptions."""

    code: ErrorCode = ErrorCode.GENERIC
    reason: str = "error"

    def __init__(self, message: str, *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context) if context else {}

    def __str__(self) -> str:
        tail = f" context={self.context}" if self.context else ""
        return f"[{int(self.code)}] {self.message}{tail}"

    def to_dict(self) -> Dict[str, Any]:
        """Structured view for response templates and audit rows."""
        out: Dict[str, Any] = {"code": int(self.code), "reason": self.reason, "message": self.message}
        if self.context:
            out["context"] = dict(self.context)
        return out


class NotFound(TokenLeaseError):
    code = ErrorCode.NOT_FOUND
    reason = "not_found"


class Unauthorized(TokenLeaseError):
    """Raised when the sender is neither owner, delegate, operator nor reclaiming admin."""

    code = ErrorCode.UNAUTHORIZED
    reason = "not_owner"


class Expired(TokenLeaseError):
    """Raised when a caller-supplied approval expiration has already passed."""

    code = ErrorCode.EXPIRED
    reason = "expired"


class InvalidConfiguration(TokenLeaseError):
    code = ErrorCode.INVALID_CONFIGURATION
    reason = "invalid_configuration"


class TokenAlreadyExists(TokenLeaseError):
    code = ErrorCode.TOKEN_ALREADY_EXISTS
    reason = "token_already_claimed"


class AlreadyInstantiated(TokenLeaseError):
    code = ErrorCode.ALREADY_INSTANTIATED
    reason = "already_instantiated"


class InvalidInput(TokenLeaseError, ValueError):
    """Raised for malformed arguments such as blank addresses or negative prices."""

    code = ErrorCode.INVALID_INPUT
    reason = "invalid_input"
