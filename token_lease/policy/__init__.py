"""Authorization oracle APIs."""

from .admin import AdministratorOracle, StaticAdministrator
from .engine import NOT_OWNER, AuthorizationOracle
from .types import AuthorizationResult, Decision, Permission

__all__ = [
    "AdministratorOracle",
    "StaticAdministrator",
    "AuthorizationOracle",
    "NOT_OWNER",
    "AuthorizationResult",
    "Decision",
    "Permission",
]
