"""Success records and query responses returned by the collection."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from ..core.types import Approval, Metadata
from ..utils.time import utc_now


def _new_id() -> str:
    return str(uuid4())


@dataclass(frozen=True)
class ReceiveMessage:
    """Notification delivered to the recipient contract of ``send_nft``."""

    contract: str
    sender: str
    token_id: str
    msg: bytes = b""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract": self.contract,
            "receive_nft": {
                "sender": self.sender,
                "token_id": self.token_id,
                "msg": base64.b64encode(self.msg).decode("ascii"),
            },
        }


@dataclass(frozen=True)
class ActionRecord:
    """Audit record for one successful mutation.

    ``attributes`` keeps insertion order: action, sender, then the
    spender/operator/recipient and token identifiers of the action.
    """

    action: str
    sender: str
    attributes: Dict[str, str]
    messages: Tuple[ReceiveMessage, ...] = ()
    record_id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=lambda: utc_now().replace(tzinfo=None))

    @classmethod
    def build(cls, action: str, sender: str, *, messages: Tuple[ReceiveMessage, ...] = (), **attrs: str) -> "ActionRecord":
        attributes = {"action": action, "sender": sender}
        attributes.update(attrs)
        return cls(action=action, sender=sender, attributes=attributes, messages=messages)

    @property
    def token_id(self) -> Optional[str]:
        return self.attributes.get("token_id")

    def to_attributes(self) -> List[Tuple[str, str]]:
        return list(self.attributes.items())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "record_id": self.record_id,
            "action": self.action,
            "sender": self.sender,
            "attributes": dict(self.attributes),
            "messages": [m.to_dict() for m in self.messages],
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class OwnerOfResponse:
    owner: str
    approvals: List[Approval]

    def to_dict(self) -> Dict[str, Any]:
        return {"owner": self.owner, "approvals": [a.to_dict() for a in self.approvals]}


@dataclass(frozen=True)
class NftInfoResponse:
    token_uri: Optional[str]
    extension: Optional[Metadata]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token_uri": self.token_uri,
            "extension": self.extension.to_dict() if self.extension is not None else None,
        }
