"""Response templates for routed execute messages."""

from __future__ import annotations

from ..collection.records import ActionRecord
from ..core.errors import TokenLeaseError


def action_response_template(record: ActionRecord) -> dict:
    return {
        "status": "ok",
        "action": record.action,
        "record_id": record.record_id,
        "attributes": record.to_attributes(),
        "messages": [m.to_dict() for m in record.messages],
    }


def error_response_template(action: str, error: TokenLeaseError) -> dict:
    return {
        "status": "error",
        "action": action,
        **error.to_dict(),
    }
