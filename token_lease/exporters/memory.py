"""In-memory audit exporter."""

from __future__ import annotations

from typing import List, Tuple

from ..collection.records import ActionRecord
from .base import AuditExporter


class InMemoryAuditExporter(AuditExporter):
    """Keeps exported records in order; used by tests and the demo."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, ActionRecord]] = []

    async def export(self, record: ActionRecord, *, collection: str) -> None:
        self.records.append((collection, record))

    def actions(self) -> List[str]:
        return [record.action for _, record in self.records]
