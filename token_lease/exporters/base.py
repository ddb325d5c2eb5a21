"""Base audit exporter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..collection.records import ActionRecord


class AuditExporter(ABC):
    """Abstract base class for audit record exporters."""

    @abstractmethod
    async def export(self, record: ActionRecord, *, collection: str) -> None:
        """Export one successful action record."""

    async def close(self) -> None:
        """Close exporter resources if needed."""
