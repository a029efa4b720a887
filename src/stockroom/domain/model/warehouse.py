"""Warehouse aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Warehouse:
    """A stocking location.

    Inactive warehouses are never selected and never count toward
    availability. ``created_at`` orders warehouses for deterministic
    tie-breaking (earliest first, then by id).
    """

    id: str
    name: str
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def creation_key(self) -> tuple[datetime, str]:
        return (self.created_at, self.id)
