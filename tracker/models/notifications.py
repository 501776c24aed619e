from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UnitNotificationCount:
    unit_code: str
    unread_notes: int = 0
    pending_assignments: int = 0
    unread_past_papers: int = 0

    @property
    def total(self) -> int:
        """Single badge number shown next to the unit in navigation."""
        return self.unread_notes + self.pending_assignments + self.unread_past_papers
