"""Domain models for saved search subscriptions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Subscription:
    """A saved search with its notification watermark."""

    id: UUID
    user_id: UUID
    criteria_blob: str
    created_at: datetime
    last_notified: datetime | None = None

    @property
    def watermark(self) -> datetime:
        """Boundary after which recipes have not been evaluated yet."""
        return self.last_notified or self.created_at


@dataclass(frozen=True)
class MatchRunSummary:
    """Outcome of one subscription matcher run."""

    processed: int = 0
    notified: int = 0
    skipped: int = 0
