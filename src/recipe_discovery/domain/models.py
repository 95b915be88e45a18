"""Domain models for users."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    email: str
    dietary_restriction_ids: frozenset[int] = field(default_factory=frozenset)
