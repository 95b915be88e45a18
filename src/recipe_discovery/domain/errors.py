"""Domain errors surfaced to API callers."""


class NotFoundError(LookupError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class AccessDeniedError(PermissionError):
    """Raised when the acting user does not own the entity being changed."""


class InvalidCriteriaError(ValueError):
    """Raised for search criteria that cannot be executed."""


class CriteriaDecodeError(ValueError):
    """Raised when a stored criteria snapshot cannot be decoded."""
