"""Service-level domain errors."""


class EntityInUseError(Exception):
    """The entity is still referenced and cannot be deleted."""

    def __init__(self, entity: str, count: int):
        self.entity = entity
        self.count = count
        super().__init__(f"{entity} is referenced by {count} businesses")


class OwnershipConflictError(Exception):
    """The user already owns a business."""


class DuplicateEntryError(Exception):
    """The record already exists."""
