"""Errors raised by the entity store."""


class EntityNotFoundError(KeyError):
    """Raised when a persisted record refers to an id the collection does not hold."""

    def __init__(self, collection: str, entity_id: str) -> None:
        super().__init__(entity_id)
        self.collection = collection
        self.entity_id = entity_id

    def __str__(self) -> str:
        return f"No entry with id {self.entity_id!r} in {self.collection}"


class PayloadError(ValueError):
    """Raised when a stored payload cannot be decoded into entities."""
