"""
Exceptions raised by the alternative URL services.

Scope of each error:
- EntityNotFoundError: a referenced product/category does not exist; fatal to
  the invocation that named it.
- AltUrlValidationError: a stored content record has no text body; fatal to
  the entity being processed.
- AltUrlStorageError: a write failed; fatal to the entity being processed.
- TraversalConfigError: the traversal roots or options cannot be resolved;
  fatal to the whole run.
"""


class AltUrlError(Exception):
    """Base exception for alternative URL processing."""

    pass


class EntityNotFoundError(AltUrlError):
    """Raised when a referenced catalog entity does not exist."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found for ID: {entity_id}")


class AltUrlValidationError(AltUrlError):
    """Raised when a content record exists without a backing text body."""

    pass


class AltUrlStorageError(AltUrlError):
    """Raised when creating, updating or deleting a content record fails."""

    pass


class TraversalConfigError(AltUrlError):
    """Raised when a traversal cannot determine what to walk."""

    pass
