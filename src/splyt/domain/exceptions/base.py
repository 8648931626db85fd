"""
Base domain exceptions.
"""


class SplytException(Exception):
    """Base exception for all Splyt domain errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class EntityNotFoundError(SplytException):
    """Raised when entity is not found in repository."""

    def __init__(self, entity_type: str, entity_id: str):
        message = f"{entity_type} with ID {entity_id} not found"
        super().__init__(message, code="ENTITY_NOT_FOUND")


class DuplicateEntityError(SplytException):
    """Raised when attempting to create duplicate entity."""

    def __init__(self, entity_type: str, identifier: str):
        message = f"{entity_type} with {identifier} already exists"
        super().__init__(message, code="DUPLICATE_ENTITY")


class ValidationError(SplytException):
    """Raised when entity validation fails."""

    def __init__(self, field: str, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        self.reason = reason


class PermissionDeniedError(SplytException):
    """Raised when caller is not allowed to act on a resource."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message, code="PERMISSION_DENIED")


class PersistenceError(SplytException):
    """Raised when the database rejects or fails a write."""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message, code="PERSISTENCE_ERROR")
