"""
Custom exceptions for the local vector database.

These exceptions carry clear error messages and enough structure for the HTTP
layer to map them onto status codes for the different failures that can occur
in the storage and query engine.
"""
from typing import Optional, Any


class VectorDBException(Exception):
    """Base exception for all vector database errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class EntityNotFoundError(VectorDBException):
    """Raised when a requested entity (index, vector set) is not found."""

    def __init__(self, entity_type: str, entity_id: str, details: Optional[Any] = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        message = f"{entity_type} '{entity_id}' not found"
        super().__init__(message, details)


class EntityAlreadyExistsError(VectorDBException):
    """Raised when trying to create an entity that already exists."""

    def __init__(self, entity_type: str, entity_id: str, details: Optional[Any] = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        message = f"{entity_type} '{entity_id}' already exists"
        super().__init__(message, details)


class ValidationError(VectorDBException):
    """Raised when data validation fails."""

    def __init__(self, field: str, value: Any, reason: str, details: Optional[Any] = None):
        self.field = field
        self.value = value
        self.reason = reason
        message = f"Validation failed for field '{field}': {reason}"
        super().__init__(message, details)


class DimensionMismatchError(ValidationError):
    """Raised when a vector's length differs from its index dimension."""

    def __init__(self, expected: int, actual: int, vector_id: Optional[str] = None,
                 details: Optional[Any] = None):
        self.expected = expected
        self.actual = actual
        self.vector_id = vector_id
        subject = f"Vector '{vector_id}'" if vector_id is not None else "Vector"
        super().__init__(
            "values",
            actual,
            f"{subject} has dimension {actual}, expected {expected}",
            details
        )


class StorageError(VectorDBException):
    """Raised when storage operations fail."""

    def __init__(self, operation: str, reason: str, details: Optional[Any] = None):
        self.operation = operation
        self.reason = reason
        message = f"Storage operation '{operation}' failed: {reason}"
        super().__init__(message, details)


class CorruptDocumentError(StorageError):
    """Raised when a document on disk cannot be parsed."""

    def __init__(self, path: str, reason: str, details: Optional[Any] = None):
        self.path = path
        super().__init__("read", f"corrupt document {path}: {reason}", details)


class StorageUnavailableError(StorageError):
    """Raised when the filesystem rejects a read or write."""

    def __init__(self, operation: str, path: str, reason: str, details: Optional[Any] = None):
        self.path = path
        super().__init__(operation, f"{path}: {reason}", details)
