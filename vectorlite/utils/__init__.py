"""
Utility modules for the local vector database.
"""

from .concurrency import ReadWriteLock, thread_safe_read, thread_safe_write, IndexLocks
from .exceptions import (
    VectorDBException,
    EntityNotFoundError,
    EntityAlreadyExistsError,
    ValidationError,
    DimensionMismatchError,
    StorageError,
    CorruptDocumentError,
    StorageUnavailableError,
)
from .similarity import (
    cosine_similarity,
    euclidean_distance,
    euclidean_similarity,
    dot_product,
    dot_product_similarity,
    vector_magnitude,
    get_similarity_function,
)
from .validation import (
    is_valid_index_name,
    is_valid_dimension,
    is_valid_top_k,
    is_valid_vector_length,
    validate_vector_dimensions,
)

__all__ = [
    # Concurrency utilities
    "ReadWriteLock",
    "thread_safe_read",
    "thread_safe_write",
    "IndexLocks",
    # Exception classes
    "VectorDBException",
    "EntityNotFoundError",
    "EntityAlreadyExistsError",
    "ValidationError",
    "DimensionMismatchError",
    "StorageError",
    "CorruptDocumentError",
    "StorageUnavailableError",
    # Similarity functions
    "cosine_similarity",
    "euclidean_distance",
    "euclidean_similarity",
    "dot_product",
    "dot_product_similarity",
    "vector_magnitude",
    "get_similarity_function",
    # Validation helpers
    "is_valid_index_name",
    "is_valid_dimension",
    "is_valid_top_k",
    "is_valid_vector_length",
    "validate_vector_dimensions",
]
