"""
Pydantic models for the local vector database.
"""

from .index import (
    Metric,
    ServerlessSpec,
    IndexSpec,
    IndexStatus,
    IndexDefinition,
    IndexDescription,
    IndexList,
    IndexCreate,
)
from .vector import StoredVector, VectorSet, UpsertRequest, UpsertResult
from .query import QueryRequest, ScoredVector, QueryResult

__all__ = [
    # Index models
    "Metric",
    "ServerlessSpec",
    "IndexSpec",
    "IndexStatus",
    "IndexDefinition",
    "IndexDescription",
    "IndexList",
    "IndexCreate",
    # Vector models
    "StoredVector",
    "VectorSet",
    "UpsertRequest",
    "UpsertResult",
    # Query models
    "QueryRequest",
    "ScoredVector",
    "QueryResult",
]
