"""
Index models for the local vector database.

An index is a named collection of vectors with a fixed dimension and
similarity metric. Definitions are immutable once created.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class Metric(str, Enum):
    """Similarity metrics an index can be created with."""
    COSINE = "cosine"
    EUCLIDEAN = "euclidean"
    DOTPRODUCT = "dotproduct"


class ServerlessSpec(BaseModel):
    """Cloud placement of a serverless index. Stored verbatim, never interpreted."""
    cloud: str = Field(..., min_length=1, description="Cloud provider")
    region: str = Field(..., min_length=1, description="Cloud region")


class IndexSpec(BaseModel):
    """Opaque placement descriptor for an index."""
    serverless: ServerlessSpec


class IndexStatus(BaseModel):
    """Readiness of an index. Local indexes are ready as soon as they exist."""
    ready: bool = True
    state: str = "Ready"


class IndexDefinition(BaseModel):
    """Immutable definition of an index, persisted as its config document."""
    name: str = Field(..., description="Unique index name")
    dimension: StrictInt = Field(..., gt=0, description="Length of every vector in the index")
    metric: Metric = Field(..., description="Similarity metric used for queries")
    spec: IndexSpec = Field(..., description="Placement descriptor")


class IndexDescription(IndexDefinition):
    """An index definition together with its status, as listed in the registry."""
    status: IndexStatus = Field(default_factory=IndexStatus)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "product-embeddings",
                "dimension": 3,
                "metric": "cosine",
                "spec": {"serverless": {"cloud": "aws", "region": "us-east-1"}},
                "status": {"ready": True, "state": "Ready"}
            }
        }
    )

    @classmethod
    def from_definition(cls, definition: IndexDefinition,
                        status: Optional[IndexStatus] = None) -> "IndexDescription":
        """Combine a definition with a status, synthesizing a ready one by default."""
        return cls(
            name=definition.name,
            dimension=definition.dimension,
            metric=definition.metric,
            spec=definition.spec,
            status=status or IndexStatus()
        )


class IndexList(BaseModel):
    """Every index in the registry, in registry order."""
    indexes: List[IndexDescription] = Field(default_factory=list)


class IndexCreate(BaseModel):
    """Schema for creating a new index. Name and dimension rules are checked by the API."""
    name: str
    dimension: StrictInt
    metric: Metric
    spec: IndexSpec
