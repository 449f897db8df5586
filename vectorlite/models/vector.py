"""
Vector models for the local vector database.

A stored vector is an identifier, its embedding values and optional metadata.
Upserting a vector replaces the whole record for its identifier.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StoredVector(BaseModel):
    """A single vector as persisted in an index's vector set."""
    id: str = Field(..., min_length=1, description="Identifier, unique within an index")
    values: List[float] = Field(..., description="Embedding values")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Opaque key-value metadata")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "vec-1",
                "values": [0.1, 0.2, 0.3],
                "metadata": {"source": "document_1", "page": 1}
            }
        }
    )

    def to_document(self) -> Dict[str, Any]:
        """Serializable form; metadata is omitted when absent."""
        document: Dict[str, Any] = {"id": self.id, "values": list(self.values)}
        if self.metadata is not None:
            document["metadata"] = self.metadata
        return document


class VectorSet(BaseModel):
    """Every vector stored for one index."""
    vectors: List[StoredVector] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.vectors)

    def to_document(self) -> Dict[str, Any]:
        return {"vectors": [vector.to_document() for vector in self.vectors]}


class UpsertRequest(BaseModel):
    """Schema for an upsert call."""
    vectors: List[StoredVector]
    namespace: Optional[str] = None


class UpsertResult(BaseModel):
    """Number of vectors in the upserted batch, duplicates included."""
    upserted_count: int = Field(..., alias="upsertedCount")

    model_config = ConfigDict(populate_by_name=True)
