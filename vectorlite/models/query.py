"""
Query models for the local vector database.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class QueryRequest(BaseModel):
    """Schema for a nearest-neighbour query. topK is range-checked by the API."""
    vector: List[float] = Field(..., description="Query vector")
    top_k: StrictInt = Field(..., alias="topK", description="Maximum number of matches")
    namespace: Optional[str] = Field(None, description="Echoed back, never used to filter")
    include_values: bool = Field(False, alias="includeValues")
    include_metadata: bool = Field(False, alias="includeMetadata")

    model_config = ConfigDict(populate_by_name=True)


class ScoredVector(BaseModel):
    """A single query match. values and metadata are present only when requested."""
    id: str
    score: float
    values: Optional[List[float]] = None
    metadata: Optional[Dict[str, Any]] = None


class QueryResult(BaseModel):
    """Matches sorted by descending score, plus the request's namespace."""
    matches: List[ScoredVector] = Field(default_factory=list)
    namespace: str = ""
