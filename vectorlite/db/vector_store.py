"""
Vector storage and similarity search for the local vector database.

Upserts merge a batch of vectors into an index's vector set by identifier.
Queries are exhaustive: every stored vector is scored against the query
vector, the scores are sorted descending and the top K are returned.

Time Complexity:
- Upsert: O(n + b) dictionary work plus an O(n * d) rewrite of the vector set
- Query: O(n * d) scoring plus O(n log n) sorting

where n is the number of stored vectors, b the batch size and d the dimension.
"""
import logging
from typing import Dict, List, Optional, Sequence, Union

from vectorlite.models import Metric, QueryResult, ScoredVector, StoredVector, UpsertResult, VectorSet
from vectorlite.utils.concurrency import IndexLocks
from vectorlite.utils.exceptions import DimensionMismatchError, EntityNotFoundError
from vectorlite.utils.similarity import get_similarity_function
from .storage import FileStorage

logger = logging.getLogger(__name__)


class VectorStore:
    """
    Upsert and query operations over per-index vector sets.

    Dimension conformance is the caller's responsibility: vectors are stored
    as given, so callers must check every batch against the index dimension
    (see ``validate_vector_dimensions``) before calling upsert.
    """

    def __init__(self, storage: FileStorage, locks: Optional[IndexLocks] = None):
        self._storage = storage
        self._locks = locks or IndexLocks()

    def upsert(self, index_name: str, vectors: Sequence[StoredVector]) -> UpsertResult:
        """
        Insert or replace vectors by identifier.

        Each input vector replaces any stored vector with the same id in full,
        so metadata omitted from the new write is dropped. Stored vectors keep
        their position; new ids are appended in batch order.

        Args:
            index_name: Target index
            vectors: Batch to upsert

        Returns:
            The batch length, counting repeated ids once per occurrence

        Raises:
            EntityNotFoundError: If the index does not exist
        """
        with self._locks.write_lock(index_name):
            if self._storage.read_config(index_name) is None:
                raise EntityNotFoundError("Index", index_name)

            current = self._storage.read_vectors(index_name)

            merged: Dict[str, StoredVector] = {vector.id: vector for vector in current.vectors}
            for vector in vectors:
                merged[vector.id] = StoredVector(
                    id=vector.id,
                    values=list(vector.values),
                    metadata=vector.metadata
                )

            self._storage.write_vectors(index_name, VectorSet(vectors=list(merged.values())))

        logger.info("Upserted %d vectors into index '%s' (%d stored)",
                    len(vectors), index_name, len(merged))
        return UpsertResult(upserted_count=len(vectors))

    def query(self, index_name: str, query_vector: Sequence[float], top_k: int,
              metric: Union[Metric, str], include_values: bool = False,
              include_metadata: bool = False, namespace: Optional[str] = None) -> QueryResult:
        """
        Find the top_k stored vectors most similar to query_vector.

        Args:
            index_name: Index to search
            query_vector: Vector with the index's dimension
            top_k: Maximum number of matches; all vectors are returned if it exceeds the set size
            metric: Similarity metric of the index
            include_values: Include stored values in each match
            include_metadata: Include stored metadata in each match
            namespace: Echoed back in the result; never used to filter

        Returns:
            Matches sorted by score, highest first

        Raises:
            DimensionMismatchError: If a stored vector's length differs from the query's
        """
        with self._locks.read_lock(index_name):
            vector_set = self._storage.read_vectors(index_name)

        if len(vector_set) == 0:
            return QueryResult(matches=[], namespace=namespace or "")

        similarity = get_similarity_function(metric)

        scored: List[ScoredVector] = []
        for vector in vector_set.vectors:
            if len(vector.values) != len(query_vector):
                raise DimensionMismatchError(len(query_vector), len(vector.values), vector.id)
            scored.append(ScoredVector(
                id=vector.id,
                score=similarity(query_vector, vector.values),
                values=vector.values if include_values else None,
                metadata=vector.metadata if include_metadata else None
            ))

        # Sort by similarity (descending) and return top k
        scored.sort(key=lambda match: match.score, reverse=True)

        logger.debug("Query on index '%s' scored %d vectors", index_name, len(scored))
        return QueryResult(matches=scored[:top_k], namespace=namespace or "")
