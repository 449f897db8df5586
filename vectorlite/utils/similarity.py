"""
Similarity functions for vector operations.

This module implements the similarity metrics an index can be created with.
Every function returns a score where larger means more similar, so query
results for any metric can be ranked by sorting descending.
"""
from typing import Callable, Dict, Sequence, Union

import numpy as np

from vectorlite.models.index import Metric
from .exceptions import ValidationError

SimilarityFunction = Callable[[Sequence[float], Sequence[float]], float]


def dot_product(vector1: Sequence[float], vector2: Sequence[float]) -> float:
    """
    Calculate dot product between two vectors.

    Formula: Σ(ai * bi)
    """
    return float(np.dot(np.asarray(vector1, dtype=float), np.asarray(vector2, dtype=float)))


def vector_magnitude(vector: Sequence[float]) -> float:
    """
    Calculate the magnitude (L2 norm) of a vector.

    Formula: sqrt(Σ(ai²))
    """
    return float(np.linalg.norm(np.asarray(vector, dtype=float)))


def cosine_similarity(vector1: Sequence[float], vector2: Sequence[float]) -> float:
    """
    Calculate cosine similarity between two vectors.

    Cosine similarity measures the cosine of the angle between two vectors.
    Range: [-1, 1] where 1 means identical direction, 0 means orthogonal, -1 means opposite.

    Formula: cos(θ) = (A · B) / (||A|| * ||B||)

    Time Complexity: O(d) where d is the dimension
    Space Complexity: O(d)

    Args:
        vector1: First vector
        vector2: Second vector

    Returns:
        Cosine similarity score, or exactly 0.0 when either vector has zero magnitude
    """
    a = np.asarray(vector1, dtype=float)
    b = np.asarray(vector2, dtype=float)

    magnitude1 = vector_magnitude(a)
    magnitude2 = vector_magnitude(b)

    # Handle zero vectors
    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0

    return float(np.dot(a, b) / (magnitude1 * magnitude2))


def euclidean_distance(vector1: Sequence[float], vector2: Sequence[float]) -> float:
    """
    Calculate Euclidean distance between two vectors.

    Formula: sqrt(Σ(ai - bi)²)
    """
    a = np.asarray(vector1, dtype=float)
    b = np.asarray(vector2, dtype=float)
    return float(np.linalg.norm(a - b))


def euclidean_similarity(vector1: Sequence[float], vector2: Sequence[float]) -> float:
    """
    Convert Euclidean distance into a similarity score.

    Formula: 1 / (1 + distance)

    Identical points score 1.0; the score decreases monotonically toward 0 as
    the distance grows and never reaches it.

    Args:
        vector1: First vector
        vector2: Second vector

    Returns:
        Similarity score in (0, 1]
    """
    return 1.0 / (1.0 + euclidean_distance(vector1, vector2))


def dot_product_similarity(vector1: Sequence[float], vector2: Sequence[float]) -> float:
    """Unnormalized dot product; may be negative or exceed 1."""
    return dot_product(vector1, vector2)


_SIMILARITY_FUNCTIONS: Dict[Metric, SimilarityFunction] = {
    Metric.COSINE: cosine_similarity,
    Metric.EUCLIDEAN: euclidean_similarity,
    Metric.DOTPRODUCT: dot_product_similarity,
}


def get_similarity_function(metric: Union[Metric, str]) -> SimilarityFunction:
    """
    Look up the similarity function for a metric.

    Args:
        metric: Metric enum member or its string value

    Returns:
        Function scoring two equal-length vectors

    Raises:
        ValidationError: If metric is unknown
    """
    try:
        return _SIMILARITY_FUNCTIONS[Metric(metric)]
    except ValueError:
        raise ValidationError(
            "metric",
            metric,
            f"Unknown metric. Available: {[m.value for m in Metric]}"
        )
