"""
Boundary validation helpers.

The storage engine assumes its inputs are well formed; these checks run at the
API boundary before any engine call.
"""
import re
from typing import Any, Iterable, Sequence

from vectorlite.config import INDEX_NAME_PATTERN, MAX_INDEX_NAME_LENGTH
from .exceptions import DimensionMismatchError

_INDEX_NAME_RE = re.compile(INDEX_NAME_PATTERN)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_index_name(name: Any) -> bool:
    """Lowercase alphanumerics and hyphens, 1 to 45 characters."""
    if not isinstance(name, str):
        return False
    if len(name) == 0 or len(name) > MAX_INDEX_NAME_LENGTH:
        return False
    return _INDEX_NAME_RE.match(name) is not None


def is_valid_dimension(dimension: Any) -> bool:
    return _is_int(dimension) and dimension > 0


def is_valid_top_k(top_k: Any) -> bool:
    return _is_int(top_k) and top_k >= 1


def is_valid_vector_length(values: Sequence[float], expected_dimension: int) -> bool:
    return len(values) == expected_dimension


def validate_vector_dimensions(vectors: Iterable[Any], expected_dimension: int) -> None:
    """
    Ensure every vector in a batch matches the index dimension.

    Args:
        vectors: Objects with ``id`` and ``values`` attributes
        expected_dimension: Dimension of the target index

    Raises:
        DimensionMismatchError: For the first vector whose length differs
    """
    for vector in vectors:
        if not is_valid_vector_length(vector.values, expected_dimension):
            raise DimensionMismatchError(expected_dimension, len(vector.values), vector.id)
