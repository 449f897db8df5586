"""
Storage and query engine for the local vector database.
"""

from .storage import FileStorage
from .registry import IndexRegistry
from .vector_store import VectorStore

__all__ = [
    "FileStorage",
    "IndexRegistry",
    "VectorStore",
]
