"""
Index registry for the local vector database.

The registry enforces index-name uniqueness and keeps the registry list and
each index's config document consistent across create, get, list and delete.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from vectorlite.models import IndexDefinition, IndexDescription, IndexSpec, Metric
from vectorlite.utils.concurrency import IndexLocks, ReadWriteLock, thread_safe_read, thread_safe_write
from vectorlite.utils.exceptions import EntityAlreadyExistsError, EntityNotFoundError, ValidationError
from .storage import FileStorage

logger = logging.getLogger(__name__)


class IndexRegistry:
    """
    Creates, looks up, lists and deletes index definitions.

    The registry list is the source of truth for which indexes exist. Create
    writes the index config before the registry, and delete removes the
    registry entry before the index files, so an interrupted operation can
    leave an orphaned index directory but never a registry entry without a
    config. Orphaned directories are cleared the next time the name is created.

    Registry read-modify-write cycles are serialized with a readers-writer
    lock; create and delete additionally hold the write lock of the index
    they touch so they never interleave with an upsert to it.
    """

    def __init__(self, storage: FileStorage, locks: Optional[IndexLocks] = None):
        self._storage = storage
        self._index_locks = locks or IndexLocks()
        self._lock = ReadWriteLock()

    @thread_safe_write
    def create(self, name: str, dimension: int, metric: Union[Metric, str],
               spec: Union[IndexSpec, Dict[str, Any]]) -> IndexDescription:
        """
        Create a new index.

        Args:
            name: Unique index name
            dimension: Length of every vector stored in the index
            metric: Similarity metric used for queries
            spec: Placement descriptor, stored verbatim

        Returns:
            The registry entry of the new index

        Raises:
            EntityAlreadyExistsError: If an index with this name exists
            ValidationError: If the definition is malformed
        """
        entries = self._storage.read_registry()
        if any(entry.name == name for entry in entries):
            raise EntityAlreadyExistsError("Index", name)

        try:
            definition = IndexDefinition(name=name, dimension=dimension, metric=metric, spec=spec)
        except PydanticValidationError as e:
            raise ValidationError("index", name, str(e.errors()[0].get("msg", e)))

        entry = IndexDescription.from_definition(definition)

        with self._index_locks.write_lock(name):
            if self._storage.index_exists_on_disk(name):
                logger.warning("Removing orphaned files for unregistered index '%s'", name)
                self._storage.delete_index_tree(name)

            self._storage.write_config(name, definition)
            self._storage.write_registry([*entries, entry])

        logger.info("Created index '%s' (dimension=%d, metric=%s)",
                    name, definition.dimension, definition.metric.value)
        return entry

    def get(self, name: str) -> Optional[IndexDescription]:
        """Return the index with a synthesized ready status, or None if it does not exist."""
        definition = self._storage.read_config(name)
        if definition is None:
            return None
        return IndexDescription.from_definition(definition)

    def describe(self, name: str) -> IndexDescription:
        """Like get, but raises EntityNotFoundError when the index does not exist."""
        description = self.get(name)
        if description is None:
            raise EntityNotFoundError("Index", name)
        return description

    @thread_safe_write
    def delete(self, name: str) -> None:
        """
        Delete an index and its vector set.

        The registry entry is removed first so the index disappears from
        listings before its files are deleted.

        Raises:
            EntityNotFoundError: If no registry entry matches name
        """
        entries = self._storage.read_registry()
        remaining = [entry for entry in entries if entry.name != name]
        if len(remaining) == len(entries):
            raise EntityNotFoundError("Index", name)

        with self._index_locks.write_lock(name):
            self._storage.write_registry(remaining)
            self._storage.delete_index_tree(name)

        logger.info("Deleted index '%s'", name)

    @thread_safe_read
    def list(self) -> List[IndexDescription]:
        """Return every registry entry, in registry order."""
        return self._storage.read_registry()
