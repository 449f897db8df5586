"""
File-backed document storage for the local vector database.

This module owns the on-disk representation of the database: a registry list
of every index, plus a directory per index holding its config and its vector
set. Every read goes back to disk; nothing is cached in process.

Layout::

    <data_dir>/indexes.json           registry array
    <data_dir>/<name>/config.json     index definition
    <data_dir>/<name>/vectors.json    {"vectors": [...]}

Design Choices:
1. **Write-temp-then-rename**: documents are written to a temporary file in the
   target directory, fsynced, then moved over the destination with os.replace,
   so a reader never observes a partially written document.
2. **Whole-document rewrites**: every change rewrites the full document. This is
   simple and fine at local scale; it is the scalability ceiling of the design.
3. **Absence is not an error**: missing files read back as empty defaults.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from vectorlite.config import REGISTRY_FILENAME, CONFIG_FILENAME, VECTORS_FILENAME
from vectorlite.models import IndexDefinition, IndexDescription, VectorSet
from vectorlite.utils.exceptions import (
    CorruptDocumentError,
    StorageUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_REGISTRY_ADAPTER = TypeAdapter(List[IndexDescription])


class FileStorage:
    """
    JSON document store rooted at a data directory.

    Time Complexity:
    - Registry read/write: O(i) where i is the number of indexes
    - Vector set read/write: O(n * d) where n is vectors in the index, d the dimension
    - Config read/write: O(1)
    """

    def __init__(self, data_dir: Union[str, Path]):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def registry_path(self) -> Path:
        return self._data_dir / REGISTRY_FILENAME

    def initialize(self) -> None:
        """Create the data directory and an empty registry if they do not exist."""
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError("initialize", str(self._data_dir), str(e))

        if not self.registry_path.exists():
            self._atomic_write(self.registry_path, "[]")
            logger.info("Initialized empty registry at %s", self.registry_path)

    # ================== REGISTRY ==================

    def read_registry(self) -> List[IndexDescription]:
        """Read the registry list. An absent file means no indexes yet."""
        content = self._read_text(self.registry_path)
        if content is None:
            return []

        try:
            return _REGISTRY_ADAPTER.validate_json(content)
        except PydanticValidationError as e:
            raise CorruptDocumentError(str(self.registry_path), _describe(e))

    def write_registry(self, entries: List[IndexDescription]) -> None:
        """Replace the registry list."""
        payload = [entry.model_dump(mode="json") for entry in entries]
        self._atomic_write(self.registry_path, _to_json(payload))

    # ================== INDEX CONFIG ==================

    def read_config(self, index_name: str) -> Optional[IndexDefinition]:
        """Read an index definition, or None if the index has no config."""
        path = self._index_dir(index_name) / CONFIG_FILENAME
        content = self._read_text(path)
        if content is None:
            return None

        try:
            return IndexDefinition.model_validate_json(content)
        except PydanticValidationError as e:
            raise CorruptDocumentError(str(path), _describe(e))

    def write_config(self, index_name: str, definition: IndexDefinition) -> None:
        path = self._index_dir(index_name) / CONFIG_FILENAME
        self._atomic_write(path, _to_json(definition.model_dump(mode="json")))

    # ================== VECTOR SETS ==================

    def read_vectors(self, index_name: str) -> VectorSet:
        """Read an index's vector set, or an empty one if none was written."""
        path = self._index_dir(index_name) / VECTORS_FILENAME
        content = self._read_text(path)
        if content is None:
            return VectorSet()

        try:
            return VectorSet.model_validate_json(content)
        except PydanticValidationError as e:
            raise CorruptDocumentError(str(path), _describe(e))

    def write_vectors(self, index_name: str, vector_set: VectorSet) -> None:
        path = self._index_dir(index_name) / VECTORS_FILENAME
        self._atomic_write(path, _to_json(vector_set.to_document()))

    # ================== INDEX TREE ==================

    def index_exists_on_disk(self, index_name: str) -> bool:
        return self._index_dir(index_name).is_dir()

    def delete_index_tree(self, index_name: str) -> None:
        """Remove an index directory and everything in it. No-op if absent."""
        index_dir = self._index_dir(index_name)
        try:
            shutil.rmtree(index_dir)
        except FileNotFoundError:
            return
        except OSError as e:
            logger.error("Failed to delete index tree %s: %s", index_dir, e)
            raise StorageUnavailableError("delete", str(index_dir), str(e))

        logger.debug("Deleted index tree %s", index_dir)

    # ================== HELPERS ==================

    def _index_dir(self, index_name: str) -> Path:
        """Resolve an index directory, refusing names that escape the data directory."""
        if (not index_name or index_name in (".", "..") or os.sep in index_name
                or (os.altsep and os.altsep in index_name)):
            raise ValidationError("name", index_name, "Index name cannot be used as a directory name")

        index_dir = self._data_dir / index_name
        if index_dir.resolve().parent != self._data_dir.resolve():
            raise ValidationError("name", index_name, "Index name resolves outside the data directory")
        return index_dir

    def _read_text(self, path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Failed to read %s: %s", path, e)
            raise StorageUnavailableError("read", str(path), str(e))

    def _atomic_write(self, path: Path, content: str) -> None:
        """
        Write content to path atomically.

        The content goes to a temporary file in the destination directory,
        which is flushed and fsynced before os.replace moves it into place.
        The temporary file is removed if anything fails before the rename.

        Raises:
            StorageUnavailableError: If the filesystem rejects the write
        """
        tmp_path: Optional[str] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            raise StorageUnavailableError("write", str(path), str(e))
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except FileNotFoundError:
                    pass


def _to_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _describe(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    return first.get("msg", str(error))
