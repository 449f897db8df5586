"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from vectorlite.db import FileStorage, IndexRegistry, VectorStore
from vectorlite.main import create_app
from vectorlite.models import IndexSpec, StoredVector
from vectorlite.utils.concurrency import IndexLocks


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Root of an empty database."""
    return tmp_path / "data"


@pytest.fixture
def storage(data_dir: Path) -> FileStorage:
    store = FileStorage(data_dir)
    store.initialize()
    return store


@pytest.fixture
def locks() -> IndexLocks:
    return IndexLocks()


@pytest.fixture
def registry(storage: FileStorage, locks: IndexLocks) -> IndexRegistry:
    return IndexRegistry(storage, locks)


@pytest.fixture
def vector_store(storage: FileStorage, locks: IndexLocks) -> VectorStore:
    return VectorStore(storage, locks)


@pytest.fixture
def index_spec() -> IndexSpec:
    return IndexSpec.model_validate({"serverless": {"cloud": "aws", "region": "us-east-1"}})


@pytest.fixture
def cosine_index(registry: IndexRegistry, index_spec: IndexSpec) -> str:
    """A three-dimensional cosine index named 't'."""
    registry.create("t", 3, "cosine", index_spec)
    return "t"


@pytest.fixture
def sample_vectors() -> list[StoredVector]:
    return [
        StoredVector(id="v1", values=[1.0, 0.0, 0.0], metadata={"text": "first vector"}),
        StoredVector(id="v2", values=[0.0, 1.0, 0.0], metadata={"text": "second vector"}),
        StoredVector(id="v3", values=[0.7, 0.7, 0.0]),
    ]


@pytest.fixture
def client(data_dir: Path):
    """API client bound to a fresh data directory."""
    with TestClient(create_app(data_dir)) as test_client:
        yield test_client
