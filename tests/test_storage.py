"""Tests for the file-backed document store."""

import json
import os
from pathlib import Path

import pytest

from vectorlite.db import FileStorage
from vectorlite.models import IndexDefinition, IndexDescription, IndexSpec, StoredVector, VectorSet
from vectorlite.utils.exceptions import CorruptDocumentError, StorageUnavailableError, ValidationError


@pytest.fixture
def definition(index_spec: IndexSpec) -> IndexDefinition:
    return IndexDefinition(name="docs", dimension=3, metric="euclidean", spec=index_spec)


class TestInitialize:
    def test_creates_data_dir_and_empty_registry(self, data_dir: Path):
        storage = FileStorage(data_dir)
        storage.initialize()

        assert data_dir.is_dir()
        assert json.loads((data_dir / "indexes.json").read_text()) == []

    def test_keeps_existing_registry(self, storage: FileStorage, definition: IndexDefinition):
        storage.write_registry([IndexDescription.from_definition(definition)])
        storage.initialize()

        assert [entry.name for entry in storage.read_registry()] == ["docs"]


class TestRegistryDocument:
    def test_absent_registry_reads_as_empty(self, tmp_path: Path):
        assert FileStorage(tmp_path / "missing").read_registry() == []

    def test_round_trip_preserves_order(self, storage: FileStorage, index_spec: IndexSpec):
        entries = [
            IndexDescription(name=name, dimension=2, metric="cosine", spec=index_spec)
            for name in ["zeta", "alpha", "mid"]
        ]
        storage.write_registry(entries)

        assert [entry.name for entry in storage.read_registry()] == ["zeta", "alpha", "mid"]

    def test_registry_layout_on_disk(self, storage: FileStorage, definition: IndexDefinition):
        storage.write_registry([IndexDescription.from_definition(definition)])

        raw = json.loads(storage.registry_path.read_text(encoding="utf-8"))
        assert raw == [{
            "name": "docs",
            "dimension": 3,
            "metric": "euclidean",
            "spec": {"serverless": {"cloud": "aws", "region": "us-east-1"}},
            "status": {"ready": True, "state": "Ready"},
        }]

    def test_malformed_registry_raises_corrupt_document(self, storage: FileStorage):
        storage.registry_path.write_text("[{not json", encoding="utf-8")

        with pytest.raises(CorruptDocumentError):
            storage.read_registry()


class TestConfigDocument:
    def test_absent_config_reads_as_none(self, storage: FileStorage):
        assert storage.read_config("nope") is None

    def test_write_creates_index_directory(self, storage: FileStorage, data_dir: Path,
                                           definition: IndexDefinition):
        storage.write_config("docs", definition)

        assert (data_dir / "docs" / "config.json").is_file()
        assert storage.read_config("docs") == definition

    def test_malformed_config_raises_corrupt_document(self, storage: FileStorage, data_dir: Path):
        (data_dir / "broken").mkdir()
        (data_dir / "broken" / "config.json").write_text("{\"name\": ", encoding="utf-8")

        with pytest.raises(CorruptDocumentError):
            storage.read_config("broken")

    def test_schema_invalid_config_raises_corrupt_document(self, storage: FileStorage, data_dir: Path):
        (data_dir / "broken").mkdir()
        (data_dir / "broken" / "config.json").write_text("{\"name\": \"broken\"}", encoding="utf-8")

        with pytest.raises(CorruptDocumentError):
            storage.read_config("broken")


class TestVectorDocument:
    def test_absent_vectors_read_as_empty_set(self, storage: FileStorage):
        assert storage.read_vectors("nope").vectors == []

    def test_metadata_omitted_when_absent(self, storage: FileStorage, data_dir: Path):
        storage.write_vectors("docs", VectorSet(vectors=[
            StoredVector(id="a", values=[1, 2, 3]),
            StoredVector(id="b", values=[4, 5, 6], metadata={"tag": "x"}),
        ]))

        raw = json.loads((data_dir / "docs" / "vectors.json").read_text(encoding="utf-8"))
        assert raw == {"vectors": [
            {"id": "a", "values": [1.0, 2.0, 3.0]},
            {"id": "b", "values": [4.0, 5.0, 6.0], "metadata": {"tag": "x"}},
        ]}

    def test_round_trip(self, storage: FileStorage):
        vector_set = VectorSet(vectors=[StoredVector(id="a", values=[0.5, -1.5], metadata={"n": 1})])
        storage.write_vectors("docs", vector_set)

        assert storage.read_vectors("docs") == vector_set

    def test_malformed_vectors_raise_corrupt_document(self, storage: FileStorage, data_dir: Path):
        (data_dir / "docs").mkdir()
        (data_dir / "docs" / "vectors.json").write_text("{\"vectors\": [", encoding="utf-8")

        with pytest.raises(CorruptDocumentError):
            storage.read_vectors("docs")


class TestAtomicWrites:
    def test_no_temp_files_left_behind(self, storage: FileStorage, data_dir: Path,
                                       definition: IndexDefinition):
        storage.write_config("docs", definition)
        storage.write_vectors("docs", VectorSet(vectors=[StoredVector(id="a", values=[1, 2, 3])]))
        storage.write_registry([IndexDescription.from_definition(definition)])

        leftovers = [path for path in data_dir.rglob("*") if path.name.endswith(".tmp")]
        assert leftovers == []

    def test_overwrite_replaces_document(self, storage: FileStorage):
        storage.write_vectors("docs", VectorSet(vectors=[StoredVector(id="a", values=[1])]))
        storage.write_vectors("docs", VectorSet(vectors=[StoredVector(id="b", values=[2])]))

        assert [v.id for v in storage.read_vectors("docs").vectors] == ["b"]

    def test_failed_write_keeps_previous_document(self, storage: FileStorage, monkeypatch):
        storage.write_vectors("docs", VectorSet(vectors=[StoredVector(id="a", values=[1])]))

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", failing_replace)
        with pytest.raises(StorageUnavailableError):
            storage.write_vectors("docs", VectorSet(vectors=[StoredVector(id="b", values=[2])]))
        monkeypatch.undo()

        assert [v.id for v in storage.read_vectors("docs").vectors] == ["a"]
        assert [p for p in (storage.data_dir / "docs").iterdir() if p.name.endswith(".tmp")] == []


class TestIndexTree:
    def test_delete_removes_directory(self, storage: FileStorage, data_dir: Path,
                                      definition: IndexDefinition):
        storage.write_config("docs", definition)
        storage.write_vectors("docs", VectorSet())

        storage.delete_index_tree("docs")

        assert not (data_dir / "docs").exists()
        assert not storage.index_exists_on_disk("docs")

    def test_delete_absent_is_noop(self, storage: FileStorage):
        storage.delete_index_tree("never-created")

    @pytest.mark.parametrize("name", ["..", "a/b", ""])
    def test_rejects_names_escaping_data_dir(self, storage: FileStorage, name: str):
        with pytest.raises(ValidationError):
            storage.read_config(name)
