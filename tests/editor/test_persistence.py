"""Unit tests for storage, autosave persistence and export/import."""

import json
from pathlib import Path

import pytest

from paper_toolkit.core.models import Document
from paper_toolkit.editor.persistence import (
    DocumentPersistence,
    ImportFormatError,
    JsonFileStorage,
    MemoryStorage,
    StorageError,
    export_json,
    import_json,
    read_import,
    write_export,
)


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_get_item_when_file_missing_then_none(self, tmp_path: Path):
        assert JsonFileStorage(tmp_path / "store.json").get_item("k") is None

    def test_set_item_when_called_then_persisted_as_json_object(self, tmp_path: Path):
        path = tmp_path / "nested" / "store.json"
        storage = JsonFileStorage(path)

        storage.set_item("k", "v")

        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}
        assert JsonFileStorage(path).get_item("k") == "v"
        assert not path.with_suffix(".tmp").exists()

    def test_set_item_when_other_keys_then_preserved(self, tmp_path: Path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")

        JsonFileStorage(path).set_item("k", "v")

        assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark", "k": "v"}

    def test_get_item_when_file_corrupted_then_none(self, tmp_path: Path):
        path = tmp_path / "store.json"
        path.write_text("{broken", encoding="utf-8")
        assert JsonFileStorage(path).get_item("k") is None

    def test_get_item_when_file_not_utf8_then_none(self, tmp_path: Path):
        path = tmp_path / "store.json"
        path.write_bytes(b'{"paper_generator_v2": "\xff\xfe"}')
        assert JsonFileStorage(path).get_item("paper_generator_v2") is None

    def test_get_item_when_file_holds_list_then_none(self, tmp_path: Path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert JsonFileStorage(path).get_item("k") is None

    def test_remove_item_when_present_then_gone(self, tmp_path: Path):
        storage = JsonFileStorage(tmp_path / "store.json")
        storage.set_item("k", "v")
        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_set_item_when_path_is_directory_then_storage_error(self, tmp_path: Path):
        target = tmp_path / "store.json"
        target.mkdir()
        with pytest.raises(StorageError):
            JsonFileStorage(target).set_item("k", "v")


class TestDocumentPersistence:
    """Tests for DocumentPersistence."""

    def test_load_when_key_absent_then_empty(self, memory_storage):
        assert DocumentPersistence(memory_storage).load() == Document()

    def test_save_when_called_then_compact_json_under_key(self, memory_storage, sample_document):
        DocumentPersistence(memory_storage).save(sample_document)
        raw = memory_storage.items["paper_generator_v2"]
        assert "\n" not in raw
        assert json.loads(raw) == sample_document.to_list()

    def test_load_when_saved_then_equal(self, memory_storage, sample_document):
        persistence = DocumentPersistence(memory_storage)
        persistence.save(sample_document)
        assert persistence.load() == sample_document

    @pytest.mark.parametrize("raw", ["{not json", '{"sections": []}', '[{"title": 3}]'])
    def test_load_when_value_unusable_then_empty(self, raw):
        storage = MemoryStorage({"paper_generator_v2": raw})
        assert DocumentPersistence(storage).load() == Document()

    def test_load_when_file_not_utf8_then_empty(self, tmp_path: Path):
        path = tmp_path / "store.json"
        path.write_bytes(b'{"paper_generator_v2": "\xff\xfe"}')
        assert DocumentPersistence(JsonFileStorage(path)).load() == Document()

    def test_load_when_logic_is_object_then_empty(self, sample_document):
        data = sample_document.to_list()
        data[1]["groups"][3]["logic"] = {"x": 1}
        storage = MemoryStorage({"paper_generator_v2": json.dumps(data)})
        assert DocumentPersistence(storage).load() == Document()

    def test_load_when_choices_is_string_then_empty(self, sample_document):
        data = sample_document.to_list()
        data[0]["groups"][0]["questions"][0]["content"]["choices"] = "AB"
        data[0]["groups"][0]["questions"][0]["content"]["correctAnswer"] = 0
        storage = MemoryStorage({"paper_generator_v2": json.dumps(data)})
        assert DocumentPersistence(storage).load() == Document()

    def test_clear_when_called_then_key_removed(self, memory_storage, sample_document):
        persistence = DocumentPersistence(memory_storage)
        persistence.save(sample_document)
        persistence.clear()
        assert "paper_generator_v2" not in memory_storage.items

    def test_load_when_custom_key_then_isolated(self, memory_storage, sample_document):
        DocumentPersistence(memory_storage, key="other").save(sample_document)
        assert DocumentPersistence(memory_storage).load() == Document()


class TestExport:
    """Tests for export_json and write_export."""

    def test_export_json_when_called_then_pretty_printed(self, sample_document):
        text = export_json(sample_document)
        assert text.startswith("[\n  {")
        assert json.loads(text) == sample_document.to_list()

    def test_write_export_when_called_then_paper_json_written(self, tmp_path: Path, sample_document):
        path = write_export(sample_document, tmp_path / "out")
        assert path == tmp_path / "out" / "paper.json"
        assert import_json(path.read_text(encoding="utf-8")) == sample_document


class TestImport:
    """Tests for import_json and read_import."""

    def test_import_when_valid_then_document(self, sample_document):
        assert import_json(export_json(sample_document)) == sample_document

    def test_import_when_not_json_then_parse_error(self):
        with pytest.raises(ImportFormatError) as exc_info:
            import_json("this is not json")
        assert exc_info.value.message == "Failed to parse JSON"

    def test_import_when_object_then_invalid_format(self):
        with pytest.raises(ImportFormatError) as exc_info:
            import_json('{"sections": []}')
        assert exc_info.value.message == "Invalid format"

    def test_import_when_entities_broken_then_each_listed(self, sample_document):
        data = sample_document.to_list()
        data[0]["groups"][0]["type"] = "essay"
        data[1]["groups"][0]["questions"][0]["id"] = "q-a1"

        with pytest.raises(ImportFormatError) as exc_info:
            import_json(json.dumps(data), strict=False)

        assert exc_info.value.message == "Invalid paper: 2 problem(s) found"
        assert len(exc_info.value.errors) == 2

    def test_import_when_strict_then_schema_errors_added(self, sample_document):
        data = sample_document.to_list()
        data[0]["groups"][0]["type"] = "essay"

        with pytest.raises(ImportFormatError) as exc_info:
            import_json(json.dumps(data), strict=True)

        assert any("is not one of" in e for e in exc_info.value.errors)
        assert any("unknown group type" in e for e in exc_info.value.errors)

    def test_import_when_group_type_is_list_then_invalid_paper(self, sample_document):
        data = sample_document.to_list()
        data[0]["groups"][0]["type"] = ["mcq"]

        with pytest.raises(ImportFormatError) as exc_info:
            import_json(json.dumps(data), strict=False)

        assert any("unknown group type" in e for e in exc_info.value.errors)

    def test_read_import_when_file_missing_then_storage_error(self, tmp_path: Path):
        with pytest.raises(StorageError):
            read_import(tmp_path / "missing.json")
