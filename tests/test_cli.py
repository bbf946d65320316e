"""Tests for the paper-toolkit command line."""

import json
from pathlib import Path

import pytest

from paper_toolkit.cli import build_parser, format_outline, main
from paper_toolkit.core.models import Document
from paper_toolkit.editor import DocumentPersistence, JsonFileStorage


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    return tmp_path / "local_storage.json"


@pytest.fixture
def seeded_storage(storage_path: Path, sample_document) -> Path:
    DocumentPersistence(JsonFileStorage(storage_path)).save(sample_document)
    return storage_path


def load(path: Path) -> Document:
    return DocumentPersistence(JsonFileStorage(path)).load()


class TestFormatOutline:
    """Tests for format_outline."""

    def test_outline_when_empty_then_placeholder(self):
        assert format_outline(Document()) == ["(empty paper)"]

    def test_outline_when_sample_then_numbers_and_titles(self, sample_document):
        lines = format_outline(sample_document)
        text = "\n".join(lines)

        assert lines[0].startswith("Algebra  [sec-a]  (3 questions, 4 marks)")
        assert "Multiple Choice Questions" in text
        assert "Conditional Questions (OR)" in text
        assert "    7. Write an essay" in text
        assert "       2) Name a poet" in text


class TestCommands:
    """Tests for main() subcommands."""

    def test_show_when_seeded_then_outline_printed(self, seeded_storage, capsys):
        assert main(["--storage", str(seeded_storage), "show"]) == 0
        assert "Literature" in capsys.readouterr().out

    def test_search_when_query_then_filtered(self, seeded_storage, capsys):
        assert main(["--storage", str(seeded_storage), "search", "vocabulary"]) == 0
        out = capsys.readouterr().out
        assert "Fill in the Blanks" in out
        assert "Algebra" not in out

    def test_add_section_when_title_then_saved(self, storage_path, capsys):
        assert main(["--storage", str(storage_path), "add-section", "Quiz 1", "--instruction", "All"]) == 0
        new_id = capsys.readouterr().out.strip()

        doc = load(storage_path)
        assert doc.section_ids == [new_id]
        assert doc.sections[0].instruction == "All"

    def test_add_section_when_blank_title_then_exit_one(self, storage_path, capsys):
        assert main(["--storage", str(storage_path), "add-section", "  "]) == 1
        assert "Error" in capsys.readouterr().err

    def test_duplicate_when_missing_then_exit_one(self, seeded_storage, capsys):
        assert main(["--storage", str(seeded_storage), "duplicate-section", "sec-x"]) == 1
        assert "not found" in capsys.readouterr().err

    def test_duplicate_when_found_then_appended(self, seeded_storage):
        assert main(["--storage", str(seeded_storage), "duplicate-section", "sec-a"]) == 0
        assert load(seeded_storage).sections[-1].title == "Algebra (copy)"

    def test_delete_when_not_confirmed_then_kept(self, seeded_storage, capsys):
        assert main(["--storage", str(seeded_storage), "delete-section", "sec-a"]) == 1
        assert "--yes" in capsys.readouterr().err
        assert "sec-a" in load(seeded_storage).section_ids

    def test_delete_when_confirmed_then_removed(self, seeded_storage):
        assert main(["--storage", str(seeded_storage), "delete-section", "sec-a", "--yes"]) == 0
        assert load(seeded_storage).section_ids == ["sec-b"]

    def test_clear_when_confirmed_then_empty(self, seeded_storage):
        assert main(["--storage", str(seeded_storage), "clear", "--yes"]) == 0
        assert load(seeded_storage) == Document()

    def test_export_then_import_when_round_trip_then_equal(self, seeded_storage, tmp_path, sample_document, capsys):
        out_dir = tmp_path / "out"
        assert main(["--storage", str(seeded_storage), "export", str(out_dir)]) == 0
        exported = Path(capsys.readouterr().out.strip())
        assert exported == out_dir / "paper.json"

        other = tmp_path / "other.json"
        assert main(["--storage", str(other), "import", str(exported)]) == 0
        assert load(other) == sample_document

    def test_import_when_invalid_then_errors_listed(self, storage_path, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps([{"id": "sec-1", "groups": []}]), encoding="utf-8")

        assert main(["--storage", str(storage_path), "import", str(bad)]) == 1

        err = capsys.readouterr().err
        assert "Import failed: Invalid paper" in err
        assert "[0].title: missing" in err


def test_parser_when_no_command_then_exits():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
