"""
Unit tests for PaperEditor.

Covers not-found results, autosave after every mutation, import/export
and the full add/edit/delete walkthrough.
"""

import json
from pathlib import Path

import pytest

from paper_toolkit.core.models import Document, GroupLogic, QuestionType
from paper_toolkit.editor import (
    CommandError,
    DocumentPersistence,
    DocumentStore,
    EditorConfig,
    ImportFormatError,
    PaperEditor,
    ReorderError,
)

MCQ_PAYLOAD = {
    "type": "mcq",
    "content": {"questionText": "Pick", "choices": ["A", "B"], "correctAnswer": 0},
    "marks": 1,
}


class TestScenario:
    """End-to-end editing walkthrough on an empty paper."""

    def test_add_edit_delete_when_walked_through_then_document_tracks_each_step(self, editor, memory_storage):
        # Arrange / Act: build up
        section = editor.add_section("Quiz 1")
        group = editor.add_group(section.id, "mcq", "Pick one")
        question = editor.add_question(section.id, group.id, MCQ_PAYLOAD)

        doc = editor.document
        assert len(doc) == 1
        assert len(doc.sections[0].groups) == 1
        assert doc.sections[0].groups[0].questions[0].content.choices == ("A", "B")

        # Edit
        edited = {**MCQ_PAYLOAD, "content": {"questionText": "Pick", "choices": ["A", "B", "C"], "correctAnswer": 2}}
        assert editor.edit_question(section.id, group.id, question.id, edited).id == question.id
        assert editor.document.find_question(section.id, group.id, question.id).content.correct_answer == 2

        # Delete
        assert editor.delete_question(section.id, group.id, question.id) is True
        assert editor.document.find_group(section.id, group.id).questions == ()

        # Every step was autosaved
        assert DocumentPersistence(memory_storage).load() == editor.document


class TestNotFound:
    """Unresolved ids give explicit results and leave the document alone."""

    def test_mutations_when_ids_missing_then_none_or_false(self, sample_editor):
        before = sample_editor.document

        assert sample_editor.edit_section("sec-x", "T") is False
        assert sample_editor.rename_section("sec-x", "T") is False
        assert sample_editor.delete_section("sec-x") is False
        assert sample_editor.duplicate_section("sec-x") is None
        assert sample_editor.move_section("sec-x", 0) is False
        assert sample_editor.add_group("sec-x", "mcq") is None
        assert sample_editor.edit_group("sec-a", "g-x", "mcq") is False
        assert sample_editor.delete_group("sec-a", "g-x") is False
        assert sample_editor.add_question("sec-a", "g-x", MCQ_PAYLOAD) is None
        assert sample_editor.edit_question("sec-a", "g-a1", "q-x", MCQ_PAYLOAD) is None
        assert sample_editor.delete_question("sec-a", "g-a1", "q-x") is False

        assert sample_editor.document is before

    def test_not_found_when_observed_then_no_signal(self, qtbot, sample_editor):
        with qtbot.assertNotEmitted(sample_editor.store.documentChanged):
            sample_editor.delete_section("sec-x")


class TestSectionOperations:
    """Tests for section-level editor operations."""

    def test_add_section_when_blank_then_command_error(self, editor):
        with pytest.raises(CommandError):
            editor.add_section("")
        assert len(editor.document) == 0

    def test_rename_section_when_blank_then_false_and_title_kept(self, sample_editor):
        assert sample_editor.rename_section("sec-a", "  ") is False
        assert sample_editor.document.find_section("sec-a").title == "Algebra"

    def test_rename_section_when_text_then_applied(self, sample_editor):
        assert sample_editor.rename_section("sec-a", "Numbers") is True
        assert sample_editor.document.find_section("sec-a").title == "Numbers"

    def test_delete_section_when_found_then_cascade(self, sample_editor):
        assert sample_editor.delete_section("sec-a") is True
        ids = set(sample_editor.document.all_ids())
        assert not {"sec-a", "g-a1", "g-a2", "q-a1", "q-a2", "q-a3"} & ids

    def test_duplicate_section_when_found_then_unique_ids(self, sample_editor):
        clone = sample_editor.duplicate_section("sec-b")
        ids = sample_editor.document.all_ids()
        assert sample_editor.document.section_ids[-1] == clone.id
        assert len(ids) == len(set(ids))

    def test_reorder_when_invalid_then_raises_and_unchanged(self, sample_editor):
        before = sample_editor.document
        with pytest.raises(ReorderError):
            sample_editor.reorder_sections(["sec-a"])
        assert sample_editor.document is before

    def test_reorder_when_valid_then_applied(self, sample_editor):
        sample_editor.reorder_sections(["sec-b", "sec-a"])
        assert sample_editor.document.section_ids == ["sec-b", "sec-a"]

    def test_move_section_when_found_then_true(self, sample_editor):
        assert sample_editor.move_section("sec-b", 0) is True
        assert sample_editor.document.section_ids == ["sec-b", "sec-a"]

    def test_clear_when_called_then_empty_and_saved(self, sample_editor, memory_storage):
        sample_editor.clear()
        assert sample_editor.document == Document()
        assert DocumentPersistence(memory_storage).load() == Document()


class TestGroupAndQuestionOperations:
    """Tests for group/question operations and type policy."""

    def test_add_group_when_conditional_then_or_logic(self, sample_editor):
        group = sample_editor.add_group("sec-a", QuestionType.CONDITIONAL, "Any one")
        assert group.logic is GroupLogic.OR

    def test_edit_group_when_found_then_true(self, sample_editor):
        assert sample_editor.edit_group("sec-a", "g-a1", "mcq", "New instruction") is True
        assert sample_editor.document.find_group("sec-a", "g-a1").instruction == "New instruction"

    def test_add_question_when_type_agreement_enforced_then_rejected(self, memory_storage, tmp_path, ids):
        config = EditorConfig(storage_path=tmp_path / "s.json", enforce_type_agreement=True)
        persistence = DocumentPersistence(memory_storage)

        editor = PaperEditor(DocumentStore(persistence), config, ids)
        section = editor.add_section("S")
        group = editor.add_group(section.id, "fill-in-the-blanks")

        with pytest.raises(CommandError, match="does not belong"):
            editor.add_question(section.id, group.id, MCQ_PAYLOAD)


class TestImportExport:
    """Tests for editor import/export."""

    def test_export_json_when_called_then_matches_document(self, sample_editor):
        assert json.loads(sample_editor.export_json()) == sample_editor.document.to_list()

    def test_export_to_file_when_no_directory_then_config_dir(self, sample_editor, editor_config):
        path = sample_editor.export_to_file()
        assert path == editor_config.export_dir / "paper.json"
        assert path.exists()

    def test_import_json_when_valid_then_replaces_and_saves(self, editor, sample_document, memory_storage):
        editor.import_json(json.dumps(sample_document.to_list()))
        assert editor.document == sample_document
        assert DocumentPersistence(memory_storage).load() == sample_document

    @pytest.mark.parametrize("text", ["not json", '{"a": 1}', '[{"id": "sec-1"}]'])
    def test_import_json_when_malformed_then_error_and_unchanged(self, sample_editor, text):
        before = sample_editor.document
        with pytest.raises(ImportFormatError):
            sample_editor.import_json(text)
        assert sample_editor.document is before

    def test_import_file_when_exported_then_round_trip(self, sample_editor, editor, tmp_path: Path):
        path = sample_editor.export_to_file(tmp_path)
        editor.import_file(path)
        assert editor.document == sample_editor.document


class TestFromConfig:
    """Tests for PaperEditor.from_config with file storage."""

    def test_from_config_when_reopened_then_document_restored(self, tmp_path: Path, ids):
        config = EditorConfig(storage_path=tmp_path / "local_storage.json")
        first = PaperEditor.from_config(config, ids)
        section = first.add_section("Persisted")

        second = PaperEditor.from_config(config)

        assert second.document.section_ids == [section.id]
        stored = json.loads((tmp_path / "local_storage.json").read_text(encoding="utf-8"))
        assert "paper_generator_v2" in stored

    def test_filtered_when_query_then_view_only(self, sample_editor):
        before = sample_editor.document
        view = sample_editor.filtered("vocabulary")
        assert view.section_ids == ["sec-b"]
        assert sample_editor.document is before
