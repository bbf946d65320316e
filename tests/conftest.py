import itertools
import os
import random
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import paper_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from paper_toolkit.core.ids import IdGenerator
from paper_toolkit.core.models import (
    ConditionalContent,
    Document,
    FillInBlanksContent,
    GroupLogic,
    MultipleChoiceContent,
    ParagraphContent,
    Question,
    QuestionGroup,
    QuestionType,
    Section,
    TrueFalseContent,
    WrittenContent,
)
from paper_toolkit.editor import (
    DocumentPersistence,
    DocumentStore,
    EditorConfig,
    MemoryStorage,
    PaperEditor,
)


def mcq(qid: str, text: str = "What is 2 + 2?", marks: int = 1) -> Question:
    """Build a multiple-choice question."""
    return Question(
        id=qid,
        type=QuestionType.MCQ,
        content=MultipleChoiceContent(choices=("3", "4", "5"), correct_answer=1, question_text=text),
        marks=marks,
    )


def build_sample_document() -> Document:
    """
    Two sections covering every question type.

    Section A "Algebra" (instruction "algebra basics"): mcq group, true-false group
    Section B "Literature": fill-in-the-blanks group ("vocabulary"),
        short-question, para-question and conditional groups
    """
    section_a = Section(
        id="sec-a",
        title="Algebra",
        instruction="algebra basics",
        groups=(
            QuestionGroup(
                id="g-a1",
                type=QuestionType.MCQ,
                instruction="Choose the correct answer",
                questions=(mcq("q-a1"), mcq("q-a2", "What is 3 x 3?", marks=2)),
            ),
            QuestionGroup(
                id="g-a2",
                type=QuestionType.TRUE_FALSE,
                instruction="Mark true or false",
                questions=(
                    Question(
                        id="q-a3",
                        type=QuestionType.TRUE_FALSE,
                        content=TrueFalseContent(correct_answer=0, question_text="Zero is even"),
                        marks=1,
                    ),
                ),
            ),
        ),
    )
    section_b = Section(
        id="sec-b",
        title="Literature",
        instruction="",
        groups=(
            QuestionGroup(
                id="g-b1",
                type=QuestionType.FILL_IN_THE_BLANKS,
                instruction="vocabulary",
                questions=(
                    Question(
                        id="q-b1",
                        type=QuestionType.FILL_IN_THE_BLANKS,
                        content=FillInBlanksContent("A word that means happy is ____."),
                        marks=1,
                    ),
                ),
            ),
            QuestionGroup(
                id="g-b2",
                type=QuestionType.SHORT_QUESTION,
                instruction="Answer briefly",
                questions=(
                    Question(
                        id="q-b2",
                        type=QuestionType.SHORT_QUESTION,
                        content=WrittenContent("Poetry", ("Define a sonnet", "Name a poet")),
                        item_marks=(2, 1),
                    ),
                ),
            ),
            QuestionGroup(
                id="g-b3",
                type=QuestionType.PARA_QUESTION,
                instruction="Read the passage",
                questions=(
                    Question(
                        id="q-b3",
                        type=QuestionType.PARA_QUESTION,
                        content=ParagraphContent("Once upon a time.", ("Who?", "When?")),
                        item_marks=(1, 1),
                    ),
                ),
            ),
            QuestionGroup(
                id="g-b4",
                type=QuestionType.CONDITIONAL,
                instruction="Attempt any one",
                logic=GroupLogic.OR,
                questions=(
                    Question(
                        id="q-b4",
                        type=QuestionType.CONDITIONAL,
                        content=ConditionalContent(("Write an essay", "Write a letter")),
                        item_marks=(5, 5),
                    ),
                ),
            ),
        ),
    )
    return Document(sections=(section_a, section_b))


@pytest.fixture
def sample_document() -> Document:
    return build_sample_document()


@pytest.fixture
def ids() -> IdGenerator:
    """Deterministic generator: one millisecond per call."""
    ticks = itertools.count(1_700_000_000_000)
    return IdGenerator(clock=lambda: next(ticks), rng=random.Random(42))


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def editor_config(tmp_path: Path) -> EditorConfig:
    return EditorConfig(storage_path=tmp_path / "local_storage.json", export_dir=tmp_path / "exports")


@pytest.fixture
def editor(memory_storage, editor_config, ids) -> PaperEditor:
    """Editor over an empty in-memory store."""
    store = DocumentStore(DocumentPersistence(memory_storage))
    return PaperEditor(store, editor_config, ids)


@pytest.fixture
def sample_editor(memory_storage, editor_config, ids) -> PaperEditor:
    """Editor whose store starts with the sample document."""
    persistence = DocumentPersistence(memory_storage)
    persistence.save(build_sample_document())
    return PaperEditor(DocumentStore(persistence), editor_config, ids)


@pytest.fixture
def make_mcq():
    """Factory for multiple-choice questions: make_mcq(qid, text, marks)."""
    return mcq
