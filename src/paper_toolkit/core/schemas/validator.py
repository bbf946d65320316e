"""
Schema Validation Utilities

Validates paper JSON (the array of sections used by autosave, export and
import) before it is turned into model objects.

Two levels:
- Basic checks (always): shape of every section, group and question,
  known type tags, payload rules per type, and id uniqueness across the
  whole document. Every problem is collected, with a JSON path, so an
  import can report all broken entities at once.
- Strict mode: additionally validates against `paper.schema.json` with
  jsonschema.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import jsonschema

from ..models.content import ITEM_MARKS_KEYS, content_from_dict
from ..models.types import GroupLogic, NumberingStyle, QuestionType


_QUESTION_TYPES = {t.value for t in QuestionType}
_LOGIC_VALUES = {l.value for l in GroupLogic}
_NUMBERING_STYLES = {s.value for s in NumberingStyle}

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_document(data: Any, *, strict: bool = False) -> None:
    """
    Validate a paper document (list of section dicts).

    Args:
        data: Parsed JSON value
        strict: If True, also run jsonschema against paper.schema.json

    Raises:
        ValidationError: With one entry in `errors` per problem found
    """
    if not isinstance(data, list):
        raise ValidationError(
            f"Document must be a list of sections, got {type(data).__name__}",
            path="",
            errors=["Document must be a list of sections"],
        )

    errors: List[str] = []
    seen: Dict[str, str] = {}

    for i, section in enumerate(data):
        _validate_section(section, f"[{i}]", errors, seen)

    if strict:
        schema = _load_schema("paper")
        validator = jsonschema.Draft7Validator(schema)
        for e in sorted(validator.iter_errors(data), key=lambda err: list(err.absolute_path)):
            path = _format_path(e.absolute_path)
            errors.append(f"{path}: {e.message}" if path else e.message)

    if errors:
        raise ValidationError(
            f"Document failed validation with {len(errors)} error(s): {errors[0]}",
            path="",
            errors=errors,
        )


def _format_path(parts) -> str:
    out = ""
    for part in parts:
        out += f"[{part}]" if isinstance(part, int) else f".{part}"
    return out


def _is_one_of(value: Any, allowed: set) -> bool:
    """Membership test that tolerates unhashable JSON values (lists, objects)."""
    return isinstance(value, str) and value in allowed


def _check_id(entity: dict, path: str, errors: List[str], seen: Dict[str, str]) -> None:
    entity_id = entity.get("id")
    if not isinstance(entity_id, str) or not entity_id:
        errors.append(f"{path}.id: must be a non-empty string")
        return
    if entity_id in seen:
        errors.append(f"{path}.id: duplicate id {entity_id!r} (first used at {seen[entity_id]})")
    else:
        seen[entity_id] = path


def _check_text(entity: dict, key: str, path: str, errors: List[str], *, required: bool) -> None:
    if key not in entity:
        if required:
            errors.append(f"{path}.{key}: missing")
        return
    if not isinstance(entity[key], str):
        errors.append(f"{path}.{key}: must be a string")


def _validate_section(section: Any, path: str, errors: List[str], seen: Dict[str, str]) -> None:
    if not isinstance(section, dict):
        errors.append(f"{path}: section must be an object")
        return
    _check_id(section, path, errors, seen)
    _check_text(section, "title", path, errors, required=True)
    _check_text(section, "instruction", path, errors, required=False)

    groups = section.get("groups", [])
    if not isinstance(groups, list):
        errors.append(f"{path}.groups: must be a list")
        return
    for j, group in enumerate(groups):
        _validate_group(group, f"{path}.groups[{j}]", errors, seen)


def _validate_group(group: Any, path: str, errors: List[str], seen: Dict[str, str]) -> None:
    if not isinstance(group, dict):
        errors.append(f"{path}: group must be an object")
        return
    _check_id(group, path, errors, seen)
    _check_text(group, "instruction", path, errors, required=False)

    group_type = group.get("type")
    if not _is_one_of(group_type, _QUESTION_TYPES):
        errors.append(f"{path}.type: unknown group type {group_type!r}")

    logic = group.get("logic")
    if logic not in (None, "") and not _is_one_of(logic, _LOGIC_VALUES):
        errors.append(f"{path}.logic: must be AND or OR, got {logic!r}")

    style = group.get("numberingStyle")
    if style is not None and not _is_one_of(style, _NUMBERING_STYLES):
        errors.append(f"{path}.numberingStyle: unknown style {style!r}")

    questions = group.get("questions", [])
    if not isinstance(questions, list):
        errors.append(f"{path}.questions: must be a list")
        return
    for k, question in enumerate(questions):
        _validate_question(question, f"{path}.questions[{k}]", errors, seen)


def _validate_question(question: Any, path: str, errors: List[str], seen: Dict[str, str]) -> None:
    if not isinstance(question, dict):
        errors.append(f"{path}: question must be an object")
        return
    _check_id(question, path, errors, seen)

    question_type = question.get("type")
    if not _is_one_of(question_type, _QUESTION_TYPES):
        errors.append(f"{path}.type: unknown question type {question_type!r}")
        return

    content = question.get("content")
    if not isinstance(content, dict):
        errors.append(f"{path}.content: must be an object")
    else:
        try:
            content_from_dict(question_type, content)
        except (ValueError, TypeError) as e:
            errors.append(f"{path}.content: {e}")

    marks = question.get("marks")
    if marks is not None and (isinstance(marks, bool) or not isinstance(marks, int) or marks < 0):
        errors.append(f"{path}.marks: must be a non-negative integer")

    marks_key = ITEM_MARKS_KEYS.get(QuestionType(question_type))
    if marks_key and question.get(marks_key) is not None:
        item_marks = question[marks_key]
        if not isinstance(item_marks, list) or any(
            isinstance(m, bool) or not isinstance(m, int) or m < 0 for m in item_marks
        ):
            errors.append(f"{path}.{marks_key}: must be a list of non-negative integers")
