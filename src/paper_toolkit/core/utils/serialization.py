"""
Serialization Utilities

Provides to/from JSON utilities for the paper document.

- `serialize_document` / `deserialize_document`: model <-> plain lists
- `dumps_document` / `loads_document`: model <-> JSON text
- Validation via the schema validator before any model is built
- Calculated values (numbers, marks totals) are never written
"""

from __future__ import annotations

import json
from typing import Any

from ..models.document import Document
from ..schemas.validator import ValidationError, validate_document


def serialize_document(document: Document) -> list[dict[str, Any]]:
    """
    Serialize a Document to a list of section dictionaries.

    The output can be written to JSON and will pass validation.
    """
    return document.to_list()


def deserialize_document(
    data: Any,
    *,
    validate: bool = True,
    strict: bool = False,
) -> Document:
    """
    Deserialize a Document from parsed JSON.

    Args:
        data: List of section dictionaries
        validate: Whether to run the validator first
        strict: Passed to the validator (adds jsonschema checks)

    Returns:
        Document instance

    Raises:
        ValidationError: If the data is invalid
    """
    if validate:
        validate_document(data, strict=strict)

    try:
        return Document.from_list(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Cannot build document: {e}", errors=[str(e)]) from e


def dumps_document(document: Document, *, pretty: bool = False) -> str:
    """
    Encode a Document as JSON text.

    Args:
        document: Document to encode
        pretty: Indent by two spaces (export format); compact otherwise

    Returns:
        JSON text of the section array
    """
    data = serialize_document(document)
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def loads_document(text: str, *, validate: bool = True, strict: bool = False) -> Document:
    """
    Decode JSON text into a Document.

    Raises:
        json.JSONDecodeError: If the text is not JSON
        ValidationError: If the JSON is not a valid document
    """
    return deserialize_document(json.loads(text), validate=validate, strict=strict)
