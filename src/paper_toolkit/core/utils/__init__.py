"""
Utils Package

Serialization and numbering helpers.
"""

from .numbering import format_number, sub_item_labels, to_alphabetic, to_roman
from .serialization import (
    deserialize_document,
    dumps_document,
    loads_document,
    serialize_document,
)

__all__ = [
    "format_number",
    "sub_item_labels",
    "to_alphabetic",
    "to_roman",
    "deserialize_document",
    "dumps_document",
    "loads_document",
    "serialize_document",
]
