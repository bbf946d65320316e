"""
Schemas Package

JSON schema definition and validation for the paper wire format.
"""

from .validator import ValidationError, validate_document

__all__ = [
    "ValidationError",
    "validate_document",
]
