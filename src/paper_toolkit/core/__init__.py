"""
Paper Builder Core Package

Shared data models and utilities: identifiers, the section/group/question
document model, per-type payloads, numbering helpers, and the JSON wire
format with its validator.

**MODEL RULES:**

1. **Immutable Data Models**
   - Frozen dataclasses; new instances are created for any change

2. **Derived Values (Never Stored)**
   - Question numbers and marks totals are calculated on demand

3. **Single Wire Format**
   - The same JSON array serves autosave, export and import
"""

from .ids import IdGenerator, new_id
from .models import Document, Question, QuestionGroup, QuestionType, Section

__all__ = [
    "IdGenerator",
    "new_id",
    "Document",
    "Question",
    "QuestionGroup",
    "QuestionType",
    "Section",
]
