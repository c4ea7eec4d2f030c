"""Field declarations for the four catalog entities.

The validation pipeline builds its rule chains from these, and the form templates use the
labels and choices to render inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .models import STATUS_CHOICES

TEXT = 'text'
DATE = 'date'
CHOICE = 'choice'
REFERENCE = 'reference'


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: str
    label: str
    required: bool = False
    min_length: int = 0
    # Checked on the unescaped value; escaping can grow it up to five times
    max_length: Optional[int] = None
    alphanumeric: bool = False
    choices: Tuple[str, ...] = ()
    ref: Optional[str] = None
    many: bool = False
    strip_markup: bool = False
    # Overrides the default message for the required/length check
    message: Optional[str] = None


SCHEMAS: Dict[str, Tuple[FieldSpec, ...]] = {
    'author': (
        FieldSpec('first_name', TEXT, 'First Name', required=True, min_length=1, max_length=100,
                  alphanumeric=True, message="First name must be specified."),
        FieldSpec('family_name', TEXT, 'Family Name', required=True, min_length=1, max_length=100,
                  alphanumeric=True, message="Family name must be specified."),
        FieldSpec('date_of_birth', DATE, 'Date of birth', message="Invalid date of birth"),
        FieldSpec('date_of_death', DATE, 'Date of death', message="Invalid date of death"),
    ),
    'genre': (
        FieldSpec('name', TEXT, 'Genre', required=True, min_length=3, max_length=100,
                  message="Genre name must contain at least 3 characters"),
    ),
    'book': (
        FieldSpec('title', TEXT, 'Title', required=True, min_length=1, max_length=250, strip_markup=True,
                  message="Title must not be empty."),
        FieldSpec('author', REFERENCE, 'Author', required=True, min_length=1, ref='author',
                  message="Author must not be empty."),
        FieldSpec('summary', TEXT, 'Summary', required=True, min_length=1, strip_markup=True,
                  message="Summary must not be empty."),
        FieldSpec('isbn', TEXT, 'ISBN', required=True, min_length=1, max_length=40, strip_markup=True,
                  message="ISBN must not be empty."),
        FieldSpec('genre', REFERENCE, 'Genre', ref='genre', many=True),
    ),
    'bookinstance': (
        FieldSpec('book', REFERENCE, 'Book', required=True, min_length=1, ref='book',
                  message="Book must be specified"),
        FieldSpec('imprint', TEXT, 'Imprint', required=True, min_length=1, max_length=250,
                  strip_markup=True, message="Imprint must be specified"),
        FieldSpec('status', CHOICE, 'Status', required=True, choices=STATUS_CHOICES,
                  message="Status must be one of: " + ", ".join(STATUS_CHOICES)),
        FieldSpec('due_back', DATE, 'Date when book available', message="Invalid date"),
    ),
}


def describe(entity_type: str) -> List[FieldSpec]:
    try:
        return list(SCHEMAS[entity_type])
    except KeyError:
        raise ValueError(f"Unknown entity type: {entity_type!r}") from None


def field_names(entity_type: str) -> List[str]:
    return [spec.name for spec in describe(entity_type)]
