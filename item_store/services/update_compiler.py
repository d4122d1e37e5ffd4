"""
Update compiler - turns a caller's {field: value} mapping into store assignments.
Challenge: Arbitrary partial updates on a schemaless record must never touch the key
fields or createdAt, and updatedAt is always stamped by the service.
Design: Pure function; no I/O, so every rule is unit-testable.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from item_store.core.errors import InvalidRequestError, TypeMismatchError
from item_store.core.languages import is_valid_language_code
from item_store.db.models.item import CREATED_AT, KEY_FIELDS, TRANSLATIONS, UPDATED_AT

# Silently dropped: keys identify the record, createdAt is written once at creation
IGNORED_FIELDS = KEY_FIELDS | {CREATED_AT}
NUMERIC_FIELDS = frozenset({"price"})


@dataclass(frozen=True)
class CompiledUpdate:
    assignments: list[tuple[str, Any]]
    touched: frozenset[str]

    @property
    def has_changes(self) -> bool:
        """True if anything besides the forced timestamp is assigned."""
        return bool(self.touched - {UPDATED_AT})


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def check_numeric_fields(fields: Mapping[str, Any]) -> None:
    """Raise TypeMismatchError when a known numeric field holds a non-number."""
    for name in fields.keys() & NUMERIC_FIELDS:
        if not is_numeric(fields[name]):
            raise TypeMismatchError(f"Field '{name}' must be a number")


def _check_translations(value: Any) -> None:
    if not isinstance(value, Mapping):
        raise InvalidRequestError("Field 'translations' must be an object")
    for code, text in value.items():
        if not is_valid_language_code(code):
            raise InvalidRequestError(f"Invalid language code in translations: {code!r}")
        if not isinstance(text, str):
            raise InvalidRequestError(f"Translation for {code!r} must be a string")


def compile_update(changes: Mapping[str, Any], now: str) -> CompiledUpdate:
    """Compile changes into ordered assignments ending with updatedAt = now.

    Key fields and createdAt are dropped without error. A caller-supplied updatedAt is
    replaced. Raises InvalidRequestError if nothing else is left to assign.
    """
    if not isinstance(changes, Mapping):
        raise InvalidRequestError("Update body must be an object")

    assignments: list[tuple[str, Any]] = []
    for field, value in changes.items():
        if not isinstance(field, str) or not field:
            raise InvalidRequestError("Field names must be non-empty strings")
        if field in IGNORED_FIELDS or field == UPDATED_AT:
            continue
        # None removes the map entirely; the next cache write then recreates it
        if field == TRANSLATIONS and value is not None:
            _check_translations(value)
        assignments.append((field, value))

    check_numeric_fields(dict(assignments))
    if not assignments:
        raise InvalidRequestError("No valid fields to update")

    assignments.append((UPDATED_AT, now))
    return CompiledUpdate(
        assignments=assignments,
        touched=frozenset(field for field, _ in assignments),
    )
