# volunteer_matching/matching/validation.py
from __future__ import annotations

from collections import Counter
from typing import Any, List, Sequence


class InvalidInputError(ValueError):
    """Raised when student/soldier records cannot be matched as given."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _check_ids(records: Sequence[Any], label: str) -> List[str]:
    errors: List[str] = []

    for idx, record in enumerate(records):
        if not _is_non_empty_str(getattr(record, "id", None)):
            errors.append(f"{label} #{idx + 1}: missing identifier")

    counts = Counter(r.id for r in records if _is_non_empty_str(getattr(r, "id", None)))
    for record_id, n in counts.items():
        if n > 1:
            errors.append(f"{label} id {record_id!r} appears {n} times")

    return errors


def validate_records(students: Sequence[Any], soldiers: Sequence[Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Only identifiers are checked; every other attribute may be missing.
    """
    return _check_ids(students, "Student") + _check_ids(soldiers, "Soldier")
