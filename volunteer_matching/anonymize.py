# volunteer_matching/anonymize.py
"""
Code-only records that are safe to store outside the client.

Names, phone numbers, free-text requests and raw city/language strings never
leave these functions; only identifiers and short codes do.
"""
from __future__ import annotations

from typing import Dict, Any, Optional

from .models import (
    Student,
    Soldier,
    Assignment,
    GENDER_MALE,
    GENDER_FEMALE,
    normalize_gender,
    normalize_gender_preference,
)
from .lookup.gazetteer import Gazetteer, DEFAULT_GAZETTEER
from .lookup.languages import LanguageRegistry


def gender_code(gender: Optional[str]) -> Optional[str]:
    normalized = normalize_gender(gender)
    if normalized == GENDER_MALE:
        return "M"
    if normalized == GENDER_FEMALE:
        return "F"
    return None


def _codes(record, languages: LanguageRegistry, gazetteer: Gazetteer) -> Dict[str, Any]:
    return {
        "external_id": record.id,
        "gender": gender_code(record.gender),
        "city_code": gazetteer.city_code(record.city),
        "region": record.region or gazetteer.region(record.city),
        "mother_tongue_code": record.language_code or languages.resolve(record.language),
    }


def to_secure_student(
    student: Student,
    languages: Optional[LanguageRegistry] = None,
    gazetteer: Optional[Gazetteer] = None,
) -> Dict[str, Any]:
    languages = languages if languages is not None else LanguageRegistry()
    gazetteer = gazetteer if gazetteer is not None else DEFAULT_GAZETTEER

    record = _codes(student, languages, gazetteer)
    record.update({
        "current_soldiers_count": student.current_soldiers_count,
        "is_scholarship_active": student.is_scholarship_active,
        "max_soldiers": student.max_capacity,
        "available_slots": student.available_slots,
    })
    return record


def to_secure_soldier(
    soldier: Soldier,
    languages: Optional[LanguageRegistry] = None,
    gazetteer: Optional[Gazetteer] = None,
) -> Dict[str, Any]:
    languages = languages if languages is not None else LanguageRegistry()
    gazetteer = gazetteer if gazetteer is not None else DEFAULT_GAZETTEER

    record = _codes(soldier, languages, gazetteer)
    record.update({
        "volunteer_gender_preference": normalize_gender_preference(soldier.gender_preference),
        "has_special_requests": bool(soldier.has_special_request),
    })
    return record


def to_secure_match(assignment: Assignment) -> Dict[str, Any]:
    criteria = assignment.criteria
    return {
        "id": assignment.id,
        "student_external_id": assignment.student_id,
        "soldier_external_id": assignment.soldier_id,
        "confidence_score": assignment.score,
        "match_rank": assignment.rank,
        "match_criteria": {
            "language_match": criteria.language_match,
            "distance_score": criteria.distance_score,
            "gender_pref_match": criteria.gender_pref_match,
            "region_match": criteria.region_match,
        },
        "status": assignment.status,
    }
