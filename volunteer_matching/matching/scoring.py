# volunteer_matching/matching/scoring.py
"""
Pair scoring for one (student, soldier).

Deterministic, no side effects besides the language registry remembering
minted codes. Missing attributes degrade the score; nothing here raises.

Final score by (gender match, language match), d = distance score:

    gender  language  score
    yes     yes       d
    no      yes       70 - (100 - d)
    yes     no        60 - (100 - d)
    no      no        30 - (100 - d)

clamped to [1, 100], so every pair is a (possibly weak) candidate.
"""
from __future__ import annotations

import math
from typing import Optional, Tuple

from ..config import SCORE_TABLE, MIN_SCORE, MAX_SCORE
from ..models import (
    Student,
    Soldier,
    MatchCriteria,
    MatchCandidate,
    PREFERENCE_ANY,
    normalize_gender,
    parse_gender_preference,
)
from ..lookup.gazetteer import Gazetteer, DEFAULT_GAZETTEER, distance_score_for_km
from ..lookup.languages import LanguageRegistry, language_match


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def gender_preference_match(student: Student, soldier: Soldier) -> bool:
    preference = parse_gender_preference(soldier.gender_preference)
    if preference == PREFERENCE_ANY:
        return True
    if preference is None:
        return False
    return normalize_gender(student.gender) == preference


def _language_code(record, languages: LanguageRegistry) -> Optional[str]:
    if record.language_code:
        return record.language_code
    return languages.resolve(record.language)


def _region(record, gazetteer: Gazetteer) -> Optional[str]:
    if record.region:
        return record.region
    return gazetteer.region(record.city)


def final_score(gender_match: bool, lang_match: bool, distance_score: int) -> int:
    raw = SCORE_TABLE[(gender_match, lang_match)] - (100 - distance_score)
    return min(MAX_SCORE, max(MIN_SCORE, round_half_up(raw)))


def score_pair(
    student: Student,
    soldier: Soldier,
    languages: Optional[LanguageRegistry] = None,
    gazetteer: Optional[Gazetteer] = None,
) -> Tuple[int, MatchCriteria]:
    """Return (score in [1, 100], criteria) for one pair."""
    languages = languages if languages is not None else LanguageRegistry()
    gazetteer = gazetteer if gazetteer is not None else DEFAULT_GAZETTEER

    gender_match = gender_preference_match(student, soldier)
    lang_match = language_match(
        _language_code(student, languages),
        _language_code(soldier, languages),
    )

    distance_km = gazetteer.distance_km(student.city, soldier.city)
    distance_score = distance_score_for_km(distance_km)

    student_region = _region(student, gazetteer)
    region_match = student_region is not None and student_region == _region(soldier, gazetteer)

    criteria = MatchCriteria(
        language_match=lang_match,
        distance_score=distance_score,
        gender_pref_match=gender_match,
        region_match=region_match,
        distance_km=round(distance_km, 1) if distance_km is not None else None,
    )
    return final_score(gender_match, lang_match, distance_score), criteria


def build_candidate(
    student: Student,
    soldier: Soldier,
    languages: Optional[LanguageRegistry] = None,
    gazetteer: Optional[Gazetteer] = None,
) -> MatchCandidate:
    score, criteria = score_pair(student, soldier, languages, gazetteer)
    return MatchCandidate(student=student, soldier=soldier, score=score, criteria=criteria)
