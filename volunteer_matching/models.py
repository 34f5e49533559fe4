# volunteer_matching/models.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any

from .config import MAX_SOLDIERS_SCHOLARSHIP, MAX_SOLDIERS_DEFAULT

GENDER_MALE = "male"
GENDER_FEMALE = "female"
PREFERENCE_ANY = "any"

STATUS_SUGGESTED = "suggested"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"

_MALE_TOKENS = {"male", "m", "man", "זכר", "מתנדב"}
_FEMALE_TOKENS = {"female", "f", "woman", "נקבה", "מתנדבת"}
_ANY_TOKENS = {"any", "לא חשוב", "none", "no preference"}

# uuid5 namespace for assignment ids, so identical runs yield identical ids
_ASSIGNMENT_NAMESPACE = uuid.UUID("6f1f6a52-8b1e-4d2c-9a57-3d0c1f6b2e11")


def _clean(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def normalize_gender(value: Optional[str]) -> Optional[str]:
    """Map free-text gender to "male" / "female"; anything else is unknown (None)."""
    token = _clean(value)
    if token in _MALE_TOKENS:
        return GENDER_MALE
    if token in _FEMALE_TOKENS:
        return GENDER_FEMALE
    return None


def parse_gender_preference(value: Optional[str]) -> Optional[str]:
    """
    Map a soldier's volunteer preference to "male" / "female" / "any".
    Empty text is "any"; unrecognised text is None and satisfies no student.
    """
    token = _clean(value)
    if not token or token in _ANY_TOKENS:
        return PREFERENCE_ANY
    if token in _MALE_TOKENS:
        return GENDER_MALE
    if token in _FEMALE_TOKENS:
        return GENDER_FEMALE
    return None


def normalize_gender_preference(value: Optional[str]) -> str:
    """Export form of the preference: unrecognised text is stored as "any"."""
    return parse_gender_preference(value) or PREFERENCE_ANY


def make_assignment_id(soldier_id: str, student_id: str, rank: int) -> str:
    # unit separator keeps ids containing "|" from colliding
    key = "\x1f".join((soldier_id, student_id, str(rank)))
    return str(uuid.uuid5(_ASSIGNMENT_NAMESPACE, key))


@dataclass
class Student:
    id: str
    gender: Optional[str] = None
    city: Optional[str] = None
    language: Optional[str] = None
    current_soldiers_count: int = 0
    is_scholarship_active: bool = False
    language_code: Optional[str] = None   # pre-resolved code, wins over `language`
    region: Optional[str] = None          # pre-resolved region, wins over the gazetteer

    @property
    def max_capacity(self) -> int:
        return MAX_SOLDIERS_SCHOLARSHIP if self.is_scholarship_active else MAX_SOLDIERS_DEFAULT

    @property
    def available_slots(self) -> int:
        return max(self.max_capacity - self.current_soldiers_count, 0)


@dataclass
class Soldier:
    id: str
    gender: Optional[str] = None
    city: Optional[str] = None
    language: Optional[str] = None
    gender_preference: Optional[str] = None  # male / female / any, free text accepted
    has_special_request: bool = False
    language_code: Optional[str] = None
    region: Optional[str] = None


@dataclass(frozen=True)
class MatchCriteria:
    language_match: bool
    distance_score: int
    gender_pref_match: bool
    region_match: bool
    distance_km: Optional[float] = None


@dataclass
class MatchCandidate:
    student: Student
    soldier: Soldier
    score: int
    criteria: MatchCriteria


@dataclass
class Assignment:
    id: str
    student_id: str
    soldier_id: str
    score: int
    rank: int
    criteria: MatchCriteria
    status: str = STATUS_SUGGESTED
    # Enrichment for display only; never sent anywhere
    student: Optional[Student] = field(default=None, repr=False, compare=False)
    soldier: Optional[Soldier] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_candidate(cls, candidate: MatchCandidate, rank: int) -> "Assignment":
        return cls(
            id=make_assignment_id(candidate.soldier.id, candidate.student.id, rank),
            student_id=candidate.student.id,
            soldier_id=candidate.soldier.id,
            score=candidate.score,
            rank=rank,
            criteria=candidate.criteria,
            student=candidate.student,
            soldier=candidate.soldier,
        )


@dataclass
class MatchingSummary:
    total_students: int = 0
    total_soldiers: int = 0
    total_matches: int = 0
    soldiers_with_two_matches: int = 0
    soldiers_with_one_match: int = 0
    soldiers_with_no_match: int = 0
    students_used: int = 0
    students_not_used: int = 0
    avg_score: int = 0
    high_score_matches: int = 0
    medium_score_matches: int = 0
    low_score_matches: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MatchingResult:
    assignments: List[Assignment]
    summary: MatchingSummary
    policy: str
