# volunteer_matching/matching/summary.py
from __future__ import annotations

from collections import Counter
from typing import List

from ..config import HIGH_SCORE_THRESHOLD, MEDIUM_SCORE_THRESHOLD
from ..models import Assignment, MatchingSummary, Student, Soldier
from .scoring import round_half_up


def summarize(
    assignments: List[Assignment],
    students: List[Student],
    soldiers: List[Soldier],
) -> MatchingSummary:
    """Coverage and quality counts for one run's assignments."""
    per_soldier = Counter(a.soldier_id for a in assignments)
    used_students = {a.student_id for a in assignments}
    scores = [a.score for a in assignments]

    soldiers_with_two = sum(1 for n in per_soldier.values() if n >= 2)
    soldiers_with_one = sum(1 for n in per_soldier.values() if n == 1)

    return MatchingSummary(
        total_students=len(students),
        total_soldiers=len(soldiers),
        total_matches=len(assignments),
        soldiers_with_two_matches=soldiers_with_two,
        soldiers_with_one_match=soldiers_with_one,
        soldiers_with_no_match=len(soldiers) - len(per_soldier),
        students_used=len(used_students),
        students_not_used=len(students) - len(used_students),
        avg_score=round_half_up(sum(scores) / len(scores)) if scores else 0,
        high_score_matches=sum(1 for s in scores if s >= HIGH_SCORE_THRESHOLD),
        medium_score_matches=sum(
            1 for s in scores if MEDIUM_SCORE_THRESHOLD <= s < HIGH_SCORE_THRESHOLD
        ),
        low_score_matches=sum(1 for s in scores if s < MEDIUM_SCORE_THRESHOLD),
    )
