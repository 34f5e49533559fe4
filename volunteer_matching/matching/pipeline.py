# volunteer_matching/matching/pipeline.py
from __future__ import annotations

import logging
from typing import List, Optional

from ..config import ALLOCATION_POLICY_DEFAULT
from ..models import Student, Soldier, MatchingResult
from ..lookup.gazetteer import Gazetteer
from ..lookup.languages import LanguageRegistry
from .validation import InvalidInputError, validate_records
from .candidates import generate_candidates
from .allocate import allocate
from .summary import summarize

logger = logging.getLogger(__name__)


def run_matching(
    students: List[Student],
    soldiers: List[Soldier],
    policy: str = ALLOCATION_POLICY_DEFAULT,
    languages: Optional[LanguageRegistry] = None,
    gazetteer: Optional[Gazetteer] = None,
) -> MatchingResult:
    """
    Full matching run: validate -> score -> allocate -> summarize.

    The returned assignments replace any previous set; nothing is merged.
    Assignments come in allocation order (per soldier, rank 1 then rank 2).
    Raises InvalidInputError for empty or duplicate identifiers and
    ValueError for an unknown policy.
    """
    errors = validate_records(students, soldiers)
    if errors:
        raise InvalidInputError(errors)

    # fresh registry per run unless the caller wants to share minted codes
    languages = languages if languages is not None else LanguageRegistry()

    logger.info(
        "Matching run: %d students, %d soldiers, policy=%s",
        len(students), len(soldiers), policy,
    )

    ranked = generate_candidates(students, soldiers, languages, gazetteer)
    assignments = allocate(ranked, students, policy, languages, gazetteer)
    summary = summarize(assignments, students, soldiers)

    logger.info(
        "Matching done: %d matches, soldiers 2/1/0 = %d/%d/%d, students used %d/%d, avg score %d",
        summary.total_matches,
        summary.soldiers_with_two_matches,
        summary.soldiers_with_one_match,
        summary.soldiers_with_no_match,
        summary.students_used,
        summary.total_students,
        summary.avg_score,
    )

    return MatchingResult(assignments=assignments, summary=summary, policy=policy)
