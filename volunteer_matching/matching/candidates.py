# volunteer_matching/matching/candidates.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..models import Student, Soldier, MatchCandidate
from ..lookup.gazetteer import Gazetteer
from ..lookup.languages import LanguageRegistry
from .scoring import build_candidate

logger = logging.getLogger(__name__)


def generate_candidates(
    students: List[Student],
    soldiers: List[Soldier],
    languages: Optional[LanguageRegistry] = None,
    gazetteer: Optional[Gazetteer] = None,
) -> Dict[str, List[MatchCandidate]]:
    """
    Score every soldier against every student.

    Returns soldier_id -> candidates sorted by score descending. Ties keep
    the input order of `students`. Keys follow the input order of `soldiers`.
    """
    languages = languages if languages is not None else LanguageRegistry()

    ranked: Dict[str, List[MatchCandidate]] = {}
    for soldier in soldiers:
        candidates = [
            c for c in (build_candidate(st, soldier, languages, gazetteer) for st in students)
            if c.score > 0
        ]
        candidates.sort(key=lambda c: c.score, reverse=True)
        ranked[soldier.id] = candidates

    logger.debug(
        "Scored %d pairs for %d soldiers", len(students) * len(soldiers), len(soldiers)
    )
    return ranked
