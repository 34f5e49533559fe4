# volunteer_matching/matching/allocate.py
"""
Turn per-soldier ranked candidates into rank-1 / rank-2 assignments.

Two explicit policies, chosen by the caller:

  balanced  (default) capacity is ignored; at assignment time each soldier's
            candidates are re-sorted by the students' live rank-1 counts so
            the load spreads, then a single pass swaps unused students into
            rank-2 slots held by overloaded students.

  capacity  live counts start from each student's current load; pass 1 only
            assigns students under their max capacity, pass 2 tops soldiers
            up to two matches ignoring capacity. No rebalancing.

In both, soldiers with the fewest candidates are served first, a soldier
never gets the same student twice, and only rank 1 counts against a
student. The live counts table is created per call and returned to the
caller, never stored.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from ..config import (
    MATCHES_PER_SOLDIER,
    ALLOCATION_POLICY_BALANCED,
    ALLOCATION_POLICY_CAPACITY,
    ALLOCATION_POLICY_DEFAULT,
)
from ..models import Student, Soldier, MatchCandidate, Assignment
from ..lookup.gazetteer import Gazetteer
from ..lookup.languages import LanguageRegistry
from .scoring import build_candidate

logger = logging.getLogger(__name__)

RankedCandidates = Dict[str, List[MatchCandidate]]


def _processing_order(ranked: RankedCandidates) -> List[Tuple[str, List[MatchCandidate]]]:
    """Fewest options first; equal lengths keep the input order."""
    return sorted(ranked.items(), key=lambda item: len(item[1]))


def _soldiers_by_id(ranked: RankedCandidates) -> Dict[str, Soldier]:
    soldiers: Dict[str, Soldier] = {}
    for soldier_id, candidates in ranked.items():
        if candidates:
            soldiers[soldier_id] = candidates[0].soldier
    return soldiers


def _take(
    candidate: MatchCandidate,
    assigned: List[Assignment],
    counts: Dict[str, int],
) -> None:
    rank = len(assigned) + 1
    assigned.append(Assignment.from_candidate(candidate, rank))
    if rank == 1:
        counts[candidate.student.id] = counts.get(candidate.student.id, 0) + 1


def _assign_balanced(
    candidates: List[MatchCandidate],
    counts: Dict[str, int],
) -> List[Assignment]:
    # live load first, then higher score; sorted() keeps earlier order on full ties
    balanced = sorted(candidates, key=lambda c: (counts.get(c.student.id, 0), -c.score))

    assigned: List[Assignment] = []
    for candidate in balanced:
        if len(assigned) >= MATCHES_PER_SOLDIER:
            break
        if any(a.student_id == candidate.student.id for a in assigned):
            continue
        _take(candidate, assigned, counts)
    return assigned


def rebalance_unused_students(
    assignments: List[Assignment],
    students: List[Student],
    soldiers: Dict[str, Soldier],
    counts: Dict[str, int],
    languages: Optional[LanguageRegistry] = None,
    gazetteer: Optional[Gazetteer] = None,
) -> int:
    """
    Single best-effort pass, in place: each student with no assignment takes
    over the rank-2 slot whose holder has the highest live count, provided
    that count is above 1. Rank-1 slots are never touched. Returns the
    number of swaps.
    """
    used = {a.student_id for a in assignments}
    unused = [st for st in students if st.id not in used]
    if not unused:
        return 0

    logger.debug("Rebalancing: %d unused students", len(unused))

    swaps = 0
    for student in unused:
        best_idx = -1
        best_overload = 0
        for idx, assignment in enumerate(assignments):
            if assignment.rank != 2:
                continue
            load = counts.get(assignment.student_id, 0)
            if load > best_overload:
                best_overload = load
                best_idx = idx

        if best_idx < 0 or best_overload <= 1:
            # nothing changed since the last student, so nothing will
            break

        old = assignments[best_idx]
        soldier = soldiers.get(old.soldier_id) or old.soldier
        candidate = build_candidate(student, soldier, languages, gazetteer)
        assignments[best_idx] = Assignment.from_candidate(candidate, rank=2)
        counts[student.id] = counts.get(student.id, 0) + 1
        swaps += 1

        logger.debug(
            "Soldier %s rank 2: %s (load %d) -> %s",
            old.soldier_id, old.student_id, best_overload, student.id,
        )

    return swaps


def allocate_balanced(
    ranked: RankedCandidates,
    students: List[Student],
    languages: Optional[LanguageRegistry] = None,
    gazetteer: Optional[Gazetteer] = None,
) -> Tuple[List[Assignment], Dict[str, int]]:
    """Load-balancing allocation. Returns (assignments, live counts)."""
    counts: Dict[str, int] = {st.id: 0 for st in students}
    result: List[Assignment] = []

    for soldier_id, candidates in _processing_order(ranked):
        if not candidates:
            continue
        assigned = _assign_balanced(candidates, counts)
        logger.debug(
            "Soldier %s (%d options): %s",
            soldier_id, len(candidates), [a.student_id for a in assigned],
        )
        result.extend(assigned)

    rebalance_unused_students(
        result, students, _soldiers_by_id(ranked), counts, languages, gazetteer
    )
    return result, counts


def allocate_with_capacity(
    ranked: RankedCandidates,
    students: List[Student],
) -> Tuple[List[Assignment], Dict[str, int]]:
    """Capacity-respecting first pass, forced top-up second pass."""
    counts: Dict[str, int] = {st.id: st.current_soldiers_count for st in students}
    capacity: Dict[str, int] = {st.id: st.max_capacity for st in students}

    order = _processing_order(ranked)
    assigned_by_soldier: Dict[str, List[Assignment]] = {sid: [] for sid, _ in order}

    # ---------- Pass 1: respect capacity ----------
    for soldier_id, candidates in order:
        assigned = assigned_by_soldier[soldier_id]
        for candidate in candidates:
            if len(assigned) >= MATCHES_PER_SOLDIER:
                break
            st = candidate.student
            if any(a.student_id == st.id for a in assigned):
                continue
            if counts.get(st.id, 0) >= capacity.get(st.id, st.max_capacity):
                continue
            _take(candidate, assigned, counts)

    # ---------- Pass 2: force-assign, capacity disregarded ----------
    forced = 0
    for soldier_id, candidates in order:
        assigned = assigned_by_soldier[soldier_id]
        for candidate in candidates:
            if len(assigned) >= MATCHES_PER_SOLDIER:
                break
            if any(a.student_id == candidate.student.id for a in assigned):
                continue
            _take(candidate, assigned, counts)
            forced += 1

    if forced:
        logger.info("Capacity policy: %d assignments forced over capacity", forced)

    result: List[Assignment] = []
    for soldier_id, _ in order:
        result.extend(assigned_by_soldier[soldier_id])
    return result, counts


def allocate(
    ranked: RankedCandidates,
    students: List[Student],
    policy: str = ALLOCATION_POLICY_DEFAULT,
    languages: Optional[LanguageRegistry] = None,
    gazetteer: Optional[Gazetteer] = None,
) -> List[Assignment]:
    if policy == ALLOCATION_POLICY_BALANCED:
        assignments, _ = allocate_balanced(ranked, students, languages, gazetteer)
    elif policy == ALLOCATION_POLICY_CAPACITY:
        assignments, _ = allocate_with_capacity(ranked, students)
    else:
        raise ValueError(
            f"Unknown allocation policy: {policy!r}. "
            f"Use {ALLOCATION_POLICY_BALANCED!r} or {ALLOCATION_POLICY_CAPACITY!r}."
        )
    return assignments
