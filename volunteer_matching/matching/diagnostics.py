# volunteer_matching/matching/diagnostics.py
from __future__ import annotations

from typing import List, Dict, Any, Optional

from ..config import MATCHES_PER_SOLDIER
from ..models import (
    Student,
    Soldier,
    PREFERENCE_ANY,
    normalize_gender,
    parse_gender_preference,
)
from ..lookup.gazetteer import Gazetteer, DEFAULT_GAZETTEER
from ..lookup.languages import LanguageRegistry, language_match


def analyze_coverage(
    students: List[Student],
    soldiers: List[Soldier],
    languages: Optional[LanguageRegistry] = None,
    gazetteer: Optional[Gazetteer] = None,
) -> Dict[str, Any]:
    """
    Look at the students/soldiers before a run and report where matches will
    be weak or capacity short. Informational only: the allocator still
    produces a full result whatever this says.

    Returns a dict with:
      - 'ok': bool
      - 'messages': list[str] (human-readable diagnostics)
      - 'suggestion': str (summary)

      - 'num_students': int
      - 'num_soldiers': int
      - 'demand': int                  (MATCHES_PER_SOLDIER * soldiers)
      - 'primary_demand': int          (one rank-1 slot per soldier)
      - 'supply': int                  (sum of students' available slots)

      - 'soldiers_without_language': List[str]
      - 'soldiers_without_gender': List[str]
      - 'unresolved_cities': List[str]
      - 'minted_languages': Dict[str, str]
    """
    languages = languages if languages is not None else LanguageRegistry()
    gazetteer = gazetteer if gazetteer is not None else DEFAULT_GAZETTEER
    messages: List[str] = []

    num_students = len(students)
    num_soldiers = len(soldiers)

    # ---------- 1. Basic population ----------
    if num_soldiers and not num_students:
        messages.append(
            f"{num_soldiers} soldiers but no students: every soldier will end with 0 matches."
        )
    elif num_soldiers and num_students < MATCHES_PER_SOLDIER:
        messages.append(
            f"Only {num_students} student(s): soldiers can get at most "
            f"{num_students} match(es) each."
        )

    # ---------- 2. Capacity: rank-1 slots vs available slots ----------
    demand = MATCHES_PER_SOLDIER * num_soldiers
    primary_demand = num_soldiers
    supply = sum(st.available_slots for st in students)

    if primary_demand > supply:
        messages.append(
            f"Capacity short: {primary_demand} primary matches needed but students "
            f"have only {supply} available slots. Some students will be assigned "
            "beyond their capacity."
        )

    # ---------- 3. Language coverage ----------
    student_codes = [
        st.language_code or languages.resolve(st.language) for st in students
    ]
    soldiers_without_language: List[str] = []
    for so in soldiers:
        code = so.language_code or languages.resolve(so.language)
        if not any(language_match(code, sc) for sc in student_codes):
            soldiers_without_language.append(so.id)

    if soldiers_without_language and students:
        messages.append(
            f"{len(soldiers_without_language)} soldier(s) share no language with any "
            f"student: {', '.join(soldiers_without_language)}."
        )

    # ---------- 4. Gender preference coverage ----------
    student_genders = {normalize_gender(st.gender) for st in students}
    soldiers_without_gender: List[str] = []
    for so in soldiers:
        pref = parse_gender_preference(so.gender_preference)
        if pref is None or (pref != PREFERENCE_ANY and pref not in student_genders):
            soldiers_without_gender.append(so.id)

    if soldiers_without_gender and students:
        messages.append(
            f"{len(soldiers_without_gender)} soldier(s) prefer a volunteer gender no "
            f"student has: {', '.join(soldiers_without_gender)}."
        )

    # ---------- 5. Unresolved cities (distance falls back to neutral) ----------
    unresolved_cities = sorted({
        rec.city.strip()
        for rec in list(students) + list(soldiers)
        if rec.city and rec.city.strip() and gazetteer.place(rec.city) is None
    })
    if unresolved_cities:
        messages.append(
            f"{len(unresolved_cities)} city name(s) not found, distance will be neutral: "
            f"{', '.join(unresolved_cities)}."
        )

    ok = len(messages) == 0

    if ok:
        suggestion = "No coverage issues detected."
    else:
        suggestion = "Matching will run but some matches will be weak. "
        if primary_demand > supply:
            suggestion += "Consider recruiting more students or raising capacity. "
        if soldiers_without_language or soldiers_without_gender:
            suggestion += "Review language and gender preferences of the listed soldiers. "
        if unresolved_cities:
            suggestion += "Add the unknown city names to the gazetteer."

    return {
        "ok": ok,
        "messages": messages,
        "suggestion": suggestion.strip(),
        "num_students": num_students,
        "num_soldiers": num_soldiers,
        "demand": demand,
        "primary_demand": primary_demand,
        "supply": supply,
        "soldiers_without_language": soldiers_without_language,
        "soldiers_without_gender": soldiers_without_gender,
        "unresolved_cities": unresolved_cities,
        "minted_languages": languages.minted(),
    }
