# volunteer_matching/data_generation/toy_dataset.py
from __future__ import annotations
from typing import List, Tuple, Optional
import random

from ..models import Student, Soldier
from ..config import (
    NUM_STUDENTS_DEFAULT,
    NUM_SOLDIERS_DEFAULT,
    SCHOLARSHIP_RATE_DEFAULT,
    UNKNOWN_CITY_RATE_DEFAULT,
    DEFAULT_SEED,
)
from ..lookup.gazetteer import DEFAULT_PLACES

# Weighted towards the languages lone soldiers actually arrive with
TOY_LANGUAGES = [
    ("English", 30),
    ("Russian", 20),
    ("French", 15),
    ("Hebrew", 10),
    ("Spanish", 10),
    ("Ukrainian", 5),
    ("Amharic", 4),
    ("German", 3),
    ("Tigrinya", 3),  # not in the known table: exercises minted codes
]

TOY_UNKNOWN_CITIES = ["Atlantis", "Springfield"]

GENDERS = ["male", "female", None]
PREFERENCES = ["male", "female", "any", None]


def _toy_city_names() -> List[str]:
    """First Latin-script alias of each gazetteer place."""
    names: List[str] = []
    for place in DEFAULT_PLACES.values():
        latin = [a for a in place.aliases if a.isascii() and len(a) > 3]
        if latin:
            names.append(latin[0])
    return names


def _pick_language(rng: random.Random) -> str:
    names = [name for name, _ in TOY_LANGUAGES]
    weights = [w for _, w in TOY_LANGUAGES]
    return rng.choices(names, weights=weights, k=1)[0]


def _pick_city(rng: random.Random, cities: List[str], unknown_rate: float) -> str:
    if rng.random() < unknown_rate:
        return rng.choice(TOY_UNKNOWN_CITIES)
    return rng.choice(cities)


def create_students(
    num_students: int = NUM_STUDENTS_DEFAULT,
    seed: Optional[int] = None,
    scholarship_rate: float = SCHOLARSHIP_RATE_DEFAULT,
    unknown_city_rate: float = UNKNOWN_CITY_RATE_DEFAULT,
) -> List[Student]:
    rng = random.Random(seed)
    cities = _toy_city_names()

    students: List[Student] = []
    for idx in range(1, num_students + 1):
        scholarship = rng.random() < scholarship_rate
        max_soldiers = 2 if scholarship else 4
        students.append(Student(
            id=f"ST{idx:03d}",
            gender=rng.choice(GENDERS),
            city=_pick_city(rng, cities, unknown_city_rate),
            language=_pick_language(rng),
            current_soldiers_count=rng.randint(0, max_soldiers),
            is_scholarship_active=scholarship,
        ))
    return students


def create_soldiers(
    num_soldiers: int = NUM_SOLDIERS_DEFAULT,
    seed: Optional[int] = None,
    unknown_city_rate: float = UNKNOWN_CITY_RATE_DEFAULT,
) -> List[Soldier]:
    rng = random.Random(seed)
    cities = _toy_city_names()

    soldiers: List[Soldier] = []
    for idx in range(1, num_soldiers + 1):
        soldiers.append(Soldier(
            id=f"SO{idx:03d}",
            gender=rng.choice(GENDERS),
            city=_pick_city(rng, cities, unknown_city_rate),
            language=_pick_language(rng),
            gender_preference=rng.choice(PREFERENCES),
            has_special_request=rng.random() < 0.1,
        ))
    return soldiers


def make_toy_dataset(
    num_students: int = NUM_STUDENTS_DEFAULT,
    num_soldiers: int = NUM_SOLDIERS_DEFAULT,
    seed: int = DEFAULT_SEED,
    scholarship_rate: float = SCHOLARSHIP_RATE_DEFAULT,
    unknown_city_rate: float = UNKNOWN_CITY_RATE_DEFAULT,
) -> Tuple[List[Student], List[Soldier]]:
    """
    Return random students and soldiers, reproducible for a given seed.
    Soldiers use a derived seed so the two sides are not correlated.
    """
    students = create_students(
        num_students=num_students,
        seed=seed,
        scholarship_rate=scholarship_rate,
        unknown_city_rate=unknown_city_rate,
    )
    soldiers = create_soldiers(
        num_soldiers=num_soldiers,
        seed=seed + 1,
        unknown_city_rate=unknown_city_rate,
    )
    return students, soldiers
