# volunteer_matching/lookup/gazetteer.py
"""
Static gazetteer of Israeli localities plus the distance helpers built on it.

The matching engine treats this as a black box: it only asks for a
canonical name, a coarse region and a 0-100 distance score. Remote
geocoding of unknown names is the caller's business; results can be fed
back in with `Gazetteer.add_place`.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..config import (
    DISTANCE_BANDS,
    DISTANCE_SCORE_FAR,
    DISTANCE_SCORE_UNKNOWN,
    EARTH_RADIUS_KM,
)

REGION_NORTH = "north"
REGION_CENTER = "center"
REGION_SOUTH = "south"
REGION_JERUSALEM = "jerusalem"

_INVISIBLE_CHARS = re.compile("[\u200B-\u200F\u202A-\u202E\u2066-\u2069\uFEFF\u00AD]")
_SMART_QUOTES = re.compile("[\u2018\u2019\u201A\u201B]")
_KIBBUTZ_PREFIX = re.compile(r"^קיבוץ\s+")
_CODE_CHARS = re.compile(r"[^א-תa-zA-Z]")

# Containment matching below this length produces too many false hits
_MIN_FUZZY_LENGTH = 4


@dataclass(frozen=True)
class Place:
    lat: float
    lng: float
    region: Optional[str] = None
    aliases: Tuple[str, ...] = field(default_factory=tuple)


DEFAULT_PLACES: Dict[str, Place] = {
    # Major cities
    "תל אביב": Place(32.0853, 34.7818, REGION_CENTER, ("תל אביב-יפו", "תל-אביב", "תל אביב יפו", "Tel Aviv", "Tel Aviv-Yafo", "TLV", "Ramat Aviv", "רמת אביב")),
    "ירושלים": Place(31.7683, 35.2137, REGION_JERUSALEM, ("Jerusalem", "Jérusalem", "JLM", "ירושליים")),
    "חיפה": Place(32.7940, 34.9896, REGION_NORTH, ("Haifa", "HFA")),
    "באר שבע": Place(31.2518, 34.7913, REGION_SOUTH, ('ב"ש', "באר-שבע", "Beer Sheva", "Beersheba", "Be'er Sheva")),
    "אשדוד": Place(31.8044, 34.6553, REGION_SOUTH, ("Ashdod",)),
    "אשקלון": Place(31.6690, 34.5715, REGION_SOUTH, ("Ashkelon",)),
    "נתניה": Place(32.3215, 34.8532, REGION_CENTER, ("Netanya", "Natanya")),
    "הרצליה": Place(32.1663, 34.8436, REGION_CENTER, ("Herzliya", "Herzelya", "הרצליה פיתוח")),
    "פתח תקווה": Place(32.0841, 34.8878, REGION_CENTER, ('פ"ת', "פתח-תקווה", "Petah Tikva")),
    "רמת גן": Place(32.0680, 34.8241, REGION_CENTER, ("רמת-גן", "Ramat Gan")),
    "רחובות": Place(31.8928, 34.8113, REGION_CENTER, ("Rehovot",)),
    "ראשון לציון": Place(31.9730, 34.7925, REGION_CENTER, ('ראשל"צ', "ראשון-לציון", "Rishon LeZion")),
    "בת ים": Place(32.0167, 34.7500, REGION_CENTER, ("בת-ים", "Bat Yam")),
    "הוד השרון": Place(32.1500, 34.8833, REGION_CENTER, ("הוד-השרון", "Hod HaSharon")),
    "רעננה": Place(32.1833, 34.8667, REGION_CENTER, ("Raanana", "Ra'anana")),
    "כפר סבא": Place(32.1833, 34.9000, REGION_CENTER, ("כפר-סבא", "Kfar Saba")),
    "חולון": Place(32.0167, 34.7833, REGION_CENTER, ("Holon",)),
    "בני ברק": Place(32.0833, 34.8333, REGION_CENTER, ("בני-ברק", "Bnei Brak")),
    "גבעתיים": Place(32.0667, 34.8167, REGION_CENTER, ("Givatayim", "גבעתים")),
    "מודיעין": Place(31.8928, 35.0106, REGION_CENTER, ("מודיעין מכבים רעות", "מודיעין-מכבים-רעות", "Modiin")),
    "לוד": Place(31.9500, 34.8833, REGION_CENTER, ("Lod",)),
    "רמלה": Place(31.9333, 34.8667, REGION_CENTER, ("Ramla", "Ramle")),
    "יבנה": Place(31.8833, 34.7333, REGION_CENTER, ("Yavne",)),
    "נס ציונה": Place(31.9333, 34.8000, REGION_CENTER, ("Ness Ziona",)),
    "ראש העין": Place(32.0833, 34.9500, REGION_CENTER, ("ראש-העין", "Rosh HaAyin")),
    "חדרה": Place(32.4333, 34.9167, REGION_CENTER, ("Hadera",)),
    "אריאל": Place(32.1053, 35.1736, REGION_CENTER, ("Ariel",)),
    # Jerusalem area
    "בית שמש": Place(31.7500, 34.9833, REGION_JERUSALEM, ("בית-שמש", "Beit Shemesh")),
    "מבשרת ציון": Place(31.8000, 35.1500, REGION_JERUSALEM, ("Mevaseret Zion",)),
    "מעלה אדומים": Place(31.7833, 35.3000, REGION_JERUSALEM, ("מעלה-אדומים", "Maale Adumim")),
    "אפרת": Place(31.6500, 35.1500, REGION_JERUSALEM, ("Efrat",)),
    # North
    "עפולה": Place(32.6083, 35.2889, REGION_NORTH, ("Afula",)),
    "נצרת": Place(32.6996, 35.3035, REGION_NORTH, ("נצרת עילית", "Nazareth", "נוף הגליל")),
    "עכו": Place(32.9278, 35.0817, REGION_NORTH, ("Acre", "Akko")),
    "נהריה": Place(33.0058, 35.0983, REGION_NORTH, ("Nahariya",)),
    "קריית שמונה": Place(33.2075, 35.5697, REGION_NORTH, ("קרית שמונה", "Kiryat Shmona")),
    "טבריה": Place(32.7950, 35.5300, REGION_NORTH, ("Tiberias",)),
    "צפת": Place(32.9658, 35.4964, REGION_NORTH, ("Safed", "Tzfat")),
    "כרמיאל": Place(32.9136, 35.2961, REGION_NORTH, ("Karmiel", "Karmi'el")),
    "קריית אתא": Place(32.8000, 35.1000, REGION_NORTH, ("קרית אתא", "Kiryat Ata")),
    "קריית ביאליק": Place(32.8333, 35.0833, REGION_NORTH, ("קרית ביאליק", "Kiryat Bialik")),
    "נשר": Place(32.7667, 35.0333, REGION_NORTH, ("Nesher",)),
    "יקנעם": Place(32.6500, 35.1000, REGION_NORTH, ("יקנעם עילית", "Yokneam")),
    "זכרון יעקב": Place(32.5711, 34.9506, REGION_NORTH, ("Zichron Yaakov",)),
    # South
    "אילת": Place(29.5581, 34.9482, REGION_SOUTH, ("Eilat",)),
    "דימונה": Place(31.0667, 35.0333, REGION_SOUTH, ("Dimona",)),
    "ערד": Place(31.2550, 35.2128, REGION_SOUTH, ("Arad",)),
    "קריית גת": Place(31.6100, 34.7642, REGION_SOUTH, ("קרית גת", "Kiryat Gat")),
    "שדרות": Place(31.5256, 34.5961, REGION_SOUTH, ("Sderot",)),
    "נתיבות": Place(31.4167, 34.5833, REGION_SOUTH, ("Netivot",)),
    "אופקים": Place(31.3167, 34.6167, REGION_SOUTH, ("Ofakim",)),
    "מצפה רמון": Place(30.6100, 34.8017, REGION_SOUTH, ("Mitzpe Ramon",)),
}


def strip_invisible_chars(text: str) -> str:
    """Remove direction marks, zero-width characters and soft hyphens."""
    return _INVISIBLE_CHARS.sub("", text)


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def region_from_coords(lat: float, lng: float) -> str:
    """Rough region boundaries for places that carry no explicit region."""
    if lat >= 32.5:
        return REGION_NORTH
    if lat >= 31.6:
        return REGION_JERUSALEM if lng > 35.1 else REGION_CENTER
    return REGION_SOUTH


def distance_score_for_km(distance_km: Optional[float]) -> int:
    """Monotonically decreasing 0-100 step score; None (unknown) is neutral."""
    if distance_km is None:
        return DISTANCE_SCORE_UNKNOWN
    for max_km, score in DISTANCE_BANDS:
        if distance_km <= max_km:
            return score
    return DISTANCE_SCORE_FAR


class Gazetteer:
    """Name -> coordinates lookup with alias and typo tolerance."""

    def __init__(self, places: Optional[Dict[str, Place]] = None):
        self._places: Dict[str, Place] = dict(DEFAULT_PLACES if places is None else places)
        self._resolved: Dict[str, Optional[str]] = {}

    def __contains__(self, city: str) -> bool:
        return self.place(city) is not None

    def add_place(self, name: str, place: Place) -> None:
        self._places[name] = place
        # a new entry can change how earlier names resolve
        self._resolved.clear()

    def canonical_name(self, city: Optional[str]) -> Optional[str]:
        """Canonical gazetteer key for `city`, or None if it cannot be resolved."""
        if not city:
            return None
        if city not in self._resolved:
            self._resolved[city] = self._resolve(city)
        return self._resolved[city]

    def normalize_city_name(self, city: Optional[str]) -> str:
        """Canonical name when known, otherwise the cleaned input."""
        canonical = self.canonical_name(city)
        if canonical is not None:
            return canonical
        return strip_invisible_chars(city or "").strip()

    def _resolve(self, city: str) -> Optional[str]:
        cleaned = _SMART_QUOTES.sub("'", strip_invisible_chars(city).strip())
        if not cleaned:
            return None

        # compound entries ("Modiin / Ariel", "Hadera, Holon") -> first part
        for separator in ("/", ","):
            if separator in cleaned:
                cleaned = cleaned.split(separator)[0].strip()

        terms = [cleaned, _KIBBUTZ_PREFIX.sub("", cleaned).strip()]

        for term in terms:
            lowered = term.lower()
            for name, place in self._places.items():
                if name.lower() == lowered:
                    return name
                if any(alias.lower() == lowered for alias in place.aliases):
                    return name

        for term in terms:
            lowered = term.lower()
            if len(lowered) < _MIN_FUZZY_LENGTH:
                continue
            for name, place in self._places.items():
                for candidate in (name,) + tuple(place.aliases):
                    cand = candidate.lower()
                    if len(cand) < _MIN_FUZZY_LENGTH:
                        continue
                    if cand in lowered or lowered in cand:
                        return name

        return None

    def place(self, city: Optional[str]) -> Optional[Place]:
        canonical = self.canonical_name(city)
        return self._places[canonical] if canonical is not None else None

    def region(self, city: Optional[str]) -> Optional[str]:
        place = self.place(city)
        if place is None:
            return None
        return place.region or region_from_coords(place.lat, place.lng)

    def city_code(self, city: Optional[str]) -> Optional[str]:
        """Short code from the first three letters of the canonical name."""
        canonical = self.canonical_name(city)
        if canonical is None:
            return None
        return _CODE_CHARS.sub("", canonical)[:3].upper()

    def distance_km(self, city_a: Optional[str], city_b: Optional[str]) -> Optional[float]:
        a = self.place(city_a)
        b = self.place(city_b)
        if a is None or b is None:
            return None
        return haversine_km(a.lat, a.lng, b.lat, b.lng)

    def distance_score(self, city_a: Optional[str], city_b: Optional[str]) -> int:
        return distance_score_for_km(self.distance_km(city_a, city_b))


DEFAULT_GAZETTEER = Gazetteer()
