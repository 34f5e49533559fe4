# volunteer_matching/lookup/languages.py
"""
Free-text language -> short code registry.

Known names (Hebrew, common misspellings, English) map to fixed codes.
Anything else gets a code minted from its first two letters, remembered by
the registry so that two identical unknown strings resolve to the same code
and therefore still match each other. One registry per matching run keeps
minted codes isolated between runs and tests.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from ..config import LANGUAGE_FAMILIES

logger = logging.getLogger(__name__)

KNOWN_LANGUAGE_CODES: Dict[str, str] = {
    "עברית": "HE",
    "עיברית": "HE",
    "אנגלית": "EN",
    "רוסית": "RU",
    "אוקראינית": "UK",
    "צרפתית": "FR",
    "ספרדית": "ES",
    "ערבית": "AR",
    "אמהרית": "AM",
    "פרסית": "FA",
    "גרמנית": "DE",
    "איטלקית": "IT",
    "פורטוגזית": "PT",
    "סינית": "ZH",
    "יפנית": "JA",
    "בולגרית": "BG",
    "הולנדית": "NL",
    "דנית": "DA",
    "טורקית": "TR",
    "קרואטית": "HR",
    "רומנית": "RO",
    "פולנית": "PL",
    "הונגרית": "HU",
    "תאילנדית": "TH",
    "קוריאנית": "KO",
    "הינדית": "HI",
    "hebrew": "HE",
    "ivrit": "HE",
    "english": "EN",
    "russian": "RU",
    "русский": "RU",
    "ukrainian": "UK",
    "українська": "UK",
    "french": "FR",
    "français": "FR",
    "spanish": "ES",
    "español": "ES",
    "arabic": "AR",
    "amharic": "AM",
    "persian": "FA",
    "farsi": "FA",
    "german": "DE",
    "italian": "IT",
    "portuguese": "PT",
    "chinese": "ZH",
    "japanese": "JA",
    "bulgarian": "BG",
    "dutch": "NL",
    "danish": "DA",
    "turkish": "TR",
    "croatian": "HR",
    "romanian": "RO",
    "polish": "PL",
    "hungarian": "HU",
    "thai": "TH",
    "korean": "KO",
    "hindi": "HI",
}

_CODE_CHARS = re.compile(r"[^א-תa-zA-Z]")
_LIST_SEPARATORS = re.compile(r"[;,]")


def mint_language_code(name: str) -> str:
    """Deterministic fallback code: first two letters, upper-cased."""
    clean = _CODE_CHARS.sub("", name)
    if len(clean) >= 2:
        return clean[:2].upper()
    return clean.upper() or "XX"


def language_match(code_a: Optional[str], code_b: Optional[str]) -> bool:
    """Equal codes, or codes from the same language family. Missing never matches."""
    if not code_a or not code_b:
        return False
    if code_a == code_b:
        return True
    return any(code_a in family and code_b in family for family in LANGUAGE_FAMILIES.values())


class LanguageRegistry:
    """Resolves free-text language names to codes, minting codes for unseen names."""

    def __init__(self, known: Optional[Dict[str, str]] = None):
        source = KNOWN_LANGUAGE_CODES if known is None else known
        self._known: Dict[str, str] = {k.lower(): v for k, v in source.items()}
        self._minted: Dict[str, str] = {}

    def _lookup(self, name: str) -> Optional[str]:
        key = name.strip().lower()
        if key in self._known:
            return self._known[key]
        return self._minted.get(key)

    def resolve(self, language: Optional[str]) -> Optional[str]:
        if not language or not language.strip():
            return None
        trimmed = language.strip()

        code = self._lookup(trimmed)
        if code:
            return code

        # multi-language fields: "איטלקית פורטוגזית", "English German"
        parts = trimmed.split()
        if len(parts) > 1:
            for part in parts:
                code = self._lookup(part)
                if code:
                    return code

        # "אנגלית; ספרדית", "English, French" -> first listed
        listed = _LIST_SEPARATORS.split(trimmed)
        if len(listed) > 1:
            code = self._lookup(listed[0])
            if code:
                return code

        code = mint_language_code(trimmed)
        self._minted[trimmed.lower()] = code
        logger.warning("Unknown language %r, minted code %s", trimmed, code)
        return code

    def minted(self) -> Dict[str, str]:
        """Languages discovered during this registry's lifetime."""
        return dict(self._minted)
