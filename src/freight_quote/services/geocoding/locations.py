"""Pure helpers for building geocoding queries from location descriptors."""

from __future__ import annotations

import re
from typing import Optional

COUNTRY_NAMES = {
    "US": "United States",
    "CA": "Canada",
    "MX": "Mexico",
}

POSTAL_CODE_PATTERNS = {
    "US": re.compile(r"^\d{5}(-\d{4})?$"),
    "CA": re.compile(r"^[A-Z]\d[A-Z] \d[A-Z]\d$", re.IGNORECASE),
    "MX": re.compile(r"^\d{5}$"),
}


def country_name(code: str) -> str:
    """Return the full country name for a code, or the code itself when unknown."""
    return COUNTRY_NAMES.get(code.upper(), code)


def build_query(
    city: Optional[str],
    state_province: Optional[str],
    postal_code: Optional[str],
    country: Optional[str],
) -> str:
    """Join the location parts most-specific first: postal code, city, state, country."""
    parts: list[str] = []
    if postal_code:
        parts.append(postal_code)
    if city:
        parts.append(city)
    if state_province:
        parts.append(state_province)
    if country:
        parts.append(country_name(country))
    return ", ".join(parts)


def postal_code_matches(postal_code: str, country: Optional[str] = None) -> bool:
    """Check a postal code against the format of ``country``, or any supported format."""
    value = postal_code.strip()
    if country:
        pattern = POSTAL_CODE_PATTERNS.get(country.upper())
        return bool(pattern and pattern.match(value))
    return any(pattern.match(value) for pattern in POSTAL_CODE_PATTERNS.values())
