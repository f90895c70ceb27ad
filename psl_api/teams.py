# psl_api/teams.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

TBA = "TBA"
PAIR_SEPARATOR = "-"


@dataclass(frozen=True)
class Franchise:
    name: str
    short_name: str
    abbr: str


FRANCHISES: Tuple[Franchise, ...] = (
    Franchise("Islamabad United", "Islamabad", "IU"),
    Franchise("Karachi Kings", "Karachi", "KK"),
    Franchise("Lahore Qalandars", "Lahore", "LQ"),
    Franchise("Multan Sultans", "Multan", "MS"),
    Franchise("Peshawar Zalmi", "Peshawar", "PZ"),
    Franchise("Quetta Gladiators", "Quetta", "QG"),
)

TEAM_NAMES: Tuple[str, ...] = tuple(f.name for f in FRANCHISES)

_ABBR_TO_NAME: Dict[str, str] = {f.abbr: f.name for f in FRANCHISES}


def normalize_team_name(raw: Optional[str]) -> str:
    """
    Map a scraped team string onto one of the six franchise names.

    Match order: full name, then city short name (both case-insensitive
    substrings), then the 2-letter abbreviation as a standalone token.
    Anything unrecognised (including "TBA") is returned stripped but
    otherwise unchanged.
    """
    if raw is None:
        return ""

    s = re.sub(r"\s+", " ", str(raw)).strip()
    if not s:
        return ""

    low = s.lower()

    for f in FRANCHISES:
        if f.name.lower() in low:
            return f.name

    for f in FRANCHISES:
        if f.short_name.lower() in low:
            return f.name

    # Abbreviations only count as a whole token: uppercase anywhere ("LQ-W"),
    # or any case when the token is the entire string ("lq").
    tokens = re.findall(r"[A-Za-z]+", s)
    for token in tokens:
        name = _ABBR_TO_NAME.get(token.upper())
        if name and (token.isupper() or len(tokens) == 1):
            return name

    return s


def is_known_team(name: str) -> bool:
    return name in TEAM_NAMES


def is_valid_fixture_team(name: str) -> bool:
    return name in TEAM_NAMES or name == TBA


def pair_key(team_a: str, team_b: str) -> str:
    """Order-independent head-to-head key, e.g. 'Karachi Kings-Lahore Qalandars'."""
    return PAIR_SEPARATOR.join(sorted([team_a, team_b]))


def opponents_of(team: str) -> List[str]:
    return [t for t in TEAM_NAMES if t != team]
