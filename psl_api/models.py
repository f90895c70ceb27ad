from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

FORM_LENGTH = 5
FORM_CODES = ("W", "L", "N", "-")


def trim_form(form: Optional[str]) -> Optional[str]:
    """Keep only the most recent results (form is most-recent-last)."""
    if form is None:
        return None
    return form[-FORM_LENGTH:] if len(form) > FORM_LENGTH else form


def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


# -----------------------------
# Team standings
# -----------------------------
@dataclass
class RecentMatch:
    opponent: str
    result: str
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return {"opponent": self.opponent, "result": self.result, "date": self.date}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RecentMatch":
        return cls(
            opponent=str(d.get("opponent") or ""),
            result=str(d.get("result") or ""),
            date=str(d.get("date") or ""),
        )


@dataclass
class TeamRecord:
    # None means "not provided by the source"; merges fill it from cache.
    name: str
    matches: Optional[int] = None
    wins: Optional[int] = None
    losses: Optional[int] = None
    no_results: Optional[int] = None
    points: Optional[int] = None
    nrr: Optional[str] = None
    form: Optional[str] = None
    recent_matches: Optional[List[RecentMatch]] = None

    def __post_init__(self) -> None:
        self.form = trim_form(self.form)

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "matches": self.matches,
            "wins": self.wins,
            "losses": self.losses,
            "noResults": self.no_results,
            "points": self.points,
            "nrr": self.nrr,
            "form": self.form,
            "recentMatches": (
                [m.to_dict() for m in self.recent_matches]
                if self.recent_matches is not None
                else None
            ),
        })

    @classmethod
    def from_dict(cls, name: str, d: Dict[str, Any]) -> "TeamRecord":
        recent = d.get("recentMatches")
        return cls(
            name=name,
            matches=d.get("matches"),
            wins=d.get("wins"),
            losses=d.get("losses"),
            no_results=d.get("noResults"),
            points=d.get("points"),
            nrr=d.get("nrr"),
            form=d.get("form"),
            recent_matches=[RecentMatch.from_dict(m) for m in recent] if recent is not None else None,
        )


# -----------------------------
# Fixtures + results
# -----------------------------
@dataclass
class Fixture:
    match_id: str
    team1: str
    team2: str
    date: str = ""
    time: Optional[str] = None
    venue: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "team1": self.team1,
            "team2": self.team2,
            "date": self.date,
            "time": self.time,
            "venue": self.venue,
        })

    @classmethod
    def from_dict(cls, match_id: str, d: Dict[str, Any]) -> "Fixture":
        return cls(
            match_id=match_id,
            team1=str(d.get("team1") or ""),
            team2=str(d.get("team2") or ""),
            date=str(d.get("date") or ""),
            time=d.get("time"),
            venue=d.get("venue"),
        )


@dataclass
class Result:
    team1: str
    team2: str
    result: str
    date: str = ""
    scores: str = ""


# -----------------------------
# Derived aggregates
# -----------------------------
@dataclass
class HeadToHeadMatch:
    date: str
    result: str
    scores: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({"date": self.date, "result": self.result, "scores": self.scores})

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HeadToHeadMatch":
        return cls(date=str(d.get("date") or ""), result=str(d.get("result") or ""), scores=d.get("scores"))


@dataclass
class HeadToHeadEntry:
    total: int = 0
    matches: List[HeadToHeadMatch] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total, "matches": [m.to_dict() for m in self.matches]}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HeadToHeadEntry":
        return cls(
            total=int(d.get("total") or 0),
            matches=[HeadToHeadMatch.from_dict(m) for m in d.get("matches") or []],
        )


@dataclass
class VenueAggregate:
    matches: int = 0
    avg_first_innings: int = 0
    avg_second_innings: int = 0
    toss_decision: str = ""
    winning_toss: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matches": self.matches,
            "avgFirstInnings": self.avg_first_innings,
            "avgSecondInnings": self.avg_second_innings,
            "tossDecision": self.toss_decision,
            "winningToss": self.winning_toss,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "VenueAggregate":
        return cls(
            matches=int(d.get("matches") or 0),
            avg_first_innings=int(d.get("avgFirstInnings") or 0),
            avg_second_innings=int(d.get("avgSecondInnings") or 0),
            toss_decision=str(d.get("tossDecision") or ""),
            winning_toss=str(d.get("winningToss") or ""),
        )


# -----------------------------
# Dataset (persisted + published unit)
# -----------------------------
@dataclass
class Dataset:
    teams: Dict[str, TeamRecord] = field(default_factory=dict)
    head_to_head: Dict[str, HeadToHeadEntry] = field(default_factory=dict)
    venues: Dict[str, VenueAggregate] = field(default_factory=dict)
    fixtures: Dict[str, Fixture] = field(default_factory=dict)
    news_items: List[str] = field(default_factory=list)
    last_updated: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self) if f.name != "last_updated")

    def copy(self) -> "Dataset":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "teams": {name: t.to_dict() for name, t in self.teams.items()},
            "headToHead": {k: h.to_dict() for k, h in self.head_to_head.items()},
            "venues": {k: v.to_dict() for k, v in self.venues.items()},
            "matches": {k: f.to_dict() for k, f in self.fixtures.items()},
            "newsItems": list(self.news_items),
            "lastUpdated": self.last_updated,
        })

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Dataset":
        if not isinstance(d, dict):
            raise ValueError(f"Dataset payload must be an object, got {type(d).__name__}")
        return cls(
            teams={name: TeamRecord.from_dict(name, t) for name, t in (d.get("teams") or {}).items()},
            head_to_head={k: HeadToHeadEntry.from_dict(h) for k, h in (d.get("headToHead") or {}).items()},
            venues={k: VenueAggregate.from_dict(v) for k, v in (d.get("venues") or {}).items()},
            fixtures={k: Fixture.from_dict(k, f) for k, f in (d.get("matches") or {}).items()},
            news_items=[str(n) for n in d.get("newsItems") or []],
            last_updated=d.get("lastUpdated"),
        )
