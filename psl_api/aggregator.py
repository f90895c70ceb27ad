# psl_api/aggregator.py
from __future__ import annotations

import logging
import random
import re
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from psl_api.models import (
    FORM_LENGTH,
    Dataset,
    Fixture,
    HeadToHeadEntry,
    HeadToHeadMatch,
    RecentMatch,
    Result,
    TeamRecord,
    VenueAggregate,
)
from psl_api.teams import TEAM_NAMES, normalize_team_name, pair_key

logger = logging.getLogger(__name__)

RECENT_MATCHES_LIMIT = 5
NEWS_FROM_RESULTS = 5

CONTEST_DESCRIPTIONS = ("exciting", "competitive", "quality", "entertaining")

STATIC_NEWS = (
    "PSL confirms final to be held at Gaddafi Stadium on May 18 as scheduled",
    "PSL X trophy 'Luminara' unveiled, adorned with over 22,000 zircon stones",
    "Babar Azam reaches 2000 runs in PSL history, becomes fastest to milestone",
    "Shadab Khan takes 100th PSL wicket, third bowler to achieve feat",
)

# Approximate venue figures. Not recomputed from live results.
STATIC_VENUES = {
    "Lahore": VenueAggregate(11, 185, 162, "72% elected to field first", "59% matches won by team winning toss"),
    "Karachi": VenueAggregate(5, 198, 184, "80% elected to field first", "60% matches won by team winning toss"),
    "Multan": VenueAggregate(4, 168, 152, "64% elected to field first", "52% matches won by team winning toss"),
    "Rawalpindi": VenueAggregate(4, 198, 178, "75% elected to field first", "50% matches won by team winning toss"),
}

_WIN_RE = re.compile(r"^(.+?)\s+won\s+by\b", re.IGNORECASE)
_MARGIN_RE = re.compile(r"\bwon\s+(.*)$", re.IGNORECASE)
_WICKETS_RE = re.compile(r"by\s+(\d+)\s+wickets?", re.IGNORECASE)
_RUNS_RE = re.compile(r"by\s+(\d+)\s+runs?", re.IGNORECASE)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# -----------------------------
# Result text helpers
# -----------------------------
def extract_winner(result_text: str) -> Optional[str]:
    """'Lahore Qalandars won by 5 wickets' -> 'Lahore Qalandars'; ties/no-results -> None."""
    m = _WIN_RE.match((result_text or "").strip())
    return m.group(1).strip() if m else None


def _margin(result_text: str) -> str:
    m = _MARGIN_RE.search(result_text or "")
    return m.group(1).strip() if m else ""


def _is_no_result(result_text: str) -> bool:
    low = (result_text or "").lower()
    return any(k in low for k in ("no result", "abandoned", "tied"))


def result_code(team: str, result: Result) -> str:
    winner = extract_winner(result.result)
    if winner:
        return "W" if normalize_team_name(winner) == team else "L"
    if _is_no_result(result.result):
        return "N"
    return "-"


def _involves(team: str, r: Result) -> bool:
    return normalize_team_name(r.team1) == team or normalize_team_name(r.team2) == team


def sort_results_recent_first(results: Iterable[Result]) -> List[Result]:
    # Unknown dates ("") sort after every dated result, keeping input order.
    dated = [r for r in results if r.date]
    undated = [r for r in results if not r.date]
    return sorted(dated, key=lambda r: r.date, reverse=True) + undated


# -----------------------------
# Per-team derivations
# -----------------------------
def extract_recent_matches(team: str, results: List[Result], limit: int = RECENT_MATCHES_LIMIT) -> List[RecentMatch]:
    """Team-relative view of the latest results: 'Won by ...' / 'Lost by ...', most recent first."""
    team = normalize_team_name(team)
    out: List[RecentMatch] = []

    for r in sort_results_recent_first(results):
        if not _involves(team, r):
            continue

        t1 = normalize_team_name(r.team1)
        opponent = normalize_team_name(r.team2) if t1 == team else t1

        text = r.result
        winner = extract_winner(text)
        if winner:
            prefix = "Won" if normalize_team_name(winner) == team else "Lost"
            text = f"{prefix} {_margin(text)}".strip()

        out.append(RecentMatch(opponent=opponent, result=text, date=r.date))
        if len(out) >= limit:
            break

    return out


def derive_form(team: str, results: List[Result]) -> str:
    """Form from the chronologically latest results with a known date (most-recent-last)."""
    team = normalize_team_name(team)
    dated = sorted((r for r in results if r.date and _involves(team, r)), key=lambda r: r.date)
    return "".join(result_code(team, r) for r in dated[-FORM_LENGTH:])


# -----------------------------
# Dataset-level derivations
# -----------------------------
def build_head_to_head(results: List[Result]) -> Dict[str, HeadToHeadEntry]:
    h2h: Dict[str, HeadToHeadEntry] = {}

    dated = sorted((r for r in results if r.date), key=lambda r: r.date)
    undated = [r for r in results if not r.date]

    for r in dated + undated:
        key = pair_key(normalize_team_name(r.team1), normalize_team_name(r.team2))
        entry = h2h.setdefault(key, HeadToHeadEntry())
        entry.total += 1
        entry.matches.append(HeadToHeadMatch(date=r.date, result=r.result, scores=r.scores or None))

    return h2h


def venue_aggregates() -> Dict[str, VenueAggregate]:
    return {city: replace(v) for city, v in STATIC_VENUES.items()}


def describe_contest(result_text: str, rng: random.Random) -> str:
    """Adjective for a news line. Only the random fallback is an approximation."""
    low = (result_text or "").lower()
    if "super over" in low or "last ball" in low:
        return "thrilling"

    wk = _WICKETS_RE.search(low)
    runs = _RUNS_RE.search(low)
    if (wk and int(wk.group(1)) >= 10) or (runs and int(runs.group(1)) >= 100):
        return "one-sided"
    if (wk and int(wk.group(1)) <= 2) or (runs and int(runs.group(1)) <= 2):
        return "nail-biting"

    return rng.choice(CONTEST_DESCRIPTIONS)


def _article(word: str) -> str:
    if word.lower().startswith("one"):
        return "a"
    return "an" if word[:1].lower() in "aeiou" else "a"


def generate_news_items(results: List[Result], rng: random.Random) -> List[str]:
    items: List[str] = []

    for r in sort_results_recent_first(results)[:NEWS_FROM_RESULTS]:
        winner = extract_winner(r.result)
        if not winner:
            continue
        adjective = describe_contest(r.result, rng)
        items.append(f"{normalize_team_name(winner)} won {_margin(r.result)} in {_article(adjective)} {adjective} contest")

    return items + list(STATIC_NEWS)


def process_data(
    standings: Dict[str, TeamRecord],
    fixtures: Dict[str, Fixture],
    results: List[Result],
    rng: random.Random,
    now_iso: Optional[str] = None,
) -> Dataset:
    teams: Dict[str, TeamRecord] = {}
    for name, record in standings.items():
        t = replace(record)
        t.recent_matches = extract_recent_matches(name, results)
        if not t.form and results:
            t.form = derive_form(name, results) or None
        teams[name] = t

    return Dataset(
        teams=teams,
        head_to_head=build_head_to_head(results),
        venues=venue_aggregates(),
        fixtures=dict(fixtures),
        news_items=generate_news_items(results, rng),
        last_updated=now_iso or utc_now_iso(),
    )


# -----------------------------
# Merging with the prior cached Dataset
# -----------------------------
def merge_team_record(fresh: TeamRecord, cached: Optional[TeamRecord]) -> TeamRecord:
    if cached is None:
        return replace(fresh)

    merged = {}
    for f in fields(fresh):
        value = getattr(fresh, f.name)
        if value is None or (f.name == "recent_matches" and not value):
            value = getattr(cached, f.name)
        merged[f.name] = value
    merged["name"] = fresh.name
    return TeamRecord(**merged)


def _known_teams(teams: Dict[str, TeamRecord]) -> Dict[str, TeamRecord]:
    out = {}
    for name, t in teams.items():
        if name in TEAM_NAMES:
            out[name] = t
        else:
            logger.warning("Dropping unrecognised team %r from dataset", name)
    return out


def merge_datasets(fresh: Dataset, prior: Optional[Dataset], partial: bool = False) -> Dataset:
    """
    Combine an adapter result with the prior cached Dataset.

    partial=True: fresh carries standings only; prior teams are updated and
    everything else is kept from prior.
    partial=False: teams are exactly the fresh teams (missing fields filled
    from prior); other mappings come from fresh when non-empty, else prior.
    """
    prior = prior.copy() if prior is not None else Dataset()
    fresh = fresh.copy()
    fresh_teams = _known_teams(fresh.teams)

    if partial:
        teams = dict(prior.teams)
        for name, t in fresh_teams.items():
            teams[name] = merge_team_record(t, prior.teams.get(name))
        return Dataset(
            teams=teams,
            head_to_head=prior.head_to_head,
            venues=prior.venues,
            fixtures=prior.fixtures,
            news_items=prior.news_items,
            last_updated=fresh.last_updated or prior.last_updated,
        )

    return Dataset(
        teams={name: merge_team_record(t, prior.teams.get(name)) for name, t in fresh_teams.items()},
        head_to_head=fresh.head_to_head or prior.head_to_head,
        venues=fresh.venues or prior.venues,
        fixtures=fresh.fixtures or prior.fixtures,
        news_items=fresh.news_items or prior.news_items,
        last_updated=fresh.last_updated or prior.last_updated,
    )
