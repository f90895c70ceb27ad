# psl_api/hardcoded_updates.py
"""
Manual PSL 2025 update (as of May 8, 2025, from psl-t20.com/points-table/).

Applied on top of whatever base dataset is available so accurate standings
can be published even while every scraper is broken.
"""
from __future__ import annotations

import logging
from typing import Optional

from psl_api.aggregator import utc_now_iso
from psl_api.models import Dataset, Fixture, HeadToHeadEntry, RecentMatch, TeamRecord

logger = logging.getLogger(__name__)

UPDATED_AS_OF = "2025-05-08"

CURRENT_POINTS_TABLE = {
    "Quetta Gladiators": {
        "matches": 9, "wins": 6, "losses": 2, "noResults": 1, "points": 13, "nrr": "+1.530", "form": "WWWLW",
        "recentMatches": [
            {"opponent": "Multan Sultans", "result": "Won by 10 wickets", "date": "2025-05-07"},
            {"opponent": "Islamabad United", "result": "Won by 2 wickets", "date": "2025-05-05"},
            {"opponent": "Lahore Qalandars", "result": "No result (Rain)", "date": "2025-05-01"},
            {"opponent": "Peshawar Zalmi", "result": "Won by 64 runs", "date": "2025-04-27"},
            {"opponent": "Karachi Kings", "result": "Won by 5 runs", "date": "2025-04-25"},
        ],
    },
    "Karachi Kings": {
        "matches": 8, "wins": 5, "losses": 3, "noResults": 0, "points": 10, "nrr": "+0.433", "form": "WLWLW",
        "recentMatches": [
            {"opponent": "Lahore Qalandars", "result": "Won by 4 wickets", "date": "2025-05-04"},
            {"opponent": "Multan Sultans", "result": "Won by 87 runs", "date": "2025-05-01"},
            {"opponent": "Quetta Gladiators", "result": "Lost by 5 runs", "date": "2025-04-25"},
            {"opponent": "Peshawar Zalmi", "result": "Won by 2 wickets", "date": "2025-04-21"},
            {"opponent": "Islamabad United", "result": "Lost by 6 wickets", "date": "2025-04-20"},
        ],
    },
    "Islamabad United": {
        "matches": 9, "wins": 5, "losses": 4, "noResults": 0, "points": 10, "nrr": "-0.044", "form": "LWLLW",
        "recentMatches": [
            {"opponent": "Quetta Gladiators", "result": "Lost by 2 wickets", "date": "2025-05-05"},
            {"opponent": "Peshawar Zalmi", "result": "Lost by 6 wickets", "date": "2025-05-02"},
            {"opponent": "Lahore Qalandars", "result": "Lost by 88 runs", "date": "2025-04-30"},
            {"opponent": "Lahore Qalandars", "result": "Lost by 5 wickets", "date": "2025-04-26"},
            {"opponent": "Multan Sultans", "result": "Won by 7 wickets", "date": "2025-04-23"},
        ],
    },
    "Lahore Qalandars": {
        "matches": 9, "wins": 4, "losses": 4, "noResults": 1, "points": 9, "nrr": "+0.958", "form": "LWNWW",
        "recentMatches": [
            {"opponent": "Karachi Kings", "result": "Lost by 4 wickets", "date": "2025-05-04"},
            {"opponent": "Quetta Gladiators", "result": "No result (Rain)", "date": "2025-05-01"},
            {"opponent": "Islamabad United", "result": "Won by 88 runs", "date": "2025-04-30"},
            {"opponent": "Islamabad United", "result": "Won by 5 wickets", "date": "2025-04-26"},
            {"opponent": "Peshawar Zalmi", "result": "Lost by 7 wickets", "date": "2025-04-24"},
        ],
    },
    "Peshawar Zalmi": {
        "matches": 8, "wins": 4, "losses": 4, "noResults": 0, "points": 8, "nrr": "-0.082", "form": "WWLLW",
        "recentMatches": [
            {"opponent": "Multan Sultans", "result": "Won by 7 wickets", "date": "2025-05-05"},
            {"opponent": "Islamabad United", "result": "Won by 6 wickets", "date": "2025-05-02"},
            {"opponent": "Quetta Gladiators", "result": "Lost by 64 runs", "date": "2025-04-27"},
            {"opponent": "Lahore Qalandars", "result": "Won by 7 wickets", "date": "2025-04-24"},
            {"opponent": "Karachi Kings", "result": "Lost by 2 wickets", "date": "2025-04-21"},
        ],
    },
    "Multan Sultans": {
        "matches": 9, "wins": 1, "losses": 8, "noResults": 0, "points": 2, "nrr": "-2.708", "form": "LLLLL",
        "recentMatches": [
            {"opponent": "Quetta Gladiators", "result": "Lost by 10 wickets", "date": "2025-05-07"},
            {"opponent": "Peshawar Zalmi", "result": "Lost by 7 wickets", "date": "2025-05-05"},
            {"opponent": "Karachi Kings", "result": "Lost by 87 runs", "date": "2025-05-01"},
            {"opponent": "Islamabad United", "result": "Lost by 7 wickets", "date": "2025-04-23"},
            {"opponent": "Lahore Qalandars", "result": "Won by 33 runs", "date": "2025-04-22"},
        ],
    },
}

# Only the pairs that changed since the bundled snapshot
CURRENT_HEAD_TO_HEAD = {
    "Multan Sultans-Peshawar Zalmi": {"total": 2, "matches": [
        {"date": "2025-05-05", "result": "Peshawar Zalmi won by 7 wickets", "scores": "MS: 108 all out, PZ: 109/3"},
        {"date": "2025-04-19", "result": "Peshawar Zalmi won by 120 runs", "scores": "PZ: 227/7, MS: 107 all out"},
    ]},
    "Karachi Kings-Lahore Qalandars": {"total": 2, "matches": [
        {"date": "2025-05-04", "result": "Karachi Kings won by 4 wickets", "scores": "LQ: 148 all out, KK: 149/6"},
        {"date": "2025-04-15", "result": "Lahore Qalandars won by 65 runs", "scores": "LQ: 226/4, KK: 161 all out"},
    ]},
    "Multan Sultans-Quetta Gladiators": {"total": 2, "matches": [
        {"date": "2025-05-07", "result": "Quetta Gladiators won by 10 wickets", "scores": "MS: 98 all out, QG: 99/0"},
        {"date": "2025-04-29", "result": "Quetta Gladiators won by 10 wickets", "scores": "MS: 89 all out, QG: 90/0"},
    ]},
    "Islamabad United-Quetta Gladiators": {"total": 1, "matches": [
        {"date": "2025-05-05", "result": "Quetta Gladiators won by 2 wickets", "scores": "IU: 165/8, QG: 166/8"},
    ]},
}

CURRENT_MATCHES = {
    "Match27": {"team1": "Karachi Kings", "team2": "Peshawar Zalmi", "date": "2025-05-08", "time": "7:00 PM", "venue": "Rawalpindi"},
    "Match28": {"team1": "Lahore Qalandars", "team2": "Peshawar Zalmi", "date": "2025-05-09", "time": "7:00 PM", "venue": "Rawalpindi"},
    "Match29": {"team1": "Islamabad United", "team2": "Karachi Kings", "date": "2025-05-10", "time": "7:00 PM", "venue": "Rawalpindi"},
    "Match30": {"team1": "Multan Sultans", "team2": "Quetta Gladiators", "date": "2025-05-11", "time": "7:00 PM", "venue": "Multan"},
    "Qualifier 1": {"team1": "Quetta Gladiators", "team2": "TBA", "date": "2025-05-13", "time": "7:00 PM", "venue": "Rawalpindi"},
    "Eliminator": {"team1": "TBA", "team2": "TBA", "date": "2025-05-14", "time": "7:00 PM", "venue": "Lahore"},
    "Qualifier 2": {"team1": "TBA", "team2": "TBA", "date": "2025-05-16", "time": "7:00 PM", "venue": "Lahore"},
    "Final": {"team1": "TBA", "team2": "TBA", "date": "2025-05-18", "time": "7:00 PM", "venue": "Lahore"},
}

CURRENT_NEWS_ITEMS = [
    "Quetta Gladiators beat Multan Sultans by 10 wickets to secure top spot in the PSL points table",
    "Peshawar Zalmi beat Multan Sultans by 7 wickets to boost playoff chances",
    "Quetta Gladiators beat Islamabad United by 2 wickets in a thrilling last-over finish",
    "Karachi Kings beat Lahore Qalandars by 4 wickets, Irfan the hero as Kings ace the chase",
    "Quetta Gladiators secure spot in Qualifier 1 with 13 points from 9 matches",
    "Zalmi face Kings in crucial match today with playoff implications for both teams",
    "PSL confirms final to be held at Gaddafi Stadium on May 18 as scheduled",
]


def apply_hardcoded_updates(base: Dataset, now_iso: Optional[str] = None) -> Dataset:
    """
    Overlay the manual update on `base` (never mutated).

    Team stats + recent matches are replaced for teams present in `base`;
    head-to-head and fixture keys are overwritten; news is replaced.
    """
    updated = base.copy()

    for name, data in CURRENT_POINTS_TABLE.items():
        team = updated.teams.get(name)
        if team is None:
            continue
        fresh = TeamRecord.from_dict(name, data)
        team.matches = fresh.matches
        team.wins = fresh.wins
        team.losses = fresh.losses
        team.no_results = fresh.no_results or 0
        team.points = fresh.points
        team.nrr = fresh.nrr
        team.form = fresh.form
        team.recent_matches = [RecentMatch.from_dict(m) for m in data["recentMatches"]]

    for key, data in CURRENT_HEAD_TO_HEAD.items():
        updated.head_to_head[key] = HeadToHeadEntry.from_dict(data)

    for key, data in CURRENT_MATCHES.items():
        updated.fixtures[key] = Fixture.from_dict(key, data)

    updated.news_items = list(CURRENT_NEWS_ITEMS)
    updated.last_updated = now_iso or utc_now_iso()

    logger.info("Applied hardcoded updates to PSL data (latest as of %s)", UPDATED_AS_OF)
    return updated
