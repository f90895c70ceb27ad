# psl_api/views.py
from __future__ import annotations

import random
from datetime import date
from typing import Any, Dict, List, Optional

from psl_api.models import Dataset, Fixture, TeamRecord
from psl_api.teams import TEAM_NAMES

NEWS_SEPARATOR = " • "

PLAYER_STATS = (
    ("Mohammad Rizwan", "Multan Sultans", "has scored 368 runs in 10 innings at an average of 58.25"),
    ("Babar Azam", "Peshawar Zalmi", "leads the run charts with 386 runs at a strike rate of 156.32"),
    ("Shadab Khan", "Islamabad United", "has taken 14 wickets while maintaining an economy of 7.26"),
    ("Shaheen Afridi", "Lahore Qalandars", "has picked up 12 wickets in 8 matches"),
    ("Fakhar Zaman", "Lahore Qalandars", "has hit the most sixes (24) in the tournament"),
    ("Hasan Ali", "Karachi Kings", "has been impressive with 11 wickets"),
    ("Saud Shakeel", "Quetta Gladiators", "has scored 275 runs at an average of 45.83"),
)


def _nrr_value(nrr: Optional[str]) -> float:
    try:
        return float(str(nrr or "0").replace("−", "-"))
    except ValueError:
        return 0.0


def sorted_standings(teams: Dict[str, TeamRecord]) -> List[Dict[str, Any]]:
    """
    Points table sorted by:
    1) Points (desc)
    2) NRR (desc)
    """
    ordered = sorted(
        teams.values(),
        key=lambda t: (t.points or 0, _nrr_value(t.nrr)),
        reverse=True,
    )

    out: List[Dict[str, Any]] = []
    for idx, t in enumerate(ordered, start=1):
        row = {"pos": idx, "team": t.name}
        row.update(t.to_dict())
        row.pop("recentMatches", None)
        out.append(row)
    return out


def top_teams(teams: Dict[str, TeamRecord], count: int = 3) -> List[Dict[str, Any]]:
    return sorted_standings(teams)[:count]


def upcoming_fixtures(fixtures: Dict[str, Fixture], today: Optional[date] = None) -> Dict[str, Fixture]:
    """Fixtures dated today or later. Undated fixtures never count; if none qualify, return all."""
    today_iso = (today or date.today()).isoformat()
    upcoming = {k: f for k, f in fixtures.items() if f.date and f.date >= today_iso}
    return upcoming if upcoming else dict(fixtures)


def news_ticker_text(items: List[str]) -> str:
    if not items:
        return ""
    return "".join(f"{item}{NEWS_SEPARATOR}" for item in items).strip()


def team_in_text(text: str) -> str:
    """First franchise mentioned in `text`."""
    found = [(text.find(team), team) for team in TEAM_NAMES if team in text]
    return min(found)[1] if found else "PSL Official"


def _logo(author: str) -> str:
    return "logo/" + author.lower().replace(" ", "_") + ".png"


def build_social_posts(dataset: Dataset, rng: random.Random) -> List[Dict[str, Any]]:
    """
    Three highlight posts for the social panel.

    Engagement counts are APPROXIMATIONS drawn from `rng`; only the
    standings and news text come from the dataset.
    """
    posts: List[Dict[str, Any]] = []

    leaders = ", ".join(f"{t['team']} ({t.get('points', 0)})" for t in top_teams(dataset.teams, 3))
    posts.append({
        "author": "PSL Official",
        "avatar": "logo/psl.png",
        "timeAgo": "Yesterday",
        "content": (
            f"Points Table Update: {leaders} leading the table! "
            "Which teams do you think will make it to the playoffs? #PSL2025"
        ),
        "likes": f"{rng.randint(2, 7)}.{rng.randint(1, 9)}K",
        "comments": rng.randint(500, 900),
        "shares": f"{rng.randint(1, 3)}.{rng.randint(1, 9)}K",
    })

    if dataset.news_items:
        latest = dataset.news_items[0]
        author = team_in_text(latest)
        posts.append({
            "author": author,
            "avatar": _logo(author),
            "timeAgo": "Today",
            "content": f"{latest} 🏏 What a game! Thanks to all our fans for their support. #PSL2025 #CricketFever",
            "likes": f"{rng.randint(3, 8)}.{rng.randint(1, 9)}K",
            "comments": rng.randint(300, 700),
            "shares": f"{rng.randint(1, 4)}.{rng.randint(1, 9)}K",
        })

    player, team, stat = rng.choice(PLAYER_STATS)
    posts.append({
        "author": "Cricket Analyst",
        "avatar": "logo/analyst.jpeg",
        "timeAgo": "5 hours ago",
        "content": (
            f"{player} ({team}) {stat} continues to impress in #PSL2025. "
            "The tournament has reached its crucial stage as teams fight for playoff spots. #CricketStats"
        ),
        "likes": f"{rng.randint(1, 4)}.{rng.randint(1, 9)}K",
        "comments": rng.randint(200, 600),
        "shares": rng.randint(500, 900),
    })

    return posts
