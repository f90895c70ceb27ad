# psl_api/cricinfo.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from psl_api.config import TOURNAMENT_YEAR, cricinfo_url
from psl_api.errors import FetchError, ParseError
from psl_api.http_client import PageFetcher
from psl_api.models import Fixture, Result, TeamRecord
from psl_api.parsing import clean_nrr, extract_venue_city, parse_match_date, parse_match_time, safe_int
from psl_api.teams import TBA, is_known_team, is_valid_fixture_team, normalize_team_name

logger = logging.getLogger(__name__)

COMPLETED_MARKERS = ("won", "tied", "no result")


def _text(node: Any, selector: Optional[str] = None) -> str:
    if node is None:
        return ""
    if selector:
        node = node.select_one(selector)
        if node is None:
            return ""
    return node.get_text(" ", strip=True)


def _card_teams(card: Any) -> List[Any]:
    return card.select(".team")[:2]


def _fixture_team(raw: str) -> str:
    name = normalize_team_name(raw)
    if name and not is_valid_fixture_team(name):
        logger.warning("Unrecognised fixture team %r; using %s", raw, TBA)
        return TBA
    return name


def extract_form(form_cell: Any) -> str:
    """'.form-item' children -> 'WLN-' string (anything unexpected becomes '-')."""
    if form_cell is None:
        return ""
    out = ""
    for item in form_cell.select(".form-item"):
        code = item.get_text(strip=True).upper()
        out += code if code in ("W", "L", "N") else "-"
    return out


# -----------------------------
# Page parsers (HTML in, records out)
# -----------------------------
def parse_standings(html: str) -> Dict[str, TeamRecord]:
    soup = BeautifulSoup(html, "html.parser")
    rows = soup.select("table.standings tbody tr")
    if not rows:
        raise ParseError("No 'table.standings' rows on standings page")

    teams: Dict[str, TeamRecord] = {}
    for row in rows:
        name = normalize_team_name(_text(row, "td.team-names a"))
        if not name:
            continue

        cells = row.find_all("td")

        def cell(i: int) -> str:
            return cells[i].get_text(strip=True) if i < len(cells) else ""

        form = extract_form(row.select_one("td.form-data"))
        teams[name] = TeamRecord(
            name=name,
            matches=safe_int(cell(2)),
            wins=safe_int(cell(3)),
            losses=safe_int(cell(4)),
            no_results=safe_int(cell(5)),
            points=safe_int(cell(6)),
            nrr=clean_nrr(cell(7)),
            form=form or None,
        )

    return teams


def parse_fixtures(html: str, year: int = TOURNAMENT_YEAR) -> Dict[str, Fixture]:
    soup = BeautifulSoup(html, "html.parser")
    fixtures: Dict[str, Fixture] = {}

    for index, card in enumerate(soup.select(".match-card"), start=1):
        teams = _card_teams(card)
        team1 = _fixture_team(_text(teams[0], ".name")) if len(teams) > 0 else ""
        team2 = _fixture_team(_text(teams[1], ".name")) if len(teams) > 1 else ""
        if not team1 or not team2:
            continue

        when = _text(card, ".date-time")
        match_id = f"Match{index}"
        fixtures[match_id] = Fixture(
            match_id=match_id,
            team1=team1,
            team2=team2,
            date=parse_match_date(when, year),
            time=parse_match_time(when),
            venue=extract_venue_city(_text(card, ".venue")),
        )

    return fixtures


def _result_from_card(card: Any, result_text: str, when: str, year: int) -> Optional[Result]:
    teams = _card_teams(card)
    if len(teams) < 2:
        return None
    team1 = normalize_team_name(_text(teams[0], ".name"))
    team2 = normalize_team_name(_text(teams[1], ".name"))
    if not team1 or not team2:
        return None
    if not (is_known_team(team1) and is_known_team(team2)):
        logger.warning("Skipping result with unrecognised teams: %s vs %s", team1, team2)
        return None

    scores = f"{team1}: {_text(teams[0], '.score')}, {team2}: {_text(teams[1], '.score')}"
    return Result(team1=team1, team2=team2, result=result_text, date=parse_match_date(when, year), scores=scores)


def parse_results(html: str, year: int = TOURNAMENT_YEAR) -> List[Result]:
    soup = BeautifulSoup(html, "html.parser")
    out: List[Result] = []
    for card in soup.select(".match-card.result"):
        r = _result_from_card(card, _text(card, ".result-text"), _text(card, ".date-time"), year)
        if r:
            out.append(r)
    return out


def parse_recent_matches(html: str, year: int = TOURNAMENT_YEAR) -> List[Result]:
    """Completed cards from the 'matches' page, most recent first."""
    soup = BeautifulSoup(html, "html.parser")
    out: List[Result] = []

    for card in soup.select(".match-card"):
        status = _text(card, ".status")
        if not any(marker in status.lower() for marker in COMPLETED_MARKERS):
            continue
        r = _result_from_card(card, status, _text(card, ".match-header .description"), year)
        if r:
            out.append(r)

    dated = sorted((r for r in out if r.date), key=lambda r: r.date, reverse=True)
    return dated + [r for r in out if not r.date]


# -----------------------------
# Fetching
# -----------------------------
class CricinfoScraper:
    """Standings, fixtures and results from the primary site (ESPN Cricinfo)."""

    def __init__(self, fetcher: PageFetcher, year: int = TOURNAMENT_YEAR) -> None:
        self.fetcher = fetcher
        self.year = year

    def fetch_standings(self) -> Dict[str, TeamRecord]:
        return parse_standings(self.fetcher.fetch_text(cricinfo_url("standings")))

    def fetch_fixtures(self) -> Dict[str, Fixture]:
        return parse_fixtures(self.fetcher.fetch_text(cricinfo_url("fixtures")), self.year)

    def fetch_results(self) -> List[Result]:
        return parse_results(self.fetcher.fetch_text(cricinfo_url("results")), self.year)

    def fetch_recent_results(self) -> List[Result]:
        """Prefer the 'matches' page; fall back to the results page when it has no completed games."""
        try:
            recent = parse_recent_matches(self.fetcher.fetch_text(cricinfo_url("recent")), self.year)
        except (FetchError, ParseError) as e:
            logger.error("Error fetching recent matches data: %s", e)
            return self.fetch_results()

        if not recent:
            logger.warning("No completed matches found on matches page, falling back to results page")
            return self.fetch_results()
        return recent
