# psl_api/direct_scraper.py
from __future__ import annotations

import logging
import random
import re
from io import StringIO
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd
from bs4 import BeautifulSoup

from psl_api.config import official_url
from psl_api.errors import FetchError
from psl_api.http_client import PageFetcher
from psl_api.models import FORM_LENGTH, RecentMatch, TeamRecord
from psl_api.parsing import clean_nrr, parse_match_date, safe_int
from psl_api.teams import FRANCHISES, TEAM_NAMES, normalize_team_name

logger = logging.getLogger(__name__)

RawRow = Dict[str, Any]
PointsRule = Callable[[str], Dict[str, RawRow]]

ROW_SELECTORS = (
    "table tr",
    ".points-table tr",
    "tr",
    "table tbody tr",
    ".points-table tbody tr",
)

RESULT_BLOCK_SELECTORS = (".match-result", ".result-item", ".match-card")

_NUM8_NRR = r"\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s+([+-]?\d*\.?\d+)"
_MARGIN_RE = re.compile(r"(\d+)\s+(runs?|wickets?)", re.IGNORECASE)


# -----------------------------
# Shared helpers
# -----------------------------
def _doc_text(html: str) -> str:
    text = BeautifulSoup(html, "html.parser").get_text(" ")
    return re.sub(r"\s+", " ", text)


def _accept(table: Dict[str, RawRow], raw_name: Any, row: RawRow) -> None:
    name = normalize_team_name(str(raw_name or ""))
    if name in TEAM_NAMES:
        table[name] = row


def _row_from_groups(g: Tuple[str, ...]) -> RawRow:
    # groups: P W L T NR ? ? Pts NRR
    return {
        "matches": safe_int(g[0]),
        "wins": safe_int(g[1]),
        "losses": safe_int(g[2]),
        "noResults": safe_int(g[4]),
        "points": safe_int(g[7]),
        "nrr": clean_nrr(g[8]),
    }


# -----------------------------
# Rule 1: pandas.read_html with column scoring
# -----------------------------
def _flatten_columns(df: pd.DataFrame) -> pd.DataFrame:
    cols: List[str] = []
    for c in df.columns:
        if isinstance(c, tuple):
            c = " ".join([str(x) for x in c if x and str(x) != "nan"]).strip()
        cols.append(str(c).strip())
    df.columns = cols
    return df


def _score_points_table(df: pd.DataFrame) -> int:
    cols = [str(c).strip().lower() for c in df.columns]
    score = 0
    if any("team" in c for c in cols):
        score += 3
    if any(c in ("pts", "points") for c in cols):
        score += 3
    if any("nrr" in c for c in cols):
        score += 3
    if any(c in ("w", "won") for c in cols):
        score += 1
    if any(c in ("l", "lost") for c in cols):
        score += 1
    if any(c in ("p", "m", "mat", "matches", "played") for c in cols):
        score += 1
    return score


def _column_map(df: pd.DataFrame) -> Dict[str, str]:
    colmap: Dict[str, str] = {}
    for c in df.columns:
        lc = str(c).strip().lower()
        if "team" in lc:
            colmap[c] = "team"
        elif lc in ("p", "m", "mat", "matches", "played"):
            colmap[c] = "matches"
        elif lc in ("w", "won"):
            colmap[c] = "wins"
        elif lc in ("l", "lost"):
            colmap[c] = "losses"
        elif lc in ("nr", "n/r", "no result", "no results"):
            colmap[c] = "noResults"
        elif lc in ("pts", "points", "pt"):
            colmap[c] = "points"
        elif "nrr" in lc:
            colmap[c] = "nrr"
    return colmap


def rule_read_html(html: str) -> Dict[str, RawRow]:
    try:
        tables = pd.read_html(StringIO(html), flavor="lxml")
    except ValueError:
        # "No tables found"
        return {}

    if not tables:
        return {}

    df = max((_flatten_columns(t.copy()) for t in tables), key=_score_points_table)
    df = df.rename(columns=_column_map(df))

    if not {"team", "wins", "losses"}.issubset(set(df.columns)):
        return {}

    out: Dict[str, RawRow] = {}
    for _, row in df.iterrows():
        _accept(out, row.get("team"), {
            "matches": safe_int(row.get("matches")),
            "wins": safe_int(row.get("wins")),
            "losses": safe_int(row.get("losses")),
            "noResults": safe_int(row.get("noResults")),
            "points": safe_int(row.get("points")),
            "nrr": clean_nrr(row.get("nrr")),
        })
    return out


# -----------------------------
# Rule 2: row selectors over the DOM
# -----------------------------
def _cell(cells: List[Any], idx: int) -> str:
    return cells[idx].get_text(strip=True) if idx < len(cells) else ""


def rule_row_selectors(html: str) -> Dict[str, RawRow]:
    soup = BeautifulSoup(html, "html.parser")

    rows: List[Any] = []
    for selector in ROW_SELECTORS:
        rows = soup.select(selector)
        if len(rows) > 1:
            break

    out: Dict[str, RawRow] = {}
    for row in rows[1:]:
        cells = row.find_all("td")
        if len(cells) < 6:
            continue

        team = _cell(cells, 0)
        if not team or team.lower() == "teams":
            continue

        _accept(out, team, {
            "matches": safe_int(_cell(cells, 1)),
            "wins": safe_int(_cell(cells, 2)),
            "losses": safe_int(_cell(cells, 3)),
            "noResults": safe_int(_cell(cells, 5)),
            "points": safe_int(_cell(cells, 7)),
            "nrr": clean_nrr(_cell(cells, 8)),
        })
    return out


# -----------------------------
# Rules 3 + 4: free-text regex
# -----------------------------
def _points_section(text: str) -> str:
    idx = text.upper().find("POINTS TABLE")
    return text[idx:] if idx >= 0 else text


def rule_team_regex(html: str) -> Dict[str, RawRow]:
    content = _points_section(_doc_text(html))

    out: Dict[str, RawRow] = {}
    for f in FRANCHISES:
        for alias in (f.name, f.short_name, f.abbr):
            m = re.search(r"\b" + re.escape(alias) + _NUM8_NRR, content, flags=re.IGNORECASE)
            if m:
                out[f.name] = _row_from_groups(m.groups())
                break
    return out


def rule_generic_regex(html: str) -> Dict[str, RawRow]:
    out: Dict[str, RawRow] = {}
    for m in re.finditer(r"((?:[A-Za-z]+ ){0,2}[A-Za-z]+)" + _NUM8_NRR, _doc_text(html)):
        _accept(out, m.group(1), _row_from_groups(m.groups()[1:]))
    return out


POINTS_TABLE_RULES: List[Tuple[str, PointsRule]] = [
    ("read_html", rule_read_html),
    ("row_selectors", rule_row_selectors),
    ("team_regex", rule_team_regex),
    ("generic_regex", rule_generic_regex),
]


# -----------------------------
# Form approximation
# -----------------------------
def synthesize_form(wins: int, losses: int, rng: random.Random) -> str:
    """
    APPROXIMATION: a W/L sequence sampled with P(W) = wins / (wins + losses).

    Used only when the source publishes no match-by-match history; it is
    not derived from real results.
    """
    form = ""
    remaining_w, remaining_l = wins, losses
    for _ in range(min(FORM_LENGTH, wins + losses)):
        if remaining_w <= 0:
            form += "L"
            remaining_l -= 1
        elif remaining_l <= 0:
            form += "W"
            remaining_w -= 1
        elif rng.random() < wins / (wins + losses):
            form += "W"
            remaining_w -= 1
        else:
            form += "L"
            remaining_l -= 1
    return form[-FORM_LENGTH:]


def _sample_from_counts(wins: int, losses: int, rng: random.Random) -> str:
    # APPROXIMATION: like synthesize_form, but the ratio tracks what is left
    form = ""
    remaining_w, remaining_l = wins, losses
    for _ in range(min(FORM_LENGTH, wins + losses)):
        ratio = remaining_w / (remaining_w + remaining_l)
        if (rng.random() < ratio and remaining_w > 0) or remaining_l == 0:
            form += "W"
            remaining_w -= 1
        else:
            form += "L"
            remaining_l -= 1
    return form[-FORM_LENGTH:]


def parse_points_table(html: str, rng: random.Random) -> Dict[str, TeamRecord]:
    """Run the rule cascade; first rule yielding any team wins. Empty dict if none match."""
    for rule_name, rule in POINTS_TABLE_RULES:
        try:
            rows = rule(html)
        except Exception as e:
            logger.warning("Points-table rule %s failed: %s", rule_name, e)
            continue

        if not rows:
            logger.info("Points-table rule %s found no teams", rule_name)
            continue

        logger.info("Points-table rule %s extracted %d teams", rule_name, len(rows))
        return {
            name: TeamRecord(
                name=name,
                matches=r["matches"],
                wins=r["wins"],
                losses=r["losses"],
                no_results=r["noResults"],
                points=r["points"],
                nrr=r["nrr"],
                form=synthesize_form(r["wins"], r["losses"], rng),
            )
            for name, r in rows.items()
        }

    return {}


# -----------------------------
# Results page
# -----------------------------
def refine_forms_from_results(table: Dict[str, TeamRecord], results_html: str, rng: random.Random) -> None:
    """Resample each team's form from its won/lost mention counts on the results page (approximation)."""
    text = _doc_text(results_html)
    for name, record in table.items():
        wins = len(re.findall(re.escape(name) + r"\s+won\s+by", text, flags=re.IGNORECASE))
        losses = len(re.findall(re.escape(name) + r"\s+lost\s+by", text, flags=re.IGNORECASE))
        if wins + losses > 0:
            record.form = _sample_from_counts(wins, losses, rng)


def _margin_text(text: str) -> str:
    m = _MARGIN_RE.search(text)
    return f"by {m.group(1)} {m.group(2).lower()}" if m else ""


def parse_recent_matches(team: str, results_html: str, limit: int = FORM_LENGTH) -> List[RecentMatch]:
    soup = BeautifulSoup(results_html, "html.parser")

    blocks: List[Any] = []
    for selector in RESULT_BLOCK_SELECTORS:
        blocks = soup.select(selector)
        if blocks:
            break

    found: List[RecentMatch] = []
    for block in blocks:
        text = re.sub(r"\s+", " ", block.get_text(" ")).strip()
        if team not in text:
            continue

        opponent = next((t for t in TEAM_NAMES if t != team and t in text), "")
        if not opponent:
            continue

        low = text.lower()
        if f"{team} won".lower() in low:
            result = f"Won {_margin_text(text)}".strip()
        elif f"{opponent} won".lower() in low:
            result = f"Lost {_margin_text(text)}".strip()
        elif "no result" in low or "abandoned" in low:
            result = "No result"
        else:
            continue

        found.append(RecentMatch(opponent=opponent, result=result, date=parse_match_date(text)))

    dated = sorted((m for m in found if m.date), key=lambda m: m.date, reverse=True)
    undated = [m for m in found if not m.date]
    return (dated + undated)[:limit]


class DirectScraper:
    """Standings straight from the official PSL site (psl-t20.com)."""

    def __init__(
        self,
        fetcher: PageFetcher,
        rng: Optional[random.Random] = None,
        points_url: Optional[str] = None,
        results_url: Optional[str] = None,
    ) -> None:
        self.fetcher = fetcher
        self.rng = rng or random.Random()
        self.points_url = points_url or official_url("points-table/")
        self.results_url = results_url or official_url("results/")

    def scrape_points_table(self) -> Dict[str, TeamRecord]:
        logger.info("Directly scraping PSL points table from %s", self.points_url)
        html = self.fetcher.fetch_text(self.points_url)
        table = parse_points_table(html, self.rng)
        if not table:
            logger.error("Could not extract any team data from the points table")
        return table

    def scrape(self) -> Dict[str, TeamRecord]:
        table = self.scrape_points_table()
        if not table:
            return {}

        try:
            results_html = self.fetcher.fetch_text(self.results_url)
        except FetchError as e:
            logger.warning("Results page unavailable, keeping synthesized forms: %s", e)
            return table

        refine_forms_from_results(table, results_html, self.rng)
        for name, record in table.items():
            recent = parse_recent_matches(name, results_html)
            if recent:
                record.recent_matches = recent

        return table
