"""Tests for the official-site points-table cascade and the primary-site page parsers."""

from __future__ import annotations

import random

import pytest

from psl_api.config import cricinfo_url
from psl_api.cricinfo import (
    CricinfoScraper,
    extract_form,
    parse_fixtures,
    parse_recent_matches as parse_cricinfo_recent,
    parse_results,
    parse_standings,
)
from psl_api.direct_scraper import (
    DirectScraper,
    parse_points_table,
    parse_recent_matches,
    rule_generic_regex,
    rule_read_html,
    rule_row_selectors,
    rule_team_regex,
    synthesize_form,
)
from psl_api.errors import ParseError

from conftest import FakeFetcher

POINTS_TABLE_HTML = """
<html><body>
<table class="points-table">
  <thead><tr><th>Team</th><th>M</th><th>W</th><th>L</th><th>T</th><th>NR</th><th>BP</th><th>Pts</th><th>NRR</th></tr></thead>
  <tbody>
    <tr><td>Quetta Gladiators</td><td>9</td><td>6</td><td>2</td><td>0</td><td>1</td><td>0</td><td>13</td><td>+1.530</td></tr>
    <tr><td>Karachi Kings</td><td>8</td><td>5</td><td>3</td><td>0</td><td>0</td><td>0</td><td>10</td><td>+0.433</td></tr>
    <tr><td>Some Other XI</td><td>1</td><td>1</td><td>0</td><td>0</td><td>0</td><td>0</td><td>2</td><td>+0.100</td></tr>
  </tbody>
</table>
</body></html>
"""

TEXT_ONLY_HTML = """
<html><body>
<h2>PSL 2025</h2>
<div>POINTS TABLE</div>
<p>Quetta 9 6 2 0 1 0 0 13 +1.530</p>
<p>Karachi Kings 8 5 3 0 0 0 0 10 +0.433</p>
</body></html>
"""

RESULTS_HTML = """
<div class="match-result">May 4, 2025 Karachi Kings vs Lahore Qalandars. Karachi Kings won by 4 wickets</div>
<div class="match-result">May 7, 2025 Multan Sultans vs Quetta Gladiators. Quetta Gladiators won by 10 wickets</div>
<div class="match-result">May 1, 2025 Quetta Gladiators vs Lahore Qalandars. No result (rain)</div>
<div class="match-result">Karachi Kings vs Quetta Gladiators. Quetta Gladiators won by 5 runs</div>
"""


class TestPointsTableRules:
    def test_read_html(self) -> None:
        rows = rule_read_html(POINTS_TABLE_HTML)
        assert set(rows) == {"Quetta Gladiators", "Karachi Kings"}
        assert rows["Quetta Gladiators"]["points"] == 13
        assert rows["Quetta Gladiators"]["noResults"] == 1
        assert float(rows["Karachi Kings"]["nrr"]) == pytest.approx(0.433)

    def test_read_html_without_tables(self) -> None:
        assert rule_read_html(TEXT_ONLY_HTML) == {}

    def test_row_selectors(self) -> None:
        rows = rule_row_selectors(POINTS_TABLE_HTML)
        assert set(rows) == {"Quetta Gladiators", "Karachi Kings"}
        assert rows["Quetta Gladiators"] == {
            "matches": 9, "wins": 6, "losses": 2, "noResults": 1, "points": 13, "nrr": "+1.530",
        }

    def test_row_selectors_skip_short_rows(self) -> None:
        html = "<table><tr><td>x</td></tr><tr><td>Karachi Kings</td><td>8</td><td>5</td></tr></table>"
        assert rule_row_selectors(html) == {}

    def test_team_regex(self) -> None:
        rows = rule_team_regex(TEXT_ONLY_HTML)
        assert rows["Quetta Gladiators"]["wins"] == 6
        assert rows["Quetta Gladiators"]["nrr"] == "+1.530"
        assert rows["Karachi Kings"]["points"] == 10

    def test_generic_regex(self) -> None:
        rows = rule_generic_regex("<p>Standings Peshawar Zalmi 9 3 6 0 0 0 0 6 -0.522</p>")
        assert rows == {
            "Peshawar Zalmi": {"matches": 9, "wins": 3, "losses": 6, "noResults": 0, "points": 6, "nrr": "-0.522"},
        }

    def test_cascade_falls_through_to_text(self) -> None:
        table = parse_points_table(TEXT_ONLY_HTML, random.Random(0))
        assert set(table) == {"Quetta Gladiators", "Karachi Kings"}
        assert table["Quetta Gladiators"].points == 13

    def test_cascade_nothing_found(self) -> None:
        assert parse_points_table("<html><body>Under maintenance</body></html>", random.Random(0)) == {}


class TestFormApproximation:
    @pytest.mark.parametrize("wins, losses", [(6, 2), (1, 8), (0, 0), (2, 1), (10, 10)])
    def test_length_and_alphabet(self, wins: int, losses: int) -> None:
        form = synthesize_form(wins, losses, random.Random(42))
        assert len(form) == min(5, wins + losses)
        assert set(form) <= {"W", "L"}

    def test_never_exceeds_counts(self) -> None:
        assert synthesize_form(3, 0, random.Random(1)) == "WWW"
        assert synthesize_form(0, 2, random.Random(1)) == "LL"

    def test_points_table_forms_are_bounded(self) -> None:
        table = parse_points_table(POINTS_TABLE_HTML, random.Random(5))
        for record in table.values():
            assert record.form is not None
            assert len(record.form) <= 5


class TestDirectRecentMatches:
    def test_team_relative_results(self) -> None:
        recent = parse_recent_matches("Lahore Qalandars", RESULTS_HTML)
        assert [m.result for m in recent] == ["Lost by 4 wickets", "No result"]
        assert recent[0].opponent == "Karachi Kings"
        assert recent[0].date == "2025-05-04"

    def test_undated_last(self) -> None:
        recent = parse_recent_matches("Quetta Gladiators", RESULTS_HTML)
        assert recent[0].result == "Won by 10 wickets"
        assert recent[-1].date == ""
        assert recent[-1].result == "Won by 5 runs"


class TestDirectScraper:
    POINTS_URL = "https://psl.test/points-table/"
    RESULTS_URL = "https://psl.test/results/"

    def _scraper(self, pages: dict) -> DirectScraper:
        return DirectScraper(
            FakeFetcher(pages),
            rng=random.Random(0),
            points_url=self.POINTS_URL,
            results_url=self.RESULTS_URL,
        )

    def test_scrape_with_results(self) -> None:
        table = self._scraper({self.POINTS_URL: POINTS_TABLE_HTML, self.RESULTS_URL: RESULTS_HTML}).scrape()
        assert table["Karachi Kings"].recent_matches[0].result == "Won by 4 wickets"

    def test_results_page_down_keeps_standings(self) -> None:
        table = self._scraper({self.POINTS_URL: POINTS_TABLE_HTML}).scrape()
        assert table["Quetta Gladiators"].points == 13
        assert table["Quetta Gladiators"].recent_matches is None

    def test_empty_points_table(self) -> None:
        assert self._scraper({self.POINTS_URL: "<p>nothing</p>"}).scrape() == {}


STANDINGS_HTML = """
<table class="standings"><tbody>
  <tr>
    <td>1</td><td class="team-names"><a href="/team/qg">Quetta Gladiators</a></td>
    <td>9</td><td>6</td><td>2</td><td>1</td><td>13</td><td>+1.530</td>
    <td class="form-data"><span class="form-item">W</span><span class="form-item">W</span>
      <span class="form-item">L</span><span class="form-item">?</span></td>
  </tr>
  <tr>
    <td>2</td><td class="team-names"><a>KK</a></td>
    <td>8</td><td>5</td><td>3</td><td>0</td><td>10</td><td>+0.433</td><td class="form-data"></td>
  </tr>
</tbody></table>
"""

FIXTURES_HTML = """
<div class="match-card">
  <div class="team"><span class="name">Lahore Qalandars</span></div>
  <div class="team"><span class="name">Peshawar Zalmi</span></div>
  <div class="date-time">Fri, May 9, 7:00 PM</div><div class="venue">Rawalpindi Cricket Stadium</div>
</div>
<div class="match-card">
  <div class="team"><span class="name">TBA</span></div>
  <div class="team"><span class="name">TBA</span></div>
  <div class="date-time">Sun, May 18, 9:00 PM</div><div class="venue">Gaddafi Stadium, Lahore</div>
</div>
"""

MATCHES_HTML = """
<div class="match-card">
  <div class="match-header"><span class="description">24th Match, Lahore, May 04, 2025</span></div>
  <div class="team"><span class="name">Lahore Qalandars</span><span class="score">148</span></div>
  <div class="team"><span class="name">Karachi Kings</span><span class="score">149/6</span></div>
  <div class="status">Karachi Kings won by 4 wickets</div>
</div>
<div class="match-card">
  <div class="match-header"><span class="description">27th Match, Rawalpindi, May 08, 2025</span></div>
  <div class="team"><span class="name">Karachi Kings</span></div>
  <div class="team"><span class="name">Peshawar Zalmi</span></div>
  <div class="status">Match starts in 3 hrs</div>
</div>
<div class="match-card">
  <div class="match-header"><span class="description">26th Match, Rawalpindi, May 07, 2025</span></div>
  <div class="team"><span class="name">Multan Sultans</span><span class="score">98</span></div>
  <div class="team"><span class="name">Quetta Gladiators</span><span class="score">99/0</span></div>
  <div class="status">Quetta Gladiators won by 10 wickets</div>
</div>
"""

RESULTS_PAGE_HTML = """
<div class="match-card result">
  <div class="team"><span class="name">Islamabad United</span><span class="score">165/8</span></div>
  <div class="team"><span class="name">Quetta Gladiators</span><span class="score">166/8</span></div>
  <div class="date-time">Mon, May 5</div>
  <div class="result-text">Quetta Gladiators won by 2 wickets</div>
</div>
"""


class TestCricinfoParsers:
    def test_standings(self) -> None:
        teams = parse_standings(STANDINGS_HTML)
        qg = teams["Quetta Gladiators"]
        assert (qg.matches, qg.wins, qg.losses, qg.no_results, qg.points, qg.nrr) == (9, 6, 2, 1, 13, "+1.530")
        assert qg.form == "WWL-"
        assert teams["Karachi Kings"].form is None

    def test_standings_without_table(self) -> None:
        with pytest.raises(ParseError):
            parse_standings("<html><body><p>blocked</p></body></html>")

    def test_extract_form_none(self) -> None:
        assert extract_form(None) == ""

    def test_fixtures(self) -> None:
        fixtures = parse_fixtures(FIXTURES_HTML, year=2025)
        first = fixtures["Match1"]
        assert (first.team1, first.team2) == ("Lahore Qalandars", "Peshawar Zalmi")
        assert (first.date, first.time, first.venue) == ("2025-05-09", "7:00 PM", "Rawalpindi")
        assert fixtures["Match2"].team1 == "TBA"
        assert fixtures["Match2"].venue == "Lahore"

    def test_recent_matches_only_completed(self) -> None:
        results = parse_cricinfo_recent(MATCHES_HTML, year=2025)
        assert [r.date for r in results] == ["2025-05-07", "2025-05-04"]
        assert results[1].result == "Karachi Kings won by 4 wickets"
        assert results[1].scores == "Lahore Qalandars: 148, Karachi Kings: 149/6"

    def test_results_page(self) -> None:
        results = parse_results(RESULTS_PAGE_HTML, year=2025)
        assert len(results) == 1
        assert results[0].date == "2025-05-05"
        assert results[0].team2 == "Quetta Gladiators"

    def test_unrecognised_fixture_team_becomes_tba(self) -> None:
        html = FIXTURES_HTML.replace(
            '<span class="name">TBA</span></div>\n  <div class="team"><span class="name">TBA</span>',
            '<span class="name">Qualifier 1 Winner</span></div>\n  <div class="team"><span class="name">Karachi Kings</span>',
        )
        fixtures = parse_fixtures(html, year=2025)
        assert (fixtures["Match2"].team1, fixtures["Match2"].team2) == ("TBA", "Karachi Kings")

    def test_results_with_unrecognised_teams_are_skipped(self) -> None:
        html = RESULTS_PAGE_HTML + RESULTS_PAGE_HTML.replace("Islamabad United", "Kings XI Punjab")
        results = parse_results(html, year=2025)
        assert [(r.team1, r.team2) for r in results] == [("Islamabad United", "Quetta Gladiators")]


class TestCricinfoScraper:
    def test_recent_falls_back_to_results_page(self) -> None:
        fetcher = FakeFetcher({cricinfo_url("results"): RESULTS_PAGE_HTML})
        results = CricinfoScraper(fetcher, year=2025).fetch_recent_results()
        assert [r.result for r in results] == ["Quetta Gladiators won by 2 wickets"]
        assert fetcher.calls == [cricinfo_url("recent"), cricinfo_url("results")]

    def test_recent_without_completed_games_falls_back(self) -> None:
        fetcher = FakeFetcher({
            cricinfo_url("recent"): "<div class='match-card'><div class='status'>Upcoming</div></div>",
            cricinfo_url("results"): RESULTS_PAGE_HTML,
        })
        assert len(CricinfoScraper(fetcher).fetch_recent_results()) == 1

    def test_standings_and_fixtures(self) -> None:
        fetcher = FakeFetcher({
            cricinfo_url("standings"): STANDINGS_HTML,
            cricinfo_url("fixtures"): FIXTURES_HTML,
        })
        scraper = CricinfoScraper(fetcher, year=2025)
        assert len(scraper.fetch_standings()) == 2
        assert "Match1" in scraper.fetch_fixtures()
