# psl_api/config.py
from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: List[str]) -> List[str]:
    raw = _get_env(name)
    if not raw:
        return list(default)
    return [p.strip() for p in raw.split(",") if p.strip()]


# -------------------------
# Primary site (ESPN Cricinfo) config
# -------------------------
# Series slug changes per season
PSL_SERIES_SLUG: str = _get_env("PSL_SERIES_SLUG", "pakistan-super-league-2024-25-1512433")

CRICINFO_URL_TEMPLATE: str = _get_env(
    "CRICINFO_URL_TEMPLATE",
    "https://www.espncricinfo.com/series/{slug}/{page}",
)

CRICINFO_PAGES = {
    "standings": "points-table-standings",
    "fixtures": "match-schedule-fixtures",
    "results": "match-results",
    "recent": "matches",
}


# -------------------------
# Direct scrape (official PSL site) config
# -------------------------
PSL_OFFICIAL_BASE_URL: str = _get_env("PSL_OFFICIAL_BASE_URL", "https://psl-t20.com")


# -------------------------
# Indirection layer (CORS-style proxies)
# -------------------------
# Each template is a prefix; the url-encoded target is appended.
PROXY_URL_TEMPLATES: List[str] = _get_env_list(
    "PROXY_URL_TEMPLATES",
    [
        "https://corsproxy.io/?",
        "https://api.allorigins.win/raw?url=",
    ],
)


# -------------------------
# Refresh / transport / storage
# -------------------------
REFRESH_INTERVAL_SECONDS: int = _get_env_int("REFRESH_INTERVAL_SECONDS", 3600)
HTTP_TIMEOUT_SECONDS: int = _get_env_int("HTTP_TIMEOUT_SECONDS", 15)
TOURNAMENT_YEAR: int = _get_env_int("TOURNAMENT_YEAR", 2025)

# If 1, the embedded manual update wins over every live source
HARDCODED_UPDATES_ENABLED: bool = _get_env("HARDCODED_UPDATES_ENABLED", "1") == "1"

SNAPSHOT_STORE_PATH: str = _get_env("SNAPSHOT_STORE_PATH", ".psl_cache/store.json")

LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO").upper()


def cricinfo_url(page: str) -> str:
    return CRICINFO_URL_TEMPLATE.format(slug=PSL_SERIES_SLUG, page=CRICINFO_PAGES[page])


def official_url(path: str) -> str:
    return f"{PSL_OFFICIAL_BASE_URL.rstrip('/')}/{path.lstrip('/')}"


def validate_config() -> None:
    if "{slug}" not in CRICINFO_URL_TEMPLATE or "{page}" not in CRICINFO_URL_TEMPLATE:
        raise RuntimeError("CRICINFO_URL_TEMPLATE must contain {slug} and {page} placeholders.")

    if not PSL_OFFICIAL_BASE_URL.startswith("http"):
        raise RuntimeError("PSL_OFFICIAL_BASE_URL must start with http/https")

    if REFRESH_INTERVAL_SECONDS <= 0:
        raise RuntimeError("REFRESH_INTERVAL_SECONDS must be positive")

    if HTTP_TIMEOUT_SECONDS <= 0:
        raise RuntimeError("HTTP_TIMEOUT_SECONDS must be positive")

    if TOURNAMENT_YEAR < 2016:
        raise RuntimeError("TOURNAMENT_YEAR must be a PSL season (2016+)")
