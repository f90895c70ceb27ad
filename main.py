# main.py (PSL stats)
from __future__ import annotations

import logging
import random
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

import requests
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from psl_api.adapters import build_default_adapters
from psl_api.config import HTTP_TIMEOUT_SECONDS, LOG_LEVEL, SNAPSHOT_STORE_PATH, validate_config
from psl_api.errors import NoDataError
from psl_api.http_client import DEFAULT_HEADERS
from psl_api.models import Dataset
from psl_api.publisher import AppState, DataController, Publisher
from psl_api.refresh_policy import RefreshPolicy
from psl_api.storage import JsonFileKeyValueStore, SnapshotStore
from psl_api.teams import is_known_team, normalize_team_name, pair_key
from psl_api.views import build_social_posts, news_ticker_text, sorted_standings, upcoming_fixtures

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("psl_api")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# -----------------------
# App
# -----------------------
app = FastAPI(
    title="PSL Stats API",
    version="0.1.0",
    description="Pakistan Super League points table, fixtures, head-to-head and news with multi-source refresh",
)


@app.on_event("startup")
def on_startup():
    validate_config()


@app.get("/health")
def health_check():
    return {"status": "ok", "time": datetime.utcnow().isoformat() + "Z"}


# -----------------------
# Wiring (overridable in tests via app.dependency_overrides)
# -----------------------
_store = SnapshotStore(JsonFileKeyValueStore(SNAPSHOT_STORE_PATH))
_controller = DataController(
    policy=RefreshPolicy(_store),
    store=_store,
    adapters=build_default_adapters(),
    publisher=Publisher(AppState()),
)
_proxy_session = requests.Session()
_rng = random.Random()


def get_controller() -> DataController:
    return _controller


def get_proxy_session() -> requests.Session:
    return _proxy_session


def get_rng() -> random.Random:
    return _rng


# -----------------------
# Helpers
# -----------------------
def _published(controller: DataController) -> Dataset:
    ds = controller.state.dataset
    if ds is None:
        raise NoDataError("No PSL data available from any source or cache")
    return ds


def _dataset_or_503(controller: DataController) -> Dataset:
    """Published dataset after a policy-gated refresh cycle (a fresh cache is served as-is)."""
    controller.load()
    try:
        return _published(controller)
    except NoDataError as e:
        raise HTTPException(status_code=503, detail=str(e))


# -----------------------
# Dataset endpoints
# -----------------------
@app.get("/api/dataset")
def get_dataset(controller: DataController = Depends(get_controller)):
    ds = _dataset_or_503(controller)
    return {"source": controller.state.source, "data": ds.to_dict()}


class RefreshResponse(BaseModel):
    source: Optional[str] = None
    refreshed: bool
    errors: List[str] = Field(default_factory=list)
    data: Dict[str, Any]


@app.post("/api/refresh", response_model=RefreshResponse)
def force_refresh(controller: DataController = Depends(get_controller)):
    outcome = controller.force_refresh()
    try:
        ds = _published(controller)
    except NoDataError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return RefreshResponse(
        source=controller.state.source,
        refreshed=outcome.refreshed,
        errors=outcome.errors,
        data=ds.to_dict(),
    )


@app.get("/api/standings")
def get_standings(controller: DataController = Depends(get_controller)):
    ds = _dataset_or_503(controller)
    return {
        "source": controller.state.source,
        "last_updated": ds.last_updated,
        "teams": sorted_standings(ds.teams),
    }


@app.get("/api/fixtures/upcoming")
def get_upcoming_fixtures(
    today: Optional[date] = None,
    controller: DataController = Depends(get_controller),
):
    ds = _dataset_or_503(controller)
    fixtures = upcoming_fixtures(ds.fixtures, today=today)
    return {
        "fixtures_count": len(fixtures),
        "fixtures": {k: f.to_dict() for k, f in fixtures.items()},
    }


@app.get("/api/head-to-head")
def get_head_to_head(
    team1: str,
    team2: str,
    controller: DataController = Depends(get_controller),
):
    t1 = normalize_team_name(team1)
    t2 = normalize_team_name(team2)

    for raw, name in ((team1, t1), (team2, t2)):
        if not is_known_team(name):
            raise HTTPException(status_code=400, detail=f"Unknown team: {raw}")
    if t1 == t2:
        raise HTTPException(status_code=400, detail="team1 and team2 must be different")

    ds = _dataset_or_503(controller)
    key = pair_key(t1, t2)
    entry = ds.head_to_head.get(key)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No head-to-head record for {key}")

    return {"key": key, "team1": t1, "team2": t2, **entry.to_dict()}


class NewsResponse(BaseModel):
    items: List[str]
    ticker: str


@app.get("/api/news", response_model=NewsResponse)
def get_news(controller: DataController = Depends(get_controller)):
    ds = _dataset_or_503(controller)
    return NewsResponse(items=ds.news_items, ticker=news_ticker_text(ds.news_items))


class SocialPost(BaseModel):
    author: str
    avatar: str
    timeAgo: str
    content: str
    likes: Union[str, int]
    comments: Union[str, int]
    shares: Union[str, int]


@app.get("/api/social", response_model=List[SocialPost])
def get_social(
    controller: DataController = Depends(get_controller),
    rng: random.Random = Depends(get_rng),
):
    ds = _dataset_or_503(controller)
    return build_social_posts(ds, rng)


# -----------------------
# Indirection layer (fetch-on-behalf proxy)
# -----------------------
@app.api_route("/api/proxy", methods=["GET", "OPTIONS"])
def proxy(
    request: Request,
    url: Optional[str] = None,
    session: requests.Session = Depends(get_proxy_session),
):
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    if not url:
        return JSONResponse(status_code=400, content={"error": "URL parameter is required"}, headers=CORS_HEADERS)

    try:
        r = session.get(url, timeout=HTTP_TIMEOUT_SECONDS, headers=DEFAULT_HEADERS, allow_redirects=True)
    except requests.RequestException as e:
        logger.error("Proxy fetch failed for %s: %s", url, e)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch data", "details": str(e)},
            headers=CORS_HEADERS,
        )

    return Response(
        content=r.content,
        status_code=r.status_code,
        media_type=r.headers.get("Content-Type", "text/html"),
        headers=CORS_HEADERS,
    )


# -----------------------
# Debug surface
# -----------------------
class DebugState(BaseModel):
    source: Optional[str] = None
    published_at: Optional[str] = None
    last_fetch_ms: Optional[int] = None
    force_refresh_pending: bool
    adapters: List[str]
    team_count: int
    fixture_count: int
    last_errors: List[str] = Field(default_factory=list)


@app.get("/api/debug/state", response_model=DebugState)
def debug_state(controller: DataController = Depends(get_controller)):
    return DebugState(**controller.debug_state())
