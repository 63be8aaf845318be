"""
League configuration

Teams and cap overrides come from config/league.json; paths, season and
the API key can be overridden from the environment (or a .env file).

Example config/league.json::

    {
      "league_id": "mns",
      "season": 2026,
      "draft_rounds": 13,
      "draft_order": ["NYK"],
      "cap": {"first_apron": 195000000},
      "teams": {
        "NYK": {"name": "Knickerbockers", "abbrev": "NYK", "trade_delta": 5000000}
      }
    }
"""

from __future__ import annotations

import json
import os
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from keeper.keeper_models import (
    DEFAULT_DRAFT_ROUNDS,
    DEFAULT_MAX_KEEPERS,
    LeagueCapSettings,
    Team,
    TeamCapAdjustments,
    TeamSettings,
)

load_dotenv()

DEFAULT_CONFIG_PATH = "config/league.json"


class LeagueSettings(BaseModel):
    league_id: str = ""
    season: int = 2026
    draft_rounds: int = DEFAULT_DRAFT_ROUNDS
    cap: LeagueCapSettings = Field(default_factory=LeagueCapSettings)
    teams: Dict[str, Team] = {}
    draft_order: List[str] = []


def get_config_path() -> str:
    return os.getenv("LEAGUE_CONFIG_PATH", DEFAULT_CONFIG_PATH)


def get_data_dir() -> str:
    return os.getenv("LEAGUE_DATA_DIR", "data")


def get_api_key() -> str:
    return os.getenv("BOT_API_KEY", "")


def _load_json(path: str, default):
    if not os.path.exists(path):
        return default
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _team_from_config(team_id: str, meta: dict) -> Team:
    return Team(
        id=team_id,
        name=str(meta.get("name") or team_id),
        abbrev=str(meta.get("abbrev") or team_id),
        cap_adjustments=TeamCapAdjustments(trade_delta=int(meta.get("trade_delta") or 0)),
        settings=TeamSettings(max_keepers=int(meta.get("max_keepers") or DEFAULT_MAX_KEEPERS)),
    )


def load_league_settings(path: Optional[str] = None) -> LeagueSettings:
    """Load league.json; a missing file gives league defaults with no teams"""
    path = path or get_config_path()
    raw = _load_json(path, None)
    if raw is None:
        print(f"⚠️ League config not found at {path}; using defaults")
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"League config {path} must be a JSON object")

    teams_raw = raw.get("teams") or {}
    teams = {
        str(team_id): _team_from_config(str(team_id), meta if isinstance(meta, dict) else {})
        for team_id, meta in teams_raw.items()
    }

    season = os.getenv("LEAGUE_SEASON") or raw.get("season") or 2026

    return LeagueSettings(
        league_id=str(raw.get("league_id") or ""),
        season=int(season),
        draft_rounds=int(raw.get("draft_rounds") or DEFAULT_DRAFT_ROUNDS),
        cap=LeagueCapSettings(**(raw.get("cap") or {})),
        teams=teams,
        draft_order=[str(t) for t in (raw.get("draft_order") or teams.keys())],
    )
