from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel

import league_store
from keeper.keeper_models import RosterEntry
from keeper.keeper_processor import (
    KeeperEvaluation,
    evaluate_roster,
    lock_keeper_fees,
    lock_roster,
)
from keeper.roster_validator import has_errors
from league_config import LeagueSettings, get_api_key, load_league_settings
from team_utils import normalize_team_id


def _log(event: str, data: dict) -> None:
    """Minimal structured logs; only called from state-mutating endpoints."""
    print(event, data)


router = APIRouter(prefix="/api/keepers", tags=["keepers"])


def verify_key(x_api_key: Optional[str] = Header(None)) -> bool:
    api_key = get_api_key()
    if api_key and x_api_key != api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")
    return True


class KeeperPreviewPayload(BaseModel):
    team_id: str
    entries: List[RosterEntry]
    drafted_player_ids: List[str] = []


class RosterSavePayload(BaseModel):
    entries: List[RosterEntry]
    submitted_by: Optional[str] = None


class KeeperLockPayload(BaseModel):
    locked_by: str


def _resolve_team(token: str, settings: LeagueSettings) -> str:
    team_id = normalize_team_id(token, settings.teams)
    if not team_id:
        raise HTTPException(status_code=404, detail=f"Unknown team: {token}")
    return team_id


def _evaluate(team_id: str, entries, settings: LeagueSettings, drafted=()) -> KeeperEvaluation:
    return evaluate_roster(
        settings.teams[team_id],
        entries,
        league_store.load_players(),
        drafted_player_ids=drafted,
        cap=settings.cap,
        total_rounds=settings.draft_rounds,
    )


@router.post("/preview")
async def preview_keepers(
    payload: KeeperPreviewPayload,
    _: bool = Depends(verify_key),
):
    """Live stack + fee feedback for an unsaved roster."""
    settings = load_league_settings()
    team_id = _resolve_team(payload.team_id, settings)
    evaluation = _evaluate(team_id, payload.entries, settings, payload.drafted_player_ids)
    return evaluation.model_dump()


@router.post("/{team}/roster")
async def save_keeper_roster(
    team: str,
    payload: RosterSavePayload,
    _: bool = Depends(verify_key),
):
    settings = load_league_settings()
    team_id = _resolve_team(team, settings)
    evaluation = _evaluate(team_id, payload.entries, settings)

    try:
        league_store.save_roster(
            settings.season,
            team_id,
            evaluation.entries,
            summary=evaluation.summary,
            status="submitted",
        )
    except league_store.RosterLockedError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    _log("keepers.roster_saved", {
        "team": team_id,
        "by": payload.submitted_by,
        "keepers": evaluation.summary.keepers_count,
        "total_fees": evaluation.summary.total_fees,
    })
    return evaluation.model_dump()


@router.get("/{team}/summary")
async def get_keeper_summary(
    team: str,
    _: bool = Depends(verify_key),
):
    settings = load_league_settings()
    team_id = _resolve_team(team, settings)

    rosters = league_store.load_rosters(settings.season)
    if team_id not in rosters:
        raise HTTPException(status_code=404, detail=f"No roster saved for {team_id} in {settings.season}")

    entries = league_store.load_roster_entries(settings.season, team_id)
    evaluation = _evaluate(team_id, entries, settings)
    result = evaluation.model_dump()
    result["status"] = rosters[team_id].get("status") or "draft"
    return result


@router.post("/{team}/lock")
async def lock_keepers(
    team: str,
    payload: KeeperLockPayload,
    _: bool = Depends(verify_key),
):
    """Freeze a saved roster and record its keeper-phase fees."""
    settings = load_league_settings()
    team_id = _resolve_team(team, settings)

    if team_id not in league_store.load_rosters(settings.season):
        raise HTTPException(status_code=404, detail=f"No roster saved for {team_id} in {settings.season}")
    if league_store.roster_status(settings.season, team_id) == "locked":
        raise HTTPException(status_code=409, detail=f"Roster for {team_id} is already locked")

    entries = league_store.load_roster_entries(settings.season, team_id)
    evaluation = _evaluate(team_id, entries, settings)
    if has_errors(evaluation.issues):
        errors = [i.message for i in evaluation.issues if i.type == "error"]
        raise HTTPException(status_code=400, detail="; ".join(errors))

    fees = lock_keeper_fees(team_id, settings.season, evaluation.summary, payload.locked_by)
    try:
        league_store.save_roster(
            settings.season,
            team_id,
            lock_roster(evaluation.entries),
            summary=evaluation.summary,
            status="locked",
        )
    except league_store.RosterLockedError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    league_store.save_keeper_fees(fees)

    _log("keepers.locked", {
        "team": team_id,
        "by": payload.locked_by,
        "franchise_tags": fees.franchise_tag_count,
        "redshirts": fees.redshirt_count,
    })
    return {"success": True, "fees": fees.model_dump(), "summary": evaluation.summary.model_dump()}
