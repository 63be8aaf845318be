from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel

import league_store
from data_lock import DATA_LOCK
from draft.draft_manager import DraftManager
from draft.pick_ownership import (
    PickOwnershipResolver,
    audit_drafted_players,
    build_pick_assignments,
)
from draft.schedule_generator import generate_draft_schedule
from keeper.keeper_models import KeepEntry
from league_config import get_api_key, load_league_settings
from team_utils import normalize_team_id


def _log(event: str, data: dict) -> None:
    """Minimal structured logs; only called from state-mutating endpoints."""
    print(event, data)


router = APIRouter(prefix="/api/draft", tags=["draft"])


def verify_key(x_api_key: Optional[str] = Header(None)) -> bool:
    api_key = get_api_key()
    if api_key and x_api_key != api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")
    return True


class PickOwnershipPayload(BaseModel):
    current_owner: str
    original_owner: str


class DraftInitializePayload(BaseModel):
    created_by: str = "admin"
    draft_order: Optional[List[str]] = None
    # overall_pick -> owners, for picks traded before the draft was set up
    ownership: Dict[int, PickOwnershipPayload] = {}


class DraftPickPayload(BaseModel):
    team: str
    player_id: str
    picked_by: Optional[str] = None


class DraftAuditPayload(BaseModel):
    apply: bool = False


def _load_draft_or_404(season: int):
    schedule = league_store.load_draft(season)
    if schedule is None:
        raise HTTPException(status_code=404, detail=f"No draft initialized for {season}")
    return schedule


@router.post("/initialize")
async def initialize_draft(
    payload: DraftInitializePayload,
    _: bool = Depends(verify_key),
):
    """Generate the snake schedule from stacked rosters and persist it once."""
    settings = load_league_settings()
    draft_order = payload.draft_order or settings.draft_order

    rosters = league_store.load_rosters(settings.season)
    unlocked = [t for t, r in rosters.items() if (r or {}).get("status") != "locked"]
    if unlocked:
        raise HTTPException(
            status_code=400,
            detail=f"Keeper rosters must be locked before the draft is initialized (not locked: {', '.join(sorted(unlocked))})",
        )

    keepers_by_team = {}
    for team_id in rosters:
        entries = league_store.load_roster_entries(settings.season, team_id)
        keepers_by_team[team_id] = [e for e in entries if isinstance(e, KeepEntry)]

    try:
        schedule = generate_draft_schedule(
            draft_order,
            settings.draft_rounds,
            keepers_by_team,
            teams=settings.teams or None,
            players=league_store.load_players(),
            league_id=settings.league_id,
            season=settings.season,
            created_by=payload.created_by,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    ownership = {
        n: (o.current_owner, o.original_owner)
        for n, o in payload.ownership.items()
    }
    assignments = build_pick_assignments(schedule, ownership)

    try:
        league_store.initialize_draft(schedule, assignments)
    except league_store.DraftAlreadyInitializedError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    _log("draft.initialized", {
        "season": settings.season,
        "by": payload.created_by,
        "picks": len(schedule.picks),
        "traded": sum(1 for a in assignments if a.was_traded),
    })
    return {
        "success": True,
        "season": settings.season,
        "total_picks": len(schedule.picks),
        "current_pick": schedule.current_pick.model_dump() if schedule.current_pick else None,
    }


@router.get("/picks/{overall_pick}/owner")
async def get_pick_owner(
    overall_pick: int,
    _: bool = Depends(verify_key),
):
    settings = load_league_settings()
    schedule = _load_draft_or_404(settings.season)
    resolver = PickOwnershipResolver(schedule, league_store.load_pick_assignments(settings.season))

    try:
        owner = resolver.resolve_owner(overall_pick)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    return {
        "overall_pick": overall_pick,
        "owner_team_id": owner,
        "original_team_id": resolver.template_owner(overall_pick),
        "was_traded": resolver.was_traded(overall_pick),
    }


@router.post("/pick")
async def make_draft_pick(
    payload: DraftPickPayload,
    _: bool = Depends(verify_key),
):
    """Fill the current pick; the player goes to the pick's current owner."""
    settings = load_league_settings()
    team_id = normalize_team_id(payload.team, settings.teams) if settings.teams else payload.team
    if not team_id:
        raise HTTPException(status_code=404, detail=f"Unknown team: {payload.team}")

    with DATA_LOCK:
        schedule = _load_draft_or_404(settings.season)
        manager = DraftManager(schedule, league_store.load_pick_assignments(settings.season))
        player = league_store.load_players().get(payload.player_id)

        try:
            result = manager.make_pick(
                team_id,
                payload.player_id,
                player_name=player.name if player else "",
                picked_by=payload.picked_by,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

        league_store.save_draft(manager.schedule)
        rostered = league_store.assign_player_team(payload.player_id, result.credited_team_id)

    _log("draft.pick", {
        "pick": result.pick.overall_pick,
        "player": payload.player_id,
        "credited": result.credited_team_id,
        "by": result.pick.picked_by,
        "rostered": rostered,
    })
    response = {
        "success": True,
        "pick": result.pick.model_dump(),
        "credited_team_id": result.credited_team_id,
        "rostered": rostered,
        "next_pick": manager.get_current_pick(),
    }
    if not rostered:
        print(f"⚠️ Pick #{result.pick.overall_pick} saved but {payload.player_id} is not in the player catalog")
        response["warning"] = f"{payload.player_id} is not in the player catalog; add them to {result.credited_team_id}'s roster by hand"
    return response


@router.post("/audit")
async def audit_draft(
    payload: DraftAuditPayload,
    _: bool = Depends(verify_key),
):
    """Report (and optionally repair) drafted players on the wrong roster."""
    settings = load_league_settings()
    schedule = _load_draft_or_404(settings.season)
    resolver = PickOwnershipResolver(schedule, league_store.load_pick_assignments(settings.season))

    fixes = audit_drafted_players(schedule, resolver, league_store.load_player_teams())
    fixed = league_store.apply_roster_fixes(fixes) if payload.apply and fixes else 0

    if payload.apply:
        _log("draft.audit_applied", {"season": settings.season, "fixed": fixed})
    return {
        "checked": sum(1 for p in schedule.picks if p.player_id),
        "mismatches": [f.model_dump() for f in fixes],
        "fixed": fixed,
    }
