"""
League Store - JSON persistence for players, rosters and the draft

Thin storage adapter for the keeper and draft engines. Every
load-modify-save cycle holds DATA_LOCK. Files live under LEAGUE_DATA_DIR:

    players.json                  list of Player records
    rosters_{season}.json         team_id -> {status, entries, summary}
    keeper_fees_{season}.json     team_id -> KeeperFees
    draft_{season}.json           DraftSchedule
    pick_assignments_{season}.json list of PickAssignment records
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterable, List, Optional

from pydantic import TypeAdapter

from data_lock import DATA_LOCK
from draft.draft_models import DraftSchedule, PickAssignment
from draft.pick_ownership import RosterFix
from keeper.keeper_models import KeeperFees, Player, RosterEntry, RosterSummary
from league_config import get_data_dir

ROSTER_STATUSES = ("draft", "submitted", "locked")

_entries_adapter = TypeAdapter(List[RosterEntry])


class DraftAlreadyInitializedError(Exception):
    """Raised when a draft is initialized a second time for a season."""


class RosterLockedError(Exception):
    """Raised when a locked roster is edited."""


def _path(name: str) -> str:
    return os.path.join(get_data_dir(), name)


def _load_json(path: str, default) -> Any:
    if not os.path.exists(path):
        return default
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _save_json(path: str, data: Any) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def rosters_path(season: int) -> str:
    return _path(f"rosters_{season}.json")


def draft_path(season: int) -> str:
    return _path(f"draft_{season}.json")


def pick_assignments_path(season: int) -> str:
    return _path(f"pick_assignments_{season}.json")


def keeper_fees_path(season: int) -> str:
    return _path(f"keeper_fees_{season}.json")


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------


def load_players() -> Dict[str, Player]:
    raw = _load_json(_path("players.json"), []) or []
    players = {}
    for rec in raw:
        try:
            player = Player.model_validate(rec)
        except ValueError as exc:
            print(f"⚠️ Skipping bad player record {rec.get('id') if isinstance(rec, dict) else rec}: {exc}")
            continue
        players[player.id] = player
    return players


def save_players(players: Iterable[Player]) -> None:
    with DATA_LOCK:
        _save_json(_path("players.json"), [p.model_dump() for p in players])


def load_player_teams() -> Dict[str, Optional[str]]:
    """player_id -> rostering team_id"""
    return {pid: p.team_id for pid, p in load_players().items()}


def assign_player_team(player_id: str, team_id: str) -> bool:
    """Put a player on a team's roster. Returns False if the player is unknown."""
    with DATA_LOCK:
        players = load_players()
        player = players.get(player_id)
        if player is None:
            print(f"⚠️ Cannot roster unknown player {player_id} on {team_id}")
            return False
        players[player_id] = player.model_copy(update={"team_id": team_id})
        save_players(players.values())
    return True


def apply_roster_fixes(fixes: Iterable[RosterFix]) -> int:
    """Move audited players onto their owners' rosters; returns count fixed"""
    fixed = 0
    with DATA_LOCK:
        players = load_players()
        for fix in fixes:
            player = players.get(fix.player_id)
            if player is None:
                print(f"⚠️ Audit fix skipped, player not found: {fix.player_name or fix.player_id}")
                continue
            players[fix.player_id] = player.model_copy(update={"team_id": fix.owner_team_id})
            fixed += 1
        if fixed:
            save_players(players.values())
    print(f"✅ Fixed {fixed} drafted players")
    return fixed


# ---------------------------------------------------------------------------
# Rosters
# ---------------------------------------------------------------------------


def load_rosters(season: int) -> Dict[str, dict]:
    data = _load_json(rosters_path(season), {}) or {}
    return data if isinstance(data, dict) else {}


def load_roster_entries(season: int, team_id: str) -> List:
    roster = load_rosters(season).get(team_id) or {}
    return _entries_adapter.validate_python(roster.get("entries") or [])


def roster_status(season: int, team_id: str) -> str:
    return (load_rosters(season).get(team_id) or {}).get("status") or "draft"


def save_roster(
    season: int,
    team_id: str,
    entries: List,
    summary: Optional[RosterSummary] = None,
    status: Optional[str] = None,
) -> None:
    if status is not None and status not in ROSTER_STATUSES:
        raise ValueError(f"Unknown roster status {status!r}")

    with DATA_LOCK:
        rosters = load_rosters(season)
        current = rosters.get(team_id) or {}
        if current.get("status") == "locked":
            raise RosterLockedError(f"Roster for {team_id} is locked for {season}")

        rosters[team_id] = {
            "status": status or current.get("status") or "draft",
            "entries": _entries_adapter.dump_python(entries),
            "summary": summary.model_dump() if summary else current.get("summary"),
        }
        _save_json(rosters_path(season), rosters)


def save_keeper_fees(fees: KeeperFees) -> None:
    with DATA_LOCK:
        data = _load_json(keeper_fees_path(fees.season), {}) or {}
        data[fees.team_id] = fees.model_dump()
        _save_json(keeper_fees_path(fees.season), data)


# ---------------------------------------------------------------------------
# Draft
# ---------------------------------------------------------------------------


def load_draft(season: int) -> Optional[DraftSchedule]:
    raw = _load_json(draft_path(season), None)
    if raw is None:
        return None
    return DraftSchedule.model_validate(raw)


def save_draft(schedule: DraftSchedule) -> None:
    with DATA_LOCK:
        _save_json(draft_path(schedule.season), schedule.model_dump())


def load_pick_assignments(season: int) -> List[PickAssignment]:
    raw = _load_json(pick_assignments_path(season), []) or []
    return [PickAssignment.model_validate(rec) for rec in raw]


def initialize_draft(schedule: DraftSchedule, assignments: List[PickAssignment]) -> None:
    """Persist a freshly generated draft; refuses to overwrite an existing one"""
    with DATA_LOCK:
        if os.path.exists(draft_path(schedule.season)):
            raise DraftAlreadyInitializedError(
                f"Draft for {schedule.season} is already initialized; delete it before re-initializing"
            )
        _save_json(draft_path(schedule.season), schedule.model_dump())
        _save_json(
            pick_assignments_path(schedule.season),
            [a.model_dump() for a in assignments],
        )
    keepers = sum(1 for p in schedule.picks if p.is_keeper_slot)
    print(f"✅ Draft {schedule.season} initialized: {len(schedule.picks)} picks, {keepers} keepers")
