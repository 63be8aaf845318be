"""
Draft Schedule Generator - snake-ordered pick grid with keeper slots

Runs once at draft initialization from the locked keeper state. Guarding
against a second initialization is the caller's job (see league_store).
"""

from datetime import datetime
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from draft.draft_models import KEEPER_PICKED_BY, CurrentPick, DraftPick, DraftSchedule
from keeper.keeper_models import KeepEntry, Player, Team, now_iso


class DraftSetupError(ValueError):
    """Draft inputs rejected before any pick is generated."""


class KeeperSlotCollisionError(DraftSetupError):
    """Two keepers of one team landed in the same round (corrupt input)."""


def snake_order(draft_order: Sequence[str], round_num: int) -> List[str]:
    """Odd rounds run in draft order, even rounds in reverse"""
    return list(draft_order) if round_num % 2 == 1 else list(reversed(draft_order))


def _validate_draft_order(draft_order: Sequence[str], teams: Optional[Mapping[str, Team]]) -> None:
    if not draft_order:
        raise DraftSetupError("Draft order is empty: draft order must include every team exactly once")

    seen = set()
    dupes = []
    for team_id in draft_order:
        if team_id in seen and team_id not in dupes:
            dupes.append(team_id)
        seen.add(team_id)
    if dupes:
        raise DraftSetupError(
            f"Draft order must include every team exactly once (listed more than once: {', '.join(dupes)})"
        )

    if teams is not None:
        missing = [t for t in teams if t not in seen]
        unknown = [t for t in draft_order if t not in teams]
        if missing or unknown:
            parts = []
            if missing:
                parts.append(f"missing: {', '.join(missing)}")
            if unknown:
                parts.append(f"unknown: {', '.join(unknown)}")
            raise DraftSetupError(
                f"Draft order must include every team exactly once ({'; '.join(parts)})"
            )


def _index_keepers(
    keepers_by_team: Mapping[str, Sequence],
    draft_order: Sequence[str],
    total_rounds: int,
) -> Dict[Tuple[str, int], KeepEntry]:
    """(team_id, round) -> keeper entry, rejecting anything the grid can't hold"""
    order = set(draft_order)
    slots: Dict[Tuple[str, int], KeepEntry] = {}

    for team_id, entries in keepers_by_team.items():
        keepers = [e for e in entries if isinstance(e, KeepEntry)]
        if keepers and team_id not in order:
            raise DraftSetupError(f"Team {team_id} has keepers but is not in the draft order")

        for entry in keepers:
            if entry.priority is not None and entry.priority < 0:
                raise DraftSetupError(
                    f"Keeper {entry.player_id} on {team_id} has negative priority {entry.priority}"
                )
            if entry.keeper_round is None:
                raise DraftSetupError(
                    f"Keeper {entry.player_id} on {team_id} has no keeper round; stack the roster first"
                )
            if not 1 <= entry.keeper_round <= total_rounds:
                raise DraftSetupError(
                    f"Keeper {entry.player_id} on {team_id} is in round {entry.keeper_round}, "
                    f"outside rounds 1-{total_rounds}"
                )

            key = (team_id, entry.keeper_round)
            if key in slots:
                raise KeeperSlotCollisionError(
                    f"Team {team_id} has two keepers in round {entry.keeper_round} "
                    f"({slots[key].player_id}, {entry.player_id})"
                )
            slots[key] = entry

    return slots


def first_open_pick(picks: Sequence[DraftPick], started_at: Optional[str] = None) -> Optional[CurrentPick]:
    for pick in picks:
        if pick.is_open:
            return CurrentPick(
                round=pick.round,
                pick_in_round=pick.pick_in_round,
                overall_pick=pick.overall_pick,
                team_id=pick.team_id,
                started_at=started_at,
            )
    return None


def generate_draft_schedule(
    draft_order: Sequence[str],
    total_rounds: int,
    keepers_by_team: Mapping[str, Sequence],
    *,
    teams: Optional[Mapping[str, Team]] = None,
    players: Optional[Mapping[str, Player]] = None,
    league_id: str = "",
    season: int = 0,
    created_by: str = "admin",
    now: Optional[datetime] = None,
) -> DraftSchedule:
    """
    Build the full snake schedule.

    Args:
        draft_order: team ids in round-1 order
        total_rounds: number of rounds (R)
        keepers_by_team: team_id -> stacked roster entries
        teams: team_id -> Team, for names and to check the order covers every team
        players: player_id -> Player, for keeper names

    Returns:
        DraftSchedule with overall picks 1..teams*rounds and current_pick on
        the first open slot (None when every slot is a keeper)

    Raises:
        DraftSetupError: bad order, round count or keeper rounds
        KeeperSlotCollisionError: two keepers of one team in one round
    """
    if total_rounds < 1:
        raise DraftSetupError(f"Draft needs at least one round (got {total_rounds})")

    _validate_draft_order(draft_order, teams)
    keeper_slots = _index_keepers(keepers_by_team, draft_order, total_rounds)

    teams = teams or {}
    players = players or {}
    stamp = now_iso(now)

    picks: List[DraftPick] = []
    overall_pick = 1

    for round_num in range(1, total_rounds + 1):
        for index, team_id in enumerate(snake_order(draft_order, round_num)):
            team = teams.get(team_id)
            pick = DraftPick(
                round=round_num,
                pick_in_round=index + 1,
                overall_pick=overall_pick,
                team_id=team_id,
                team_name=team.name if team else "",
                team_abbrev=team.abbrev if team else "",
            )

            keeper = keeper_slots.get((team_id, round_num))
            if keeper is not None:
                player = players.get(keeper.player_id)
                pick = pick.model_copy(update={
                    "is_keeper_slot": True,
                    "player_id": keeper.player_id,
                    "player_name": player.name if player else keeper.player_id,
                    "picked_at": stamp,
                    "picked_by": KEEPER_PICKED_BY,
                })

            picks.append(pick)
            overall_pick += 1

    return DraftSchedule(
        league_id=league_id,
        season=season,
        draft_order=list(draft_order),
        rounds=total_rounds,
        picks=picks,
        current_pick=first_open_pick(picks, stamp),
        created_at=stamp,
        created_by=created_by,
    )
