"""
Pick Ownership - who actually owns a numbered pick

The schedule keeps the template (originally slotted) team for each pick;
PickAssignment records carry the current owner after trades. The two are
joined here at read time and never written back into the schedule.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel

from draft.draft_models import DraftSchedule, PickAssignment, TradeRecord


class PickOwnershipResolver:
    """
    Read-only owner lookup for a draft.

    Trades are recorded by the trade flow; this class only reads the
    ownership snapshot it was given.
    """

    def __init__(self, schedule: DraftSchedule, assignments: Iterable[PickAssignment] = ()):
        self._template: Dict[int, str] = {p.overall_pick: p.team_id for p in schedule.picks}
        self._assignments: Dict[int, PickAssignment] = {a.overall_pick: a for a in assignments}

    def resolve_owner(self, overall_pick: int) -> str:
        """Current owner of a pick: the assignment if one exists, else the template team"""
        if overall_pick not in self._template:
            raise ValueError(f"Pick #{overall_pick} is not in this draft")

        assignment = self._assignments.get(overall_pick)
        if assignment is not None:
            return assignment.current_team_id
        return self._template[overall_pick]

    def template_owner(self, overall_pick: int) -> str:
        if overall_pick not in self._template:
            raise ValueError(f"Pick #{overall_pick} is not in this draft")
        return self._template[overall_pick]

    def was_traded(self, overall_pick: int) -> bool:
        return self.resolve_owner(overall_pick) != self.template_owner(overall_pick)

    def picks_owned_by(self, team_id: str) -> List[int]:
        return [n for n in sorted(self._template) if self.resolve_owner(n) == team_id]

    def assignment(self, overall_pick: int) -> Optional[PickAssignment]:
        return self._assignments.get(overall_pick)


def build_pick_assignments(
    schedule: DraftSchedule,
    ownership: Optional[Mapping[int, Tuple[str, str]]] = None,
    traded_at: Optional[str] = None,
) -> List[PickAssignment]:
    """
    One ownership record per schedule slot.

    Args:
        schedule: template schedule
        ownership: optional legacy map overall_pick -> (current_owner, original_owner)

    Traded picks get a seeded trade-history entry.
    """
    ownership = ownership or {}
    records = []

    for pick in schedule.picks:
        current, original = ownership.get(pick.overall_pick, (pick.team_id, pick.team_id))
        current = current or pick.team_id
        original = original or pick.team_id

        history = []
        if current != original:
            history.append(TradeRecord(from_team=original, to_team=current, traded_at=traded_at))

        records.append(PickAssignment(
            league_id=schedule.league_id,
            season=schedule.season,
            overall_pick=pick.overall_pick,
            round=pick.round,
            pick_in_round=pick.pick_in_round,
            current_team_id=current,
            original_team_id=original,
            original_team_name=pick.team_name,
            original_team_abbrev=pick.team_abbrev,
            trade_history=history,
        ))

    return records


class RosterFix(BaseModel):
    overall_pick: int
    player_id: str
    player_name: Optional[str] = None
    rostered_team_id: Optional[str] = None
    owner_team_id: str


def audit_drafted_players(
    schedule: DraftSchedule,
    resolver: PickOwnershipResolver,
    player_teams: Mapping[str, Optional[str]],
) -> List[RosterFix]:
    """
    Find drafted players sitting on the wrong roster.

    Args:
        schedule: draft schedule with filled picks
        resolver: ownership snapshot
        player_teams: player_id -> team currently rostering them (None = unrostered)

    Returns:
        One RosterFix per filled pick whose player is not on the resolved
        owner's roster. Nothing is mutated; applying the fixes is up to the
        storage layer.
    """
    fixes = []
    for pick in schedule.picks:
        if not pick.player_id:
            continue
        owner = resolver.resolve_owner(pick.overall_pick)
        rostered = player_teams.get(pick.player_id)
        if rostered != owner:
            fixes.append(RosterFix(
                overall_pick=pick.overall_pick,
                player_id=pick.player_id,
                player_name=pick.player_name,
                rostered_team_id=rostered,
                owner_team_id=owner,
            ))
    return fixes
