"""
Draft Manager - pick flow over a generated schedule
Tracks the current pick, records selections and credits them to the
pick's current owner (after trades), not the slotted team
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel

from draft.draft_models import DraftPick, DraftSchedule, PickAssignment
from draft.pick_ownership import PickOwnershipResolver
from draft.schedule_generator import first_open_pick
from keeper.keeper_models import now_iso


class PickResult(BaseModel):
    pick: DraftPick
    credited_team_id: str


class DraftManager:
    """
    Manages draft state for one schedule.

    The schedule is copied on construction; read it back from
    `manager.schedule` to persist. Ownership comes from the PickAssignment
    snapshot passed in and is never modified here.
    """

    def __init__(self, schedule: DraftSchedule, assignments: Iterable[PickAssignment] = ()):
        self.schedule = schedule.model_copy(deep=True)
        self.resolver = PickOwnershipResolver(self.schedule, assignments)

    def _open_picks(self) -> List[DraftPick]:
        return [p for p in self.schedule.picks if p.is_open]

    def _with_owner(self, pick: Optional[DraftPick]) -> Optional[Dict]:
        if pick is None:
            return None
        info = pick.model_dump()
        info["owner_team_id"] = self.resolver.resolve_owner(pick.overall_pick)
        return info

    def get_current_pick(self) -> Optional[Dict]:
        """
        Get information about the current pick.

        Returns:
            Pick fields plus owner_team_id (the team on the clock)
            None if draft is complete
        """
        current = self.schedule.current_pick
        if current is None:
            return None
        return self._with_owner(self.schedule.get_pick(current.overall_pick))

    def get_next_pick(self) -> Optional[Dict]:
        """Open pick after the current one (on deck)"""
        open_picks = self._open_picks()
        return self._with_owner(open_picks[1]) if len(open_picks) > 1 else None

    def get_pick_after_next(self) -> Optional[Dict]:
        """Open pick two after the current one (in the hole)"""
        open_picks = self._open_picks()
        return self._with_owner(open_picks[2]) if len(open_picks) > 2 else None

    def make_pick(
        self,
        team: str,
        player_id: str,
        player_name: str = "",
        picked_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PickResult:
        """Record a pick and advance to the next open pick.

        Args:
            team: team making the pick; must own the current pick
            player_id: selected player
            player_name: display name
            picked_by: who submitted the pick (defaults to team)

        Returns:
            PickResult with the filled pick and the team it is credited to

        Raises:
            ValueError: draft complete, wrong team on the clock, or player
                already drafted
        """
        current = self.schedule.current_pick
        if current is None or self.schedule.status == "completed":
            raise ValueError("Draft is complete, no more picks available")

        owner = self.resolver.resolve_owner(current.overall_pick)
        if owner != team:
            raise ValueError(f"Not {team}'s turn. Pick #{current.overall_pick} belongs to {owner}")

        drafted, drafted_by = self.is_player_drafted(player_id)
        if drafted:
            raise ValueError(f"{player_name or player_id} already drafted by {drafted_by}")

        stamp = now_iso(now)
        index = self.schedule.picks.index(self.schedule.get_pick(current.overall_pick))
        filled = self.schedule.picks[index].model_copy(update={
            "player_id": player_id,
            "player_name": player_name or player_id,
            "picked_at": stamp,
            "picked_by": picked_by or team,
        })
        self.schedule.picks[index] = filled

        self._advance(stamp)
        print(f"✅ Pick recorded: {owner} - {filled.player_name} (Pick #{filled.overall_pick})")

        return PickResult(pick=filled, credited_team_id=owner)

    def undo_last_pick(self) -> Optional[DraftPick]:
        """
        Undo the most recent open-draft pick. Keeper slots are never undone.

        Returns:
            The pick as it was before clearing, or None if nothing to undo
        """
        made = [p for p in self.schedule.picks if not p.is_keeper_slot and p.player_id]
        if not made:
            return None

        undone = max(made, key=lambda p: p.overall_pick)
        index = self.schedule.picks.index(undone)
        self.schedule.picks[index] = undone.model_copy(update={
            "player_id": None,
            "player_name": None,
            "picked_at": None,
            "picked_by": None,
        })

        self._advance(now_iso())
        print(f"↩️ Undone pick: #{undone.overall_pick} - {undone.player_name}")
        return undone

    def _advance(self, stamp: str) -> None:
        self.schedule.current_pick = first_open_pick(self.schedule.picks, stamp)
        if self.schedule.current_pick is None:
            self.schedule.status = "completed"
            print("🏁 Draft complete!")
        else:
            self.schedule.status = "in_progress"

    def get_picks_by_team(self, team: str) -> List[DraftPick]:
        """Filled picks credited to a team (by current owner)"""
        return [
            p for p in self.schedule.picks
            if p.player_id and self.resolver.resolve_owner(p.overall_pick) == team
        ]

    def get_picks_by_round(self, round_num: int) -> List[DraftPick]:
        return [p for p in self.schedule.picks if p.round == round_num and p.player_id]

    def is_player_drafted(self, player_id: str) -> Tuple[bool, Optional[str]]:
        """
        Check if a player already fills a slot.

        Returns:
            (drafted: bool, team: Optional[str])
        """
        for pick in self.schedule.picks:
            if pick.player_id == player_id:
                return True, self.resolver.resolve_owner(pick.overall_pick)
        return False, None

    def get_draft_progress(self) -> Dict:
        """
        Get overall draft progress statistics.

        Keeper slots count as neither made nor remaining.
        """
        keeper_picks = sum(1 for p in self.schedule.picks if p.is_keeper_slot)
        draftable = len(self.schedule.picks) - keeper_picks
        remaining = len(self._open_picks())
        made = draftable - remaining

        rounds = {}
        for pick in self.schedule.picks:
            entry = rounds.setdefault(pick.round, {"total": 0, "keepers": 0, "made": 0})
            entry["total"] += 1
            if pick.is_keeper_slot:
                entry["keepers"] += 1
            elif pick.player_id:
                entry["made"] += 1

        current = self.schedule.current_pick

        return {
            "total_picks": len(self.schedule.picks),
            "keeper_picks": keeper_picks,
            "picks_made": made,
            "picks_remaining": remaining,
            "percent_complete": round((made / draftable) * 100, 1) if draftable else 100.0,
            "current_round": current.round if current else None,
            "rounds": rounds,
            "status": self.schedule.status,
        }
