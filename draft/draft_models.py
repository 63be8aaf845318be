from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, computed_field

KEEPER_PICKED_BY = "keeper"


def _scalar(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class DraftPick(BaseModel):
    """One slot of the snake schedule.

    team_id/team_name/team_abbrev are the slotted (template) team. Live
    ownership after trades lives in PickAssignment.
    """
    round: int
    pick_in_round: int
    overall_pick: int
    team_id: str
    team_name: str = ""
    team_abbrev: str = ""
    is_keeper_slot: bool = False
    player_id: Optional[str] = None
    player_name: Optional[str] = None
    picked_at: Optional[str] = None
    picked_by: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return not self.is_keeper_slot and self.player_id is None

    def as_row(self) -> Dict[str, str]:
        return {name: _scalar(value) for name, value in self.model_dump().items()}


class CurrentPick(BaseModel):
    round: int
    pick_in_round: int
    overall_pick: int
    team_id: str
    started_at: Optional[str] = None


class DraftSchedule(BaseModel):
    league_id: str = ""
    season: int = 0
    status: str = "setup"  # setup, in_progress, completed
    draft_order: List[str]
    rounds: int
    picks: List[DraftPick]
    current_pick: Optional[CurrentPick] = None
    created_at: Optional[str] = None
    created_by: Optional[str] = None

    def get_pick(self, overall_pick: int) -> DraftPick:
        index = overall_pick - 1
        if 0 <= index < len(self.picks) and self.picks[index].overall_pick == overall_pick:
            return self.picks[index]
        for pick in self.picks:
            if pick.overall_pick == overall_pick:
                return pick
        raise ValueError(f"Pick #{overall_pick} is not in this draft ({len(self.picks)} picks)")


class TradeRecord(BaseModel):
    from_team: str
    to_team: str
    traded_at: Optional[str] = None
    trade_id: Optional[str] = None


class PickAssignment(BaseModel):
    """Ownership record for one pick, keyed by league + season + overall pick"""
    league_id: str = ""
    season: int = 0
    overall_pick: int
    round: int = 0
    pick_in_round: int = 0
    current_team_id: str
    original_team_id: str
    original_team_name: str = ""
    original_team_abbrev: str = ""
    trade_history: List[TradeRecord] = []

    @computed_field
    @property
    def id(self) -> str:
        return f"{self.league_id}_{self.season}_pick_{self.overall_pick}"

    @computed_field
    @property
    def was_traded(self) -> bool:
        return self.current_team_id != self.original_team_id

    def as_row(self) -> Dict[str, str]:
        row = self.model_dump(exclude={"trade_history"})
        row["trade_history"] = ";".join(
            f"{t.from_team}>{t.to_team}@{t.traded_at or ''}" for t in self.trade_history
        )
        return {name: _scalar(value) for name, value in row.items()}
