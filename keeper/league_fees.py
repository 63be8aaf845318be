"""
League fee aggregation - entry fees layered on top of keeper fees
"""

from typing import Dict, Mapping, Optional

from pydantic import BaseModel

from keeper.keeper_models import LeagueCapSettings, RosterSummary


class TeamFeeLine(BaseModel):
    team_id: str
    entry_fee: int
    keeper_fees: int
    total: int


class PrizePool(BaseModel):
    teams: Dict[str, TeamFeeLine]
    total: int


def compute_prize_pool(
    summaries: Mapping[str, RosterSummary],
    entry_fee: Optional[int] = None,
) -> PrizePool:
    """Each team owes its flat entry fee plus its roster total_fees"""
    if entry_fee is None:
        entry_fee = LeagueCapSettings().entry_fee

    lines = {}
    for team_id, summary in summaries.items():
        lines[team_id] = TeamFeeLine(
            team_id=team_id,
            entry_fee=entry_fee,
            keeper_fees=summary.total_fees,
            total=entry_fee + summary.total_fees,
        )

    return PrizePool(teams=lines, total=sum(line.total for line in lines.values()))
