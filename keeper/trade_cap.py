"""
Trade cap impact - before/after cap and fee picture for a proposed trade

Pure: takes current rosters and returns summaries, never applies the trade.
"""

from typing import Dict, List, Literal, Mapping, Optional, Sequence

from pydantic import BaseModel

from keeper.fee_calculator import compute_summary, second_apron_overage_m, second_apron_penalty
from keeper.keeper_models import (
    DEFAULT_DRAFT_ROUNDS,
    IntStashEntry,
    KeepEntry,
    LeagueCapSettings,
    Player,
    RedshirtEntry,
    RosterEntry,
    RosterSummary,
)
from keeper.round_stacker import stack_keeper_rounds


class TradeAsset(BaseModel):
    type: Literal["keeper", "redshirt", "int_stash", "rookie_pick"]
    id: str
    salary: int = 0
    from_team_id: str
    to_team_id: str


class TeamCapImpact(BaseModel):
    team_id: str
    team_name: str
    before: RosterSummary
    after: RosterSummary
    salary_in: int
    salary_out: int
    incoming_entries: List[RosterEntry] = []
    warnings: List[str] = []


def _summarize(entries, catalog, trade_delta, cap) -> RosterSummary:
    stacking = stack_keeper_rounds(entries)
    return compute_summary(
        stacking.entries,
        catalog,
        trade_delta=trade_delta,
        franchise_tags=stacking.franchise_tags,
        cap=cap,
    ).summary


def _incoming_entry(asset: TradeAsset, base_round: int):
    if asset.type == "redshirt":
        return RedshirtEntry(player_id=asset.id)
    if asset.type == "int_stash":
        return IntStashEntry(player_id=asset.id)
    return KeepEntry(player_id=asset.id, base_round=base_round)


def compute_trade_cap_impact(
    assets: Sequence[TradeAsset],
    rosters: Mapping[str, Sequence],
    catalog: Mapping[str, Player],
    trade_deltas: Optional[Mapping[str, int]] = None,
    team_names: Optional[Mapping[str, str]] = None,
    cap: Optional[LeagueCapSettings] = None,
    total_rounds: int = DEFAULT_DRAFT_ROUNDS,
) -> List[TeamCapImpact]:
    """
    Cap impact for every team in the trade, in first-seen order.

    Incoming keepers join at the last round; rookie picks carry no salary
    and are ignored.
    """
    cap = cap or LeagueCapSettings()
    trade_deltas = trade_deltas or {}
    team_names = team_names or {}
    player_assets = [a for a in assets if a.type != "rookie_pick"]

    # Traded players may not be in the catalog yet; the asset carries salary
    full_catalog: Dict[str, Player] = dict(catalog)
    for asset in player_assets:
        full_catalog.setdefault(asset.id, Player(id=asset.id, salary=asset.salary))

    team_ids: List[str] = []
    for asset in assets:
        for team_id in (asset.from_team_id, asset.to_team_id):
            if team_id not in team_ids:
                team_ids.append(team_id)

    results = []

    for team_id in team_ids:
        current = list(rosters.get(team_id, []))
        delta = trade_deltas.get(team_id, 0)

        outgoing = [a for a in player_assets if a.from_team_id == team_id]
        incoming = [a for a in player_assets if a.to_team_id == team_id]
        outgoing_ids = {a.id for a in outgoing}

        after_entries = [e for e in current if e.player_id not in outgoing_ids]
        incoming_entries = [_incoming_entry(a, total_rounds) for a in incoming]
        after_entries += incoming_entries

        before = _summarize(current, full_catalog, delta, cap)
        after = _summarize(after_entries, full_catalog, delta, cap)

        results.append(TeamCapImpact(
            team_id=team_id,
            team_name=team_names.get(team_id, team_id),
            before=before,
            after=after,
            salary_in=sum(a.salary for a in incoming),
            salary_out=sum(a.salary for a in outgoing),
            incoming_entries=incoming_entries,
            warnings=_cap_warnings(before, after, cap),
        ))

    return results


def _cap_warnings(before: RosterSummary, after: RosterSummary, cap: LeagueCapSettings) -> List[str]:
    warnings = []
    first_m = cap.first_apron // 1_000_000
    second_m = cap.second_apron // 1_000_000

    if after.cap_used > cap.first_apron >= before.cap_used:
        warnings.append(f"Crosses first apron (${first_m}M): ${cap.first_apron_fee} one-time fee")
    if after.cap_used > cap.second_apron >= before.cap_used:
        warnings.append(f"Crosses second apron (${second_m}M): ${cap.penalty_rate_per_m}/M penalty applies")
    if after.cap_used > cap.second_apron and before.cap_used > cap.second_apron:
        before_over = second_apron_overage_m(before.cap_used, cap)
        after_over = second_apron_overage_m(after.cap_used, cap)
        if after_over > before_over:
            warnings.append(
                f"Increases second apron penalty from ${second_apron_penalty(before.cap_used, cap)}"
                f" to ${second_apron_penalty(after.cap_used, cap)}"
            )
    if after.cap_used > cap.ceiling:
        warnings.append(f"Exceeds hard cap ceiling (${cap.ceiling // 1_000_000}M)")

    return warnings
