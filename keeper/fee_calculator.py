"""
Fee Calculator - cap usage, aprons, franchise tags and redshirt dues

Runs on every roster edit, so it never raises on partial data: players
missing from the catalog count as zero salary and come back as warnings.
"""

from typing import Iterable, List, Mapping, Optional, Sequence

from keeper.keeper_models import (
    FeeComputation,
    FeeWarning,
    IntStashEntry,
    KeepEntry,
    LeagueCapSettings,
    Player,
    RedshirtEntry,
    RosterSummary,
)

ONE_MILLION = 1_000_000


def clamp_trade_delta(trade_delta: int, cap: LeagueCapSettings) -> int:
    return max(-cap.trade_limit, min(cap.trade_limit, trade_delta))


def effective_cap(trade_delta: int, cap: LeagueCapSettings) -> int:
    """Base cap plus trade delta, held inside the league floor/ceiling"""
    return max(cap.floor, min(cap.ceiling, cap.base + clamp_trade_delta(trade_delta, cap)))


def second_apron_overage_m(cap_used: int, cap: LeagueCapSettings) -> int:
    """Millions over the second apron, rounded up ($1 over bills a full million)"""
    over_by = max(0, cap_used - cap.second_apron)
    return -(-over_by // ONE_MILLION)


def second_apron_penalty(cap_used: int, cap: LeagueCapSettings) -> int:
    return second_apron_overage_m(cap_used, cap) * cap.penalty_rate_per_m


def first_apron_fee(cap_used: int, cap: LeagueCapSettings) -> int:
    return cap.first_apron_fee if cap_used > cap.first_apron else 0


def compute_summary(
    entries: Sequence,
    catalog: Mapping[str, Player],
    *,
    trade_delta: int = 0,
    franchise_tags: int = 0,
    drafted_player_ids: Iterable[str] = (),
    cap: Optional[LeagueCapSettings] = None,
) -> FeeComputation:
    """
    Build the roster summary for one team.

    Args:
        entries: stacked roster entries
        catalog: player_id -> Player, for salary lookup
        trade_delta: team's trade-driven cap adjustment
        franchise_tags: tag count from the stacker
        drafted_player_ids: players taken in the open draft (non-keeper picks)
        cap: league cap settings (defaults to the league constants)

    Returns:
        FeeComputation(summary, warnings)
    """
    cap = cap or LeagueCapSettings()
    warnings: List[FeeWarning] = []

    kept_ids = [e.player_id for e in entries if isinstance(e, KeepEntry)]
    redshirt_count = sum(1 for e in entries if isinstance(e, RedshirtEntry))
    int_stash_count = sum(1 for e in entries if isinstance(e, IntStashEntry))

    drafted_ids = []
    seen = set(kept_ids)
    for player_id in drafted_player_ids:
        if player_id in seen:
            warnings.append(FeeWarning(
                code="duplicate_player",
                message=f"Player {player_id} is listed more than once; counted once",
                player_id=player_id,
            ))
            continue
        seen.add(player_id)
        drafted_ids.append(player_id)

    # Redshirts and international stashes never count against the cap
    cap_used = 0
    for player_id in kept_ids + drafted_ids:
        player = catalog.get(player_id)
        if player is None:
            warnings.append(FeeWarning(
                code="missing_player",
                message=f"Player {player_id} not found; salary counted as 0",
                player_id=player_id,
            ))
            continue
        cap_used += player.salary

    delta = clamp_trade_delta(trade_delta, cap)
    if delta != trade_delta:
        warnings.append(FeeWarning(
            code="trade_delta_clamped",
            message=f"Trade delta {trade_delta} exceeds the ±{cap.trade_limit} limit; using {delta}",
        ))

    over_by_m = second_apron_overage_m(cap_used, cap)
    apron_fee = first_apron_fee(cap_used, cap)
    penalty_dues = second_apron_penalty(cap_used, cap)
    tag_dues = franchise_tags * cap.franchise_tag_fee
    redshirt_dues = redshirt_count * cap.redshirt_fee

    summary = RosterSummary(
        keepers_count=len(kept_ids),
        drafted_count=len(drafted_ids),
        redshirts_count=redshirt_count,
        int_stash_count=int_stash_count,
        cap_used=cap_used,
        cap_base=cap.base,
        cap_trade_delta=delta,
        cap_effective=effective_cap(delta, cap),
        over_second_apron_by_m=over_by_m,
        first_apron_fee=apron_fee,
        penalty_dues=penalty_dues,
        franchise_tags=franchise_tags,
        franchise_tag_dues=tag_dues,
        redshirt_dues=redshirt_dues,
        total_fees=apron_fee + penalty_dues + tag_dues + redshirt_dues,
    )

    return FeeComputation(summary=summary, warnings=warnings)
