"""
Keeper Processor
Runs a team's keeper decisions through derive -> stack -> fees, and freezes
the keeper-phase fees when the roster is locked
"""

from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from keeper.fee_calculator import compute_summary
from keeper.keeper_models import (
    DEFAULT_DRAFT_ROUNDS,
    FeeWarning,
    KeeperFees,
    LeagueCapSettings,
    Player,
    RosterEntry,
    RosterSummary,
    Team,
    now_iso,
)
from keeper.round_deriver import apply_base_rounds
from keeper.round_stacker import stack_keeper_rounds
from keeper.roster_validator import ValidationIssue, validate_roster


class KeeperEvaluation(BaseModel):
    """Everything the roster screen renders after an edit"""
    team_id: str
    entries: List[RosterEntry]
    franchise_tags: int
    summary: RosterSummary
    warnings: List[FeeWarning] = []
    issues: List[ValidationIssue] = []


def evaluate_roster(
    team: Team,
    entries: Sequence,
    catalog: Mapping[str, Player],
    *,
    drafted_player_ids: Iterable[str] = (),
    cap: Optional[LeagueCapSettings] = None,
    total_rounds: int = DEFAULT_DRAFT_ROUNDS,
) -> KeeperEvaluation:
    """
    Full keeper pass for one team.

    1. Fill missing base rounds from player history
    2. Stack keepers sharing a base round, count franchise tags
    3. Compute cap usage and fees
    4. Validate against league rules
    """
    with_bases = apply_base_rounds(entries, catalog, total_rounds)
    stacking = stack_keeper_rounds(with_bases)

    fees = compute_summary(
        stacking.entries,
        catalog,
        trade_delta=team.cap_adjustments.trade_delta,
        franchise_tags=stacking.franchise_tags,
        drafted_player_ids=drafted_player_ids,
        cap=cap,
    )

    issues = validate_roster(
        stacking.entries,
        catalog,
        max_keepers=team.settings.max_keepers,
        total_rounds=total_rounds,
    )

    return KeeperEvaluation(
        team_id=team.id,
        entries=stacking.entries,
        franchise_tags=stacking.franchise_tags,
        summary=fees.summary,
        warnings=fees.warnings,
        issues=issues,
    )


def lock_roster(entries: Sequence) -> List:
    """Copies of entries frozen for the cycle"""
    return [e.model_copy(update={"locked": True}) for e in entries]


def lock_keeper_fees(
    team_id: str,
    season: int,
    summary: RosterSummary,
    locked_by: str,
    now: Optional[datetime] = None,
) -> KeeperFees:
    """Capture keeper-phase fees (franchise tags + redshirts) at lock time"""
    return KeeperFees(
        id=f"{team_id}_{season}",
        team_id=team_id,
        season=season,
        franchise_tag_count=summary.franchise_tags,
        franchise_tag_fees=summary.franchise_tag_dues,
        redshirt_count=summary.redshirts_count,
        redshirt_fees=summary.redshirt_dues,
        locked_at=now_iso(now),
        locked_by=locked_by,
    )
