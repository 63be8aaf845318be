"""
Keeper models - players, roster decisions, cap settings and summaries
Shared by the round deriver, stacker and fee calculator
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

# League defaults
DEFAULT_DRAFT_ROUNDS = 13
DEFAULT_MAX_KEEPERS = 8

Decision = Literal["KEEP", "DROP", "REDSHIRT", "INT_STASH"]


def now_iso(now: Optional[datetime] = None) -> str:
    """UTC timestamp as ISO-8601 with a Z suffix"""
    now = now or datetime.now(timezone.utc)
    return now.isoformat().replace("+00:00", "Z")


class LeagueCapSettings(BaseModel):
    """Cap thresholds and fee rates (salaries in dollars, fees in league dollars)"""
    floor: int = 170_000_000
    base: int = 225_000_000
    ceiling: int = 255_000_000
    trade_limit: int = 40_000_000
    first_apron: int = 195_000_000
    first_apron_fee: int = 50
    second_apron: int = 225_000_000
    penalty_rate_per_m: int = 2
    franchise_tag_fee: int = 15
    redshirt_fee: int = 10
    entry_fee: int = 50


class RookieDraftInfo(BaseModel):
    round: int = Field(..., ge=1, le=3)
    pick: int = Field(..., ge=1)
    redshirt_eligible: bool = False
    int_eligible: bool = False


class PlayerKeeper(BaseModel):
    prior_year_round: Optional[int] = None
    derived_base_round: Optional[int] = None


class Player(BaseModel):
    id: str
    name: str = ""
    position: str = ""
    salary: int = 0
    team_id: Optional[str] = None
    is_rookie: bool = False
    is_international_stash: bool = False
    rookie_draft_info: Optional[RookieDraftInfo] = None
    keeper: PlayerKeeper = Field(default_factory=PlayerKeeper)


# ---------------------------------------------------------------------------
# Roster entries (one model per decision)
# ---------------------------------------------------------------------------


class _RosterEntryBase(BaseModel):
    player_id: str
    locked: bool = False
    notes: Optional[str] = None


class KeepEntry(_RosterEntryBase):
    decision: Literal["KEEP"] = "KEEP"
    base_round: Optional[int] = None
    # Lower = earlier among keepers sharing a base round
    priority: Optional[int] = None
    keeper_round: Optional[int] = None


class DropEntry(_RosterEntryBase):
    decision: Literal["DROP"] = "DROP"


class RedshirtEntry(_RosterEntryBase):
    decision: Literal["REDSHIRT"] = "REDSHIRT"


class IntStashEntry(_RosterEntryBase):
    decision: Literal["INT_STASH"] = "INT_STASH"


RosterEntry = Annotated[
    Union[KeepEntry, DropEntry, RedshirtEntry, IntStashEntry],
    Field(discriminator="decision"),
]


class TeamCapAdjustments(BaseModel):
    trade_delta: int = 0


class TeamSettings(BaseModel):
    max_keepers: int = DEFAULT_MAX_KEEPERS


class Team(BaseModel):
    id: str
    name: str = ""
    abbrev: str = ""
    cap_adjustments: TeamCapAdjustments = Field(default_factory=TeamCapAdjustments)
    settings: TeamSettings = Field(default_factory=TeamSettings)


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------

FEE_COMPONENTS = ("first_apron_fee", "penalty_dues", "franchise_tag_dues", "redshirt_dues")


class RosterSummary(BaseModel):
    """Cap and fee snapshot for one roster.

    total_fees must always equal the sum of FEE_COMPONENTS; the validator
    rejects any summary that drops a category.
    """
    keepers_count: int = 0
    drafted_count: int = 0
    redshirts_count: int = 0
    int_stash_count: int = 0
    cap_used: int = 0
    cap_base: int = 0
    cap_trade_delta: int = 0
    cap_effective: int = 0
    over_second_apron_by_m: int = 0
    first_apron_fee: int = 0
    penalty_dues: int = 0
    franchise_tags: int = 0
    franchise_tag_dues: int = 0
    redshirt_dues: int = 0
    total_fees: int = 0

    @model_validator(mode="after")
    def _check_total(self) -> "RosterSummary":
        expected = sum(self.fee_components().values())
        if self.total_fees != expected:
            raise ValueError(
                f"total_fees {self.total_fees} does not match fee components sum {expected}"
            )
        return self

    def fee_components(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in FEE_COMPONENTS}


class FeeWarning(BaseModel):
    code: str
    message: str
    player_id: Optional[str] = None


class FeeComputation(BaseModel):
    summary: RosterSummary
    warnings: List[FeeWarning] = []


class StackingResult(BaseModel):
    entries: List[RosterEntry]
    franchise_tags: int = 0


class KeeperFees(BaseModel):
    """Keeper-phase fees frozen at roster lock"""
    id: str
    team_id: str
    season: int
    franchise_tag_count: int
    franchise_tag_fees: int
    redshirt_count: int
    redshirt_fees: int
    locked_at: str
    locked_by: str
