"""
Keeper module - base rounds, stacking and cap/fee summaries
"""

from .keeper_models import (
    DEFAULT_DRAFT_ROUNDS,
    DropEntry,
    FeeComputation,
    FeeWarning,
    IntStashEntry,
    KeepEntry,
    KeeperFees,
    LeagueCapSettings,
    Player,
    RedshirtEntry,
    RosterEntry,
    RosterSummary,
    StackingResult,
    Team,
    now_iso,
)
from .round_deriver import apply_base_rounds, derive_base_round, derive_keeper_rounds
from .round_stacker import stack_keeper_rounds
from .fee_calculator import compute_summary
from .keeper_processor import KeeperEvaluation, evaluate_roster, lock_keeper_fees, lock_roster
from .trade_cap import TeamCapImpact, TradeAsset, compute_trade_cap_impact
from .league_fees import PrizePool, TeamFeeLine, compute_prize_pool

__all__ = [
    'DEFAULT_DRAFT_ROUNDS',
    'DropEntry',
    'FeeComputation',
    'FeeWarning',
    'IntStashEntry',
    'KeepEntry',
    'KeeperEvaluation',
    'KeeperFees',
    'LeagueCapSettings',
    'Player',
    'PrizePool',
    'RedshirtEntry',
    'RosterEntry',
    'RosterSummary',
    'StackingResult',
    'Team',
    'TeamCapImpact',
    'TeamFeeLine',
    'TradeAsset',
    'apply_base_rounds',
    'compute_prize_pool',
    'compute_summary',
    'compute_trade_cap_impact',
    'derive_base_round',
    'derive_keeper_rounds',
    'evaluate_roster',
    'lock_keeper_fees',
    'lock_roster',
    'now_iso',
    'stack_keeper_rounds',
]
