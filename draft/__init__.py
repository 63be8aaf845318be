"""Draft module - snake schedule, pick ownership and pick flow"""

from .draft_models import CurrentPick, DraftPick, DraftSchedule, PickAssignment, TradeRecord
from .schedule_generator import DraftSetupError, KeeperSlotCollisionError, generate_draft_schedule
from .pick_ownership import PickOwnershipResolver, RosterFix, audit_drafted_players, build_pick_assignments
from .draft_manager import DraftManager, PickResult

__all__ = [
    'CurrentPick',
    'DraftManager',
    'DraftPick',
    'DraftSchedule',
    'DraftSetupError',
    'KeeperSlotCollisionError',
    'PickAssignment',
    'PickOwnershipResolver',
    'PickResult',
    'RosterFix',
    'TradeRecord',
    'audit_drafted_players',
    'build_pick_assignments',
    'generate_draft_schedule',
]
