"""
Roster validation before keeper submission
"""

from collections import Counter
from typing import List, Literal, Mapping, Optional, Sequence

from pydantic import BaseModel

from keeper.keeper_models import (
    DEFAULT_DRAFT_ROUNDS,
    DEFAULT_MAX_KEEPERS,
    IntStashEntry,
    KeepEntry,
    Player,
    RedshirtEntry,
)


class ValidationIssue(BaseModel):
    type: Literal["error", "warning"]
    field: str
    message: str
    player_id: Optional[str] = None


def validate_roster(
    entries: Sequence,
    catalog: Mapping[str, Player],
    max_keepers: int = DEFAULT_MAX_KEEPERS,
    total_rounds: int = DEFAULT_DRAFT_ROUNDS,
) -> List[ValidationIssue]:
    """
    Check a (stacked) roster against league rules.

    Returns a list of issues; an empty list means the roster can be submitted.
    """
    issues: List[ValidationIssue] = []

    keepers = [e for e in entries if isinstance(e, KeepEntry)]
    redshirts = [e for e in entries if isinstance(e, RedshirtEntry)]
    stashes = [e for e in entries if isinstance(e, IntStashEntry)]

    if len(keepers) > max_keepers:
        issues.append(ValidationIssue(
            type="error",
            field="keepers_count",
            message=f"Cannot keep more than {max_keepers} players. You have {len(keepers)} keepers.",
        ))

    for entry in redshirts:
        player = catalog.get(entry.player_id)
        if player is None:
            continue
        info = player.rookie_draft_info
        if info is not None:
            if not info.redshirt_eligible:
                issues.append(ValidationIssue(
                    type="error",
                    field="redshirt_eligibility",
                    message=f"{player.name} is not eligible for redshirt.",
                    player_id=player.id,
                ))
        elif not player.is_rookie:
            issues.append(ValidationIssue(
                type="error",
                field="redshirt_eligibility",
                message=f"{player.name} is not a rookie and cannot be redshirted.",
                player_id=player.id,
            ))

    for entry in stashes:
        player = catalog.get(entry.player_id)
        if player is None:
            continue
        info = player.rookie_draft_info
        if info is not None:
            if not info.int_eligible:
                issues.append(ValidationIssue(
                    type="error",
                    field="int_stash_eligibility",
                    message=f"{player.name} is not eligible for international stash.",
                    player_id=player.id,
                ))
        elif not player.is_international_stash:
            issues.append(ValidationIssue(
                type="error",
                field="int_stash_eligibility",
                message=f"{player.name} is not an international stash player.",
                player_id=player.id,
            ))

    round_counts = Counter(k.keeper_round for k in keepers if k.keeper_round is not None)
    for round_num, count in sorted(round_counts.items()):
        if count > 1:
            issues.append(ValidationIssue(
                type="error",
                field="round_collisions",
                message=f"Round {round_num} has {count} keepers. Re-run stacking to resolve.",
            ))
        if round_num > total_rounds:
            issues.append(ValidationIssue(
                type="error",
                field="keeper_round_range",
                message=f"Keeper round {round_num} is past the last round ({total_rounds}).",
            ))

    for keeper in keepers:
        if keeper.keeper_round is None:
            player = catalog.get(keeper.player_id)
            name = player.name if player else keeper.player_id
            issues.append(ValidationIssue(
                type="warning",
                field="missing_rounds",
                message=f"{name} is marked as KEEP but has no keeper round assigned.",
                player_id=keeper.player_id,
            ))

    return issues


def has_errors(issues: Sequence[ValidationIssue]) -> bool:
    return any(i.type == "error" for i in issues)
