"""
Round Stacker - resolves keepers that share a base round

Keepers with the same base round are ordered by owner priority and stack
into successive rounds: the first keeps the base round, the next takes
base + 1, and so on. Every round-1 keeper after the first costs a
franchise tag; collisions in any other round shift forward for free.
"""

from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from keeper.keeper_models import KeepEntry, StackingResult


def _priority_key(item: Tuple[int, KeepEntry]) -> Tuple[bool, int, int]:
    # Entries without a priority sort last; insertion order breaks ties
    index, entry = item
    return (entry.priority is None, entry.priority or 0, index)


def count_franchise_tags(entries: Sequence) -> int:
    """One tag per round-1 base keeper beyond the first"""
    round_one = sum(
        1 for e in entries if isinstance(e, KeepEntry) and e.base_round == 1
    )
    return max(0, round_one - 1)


def stack_keeper_rounds(entries: Sequence) -> StackingResult:
    """
    Assign final keeper rounds to every KEEP entry that has a base round.

    Args:
        entries: a team's roster entries (any decision)

    Returns:
        StackingResult with new entry copies (same order as input) and the
        team's franchise tag count. Inputs are not mutated.

    Groups are placed in ascending base-round order. A keeper whose stacked
    round is already held by an earlier group moves to the next free round,
    so no two keepers on a team ever share a final round.
    """
    groups: Dict[int, List[Tuple[int, KeepEntry]]] = defaultdict(list)
    for index, entry in enumerate(entries):
        if isinstance(entry, KeepEntry) and entry.base_round is not None:
            groups[entry.base_round].append((index, entry))

    stacked: Dict[int, KeepEntry] = {}
    occupied = set()

    for base_round in sorted(groups):
        members = sorted(groups[base_round], key=_priority_key)
        for rank, (index, entry) in enumerate(members):
            target = base_round + rank
            while target in occupied:
                target += 1
            occupied.add(target)
            stacked[index] = entry.model_copy(update={"keeper_round": target})

    result = []
    for index, entry in enumerate(entries):
        if index in stacked:
            entry = stacked[index]
        elif isinstance(entry, KeepEntry) and entry.keeper_round is not None:
            # No base round means nothing to stack from
            entry = entry.model_copy(update={"keeper_round": None})
        result.append(entry)

    return StackingResult(
        entries=result,
        franchise_tags=count_franchise_tags(entries),
    )
