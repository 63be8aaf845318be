"""
Round Deriver - base keeper round from a player's draft/keeper history
"""

from typing import List, Mapping, Sequence

from keeper.keeper_models import DEFAULT_DRAFT_ROUNDS, KeepEntry, Player

# Rookie round-1 pick ranges -> base keeper round
ROOKIE_FIRST_ROUND_BASE = (
    (range(1, 4), 5),
    (range(4, 7), 6),
    (range(7, 10), 7),
    (range(10, 13), 8),
)


def derive_base_round(player: Player, total_rounds: int = DEFAULT_DRAFT_ROUNDS) -> int:
    """
    Base keeper round before stacking.

    - Prior-year round r: r - 1, never earlier than round 1
    - Rookie with draft info: slotted by rookie pick (round 1) or last round
    - Anything else: the last round of the draft

    Never raises; missing data falls through to the last round.
    """
    prior = player.keeper.prior_year_round if player.keeper else None
    if prior:
        return max(1, prior - 1)

    info = player.rookie_draft_info
    if player.is_rookie and info is not None and info.round == 1:
        for picks, base in ROOKIE_FIRST_ROUND_BASE:
            if info.pick in picks:
                return base

    return total_rounds


def derive_keeper_rounds(players: Sequence[Player], total_rounds: int = DEFAULT_DRAFT_ROUNDS) -> List[Player]:
    """Return copies of players with keeper.derived_base_round filled in"""
    derived = []
    for player in players:
        keeper = player.keeper.model_copy(
            update={"derived_base_round": derive_base_round(player, total_rounds)}
        )
        derived.append(player.model_copy(update={"keeper": keeper}))
    return derived


def apply_base_rounds(
    entries: Sequence,
    catalog: Mapping[str, Player],
    total_rounds: int = DEFAULT_DRAFT_ROUNDS,
) -> List:
    """Fill missing base_round on KEEP entries from the player catalog.

    Entries that already carry a base_round (admin override) are left alone.
    Players missing from the catalog get the last-round default.
    """
    out = []
    for entry in entries:
        if isinstance(entry, KeepEntry) and entry.base_round is None:
            player = catalog.get(entry.player_id)
            base = derive_base_round(player, total_rounds) if player else total_rounds
            entry = entry.model_copy(update={"base_round": base})
        out.append(entry)
    return out
