from keeper.keeper_models import KeepEntry, Player, PlayerKeeper, RookieDraftInfo
from keeper.round_deriver import apply_base_rounds, derive_base_round, derive_keeper_rounds


def test_prior_year_round_moves_up_one():
    player = Player(id="x", keeper=PlayerKeeper(prior_year_round=5))
    assert derive_base_round(player) == 4


def test_prior_year_round_one_stays_in_round_one():
    player = Player(id="x", keeper=PlayerKeeper(prior_year_round=1))
    assert derive_base_round(player) == 1


def test_no_history_defaults_to_last_round():
    assert derive_base_round(Player(id="x")) == 13
    assert derive_base_round(Player(id="x"), total_rounds=10) == 10


def test_rookie_first_round_pick_ranges():
    def rookie(pick, round_=1):
        return Player(id="r", is_rookie=True, rookie_draft_info=RookieDraftInfo(round=round_, pick=pick))

    assert derive_base_round(rookie(1)) == 5
    assert derive_base_round(rookie(3)) == 5
    assert derive_base_round(rookie(4)) == 6
    assert derive_base_round(rookie(9)) == 7
    assert derive_base_round(rookie(12)) == 8
    assert derive_base_round(rookie(13)) == 13
    assert derive_base_round(rookie(2, round_=2)) == 13


def test_prior_year_round_wins_over_rookie_slot():
    player = Player(
        id="r",
        is_rookie=True,
        rookie_draft_info=RookieDraftInfo(round=1, pick=1),
        keeper=PlayerKeeper(prior_year_round=3),
    )
    assert derive_base_round(player) == 2


def test_derive_keeper_rounds_returns_copies(players):
    derived = derive_keeper_rounds(list(players.values()))

    by_id = {p.id: p for p in derived}
    assert by_id["p1"].keeper.derived_base_round == 1
    assert by_id["p3"].keeper.derived_base_round == 3
    assert by_id["p4"].keeper.derived_base_round == 5
    assert by_id["p6"].keeper.derived_base_round == 13
    assert players["p1"].keeper.derived_base_round is None


def test_apply_base_rounds_keeps_overrides(players):
    entries = [
        KeepEntry(player_id="p1"),
        KeepEntry(player_id="p3", base_round=7),
        KeepEntry(player_id="ghost"),
    ]

    out = apply_base_rounds(entries, players)

    assert [e.base_round for e in out] == [1, 7, 13]
    assert entries[0].base_round is None
