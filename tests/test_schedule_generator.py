from datetime import datetime, timezone

import pytest

from draft.draft_models import KEEPER_PICKED_BY
from draft.schedule_generator import (
    DraftSetupError,
    KeeperSlotCollisionError,
    generate_draft_schedule,
    snake_order,
)
from keeper.keeper_models import DropEntry, KeepEntry


def test_snake_order_reverses_even_rounds(three_team_schedule):
    picks = three_team_schedule.picks

    assert [(p.team_id, p.overall_pick) for p in picks[:3]] == [("A", 1), ("B", 2), ("C", 3)]
    assert [(p.team_id, p.overall_pick) for p in picks[3:]] == [("C", 4), ("B", 5), ("A", 6)]
    assert snake_order(["A", "B"], 3) == ["A", "B"]


def test_picks_are_contiguous_with_round_positions(three_team_schedule):
    picks = three_team_schedule.picks

    assert [p.overall_pick for p in picks] == list(range(1, 7))
    assert [(p.round, p.pick_in_round) for p in picks] == [
        (1, 1), (1, 2), (1, 3), (2, 1), (2, 2), (2, 3),
    ]
    assert picks[0].team_name == "Knickerbockers"
    assert picks[0].team_abbrev == "NYK"


def test_no_keepers_current_pick_is_first(three_team_schedule):
    current = three_team_schedule.current_pick
    assert current.overall_pick == 1
    assert current.team_id == "A"
    assert three_team_schedule.status == "setup"


def test_keepers_fill_their_slots(teams, players):
    keepers = {
        "A": [KeepEntry(player_id="p1", keeper_round=1), DropEntry(player_id="p6")],
        "C": [KeepEntry(player_id="f1", keeper_round=2)],
    }
    now = datetime(2026, 10, 1, tzinfo=timezone.utc)

    schedule = generate_draft_schedule(
        ["A", "B", "C"], 2, keepers, teams=teams, players=players, now=now,
    )

    first = schedule.get_pick(1)
    assert first.is_keeper_slot
    assert first.player_id == "p1"
    assert first.player_name == "Star Guard"
    assert first.picked_by == KEEPER_PICKED_BY
    assert first.picked_at == "2026-10-01T00:00:00Z"

    # C picks first in round 2
    assert schedule.get_pick(4).player_id == "f1"
    assert sum(1 for p in schedule.picks if p.is_keeper_slot) == 2
    assert schedule.current_pick.overall_pick == 2


def test_all_keeper_slots_leaves_no_current_pick():
    keepers = {"A": [KeepEntry(player_id="x", keeper_round=1)]}
    schedule = generate_draft_schedule(["A"], 1, keepers)
    assert schedule.current_pick is None


def test_two_keepers_in_one_round_is_fatal():
    keepers = {"A": [
        KeepEntry(player_id="x", keeper_round=2),
        KeepEntry(player_id="y", keeper_round=2),
    ]}

    with pytest.raises(KeeperSlotCollisionError, match="two keepers in round 2"):
        generate_draft_schedule(["A", "B"], 3, keepers)


def test_draft_order_must_cover_every_team(teams):
    with pytest.raises(DraftSetupError, match="missing: C"):
        generate_draft_schedule(["A", "B"], 2, {}, teams=teams)

    with pytest.raises(DraftSetupError, match="listed more than once: A"):
        generate_draft_schedule(["A", "B", "A"], 2, {})

    with pytest.raises(DraftSetupError, match="unknown: Z"):
        generate_draft_schedule(["A", "B", "C", "Z"], 2, {}, teams=teams)

    with pytest.raises(DraftSetupError):
        generate_draft_schedule([], 2, {})


def test_keeper_round_out_of_range():
    keepers = {"A": [KeepEntry(player_id="x", keeper_round=4)]}
    with pytest.raises(DraftSetupError, match="outside rounds 1-3"):
        generate_draft_schedule(["A"], 3, keepers)


def test_negative_priority_rejected():
    keepers = {"A": [KeepEntry(player_id="x", keeper_round=1, priority=-1)]}
    with pytest.raises(DraftSetupError, match="negative priority"):
        generate_draft_schedule(["A"], 2, keepers)


def test_unstacked_keeper_rejected():
    keepers = {"A": [KeepEntry(player_id="x", base_round=1)]}
    with pytest.raises(DraftSetupError, match="no keeper round"):
        generate_draft_schedule(["A"], 2, keepers)


def test_keeper_team_outside_draft_order():
    keepers = {"Z": [KeepEntry(player_id="x", keeper_round=1)]}
    with pytest.raises(DraftSetupError, match="not in the draft order"):
        generate_draft_schedule(["A"], 2, keepers)


def test_zero_rounds_rejected():
    with pytest.raises(DraftSetupError):
        generate_draft_schedule(["A"], 0, {})


def test_get_pick_unknown_number(three_team_schedule):
    with pytest.raises(ValueError):
        three_team_schedule.get_pick(7)


def test_as_row_exports_scalars(three_team_schedule):
    row = three_team_schedule.picks[0].as_row()
    assert row["overall_pick"] == "1"
    assert row["is_keeper_slot"] == "false"
    assert row["player_id"] == ""
