from keeper.keeper_models import DropEntry, KeepEntry, RedshirtEntry
from keeper.round_stacker import count_franchise_tags, stack_keeper_rounds


def _rounds(result):
    return [e.keeper_round for e in result.entries]


def test_round_one_collision_stacks_and_costs_a_tag():
    entries = [
        KeepEntry(player_id="a", base_round=1, priority=0),
        KeepEntry(player_id="b", base_round=1, priority=1),
        KeepEntry(player_id="c", base_round=3, priority=0),
    ]

    result = stack_keeper_rounds(entries)

    assert _rounds(result) == [1, 2, 3]
    assert result.franchise_tags == 1


def test_priority_decides_who_keeps_the_base_round():
    entries = [
        KeepEntry(player_id="late", base_round=4, priority=2),
        KeepEntry(player_id="early", base_round=4, priority=0),
    ]

    result = stack_keeper_rounds(entries)

    assert _rounds(result) == [5, 4]
    assert [e.player_id for e in result.entries] == ["late", "early"]


def test_missing_priority_sorts_last_then_input_order():
    entries = [
        KeepEntry(player_id="a", base_round=6),
        KeepEntry(player_id="b", base_round=6, priority=3),
        KeepEntry(player_id="c", base_round=6),
    ]

    assert _rounds(stack_keeper_rounds(entries)) == [7, 6, 8]


def test_later_round_collisions_are_free():
    entries = [
        KeepEntry(player_id="a", base_round=2, priority=0),
        KeepEntry(player_id="b", base_round=2, priority=1),
    ]

    assert stack_keeper_rounds(entries).franchise_tags == 0


def test_stacked_keeper_cascades_past_a_held_round():
    entries = [
        KeepEntry(player_id="a", base_round=3, priority=0),
        KeepEntry(player_id="b", base_round=3, priority=1),
        KeepEntry(player_id="c", base_round=4, priority=0),
    ]

    rounds = _rounds(stack_keeper_rounds(entries))

    assert rounds == [3, 4, 5]
    assert len(set(rounds)) == len(rounds)


def test_non_keepers_pass_through_and_inputs_unchanged():
    entries = [
        DropEntry(player_id="d"),
        KeepEntry(player_id="k", base_round=9),
        RedshirtEntry(player_id="r"),
    ]

    result = stack_keeper_rounds(entries)

    assert result.entries[0] == entries[0]
    assert result.entries[1].keeper_round == 9
    assert result.entries[2] == entries[2]
    assert entries[1].keeper_round is None


def test_keeper_without_base_round_has_no_keeper_round():
    entries = [KeepEntry(player_id="k", keeper_round=3)]
    assert _rounds(stack_keeper_rounds(entries)) == [None]


def test_stacking_is_idempotent():
    entries = [
        KeepEntry(player_id="a", base_round=1, priority=1),
        KeepEntry(player_id="b", base_round=1, priority=0),
        KeepEntry(player_id="c", base_round=2),
    ]

    once = stack_keeper_rounds(entries)
    twice = stack_keeper_rounds(once.entries)

    assert once.entries == twice.entries
    assert once.franchise_tags == twice.franchise_tags == 1


def test_empty_roster():
    result = stack_keeper_rounds([])
    assert result.entries == []
    assert result.franchise_tags == 0


def test_count_franchise_tags_only_round_one():
    entries = [KeepEntry(player_id=str(i), base_round=1) for i in range(3)]
    entries.append(KeepEntry(player_id="x", base_round=2))
    assert count_franchise_tags(entries) == 2


def test_later_group_starts_after_earlier_group_overflow():
    # Round 1 pair spills into round 2, so the round 2 pair starts at round 3
    entries = [
        KeepEntry(player_id="a", base_round=1, priority=0),
        KeepEntry(player_id="b", base_round=1, priority=1),
        KeepEntry(player_id="c", base_round=2, priority=0),
        KeepEntry(player_id="d", base_round=2, priority=1),
    ]

    result = stack_keeper_rounds(entries)

    assert _rounds(result) == [1, 2, 3, 4]
    assert result.franchise_tags == 1
