from keeper.keeper_models import IntStashEntry, KeepEntry, RedshirtEntry
from keeper.roster_validator import has_errors, validate_roster


def _fields(issues):
    return [i.field for i in issues]


def test_clean_roster_has_no_issues(players):
    entries = [
        KeepEntry(player_id="p1", base_round=1, keeper_round=1),
        RedshirtEntry(player_id="p4"),
        IntStashEntry(player_id="p5"),
    ]
    assert validate_roster(entries, players) == []


def test_too_many_keepers(players):
    entries = [KeepEntry(player_id=f"k{i}", keeper_round=i + 1) for i in range(3)]

    issues = validate_roster(entries, players, max_keepers=2)

    assert _fields(issues) == ["keepers_count"]
    assert has_errors(issues)


def test_veteran_cannot_be_redshirted(players):
    issues = validate_roster([RedshirtEntry(player_id="p1")], players)
    assert _fields(issues) == ["redshirt_eligibility"]


def test_stash_requires_eligibility(players):
    issues = validate_roster([IntStashEntry(player_id="p4")], players)
    assert _fields(issues) == ["int_stash_eligibility"]


def test_round_collision_and_range(players):
    entries = [
        KeepEntry(player_id="p1", keeper_round=14),
        KeepEntry(player_id="p2", keeper_round=14),
    ]

    fields = _fields(validate_roster(entries, players))

    assert "round_collisions" in fields
    assert "keeper_round_range" in fields


def test_missing_round_is_only_a_warning(players):
    issues = validate_roster([KeepEntry(player_id="p3")], players)

    assert _fields(issues) == ["missing_rounds"]
    assert not has_errors(issues)
