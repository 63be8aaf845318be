import json

import pytest

from draft.schedule_generator import generate_draft_schedule
from keeper.keeper_models import (
    DropEntry,
    IntStashEntry,
    KeepEntry,
    Player,
    PlayerKeeper,
    RedshirtEntry,
    RookieDraftInfo,
    Team,
    TeamCapAdjustments,
)

M = 1_000_000


@pytest.fixture
def players():
    """Small catalog covering veterans, rookies and an international stash"""
    return {
        "p1": Player(id="p1", name="Star Guard", salary=60 * M, team_id="A",
                     keeper=PlayerKeeper(prior_year_round=2)),
        "p2": Player(id="p2", name="Stretch Four", salary=45 * M, team_id="A",
                     keeper=PlayerKeeper(prior_year_round=2)),
        "p3": Player(id="p3", name="Backup Center", salary=20 * M, team_id="A",
                     keeper=PlayerKeeper(prior_year_round=4)),
        "p4": Player(id="p4", name="Lottery Rookie", salary=8 * M, team_id="A", is_rookie=True,
                     rookie_draft_info=RookieDraftInfo(round=1, pick=2, redshirt_eligible=True)),
        "p5": Player(id="p5", name="Euro Prospect", salary=3 * M, team_id="A",
                     is_international_stash=True),
        "p6": Player(id="p6", name="Bench Wing", salary=5 * M, team_id="A"),
        "b1": Player(id="b1", name="Other Star", salary=50 * M, team_id="B",
                     keeper=PlayerKeeper(prior_year_round=1)),
        "f1": Player(id="f1", name="Free Agent", salary=2 * M),
    }


@pytest.fixture
def teams():
    return {
        "A": Team(id="A", name="Knickerbockers", abbrev="NYK",
                  cap_adjustments=TeamCapAdjustments(trade_delta=5 * M)),
        "B": Team(id="B", name="Shamrocks", abbrev="BOS"),
        "C": Team(id="C", name="Windy City", abbrev="CHI"),
    }


@pytest.fixture
def roster_entries():
    return [
        KeepEntry(player_id="p1", priority=0),
        KeepEntry(player_id="p2", priority=1),
        KeepEntry(player_id="p3"),
        RedshirtEntry(player_id="p4"),
        IntStashEntry(player_id="p5"),
        DropEntry(player_id="p6"),
    ]


@pytest.fixture
def three_team_schedule(teams):
    """A,B,C over 2 rounds with no keepers"""
    return generate_draft_schedule(["A", "B", "C"], 2, {}, teams=teams, league_id="mns", season=2026)


@pytest.fixture
def league_env(tmp_path, monkeypatch, teams, players):
    """Temp config + data dir wired through the environment"""
    config = {
        "league_id": "mns",
        "season": 2026,
        "draft_rounds": 2,
        "draft_order": ["A", "B", "C"],
        "teams": {
            t.id: {"name": t.name, "abbrev": t.abbrev, "trade_delta": t.cap_adjustments.trade_delta}
            for t in teams.values()
        },
    }
    config_path = tmp_path / "league.json"
    config_path.write_text(json.dumps(config))

    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "players.json").write_text(json.dumps([p.model_dump() for p in players.values()]))

    monkeypatch.setenv("LEAGUE_CONFIG_PATH", str(config_path))
    monkeypatch.setenv("LEAGUE_DATA_DIR", str(data_dir))
    monkeypatch.delenv("LEAGUE_SEASON", raising=False)
    monkeypatch.delenv("BOT_API_KEY", raising=False)
    return tmp_path
