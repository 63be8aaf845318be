import json

import pytest

from league_config import get_api_key, get_data_dir, load_league_settings


def test_missing_config_uses_defaults(tmp_path):
    settings = load_league_settings(str(tmp_path / "nope.json"))

    assert settings.draft_rounds == 13
    assert settings.cap.first_apron == 195_000_000
    assert settings.teams == {}


def test_config_overrides(tmp_path, monkeypatch):
    monkeypatch.delenv("LEAGUE_SEASON", raising=False)
    path = tmp_path / "league.json"
    path.write_text(json.dumps({
        "season": 2027,
        "draft_rounds": 10,
        "cap": {"second_apron": 230_000_000},
        "teams": {"NYK": {"name": "Knickerbockers", "trade_delta": -3000000, "max_keepers": 6}},
    }))

    settings = load_league_settings(str(path))

    assert settings.season == 2027
    assert settings.draft_rounds == 10
    assert settings.cap.second_apron == 230_000_000
    assert settings.cap.first_apron == 195_000_000
    team = settings.teams["NYK"]
    assert team.abbrev == "NYK"
    assert team.cap_adjustments.trade_delta == -3_000_000
    assert team.settings.max_keepers == 6
    assert settings.draft_order == ["NYK"]


def test_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "league.json"
    path.write_text(json.dumps({"season": 2026}))
    monkeypatch.setenv("LEAGUE_SEASON", "2030")
    monkeypatch.setenv("LEAGUE_DATA_DIR", "/srv/league")
    monkeypatch.setenv("BOT_API_KEY", "secret")

    assert load_league_settings(str(path)).season == 2030
    assert get_data_dir() == "/srv/league"
    assert get_api_key() == "secret"


def test_config_must_be_object(tmp_path):
    path = tmp_path / "league.json"
    path.write_text("[]")
    with pytest.raises(ValueError):
        load_league_settings(str(path))
