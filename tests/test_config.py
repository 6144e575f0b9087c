import json

from minigames.config import DEFAULT_CFG, load_config, save_config
from minigames.enums import GameId
from minigames.settings import make_runtime_settings


def write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def test_missing_file_is_created_with_defaults(tmp_path):
    path = tmp_path / "config.json"
    cfg = load_config(str(path))
    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8")) == DEFAULT_CFG
    assert cfg["games"]["snake"]["grid_size"] == 20


def test_user_values_are_merged_and_clamped(tmp_path):
    path = tmp_path / "config.json"
    write(path, {
        "display": {"fps": 5},
        "logging": {"level": "loud"},
        "games": {
            "snake": {"grid_size": 1000},
            "reaction": {"delay_min_ms": 3000, "delay_max_ms": 1000},
            "clicker": {"durations": [50, 10, 10]},
        },
    })
    cfg = load_config(str(path))
    assert cfg["display"]["fps"] == 30
    assert cfg["logging"]["level"] == "INFO"
    assert cfg["games"]["snake"]["grid_size"] == 100
    assert cfg["games"]["snake"]["tick_ms"] == 100
    assert cfg["games"]["reaction"]["delay_max_ms"] == 3001
    assert cfg["games"]["clicker"]["durations"] == [10, 50]


def test_bad_values_fall_back_per_key(tmp_path):
    path = tmp_path / "config.json"
    write(path, {"games": {"fps": {"round_sec": "soon", "arena_size": [0, 10]}, "clicker": {"durations": "all"}}})
    cfg = load_config(str(path))
    assert cfg["games"]["fps"]["round_sec"] == 30
    assert cfg["games"]["fps"]["arena_size"] == [800, 450]
    assert cfg["games"]["clicker"]["durations"] == [10, 50, 100]


def test_unreadable_or_broken_config_uses_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{oops", encoding="utf-8")
    assert load_config(str(path))["games"]["memory"]["show_ms"] == 400
    assert path.read_text(encoding="utf-8") == "{oops"

    write(path, {"games": []})
    assert load_config(str(path))["games"]["cookie"]["tick_ms"] == 100


def test_relative_paths_resolve_to_absolute(tmp_path):
    path = tmp_path / "config.json"
    write(path, {"scores_path": str(tmp_path / "s.json")})
    cfg = load_config(str(path))
    assert cfg["scores_path"] == str(tmp_path / "s.json")
    assert cfg["audio"]["music"].endswith("music.ogg")
    assert cfg["audio"]["music"] != "assets/music.ogg"


def test_save_config_merges_into_existing_file(tmp_path):
    path = tmp_path / "config.json"
    write(path, {"display": {"fps": 90}})
    save_config({"display": {"fullscreen": True}}, str(path))
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"display": {"fps": 90, "fullscreen": True}}


def test_runtime_settings_snapshot(tmp_path):
    cfg = load_config(str(tmp_path / "config.json"))
    settings = make_runtime_settings(cfg)
    assert set(settings) == set(GameId)
    assert settings[GameId.CLICKER]["durations"] == (10, 50, 100)
    assert settings[GameId.FPS]["arena_size"] == (800, 450)
    assert settings[GameId.REACTION] == {"delay_min_ms": 2000, "delay_max_ms": 5000}

