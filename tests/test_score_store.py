import json

from minigames.enums import GameId
from minigames.score_store import ScoreStore


def test_absent_record_reads_as_none(store):
    assert store.load("snake") is None
    assert store.load("clicker", 10) is None


def test_first_save_round_trips(store):
    assert store.save("snake", 40) is True
    assert store.load("snake") == 40


def test_save_is_a_monotone_max(store):
    store.save("snake", 40)
    assert store.save("snake", 30) is False
    assert store.load("snake") == 40
    assert store.save("snake", 40) is False
    assert store.save("snake", 70) is True
    assert store.load("snake") == 70


def test_lower_is_better(store):
    store.save("reaction", 180, lower_is_better=True)
    assert store.save("reaction", 220, lower_is_better=True) is False
    assert store.load("reaction") == 180
    store.save("reaction", 150, lower_is_better=True)
    assert store.load("reaction") == 150


def test_variant_keys_are_independent(store):
    store.save("clicker", 12, 10)
    store.save("clicker", 60, 50)
    assert store.load("clicker", 10) == 12
    assert store.load("clicker", "50") == 60
    assert store.load("clicker", 100) is None


def test_enum_and_string_ids_share_records(store):
    store.save(GameId.SNAKE, 20)
    assert store.load("snake") == 20


def test_persisted_layout(tmp_path):
    path = tmp_path / "scores.json"
    s = ScoreStore(str(path))
    s.save("snake", 30)
    s.save("clicker", 41, 10)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["scores"] == {"snake": 30, "clicker": {"10": 41}}

    reopened = ScoreStore(str(path))
    assert reopened.load("clicker", 10) == 41


def test_corrupt_file_starts_fresh(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text("{not json", encoding="utf-8")
    s = ScoreStore(str(path))
    assert s.load("snake") is None
    s.save("snake", 5)
    assert ScoreStore(str(path)).load("snake") == 5


def test_non_numeric_record_is_treated_as_absent(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text(json.dumps({"scores": {"snake": "lots", "clicker": 7}}), encoding="utf-8")
    s = ScoreStore(str(path))
    assert s.load("snake") is None
    assert s.load("clicker", 10) is None
    assert s.save("clicker", 3, 10) is True
    assert s.load("clicker", 10) == 3


def test_reset(store):
    store.save("snake", 10)
    store.save("fps", 90)
    store.reset("snake")
    assert store.load("snake") is None
    assert store.load("fps") == 90
    store.reset()
    assert store.load("fps") is None


def test_state_records_are_copies(store):
    state = {"resource": "1.5", "upgrades": {"cursor": 1}}
    store.save_state("cookie", state)
    state["upgrades"]["cursor"] = 99
    loaded = store.load_state("cookie")
    assert loaded == {"resource": "1.5", "upgrades": {"cursor": 1}}
    assert store.load_state("snake") is None
