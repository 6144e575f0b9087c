from conftest import FixedRandom

import pytest

from minigames.models import RoundState, TargetSize
from minigames.shooter import TargetSpawnEngine

ONLY = TargetSize("only", 40, 30, 1500, 1.0)


@pytest.fixture()
def engine(clock, store, rng):
    e = TargetSpawnEngine(clock, store, rng=rng, sizes=(ONLY,))
    e.start()
    return e


def test_start_spawns_a_target_inside_the_arena(engine):
    snap = engine.snapshot()
    assert snap.state is RoundState.PLAYING
    assert snap.time_left == 30
    assert len(snap.targets) == 1
    target = snap.targets[0]
    assert 0.15 <= target.x < 0.85
    assert 0.20 <= target.y < 0.80
    assert target.expires_at == 1500


def test_combo_multiplies_points(engine):
    a = engine.targets[1]
    b = engine.spawn()
    c = engine.spawn()
    assert engine.hit(a.id) == 30
    assert engine.hit(b.id) == 60
    assert engine.hit(c.id) == 90
    assert engine.score == 180
    assert engine.combo == 3
    assert engine.last_hit == (c.id, 90)


def test_multiplier_is_capped(engine):
    engine.targets.clear()
    awarded = [engine.hit(engine.spawn().id) for _ in range(7)]
    assert awarded == [30, 60, 90, 120, 150, 150, 150]


def test_hitting_twice_pays_once(engine):
    assert engine.hit(1) == 30
    assert engine.hit(1) == 0
    assert engine.score == 30


def test_expiry_resets_combo(engine, run):
    engine.hit(engine.spawn().id)
    assert engine.combo == 1
    run(1490)
    assert 1 in engine.targets
    run(10)
    assert 1 not in engine.targets
    assert engine.combo == 0


def test_miss_resets_combo(engine):
    engine.hit(engine.spawn().id)
    engine.miss()
    assert engine.combo == 0
    assert engine.score == 30


def test_expired_target_not_yet_swept_pays_nothing(clock, store, rng, run):
    engine = TargetSpawnEngine(clock, store, rng=rng, sizes=(ONLY,), sweep_ms=100000)
    engine.start()
    engine.hit(engine.spawn().id)
    run(1500)
    assert 1 in engine.targets
    assert engine.hit(1) == 0
    assert engine.combo == 0
    assert 1 not in engine.targets


def test_shoot_at_hit_tests_in_arena_pixels(engine):
    target = engine.targets[1]
    assert engine.shoot_at((target.x, target.y)) == 30
    assert engine.combo == 1

    engine.spawn()
    assert engine.shoot_at((0.0, 0.0)) == 0
    assert engine.combo == 0
    assert len(engine.targets) == 1


def test_round_ends_and_saves(clock, store, rng, run):
    sounds = []
    engine = TargetSpawnEngine(clock, store, rng=rng, sizes=(ONLY,), round_sec=3, sfx=sounds.append)
    engine.start()
    engine.hit(1)
    run(2990)
    assert engine.state is RoundState.PLAYING
    run(10)
    snap = engine.snapshot()
    assert snap.state is RoundState.FINISHED
    assert snap.time_left == 0
    assert snap.targets == ()
    assert snap.is_new_best
    assert store.load("fps") == 30
    assert sounds == ["shoot"]

    assert engine.hit(1) == 0
    assert engine.spawn() is None


def test_spawns_on_schedule(engine, run):
    run(800)
    assert len(engine.targets) == 2
    ids = sorted(engine.targets)
    assert ids == [1, 2]


def test_weighted_size_pick(clock, store):
    sizes = (
        TargetSize("a", 40, 30, 1500, 0.25),
        TargetSize("b", 55, 20, 2000, 0.75),
    )
    engine = TargetSpawnEngine(clock, store, rng=FixedRandom(0.1), sizes=sizes)
    assert engine._pick_size().name == "a"
    engine.rng = FixedRandom(0.5)
    assert engine._pick_size().name == "b"
