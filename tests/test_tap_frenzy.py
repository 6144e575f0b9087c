from minigames.input_queue import InputEvent
from minigames.models import RoundState
from minigames.tap_frenzy import TapCounterEngine


def test_untouched_round_lasts_full_duration(clock, store, run):
    engine = TapCounterEngine(clock, store, duration=10)
    engine.start()
    run(9900)
    assert engine.state is RoundState.PLAYING
    assert engine.ticks == 99
    run(100)
    snap = engine.snapshot()
    assert snap.state is RoundState.FINISHED
    assert snap.count == 0
    assert snap.budget == 0
    assert engine.ticks == 100


def test_taps_burn_the_budget(clock, store, run):
    engine = TapCounterEngine(clock, store, duration=10)
    engine.start()
    for _ in range(10):
        engine.tap()
    assert engine.budget == 80
    assert engine.snapshot().seconds_left == 8.0

    run(7900)
    assert engine.state is RoundState.PLAYING
    run(100)
    assert engine.state is RoundState.FINISHED
    assert engine.count == 10
    assert store.load("clicker", 10) == 10


def test_tap_that_empties_budget_ends_round(clock, store):
    engine = TapCounterEngine(clock, store, duration=10, tap_cost=100)
    engine.start()
    engine.tap()
    assert engine.state is RoundState.FINISHED
    assert engine.count == 1
    engine.tap()
    assert engine.count == 1


def test_best_is_kept_per_duration(clock, store):
    engine = TapCounterEngine(clock, store, duration=10, tap_cost=25)
    engine.start()
    for _ in range(4):
        engine.tap()
    assert store.load("clicker", 10) == 4
    assert store.load("clicker", 50) is None

    assert engine.select_duration(50)
    assert engine.best is None
    assert engine.budget == 500
    assert engine.select_duration(10)
    assert engine.best == 4


def test_select_rejected_mid_round_and_for_unknown_duration(clock, store):
    engine = TapCounterEngine(clock, store)
    assert not engine.select_duration(7)
    engine.start()
    assert not engine.select_duration(50)
    assert engine.duration == 10


def test_new_best_must_be_strictly_higher(clock, store):
    store.save("clicker", 4, 10)
    engine = TapCounterEngine(clock, store, duration=10, tap_cost=25)
    engine.start()
    for _ in range(4):
        engine.tap()
    assert engine.state is RoundState.FINISHED
    assert not engine.is_new_best

    engine.tap_cost = 20
    engine.start()
    for _ in range(5):
        engine.tap()
    assert engine.is_new_best
    assert store.load("clicker", 10) == 5


def test_actions_route_through_handle_input(clock, store):
    engine = TapCounterEngine(clock, store)
    engine.handle_input(InputEvent("select", 50))
    engine.handle_input(InputEvent("start"))
    engine.handle_input(InputEvent("press"))
    assert engine.duration == 50
    assert engine.count == 1
