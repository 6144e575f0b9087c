from minigames.input_queue import InputEvent
from minigames.models import SequenceState
from minigames.sequence import SequenceMemoryEngine


def other_than(engine, symbol):
    return next(s for s in engine.symbols if s != symbol)


def test_playback_lights_each_symbol_then_hands_over(clock, store, rng, run):
    engine = SequenceMemoryEngine(clock, store, rng=rng)
    engine.start()
    assert engine.state is SequenceState.SHOWING
    assert engine.snapshot().length == 1

    run(400)
    assert engine.lit is None
    run(200)  # t=600, inside the 500..900 light window
    assert engine.lit == engine.sequence[0]
    run(400)  # t=1000, in the gap
    assert engine.lit is None
    assert engine.state is SequenceState.SHOWING
    run(100)
    assert engine.state is SequenceState.PLAYING


def test_input_ignored_while_showing(clock, store, rng, run):
    engine = SequenceMemoryEngine(clock, store, rng=rng)
    engine.start()
    engine.press(engine.sequence[0])
    assert engine.replay == []
    assert engine.score == 0


def test_correct_replay_grows_sequence(clock, store, rng, run):
    engine = SequenceMemoryEngine(clock, store, rng=rng)
    engine.start()
    run(1100)

    for expected_len in (2, 3, 4):
        for symbol in list(engine.sequence):
            engine.press(symbol)
        assert engine.snapshot().length == expected_len
        assert engine.state is SequenceState.SHOWING
        run(5000)
        assert engine.state is SequenceState.PLAYING

    assert engine.score == 3


def test_mistake_ends_game_and_saves_score(clock, store, rng, run):
    engine = SequenceMemoryEngine(clock, store, rng=rng)
    engine.start()
    run(1100)
    engine.press(engine.sequence[0])
    run(5000)

    engine.press(engine.sequence[0])
    engine.press(other_than(engine, engine.sequence[1]))
    snap = engine.snapshot()
    assert snap.state is SequenceState.LOST
    assert snap.score == 1
    assert snap.is_new_best
    assert store.load("memory") == 1

    # further presses do nothing until restarted
    engine.press(engine.sequence[0])
    assert engine.state is SequenceState.LOST

    engine.start()
    assert engine.score == 0
    assert len(engine.sequence) == 1
    assert engine.state is SequenceState.SHOWING


def test_unknown_symbol_ignored(clock, store, rng, run):
    engine = SequenceMemoryEngine(clock, store, rng=rng)
    engine.start()
    run(1100)
    engine.press("purple")
    assert engine.state is SequenceState.PLAYING
    assert engine.replay == []


def test_start_is_ignored_mid_game(clock, store, rng, run):
    engine = SequenceMemoryEngine(clock, store, rng=rng)
    engine.start()
    run(1100)
    first = list(engine.sequence)
    engine.handle_input(InputEvent("start"))
    assert engine.sequence == first
    assert engine.state is SequenceState.PLAYING


def test_teardown_stops_playback(clock, store, rng, run):
    engine = SequenceMemoryEngine(clock, store, rng=rng)
    engine.start()
    engine.teardown()
    run(3000)
    assert engine.state is SequenceState.SHOWING
    assert engine.lit is None
