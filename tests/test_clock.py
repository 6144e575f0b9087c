from conftest import FixedRandom


def test_after_fires_once(clock, fake_time):
    calls = []
    handle = clock.after(100, lambda: calls.append(fake_time.t))
    fake_time.advance(99)
    assert clock.pump() == 0
    fake_time.advance(1)
    assert clock.pump() == 1
    fake_time.advance(500)
    clock.pump()
    assert calls == [100]
    assert not handle.active


def test_every_catches_up_in_whole_ticks(clock, fake_time):
    calls = []
    clock.every(100, lambda: calls.append(1))
    fake_time.advance(350)
    assert clock.pump() == 3
    fake_time.advance(50)
    assert clock.pump() == 1
    assert len(calls) == 4


def test_cancelled_timer_never_fires(clock, fake_time):
    calls = []
    handle = clock.every(10, lambda: calls.append(1))
    fake_time.advance(25)
    clock.pump()
    handle.cancel()
    fake_time.advance(1000)
    clock.pump()
    assert calls == [1, 1]
    assert clock.pending == 0


def test_callback_can_cancel_a_timer_due_in_the_same_pump(clock, fake_time):
    calls = []
    second = clock.after(20, lambda: calls.append("second"))
    clock.after(10, lambda: (calls.append("first"), second.cancel()))
    fake_time.advance(30)
    clock.pump()
    assert calls == ["first"]


def test_repeating_timer_cancelling_itself(clock, fake_time):
    calls = []

    def tick():
        calls.append(1)
        if len(calls) == 2:
            handle.cancel()

    handle = clock.every(10, tick)
    fake_time.advance(100)
    clock.pump()
    assert len(calls) == 2


def test_after_random_samples_half_open_range(clock):
    low = clock.after_random(2000, 5000, lambda: None, FixedRandom(0.0))
    high = clock.after_random(2000, 5000, lambda: None, FixedRandom(0.9999))
    assert low.delay == 2000
    assert 4999 < high.delay < 5000


def test_scope_close_cancels_and_refuses(clock, fake_time):
    scope = clock.scope()
    calls = []
    scope.every(10, lambda: calls.append("tick"))
    scope.after(15, lambda: calls.append("once"))
    assert scope.pending == 2

    scope.close()
    late = scope.after(1, lambda: calls.append("late"))
    fake_time.advance(100)
    clock.pump()

    assert calls == []
    assert not late.active
    assert scope.pending == 0


def test_scopes_are_independent(clock, fake_time):
    a, b = clock.scope(), clock.scope()
    calls = []
    a.every(10, lambda: calls.append("a"))
    b.every(10, lambda: calls.append("b"))
    a.cancel_all()
    fake_time.advance(10)
    clock.pump()
    assert calls == ["b"]
