import pytest

tk = pytest.importorskip("tkinter")

from pygoblin.app.game_loop import GameLoop  # noqa: E402


def test_start_schedules_at_base_tick(fake_root):
    ticks = []
    loop = GameLoop(root=fake_root, tick_fn=lambda: ticks.append(1))

    loop.start()

    assert loop.running
    assert [ms for ms, _fn in fake_root.pending.values()] == [10]
    assert ticks == []


def test_each_tick_reschedules(fake_root):
    ticks = []
    loop = GameLoop(root=fake_root, tick_fn=lambda: ticks.append(1))
    loop.start()

    fake_root.run_pending(times=5)

    assert len(ticks) == 5
    assert len(fake_root.pending) == 1


def test_start_twice_schedules_once(fake_root):
    loop = GameLoop(root=fake_root, tick_fn=lambda: None)
    loop.start()
    loop.start()
    assert len(fake_root.pending) == 1


def test_stop_cancels_pending_tick(fake_root):
    ticks = []
    loop = GameLoop(root=fake_root, tick_fn=lambda: ticks.append(1))
    loop.start()

    loop.stop()
    fake_root.run_pending()

    assert not loop.running
    assert ticks == []
    assert len(fake_root.cancelled) == 1


def test_stop_after_root_destroyed(fake_root):
    def broken_cancel(_after_id):
        raise tk.TclError("application has been destroyed")

    fake_root.after_cancel = broken_cancel
    loop = GameLoop(root=fake_root, tick_fn=lambda: None)
    loop.start()

    loop.stop()

    assert not loop.running


def test_error_in_tick_stops_loop_and_propagates(fake_root):
    def boom():
        raise RuntimeError("corrupt")

    loop = GameLoop(root=fake_root, tick_fn=boom)
    loop.start()

    with pytest.raises(RuntimeError, match="corrupt"):
        fake_root.run_pending()

    assert not loop.running
    assert fake_root.pending == {}
