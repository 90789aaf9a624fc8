from samegame.utils.scheduler import Scheduler


def test_task_fires_once_after_delay():
    scheduler = Scheduler()
    calls = []
    handle = scheduler.schedule(0.5, lambda: calls.append(scheduler.now))

    assert scheduler.advance(0.3) == 0
    assert calls == []
    assert scheduler.advance(0.3) == 1
    assert len(calls) == 1
    assert handle.fired
    assert not handle.active
    assert scheduler.advance(1.0) == 0
    assert len(calls) == 1


def test_cancelled_task_never_fires():
    scheduler = Scheduler()
    calls = []
    handle = scheduler.schedule(0.1, lambda: calls.append("fired"))
    handle.cancel()
    scheduler.advance(1.0)
    assert calls == []
    assert handle.cancelled
    assert scheduler.pending() == []


def test_tasks_fire_in_due_order():
    scheduler = Scheduler()
    calls = []
    scheduler.schedule(0.2, lambda: calls.append("late"))
    scheduler.schedule(0.1, lambda: calls.append("early"))
    scheduler.schedule(0.2, lambda: calls.append("late-second"))
    scheduler.advance(0.5)
    assert calls == ["early", "late", "late-second"]


def test_callback_can_cancel_a_later_task_in_same_batch():
    scheduler = Scheduler()
    calls = []
    second = scheduler.schedule(0.2, lambda: calls.append("second"))
    scheduler.schedule(0.1, lambda: second.cancel())
    scheduler.advance(0.5)
    assert calls == []


def test_task_scheduled_from_callback_waits_for_next_advance():
    scheduler = Scheduler()
    calls = []

    def reschedule():
        calls.append(scheduler.now)
        scheduler.schedule(0.0, lambda: calls.append("again"))

    scheduler.schedule(0.1, reschedule)
    assert scheduler.advance(0.1) == 1
    assert calls == [0.1]
    assert scheduler.advance(0.0) == 1
    assert calls == [0.1, "again"]


def test_cancel_all_clears_queue():
    scheduler = Scheduler()
    handles = [scheduler.schedule(0.1, lambda: None) for _ in range(3)]
    scheduler.cancel_all()
    assert all(handle.cancelled for handle in handles)
    assert scheduler.advance(1.0) == 0
