from game.platformer.scheduler import EventQueue


def test_runs_due_events_in_order():
    queue = EventQueue()
    log = []
    queue.schedule(0, 300, lambda: log.append("late"))
    queue.schedule(0, 100, lambda: log.append("early"))
    queue.schedule(0, 100, lambda: log.append("early-2"))

    assert queue.drain(50) == 0
    assert queue.drain(100) == 2
    assert log == ["early", "early-2"]
    assert len(queue) == 1

    queue.drain(1000)
    assert log == ["early", "early-2", "late"]


def test_false_guard_drops_event():
    queue = EventQueue()
    log = []
    queue.schedule(0, 10, lambda: log.append(1), guard=lambda: False)

    assert queue.drain(10) == 0
    assert len(queue) == 0
    assert queue.drain(20) == 0
    assert log == []


def test_guard_is_checked_when_due():
    queue = EventQueue()
    state = {"ok": False}
    log = []
    queue.schedule(0, 10, lambda: log.append(1), guard=lambda: state["ok"])
    state["ok"] = True
    queue.drain(10)
    assert log == [1]


def test_clear():
    queue = EventQueue()
    queue.schedule(0, 10, lambda: None)
    queue.clear()
    assert len(queue) == 0
