"""Tests for the deferred / posted command queue."""

import threading

from novafield.scheduler import CommandQueue


def test_deferred_commands_run_in_due_order():
    queue = CommandQueue()
    ran = []
    queue.schedule(100.0, lambda: ran.append("late"))
    queue.schedule(50.0, lambda: ran.append("early"))
    queue.schedule(50.0, lambda: ran.append("early-second"))

    assert queue.drain(10.0) == 0
    assert queue.drain(50.0) == 2
    assert ran == ["early", "early-second"]
    assert queue.drain(1000.0) == 1
    assert ran[-1] == "late"
    assert queue.pending == 0


def test_posted_commands_run_before_deferred():
    queue = CommandQueue()
    ran = []
    queue.schedule(0.0, lambda: ran.append("deferred"))
    queue.post(lambda: ran.append("posted"))

    queue.drain(0.0)

    assert ran == ["posted", "deferred"]


def test_post_from_many_threads():
    queue = CommandQueue()
    ran = []
    threads = [
        threading.Thread(target=queue.post, args=(lambda i=i: ran.append(i),))
        for i in range(20)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert queue.pending == 20
    assert queue.drain(0.0) == 20
    assert sorted(ran) == list(range(20))


def test_clear_discards_everything():
    queue = CommandQueue()
    ran = []
    queue.schedule(1.0, lambda: ran.append(1))
    queue.post(lambda: ran.append(2))

    queue.clear()

    assert queue.pending == 0
    assert queue.drain(1e9) == 0
    assert ran == []
