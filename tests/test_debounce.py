import threading
import time

from copybin.utils.debounce import Debouncer


def test_burst_runs_once_with_last_arguments():
    calls = []
    done = threading.Event()

    def action(value):
        calls.append(value)
        done.set()

    debouncer = Debouncer(0.05, action)
    for i in range(5):
        debouncer.trigger(i)

    assert done.wait(2.0)
    time.sleep(0.15)
    assert calls == [4]
    assert not debouncer.pending


def test_flush_runs_pending_call_immediately():
    calls = []
    debouncer = Debouncer(60, calls.append)
    debouncer.trigger("now")

    assert debouncer.pending
    assert debouncer.flush()
    assert calls == ["now"]
    assert not debouncer.flush()


def test_cancel_drops_pending_call():
    calls = []
    debouncer = Debouncer(0.02, calls.append)
    debouncer.trigger("never")
    debouncer.cancel()

    time.sleep(0.1)
    assert calls == []


def test_failing_action_is_logged(caplog):
    done = threading.Event()

    def action():
        done.set()
        raise RuntimeError("boom")

    debouncer = Debouncer(0.01, action, name="failing")
    debouncer.trigger()
    assert done.wait(2.0)
    time.sleep(0.05)
    assert "failing" in caplog.text


def test_calls_never_overlap_and_newest_wins():
    calls = []
    first_started = threading.Event()

    def action(value):
        if not calls and value == "old":
            first_started.set()
            time.sleep(0.5)
        calls.append(value)

    debouncer = Debouncer(0.02, action)
    debouncer.trigger("old")
    assert first_started.wait(2.0)
    debouncer.trigger("new")

    time.sleep(1.0)
    assert calls == ["old", "new"]


def test_flush_waits_for_running_call():
    calls = []
    started = threading.Event()

    def action(value):
        started.set()
        time.sleep(0.3)
        calls.append(value)

    debouncer = Debouncer(0.01, action)
    debouncer.trigger("slow")
    assert started.wait(2.0)

    assert not debouncer.flush()
    assert calls == ["slow"]
