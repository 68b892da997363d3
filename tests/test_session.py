"""Tests for the session lifecycle, tab requests and warnings."""

from unittest.mock import Mock

from scriptui.session import MAX_WARNINGS, Phase, Session, Tab, TabRequests, WarningLog


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


class TestTransitions:
    """Phase transitions and derived flags."""

    def test_initial_state(self):
        s = Session()
        assert s.phase is Phase.CONFIGURING
        assert s.open
        assert not (s.started or s.paused or s.stopped or s.cancelled)

    def test_start(self):
        hook = Mock()
        s = Session(on_start=hook)
        assert s.start() is True
        hook.assert_called_once_with()
        assert s.phase is Phase.RUNNING
        assert s.started and s.running

    def test_start_twice_is_noop(self):
        hook = Mock()
        s = Session(on_start=hook)
        s.start()
        assert s.start() is False
        assert hook.call_count == 1

    def test_start_requests_info_tab(self):
        s = Session()
        s.tabs.consume(Tab.CONFIG)
        s.start()
        assert s.tabs.peek(Tab.INFO)

    def test_cancel_before_start(self):
        s = Session()
        assert s.cancel() is True
        assert s.cancelled
        assert not s.started
        assert s.finished

    def test_cancel_after_start_is_noop(self):
        s = Session()
        s.start()
        assert s.cancel() is False
        assert s.running

    def test_stop_before_start_is_noop(self):
        s = Session()
        assert s.stop() is False
        assert s.phase is Phase.CONFIGURING

    def test_pause_resume(self):
        s = Session()
        s.start()
        assert s.pause() is True
        assert s.paused and s.started
        assert s.resume() is True
        assert s.running and not s.paused

    def test_toggle_pause(self):
        s = Session()
        s.start()
        s.toggle_pause()
        assert s.paused
        s.toggle_pause()
        assert not s.paused

    def test_pause_before_start_is_noop(self):
        s = Session()
        assert s.pause() is False
        assert not s.paused

    def test_stop_while_paused(self):
        s = Session()
        s.start()
        s.pause()
        assert s.stop() is True
        assert s.stopped
        assert s.started
        assert not s.paused

    def test_stopped_is_terminal(self):
        s = Session()
        s.start()
        s.stop()
        assert s.resume() is False
        assert s.pause() is False
        assert s.start() is False
        assert s.stopped

    def test_close_does_not_change_phase(self):
        s = Session()
        s.start()
        s.close()
        assert not s.open
        assert s.running

    def test_reset(self):
        clock = FakeClock()
        s = Session(clock=clock)
        s.start()
        s.warnings.push("w")
        s.stop()
        s.close()
        s.reset()
        assert s.phase is Phase.CONFIGURING
        assert s.open
        assert len(s.warnings) == 0
        assert s.tabs.peek(Tab.CONFIG)
        assert not s.tabs.peek(Tab.INFO)
        assert s.elapsed() == 0.0


class TestElapsed:
    """Runtime clock."""

    def test_zero_before_start(self):
        assert Session(clock=FakeClock()).elapsed() == 0.0

    def test_elapsed_since_start(self):
        clock = FakeClock(10.0)
        s = Session(clock=clock)
        s.start()
        clock.now = 75.5
        assert s.elapsed() == 65.5

    def test_no_clock(self):
        s = Session()
        s.start()
        assert s.elapsed() == 0.0


class TestTabRequests:
    """One-shot tab selection flags."""

    def test_initial_request_is_config(self):
        tabs = TabRequests()
        assert tabs.consume(Tab.CONFIG) is True
        assert tabs.consume(Tab.CONFIG) is False

    def test_request_and_consume(self):
        tabs = TabRequests()
        tabs.request(Tab.WARNINGS)
        assert tabs.peek(Tab.WARNINGS)
        assert tabs.consume(Tab.WARNINGS) is True
        assert tabs.peek(Tab.WARNINGS) is False

    def test_flags_independent(self):
        tabs = TabRequests()
        tabs.request(Tab.INFO)
        assert tabs.consume(Tab.INFO)
        assert tabs.consume(Tab.CONFIG)
        assert not tabs.consume(Tab.WARNINGS)


class TestWarningLog:
    """Bounded FIFO of warnings."""

    def test_cap(self):
        log = WarningLog()
        for i in range(55):
            log.push("w%d" % i)
        assert len(log) == MAX_WARNINGS
        assert log.as_tuple() == tuple("w%d" % i for i in range(5, 55))

    def test_order_and_clear(self):
        log = WarningLog()
        log.push("first")
        log.push("second")
        assert list(log) == ["first", "second"]
        log.clear()
        assert not log

    def test_custom_limit(self):
        log = WarningLog(limit=2)
        for m in "abc":
            log.push(m)
        assert list(log) == ["b", "c"]

    def test_non_string_coerced(self):
        log = WarningLog()
        log.push(42)
        assert list(log) == ["42"]
