"""Unit tests for the feed health state machine.

Pure function tests - no mocks needed.
"""

from pokewatch.core.health import (
    DEFAULT_FAILURE_THRESHOLD,
    HealthEvent,
    HealthState,
    observe_signal,
)


def run_signals(signals: str, threshold: int, state: HealthState | None = None):
    """Feed a string of F/S signals and collect (event, state) after each."""
    state = state or HealthState()
    history = []
    for signal in signals:
        state, event = observe_signal(state, signal == "S", threshold)
        history.append((event, state))
    return history


class TestObserveSignal:
    """Tests for observe_signal()."""

    def test_failure_increments_counter(self):
        state, event = observe_signal(HealthState(), success=False, threshold=3)

        assert state == HealthState(consecutive_failures=1, is_down=False)
        assert event is None

    def test_success_while_up_emits_nothing(self):
        state, event = observe_signal(HealthState(consecutive_failures=2), success=True, threshold=3)

        assert state == HealthState()
        assert event is None

    def test_down_then_up_scenario(self):
        """Threshold 3, signals F,F,F,F,S."""
        history = run_signals("FFFFS", threshold=3)
        events = [event for event, _ in history]

        assert events == [None, None, HealthEvent.DOWN, None, HealthEvent.UP]
        assert history[2][1].is_down is True
        assert history[3][1] == HealthState(consecutive_failures=4, is_down=True)
        assert history[4][1] == HealthState(consecutive_failures=0, is_down=False)

    def test_down_emitted_once_for_long_outage(self):
        events = [event for event, _ in run_signals("F" * 200, threshold=50)]
        assert events.count(HealthEvent.DOWN) == 1
        assert events.index(HealthEvent.DOWN) == 49

    def test_success_before_threshold_resets_run(self):
        events = [event for event, _ in run_signals("FFSFFSFF", threshold=3)]
        assert events == [None] * 8

    def test_each_outage_announced(self):
        events = [event for event, _ in run_signals("FFSFFS", threshold=2)]
        assert events == [None, HealthEvent.DOWN, HealthEvent.UP, None, HealthEvent.DOWN, HealthEvent.UP]

    def test_up_only_once_after_recovery(self):
        events = [event for event, _ in run_signals("FFSSS", threshold=2)]
        assert events.count(HealthEvent.UP) == 1

    def test_threshold_of_one(self):
        events = [event for event, _ in run_signals("FS", threshold=1)]
        assert events == [HealthEvent.DOWN, HealthEvent.UP]

    def test_does_not_modify_input(self):
        state = HealthState(consecutive_failures=1)
        observe_signal(state, success=False, threshold=3)
        assert state.consecutive_failures == 1

    def test_default_threshold(self):
        assert DEFAULT_FAILURE_THRESHOLD == 50
