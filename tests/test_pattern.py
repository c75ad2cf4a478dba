import logging

import pytest

from hsmkit.machine import StateData
from hsmkit.pattern import PatternPressDetector
from hsmkit.signals import Signal


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


def press(detector, clock, down_at, up_at, switch_id=0):
    clock.now = down_at
    detector.on_button_down(switch_id)
    clock.now = up_at
    detector.on_button_up(switch_id)


def test_pattern_completed_pushes_event(clock):
    state = StateData()
    det = PatternPressDetector(state, [False, True, False], clock=clock)
    press(det, clock, 0, 100)
    press(det, clock, 200, 800)
    press(det, clock, 900, 1000)
    assert state.pending_events() == 1
    assert state.pop_event().signal == Signal.PATTERN_PRESS
    assert det.count == 0


def test_exactly_short_limit_counts_as_short(clock):
    state = StateData()
    det = PatternPressDetector(state, [False], clock=clock)
    press(det, clock, 1000, 1400)
    assert state.pending_events() == 1


def test_mismatch_resets(clock):
    state = StateData()
    det = PatternPressDetector(state, [True], clock=clock)
    press(det, clock, 0, 100)
    assert state.pending_events() == 0
    assert det.count == 0
    press(det, clock, 200, 700)
    assert state.pending_events() == 1


def test_partial_progress(clock):
    state = StateData()
    det = PatternPressDetector(state, [False, False, False], clock=clock)
    press(det, clock, 0, 50)
    press(det, clock, 60, 120)
    assert det.count == 2
    assert state.pending_events() == 0


def test_timeout_restarts_sequence(clock):
    state = StateData()
    det = PatternPressDetector(state, [False, False], clock=clock)
    press(det, clock, 0, 100)
    press(det, clock, 3150, 3200)
    assert state.pending_events() == 0
    assert det.count == 1
    assert det.sequence_start == 3200
    press(det, clock, 3250, 3300)
    assert state.pending_events() == 1


def test_reset_discards_progress(clock):
    state = StateData()
    det = PatternPressDetector(state, [False, False, False], clock=clock)
    press(det, clock, 0, 50)
    press(det, clock, 60, 120)
    det.reset()
    press(det, clock, 130, 180)
    assert det.count == 1
    assert state.pending_events() == 0


def test_clock_wraparound(clock):
    state = StateData()
    det = PatternPressDetector(state, [False], clock=clock)
    press(det, clock, 0xFFFFFF00, 0x50)
    assert state.pending_events() == 1


def test_custom_short_limit(clock):
    state = StateData()
    det = PatternPressDetector(state, [True], short_press_max_ms=50, clock=clock)
    press(det, clock, 0, 100)
    assert state.pending_events() == 1


def test_long_press_logged(clock, caplog):
    state = StateData()
    det = PatternPressDetector(state, [True, True], clock=clock)
    with caplog.at_level(logging.DEBUG, logger="hsmkit.pattern"):
        press(det, clock, 0, 900)
    assert "LONG" in caplog.messages


@pytest.mark.parametrize("switch_id", [-1, 10])
def test_invalid_switch_raises(clock, switch_id):
    det = PatternPressDetector(StateData(), [False], clock=clock)
    with pytest.raises(ValueError):
        det.on_button_down(switch_id)


def test_empty_pattern_raises(clock):
    with pytest.raises(ValueError):
        PatternPressDetector(StateData(), [], clock=clock)