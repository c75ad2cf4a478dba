"""Recognise a sequence of short and long button presses."""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional

from .machine import StateData
from .signals import Signal

logger = logging.getLogger(__name__)

MAX_KEYS = 10
_MASK = 0xFFFFFFFF


def _millis() -> int:
    return (time.monotonic_ns() // 1_000_000) & _MASK


class PatternPressDetector:
    """Push PATTERN_PRESS onto a state's queue when a press pattern is completed.

    ``pattern`` holds one flag per press: True for a long press, False for a short one.
    """

    def __init__(
        self,
        state: StateData,
        pattern: Iterable[bool],
        short_press_max_ms: int = 400,
        pattern_timeout_ms: int = 3000,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.state = state
        self.pattern = tuple(bool(p) for p in pattern)
        if not self.pattern:
            raise ValueError("pattern must contain at least one press")
        self.short_press_max_ms = short_press_max_ms
        self.pattern_timeout_ms = pattern_timeout_ms
        self._clock = clock if clock is not None else _millis
        self.count = 0
        self.sequence_start = 0
        self.reset()
        self._last_down = [0] * MAX_KEYS

    def _check_switch(self, switch_id: int) -> None:
        if not 0 <= switch_id < MAX_KEYS:
            raise ValueError(f"switch id must be between 0 and {MAX_KEYS - 1}")

    def on_button_down(self, switch_id: int) -> None:
        self._check_switch(switch_id)
        self._last_down[switch_id] = self._clock()

    def on_button_up(self, switch_id: int) -> None:
        self._check_switch(switch_id)
        now = self._clock()
        duration = (now - self._last_down[switch_id]) & _MASK
        self._last_down[switch_id] = 0

        if self.count == 0:
            self.sequence_start = now
        elif (now - self.sequence_start) & _MASK > self.pattern_timeout_ms:
            logger.debug("Timeout")
            self.reset()
            self.sequence_start = now

        is_long = duration > self.short_press_max_ms
        logger.debug("LONG" if is_long else "SHORT")

        if self.pattern[self.count] == is_long:
            self.count += 1
            if self.count == len(self.pattern):
                self.state.push_event(Signal.PATTERN_PRESS)
                self.reset()
        else:
            self.reset()

    def reset(self) -> None:
        self.count = 0
        self.sequence_start = 0
        logger.debug("RESET")