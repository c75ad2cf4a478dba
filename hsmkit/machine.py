"""Hierarchical state machine core: events, event queues and the dispatcher."""

from __future__ import annotations

import copy
from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Deque, List, Optional

STATE_DEPTH_MAX = 10
MAX_EVENTS = 16


class StateResult(IntEnum):
    """What a state handler did with an event."""

    IGNORED = 0
    HANDLED = 1
    CHANGED = 2
    DO_SUPERSTATE = 3


class HsmSignal(IntEnum):
    """Signals reserved by the state machine itself."""

    NONE = 0
    SILENT = 1
    ENTRY = 2
    EXIT = 3
    INITIAL_TRANS = 4
    USER = 5


@dataclass(frozen=True)
class Event:
    """An event delivered to state handlers."""

    signal: int = HsmSignal.NONE


class QueueFullError(Exception):
    """Raised when an event is pushed onto a full queue."""


class EventQueue:
    """A bounded first-in, first-out queue of events."""

    def __init__(self, capacity: int = MAX_EVENTS) -> None:
        if capacity < 1:
            raise ValueError("queue capacity must be at least 1")
        self.capacity = capacity
        self._events: Deque[Event] = deque()

    def push(self, signal: int) -> None:
        """Append an event carrying ``signal``."""
        if self.is_full():
            raise QueueFullError(f"event queue is full ({self.capacity} events)")
        self._events.append(Event(signal))

    def pop(self) -> Event:
        """Remove and return the oldest event."""
        if not self._events:
            raise IndexError("pop from an empty event queue")
        return self._events.popleft()

    def __len__(self) -> int:
        return len(self._events)

    def is_empty(self) -> bool:
        return not self._events

    def is_full(self) -> bool:
        return len(self._events) >= self.capacity


StateHandler = Callable[["StateData", Event], StateResult]


class StateData:
    """The current state handler of a machine together with its event queue."""

    def __init__(self, handler: Optional[StateHandler] = None, capacity: int = MAX_EVENTS) -> None:
        self.handler: StateHandler = handler if handler is not None else root_state
        self.events = EventQueue(capacity)

    def push_event(self, signal: int) -> None:
        self.events.push(signal)

    def pop_event(self) -> Optional[Event]:
        """Return the oldest pending event, or None if there is none."""
        return self.events.pop() if self.events else None

    def pending_events(self) -> int:
        return len(self.events)

    def dispatch(self, event: Event) -> StateResult:
        """Call the current handler with ``event``."""
        return StateResult(self.handler(self, event))

    def _probe(self, handler: StateHandler) -> "StateData":
        clone = copy.copy(self)
        clone.handler = handler
        clone.events = EventQueue(self.events.capacity)
        return clone


def change_state(state: StateData, new_state: StateHandler) -> StateResult:
    """Request a transition to ``new_state``."""
    state.handler = new_state
    return StateResult.CHANGED


def handle_state() -> StateResult:
    return StateResult.HANDLED


def ignore_state() -> StateResult:
    return StateResult.IGNORED


def super_state(state: StateData, parent: StateHandler) -> StateResult:
    """Pass the event on to ``parent``."""
    state.handler = parent
    return StateResult.DO_SUPERSTATE


def root_state(state: StateData, event: Event) -> StateResult:
    """The top of every hierarchy; ignores everything."""
    return ignore_state()


_SILENT = Event(HsmSignal.SILENT)
_ENTRY = Event(HsmSignal.ENTRY)
_EXIT = Event(HsmSignal.EXIT)
_INIT = Event(HsmSignal.INITIAL_TRANS)


def _path_to_root(template: StateData, handler: StateHandler) -> List[StateHandler]:
    probe = template._probe(handler)
    path: List[StateHandler] = []
    while True:
        path.append(probe.handler)
        result = probe.dispatch(_SILENT)
        if result != StateResult.DO_SUPERSTATE or len(path) >= STATE_DEPTH_MAX:
            return path


def _path_between(template: StateData, top: StateHandler, bottom: StateHandler) -> List[StateHandler]:
    probe = template._probe(bottom)
    path: List[StateHandler] = []
    while probe.handler != top and len(path) < STATE_DEPTH_MAX:
        path.append(probe.handler)
        probe.dispatch(_SILENT)
    return path


def _position(handler: StateHandler, path: List[StateHandler]) -> int:
    return next((i for i, h in enumerate(path) if h == handler), -1)


class HSM:
    """Drives a hierarchy of state handlers held in a StateData."""

    def __init__(self, state_data: StateData) -> None:
        self.state_data = state_data

    def set_initial_state(self, initial_state: StateHandler) -> None:
        """Enter ``initial_state`` and follow its initial transitions."""
        data = self.state_data
        data._probe(root_state).dispatch(_INIT)
        top: StateHandler = root_state
        data.handler = initial_state
        while True:
            path = _path_between(data, top, data.handler)
            if not path:
                raise ValueError("target state does not lie below the current state")
            for handler in reversed(path):
                data._probe(handler).dispatch(_ENTRY)
            top = path[0]
            data.handler = path[0]
            if data.dispatch(_INIT) != StateResult.CHANGED:
                data.handler = path[0]
                return

    def process(self) -> None:
        """Handle every pending event of the machine's state data."""
        self.process_queue(self.state_data)

    def process_queue(self, state: StateData) -> None:
        """Handle every pending event of ``state``."""
        while state.pending_events():
            initial = state.handler
            event = state.pop_event()
            last = state.handler
            self_trans = False
            while True:
                handling = state.handler
                result = state.dispatch(event)
                self_trans = state.handler == last
                last = state.handler
                if result != StateResult.DO_SUPERSTATE:
                    break
            back_to_top = state.handler == initial and state.handler != handling
            if result != StateResult.CHANGED:
                state.handler = initial
                continue
            self._transition(state, initial, handling, last, self_trans, back_to_top)

    @staticmethod
    def _transition(
        state: StateData,
        initial: StateHandler,
        handling: StateHandler,
        last: StateHandler,
        self_trans: bool,
        back_to_top: bool,
    ) -> None:
        destination = state._probe(state.handler)
        state.handler = initial
        back_to_bottom = False
        processing = True
        while processing:
            path = _path_to_root(state, destination.handler)
            while True:
                index = _position(state.handler, path)
                if index == 0:
                    if self_trans:
                        state.dispatch(_EXIT)
                    elif back_to_top:
                        destination.handler = handling
                        back_to_top = False
                        back_to_bottom = True
                        break
                    elif back_to_bottom:
                        destination.handler = last
                        back_to_bottom = False
                        break
                    else:
                        if destination.dispatch(_INIT) != StateResult.CHANGED:
                            state.handler = path[0]
                            processing = False
                        break
                elif index > 0:
                    for handler in reversed(path[:index]):
                        state.handler = handler
                        state.dispatch(_ENTRY)
                    state.handler = path[0]
                    if state.dispatch(_INIT) == StateResult.CHANGED:
                        destination.handler = state.handler
                        handling = path[0]
                    else:
                        processing = False
                    state.handler = path[0]
                    break
                else:
                    state.dispatch(_EXIT)
                if state.dispatch(_SILENT) != StateResult.DO_SUPERSTATE:
                    raise RuntimeError("no common ancestor found for the transition")