# hsmkit

`hsmkit` is a small hierarchical state machine (HSM) engine. States are plain
functions. Each handler receives the shared `StateData` and an `Event` and
returns a `StateResult`. The engine runs entry, exit and initial transitions
across nested states, and it takes events from a bounded first-in, first-out
queue.

The package also provides a set of keypad signals (`hsmkit.signals`) and a
`PatternPressDetector` (`hsmkit.pattern`). The detector recognises a sequence
of short and long button presses and posts a signal when the sequence matches.

The package has no dependencies outside the standard library.

## Installation

```
pip install hsmkit
```

## Modules

- `hsmkit.machine`: `StateResult`, `HsmSignal`, `Event`, `EventQueue`,
  `QueueFullError`, `StateData`, the helpers `change_state`, `handle_state`,
  `ignore_state`, `super_state`, `root_state`, and the `HSM` driver.
- `hsmkit.signals`: the `Signal` enum, `signal_name()` and `PATTERN_MATCH_TEXT`.
- `hsmkit.pattern`: `PatternPressDetector`.

## Writing states

A state is a function `handler(state, event)` that returns one of these helpers:

- `handle_state()`: the event was consumed (`StateResult.HANDLED`).
- `ignore_state()`: the event was ignored (`StateResult.IGNORED`). `root_state`
  returns this for every event.
- `change_state(state, new_state)`: request a transition to `new_state`
  (`StateResult.CHANGED`).
- `super_state(state, parent)`: pass the event up to `parent`
  (`StateResult.DO_SUPERSTATE`).

The engine finds the parent of a state by sending it the reserved
`HsmSignal.SILENT` event. Every state below the root must therefore answer any
event it does not handle with `super_state(state, parent)`. The exception is
`HsmSignal.EXIT`: a state must answer it with `handle_state()` or
`ignore_state()` and must not pass it to its parent. If it does, the engine
cannot find a common ancestor and raises `RuntimeError`. To take an initial
transition into a child, answer `HsmSignal.INITIAL_TRANS` with
`change_state(state, child)`.

```python
from hsmkit.machine import (
    HSM, HsmSignal, StateData, change_state, handle_state, root_state, super_state,
)
from hsmkit.signals import Signal

log = []

def idle(state, event):
    if event.signal == HsmSignal.ENTRY:
        log.append("enter idle")
        return handle_state()
    if event.signal == HsmSignal.EXIT:
        log.append("exit idle")
        return handle_state()
    if event.signal == Signal.K00_DOWN:
        return change_state(state, running)
    return super_state(state, root_state)

def running(state, event):
    if event.signal == HsmSignal.ENTRY:
        log.append("enter running")
        return handle_state()
    if event.signal == HsmSignal.EXIT:
        log.append("exit running")
        return handle_state()
    if event.signal == Signal.K00_UP:
        return change_state(state, idle)
    return super_state(state, root_state)

data = StateData()
machine = HSM(data)
machine.set_initial_state(idle)   # log: ["enter idle"]

data.push_event(Signal.K00_DOWN)
machine.process()                 # log adds "exit idle", "enter running"
assert data.handler is running
```

`HSM.set_initial_state(handler)` enters every state from the root down to
`handler` and follows its initial transitions. It raises `ValueError` if the
target does not lie below the current top state. `HSM.process()` handles every
pending event of the machine's `StateData`. `HSM.process_queue(state)` does the
same for any other `StateData`.

## The event queue

`EventQueue` holds at most 16 events by default. You can pass a different
`capacity` (at least 1) to `EventQueue` or to `StateData`. `push(signal)`
appends an `Event`, and a push onto a full queue raises `QueueFullError`.
`pop()` returns the oldest event and raises `IndexError` when the queue is
empty. `len(queue)`, `is_empty()` and `is_full()` report the queue's size.

`StateData` wraps a queue. Use `push_event(signal)` to add an event,
`pop_event()` to take the oldest one (it returns `None` when the queue is
empty), `pending_events()` to count them, and `dispatch(event)` to call the
current handler directly.

## Signals

`HsmSignal` holds the engine's reserved signals: `NONE`, `SILENT`, `ENTRY`,
`EXIT`, `INITIAL_TRANS`, and `USER` (5). `hsmkit.signals.Signal` lists the
keypad signals, starting at `HsmSignal.USER`: `TICK`; the key down/up pairs
`K00`, `K01`, `K02`, `K03`, `K12`, `K13`, `K22`, `K23`; `MODE`, `ENC` and
`VOL` down/up; `PATTERN_PRESS`; and the end marker `LAST`.

`signal_name(signal)` returns the display name of any signal from
`HSM_SIG_NONE` through `SIG_PATTERN_PRESS`, for example
`signal_name(Signal.TICK) == "SIG_TICK"`. It raises `ValueError` for any other
value, including `Signal.LAST`.

## Pattern presses

```python
from hsmkit.pattern import PatternPressDetector
from hsmkit.signals import Signal

now = [0]
# short, short, long
detector = PatternPressDetector(data, [False, False, True], clock=lambda: now[0])

for held_ms in (100, 100, 600):
    detector.on_button_down(0)
    now[0] += held_ms
    detector.on_button_up(0)
    now[0] += 50

assert data.pop_event().signal == Signal.PATTERN_PRESS
```

A press is long when it lasts more than `short_press_max_ms` (400 ms by
default). If more than `pattern_timeout_ms` (3000 ms by default) has passed
since the first press of a sequence, the sequence starts again. A press that
does not match the pattern resets the sequence. When the whole pattern
matches, `Signal.PATTERN_PRESS` is pushed onto the state's event queue.

The pattern must have at least one press, and switch ids must be between 0 and
9. Otherwise the detector raises `ValueError`. `clock` is a function that
returns milliseconds. The default is a monotonic millisecond clock. The
detector logs `SHORT`, `LONG`, `Timeout` and `RESET` at debug level through
the `hsmkit.pattern` logger.

## What it does not do

`hsmkit` is a library with no command and no main loop. It does not read
buttons or any other input device, and it does not generate tick events. Your
program feeds `on_button_down`/`on_button_up` and `push_event`, and calls
`HSM.process()` itself.