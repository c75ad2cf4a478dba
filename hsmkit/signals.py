"""Application signals and their display names."""

from __future__ import annotations

from enum import IntEnum, auto

from .machine import HsmSignal

PATTERN_MATCH_TEXT = "Pattern Matched!"


class Signal(IntEnum):
    """Signals used by the keypad application, following the reserved ones."""

    TICK = int(HsmSignal.USER)
    K00_DOWN = auto()
    K00_UP = auto()
    K01_DOWN = auto()
    K01_UP = auto()
    K02_DOWN = auto()
    K02_UP = auto()
    K03_DOWN = auto()
    K03_UP = auto()
    K12_DOWN = auto()
    K12_UP = auto()
    K13_DOWN = auto()
    K13_UP = auto()
    K22_DOWN = auto()
    K22_UP = auto()
    K23_DOWN = auto()
    K23_UP = auto()
    MODE_DOWN = auto()
    MODE_UP = auto()
    ENC_DOWN = auto()
    ENC_UP = auto()
    VOL_DOWN = auto()
    VOL_UP = auto()
    PATTERN_PRESS = auto()
    LAST = auto()


_SIGNAL_NAMES = (
    "HSM_SIG_NONE",
    "HSM_SIG_SILENT",
    "HSM_SIG_ENTRY",
    "HSM_SIG_EXIT",
    "HSM_SIG_INITIAL_TRANS",
    "SIG_TICK",
    "SIG_K00_DOWN",
    "SIG_K00_UP",
    "SIG_K01_DOWN",
    "SIG_K01_UP",
    "SIG_K02_DOWN",
    "SIG_K02_UP",
    "SIG_K03_DOWN",
    "SIG_K03_UP",
    "SIG_K12_DOWN",
    "SIG_K12_UP",
    "SIG_K13_DOWN",
    "SIG_K13_UP",
    "SIG_K22_DOWN",
    "SIG_K22_UP",
    "SIG_K23_DOWN",
    "SIG_K23_UP",
    "SIG_MODE_DOWN",
    "SIG_MODE_UP",
    "SIG_ENC_DOWN",
    "SIG_ENC_UP",
    "SIG_VOL_DOWN",
    "SIG_VOL_UP",
    "SIG_PATTERN_PRESS",
)


def signal_name(signal: int) -> str:
    """Return the display name of ``signal``."""
    index = int(signal)
    if not 0 <= index < len(_SIGNAL_NAMES):
        raise ValueError(f"no name for signal {index}")
    return _SIGNAL_NAMES[index]