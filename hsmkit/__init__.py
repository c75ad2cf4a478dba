"""Hierarchical state machine engine with an event queue, keypad signals and pattern-press detection."""

__version__ = "0.1.0"
__all__ = ["machine", "signals", "pattern"]