"""Entry and exit signal classification from retail positioning shifts."""

from .classifier import SignalSet, classify, entry_long, entry_short, exit_long_by_signal

__all__ = [
    "SignalSet",
    "classify",
    "entry_long",
    "entry_short",
    "exit_long_by_signal",
]
