"""
State machine data models for the single-position trailing-stop strategy.

This module defines immutable data structures for the held position, the
events a bar can produce, and the execution policies that drive the walk.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PositionSide(str, Enum):
    """Side currently held."""
    FLAT = "flat"
    LONG = "long"
    SHORT = "short"


class TradeEvent(str, Enum):
    """Event produced by one bar of the walk."""
    NONE = "none"
    LONG_ENTRY = "long_entry"
    SHORT_ENTRY = "short_entry"
    LONG_EXIT = "long_exit"
    SHORT_EXIT = "short_exit"
    HOLD = "hold"


class ExitReason(str, Enum):
    """Why a held position was closed."""
    SIGNAL = "signal"
    STOP = "stop"


@dataclass(frozen=True)
class ExecutionPolicy:
    """How a walk executes the shared strategy."""

    name: str
    reverse_on_signal_exit: bool = False             # Long exit by signal may open a Short on the same bar


VISUALIZATION = ExecutionPolicy(name="visualization", reverse_on_signal_exit=False)
PNL_ACCRUAL = ExecutionPolicy(name="pnl_accrual", reverse_on_signal_exit=True)


@dataclass(frozen=True)
class PositionState:
    """Held side plus its trailing-stop payload."""

    side: PositionSide = PositionSide.FLAT
    extremum: float = 0.0            # Highest high while long, lowest low while short
    stop_level: float = 0.0          # Close beyond this level exits

    @property
    def is_flat(self) -> bool:
        return self.side == PositionSide.FLAT

    @classmethod
    def flat(cls) -> 'PositionState':
        """No position."""
        return cls()

    @classmethod
    def open_long(cls, high: float, low: float) -> 'PositionState':
        """Long opened on a bar: track its high, stop at its low."""
        return cls(side=PositionSide.LONG, extremum=high, stop_level=low)

    @classmethod
    def open_short(cls, high: float, low: float) -> 'PositionState':
        """Short opened on a bar: track its low, stop at its high."""
        return cls(side=PositionSide.SHORT, extremum=low, stop_level=high)

    def with_trailing(self, extremum: float, stop_level: float) -> 'PositionState':
        """Same side with updated trailing payload."""
        return PositionState(side=self.side, extremum=extremum, stop_level=stop_level)


@dataclass(frozen=True)
class Transition:
    """Result of advancing the state machine by one bar."""

    state: PositionState
    event: TradeEvent = TradeEvent.NONE

    # Exit details
    exited_side: Optional[PositionSide] = None
    exit_reason: Optional[ExitReason] = None
    reversed: bool = False                           # Exit and opposite entry on the same bar

    @property
    def is_exit(self) -> bool:
        return self.exited_side is not None

    @property
    def is_entry(self) -> bool:
        return self.event in (TradeEvent.LONG_ENTRY, TradeEvent.SHORT_ENTRY) or self.reversed
