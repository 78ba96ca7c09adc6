"""
Core position state machine.

``advance`` is a pure function of (state, current bar, previous bar, signals,
policy). It never mutates its inputs and returns the next state together with
the event the bar produced, so both simulators replay identical strategy
logic.

Trailing rules while held:

- Long: when the close makes a new high beyond the tracked extremum, the stop
  moves to min(current low, previous low); the extremum then follows the high.
- Short: mirror image, using max(current high, previous high) and the low.
"""

from ..data.models import MergedRecord
from ..errors import StateTransitionError
from ..signals.classifier import SignalSet
from .models import (
    ExecutionPolicy,
    ExitReason,
    PositionSide,
    PositionState,
    TradeEvent,
    Transition,
)


def advance(
    state: PositionState,
    current: MergedRecord,
    previous: MergedRecord,
    signals: SignalSet,
    policy: ExecutionPolicy,
    monotonic_stops: bool = True,
) -> Transition:
    """
    Advance the position by one bar.

    Args:
        state: Position held coming into the bar
        current: Bar being evaluated
        previous: Immediate predecessor of ``current``
        signals: Signals evaluated on ``current``
        policy: Execution policy of the calling walk
        monotonic_stops: Never loosen a held stop when trailing

    Returns:
        Transition carrying the new state and the emitted event
    """
    if state.side == PositionSide.FLAT:
        return _advance_flat(current, signals)

    if state.side == PositionSide.LONG:
        return _advance_long(state, current, previous, signals, policy, monotonic_stops)

    if state.side == PositionSide.SHORT:
        return _advance_short(state, current, previous, monotonic_stops)

    raise StateTransitionError(
        f"Unknown position side: {state.side!r}",
        current_state=str(state.side)
    )


def _advance_flat(current: MergedRecord, signals: SignalSet) -> Transition:
    if signals.entry_long:
        return Transition(
            state=PositionState.open_long(current.high, current.low),
            event=TradeEvent.LONG_ENTRY,
        )
    if signals.entry_short:
        return Transition(
            state=PositionState.open_short(current.high, current.low),
            event=TradeEvent.SHORT_ENTRY,
        )
    return Transition(state=PositionState.flat())


def _advance_long(
    state: PositionState,
    current: MergedRecord,
    previous: MergedRecord,
    signals: SignalSet,
    policy: ExecutionPolicy,
    monotonic_stops: bool,
) -> Transition:
    if signals.exit_long_by_signal or current.close < state.stop_level:
        reason = ExitReason.SIGNAL if signals.exit_long_by_signal else ExitReason.STOP

        # Only the long side has a same-bar reversal path
        if (policy.reverse_on_signal_exit
                and signals.exit_long_by_signal and signals.entry_short):
            return Transition(
                state=PositionState.open_short(current.high, current.low),
                event=TradeEvent.LONG_EXIT,
                exited_side=PositionSide.LONG,
                exit_reason=reason,
                reversed=True,
            )

        return Transition(
            state=PositionState.flat(),
            event=TradeEvent.LONG_EXIT,
            exited_side=PositionSide.LONG,
            exit_reason=reason,
        )

    stop_level = state.stop_level
    if current.close > state.extremum:
        candidate = min(current.low, previous.low)
        stop_level = max(stop_level, candidate) if monotonic_stops else candidate
    extremum = current.high if current.high > state.extremum else state.extremum

    return Transition(
        state=state.with_trailing(extremum, stop_level),
        event=TradeEvent.HOLD,
    )


def _advance_short(
    state: PositionState,
    current: MergedRecord,
    previous: MergedRecord,
    monotonic_stops: bool,
) -> Transition:
    if current.close > state.stop_level:
        return Transition(
            state=PositionState.flat(),
            event=TradeEvent.SHORT_EXIT,
            exited_side=PositionSide.SHORT,
            exit_reason=ExitReason.STOP,
        )

    stop_level = state.stop_level
    if current.close < state.extremum:
        candidate = max(current.high, previous.high)
        stop_level = min(stop_level, candidate) if monotonic_stops else candidate
    extremum = current.low if current.low < state.extremum else state.extremum

    return Transition(
        state=state.with_trailing(extremum, stop_level),
        event=TradeEvent.HOLD,
    )


def validate_transition(previous_state: PositionState, transition: Transition) -> None:
    """
    Check a transition against the trailing-stop invariants.

    Raises:
        StateTransitionError: If a held stop moved against the position, or a
            position was opened while another was still held
    """
    new_state = transition.state

    if transition.event == TradeEvent.HOLD:
        if new_state.side != previous_state.side:
            raise StateTransitionError(
                "Hold changed the position side",
                current_state=previous_state.side.value,
                attempted_transition=new_state.side.value
            )
        if new_state.side == PositionSide.LONG and new_state.stop_level < previous_state.stop_level:
            raise StateTransitionError(
                f"Long stop loosened from {previous_state.stop_level} to {new_state.stop_level}",
                current_state=previous_state.side.value,
                attempted_transition=transition.event.value
            )
        if new_state.side == PositionSide.SHORT and new_state.stop_level > previous_state.stop_level:
            raise StateTransitionError(
                f"Short stop loosened from {previous_state.stop_level} to {new_state.stop_level}",
                current_state=previous_state.side.value,
                attempted_transition=transition.event.value
            )

    if transition.event in (TradeEvent.LONG_ENTRY, TradeEvent.SHORT_ENTRY) and not previous_state.is_flat:
        raise StateTransitionError(
            f"Entry while {previous_state.side.value} position is open",
            current_state=previous_state.side.value,
            attempted_transition=transition.event.value
        )
