"""
Trade marker and trailing-stop annotation walk.

Signals are evaluated on a bar's close and acted on at the next session, so
every marker and stop point is anchored on the record after its trigger bar.
The walk therefore stops one record short of the end: the final record has
no successor to anchor on.
"""

from types import MappingProxyType
from typing import Optional, Sequence

import structlog

from ..config.defaults import MarkerParams, StrategyParams
from ..data.models import MergedRecord
from ..logging.config import get_state_logger, log_position_transition
from ..models.results import (
    MarkerKind,
    MarkerResult,
    PositionSnapshot,
    StopPoint,
    TradeMarker,
)
from ..signals.classifier import classify
from ..state.machine import advance, validate_transition
from ..state.models import VISUALIZATION, PositionState, TradeEvent
from ._sequence import check_ascending

logger = structlog.get_logger(__name__)
state_logger = get_state_logger(__name__)

_EVENT_MARKERS = {
    TradeEvent.LONG_ENTRY: MarkerKind.LONG_ENTRY,
    TradeEvent.SHORT_ENTRY: MarkerKind.SHORT_ENTRY,
    TradeEvent.LONG_EXIT: MarkerKind.LONG_EXIT,
    TradeEvent.SHORT_EXIT: MarkerKind.SHORT_EXIT,
}


def anchor_price(kind: MarkerKind, anchor: MergedRecord, offset: float) -> float:
    """Buys and covers sit below the anchor bar's low, sells and exits above its high."""
    if kind in (MarkerKind.LONG_ENTRY, MarkerKind.SHORT_EXIT):
        return anchor.low * (1 - offset)
    return anchor.high * (1 + offset)


def simulate_markers(
    records: Sequence[MergedRecord],
    strategy: Optional[StrategyParams] = None,
    marker_params: Optional[MarkerParams] = None,
) -> MarkerResult:
    """
    Walk records 1 .. n-2 and collect markers, stop points and positions.

    Args:
        records: Merged records, strictly ascending by date
        strategy: Signal and trailing-stop parameters
        marker_params: Marker anchor parameters

    Returns:
        MarkerResult with ordered markers and stop points, and a read-only
        date-keyed position lookup
    """
    strategy = strategy or StrategyParams()
    marker_params = marker_params or MarkerParams()
    check_ascending(records, "markers")

    markers: list[TradeMarker] = []
    stop_points: list[StopPoint] = []
    positions: dict = {}
    state = PositionState.flat()

    for i in range(1, len(records) - 1):
        current = records[i]
        previous = records[i - 1]
        anchor = records[i + 1]

        signals = classify(current, previous, strategy)
        transition = advance(state, current, previous, signals, VISUALIZATION,
                             monotonic_stops=strategy.monotonic_stops)
        if strategy.monotonic_stops:
            validate_transition(state, transition)

        kind = _EVENT_MARKERS.get(transition.event)
        if kind is not None:
            markers.append(TradeMarker(
                kind=kind,
                date=anchor.date,
                label=anchor.label,
                price=anchor_price(kind, anchor, marker_params.anchor_offset),
                trigger_date=current.date,
            ))
            log_position_transition(
                state_logger,
                simulator="markers",
                from_side=state.side.value,
                to_side=transition.state.side.value,
                trigger=transition.event.value,
                context={
                    "trigger_date": current.date.isoformat(),
                    "close": current.close,
                    "stop_level": transition.state.stop_level,
                    "exit_reason": transition.exit_reason.value if transition.exit_reason else None,
                }
            )

        new_state = transition.state
        if not new_state.is_flat:
            positions[anchor.date] = PositionSnapshot(side=new_state.side, stop_level=new_state.stop_level)
            if transition.event == TradeEvent.HOLD:
                stop_points.append(StopPoint(
                    date=anchor.date,
                    label=anchor.label,
                    stop_level=new_state.stop_level,
                ))

        state = new_state

    logger.info(
        "Marker simulation complete",
        records=len(records),
        markers=len(markers),
        stop_points=len(stop_points),
        open_side=state.side.value
    )

    return MarkerResult(
        markers=tuple(markers),
        stop_points=tuple(stop_points),
        positions=MappingProxyType(positions),
    )
