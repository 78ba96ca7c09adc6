"""Tests for simulation output models."""

from datetime import date

import pytest

from retail_flow.models.results import EquitySample, MarkerKind, MarkerResult
from retail_flow.state.models import PositionSide


class TestMarkerResult:
    """Test the marker walk result container."""

    def test_empty_result(self):
        result = MarkerResult()

        assert result.markers == ()
        assert result.stop_points == ()
        assert result.position_on(date(2024, 1, 2)) is None
        assert result.count(MarkerKind.LONG_ENTRY) == 0

    def test_default_positions_are_read_only(self):
        result = MarkerResult()

        with pytest.raises(TypeError):
            result.positions[date(2024, 1, 2)] = None  # type: ignore[index]

    def test_marker_actions(self):
        assert [kind.action for kind in MarkerKind] == ["Buy", "Sell", "Exit", "Cover"]


class TestEquitySampleDisplay:
    """Test whole-currency display rounding."""

    def _sample(self, equity: float, daily_pnl: float) -> EquitySample:
        return EquitySample(
            date=date(2024, 1, 2),
            label="2024/01/02 (二)",
            equity=equity,
            equity_long=equity,
            equity_short=200_000.0,
            daily_pnl=daily_pnl,
            position=PositionSide.LONG,
        )

    @pytest.mark.parametrize("value,expected", [
        (200_000.5, 200_001),
        (200_001.5, 200_002),
        (199_999.4, 199_999),
    ])
    def test_halves_round_up(self, value, expected):
        row = self._sample(value, 0.0).to_dict()

        assert row["equity"] == expected
        assert row["equity_long"] == expected

    def test_negative_halves_round_toward_positive(self):
        assert self._sample(200_000.0, -2.5).to_dict()["daily_pnl"] == -2
        assert self._sample(200_000.0, -2.6).to_dict()["daily_pnl"] == -3
