"""Running drawdown from the equity high-water mark"""

from ..utils.numeric import round_half_up


class DrawdownTracker:
    """Tracks the equity peak and the percentage shortfall from it."""

    def __init__(self, initial_equity: float):
        self.max_equity = initial_equity

    def update(self, equity: float) -> float:
        """
        Record today's equity and return drawdown in percent.

        Returns:
            (equity - peak) / peak * 100 rounded to two decimals; 0 when the
            peak is 0
        """
        if equity > self.max_equity:
            self.max_equity = equity

        if self.max_equity == 0:
            return 0.0

        drawdown = (equity - self.max_equity) / self.max_equity * 100
        return round_half_up(drawdown, 2)
