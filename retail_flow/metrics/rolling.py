"""Rolling window statistics and Sharpe ratio"""

import math
from collections import deque
from typing import Optional


class RollingWindowStats:
    """
    Mean and population standard deviation over the last ``window`` values.

    Uses Welford's update on a sliding window: each push is O(1), replacing the
    evicted value's contribution instead of re-summing the window.
    """

    def __init__(self, window: int):
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        self.window = window
        self._values: deque = deque(maxlen=window)
        self._mean = 0.0
        self._m2 = 0.0
        self.total_count = 0

    def __len__(self) -> int:
        return len(self._values)

    @property
    def is_full(self) -> bool:
        return len(self._values) == self.window

    def push(self, value: float) -> None:
        """Add a value, evicting the oldest once the window is full."""
        self.total_count += 1

        if len(self._values) < self.window:
            self._values.append(value)
            count = len(self._values)
            delta = value - self._mean
            self._mean += delta / count
            self._m2 += delta * (value - self._mean)
            return

        evicted = self._values[0]
        self._values.append(value)
        old_mean = self._mean
        self._mean += (value - evicted) / self.window
        self._m2 += (value - evicted) * (value - self._mean + evicted - old_mean)
        if self._m2 < 0.0:
            # Cancellation can leave a tiny negative residue
            self._m2 = 0.0

    @property
    def mean(self) -> Optional[float]:
        """Window mean, None if empty."""
        if not self._values:
            return None
        return self._mean

    @property
    def std(self) -> Optional[float]:
        """Population standard deviation, None if empty."""
        if not self._values:
            return None
        return math.sqrt(self._m2 / len(self._values))


class RollingSharpe:
    """
    Annualized Sharpe ratio over a trailing window of daily returns.

    Reports 0 until a full window of returns exists, and whenever the window's
    standard deviation is at or below ``min_std``.
    """

    def __init__(self, window: int = 60, annualization_days: int = 252, min_std: float = 1e-6):
        self.stats = RollingWindowStats(window)
        self.scale = math.sqrt(annualization_days)
        self.min_std = min_std

    def update(self, daily_return: float) -> float:
        """Add one daily return and return the current Sharpe ratio."""
        self.stats.push(daily_return)
        return self.value

    @property
    def value(self) -> float:
        if not self.stats.is_full:
            return 0.0
        std = self.stats.std
        if std is None or std <= self.min_std:
            return 0.0
        return (self.stats.mean / std) * self.scale
