"""
Strategy simulators.

Two independent walks over the merged record sequence: one anchors trade
markers and trailing-stop points for charts, the other accrues profit and
loss into an equity curve.
"""

from .equity import simulate_equity
from .markers import simulate_markers

__all__ = ["simulate_equity", "simulate_markers"]
