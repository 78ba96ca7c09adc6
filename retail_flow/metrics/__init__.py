"""Performance statistics for the equity curve"""

from .drawdown import DrawdownTracker
from .performance import PerformanceSummary, summarize
from .rolling import RollingSharpe, RollingWindowStats

__all__ = [
    "DrawdownTracker",
    "PerformanceSummary",
    "RollingSharpe",
    "RollingWindowStats",
    "summarize",
]
