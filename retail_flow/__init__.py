"""
Retail Flow - Retail Positioning Trailing-Stop Backtester

Joins daily futures price bars with open-interest breakdowns, derives a
retail positioning signal and simulates a single-position trailing-stop
strategy bar by bar, producing trade markers and an equity curve with
drawdown and rolling Sharpe statistics.
"""

__version__ = "0.1.0"
__author__ = "Retail Flow Team"
