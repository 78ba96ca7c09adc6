"""
Error classification for the backtesting pipeline.

This module provides a structured exception hierarchy separating data quality
problems found during ingestion from failures inside the simulation itself.
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
    MissingDataError,
    InsufficientDataError,
    EmptyMergeError,
)
from .system_failures import (
    SystemFailureError,
    StateTransitionError,
    ConfigurationError,
    SimulationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    "MissingDataError",
    "InsufficientDataError",
    "EmptyMergeError",
    # System Failures
    "SystemFailureError",
    "StateTransitionError",
    "ConfigurationError",
    "SimulationError",
]
