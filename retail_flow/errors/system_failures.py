"""
System failure error classifications.

These exceptions represent failures inside the backtester itself, such as a
corrupted position state or an unusable configuration.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class StateTransitionError(SystemFailureError):
    """Invalid position transition that corrupts the state machine."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class ConfigurationError(SystemFailureError):
    """Merged configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []


class SimulationError(SystemFailureError):
    """Simulation could not be completed for the given record sequence."""

    def __init__(self, message: str, simulator: Optional[str] = None,
                 bar_index: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.simulator = simulator
        self.bar_index = bar_index
