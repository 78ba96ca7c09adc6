"""
Data quality error classifications for price and open-interest ingestion.

These exceptions categorize problems in the two source tables so that bad
input fails fast at parse time instead of corrupting every derived value.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues in the source tables."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedDataError(DataQualityError):
    """Field exists but cannot be parsed into the expected type."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class InsufficientDataError(DataQualityError):
    """Not enough records for the requested calculation."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count


class EmptyMergeError(InsufficientDataError):
    """No rows survived the price/open-interest join; nothing can be simulated."""

    def __init__(self, message: str, price_rows: int = 0, oi_rows: int = 0, **kwargs):
        super().__init__(message, required_count=1, available_count=0, **kwargs)
        self.price_rows = price_rows
        self.oi_rows = oi_rows
        self.recoverable = False
