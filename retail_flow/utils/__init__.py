"""
Utility functions module.

Calendar-day handling and decimal rounding shared by the ingestion and
simulation layers.

Date Semantics:
- Source dates are calendar days, never instants; no timezone is applied
- Weekday labels are derived from the calendar day itself
"""
