"""
Position state machine module.

A single canonical FLAT / LONG / SHORT state machine with trailing-stop
payload. Both the marker walk and the equity walk drive it, differing only in
their execution policy.
"""
