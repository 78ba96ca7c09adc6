"""
Data ingestion and merge module.

Parses header-keyed source rows into typed bars and open-interest rows, joins
them into the merged daily record sequence, and loads the source CSV tables.
"""
