"""
Configuration module.

Frozen defaults, YAML instrument overrides with 3-tier precedence, and
validation of the merged result.
"""
