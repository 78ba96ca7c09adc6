"""
Simulation output models.

Immutable structures handed from the simulators to presentation consumers.
"""
