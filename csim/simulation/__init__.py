"""Simulation package shim.

This module exposes the Simulation class at `csim.simulation` so imports
such as `from csim.simulation import Simulation` work.
"""
from .simulation import Simulation, run_simulation

__all__ = ["Simulation", "run_simulation"]
