"""Simulation engine and simulated circuits."""

from .engine import ZERO_MARGIN, apply_gate, simulate
from .result import SimulatedCircuit

__all__ = ["ZERO_MARGIN", "apply_gate", "simulate", "SimulatedCircuit"]
