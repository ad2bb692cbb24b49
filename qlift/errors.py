"""Exception types raised by qlift.

All validation failures derive from :class:`QLiftError` and, where they
describe bad input, also from :class:`ValueError` so that callers catching
``ValueError`` keep working.
"""

from __future__ import annotations


class QLiftError(Exception):
    """Base class for every error raised by qlift."""


class ConstructionError(QLiftError, ValueError):
    """A state or label could not be built from the given input."""


class DimensionError(ConstructionError):
    """Amplitude count is not a power of two, or widths do not agree."""


class NormalizationError(ConstructionError):
    """The squared amplitudes do not sum to one within tolerance."""


class EmptyInputError(ConstructionError):
    """An empty sequence or mapping was given where content is required."""


class BoundsError(QLiftError, ValueError):
    """An index or qubit position is outside the valid range."""


class CircuitError(QLiftError, ValueError):
    """A gate placement violates the circuit's column preconditions."""


class SimulationError(QLiftError, RuntimeError):
    """A custom gate produced a local state the engine cannot lift."""


__all__ = [
    "QLiftError",
    "ConstructionError",
    "DimensionError",
    "NormalizationError",
    "EmptyInputError",
    "BoundsError",
    "CircuitError",
    "SimulationError",
]
