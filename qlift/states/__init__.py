"""Qubits, basis labels and superpositions."""

from .basis import BasisLabel
from .qubit import Qubit
from .superposition import (
    DEFAULT_DTYPE,
    MAPPING_TOLERANCE,
    NORMALIZATION_TOLERANCE,
    Superposition,
    basis_superposition,
)

__all__ = [
    "Qubit",
    "BasisLabel",
    "Superposition",
    "basis_superposition",
    "DEFAULT_DTYPE",
    "MAPPING_TOLERANCE",
    "NORMALIZATION_TOLERANCE",
]
