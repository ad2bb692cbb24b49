"""Sampling and measurement utilities for superpositions."""

from .bitstrings import (
    indices_to_bits,
    repeat_measurement,
    sample_bitstrings,
    sample_indices,
)
from .hist import (
    bitstring_counts,
    counts_as_bitstrings,
    counts_to_probs,
    most_frequent,
)

__all__ = [
    "repeat_measurement",
    "sample_indices",
    "indices_to_bits",
    "sample_bitstrings",
    "bitstring_counts",
    "counts_to_probs",
    "counts_as_bitstrings",
    "most_frequent",
]
