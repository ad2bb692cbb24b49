"""Repeated measurement of superpositions."""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

import torch

from ..errors import NormalizationError
from ..states.basis import BasisLabel
from ..states.superposition import NORMALIZATION_TOLERANCE, Superposition


def repeat_measurement(
    superposition: Superposition,
    shots: int,
    generator: Optional[torch.Generator] = None,
) -> Dict[BasisLabel, int]:
    """
    Collapse ``superposition`` ``shots`` times and count the outcomes.

    Every shot is an independent :meth:`Superposition.measure` call, so a
    state that leaks probability simply produces fewer counted outcomes.

    Parameters
    ----------
    superposition:
        State to sample. It is not modified.
    shots:
        Number of measurements.
    generator:
        Optional torch.Generator for reproducible sampling.

    Returns
    -------
    Dict[BasisLabel, int]
        Mapping from outcome label to number of occurrences.
    """
    if shots <= 0:
        raise ValueError("shots must be a positive integer.")

    counts: Dict[BasisLabel, int] = {}
    for _ in range(shots):
        outcome = superposition.measure(generator)
        if outcome is not None:
            counts[outcome] = counts.get(outcome, 0) + 1
    return counts


def sample_indices(
    superposition: Superposition,
    shots: int,
    generator: Optional[torch.Generator] = None,
) -> torch.Tensor:
    """
    Draw ``shots`` basis indices at once via ``torch.multinomial``.

    The probabilities are used as they are, so the register must conserve
    probability. Use :func:`repeat_measurement` to observe a leaking state,
    where missing outcomes show up as a smaller count.

    Returns
    -------
    torch.Tensor
        Int64 tensor of shape (shots,).

    Raises
    ------
    NormalizationError
        If the total probability differs from one by
        ``NORMALIZATION_TOLERANCE`` or more.
    """
    if shots <= 0:
        raise ValueError("shots must be a positive integer.")
    probs = superposition.probabilities()
    total = float(probs.sum())
    if abs(total - 1.0) >= NORMALIZATION_TOLERANCE:
        raise NormalizationError(
            f"Total probability is {total}, not 1; vectorised sampling would hide "
            "the missing mass."
        )
    return torch.multinomial(
        probs,
        num_samples=shots,
        replacement=True,
        generator=generator,
    )


def indices_to_bits(
    indices: torch.Tensor,
    num_qubits: int,
    qubits: Optional[Sequence[int]] = None,
) -> torch.Tensor:
    """
    Convert basis indices into rows of bits.

    Qubit 0 is the most significant bit of an index, matching
    :class:`BasisLabel`.

    Parameters
    ----------
    indices:
        Integer tensor of shape (n_shots,) with values in [0, 2**num_qubits).
    num_qubits:
        Width of the register.
    qubits:
        Optional subsequence of wires to keep. If None, all wires are kept.

    Returns
    -------
    torch.Tensor
        Int64 tensor of shape (n_shots, len(qubits)) with bits in {0, 1}.
    """
    if qubits is None:
        qubits_tuple: Tuple[int, ...] = tuple(range(num_qubits))
    else:
        qubits_tuple = tuple(int(q) for q in qubits)
    if not qubits_tuple:
        raise ValueError("qubits must be non-empty if provided.")

    indices = indices.to(torch.int64)
    result = torch.empty(indices.shape + (len(qubits_tuple),), dtype=torch.int64)
    for k, q in enumerate(qubits_tuple):
        if q < 0 or q >= num_qubits:
            raise ValueError(
                f"Requested qubit index {q} is out of bounds for num_qubits={num_qubits}."
            )
        result[..., k] = (indices >> (num_qubits - 1 - q)) & 1
    return result


def sample_bitstrings(
    superposition: Superposition,
    shots: int,
    qubits: Optional[Sequence[int]] = None,
    generator: Optional[torch.Generator] = None,
) -> torch.Tensor:
    """Sample ``shots`` outcomes as bit rows, shape (shots, len(qubits))."""
    indices = sample_indices(superposition, shots, generator=generator)
    return indices_to_bits(indices, superposition.product_dim, qubits=qubits)


__all__ = [
    "repeat_measurement",
    "sample_indices",
    "indices_to_bits",
    "sample_bitstrings",
]
