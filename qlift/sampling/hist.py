"""Post-processing of measurement counts."""

from __future__ import annotations

from typing import Dict, Hashable, Mapping, Tuple, TypeVar

import torch

K = TypeVar("K", bound=Hashable)


def bitstring_counts(samples: torch.Tensor) -> Dict[str, int]:
    """
    Count each distinct bit row of ``samples``.

    Parameters
    ----------
    samples:
        Integer tensor of shape (n_shots, n_bits) with entries in {0, 1}.

    Returns
    -------
    Dict[str, int]
        Mapping from bitstring (e.g. '010') to the number of occurrences.
    """
    if samples.dim() != 2:
        raise ValueError("samples must have shape (shots, bits).")
    counts: Dict[str, int] = {}
    for row in samples.tolist():
        key = "".join(str(int(b)) for b in row)
        counts[key] = counts.get(key, 0) + 1
    return counts


def counts_to_probs(counts: Mapping[K, int]) -> Dict[K, float]:
    """
    Convert integer counts into a probability distribution.

    Keys may be bitstrings or :class:`~qlift.states.BasisLabel` objects.
    """
    total = sum(counts.values())
    if total <= 0:
        raise ValueError("Total count must be positive.")
    return {k: v / float(total) for k, v in counts.items()}


def counts_as_bitstrings(counts: Mapping[object, int]) -> Dict[str, int]:
    """Re-key counts by ``str(key)``, e.g. ``|011⟩`` becomes ``'011'``."""
    out: Dict[str, int] = {}
    for key, value in counts.items():
        name = str(key)
        out[name] = out.get(name, 0) + value
    return out


def most_frequent(counts: Mapping[K, int]) -> Tuple[K, int]:
    """Return the ``(outcome, count)`` pair with the highest count."""
    if not counts:
        raise ValueError("counts must be non-empty.")
    return max(counts.items(), key=lambda item: item[1])


__all__ = ["bitstring_counts", "counts_to_probs", "counts_as_bitstrings", "most_frequent"]
