"""Core diagnostic functions for superpositions and gates."""

from __future__ import annotations

from typing import Union

import torch

from ..gates.dispatch import local_matrix
from ..gates.spec import Gate
from ..states.superposition import Superposition

StateLike = Union[Superposition, torch.Tensor]


def _as_vector(state: StateLike) -> torch.Tensor:
    if isinstance(state, Superposition):
        return state.amplitudes
    return state


def state_norm(state: StateLike) -> float:
    """
    Compute the L2 norm of a state.

    Parameters
    ----------
    state:
        A :class:`Superposition` or a complex tensor of shape (dim,).

    Returns
    -------
    float
        ``sqrt(<psi|psi>)``.

    Raises
    ------
    ValueError
        If a tensor input is not one-dimensional.
    """
    vec = _as_vector(state)
    if vec.dim() != 1:
        raise ValueError("state_norm expects a one-dimensional amplitude vector.")
    norm_sq = (vec.conj() * vec).sum().real
    return float(torch.sqrt(norm_sq))


def total_probability(state: StateLike) -> float:
    """Sum of ``|amp|**2`` over all basis states."""
    return state_norm(state) ** 2


def assert_normalized(state: StateLike, atol: float = 1e-6) -> None:
    """
    Assert that a state has total probability ~1 within ``atol``.

    Raises
    ------
    ValueError
        If the total probability is non-finite or off by ``atol`` or more.
    """
    total = total_probability(state)
    if not torch.isfinite(torch.tensor(total)):
        raise ValueError("State norm contains non-finite values.")
    if abs(total - 1.0) >= atol:
        raise ValueError(
            f"State is not normalized within tolerance {atol}. "
            f"Total probability found: {total}"
        )


def fidelity(state_a: StateLike, state_b: StateLike) -> float:
    """
    Fidelity ``|<a|b>|**2`` between two pure states of equal width.

    Raises
    ------
    ValueError
        If the states have different dimensions.
    """
    vec_a = _as_vector(state_a)
    vec_b = _as_vector(state_b)
    if vec_a.shape != vec_b.shape:
        raise ValueError("fidelity expects states with the same shape.")
    inner = (vec_a.conj() * vec_b).sum()
    return float(inner.abs() ** 2)


def is_unitary(mat: torch.Tensor, atol: float = 1e-6) -> bool:
    """
    Check whether a square matrix satisfies ``U^† U = I`` within ``atol``.

    Returns False for non-square input instead of raising.
    """
    if mat.dim() != 2 or mat.shape[0] != mat.shape[1]:
        return False
    eye = torch.eye(mat.shape[0], dtype=mat.dtype)
    max_dev = (mat.conj().transpose(0, 1) @ mat - eye).abs().max()
    if not torch.isfinite(max_dev):
        return False
    return bool(max_dev <= atol)


def is_gate_unitary(gate: Gate, atol: float = 1e-6) -> bool:
    """
    Check a gate's local action for unitarity.

    Intended for custom gates, whose physical validity the engine does not
    verify. The local matrix is rebuilt by applying the gate to every local
    basis state, so the custom function is called ``2**arity`` times.
    """
    return is_unitary(local_matrix(gate), atol=atol)


__all__ = [
    "state_norm",
    "total_probability",
    "assert_normalized",
    "fidelity",
    "is_unitary",
    "is_gate_unitary",
]
