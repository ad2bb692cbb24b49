"""Tests for diagnostics helpers."""

from __future__ import annotations

import math

import pytest
import torch

import qlift.gates as g
from qlift.diagnostics import (
    assert_normalized,
    fidelity,
    is_gate_unitary,
    is_unitary,
    state_norm,
    total_probability,
)
from qlift.states import Superposition, basis_superposition

R = 1.0 / math.sqrt(2.0)


def test_state_norm_and_total_probability() -> None:
    """Norms work for superpositions and raw tensors."""
    sup = Superposition.from_amplitudes([R, 1j * R])
    assert state_norm(sup) == pytest.approx(1.0)
    assert total_probability(torch.tensor([1.0, 1.0], dtype=torch.complex128)) == pytest.approx(2.0)
    with pytest.raises(ValueError):
        state_norm(torch.zeros((2, 2), dtype=torch.complex128))


def test_assert_normalized() -> None:
    assert_normalized(Superposition.zero(2))
    with pytest.raises(ValueError):
        assert_normalized(Superposition.from_amplitudes_unchecked([0.5, 0.5]))


def test_fidelity() -> None:
    """Orthogonal states have fidelity 0, identical ones 1."""
    zero = basis_superposition("0")
    one = basis_superposition("1")
    plus = Superposition.from_amplitudes([R, R])
    assert fidelity(zero, one) == pytest.approx(0.0)
    assert fidelity(plus, plus) == pytest.approx(1.0)
    assert fidelity(zero, plus) == pytest.approx(0.5)
    with pytest.raises(ValueError):
        fidelity(zero, Superposition.zero(2))


def test_is_unitary() -> None:
    assert is_unitary(torch.eye(4, dtype=torch.complex128))
    assert not is_unitary(torch.ones((2, 2), dtype=torch.complex128))
    assert not is_unitary(torch.ones((2, 3), dtype=torch.complex128))


def test_is_gate_unitary_for_custom_gates() -> None:
    """The unitarity hook accepts valid custom gates and flags invalid ones."""
    my_cnot = g.custom(lambda label: label.invert(1) if label[0] == 1 else None, [0], "MyCNot")
    assert is_gate_unitary(my_cnot)

    collapse = g.custom(lambda label: basis_superposition("0"), [], "Reset")
    assert not is_gate_unitary(collapse)
    assert is_gate_unitary(g.toffoli(0, 1))
