"""Tests for dense superpositions."""

from __future__ import annotations

import math

import numpy as np
import pytest
import torch

from qlift.errors import (
    BoundsError,
    DimensionError,
    EmptyInputError,
    NormalizationError,
)
from qlift.states import (
    MAPPING_TOLERANCE,
    BasisLabel,
    Superposition,
    basis_superposition,
)

R = 1.0 / math.sqrt(2.0)


def test_zero_state() -> None:
    """zero(n) is |0...0⟩ with 2**n amplitudes."""
    sup = Superposition.zero(3)
    assert sup.product_dim == 3
    assert sup.num_qubits == 3
    assert sup.dimension == 8
    assert len(sup) == 8
    assert sup.get_amplitude(0) == 1
    assert sup.total_probability() == pytest.approx(1.0)
    with pytest.raises(DimensionError):
        Superposition.zero(0)


def test_from_amplitudes_accepts_lists_arrays_and_tensors() -> None:
    """All supported input types yield the same superposition."""
    values = [R, 0, 0, R]
    a = Superposition.from_amplitudes(values)
    b = Superposition.from_amplitudes(np.array(values, dtype=np.complex128))
    c = Superposition.from_amplitudes(torch.tensor(values, dtype=torch.complex64))
    assert a == b
    assert a.allclose(c)
    assert a.amplitudes.dtype == torch.complex128


def test_from_amplitudes_dimension_errors() -> None:
    """Lengths that are not a power of two (or below two) are rejected."""
    with pytest.raises(DimensionError):
        Superposition.from_amplitudes([1, 0, 0])
    with pytest.raises(DimensionError):
        Superposition.from_amplitudes([1])
    with pytest.raises(DimensionError):
        Superposition.from_amplitudes([[1, 0], [0, 0]])


def test_raw_constructor_checks_width() -> None:
    """The amplitude count must be 2**product_dim."""
    with pytest.raises(DimensionError):
        Superposition(torch.zeros(3, dtype=torch.complex128), 5)
    with pytest.raises(DimensionError):
        Superposition(torch.zeros(1, dtype=torch.complex128), 0)
    sup = Superposition(torch.tensor([0, 1], dtype=torch.complex128), 1)
    assert sup.get_amplitude(1) == 1


def test_from_amplitudes_normalization() -> None:
    """Checked constructors enforce total probability one within 1e-6."""
    with pytest.raises(NormalizationError):
        Superposition.from_amplitudes([1, 1])
    # Deviation just inside the tolerance is accepted
    Superposition.from_amplitudes([math.sqrt(1 - 5e-7), 0])
    with pytest.raises(NormalizationError):
        Superposition.from_amplitudes([math.sqrt(1 - 2e-6), 0])
    # The unchecked path skips the test
    sup = Superposition.from_amplitudes_unchecked([1, 1])
    assert sup.total_probability() == pytest.approx(2.0)


def test_from_mapping_fills_missing_with_zero() -> None:
    """Absent labels have amplitude zero."""
    sup = Superposition.from_mapping({BasisLabel("01"): R, BasisLabel("10"): -R})
    assert sup.product_dim == 2
    assert sup.get_amplitude(0) == 0
    assert sup.get_amplitude(1) == pytest.approx(R)
    assert sup.get_amplitude(2) == pytest.approx(-R)


def test_from_mapping_errors() -> None:
    """Empty mappings, mixed widths and unnormalised input are rejected."""
    with pytest.raises(EmptyInputError):
        Superposition.from_mapping({})
    with pytest.raises(DimensionError):
        Superposition.from_mapping({BasisLabel("0"): R, BasisLabel("10"): R})
    with pytest.raises(NormalizationError):
        Superposition.from_mapping({BasisLabel("0"): 0.5})
    sup = Superposition.from_mapping_unchecked({BasisLabel("0"): 0.5})
    assert sup.get_amplitude(0) == 0.5


def test_amplitude_lookup() -> None:
    """Lookup by index and by label, with bounds and width checks."""
    sup = basis_superposition("10")
    assert sup.get_amplitude_from_label(BasisLabel("10")) == 1
    assert sup.get_amplitude_from_label(BasisLabel("01")) == 0
    with pytest.raises(BoundsError):
        sup.get_amplitude(4)
    with pytest.raises(DimensionError):
        sup.get_amplitude_from_label(BasisLabel("100"))


def test_amplitudes_property_is_a_copy() -> None:
    """Mutating the returned tensor does not change the state."""
    sup = Superposition.zero(1)
    amps = sup.amplitudes
    amps[0] = 0
    assert sup.get_amplitude(0) == 1


def test_set_amplitudes() -> None:
    """Checked mutation keeps the width and validates input."""
    sup = Superposition.zero(1)
    sup.set_amplitudes([0, 1j])
    assert sup.get_amplitude(1) == 1j
    with pytest.raises(DimensionError):
        sup.set_amplitudes([1, 0, 0, 0])
    with pytest.raises(NormalizationError):
        sup.set_amplitudes([1, 1])


def test_set_amplitudes_from_mapping_replaces_everything() -> None:
    """Labels missing from the mapping become zero."""
    sup = Superposition.from_amplitudes([R, R])
    sup.set_amplitudes_from_mapping({BasisLabel("1"): 1})
    assert sup.get_amplitude(0) == 0
    assert sup.get_amplitude(1) == 1
    with pytest.raises(DimensionError):
        sup.set_amplitudes_from_mapping({BasisLabel("11"): 1})


def test_to_mapping_drops_small_entries() -> None:
    """Entries with |amp|**2 below 1e-6 are left out of the sparse view."""
    small = math.sqrt(MAPPING_TOLERANCE) / 2
    big = math.sqrt(1 - small ** 2)
    sup = Superposition.from_amplitudes([big, small])
    mapping = sup.to_mapping()
    assert list(mapping) == [BasisLabel("0")]

    rebuilt = Superposition.from_mapping_unchecked(mapping)
    assert rebuilt.get_amplitude(0) == sup.get_amplitude(0)
    assert rebuilt.get_amplitude(1) == 0


def test_iteration_yields_labels_in_order() -> None:
    """Iterating yields every (label, amplitude) pair in index order."""
    sup = Superposition.from_amplitudes([0, 0, 1, 0])
    items = list(sup)
    assert [str(label) for label, _ in items] == ["00", "01", "10", "11"]
    assert items[2][1] == 1
    assert list(sup.nonzero_terms()) == [(2, 1 + 0j)]


def test_measure_is_weighted_and_reproducible() -> None:
    """Collapse follows |amp|**2 and is reproducible with a generator."""
    assert basis_superposition("01").measure() == BasisLabel("01")

    sup = Superposition.from_amplitudes([R, 0, 0, R])
    first = [sup.measure(torch.Generator().manual_seed(7)) for _ in range(3)]
    again = [sup.measure(torch.Generator().manual_seed(7)) for _ in range(3)]
    assert first == again

    gen = torch.Generator().manual_seed(0)
    outcomes = {sup.measure(gen) for _ in range(200)}
    assert outcomes == {BasisLabel("00"), BasisLabel("11")}


def test_measure_returns_none_on_probability_leak() -> None:
    """A state with zero total mass never collapses."""
    sup = Superposition.from_amplitudes_unchecked([0, 0])
    assert sup.measure(torch.Generator().manual_seed(0)) is None


def test_measure_cache_invalidated_on_mutation() -> None:
    """Mutating the amplitudes changes subsequent measurements."""
    sup = basis_superposition("0")
    assert sup.measure() == BasisLabel("0")
    sup.set_amplitudes([0, 1])
    assert sup.measure() == BasisLabel("1")


def test_copy_equality_and_numpy_export() -> None:
    """Copies are independent; equality is exact, allclose is tolerant."""
    sup = Superposition.from_amplitudes([R, R])
    dup = sup.copy()
    assert dup == sup
    dup.set_amplitudes([1, 0])
    assert dup != sup
    assert sup.allclose(Superposition.from_amplitudes([R + 1e-9, R]))
    assert not sup.allclose(Superposition.zero(2))
    arr = sup.to_numpy()
    assert arr.dtype == np.complex128
    assert np.allclose(arr, [R, R])
    assert "|0⟩" in repr(sup)
