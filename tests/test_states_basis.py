"""Tests for qubits and basis labels."""

from __future__ import annotations

import pytest

from qlift.errors import BoundsError, ConstructionError, EmptyInputError
from qlift.states import BasisLabel, Qubit, Superposition


def test_qubit_flip_and_int_value() -> None:
    """Qubits behave as their bit value and flip to the other value."""
    assert Qubit.ZERO.flip() is Qubit.ONE
    assert Qubit.ONE.flip() is Qubit.ZERO
    assert Qubit.ONE == 1
    assert str(Qubit.ZERO) == "0"
    assert repr(Qubit.ONE) == "|1⟩"


def test_qubit_join_builds_label() -> None:
    """Joining qubits yields the tensor-product label."""
    label = Qubit.ZERO.join(Qubit.ONE)
    assert label == BasisLabel([0, 1])
    assert Qubit.ONE.join(BasisLabel("01")) == BasisLabel("101")
    assert Qubit.ONE.as_label() == BasisLabel([1])


def test_label_construction_coerces_values() -> None:
    """Ints, characters and Qubit members are all accepted."""
    a = BasisLabel([Qubit.ONE, 0, "1"])
    b = BasisLabel.from_string("|101⟩")
    assert a == b
    assert str(a) == "101"
    assert repr(a) == "|101⟩"
    assert a.num_qubits == 3
    assert len(a) == 3


def test_label_rejects_bad_input() -> None:
    """Empty input and non-binary values are construction errors."""
    with pytest.raises(EmptyInputError):
        BasisLabel([])
    with pytest.raises(ConstructionError):
        BasisLabel([0, 2])
    with pytest.raises(ConstructionError):
        BasisLabel("01x")
    # EmptyInputError is still a ValueError for generic callers
    with pytest.raises(ValueError):
        BasisLabel("")


def test_label_index_is_msb_first() -> None:
    """The leftmost qubit is the most significant bit."""
    assert BasisLabel("110").to_index() == 6
    assert BasisLabel("001").to_index() == 1
    assert BasisLabel.from_index(6, 3) == BasisLabel("110")
    assert BasisLabel.from_index(1, 4) == BasisLabel("0001")


@pytest.mark.parametrize("width", [1, 2, 3, 5, 8, 13, 20])
def test_index_label_round_trip(width: int, rng) -> None:
    """from_index and to_index are inverse bijections for widths up to 20."""
    dim = 1 << width
    if dim <= 256:
        indices = range(dim)
    else:
        indices = [0, dim - 1] + [int(i) for i in rng.integers(0, dim, size=200)]
    for index in indices:
        label = BasisLabel.from_index(index, width)
        assert label.num_qubits == width
        assert label.to_index() == index
        assert BasisLabel.from_index(label.to_index(), width) == label


def test_from_index_bounds() -> None:
    """Indices outside [0, 2**width) and widths below one are rejected."""
    with pytest.raises(BoundsError):
        BasisLabel.from_index(8, 3)
    with pytest.raises(BoundsError):
        BasisLabel.from_index(-1, 3)
    with pytest.raises(BoundsError):
        BasisLabel.from_index(0, 0)


def test_get_and_invert() -> None:
    """Positional reads are bounds-checked and invert returns a new label."""
    label = BasisLabel("100")
    assert label.get(0) is Qubit.ONE
    assert label[2] is Qubit.ZERO
    flipped = label.invert(2)
    assert flipped == BasisLabel("101")
    assert label == BasisLabel("100")
    with pytest.raises(BoundsError):
        label.get(3)
    with pytest.raises(BoundsError):
        label.invert(3)


def test_replace_and_insert_qubits() -> None:
    """Writing positions produces edited copies."""
    label = BasisLabel("0000")
    assert label.replace(1, Qubit.ONE) == BasisLabel("0100")
    assert label.insert_qubits([1, 1], [0, 3]) == BasisLabel("1001")
    with pytest.raises(BoundsError):
        label.insert_qubits([1], [0, 1])
    with pytest.raises(BoundsError):
        label.insert_qubits([1], [4])


def test_join_appends_on_the_right() -> None:
    """Concatenation preserves order."""
    assert BasisLabel("10").join(Qubit.ONE) == BasisLabel("101")
    assert BasisLabel("1").join(BasisLabel("00")) == BasisLabel("100")


def test_labels_are_hashable_and_ordered() -> None:
    """Labels work as dict keys and sort by index."""
    counts = {BasisLabel("01"): 1, BasisLabel([0, 1]): 2}
    assert len(counts) == 1
    labels = sorted([BasisLabel("11"), BasisLabel("00"), BasisLabel("10")])
    assert [str(label) for label in labels] == ["00", "10", "11"]
    assert list(BasisLabel("10")) == [Qubit.ONE, Qubit.ZERO]


def test_labels_only_order_against_labels() -> None:
    with pytest.raises(TypeError):
        BasisLabel("01") < "01"
    with pytest.raises(TypeError):
        sorted([BasisLabel("1"), 1])


def test_to_superposition() -> None:
    """A label converts to the amplitude-one basis state."""
    sup = BasisLabel("10").to_superposition()
    assert isinstance(sup, Superposition)
    assert sup.get_amplitude(2) == 1
    assert sup.total_probability() == pytest.approx(1.0)
