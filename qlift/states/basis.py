"""Computational basis labels (kets) of a qubit register."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator, Sequence, Tuple, Union

from ..errors import BoundsError, ConstructionError, EmptyInputError
from .qubit import Qubit

if TYPE_CHECKING:
    from .superposition import Superposition


def _coerce_qubit(value: object) -> Qubit:
    """Accept ``Qubit`` members, the ints 0/1 and the characters "0"/"1"."""
    if isinstance(value, Qubit):
        return value
    if isinstance(value, str) and value in ("0", "1"):
        return Qubit(int(value))
    if isinstance(value, int) and not isinstance(value, bool) and value in (0, 1):
        return Qubit(value)
    raise ConstructionError(
        f"Cannot interpret {value!r} as a qubit; expected Qubit, 0/1 or '0'/'1'."
    )


class BasisLabel:
    """
    An ordered sequence of qubits labelling one computational basis state.

    Position 0 is the leftmost qubit and the most significant bit of the
    integer index, so ``|110⟩`` has index 6. Labels are immutable and
    hashable; operations that "write" a position return a new label.

    Parameters
    ----------
    qubits:
        Non-empty sequence of qubits. Ints 0/1 and characters "0"/"1" are
        accepted and converted.

    Raises
    ------
    EmptyInputError
        If ``qubits`` is empty.
    ConstructionError
        If an element cannot be read as a qubit.
    """

    __slots__ = ("_qubits",)

    def __init__(self, qubits: Iterable[Union[Qubit, int, str]]) -> None:
        q_tuple = tuple(_coerce_qubit(q) for q in qubits)
        if not q_tuple:
            raise EmptyInputError(
                "A basis label needs at least one qubit; got an empty sequence."
            )
        self._qubits: Tuple[Qubit, ...] = q_tuple

    @classmethod
    def from_index(cls, index: int, width: int) -> "BasisLabel":
        """
        Build the label whose binary reading (MSB first) equals ``index``.

        Raises
        ------
        BoundsError
            If ``width < 1`` or ``index`` is outside ``[0, 2**width)``.
        """
        if width < 1:
            raise BoundsError(f"Label width must be >= 1, got {width}.")
        if index < 0 or index >= (1 << width):
            raise BoundsError(
                f"Index {index} is out of range for width {width} "
                f"(valid range [0, {1 << width}))."
            )
        return cls._from_index_unchecked(index, width)

    @classmethod
    def _from_index_unchecked(cls, index: int, width: int) -> "BasisLabel":
        label = cls.__new__(cls)
        label._qubits = tuple(
            Qubit.ONE if (index >> shift) & 1 else Qubit.ZERO
            for shift in range(width - 1, -1, -1)
        )
        return label

    @classmethod
    def from_string(cls, bits: str) -> "BasisLabel":
        """Parse a bitstring such as ``"0110"``; surrounding ``|`` and ``⟩``/``>`` are ignored."""
        stripped = bits.strip().lstrip("|").rstrip(">⟩")
        return cls(stripped)

    @property
    def qubits(self) -> Tuple[Qubit, ...]:
        """Read-only view of the qubits, leftmost first."""
        return self._qubits

    @property
    def num_qubits(self) -> int:
        """Register width of this label."""
        return len(self._qubits)

    def get(self, position: int) -> Qubit:
        """
        Return the qubit at ``position``.

        Raises
        ------
        BoundsError
            If ``position`` is outside ``[0, num_qubits)``.
        """
        self._check_position(position)
        return self._qubits[position]

    def invert(self, position: int) -> "BasisLabel":
        """
        Return a copy with the qubit at ``position`` flipped.

        Raises
        ------
        BoundsError
            If ``position >= num_qubits``.
        """
        self._check_position(position)
        qubits = list(self._qubits)
        qubits[position] = qubits[position].flip()
        return BasisLabel(qubits)

    def replace(self, position: int, qubit: Union[Qubit, int]) -> "BasisLabel":
        """Return a copy with ``position`` set to ``qubit``."""
        return self.insert_qubits((qubit,), (position,))

    def insert_qubits(
        self,
        qubits: Sequence[Union[Qubit, int]],
        positions: Sequence[int],
    ) -> "BasisLabel":
        """
        Return a copy where ``positions[i]`` holds ``qubits[i]``.

        Raises
        ------
        BoundsError
            If the two sequences differ in length or a position is out of range.
        """
        if len(qubits) != len(positions):
            raise BoundsError(
                f"Got {len(qubits)} qubits for {len(positions)} positions; "
                "the counts must match."
            )
        edited = list(self._qubits)
        for qubit, position in zip(qubits, positions):
            self._check_position(position)
            edited[position] = _coerce_qubit(qubit)
        return BasisLabel(edited)

    def join(self, other: Union[Qubit, "BasisLabel"]) -> "BasisLabel":
        """Append a qubit, or every qubit of another label, on the right."""
        if isinstance(other, BasisLabel):
            return BasisLabel(self._qubits + other._qubits)
        return BasisLabel(self._qubits + (_coerce_qubit(other),))

    def to_index(self) -> int:
        """Integer index of this label, leftmost qubit as most significant bit."""
        index = 0
        for qubit in self._qubits:
            index = (index << 1) | int(qubit)
        return index

    def to_superposition(self) -> "Superposition":
        """The superposition with amplitude 1 on this label."""
        from .superposition import Superposition

        return Superposition.from_label(self)

    def _check_position(self, position: int) -> None:
        if position < 0 or position >= len(self._qubits):
            raise BoundsError(
                f"Position {position} is out of bounds for a label of width "
                f"{len(self._qubits)}; it must be in [0, {len(self._qubits)})."
            )

    def __getitem__(self, position: int) -> Qubit:
        return self.get(position)

    def __len__(self) -> int:
        return len(self._qubits)

    def __iter__(self) -> Iterator[Qubit]:
        return iter(self._qubits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BasisLabel):
            return NotImplemented
        return self._qubits == other._qubits

    def __hash__(self) -> int:
        return hash(self._qubits)

    def __lt__(self, other: object) -> bool:
        # Orders labels of equal width by basis index
        if not isinstance(other, BasisLabel):
            return NotImplemented
        return (len(self), self.to_index()) < (len(other), other.to_index())

    def __str__(self) -> str:
        return "".join(str(int(q)) for q in self._qubits)

    def __repr__(self) -> str:
        return f"|{self}⟩"
