"""The two-valued basis unit."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .basis import BasisLabel


class Qubit(IntEnum):
    """A computational basis value, |0⟩ or |1⟩.

    Being an ``IntEnum``, a qubit compares equal to its bit value, so
    ``Qubit.ONE == 1`` and ``Qubit(0) is Qubit.ZERO``.
    """

    ZERO = 0
    ONE = 1

    def flip(self) -> "Qubit":
        """Return the opposite basis value."""
        return Qubit.ONE if self is Qubit.ZERO else Qubit.ZERO

    def join(self, other: Union["Qubit", "BasisLabel"]) -> "BasisLabel":
        """Kronecker product with a qubit or label, e.g. |0⟩ ⊗ |1⟩ = |01⟩."""
        from .basis import BasisLabel

        return BasisLabel((self,)).join(other)

    def as_label(self) -> "BasisLabel":
        """Return this qubit as a width-one basis label."""
        from .basis import BasisLabel

        return BasisLabel((self,))

    def __str__(self) -> str:
        return str(int(self))

    def __repr__(self) -> str:
        return f"|{int(self)}⟩"
