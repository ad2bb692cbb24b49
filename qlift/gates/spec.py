"""Gate descriptors.

A :class:`Gate` is an immutable value describing *what* acts on a wire: its
kind, the control wires it reads and any numeric parameter. Where it is
placed is decided by the circuit, and how it acts is decided by
:mod:`qlift.gates.dispatch`.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple, Union

from ..errors import CircuitError
from ..states.basis import BasisLabel
from ..states.superposition import Superposition

# Signature of a user-supplied gate. The argument is the local label formed
# from the control qubits (in declared order) followed by the target qubit.
CustomFunction = Callable[[BasisLabel], Optional[Union[Superposition, BasisLabel]]]


class GateKind(Enum):
    """Closed set of gate variants."""

    ID = "Id"
    H = "H"
    X = "X"
    Y = "Y"
    Z = "Z"
    S = "S"
    SDAG = "Sdag"
    T = "T"
    TDAG = "Tdag"
    X90 = "X90"
    Y90 = "Y90"
    MX90 = "MX90"
    MY90 = "MY90"
    RX = "Rx"
    RY = "Ry"
    RZ = "Rz"
    PHASE = "Phase"
    CNOT = "CNot"
    CZ = "CZ"
    CY = "CY"
    SWAP = "Swap"
    CR = "CR"
    CRK = "CRk"
    TOFFOLI = "Toffoli"
    CUSTOM = "Custom"


_ANGLE_KINDS = frozenset({GateKind.RX, GateKind.RY, GateKind.RZ, GateKind.PHASE, GateKind.CR})

_CONTROL_COUNT = {
    GateKind.CNOT: 1,
    GateKind.CZ: 1,
    GateKind.CY: 1,
    GateKind.SWAP: 1,
    GateKind.CR: 1,
    GateKind.CRK: 1,
    GateKind.TOFFOLI: 2,
}


@dataclass(frozen=True)
class Gate:
    """
    One gate of the vocabulary.

    Attributes
    ----------
    kind:
        Which variant this is.
    controls:
        Control wire indices, in declared order. For ``Swap`` the single
        "control" is the partner wire that is exchanged with the target.
    angle:
        Rotation or phase angle in radians (Rx, Ry, Rz, Phase, CR).
    k:
        Integer parameter of ``CRk``; the applied phase is ``2π / 2**k``.
    function:
        The user callable of a custom gate.
    name:
        Display name of a custom gate.
    """

    kind: GateKind
    controls: Tuple[int, ...] = ()
    angle: Optional[float] = None
    k: Optional[int] = None
    function: Optional[CustomFunction] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        # Fields must match the kind; the engine trusts them without checking
        if not isinstance(self.kind, GateKind):
            raise TypeError(f"Gate kind must be a GateKind, got {self.kind!r}.")
        object.__setattr__(self, "controls", tuple(int(c) for c in self.controls))

        if self.kind is GateKind.CUSTOM:
            if not callable(self.function):
                raise TypeError(
                    f"Custom gate function must be callable, got {type(self.function).__name__}."
                )
            return

        expected = _CONTROL_COUNT.get(self.kind, 0)
        if len(self.controls) != expected:
            raise CircuitError(
                f"{self.kind.value} takes {expected} control wire(s), got {len(self.controls)}."
            )
        if self.kind in _ANGLE_KINDS:
            if not isinstance(self.angle, numbers.Real) or isinstance(self.angle, bool):
                raise CircuitError(f"{self.kind.value} needs a real angle, got {self.angle!r}.")
            object.__setattr__(self, "angle", float(self.angle))
        elif self.kind is GateKind.CRK:
            if not isinstance(self.k, numbers.Integral) or isinstance(self.k, bool):
                raise CircuitError(f"CRk needs an integer k, got {self.k!r}.")
            object.__setattr__(self, "k", int(self.k))

    @property
    def is_identity(self) -> bool:
        return self.kind is GateKind.ID

    @property
    def is_custom(self) -> bool:
        return self.kind is GateKind.CUSTOM

    @property
    def is_multi_qubit(self) -> bool:
        """True if the gate reads at least one wire besides its own."""
        return len(self.controls) > 0

    @property
    def arity(self) -> int:
        """Width of the local label the gate acts on."""
        return len(self.controls) + 1

    def __repr__(self) -> str:
        if self.kind is GateKind.CUSTOM:
            return str(self.name)
        label = self.kind.value
        if self.kind in _ANGLE_KINDS:
            params = [f"{self.angle:.4g}"]
        elif self.kind is GateKind.CRK:
            params = [str(self.k)]
        else:
            params = []
        params.extend(str(c) for c in self.controls)
        if not params:
            return label
        return f"{label}({', '.join(params)})"


def identity() -> Gate:
    return Gate(GateKind.ID)


def h() -> Gate:
    return Gate(GateKind.H)


def x() -> Gate:
    return Gate(GateKind.X)


def y() -> Gate:
    return Gate(GateKind.Y)


def z() -> Gate:
    return Gate(GateKind.Z)


def s() -> Gate:
    return Gate(GateKind.S)


def sdag() -> Gate:
    return Gate(GateKind.SDAG)


def t() -> Gate:
    return Gate(GateKind.T)


def tdag() -> Gate:
    return Gate(GateKind.TDAG)


def x90() -> Gate:
    """Rotation of +π/2 about the x axis."""
    return Gate(GateKind.X90)


def y90() -> Gate:
    """Rotation of +π/2 about the y axis."""
    return Gate(GateKind.Y90)


def mx90() -> Gate:
    """Rotation of -π/2 about the x axis."""
    return Gate(GateKind.MX90)


def my90() -> Gate:
    """Rotation of -π/2 about the y axis."""
    return Gate(GateKind.MY90)


def rx(angle: float) -> Gate:
    return Gate(GateKind.RX, angle=float(angle))


def ry(angle: float) -> Gate:
    return Gate(GateKind.RY, angle=float(angle))


def rz(angle: float) -> Gate:
    return Gate(GateKind.RZ, angle=float(angle))


def phase(angle: float) -> Gate:
    """Global phase ``e^{i angle/2}`` on the target wire."""
    return Gate(GateKind.PHASE, angle=float(angle))


def cnot(control: int) -> Gate:
    return Gate(GateKind.CNOT, controls=(control,))


def cz(control: int) -> Gate:
    return Gate(GateKind.CZ, controls=(control,))


def cy(control: int) -> Gate:
    return Gate(GateKind.CY, controls=(control,))


def swap(partner: int) -> Gate:
    """Exchange the target wire with ``partner``."""
    return Gate(GateKind.SWAP, controls=(partner,))


def cr(angle: float, control: int) -> Gate:
    """Controlled phase ``e^{i angle}`` on |11⟩."""
    return Gate(GateKind.CR, controls=(control,), angle=float(angle))


def crk(k: int, control: int) -> Gate:
    """Controlled phase ``e^{2πi / 2**k}`` on |11⟩, as used by the QFT."""
    return Gate(GateKind.CRK, controls=(control,), k=int(k))


def toffoli(control_0: int, control_1: int) -> Gate:
    return Gate(GateKind.TOFFOLI, controls=(control_0, control_1))


def custom(function: CustomFunction, controls: Sequence[int] = (), name: str = "Custom") -> Gate:
    """
    Wrap a user function as a gate.

    Parameters
    ----------
    function:
        Called with the local label (control qubits in the given order, then
        the target qubit). It returns the image of that label as a
        :class:`Superposition` or :class:`BasisLabel` of the same width, or
        ``None`` to leave the basis term unchanged.
    controls:
        Wires read besides the target. May be empty.
    name:
        Printable ASCII display name, checked when the gate is placed.

    Raises
    ------
    TypeError
        If ``function`` is not callable.
    """
    if not callable(function):
        raise TypeError(f"Custom gate function must be callable, got {type(function).__name__}.")
    return Gate(
        GateKind.CUSTOM,
        controls=tuple(int(c) for c in controls),
        function=function,
        name=name,
    )


__all__ = [
    "CustomFunction",
    "GateKind",
    "Gate",
    "identity",
    "h",
    "x",
    "y",
    "z",
    "s",
    "sdag",
    "t",
    "tdag",
    "x90",
    "y90",
    "mx90",
    "my90",
    "rx",
    "ry",
    "rz",
    "phase",
    "cnot",
    "cz",
    "cy",
    "swap",
    "cr",
    "crk",
    "toffoli",
    "custom",
]
