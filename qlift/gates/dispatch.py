"""Mapping from gate descriptors to arity-tagged local operators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

import torch

from ..errors import SimulationError
from ..states.basis import BasisLabel
from ..states.superposition import DEFAULT_DTYPE, Superposition
from . import standard
from .spec import Gate, GateKind


class Arity(Enum):
    """How a local operator is called."""

    IDENTITY = "identity"
    SINGLE = "single"
    SINGLE_ARG = "single_arg"
    DOUBLE = "double"
    DOUBLE_ARG = "double_arg"
    DOUBLE_ARG_INT = "double_arg_int"
    TRIPLE = "triple"
    CUSTOM = "custom"


_SINGLE: Dict[GateKind, Callable] = {
    GateKind.H: standard.hadamard,
    GateKind.X: standard.pauli_x,
    GateKind.Y: standard.pauli_y,
    GateKind.Z: standard.pauli_z,
    GateKind.S: standard.phase_s,
    GateKind.SDAG: standard.phase_sdag,
    GateKind.T: standard.phase_t,
    GateKind.TDAG: standard.phase_tdag,
    GateKind.X90: standard.x90,
    GateKind.Y90: standard.y90,
    GateKind.MX90: standard.mx90,
    GateKind.MY90: standard.my90,
}

_SINGLE_ARG: Dict[GateKind, Callable] = {
    GateKind.RX: standard.rx,
    GateKind.RY: standard.ry,
    GateKind.RZ: standard.rz,
    GateKind.PHASE: standard.global_phase,
}

_DOUBLE: Dict[GateKind, Callable] = {
    GateKind.CNOT: standard.cnot,
    GateKind.CZ: standard.cz,
    GateKind.CY: standard.cy,
    GateKind.SWAP: standard.swap,
}


@dataclass(frozen=True)
class DispatchEntry:
    """
    A gate resolved to its local operator.

    Attributes
    ----------
    gate:
        The dispatched gate.
    arity:
        Calling convention of ``operator``.
    operator:
        The local action. Standard operators take qubits (controls first,
        target last) plus an optional parameter; the custom operator is the
        user function and takes the whole local label.
    """

    gate: Gate
    arity: Arity
    operator: Callable

    def acting_positions(self, target: int) -> Tuple[int, ...]:
        """Wires read by the gate: controls in declared order, then ``target``."""
        return self.gate.controls + (target,)

    def apply(self, local_label: BasisLabel) -> Optional[Superposition]:
        """
        Image of ``local_label`` under the gate.

        Returns ``None`` only for custom gates that leave the term unchanged.

        Raises
        ------
        SimulationError
            If a custom gate returns an object that is not a superposition,
            basis label or ``None``, or one whose width differs from the
            local label.
        """
        arity = self.arity
        q = local_label.qubits
        if arity is Arity.SINGLE:
            return self.operator(q[0])
        if arity is Arity.SINGLE_ARG:
            return self.operator(q[0], self.gate.angle)
        if arity is Arity.DOUBLE:
            return self.operator(q[0], q[1])
        if arity is Arity.DOUBLE_ARG:
            return self.operator(q[0], q[1], self.gate.angle)
        if arity is Arity.DOUBLE_ARG_INT:
            return self.operator(q[0], q[1], self.gate.k)
        if arity is Arity.TRIPLE:
            return self.operator(q[0], q[1], q[2])
        if arity is Arity.IDENTITY:
            return standard.identity(q[0])
        return self._apply_custom(local_label)

    def _apply_custom(self, local_label: BasisLabel) -> Optional[Superposition]:
        result = self.operator(local_label)
        if result is None:
            return None
        if isinstance(result, BasisLabel):
            result = result.to_superposition()
        if not isinstance(result, Superposition):
            raise SimulationError(
                f"Custom gate {self.gate!r} returned {type(result).__name__}; "
                "expected a Superposition, a BasisLabel or None."
            )
        if result.product_dim != local_label.num_qubits:
            raise SimulationError(
                f"Custom gate {self.gate!r} returned a state of width "
                f"{result.product_dim} for the local label {local_label!r} of "
                f"width {local_label.num_qubits}."
            )
        return result


def dispatch(gate: Gate) -> DispatchEntry:
    """Resolve ``gate`` to its arity tag and local operator."""
    kind = gate.kind
    if kind is GateKind.ID:
        return DispatchEntry(gate, Arity.IDENTITY, standard.identity)
    if kind in _SINGLE:
        return DispatchEntry(gate, Arity.SINGLE, _SINGLE[kind])
    if kind in _SINGLE_ARG:
        return DispatchEntry(gate, Arity.SINGLE_ARG, _SINGLE_ARG[kind])
    if kind in _DOUBLE:
        return DispatchEntry(gate, Arity.DOUBLE, _DOUBLE[kind])
    if kind is GateKind.CR:
        return DispatchEntry(gate, Arity.DOUBLE_ARG, standard.cr)
    if kind is GateKind.CRK:
        return DispatchEntry(gate, Arity.DOUBLE_ARG_INT, standard.crk)
    if kind is GateKind.TOFFOLI:
        return DispatchEntry(gate, Arity.TRIPLE, standard.toffoli)
    if kind is GateKind.CUSTOM:
        return DispatchEntry(gate, Arity.CUSTOM, gate.function)
    raise ValueError(f"Unknown gate kind {kind!r}.")


def local_matrix(gate: Gate) -> torch.Tensor:
    """
    The ``2**k x 2**k`` matrix of a gate's local action, ``k = gate.arity``.

    Column ``j`` is the image of the local basis state with index ``j``. A
    custom gate returning ``None`` contributes the identity column.

    Returns
    -------
    matrix:
        Complex128 tensor in the local basis, control qubits most significant.
    """
    entry = dispatch(gate)
    width = gate.arity
    dim = 1 << width
    matrix = torch.zeros((dim, dim), dtype=DEFAULT_DTYPE)
    for j in range(dim):
        image = entry.apply(BasisLabel._from_index_unchecked(j, width))
        if image is None:
            matrix[j, j] = 1.0
        else:
            matrix[:, j] = image.amplitudes
    return matrix


__all__ = ["Arity", "DispatchEntry", "dispatch", "local_matrix"]
