"""Local actions of the standard gates.

Each operator maps the qubits of a one-, two- or three-qubit local register
to the image superposition over that same register. Two- and three-qubit
operators take the control qubit(s) first and the target qubit last, so the
local label ``|c t⟩`` has the control as its most significant bit.

The operators are case analyses over the ``2**k`` local basis states, never
matrices; :func:`qlift.gates.dispatch.local_matrix` rebuilds a matrix from
them when one is needed.
"""

from __future__ import annotations

import cmath
import math

from ..states.qubit import Qubit
from ..states.superposition import Superposition

FRAC_1_SQRT_2 = 1.0 / math.sqrt(2.0)

ZERO = Qubit.ZERO
ONE = Qubit.ONE


def _local(*amplitudes: complex) -> Superposition:
    """Local image from its dense amplitudes."""
    return Superposition.from_amplitudes_unchecked(amplitudes)


# ----------------------------------------------------------------------
# Single-qubit gates
# ----------------------------------------------------------------------


def identity(q: Qubit) -> Superposition:
    return _local(1, 0) if q is ZERO else _local(0, 1)


def hadamard(q: Qubit) -> Superposition:
    if q is ZERO:
        return _local(FRAC_1_SQRT_2, FRAC_1_SQRT_2)
    return _local(FRAC_1_SQRT_2, -FRAC_1_SQRT_2)


def pauli_x(q: Qubit) -> Superposition:
    return _local(0, 1) if q is ZERO else _local(1, 0)


def pauli_y(q: Qubit) -> Superposition:
    return _local(0, 1j) if q is ZERO else _local(-1j, 0)


def pauli_z(q: Qubit) -> Superposition:
    return _local(1, 0) if q is ZERO else _local(0, -1)


def phase_s(q: Qubit) -> Superposition:
    return _local(1, 0) if q is ZERO else _local(0, 1j)


def phase_sdag(q: Qubit) -> Superposition:
    return _local(1, 0) if q is ZERO else _local(0, -1j)


def phase_t(q: Qubit) -> Superposition:
    if q is ZERO:
        return _local(1, 0)
    return _local(0, complex(FRAC_1_SQRT_2, FRAC_1_SQRT_2))


def phase_tdag(q: Qubit) -> Superposition:
    if q is ZERO:
        return _local(1, 0)
    return _local(0, complex(FRAC_1_SQRT_2, -FRAC_1_SQRT_2))


def x90(q: Qubit) -> Superposition:
    return _local(0, -1j) if q is ZERO else _local(-1j, 0)


def y90(q: Qubit) -> Superposition:
    return _local(0, -1) if q is ZERO else _local(1, 0)


def mx90(q: Qubit) -> Superposition:
    return _local(0, 1j) if q is ZERO else _local(1j, 0)


def my90(q: Qubit) -> Superposition:
    return _local(0, 1) if q is ZERO else _local(-1, 0)


# ----------------------------------------------------------------------
# Parameterised single-qubit gates
# ----------------------------------------------------------------------


def rx(q: Qubit, angle: float) -> Superposition:
    cos = math.cos(angle / 2)
    sin = math.sin(angle / 2)
    if q is ZERO:
        return _local(cos, -1j * sin)
    return _local(-1j * sin, cos)


def ry(q: Qubit, angle: float) -> Superposition:
    cos = math.cos(angle / 2)
    sin = math.sin(angle / 2)
    if q is ZERO:
        return _local(cos, sin)
    return _local(-sin, cos)


def rz(q: Qubit, angle: float) -> Superposition:
    if q is ZERO:
        return _local(cmath.exp(-0.5j * angle), 0)
    return _local(0, cmath.exp(0.5j * angle))


def global_phase(q: Qubit, angle: float) -> Superposition:
    factor = cmath.exp(0.5j * angle)
    return _local(factor, 0) if q is ZERO else _local(0, factor)


# ----------------------------------------------------------------------
# Two-qubit gates, (control, target)
# ----------------------------------------------------------------------


def _basis2(c: Qubit, t: Qubit, amplitude: complex = 1) -> Superposition:
    amplitudes = [0j, 0j, 0j, 0j]
    amplitudes[(int(c) << 1) | int(t)] = amplitude
    return _local(*amplitudes)


def cnot(c: Qubit, t: Qubit) -> Superposition:
    if c is ONE:
        return _basis2(c, t.flip())
    return _basis2(c, t)


def cy(c: Qubit, t: Qubit) -> Superposition:
    if c is ZERO:
        return _basis2(c, t)
    if t is ZERO:
        return _basis2(ONE, ONE, 1j)
    return _basis2(ONE, ZERO, -1j)


def cz(c: Qubit, t: Qubit) -> Superposition:
    if c is ONE and t is ONE:
        return _basis2(ONE, ONE, -1)
    return _basis2(c, t)


def swap(a: Qubit, b: Qubit) -> Superposition:
    return _basis2(b, a)


def cr(c: Qubit, t: Qubit, angle: float) -> Superposition:
    """Controlled phase: |11⟩ gains ``e^{i angle}``."""
    if c is ONE and t is ONE:
        return _basis2(ONE, ONE, cmath.exp(1j * angle))
    return _basis2(c, t)


def crk(c: Qubit, t: Qubit, k: int) -> Superposition:
    """Controlled phase ``R_k``: |11⟩ gains ``e^{2πi / 2**k}``."""
    return cr(c, t, 2 * math.pi / (2 ** k))


# ----------------------------------------------------------------------
# Three-qubit gates, (control_0, control_1, target)
# ----------------------------------------------------------------------


def toffoli(c0: Qubit, c1: Qubit, t: Qubit) -> Superposition:
    if c0 is ONE and c1 is ONE:
        t = t.flip()
    amplitudes = [0j] * 8
    amplitudes[(int(c0) << 2) | (int(c1) << 1) | int(t)] = 1
    return _local(*amplitudes)


__all__ = [
    "FRAC_1_SQRT_2",
    "identity",
    "hadamard",
    "pauli_x",
    "pauli_y",
    "pauli_z",
    "phase_s",
    "phase_sdag",
    "phase_t",
    "phase_tdag",
    "x90",
    "y90",
    "mx90",
    "my90",
    "rx",
    "ry",
    "rz",
    "global_phase",
    "cnot",
    "cy",
    "cz",
    "swap",
    "cr",
    "crk",
    "toffoli",
]
