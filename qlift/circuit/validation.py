"""Placement checks and column normalisation for the circuit builder.

The simulation engine assumes every column it receives is well formed:
positions and control wires are in range, a gate never controls on its own
wire, and a multi-qubit gate never shares its column with another
non-identity gate. The helpers here establish those preconditions when
gates are placed.
"""

from __future__ import annotations

from typing import List, Sequence

from ..errors import CircuitError
from ..gates.spec import Gate, identity


def check_position(position: int, num_qubits: int) -> None:
    """Raise CircuitError unless ``0 <= position < num_qubits``."""
    if position < 0 or position >= num_qubits:
        raise CircuitError(
            f"Position {position} is out of bounds for a circuit of "
            f"{num_qubits} qubits."
        )


def _is_printable_ascii(text: str) -> bool:
    return all(32 <= ord(ch) < 127 for ch in text)


def check_gate(gate: Gate, position: int, num_qubits: int) -> None:
    """
    Validate one gate placed on wire ``position``.

    Raises
    ------
    CircuitError
        If the position or a control wire is out of range, a control wire is
        repeated or equals ``position``, or a custom gate's name is empty or
        not printable ASCII.
    """
    check_position(position, num_qubits)

    seen = set()
    for control in gate.controls:
        if control < 0 or control >= num_qubits:
            raise CircuitError(
                f"{gate!r} at position {position} has control wire {control}, "
                f"outside the circuit's {num_qubits} qubits."
            )
        if control == position:
            raise CircuitError(
                f"{gate!r} at position {position} uses its own wire as a control."
            )
        if control in seen:
            raise CircuitError(
                f"{gate!r} at position {position} lists control wire {control} twice."
            )
        seen.add(control)

    if gate.is_custom:
        name = gate.name
        if not isinstance(name, str) or not name or not _is_printable_ascii(name):
            raise CircuitError(
                f"Custom gate name {name!r} must be non-empty printable ASCII."
            )


def split_column(column: Sequence[Gate]) -> List[List[Gate]]:
    """
    Split a column so no multi-qubit gate shares it with another gate.

    If the column holds a multi-qubit gate next to any other non-identity
    gate, the result is the residual column (single-qubit gates only,
    identity elsewhere) followed by one column per multi-qubit gate, in
    wire order. Otherwise the column is returned unchanged.

    Parameters
    ----------
    column:
        One gate per wire.

    Returns
    -------
    columns:
        One or more columns, each of the same width as ``column``.
    """
    width = len(column)
    active = [p for p, gate in enumerate(column) if not gate.is_identity]
    multi = [p for p in active if column[p].is_multi_qubit]

    if not multi or len(active) == 1:
        return [list(column)]

    residual = [identity() if column[p].is_multi_qubit else column[p] for p in range(width)]
    columns = [residual]
    for p in multi:
        own = [identity()] * width
        own[p] = column[p]
        columns.append(own)
    return columns


__all__ = ["check_position", "check_gate", "split_column"]
