"""Circuit builder."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..errors import CircuitError, DimensionError
from ..gates.spec import Gate, identity
from ..logging import get_logger
from ..simulation.engine import simulate as run_engine
from ..simulation.result import SimulatedCircuit
from ..states.superposition import Superposition
from .validation import check_gate, check_position, split_column

logger = get_logger(__name__)


class Circuit:
    """
    An ordered list of gate columns over ``num_qubits`` wires.

    Every column holds exactly one gate per wire, bare wires being padded
    with the identity. Adding methods return the circuit, so calls chain::

        circuit = Circuit(2).add_gate(h(), 0).add_gate(cnot(0), 1)

    Parameters
    ----------
    num_qubits:
        Width of the register.

    Raises
    ------
    CircuitError
        If ``num_qubits < 1``.
    """

    def __init__(self, num_qubits: int) -> None:
        if num_qubits < 1:
            raise CircuitError("Circuit requires num_qubits >= 1.")

        self._num_qubits = int(num_qubits)
        self._columns: List[List[Gate]] = []
        self._register: Optional[Superposition] = None
        self._print_progress = False

    @property
    def num_qubits(self) -> int:
        """Return the number of wires."""
        return self._num_qubits

    @property
    def columns(self) -> Tuple[Tuple[Gate, ...], ...]:
        """Return a read-only view of the columns."""
        return tuple(tuple(col) for col in self._columns)

    @property
    def gates(self) -> Tuple[Gate, ...]:
        """All gates, wire-major: column 0 for every wire, then column 1, ..."""
        return tuple(gate for col in self._columns for gate in col)

    @property
    def register(self) -> Optional[Superposition]:
        """The custom initial state, or None for |0...0⟩."""
        return self._register

    @property
    def print_progress(self) -> bool:
        return self._print_progress

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def _push_column(self, column: List[Gate]) -> None:
        for position, gate in enumerate(column):
            if not gate.is_identity:
                check_gate(gate, position, self._num_qubits)
        parts = split_column(column)
        if len(parts) > 1:
            logger.debug(f"Split a column with multi-qubit gates into {len(parts)} columns.")
        self._columns.extend(parts)

    def add_gate(self, gate: Gate, position: int) -> "Circuit":
        """
        Add ``gate`` on wire ``position`` in a new column.

        Raises
        ------
        CircuitError
            If the position, the control wires or a custom name are invalid.
        """
        check_position(position, self._num_qubits)
        column = [identity()] * self._num_qubits
        column[position] = gate
        self._push_column(column)
        return self

    def add_gates(self, gates: Sequence[Gate]) -> "Circuit":
        """
        Add a full column, one gate per wire.

        Multi-qubit gates sharing the column with other gates are moved to
        columns of their own after the remaining single-qubit gates.

        Raises
        ------
        CircuitError
            If ``len(gates)`` differs from the number of wires or a gate is invalid.
        """
        column = list(gates)
        if len(column) != self._num_qubits:
            raise CircuitError(
                f"A column needs {self._num_qubits} gates, got {len(column)}."
            )
        self._push_column(column)
        return self

    def add_gates_with_positions(self, gates: Mapping[int, Gate]) -> "Circuit":
        """Add one column from ``{position: gate}``; other wires get the identity."""
        column = [identity()] * self._num_qubits
        for position, gate in gates.items():
            check_position(position, self._num_qubits)
            column[position] = gate
        self._push_column(column)
        return self

    def add_repeating_gate(self, gate: Gate, positions: Iterable[int]) -> "Circuit":
        """
        Add ``gate`` on every wire of ``positions`` in one column.

        Raises
        ------
        CircuitError
            If a position repeats or is out of range.
        """
        positions = list(positions)
        if len(set(positions)) != len(positions):
            raise CircuitError(f"Positions {positions} contain duplicates.")
        return self.add_gates_with_positions({p: gate for p in positions})

    def change_register(self, register: Superposition) -> "Circuit":
        """
        Start the simulation from ``register`` instead of |0...0⟩.

        Raises
        ------
        DimensionError
            If the register width differs from the circuit width.
        """
        if register.product_dim != self._num_qubits:
            raise DimensionError(
                f"Register has {register.product_dim} qubits, but the circuit has "
                f"{self._num_qubits}."
            )
        self._register = register.copy()
        return self

    def set_print_progress(self, enabled: bool) -> "Circuit":
        """Log one INFO line per gate while simulating, whatever the qlift log level."""
        self._print_progress = bool(enabled)
        return self

    def toggle_simulation_progress(self) -> "Circuit":
        self._print_progress = not self._print_progress
        return self

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def copy(self) -> "Circuit":
        """Return an independent copy of this circuit."""
        new = Circuit(self._num_qubits)
        new._columns = [list(col) for col in self._columns]
        new._register = None if self._register is None else self._register.copy()
        new._print_progress = self._print_progress
        return new

    def __len__(self) -> int:
        """Return the number of columns."""
        return len(self._columns)

    def num_gates(self) -> int:
        """Return the number of non-identity gates."""
        return sum(not gate.is_identity for gate in self.gates)

    def gate_counts(self) -> Dict[str, int]:
        """Return a dictionary mapping gate names to their counts, identities excluded."""
        counts: Dict[str, int] = {}
        for gate in self.gates:
            if gate.is_identity:
                continue
            name = gate.name if gate.is_custom else gate.kind.value
            counts[name] = counts.get(name, 0) + 1
        return counts

    def depth(self) -> int:
        """Return the number of columns."""
        return len(self._columns)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def simulate(self) -> SimulatedCircuit:
        """
        Run the circuit and return the simulated result.

        The builder is not modified, so it may be simulated again or
        extended further.
        """
        register = None if self._register is None else self._register.copy()
        gates = self.gates
        state = run_engine(
            gates,
            self._num_qubits,
            register=register,
            print_progress=self._print_progress,
        )
        return SimulatedCircuit(gates, self._num_qubits, state, self._print_progress)

    def __repr__(self) -> str:
        return f"Circuit(num_qubits={self._num_qubits}, depth={self.depth()})"


__all__ = ["Circuit"]
