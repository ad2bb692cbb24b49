"""The outcome of running a circuit."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import torch

from ..gates.spec import Gate
from ..logging import get_logger
from ..states.basis import BasisLabel
from ..states.superposition import NORMALIZATION_TOLERANCE, Superposition

logger = get_logger(__name__)


class SimulatedCircuit:
    """
    A circuit that has been simulated: an immutable gate log plus the final state.

    Obtained from :meth:`qlift.circuit.Circuit.simulate`. There is no way to
    simulate it again; build or copy a new :class:`~qlift.circuit.Circuit`
    instead.
    """

    def __init__(
        self,
        gates: Tuple[Gate, ...],
        num_qubits: int,
        state: Superposition,
        print_progress: bool = False,
    ) -> None:
        self._gates = tuple(gates)
        self._num_qubits = num_qubits
        self._state = state
        self._print_progress = print_progress
        self._warnings_enabled = True

    @property
    def gates(self) -> Tuple[Gate, ...]:
        """Wire-major gate sequence that was simulated."""
        return self._gates

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def print_progress(self) -> bool:
        return self._print_progress

    @property
    def warnings_enabled(self) -> bool:
        return self._warnings_enabled

    def toggle_warnings(self) -> "SimulatedCircuit":
        """Switch measurement warnings on or off."""
        self._warnings_enabled = not self._warnings_enabled
        return self

    def get_state(self) -> Superposition:
        """The final state itself. Do not mutate it."""
        return self._state

    def take_state(self) -> Superposition:
        """An independent copy of the final state."""
        return self._state.copy()

    def has_custom_gates(self) -> bool:
        return any(gate.is_custom for gate in self._gates)

    def measure_all(
        self,
        shots: int,
        generator: Optional[torch.Generator] = None,
    ) -> Dict[BasisLabel, int]:
        """
        Measure the final state ``shots`` times and count the outcomes.

        Parameters
        ----------
        shots:
            Number of independent collapses.
        generator:
            Optional ``torch.Generator`` for reproducible results.

        Returns
        -------
        counts:
            Outcome label to number of occurrences. Shots that failed to
            collapse (see :meth:`Superposition.measure`) are not counted.

        Raises
        ------
        ValueError
            If ``shots < 1``.
        """
        if shots < 1:
            raise ValueError(f"shots must be >= 1, got {shots}.")

        if self._warnings_enabled and self.has_custom_gates():
            total = self._state.total_probability()
            if abs(total - 1.0) >= NORMALIZATION_TOLERANCE:
                logger.warning(
                    f"The circuit contains custom gates and its final state has total "
                    f"probability {total:.6f}; the custom gates may not be unitary."
                )

        counts: Dict[BasisLabel, int] = {}
        failed = 0
        for _ in range(shots):
            outcome = self._state.measure(generator)
            if outcome is None:
                failed += 1
                continue
            counts[outcome] = counts.get(outcome, 0) + 1

        if failed and self._warnings_enabled:
            logger.warning(
                f"{failed} of {shots} measurements did not collapse onto a basis "
                "state; the register does not conserve probability."
            )
        return counts

    def __repr__(self) -> str:
        return (
            f"SimulatedCircuit(num_qubits={self._num_qubits}, "
            f"num_gates={sum(not g.is_identity for g in self._gates)})"
        )


__all__ = ["SimulatedCircuit"]
