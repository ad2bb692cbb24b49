"""The quantum Fourier transform, wrapped as a single custom gate.

The custom function builds a small circuit of Hadamards and controlled
``R_k`` phases on its local register and simulates it with the local label
as the initial state, so a whole sub-circuit acts as one gate.
"""

from __future__ import annotations

from typing import Optional

import qlift as ql
from qlift.states import BasisLabel, Superposition


def qft(label: BasisLabel) -> Optional[Superposition]:
    """QFT (without the final qubit reversal) of a basis label."""
    n = label.num_qubits
    circuit = ql.Circuit(n)
    for pos in range(n):
        circuit.add_gate(ql.h(), pos)
        for k in range(2, n - pos + 1):
            circuit.add_gate(ql.crk(k, pos + k - 1), pos)
    circuit.change_register(label.to_superposition())
    return circuit.simulate().take_state()


def main() -> None:
    circuit = ql.Circuit(3)
    circuit.add_repeating_gate(ql.x(), [1, 2])
    circuit.add_gate(ql.custom(qft, [0, 1], "QFT"), 2)

    state = circuit.simulate().get_state()
    print("The final superposition is:")
    for label, amplitude in state.to_mapping().items():
        print(f"{label!r} : {amplitude:.4f}")
    print(f"\nQFT gate is unitary: {ql.is_gate_unitary(circuit.gates[-1])}")


if __name__ == "__main__":
    main()
