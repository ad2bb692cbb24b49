"""A NOT gate with any number of controls, as one custom function.

Same idea as ``custom_gate.py`` but the function works for every width: the
target is flipped when all control qubits are 1.
"""

from __future__ import annotations

from typing import Optional

import qlift as ql
from qlift.states import BasisLabel, Qubit

CIRCUIT_SIZE = 6


def multi_cnot(label: BasisLabel) -> Optional[BasisLabel]:
    controls = label.qubits[:-1]
    if all(q is Qubit.ONE for q in controls):
        return label.invert(label.num_qubits - 1)
    return None


def main() -> None:
    circuit = ql.Circuit(CIRCUIT_SIZE)
    circuit.add_repeating_gate(ql.x(), range(CIRCUIT_SIZE))
    circuit.add_gate(ql.custom(multi_cnot, range(CIRCUIT_SIZE - 1), "X"), CIRCUIT_SIZE - 1)

    simulated = circuit.simulate()

    print("States observed over 50 measurements:")
    for label, count in simulated.measure_all(50).items():
        print(f"{label!r} : {count}")


if __name__ == "__main__":
    main()
