"""A CCC-NOT gate written as a custom function.

The controls sit on wires 0, 1 and 2 and the target on wire 3. The custom
function only handles the two basis states where every control is set and
returns None for all others, which leaves those terms untouched.
"""

from __future__ import annotations

from typing import Optional

import qlift as ql
from qlift.states import BasisLabel


def cccnot(label: BasisLabel) -> Optional[BasisLabel]:
    """Flip the last qubit when the first three are all 1."""
    if str(label)[:3] == "111":
        return label.invert(3)
    return None


def main() -> None:
    circuit = ql.Circuit(4)
    circuit.add_repeating_gate(ql.x(), [0, 1, 2])
    circuit.add_gate(ql.custom(cccnot, [0, 1, 2], "X"), 3)

    circuit.toggle_simulation_progress()
    simulated = circuit.simulate()

    print(f"CCC-NOT is unitary: {ql.is_gate_unitary(circuit.gates[-1])}")
    print("\nStates observed over 50 measurements:")
    for label, count in simulated.measure_all(50).items():
        print(f"{label!r} : {count}")


if __name__ == "__main__":
    main()
