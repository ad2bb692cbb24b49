"""Post-selection with a deliberately non-unitary custom gate.

The gate "P" keeps |0⟩ on wire 1, rescaled by √2, and discards |1⟩. Applied
after Hadamards on every wire, the result is still a normalised state, but
only because the rescaling matches the discarded probability; in general
such gates leak probability, which measurement reports as a warning.
"""

from __future__ import annotations

import math
from typing import Optional

import qlift as ql
from qlift.states import BasisLabel, Qubit, Superposition


def post_select(label: BasisLabel) -> Optional[Superposition]:
    if label[0] is Qubit.ZERO:
        return Superposition.from_amplitudes_unchecked([math.sqrt(2.0), 0.0])
    return Superposition.from_amplitudes_unchecked([0.0, 0.0])


def main() -> None:
    circuit = ql.Circuit(3)
    circuit.add_repeating_gate(ql.h(), [0, 1, 2])
    circuit.add_gate(ql.custom(post_select, [], "P"), 1)

    simulated = circuit.simulate()
    state = simulated.get_state()

    print("The final superposition is:")
    for label, amplitude in state:
        print(f"{label!r} : {amplitude:.4f}")
    print(f"\nTotal probability: {state.total_probability():.6f}")


if __name__ == "__main__":
    main()
