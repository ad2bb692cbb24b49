"""End-to-end circuits: Grover search and a QFT built from a nested circuit."""

from __future__ import annotations

from typing import Optional

import torch

import qlift as ql
from conftest import FRAC_1_SQRT_2 as R
from conftest import assert_amplitudes, sparse_amplitudes
from qlift.states import BasisLabel, Superposition


def _grover_circuit() -> ql.Circuit:
    circuit = ql.Circuit(3)
    circuit.add_repeating_gate(ql.h(), [0, 1, 2])
    circuit.add_gate(ql.cz(1), 2)
    circuit.add_repeating_gate(ql.h(), [0, 1, 2])
    circuit.add_repeating_gate(ql.x(), [0, 1, 2])
    circuit.add_gate(ql.h(), 2)
    circuit.add_gate(ql.toffoli(0, 1), 2)
    circuit.add_gate(ql.h(), 2)
    circuit.add_repeating_gate(ql.x(), [0, 1, 2])
    circuit.add_repeating_gate(ql.h(), [0, 1, 2])
    return circuit


def test_grover_final_state() -> None:
    """One Grover iteration moves all amplitude onto |011⟩ and |111⟩."""
    state = _grover_circuit().simulate().get_state()
    assert_amplitudes(state, sparse_amplitudes(3, {3: -R, 7: -R}))
    assert abs(ql.total_probability(state) - 1.0) < 1e-9


def test_grover_measurement() -> None:
    """Measurement only ever yields the marked states, about evenly."""
    simulated = _grover_circuit().simulate()
    counts = simulated.measure_all(500, generator=torch.Generator().manual_seed(0))
    bitstrings = ql.counts_as_bitstrings(counts)
    assert set(bitstrings) == {"011", "111"}
    assert bitstrings["011"] > 200
    assert bitstrings["111"] > 200


def qft(label: BasisLabel) -> Optional[Superposition]:
    n = label.num_qubits
    circuit = ql.Circuit(n)
    for pos in range(n):
        circuit.add_gate(ql.h(), pos)
        for k in range(2, n - pos + 1):
            circuit.add_gate(ql.crk(k, pos + k - 1), pos)
    circuit.change_register(label.to_superposition())
    return circuit.simulate().take_state()


def test_qft_as_custom_gate() -> None:
    """A custom gate may itself simulate a circuit on its local label."""
    circuit = ql.Circuit(3)
    circuit.add_repeating_gate(ql.x(), [1, 2])
    circuit.add_gate(ql.custom(qft, [0, 1], "QFT"), 2)

    state = circuit.simulate().get_state()
    half_r = R / 2
    assert_amplitudes(
        state,
        [
            half_r,
            -half_r,
            -1j * half_r,
            1j * half_r,
            -0.25 + 0.25j,
            0.25 - 0.25j,
            0.25 + 0.25j,
            -0.25 - 0.25j,
        ],
    )
    assert ql.is_gate_unitary(circuit.gates[-1])


def test_top_level_simulate_matches_builder() -> None:
    """The engine entry point and the builder agree."""
    circuit = _grover_circuit()
    direct = ql.simulate(circuit.gates, circuit.num_qubits)
    assert direct.allclose(circuit.simulate().get_state())
