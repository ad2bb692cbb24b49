"""Benchmark circuit simulation and measurement."""

import time
from typing import Dict

import numpy as np
import torch

import qlift as ql
from qlift.simulation import apply_gate
from qlift.states import Superposition


def benchmark_gate_application(
    n_qubits: int,
    n_gates: int = 200,
    seed: int = 0,
) -> Dict[str, float]:
    """Benchmark gate application on a dense register.

    Args:
        n_qubits: Number of qubits.
        n_gates: Number of gates to apply.
        seed: Seed for the gate/wire choice.

    Returns:
        Dictionary with timing results.
    """
    rng = np.random.default_rng(seed)
    register = Superposition.zero(n_qubits)

    # Spread amplitude over every basis term first, so each gate touches 2**n terms
    for wire in range(n_qubits):
        apply_gate(ql.h(), wire, register)

    singles = [ql.h(), ql.x(), ql.y(), ql.z(), ql.t(), ql.rx(0.3)]

    start = time.perf_counter()
    for i in range(n_gates):
        target = int(rng.integers(0, n_qubits))
        if i % 3 == 2 and n_qubits > 1:
            control = (target + 1) % n_qubits
            gate = ql.cnot(control)
        else:
            gate = singles[i % len(singles)]
        apply_gate(gate, target, register)
    end = time.perf_counter()

    total_time = end - start
    return {
        "n_qubits": n_qubits,
        "n_gates": n_gates,
        "total_time_sec": total_time,
        "time_per_gate_sec": total_time / n_gates,
        "gates_per_sec": n_gates / total_time,
    }


def benchmark_measurement(
    n_qubits: int,
    shots: int = 1000,
) -> Dict[str, float]:
    """Benchmark repeated single-shot measurement against vectorised sampling.

    Args:
        n_qubits: Number of qubits.
        shots: Number of shots per method.

    Returns:
        Dictionary with timing results.
    """
    circuit = ql.Circuit(n_qubits).add_repeating_gate(ql.h(), range(n_qubits))
    state = circuit.simulate().get_state()
    generator = torch.Generator().manual_seed(0)

    start = time.perf_counter()
    ql.repeat_measurement(state, shots, generator=generator)
    repeated = time.perf_counter() - start

    start = time.perf_counter()
    ql.sample_bitstrings(state, shots, generator=generator)
    vectorised = time.perf_counter() - start

    return {
        "n_qubits": n_qubits,
        "shots": shots,
        "repeat_measurement_sec": repeated,
        "sample_bitstrings_sec": vectorised,
    }


if __name__ == "__main__":
    print("Benchmarking gate application...")

    for n in (4, 8, 12):
        results = benchmark_gate_application(n_qubits=n, n_gates=200)
        print(f"Dense register ({n} qubits, 200 gates):")
        print(f"  Time per gate: {results['time_per_gate_sec']*1e3:.3f} ms")
        print(f"  Gates per second: {results['gates_per_sec']:.0f}")

    print("\nBenchmarking measurement...")
    results = benchmark_measurement(n_qubits=8, shots=1000)
    print("Uniform register (8 qubits, 1000 shots):")
    print(f"  repeat_measurement: {results['repeat_measurement_sec']*1e3:.2f} ms")
    print(f"  sample_bitstrings:  {results['sample_bitstrings_sec']*1e3:.2f} ms")
