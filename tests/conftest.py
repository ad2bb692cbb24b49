"""Pytest configuration and shared fixtures for qlift tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Helpers for comparing simulated amplitudes with expected vectors
"""

import math
import os
from typing import Sequence

import numpy as np
import pytest
import torch

from qlift.states import Superposition

FRAC_1_SQRT_2 = 1.0 / math.sqrt(2.0)


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic torch RNG for tests.

    Returns:
        A seeded CPU torch.Generator instance.
    """
    generator = torch.Generator()
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


def assert_amplitudes(state: Superposition, expected: Sequence[complex], atol: float = 1e-6) -> None:
    """Assert that ``state`` has the dense amplitudes ``expected``."""
    actual = state.to_numpy()
    expected_arr = np.asarray(expected, dtype=np.complex128)
    assert actual.shape == expected_arr.shape
    assert np.allclose(actual, expected_arr, atol=atol), (
        f"Amplitudes differ.\nactual:   {actual}\nexpected: {expected_arr}"
    )


def sparse_amplitudes(num_qubits: int, entries: dict) -> list:
    """Dense amplitude list with ``entries`` ({index: amp}) set and zero elsewhere."""
    dense = [0j] * (1 << num_qubits)
    for index, amp in entries.items():
        dense[index] = amp
    return dense
