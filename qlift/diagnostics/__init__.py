"""Diagnostics and debugging utilities for qlift."""

from .core import (
    assert_normalized,
    fidelity,
    is_gate_unitary,
    is_unitary,
    state_norm,
    total_probability,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "state_norm",
    "total_probability",
    "assert_normalized",
    "fidelity",
    "is_unitary",
    "is_gate_unitary",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
