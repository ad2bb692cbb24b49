"""qlift - circuit simulation by lifting local gate actions onto a full register."""

__version__ = "0.1.0"

# Circuit builder
from .circuit import Circuit

# Diagnostics
from .diagnostics import (
    assert_normalized,
    debug_context,
    fidelity,
    is_debug_enabled,
    is_gate_unitary,
    is_unitary,
    set_debug_enabled,
    state_norm,
    total_probability,
)

# Errors
from .errors import (
    BoundsError,
    CircuitError,
    ConstructionError,
    DimensionError,
    EmptyInputError,
    NormalizationError,
    QLiftError,
    SimulationError,
)

# Gates
from .gates import (
    Gate,
    GateKind,
    cnot,
    cr,
    crk,
    custom,
    cy,
    cz,
    dispatch,
    h,
    identity,
    local_matrix,
    mx90,
    my90,
    phase,
    rx,
    ry,
    rz,
    s,
    sdag,
    swap,
    t,
    tdag,
    toffoli,
    x,
    x90,
    y,
    y90,
    z,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Sampling
from .sampling import (
    counts_as_bitstrings,
    counts_to_probs,
    most_frequent,
    repeat_measurement,
    sample_bitstrings,
)

# Simulation
from .simulation import ZERO_MARGIN, SimulatedCircuit, apply_gate, simulate

# States
from .states import (
    MAPPING_TOLERANCE,
    NORMALIZATION_TOLERANCE,
    BasisLabel,
    Qubit,
    Superposition,
)

__all__ = [
    "__version__",
    # States
    "Qubit",
    "BasisLabel",
    "Superposition",
    "NORMALIZATION_TOLERANCE",
    "MAPPING_TOLERANCE",
    # Gates
    "Gate",
    "GateKind",
    "dispatch",
    "local_matrix",
    "identity",
    "h",
    "x",
    "y",
    "z",
    "s",
    "sdag",
    "t",
    "tdag",
    "x90",
    "y90",
    "mx90",
    "my90",
    "rx",
    "ry",
    "rz",
    "phase",
    "cnot",
    "cz",
    "cy",
    "swap",
    "cr",
    "crk",
    "toffoli",
    "custom",
    # Circuit / simulation
    "Circuit",
    "SimulatedCircuit",
    "ZERO_MARGIN",
    "apply_gate",
    "simulate",
    # Sampling
    "repeat_measurement",
    "sample_bitstrings",
    "counts_to_probs",
    "counts_as_bitstrings",
    "most_frequent",
    # Diagnostics
    "state_norm",
    "total_probability",
    "assert_normalized",
    "fidelity",
    "is_unitary",
    "is_gate_unitary",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Errors
    "QLiftError",
    "ConstructionError",
    "DimensionError",
    "NormalizationError",
    "EmptyInputError",
    "BoundsError",
    "CircuitError",
    "SimulationError",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
