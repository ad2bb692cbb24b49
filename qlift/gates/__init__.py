"""Gate vocabulary and local operators."""

from . import standard
from .dispatch import Arity, DispatchEntry, dispatch, local_matrix
from .spec import (
    CustomFunction,
    Gate,
    GateKind,
    cnot,
    cr,
    crk,
    custom,
    cy,
    cz,
    h,
    identity,
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

__all__ = [
    "standard",
    "Arity",
    "DispatchEntry",
    "dispatch",
    "local_matrix",
    "CustomFunction",
    "Gate",
    "GateKind",
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
]
