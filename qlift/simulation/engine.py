"""Gate-by-gate simulation of a register without building global unitaries.

A gate acting on ``k`` wires is only ever evaluated on ``k``-qubit local
labels. For every basis term of the register the engine reads the bits at
the acting wires, looks up the local image of that sub-label, writes each
image bit pattern back into the term's index and accumulates
``local amplitude * term amplitude`` under the resulting index. The new
register is whatever the accumulator holds once every term was visited.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..diagnostics.debug_mode import is_debug_enabled
from ..errors import DimensionError
from ..gates.dispatch import Arity, dispatch
from ..gates.spec import Gate
from ..logging import get_logger
from ..states.basis import BasisLabel
from ..states.superposition import NORMALIZATION_TOLERANCE, Superposition

logger = get_logger(__name__)

# Real and imaginary parts both below this count as zero inside the engine
ZERO_MARGIN = 1e-7


def _negligible(value: complex) -> bool:
    return abs(value.real) < ZERO_MARGIN and abs(value.imag) < ZERO_MARGIN


def _scatter(local_index: int, shifts: Sequence[int]) -> int:
    """Place the bits of ``local_index`` (MSB first) at the given register shifts."""
    width = len(shifts)
    out = 0
    for j, shift in enumerate(shifts):
        if (local_index >> (width - 1 - j)) & 1:
            out |= 1 << shift
    return out


def _gather(index: int, shifts: Sequence[int]) -> int:
    """Read the register bits at ``shifts`` into a local index, MSB first."""
    local = 0
    for shift in shifts:
        local = (local << 1) | ((index >> shift) & 1)
    return local


def _image_terms(image: Superposition, shifts: Sequence[int]) -> List[Tuple[int, complex]]:
    """Non-negligible terms of a local image, with their bits already scattered."""
    return [
        (_scatter(local_out, shifts), amp)
        for local_out, amp in image.nonzero_terms()
        if not _negligible(amp)
    ]


def apply_gate(gate: Gate, position: int, register: Superposition) -> Superposition:
    """
    Apply one gate placed on wire ``position`` to ``register`` in place.

    Parameters
    ----------
    gate:
        Gate to apply. Its control wires must be valid for the register.
    position:
        Target wire.
    register:
        State to rewrite. Its amplitude vector is replaced.

    Returns
    -------
    register:
        The same object, for chaining.

    Raises
    ------
    SimulationError
        If a custom gate returns an image of the wrong width.
    """
    if gate.is_identity:
        return register

    entry = dispatch(gate)
    num_qubits = register.product_dim
    acting = entry.acting_positions(position)
    shifts = [num_qubits - 1 - p for p in acting]
    clear_mask = ~_scatter((1 << len(shifts)) - 1, shifts)
    memoise = entry.arity is not Arity.CUSTOM

    images: Dict[int, Optional[List[Tuple[int, complex]]]] = {}
    accumulator: Dict[int, complex] = {}

    for index, amplitude in register.nonzero_terms():
        local_index = _gather(index, shifts)
        if memoise and local_index in images:
            terms = images[local_index]
        else:
            image = entry.apply(BasisLabel._from_index_unchecked(local_index, len(shifts)))
            terms = None if image is None else _image_terms(image, shifts)
            if memoise:
                images[local_index] = terms

        if terms is None:
            # Custom gate declined this term
            accumulator[index] = accumulator.get(index, 0j) + amplitude
            continue

        base = index & clear_mask
        for scattered, local_amp in terms:
            out = base | scattered
            accumulator[out] = accumulator.get(out, 0j) + local_amp * amplitude

    pruned = {i: a for i, a in accumulator.items() if not _negligible(a)}
    register._set_from_indices_unchecked(pruned)
    return register


@contextmanager
def _progress_output(enabled: bool) -> Iterator[None]:
    """Let INFO progress lines through the engine logger for one run."""
    if not enabled or logger.isEnabledFor(logging.INFO):
        yield
        return
    saved = [(logger, logger.level)] + [(h, h.level) for h in logger.handlers]
    for obj, _ in saved:
        obj.setLevel(logging.INFO)
    try:
        yield
    finally:
        for obj, level in saved:
            obj.setLevel(level)


def simulate(
    gates: Sequence[Gate],
    num_qubits: int,
    register: Optional[Superposition] = None,
    print_progress: bool = False,
) -> Superposition:
    """
    Run a flattened circuit over a register.

    Parameters
    ----------
    gates:
        Wire-major gate sequence: column 0 for wires ``0..n-1``, then
        column 1, and so on. Gate ``i`` targets wire ``i % num_qubits``.
    num_qubits:
        Register width.
    register:
        Initial state, rewritten in place. Defaults to |0...0⟩.
    print_progress:
        Log one INFO line per applied gate. The engine logger is lowered
        to INFO for the run if it was set higher.

    Returns
    -------
    register:
        The final state.

    Raises
    ------
    DimensionError
        If ``register`` does not have ``num_qubits`` qubits.
    """
    if register is None:
        register = Superposition.zero(num_qubits)
    elif register.product_dim != num_qubits:
        raise DimensionError(
            f"Register has {register.product_dim} qubits, but the circuit has {num_qubits}."
        )

    total = len(gates)
    debug = is_debug_enabled()
    with _progress_output(print_progress):
        for i, gate in enumerate(gates):
            if gate.is_identity:
                continue
            position = i % num_qubits
            if print_progress:
                logger.info(f"Applying {gate!r} on wire {position} # {i + 1}/{total}")
            apply_gate(gate, position, register)

            if debug:
                prob = register.total_probability()
                if abs(prob - 1.0) >= NORMALIZATION_TOLERANCE:
                    logger.warning(
                        f"Total probability is {prob:.8f} after {gate!r} on wire {position} "
                        f"(gate {i + 1}/{total})."
                    )
                else:
                    logger.debug(f"Total probability {prob:.8f} after gate {i + 1}/{total}.")

        if print_progress:
            logger.info("Finished circuit simulation.")
    return register


__all__ = ["ZERO_MARGIN", "apply_gate", "simulate"]
