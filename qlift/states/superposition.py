"""Dense superpositions over the computational basis.

A :class:`Superposition` of ``n`` qubits stores all ``2**n`` complex
amplitudes in a one-dimensional ``torch.complex128`` tensor, indexed so that
the leftmost qubit of a :class:`~qlift.states.basis.BasisLabel` is the most
significant bit.

Two families of constructors exist. The *checked* ones
(:meth:`Superposition.from_amplitudes`, :meth:`Superposition.from_mapping`,
:meth:`Superposition.set_amplitudes`, ...) reject input whose squared
amplitudes do not sum to one within :data:`NORMALIZATION_TOLERANCE`. The
*unchecked* ones skip that test; the simulation engine and the gate
operators use them, because local gate images and intermediate registers
are built from amplitudes that are normalised by construction.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import torch

from ..errors import BoundsError, DimensionError, EmptyInputError, NormalizationError
from .basis import BasisLabel

# Allowed deviation of the total probability from one on checked paths
NORMALIZATION_TOLERANCE = 1e-6

# Entries with squared magnitude below this are left out of to_mapping()
MAPPING_TOLERANCE = 1e-6

DEFAULT_DTYPE = torch.complex128

AmplitudeInput = Union[Sequence[complex], np.ndarray, torch.Tensor]


def _as_amplitude_tensor(amplitudes: AmplitudeInput) -> torch.Tensor:
    """Copy ``amplitudes`` into a fresh 1D complex128 tensor on the CPU."""
    if isinstance(amplitudes, torch.Tensor):
        tensor = amplitudes.detach().to(device="cpu", dtype=DEFAULT_DTYPE).clone()
    else:
        tensor = torch.as_tensor(np.asarray(amplitudes, dtype=np.complex128)).clone()
    if tensor.dim() != 1:
        raise DimensionError(
            f"Amplitudes must be one-dimensional, got shape {tuple(tensor.shape)}."
        )
    return tensor


def _width_from_length(length: int) -> int:
    """Return ``n`` with ``length == 2**n``, n >= 1, or raise DimensionError."""
    if length < 2 or (length & (length - 1)) != 0:
        raise DimensionError(
            f"The number of amplitudes must be 2**n with n >= 1, got {length}."
        )
    return length.bit_length() - 1


def _within_tolerance(value: float, target: float, tol: float) -> bool:
    return target - tol < value < target + tol


def _check_normalized(total: float) -> None:
    if not _within_tolerance(total, 1.0, NORMALIZATION_TOLERANCE):
        raise NormalizationError(
            f"The squared amplitudes sum to {total}, not 1; the superposition "
            "does not conserve probability."
        )


def _mapping_width(mapping: Mapping[BasisLabel, complex]) -> int:
    """Common width of all labels in ``mapping``."""
    if not mapping:
        raise EmptyInputError(
            "An empty mapping was given; a superposition needs at least one state."
        )
    labels = iter(mapping)
    width = next(labels).num_qubits
    for label in labels:
        if label.num_qubits != width:
            raise DimensionError(
                f"The first label has width {width}, whilst the label {label!r} "
                f"has width {label.num_qubits}; all labels must share one width."
            )
    return width


def _dense_from_mapping(mapping: Mapping[BasisLabel, complex], width: int) -> torch.Tensor:
    dense = torch.zeros(1 << width, dtype=DEFAULT_DTYPE)
    if mapping:
        indices = torch.tensor([label.to_index() for label in mapping], dtype=torch.long)
        values = torch.tensor([complex(a) for a in mapping.values()], dtype=DEFAULT_DTYPE)
        dense[indices] = values
    return dense


class Superposition:
    """
    A complex linear combination of the ``2**n`` basis labels of ``n`` qubits.

    Instances are normally created through the classmethods rather than the
    constructor. ``product_dim`` is the register width ``n`` and
    ``dimension`` the number of amplitudes ``2**n``.
    """

    __slots__ = ("_amplitudes", "_product_dim", "_cumulative")

    def __init__(self, amplitudes: torch.Tensor, product_dim: int) -> None:
        if product_dim < 1 or amplitudes.dim() != 1 or amplitudes.shape[0] != 1 << product_dim:
            raise DimensionError(
                f"A superposition of {product_dim} qubits needs a 1D tensor of "
                f"2**{product_dim} amplitudes, got shape {tuple(amplitudes.shape)}."
            )
        self._amplitudes = amplitudes
        self._product_dim = product_dim
        self._cumulative: Optional[List[float]] = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def zero(cls, num_qubits: int) -> "Superposition":
        """
        The state |0...0⟩ on ``num_qubits`` qubits.

        Raises
        ------
        DimensionError
            If ``num_qubits < 1``.
        """
        if num_qubits < 1:
            raise DimensionError(f"num_qubits must be >= 1, got {num_qubits}.")
        amplitudes = torch.zeros(1 << num_qubits, dtype=DEFAULT_DTYPE)
        amplitudes[0] = 1.0
        return cls(amplitudes, num_qubits)

    @classmethod
    def from_amplitudes(cls, amplitudes: AmplitudeInput) -> "Superposition":
        """
        Build a superposition from a dense amplitude array.

        Parameters
        ----------
        amplitudes:
            ``2**n`` complex amplitudes ordered by basis index.

        Raises
        ------
        DimensionError
            If the length is not a power of two (or is below 2).
        NormalizationError
            If the squared magnitudes do not sum to 1 within 1e-6.
        """
        tensor = _as_amplitude_tensor(amplitudes)
        width = _width_from_length(tensor.shape[0])
        _check_normalized(float((tensor.abs() ** 2).sum()))
        return cls(tensor, width)

    @classmethod
    def from_amplitudes_unchecked(cls, amplitudes: AmplitudeInput) -> "Superposition":
        """As :meth:`from_amplitudes` without the normalisation check."""
        tensor = _as_amplitude_tensor(amplitudes)
        return cls(tensor, _width_from_length(tensor.shape[0]))

    @classmethod
    def from_mapping(cls, mapping: Mapping[BasisLabel, complex]) -> "Superposition":
        """
        Build a superposition from ``{label: amplitude}``.

        Labels that are missing get amplitude zero.

        Raises
        ------
        EmptyInputError
            If ``mapping`` is empty.
        DimensionError
            If the labels do not all have the same width.
        NormalizationError
            If the squared magnitudes do not sum to 1 within 1e-6.
        """
        width = _mapping_width(mapping)
        _check_normalized(sum(abs(complex(a)) ** 2 for a in mapping.values()))
        return cls(_dense_from_mapping(mapping, width), width)

    @classmethod
    def from_mapping_unchecked(cls, mapping: Mapping[BasisLabel, complex]) -> "Superposition":
        """As :meth:`from_mapping` without the normalisation check."""
        width = _mapping_width(mapping)
        return cls(_dense_from_mapping(mapping, width), width)

    @classmethod
    def from_label(cls, label: BasisLabel) -> "Superposition":
        """The basis state ``label`` with amplitude 1."""
        amplitudes = torch.zeros(1 << label.num_qubits, dtype=DEFAULT_DTYPE)
        amplitudes[label.to_index()] = 1.0
        return cls(amplitudes, label.num_qubits)

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def product_dim(self) -> int:
        """Number of qubits ``n``."""
        return self._product_dim

    @property
    def num_qubits(self) -> int:
        """Alias of :attr:`product_dim`."""
        return self._product_dim

    @property
    def dimension(self) -> int:
        """Number of amplitudes, ``2**product_dim``."""
        return 1 << self._product_dim

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @property
    def amplitudes(self) -> torch.Tensor:
        """A copy of the dense amplitude vector."""
        return self._amplitudes.clone()

    def get_amplitude(self, index: int) -> complex:
        """
        Amplitude of the basis state with integer ``index``.

        Raises
        ------
        BoundsError
            If ``index`` is outside ``[0, dimension)``.
        """
        if index < 0 or index >= self.dimension:
            raise BoundsError(
                f"Index {index} is out of range for a superposition with "
                f"{self.dimension} amplitudes."
            )
        return complex(self._amplitudes[index].item())

    def get_amplitude_from_label(self, label: BasisLabel) -> complex:
        """
        Amplitude of ``label``.

        Raises
        ------
        DimensionError
            If the label width differs from :attr:`product_dim`.
        """
        if label.num_qubits != self._product_dim:
            raise DimensionError(
                f"Cannot look up {label!r} of width {label.num_qubits} in a "
                f"superposition of width {self._product_dim}."
            )
        return complex(self._amplitudes[label.to_index()].item())

    def probabilities(self) -> torch.Tensor:
        """Squared magnitudes ``|amp|**2`` as a float64 tensor."""
        return self._amplitudes.abs() ** 2

    def total_probability(self) -> float:
        """Sum of squared magnitudes; 1 for a physical state."""
        return float(self.probabilities().sum())

    def to_mapping(self) -> Dict[BasisLabel, complex]:
        """
        Sparse ``{label: amplitude}`` view.

        Entries whose squared magnitude is below :data:`MAPPING_TOLERANCE`
        are dropped, so the view is lossy for very small amplitudes.
        """
        width = self._product_dim
        mapping: Dict[BasisLabel, complex] = {}
        for index, amp in enumerate(self._amplitudes.tolist()):
            if abs(amp) ** 2 >= MAPPING_TOLERANCE:
                mapping[BasisLabel._from_index_unchecked(index, width)] = amp
        return mapping

    def to_numpy(self) -> np.ndarray:
        """Dense amplitudes as a NumPy ``complex128`` array."""
        return self._amplitudes.numpy().copy()

    def nonzero_terms(self) -> Iterator[Tuple[int, complex]]:
        """Yield ``(index, amplitude)`` for every amplitude that is not exactly zero."""
        for index, amp in enumerate(self._amplitudes.tolist()):
            if amp != 0:
                yield index, amp

    def __iter__(self) -> Iterator[Tuple[BasisLabel, complex]]:
        width = self._product_dim
        for index, amp in enumerate(self._amplitudes.tolist()):
            yield BasisLabel._from_index_unchecked(index, width), amp

    def __len__(self) -> int:
        return self.dimension

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def set_amplitudes(self, amplitudes: AmplitudeInput) -> "Superposition":
        """
        Replace all amplitudes, keeping the width.

        Raises
        ------
        DimensionError
            If the number of amplitudes differs from :attr:`dimension`.
        NormalizationError
            If the new amplitudes do not conserve probability.
        """
        tensor = _as_amplitude_tensor(amplitudes)
        if tensor.shape[0] != self.dimension:
            raise DimensionError(
                f"Got {tensor.shape[0]} amplitudes for a superposition with "
                f"{self.dimension} basis states."
            )
        _check_normalized(float((tensor.abs() ** 2).sum()))
        self._replace(tensor)
        return self

    def set_amplitudes_from_mapping(self, mapping: Mapping[BasisLabel, complex]) -> "Superposition":
        """
        Replace all amplitudes from ``{label: amplitude}``; missing labels become zero.

        Raises
        ------
        EmptyInputError, DimensionError, NormalizationError
            As for :meth:`from_mapping`, plus ``DimensionError`` if the label
            width differs from :attr:`product_dim`.
        """
        width = _mapping_width(mapping)
        if width != self._product_dim:
            raise DimensionError(
                f"Labels have width {width}, but this superposition has width "
                f"{self._product_dim}."
            )
        _check_normalized(sum(abs(complex(a)) ** 2 for a in mapping.values()))
        self._replace(_dense_from_mapping(mapping, width))
        return self

    def _set_from_indices_unchecked(self, amplitudes: Mapping[int, complex]) -> None:
        """Replace the vector from ``{index: amplitude}``; absent indices become zero."""
        dense = torch.zeros(self.dimension, dtype=DEFAULT_DTYPE)
        if amplitudes:
            indices = torch.tensor(list(amplitudes.keys()), dtype=torch.long)
            values = torch.tensor(list(amplitudes.values()), dtype=DEFAULT_DTYPE)
            dense[indices] = values
        self._replace(dense)

    def _replace(self, tensor: torch.Tensor) -> None:
        self._amplitudes = tensor
        self._cumulative = None

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    def measure(self, generator: Optional[torch.Generator] = None) -> Optional[BasisLabel]:
        """
        Collapse onto one basis label, weighted by ``|amp|**2``.

        A uniform draw in ``[0, 1)`` is compared against the running sum of
        probabilities in index order; the first label whose cumulative
        probability exceeds the draw is returned. If the total probability
        never reaches the draw, ``None`` is returned: the state has leaked
        probability, typically through a non-unitary custom gate.

        Parameters
        ----------
        generator:
            Optional ``torch.Generator`` for reproducible draws. The torch
            global RNG is used when omitted.
        """
        if self._cumulative is None:
            running = 0.0
            cumulative = []
            for prob in self.probabilities().tolist():
                running += prob
                cumulative.append(running)
            self._cumulative = cumulative

        draw = float(torch.rand(1, generator=generator, dtype=torch.float64).item())
        for index, cumulative_prob in enumerate(self._cumulative):
            if draw < cumulative_prob:
                return BasisLabel._from_index_unchecked(index, self._product_dim)
        return None

    # ------------------------------------------------------------------
    # Comparison / copying
    # ------------------------------------------------------------------

    def copy(self) -> "Superposition":
        """Independent copy."""
        return Superposition(self._amplitudes.clone(), self._product_dim)

    def allclose(self, other: "Superposition", atol: float = NORMALIZATION_TOLERANCE) -> bool:
        """True if both have the same width and amplitudes agree within ``atol``."""
        if self._product_dim != other._product_dim:
            return False
        return bool(torch.allclose(self._amplitudes, other._amplitudes, atol=atol, rtol=0.0))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Superposition):
            return NotImplemented
        return self._product_dim == other._product_dim and bool(
            torch.equal(self._amplitudes, other._amplitudes)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        terms = [
            f"({amp.real:.4g}{amp.imag:+.4g}j)|{label}⟩"
            for label, amp in sorted(self.to_mapping().items())
        ]
        body = " + ".join(terms) if terms else "0"
        return f"Superposition({body})"


def basis_superposition(bits: Union[str, Iterable[int]]) -> Superposition:
    """Shorthand for the basis state of a bitstring, e.g. ``basis_superposition("10")``."""
    if isinstance(bits, str):
        return Superposition.from_label(BasisLabel.from_string(bits))
    return Superposition.from_label(BasisLabel(bits))
