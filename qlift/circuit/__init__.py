"""Circuit builder and placement checks."""

from .core import Circuit
from .validation import check_gate, check_position, split_column

__all__ = ["Circuit", "check_gate", "check_position", "split_column"]
