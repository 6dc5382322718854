"""
Lab exceptions.

These are expected, recoverable conditions (a weak cell, a typo in a
template name). Callers that present results to a user catch CellLabError
and render the message; anything else is a bug and should propagate.
"""

from __future__ import annotations

from typing import List, Optional


class CellLabError(Exception):
    """Base class for all cell lab domain errors."""


class InsufficientEnergyError(CellLabError):
    """Raised when a cell is asked to divide below its energy threshold.

    Attributes:
        cell_id: Identifier of the cell that refused to divide
        kind: Cell kind value ("basic", "blood", "brain")
        energy: Energy the cell had at the time of the attempt
        required: Threshold the cell needed to reach
    """

    def __init__(self, cell_id: str, kind: str, energy: int, required: int):
        self.cell_id = cell_id
        self.kind = kind
        self.energy = energy
        self.required = required
        super().__init__(
            f"{kind.capitalize()} cell {cell_id} needs {required} energy to divide "
            f"(has {energy})"
        )


class UnknownTemplateError(CellLabError, KeyError):
    """Raised when a template name is not registered.

    Attributes:
        name: Requested template name
        available: Names registered at the time of the lookup
    """

    def __init__(self, name: str, available: Optional[List[str]] = None):
        self.name = name
        self.available = list(available or [])
        super().__init__(name)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the key
        return (
            f"No template found for type: {self.name}. "
            f"Available templates: {self.available}"
        )


class InvalidCellStateError(CellLabError, ValueError):
    """Raised when a cell is constructed with out-of-range vitality state."""


class InvalidFactError(CellLabError, ValueError):
    """Raised when a brain cell is taught an empty fact."""
