"""cell_lab - Self-replicating cell model with a template registry and a console lab."""

__version__ = "0.1.0"

from cell_lab.biology import BloodCell, BrainCell, Cell, CellKind
from cell_lab.cell_factory import CellFactory, build_cell
from cell_lab.exceptions import (
    CellLabError,
    InsufficientEnergyError,
    InvalidCellStateError,
    InvalidFactError,
    UnknownTemplateError,
)
from cell_lab.lab import LabSession, run_experiment

__all__ = [
    "Cell",
    "CellKind",
    "BloodCell",
    "BrainCell",
    "CellFactory",
    "build_cell",
    "CellLabError",
    "InsufficientEnergyError",
    "InvalidCellStateError",
    "InvalidFactError",
    "UnknownTemplateError",
    "LabSession",
    "run_experiment",
]
