"""
Cell biology model.

Base cell plus the specialized blood and brain variants.
"""

from .cell import Cell, CellKind, DivisionProfile
from .specialized_cells import BloodCell, BrainCell

__all__ = [
    "Cell",
    "CellKind",
    "DivisionProfile",
    "BloodCell",
    "BrainCell",
]
