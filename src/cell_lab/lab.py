"""
Lab session.

LabSession owns the cells created during one run and applies user
commands to them: create from a template, divide, grow, teach, give
oxygen, register new templates. Cells are told apart by their kind tag.

run_experiment() is the non-interactive counterpart: seed one cell per
template, let everything grow and divide for a few rounds, and report
what happened.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import pandas as pd

from cell_lab.biology import BloodCell, BrainCell, Cell, CellKind
from cell_lab.cell_factory import CellFactory, build_cell
from cell_lab.config import defaults
from cell_lab.exceptions import InsufficientEnergyError
from cell_lab.identity import IdFactory

logger = logging.getLogger(__name__)

DATAFRAME_COLUMNS = ["cell_id", "kind", "genetic_code", "energy", "age", "oxygen_level", "knowledge"]


class LabSession:
    """Collection of cells plus the template factory that feeds it."""

    def __init__(
        self,
        factory: Optional[CellFactory] = None,
        id_factory: Optional[IdFactory] = None,
        assist_growth: bool = defaults.DEFAULT_ASSIST_GROWTH,
    ):
        self.factory = factory or CellFactory(id_factory=id_factory)
        self.id_factory = id_factory
        self.assist_growth = assist_growth
        self._cells: List[Cell] = []

    @property
    def cells(self) -> List[Cell]:
        return list(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def cells_of_kind(self, kind: Union[CellKind, str]) -> List[Cell]:
        kind = CellKind(kind)
        return [cell for cell in self._cells if cell.kind == kind]

    def template_names(self) -> List[str]:
        return self.factory.list_names()

    @staticmethod
    def _pick(cells: List[Cell], index: int, label: str) -> Cell:
        if not 0 <= index < len(cells):
            raise IndexError(f"Invalid {label} number: {index + 1} (have {len(cells)})")
        return cells[index]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, template_name: str) -> Cell:
        """Instantiate a template and keep the new cell."""
        cell = self.factory.instantiate(template_name)
        self._cells.append(cell)
        logger.info(f"Created {template_name} cell {cell.cell_id}")
        return cell

    def divide(self, index: int, assist_growth: Optional[bool] = None) -> Tuple[Cell, Cell]:
        """Divide the cell at `index`; returns (parent, child).

        With assisted growth, a cell below its threshold is grown twice
        before the attempt. InsufficientEnergyError still propagates if
        that was not enough.
        """
        cell = self._pick(self._cells, index, "cell")
        assist = self.assist_growth if assist_growth is None else assist_growth

        if assist and not cell.can_divide():
            for _ in range(defaults.ASSIST_GROWTH_STEPS):
                cell.grow()
            logger.info(f"Assisted growth for cell {cell.cell_id} (energy now {cell.energy})")

        try:
            child = cell.clone()
        except InsufficientEnergyError as e:
            logger.warning(f"Division failed: {e}")
            raise

        self._cells.append(child)
        logger.info(f"Cell {cell.cell_id} divided into {child.cell_id}")
        return cell, child

    def grow(self, index: int) -> Cell:
        cell = self._pick(self._cells, index, "cell")
        cell.grow()
        logger.info(f"Cell {cell.cell_id} grew (energy={cell.energy}, age={cell.age})")
        return cell

    def teach(self, brain_index: int, fact: str) -> BrainCell:
        """Teach a fact to the `brain_index`-th brain cell."""
        cell = self._pick(self.cells_of_kind(CellKind.BRAIN), brain_index, "brain cell")
        cell.learn(fact)
        logger.info(f"Brain cell {cell.cell_id} learned: {fact}")
        return cell

    def oxygenate(self, blood_index: int, amount: int) -> BloodCell:
        """Give oxygen to the `blood_index`-th blood cell."""
        cell = self._pick(self.cells_of_kind(CellKind.BLOOD), blood_index, "blood cell")
        cell.carry_oxygen(amount)
        logger.info(f"Blood cell {cell.cell_id} carrying {cell.oxygen_level} oxygen units")
        return cell

    def add_template(self, name: str, definition: Mapping[str, Any]) -> Cell:
        """Build a cell from `definition` and register it as a template."""
        cell = build_cell(definition, id_factory=self.id_factory)
        self.factory.register(name, cell)
        logger.info(f"Added new template: {name} ({cell.kind.value})")
        return cell

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def census(self) -> Dict[str, int]:
        counts = {kind.value: 0 for kind in CellKind}
        for cell in self._cells:
            counts[cell.kind.value] += 1
        return counts

    def to_dataframe(self) -> pd.DataFrame:
        """One row per cell, in creation order."""
        return pd.DataFrame([cell.to_dict() for cell in self._cells], columns=DATAFRAME_COLUMNS)


@dataclass
class ExperimentReport:
    """Outcome of a batch experiment."""
    rounds: int
    cells: List[Cell] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)
    census: Dict[str, int] = field(default_factory=dict)

    @property
    def total_cells(self) -> int:
        return len(self.cells)


def run_experiment(
    session: LabSession,
    rounds: int = defaults.DEFAULT_EXPERIMENT_ROUNDS,
    grow_steps: int = defaults.DEFAULT_EXPERIMENT_GROW_STEPS,
) -> ExperimentReport:
    """Seed one cell per template, then grow and divide everything.

    Each round every cell grows `grow_steps` times and tries to divide.
    Parents that divide also exercise their specialty: blood cells take
    on oxygen, brain cells learn a fact. Failed divisions are recorded in
    the report instead of stopping the run.
    """
    if rounds < 0:
        raise ValueError(f"rounds must be non-negative, got {rounds}")

    report = ExperimentReport(rounds=rounds)

    for name in session.template_names():
        try:
            session.create(name)
        except InsufficientEnergyError as e:
            report.failures.append(str(e))
            logger.warning(f"Could not seed template {name}: {e}")

    for round_number in range(1, rounds + 1):
        logger.info(f"Experiment round {round_number}/{rounds} with {len(session)} cells")
        for index, cell in enumerate(session.cells):
            for _ in range(grow_steps):
                cell.grow()
            try:
                session.divide(index, assist_growth=False)
            except InsufficientEnergyError as e:
                report.failures.append(str(e))
                continue

            if cell.kind == CellKind.BLOOD:
                cell.carry_oxygen(defaults.EXPERIMENT_OXYGEN_DOSE)
            elif cell.kind == CellKind.BRAIN:
                cell.learn(defaults.EXPERIMENT_LEARNED_FACT)

    report.cells = session.cells
    report.census = session.census()
    return report
