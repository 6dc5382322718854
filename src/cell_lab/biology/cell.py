"""
Self-replicating cell model.

A Cell knows how to copy itself: division checks the cell's own energy
threshold, charges the parent, and returns a newborn built by the cell's
own class. Variants (BloodCell, BrainCell) change the threshold and cost
through their DivisionProfile and carry extra state into the child by
overriding _make_offspring().

Division is atomic. The child is built first; the parent is only charged
once the child exists, so a failed division leaves the parent untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from cell_lab.config import defaults
from cell_lab.exceptions import InsufficientEnergyError, InvalidCellStateError
from cell_lab.identity import IdFactory, uuid_id_factory


class CellKind(str, Enum):
    """Cell kinds. Set by the class, never changed after construction."""
    BASIC = "basic"
    BLOOD = "blood"
    BRAIN = "brain"


@dataclass(frozen=True)
class DivisionProfile:
    """Energy rules for dividing one kind of cell.

    Attributes:
        threshold: Minimum energy required before division is allowed
        cost: Energy the parent loses on a successful division
    """
    threshold: int
    cost: int

    @classmethod
    def for_kind(cls, kind: CellKind) -> "DivisionProfile":
        threshold, cost = defaults.DIVISION_RULES[kind.value]
        return cls(threshold=threshold, cost=cost)


def _check_int(name: str, value: Any, low: int, high: Optional[int] = None) -> int:
    # bool is an int subclass; True energy is never meant
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCellStateError(f"{name} must be an integer, got {value!r}")
    if value < low or (high is not None and value > high):
        bound = f"[{low}, {high}]" if high is not None else f">= {low}"
        raise InvalidCellStateError(f"{name} must be in {bound}, got {value}")
    return value


class Cell:
    """Basic cell with identity, genetic code, energy and age.

    Energy and age are read-only from outside; only grow() and clone()
    change them.

    Example:
        >>> cell = Cell("HUMAN_DNA")
        >>> child = cell.clone()
        >>> (cell.energy, cell.age, child.energy, child.age)
        (70, 1, 80, 0)
    """

    _kind = CellKind.BASIC

    def __init__(
        self,
        genetic_code: str,
        energy: int = defaults.DEFAULT_ENERGY,
        age: int = defaults.DEFAULT_AGE,
        id_factory: Optional[IdFactory] = None,
    ):
        if not isinstance(genetic_code, str):
            raise InvalidCellStateError(
                f"genetic_code must be a string, got {type(genetic_code).__name__}"
            )
        self._genetic_code = genetic_code
        self._energy = _check_int("energy", energy, defaults.MIN_ENERGY, defaults.MAX_ENERGY)
        self._age = _check_int("age", age, 0)
        self._id_factory = id_factory or uuid_id_factory
        self._cell_id = str(self._id_factory())

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def kind(self) -> CellKind:
        return self._kind

    @property
    def cell_id(self) -> str:
        return self._cell_id

    @property
    def genetic_code(self) -> str:
        return self._genetic_code

    @property
    def energy(self) -> int:
        return self._energy

    @property
    def age(self) -> int:
        return self._age

    @property
    def division_profile(self) -> DivisionProfile:
        return DivisionProfile.for_kind(self.kind)

    def can_divide(self) -> bool:
        return self._energy >= self.division_profile.threshold

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def grow(self) -> None:
        """Gain energy (capped) and get one step older. Always succeeds."""
        self._energy = min(defaults.MAX_ENERGY, self._energy + defaults.GROWTH_ENERGY_STEP)
        self._age += 1

    def clone(self) -> "Cell":
        """Divide into a newborn cell of the same kind.

        Returns:
            New cell with this cell's genetic code, newborn energy and age,
            a fresh id, and whatever extra state the variant carries over

        Raises:
            InsufficientEnergyError: If energy is below the kind's threshold.
                Nothing is mutated in that case.
        """
        profile = self.division_profile
        if self._energy < profile.threshold:
            raise InsufficientEnergyError(
                cell_id=self._cell_id,
                kind=self.kind.value,
                energy=self._energy,
                required=profile.threshold,
            )

        child = self._make_offspring()

        self._energy -= profile.cost
        self._age += 1
        return child

    def _make_offspring(self) -> "Cell":
        """Build the child. Variants override this to carry extra state."""
        return Cell(
            self._genetic_code,
            energy=defaults.NEWBORN_ENERGY,
            age=defaults.NEWBORN_AGE,
            id_factory=self._id_factory,
        )

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------

    def describe(self) -> str:
        return (
            f"Cell {self._cell_id}: DNA={self._genetic_code}, "
            f"Energy={self._energy}, Age={self._age}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of the cell's state as plain values."""
        return {
            "cell_id": self._cell_id,
            "kind": self.kind.value,
            "genetic_code": self._genetic_code,
            "energy": self._energy,
            "age": self._age,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(cell_id={self._cell_id!r}, "
            f"genetic_code={self._genetic_code!r}, energy={self._energy}, age={self._age})"
        )
