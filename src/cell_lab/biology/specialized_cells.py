"""
Specialized cells.

BloodCell carries oxygen and passes its current level to its children.
BrainCell accumulates knowledge and passes an independent copy of it to
its children. Both inherit grow() and the gating in Cell.clone(); they
only change what the child looks like.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from cell_lab.biology.cell import Cell, CellKind, _check_int
from cell_lab.config import defaults
from cell_lab.exceptions import InvalidFactError
from cell_lab.identity import IdFactory


class BloodCell(Cell):
    """Cell that carries oxygen (0-100).

    Oxygen survives division: the child starts with the parent's level,
    while its energy and age reset like any newborn.
    """

    _kind = CellKind.BLOOD

    def __init__(
        self,
        genetic_code: str,
        oxygen_level: int = defaults.DEFAULT_OXYGEN,
        energy: int = defaults.DEFAULT_ENERGY,
        age: int = defaults.DEFAULT_AGE,
        id_factory: Optional[IdFactory] = None,
    ):
        super().__init__(genetic_code, energy=energy, age=age, id_factory=id_factory)
        self._oxygen_level = _check_int(
            "oxygen_level", oxygen_level, defaults.MIN_OXYGEN, defaults.MAX_OXYGEN
        )

    @property
    def oxygen_level(self) -> int:
        return self._oxygen_level

    def carry_oxygen(self, amount: int) -> None:
        """Take on `amount` oxygen units; the level is clamped to [0, 100]."""
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise TypeError(f"Oxygen amount must be an integer, got {amount!r}")
        level = self._oxygen_level + amount
        self._oxygen_level = max(defaults.MIN_OXYGEN, min(defaults.MAX_OXYGEN, level))

    def _make_offspring(self) -> "BloodCell":
        return BloodCell(
            self.genetic_code,
            oxygen_level=self._oxygen_level,
            energy=defaults.NEWBORN_ENERGY,
            age=defaults.NEWBORN_AGE,
            id_factory=self._id_factory,
        )

    def describe(self) -> str:
        return f"{super().describe()}, O2={self._oxygen_level}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["oxygen_level"] = self._oxygen_level
        return data


class BrainCell(Cell):
    """Cell that stores an ordered list of learned facts.

    The list is never shared: construction, clone() and every read hand
    out a copy.
    """

    _kind = CellKind.BRAIN

    def __init__(
        self,
        genetic_code: str,
        knowledge: Optional[Iterable[str]] = None,
        energy: int = defaults.DEFAULT_ENERGY,
        age: int = defaults.DEFAULT_AGE,
        id_factory: Optional[IdFactory] = None,
    ):
        super().__init__(genetic_code, energy=energy, age=age, id_factory=id_factory)
        self._knowledge: List[str] = []
        for fact in knowledge or []:
            self._validate_fact(fact)
            self._knowledge.append(fact)

    @staticmethod
    def _validate_fact(fact: Any) -> None:
        if not isinstance(fact, str):
            raise TypeError(f"Facts must be strings, got {type(fact).__name__}")
        if not fact.strip():
            raise InvalidFactError("Cannot learn an empty fact")

    @property
    def knowledge(self) -> List[str]:
        return list(self._knowledge)

    def get_knowledge(self) -> List[str]:
        return list(self._knowledge)

    def learn(self, fact: str) -> None:
        """Append a fact. Blank facts are refused with InvalidFactError."""
        self._validate_fact(fact)
        self._knowledge.append(fact)

    def _make_offspring(self) -> "BrainCell":
        return BrainCell(
            self.genetic_code,
            knowledge=self._knowledge,
            energy=defaults.NEWBORN_ENERGY,
            age=defaults.NEWBORN_AGE,
            id_factory=self._id_factory,
        )

    def describe(self) -> str:
        return f"{super().describe()}, Knowledge={len(self._knowledge)}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["knowledge"] = list(self._knowledge)
        return data
