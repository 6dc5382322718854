"""
Cell template registry.

A CellFactory keeps one live template cell per name. Asking for a cell
does not construct one from scratch: the template is grown once and then
divided, so the caller receives the template's own child. Templates age
and lose energy every time they are used.

This module also provides build_cell(), the factory function that turns a
plain definition (from YAML or the console) into a cell.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type

from cell_lab.biology import BloodCell, BrainCell, Cell, CellKind
from cell_lab.config import defaults
from cell_lab.exceptions import UnknownTemplateError
from cell_lab.identity import IdFactory


# Registry mapping kind strings to cell classes
CELL_CLASSES: Dict[str, Type[Cell]] = {
    CellKind.BASIC.value: Cell,
    CellKind.BLOOD.value: BloodCell,
    CellKind.BRAIN.value: BrainCell,
}

# Keys accepted only by one variant
_VARIANT_KEYS = {
    "oxygen_level": CellKind.BLOOD.value,
    "knowledge": CellKind.BRAIN.value,
}


def build_cell(definition: Mapping[str, Any], id_factory: Optional[IdFactory] = None) -> Cell:
    """Build a cell from a plain definition.

    Args:
        definition: Mapping with "kind" (default "basic"), "genetic_code",
            and optionally "energy", "age", "oxygen_level" (blood) or
            "knowledge" (brain; list or comma-separated string)
        id_factory: Id source for the new cell

    Returns:
        Cell of the requested kind

    Raises:
        ValueError: If the kind is unknown, genetic_code is missing, or a
            variant key is given for the wrong kind

    Example:
        >>> cell = build_cell({"kind": "blood", "genetic_code": "X", "oxygen_level": 20})
        >>> cell.oxygen_level
        20
    """
    kind = str(definition.get("kind", CellKind.BASIC.value)).lower()
    if kind not in CELL_CLASSES:
        raise ValueError(
            f"Unknown cell kind: {kind}. "
            f"Available kinds: {list(CELL_CLASSES.keys())}"
        )
    if "genetic_code" not in definition:
        raise ValueError(f"Cell definition is missing 'genetic_code': {dict(definition)}")

    for key, owner in _VARIANT_KEYS.items():
        if key in definition and kind != owner:
            raise ValueError(f"'{key}' only applies to {owner} cells, not {kind}")

    kwargs: Dict[str, Any] = {"id_factory": id_factory}
    for key in ("energy", "age"):
        if key in definition:
            kwargs[key] = definition[key]

    if kind == CellKind.BLOOD.value and "oxygen_level" in definition:
        kwargs["oxygen_level"] = definition["oxygen_level"]

    if kind == CellKind.BRAIN.value and "knowledge" in definition:
        knowledge = definition["knowledge"]
        if isinstance(knowledge, str):
            knowledge = [k.strip() for k in knowledge.split(",") if k.strip()]
        kwargs["knowledge"] = knowledge or []

    return CELL_CLASSES[kind](definition["genetic_code"], **kwargs)


class CellFactory:
    """Named store of template cells that hands out their clones.

    Args:
        id_factory: Id source for the default templates (and therefore for
            every cell they produce)
        templates: Extra name -> cell entries registered after the defaults;
            an entry named like a default replaces it

    Example:
        >>> factory = CellFactory()
        >>> factory.list_names()
        ['basic', 'blood', 'brain']
        >>> factory.instantiate("blood").oxygen_level
        50
    """

    def __init__(
        self,
        id_factory: Optional[IdFactory] = None,
        templates: Optional[Mapping[str, Cell]] = None,
    ):
        self._templates: Dict[str, Cell] = {}
        for name, definition in defaults.DEFAULT_TEMPLATES.items():
            self._templates[name] = build_cell(definition, id_factory=id_factory)
        for name, cell in (templates or {}).items():
            self.register(name, cell)

    def instantiate(self, name: str) -> Cell:
        """Grow the named template once and return its child.

        Raises:
            UnknownTemplateError: If no template has this name (nothing is
                mutated)
            InsufficientEnergyError: If the template is still too weak to
                divide after growing
        """
        template = self._templates.get(name)
        if template is None:
            raise UnknownTemplateError(name, self.list_names())

        template.grow()
        return template.clone()

    def register(self, name: str, cell: Cell) -> None:
        """Add a template, replacing any existing one with the same name."""
        if not isinstance(name, str) or not name:
            raise ValueError(f"Template name must be a non-empty string, got {name!r}")
        if not isinstance(cell, Cell):
            raise TypeError(f"Templates must be cells, got {type(cell).__name__}")
        self._templates[name] = cell

    def list_names(self) -> List[str]:
        return list(self._templates.keys())

    def get_template(self, name: str) -> Dict[str, Any]:
        """Read-only snapshot of a template's current state."""
        template = self._templates.get(name)
        if template is None:
            raise UnknownTemplateError(name, self.list_names())
        return template.to_dict()

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)
