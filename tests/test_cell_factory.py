"""Tests for the CellFactory template registry and build_cell."""

import pytest

from cell_lab.biology import BloodCell, BrainCell, Cell, CellKind
from cell_lab.cell_factory import CellFactory, build_cell
from cell_lab.exceptions import InsufficientEnergyError, UnknownTemplateError


class TestDefaultTemplates:

    def test_default_names(self, factory):
        assert factory.list_names() == ["basic", "blood", "brain"]

    def test_default_template_state(self, factory):
        assert factory.get_template("basic")["genetic_code"] == "HUMAN_DNA"
        assert factory.get_template("blood")["oxygen_level"] == 50
        assert factory.get_template("brain")["knowledge"] == ["2+2=4", "sky is blue"]
        for name in factory.list_names():
            snapshot = factory.get_template(name)
            assert (snapshot["energy"], snapshot["age"]) == (100, 0)


class TestInstantiate:
    """instantiate() grows the template, then returns its clone."""

    def test_instantiate_blood(self, factory):
        """Template at 100: grow keeps it at 100 (age 1), clone leaves 70 (age 2)."""
        child = factory.instantiate("blood")

        assert isinstance(child, BloodCell)
        assert child.energy == 80
        assert child.age == 0
        assert child.oxygen_level == 50

        template = factory.get_template("blood")
        assert template["energy"] == 70
        assert template["age"] == 2

    def test_instantiate_kinds(self, factory):
        assert factory.instantiate("basic").kind == CellKind.BASIC
        brain = factory.instantiate("brain")
        assert brain.kind == CellKind.BRAIN
        assert brain.get_knowledge() == ["2+2=4", "sky is blue"]

    def test_each_instance_is_new(self, factory):
        first = factory.instantiate("basic")
        second = factory.instantiate("basic")
        assert first is not second
        assert first.cell_id != second.cell_id

    def test_templates_age_with_use(self, factory):
        """Each call is one grow (+20) and one clone (-30): 100 -> 70 -> 60 -> 50."""
        energies = []
        for _ in range(3):
            factory.instantiate("basic")
            energies.append(factory.get_template("basic")["energy"])
        assert energies == [70, 60, 50]
        assert factory.get_template("basic")["age"] == 6

    def test_exhausted_template_raises(self, factory):
        """Brain template loses 20 net per use and eventually cannot divide."""
        # 100 -> 60 -> 40 -> 20 ; next: grow to 40 < 60
        for _ in range(3):
            factory.instantiate("brain")
        with pytest.raises(InsufficientEnergyError):
            factory.instantiate("brain")

    def test_failed_clone_keeps_grow(self, factory):
        """The failure is not masked and the clone step mutates nothing."""
        weak = Cell("W", energy=10, id_factory=lambda: "w")
        factory.register("weak", weak)
        with pytest.raises(InsufficientEnergyError):
            factory.instantiate("weak")
        assert weak.energy == 30
        assert weak.age == 1

    def test_exhausted_default_template_keeps_grow(self, factory):
        """Each instantiate grows the stored template before cloning; a failed clone leaves that growth."""
        for _ in range(6):
            factory.instantiate("basic")
        template = factory.get_template("basic")
        assert (template["energy"], template["age"]) == (20, 12)

        with pytest.raises(InsufficientEnergyError):
            factory.instantiate("basic")
        template = factory.get_template("basic")
        assert (template["energy"], template["age"]) == (40, 13)

    def test_unknown_template(self, factory):
        """Unknown names raise and leave every template untouched."""
        before = {name: factory.get_template(name) for name in factory.list_names()}
        with pytest.raises(UnknownTemplateError) as exc_info:
            factory.instantiate("liver")
        assert exc_info.value.name == "liver"
        assert exc_info.value.available == ["basic", "blood", "brain"]
        assert "liver" in str(exc_info.value)
        after = {name: factory.get_template(name) for name in factory.list_names()}
        assert before == after

    def test_unknown_template_is_key_error(self, factory):
        with pytest.raises(KeyError):
            factory.instantiate("nope")


class TestRegister:

    def test_register_new(self, factory):
        cell = BrainCell("ALIEN", knowledge=["x"])
        factory.register("alien", cell)
        assert factory.list_names() == ["basic", "blood", "brain", "alien"]
        assert "alien" in factory
        assert factory.instantiate("alien").genetic_code == "ALIEN"

    def test_register_replaces(self, factory):
        factory.register("basic", Cell("OTHER"))
        assert factory.list_names() == ["basic", "blood", "brain"]
        assert factory.instantiate("basic").genetic_code == "OTHER"

    def test_register_accepts_any_state(self, factory):
        """Template state is not validated; a weak template is allowed."""
        factory.register("weak", Cell("W", energy=0))
        assert factory.get_template("weak")["energy"] == 0

    def test_register_rejects_non_cells(self, factory):
        with pytest.raises(TypeError):
            factory.register("bad", "not a cell")

    def test_register_rejects_empty_name(self, factory):
        with pytest.raises(ValueError):
            factory.register("", Cell("X"))

    def test_templates_argument(self, id_factory):
        factory = CellFactory(id_factory=id_factory, templates={"stem": Cell("STEM")})
        assert factory.list_names() == ["basic", "blood", "brain", "stem"]
        assert len(factory) == 4

    def test_list_names_is_a_copy(self, factory):
        factory.list_names().append("ghost")
        assert "ghost" not in factory


class TestBuildCell:

    def test_basic_by_default(self):
        cell = build_cell({"genetic_code": "X", "energy": 40})
        assert type(cell) is Cell
        assert cell.energy == 40

    def test_blood(self):
        cell = build_cell({"kind": "blood", "genetic_code": "X", "oxygen_level": 20})
        assert isinstance(cell, BloodCell)
        assert cell.oxygen_level == 20

    def test_brain_comma_separated_knowledge(self):
        cell = build_cell({"kind": "Brain", "genetic_code": "X", "knowledge": "a, b ,,c"})
        assert cell.get_knowledge() == ["a", "b", "c"]

    def test_brain_list_knowledge(self):
        cell = build_cell({"kind": "brain", "genetic_code": "X", "knowledge": ["a"]})
        assert cell.get_knowledge() == ["a"]

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown cell kind"):
            build_cell({"kind": "liver", "genetic_code": "X"})

    def test_missing_genetic_code(self):
        with pytest.raises(ValueError, match="genetic_code"):
            build_cell({"kind": "basic"})

    def test_variant_key_on_wrong_kind(self):
        with pytest.raises(ValueError, match="oxygen_level"):
            build_cell({"kind": "brain", "genetic_code": "X", "oxygen_level": 5})

    def test_uses_id_factory(self, id_factory):
        assert build_cell({"genetic_code": "X"}, id_factory=id_factory).cell_id == "cell-0001"
