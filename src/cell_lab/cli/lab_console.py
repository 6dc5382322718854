"""
Interactive console for the cell lab.

Runs the menu loop on top of a LabSession. Input and output go through
injectable callables so the console can be driven from tests.
Domain errors (CellLabError) are shown to the user; everything else
propagates.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, Dict, List, Optional

from cell_lab.biology import CellKind
from cell_lab.cell_factory import CellFactory
from cell_lab.config import defaults
from cell_lab.config.loader import load_templates_from_yaml
from cell_lab.config.settings import CellLabSettings
from cell_lab.exceptions import CellLabError
from cell_lab.identity import SeededIdFactory
from cell_lab.lab import LabSession, run_experiment
from cell_lab.rendering import (
    render_cell_list,
    render_experiment,
    render_grouped,
    render_template,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

MENU = [
    "1. 🔬 Create Cell from Template",
    "2. 🌱 Make Cell Divide",
    "3. 💪 Help Cell Grow",
    "4. 📊 View All Cells",
    "5. 🧠 Teach Brain Cell",
    "6. 🩸 Give Oxygen to Blood Cell",
    "7. 🏭 Manage Templates",
    "8. 🚪 Exit Lab",
]


def _parse_choice(raw: str) -> Optional[int]:
    """Turn a 1-based menu answer into a 0-based index (None if not a number)."""
    try:
        return int(raw.strip()) - 1
    except ValueError:
        return None


class LabConsole:
    """Menu-driven front end for a LabSession."""

    def __init__(
        self,
        session: LabSession,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self.session = session
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.running = True
        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.create_cell,
            "2": self.divide_cell,
            "3": self.grow_cell,
            "4": self.view_cells,
            "5": self.teach_brain_cell,
            "6": self.give_oxygen,
            "7": self.manage_templates,
            "8": self.exit_lab,
        }

    def say(self, *lines: str) -> None:
        for line in lines:
            self.output_fn(line)

    def ask(self, prompt: str) -> str:
        return self.input_fn(prompt)

    def run(self) -> None:
        """Loop until the user exits or input runs out."""
        self.say("🧬 Welcome to the Interactive Cell Division Lab!")
        while self.running:
            self.show_menu()
            try:
                choice = self.ask(f"\nEnter your choice (1-{len(MENU)}): ")
                self.handle_choice(choice)
            except EOFError:
                logger.info("Input closed; leaving the lab")
                self.exit_lab()

    def show_menu(self) -> None:
        self.say("\n📋 CELL LAB MENU", *MENU)
        if len(self.session):
            self.say(f"\n📈 Current cells in lab: {len(self.session)}")

    def handle_choice(self, choice: str) -> None:
        action = self._actions.get(choice.strip())
        if action is None:
            self.say(f"❌ Invalid choice! Please enter 1-{len(MENU)}.")
            return
        try:
            action()
        except CellLabError as e:
            logger.warning(f"Command {choice.strip()} failed: {e}")
            self.say(f"❌ {e}")

    # ------------------------------------------------------------------
    # Menu actions
    # ------------------------------------------------------------------

    def _choose(self, count: int, prompt: str) -> Optional[int]:
        index = _parse_choice(self.ask(f"\n{prompt} (1-{count}): "))
        if index is None or not 0 <= index < count:
            self.say("❌ Invalid number!")
            return None
        return index

    def _require_cells(self) -> bool:
        if not len(self.session):
            self.say("❌ No cells in the lab! Create some cells first.")
            return False
        return True

    def create_cell(self) -> None:
        names = self.session.template_names()
        self.say("\n🔬 CREATE NEW CELL", "Available cell templates:")
        self.say(*[f"{i}. {name}" for i, name in enumerate(names, start=1)])
        index = self._choose(len(names), "Choose template")
        if index is None:
            return
        cell = self.session.create(names[index])
        self.say(f"\n✅ Successfully created {names[index]} cell!", f"📋 {cell.describe()}")

    def divide_cell(self) -> None:
        self.say("\n🌱 CELL DIVISION")
        if not self._require_cells():
            return
        self.say("Cells in lab:", *render_cell_list(self.session.cells))
        index = self._choose(len(self.session), "Choose cell to divide")
        if index is None:
            return

        cell = self.session.cells[index]
        self.say(f"\n🔍 Selected: {cell.describe()}")
        assist = False
        if not cell.can_divide():
            self.say("⚠️  Cell doesn't have enough energy to divide!")
            assist = self.ask("Would you like to help it grow first? (y/n): ").strip().lower() == "y"

        parent, child = self.session.divide(index, assist_growth=assist)
        self.say(
            "\n🎉 Division successful!",
            f"👶 New cell: {child.describe()}",
            f"👴 Parent cell: {parent.describe()}",
        )

    def grow_cell(self) -> None:
        self.say("\n💪 HELP CELL GROW")
        if not self._require_cells():
            return
        self.say("Cells in lab:", *render_cell_list(self.session.cells))
        index = self._choose(len(self.session), "Choose cell to help grow")
        if index is None:
            return
        before = self.session.cells[index].describe()
        cell = self.session.grow(index)
        self.say(f"\n🔍 Before: {before}", f"✅ After:  {cell.describe()}")

    def view_cells(self) -> None:
        self.say("\n📊 ALL CELLS IN LAB", *render_grouped(self.session.cells))

    def teach_brain_cell(self) -> None:
        self.say("\n🧠 TEACH BRAIN CELL")
        brains = self.session.cells_of_kind(CellKind.BRAIN)
        if not brains:
            self.say("❌ No brain cells in the lab! Create a brain cell first.")
            return
        self.say("Available brain cells:")
        for i, cell in enumerate(brains, start=1):
            self.say(f"{i}. Cell {cell.cell_id} - Knowledge: {', '.join(cell.get_knowledge())}")
        index = self._choose(len(brains), "Choose brain cell")
        if index is None:
            return

        fact = self.ask("What would you like to teach? ")
        if not fact.strip():
            self.say("❌ Please enter some knowledge to teach!")
            return
        self.session.teach(index, fact)
        self.say(f'✅ Brain cell learned: "{fact}"')

    def give_oxygen(self) -> None:
        self.say("\n🩸 GIVE OXYGEN TO BLOOD CELL")
        bloods = self.session.cells_of_kind(CellKind.BLOOD)
        if not bloods:
            self.say("❌ No blood cells in the lab! Create a blood cell first.")
            return
        self.say("Available blood cells:")
        for i, cell in enumerate(bloods, start=1):
            self.say(f"{i}. Cell {cell.cell_id} - O2 Level: {cell.oxygen_level}/100")
        index = self._choose(len(bloods), "Choose blood cell")
        if index is None:
            return

        low, high = defaults.OXYGEN_DOSE_MIN, defaults.OXYGEN_DOSE_MAX
        raw = self.ask(f"How much oxygen to give ({low}-{high})? ")
        try:
            amount = int(raw.strip())
        except ValueError:
            amount = 0
        if not low <= amount <= high:
            self.say(f"❌ Please enter a valid amount ({low}-{high})!")
            return
        cell = self.session.oxygenate(index, amount)
        self.say(f"✅ Blood cell now carrying {cell.oxygen_level}/100 oxygen!")

    def manage_templates(self) -> None:
        self.say("\n🏭 TEMPLATE MANAGEMENT", "Current templates:")
        self.say(*[f"{i}. {name}" for i, name in enumerate(self.session.template_names(), start=1)])
        self.say("\nOptions:", "1. Add custom template", "2. View template details", "3. Go back")
        choice = self.ask("\nChoose option (1-3): ").strip()
        if choice == "1":
            self.add_custom_template()
        elif choice == "2":
            self.view_template_details()
        elif choice != "3":
            self.say("❌ Invalid choice!")

    def add_custom_template(self) -> None:
        name = self.ask("Enter template name: ").strip()
        if not name:
            self.say("❌ Template name cannot be empty!")
            return
        definition = {"genetic_code": self.ask("Enter DNA sequence: ")}

        self.say("Choose cell type:", "1. Basic Cell", "2. Blood Cell", "3. Brain Cell")
        type_choice = self.ask("Enter choice (1-3): ").strip()
        if type_choice == "1":
            definition["kind"] = CellKind.BASIC.value
        elif type_choice == "2":
            definition["kind"] = CellKind.BLOOD.value
            raw = self.ask("Initial oxygen level (0-100): ").strip() or "0"
            try:
                definition["oxygen_level"] = int(raw)
            except ValueError:
                self.say("❌ Oxygen level must be a number!")
                return
        elif type_choice == "3":
            definition["kind"] = CellKind.BRAIN.value
            definition["knowledge"] = self.ask("Initial knowledge (comma-separated): ")
        else:
            self.say("❌ Invalid cell type!")
            return

        self.session.add_template(name, definition)
        self.say(f'✅ Added template "{name}" successfully!')

    def view_template_details(self) -> None:
        names = self.session.template_names()
        index = self._choose(len(names), "Choose template to view")
        if index is None:
            return
        self.say(*render_template(names[index], self.session.factory.get_template(names[index])))

    def exit_lab(self) -> None:
        census = self.session.census()
        self.say(
            "\n🎯 Lab Session Complete!",
            f"- Total cells created: {len(self.session)}",
            *[f"- {kind.capitalize()} cells: {count}" for kind, count in census.items()],
            "\nThanks for visiting the Cell Division Lab! 🧬",
        )
        self.running = False


def build_session(settings: CellLabSettings) -> LabSession:
    """Create a LabSession from settings (id seed, extra templates)."""
    id_factory = SeededIdFactory(settings.id_seed) if settings.id_seed is not None else None
    templates = {}
    if settings.templates_path:
        templates = load_templates_from_yaml(settings.templates_path, id_factory=id_factory)
        logger.info(f"Loaded {len(templates)} template(s) from {settings.templates_path}")
    factory = CellFactory(id_factory=id_factory, templates=templates)
    return LabSession(factory=factory, id_factory=id_factory, assist_growth=settings.assist_growth)


def main(argv: Optional[List[str]] = None) -> int:
    settings = CellLabSettings.load_from_env()
    # Unknown CELL_LAB_LOG_LEVEL values fall back to the default
    log_level = settings.log_level if settings.log_level in LOG_LEVELS else defaults.DEFAULT_LOG_LEVEL

    parser = argparse.ArgumentParser(
        description="Interactive cell division lab.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
  cell-lab
  cell-lab --experiment --rounds 3 --seed 42
  cell-lab --templates my_templates.yaml
        """,
    )
    parser.add_argument(
        "--experiment",
        action="store_true",
        help="Run the batch growth/division experiment instead of the menu",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=settings.experiment_rounds,
        help="Number of experiment rounds",
    )
    parser.add_argument(
        "--templates",
        "-t",
        default=settings.templates_path,
        help="YAML file with extra templates",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.id_seed,
        help="Seed for deterministic cell ids",
    )
    parser.add_argument(
        "--log-level",
        default=log_level,
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging level",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=defaults.LOG_FORMAT)

    if args.templates and not os.path.exists(args.templates):
        print(f"❌ Error: Template file not found: {args.templates}")
        return 1
    if args.rounds < 0:
        print(f"❌ Error: --rounds must be non-negative, got {args.rounds}")
        return 1

    settings.templates_path = args.templates
    settings.id_seed = args.seed
    settings.experiment_rounds = args.rounds

    try:
        session = build_session(settings)
    except (CellLabError, ValueError, TypeError) as e:
        print(f"❌ Error: Invalid templates in {args.templates}: {e}")
        return 1

    if args.experiment:
        report = run_experiment(session, rounds=settings.experiment_rounds)
        print("\n".join(render_experiment(report)))
        return 0

    LabConsole(session).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
