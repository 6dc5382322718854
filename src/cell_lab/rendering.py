"""
Text rendering for cells, sessions and experiment reports.
"""

from typing import Dict, Iterable, List

from cell_lab.biology import Cell, CellKind

# Section headings per kind, in display order
KIND_HEADINGS = {
    CellKind.BASIC: "🔹 Basic Cells:",
    CellKind.BLOOD: "🩸 Blood Cells:",
    CellKind.BRAIN: "🧠 Brain Cells:",
}


def render_cell(cell: Cell) -> str:
    """One line: [Kind] plus the cell's own description."""
    return f"[{cell.kind.value.capitalize()}] {cell.describe()}"


def render_cell_list(cells: Iterable[Cell]) -> List[str]:
    return [f"{i}. {render_cell(cell)}" for i, cell in enumerate(cells, start=1)]


def render_census(census: Dict[str, int]) -> List[str]:
    lines = [f"Total cells: {sum(census.values())}"]
    for kind in CellKind:
        lines.append(f"- {kind.value.capitalize()} cells: {census.get(kind.value, 0)}")
    return lines


def render_grouped(cells: Iterable[Cell]) -> List[str]:
    """Cells grouped under a heading per kind, with variant details."""
    cells = list(cells)
    if not cells:
        return ["🔬 Lab is empty! No cells found."]

    lines = [f"Total cells: {len(cells)}"]
    for kind, heading in KIND_HEADINGS.items():
        group = [cell for cell in cells if cell.kind == kind]
        if not group:
            continue
        lines.append("")
        lines.append(heading)
        for i, cell in enumerate(group, start=1):
            lines.append(f"   {i}. {cell.describe()}")
            if kind == CellKind.BRAIN:
                lines.append(f"      Knowledge: {', '.join(cell.to_dict()['knowledge'])}")
    return lines


def render_template(name: str, snapshot: Dict) -> List[str]:
    lines = [
        f"📋 Template: {name}",
        f"   Kind: {snapshot['kind']}",
        f"   DNA: {snapshot['genetic_code']}",
        f"   Energy: {snapshot['energy']}, Age: {snapshot['age']}",
    ]
    if "oxygen_level" in snapshot:
        lines.append(f"   O2: {snapshot['oxygen_level']}/100")
    if "knowledge" in snapshot:
        lines.append(f"   Knowledge: {', '.join(snapshot['knowledge'])}")
    return lines


def render_experiment(report) -> List[str]:
    """Summary of an ExperimentReport."""
    lines = [f"📊 Experiment Results ({report.rounds} round(s)):"]
    lines.extend(render_census(report.census))
    if report.failures:
        lines.append("")
        lines.append("Failed divisions:")
        lines.extend(f"  ❌ {message}" for message in report.failures)
    lines.append("")
    lines.extend(render_cell_list(report.cells))

    brains = [cell for cell in report.cells if cell.kind == CellKind.BRAIN]
    if brains:
        lines.append("")
        lines.append(f"Brain cell knowledge: {', '.join(brains[0].get_knowledge())}")
    return lines
