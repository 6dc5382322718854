"""
Pytest configuration for cell_lab tests.
"""
import sys
import os
import pytest

# Add src directory to Python path so tests can import cell_lab modules
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), "../src"))
sys.path.insert(0, src_path)


@pytest.fixture
def id_factory():
    """Readable, deterministic ids: cell-0001, cell-0002, ..."""
    from cell_lab.identity import SequentialIdFactory
    return SequentialIdFactory()


@pytest.fixture
def factory(id_factory):
    """CellFactory with the three default templates."""
    from cell_lab.cell_factory import CellFactory
    return CellFactory(id_factory=id_factory)


@pytest.fixture
def session(factory, id_factory):
    """Empty lab session backed by the default factory."""
    from cell_lab.lab import LabSession
    return LabSession(factory=factory, id_factory=id_factory)


@pytest.fixture
def scripted_console(session):
    """Factory fixture: console driven by a list of answers.

    Returns (console, output_lines). Running past the end of the script
    raises EOFError, which the console treats as "exit".
    """
    from cell_lab.cli.lab_console import LabConsole

    def _make(answers):
        remaining = list(answers)
        output = []

        def _input(prompt):
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        console = LabConsole(session, input_fn=_input, output_fn=output.append)
        return console, output

    return _make
