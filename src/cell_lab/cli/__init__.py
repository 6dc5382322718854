"""Command-line entry points for the cell lab."""
