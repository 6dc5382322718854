"""
Configuration loading utilities.

Template files look like:

    templates:
      stem:
        kind: basic
        genetic_code: STEM_DNA
      runner:
        kind: blood
        genetic_code: HUMAN_DNA
        oxygen_level: 90
"""
import os
import yaml
from dataclasses import fields
from typing import Dict, Any, Optional

from cell_lab.biology import Cell
from cell_lab.cell_factory import build_cell
from cell_lab.identity import IdFactory
from .settings import CellLabSettings


def load_yaml_config(path: str) -> Dict[str, Any]:
    """Load configuration from a YAML file.

    Raises:
        ValueError: If the file is not valid YAML or its top level is not a mapping
    """
    if not os.path.exists(path):
        return {}

    with open(path, 'r', encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Could not parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Top level of {path} must be a mapping, got {type(data).__name__}")
    return data


def load_settings_from_yaml(path: str) -> CellLabSettings:
    """Load CellLabSettings from a YAML file.

    Unknown keys are ignored; missing keys keep their defaults.
    """
    data = load_yaml_config(path)
    valid_keys = {f.name for f in fields(CellLabSettings)}
    filtered_data = {k: v for k, v in data.items() if k in valid_keys}
    return CellLabSettings(**filtered_data)


def load_templates_from_yaml(path: str, id_factory: Optional[IdFactory] = None) -> Dict[str, Cell]:
    """Build template cells from the `templates:` section of a YAML file.

    Raises:
        ValueError: If the section is not a mapping, or a definition is invalid
    """
    data = load_yaml_config(path)
    section = data.get("templates") or {}
    if not isinstance(section, dict):
        raise ValueError(f"'templates' in {path} must be a mapping, got {type(section).__name__}")

    templates: Dict[str, Cell] = {}
    for name, definition in section.items():
        if not isinstance(definition, dict):
            raise ValueError(f"Template '{name}' in {path} must be a mapping")
        templates[str(name)] = build_cell(definition, id_factory=id_factory)
    return templates
