"""Read and write chip descriptions (one YAML file per chip)."""

from pathlib import Path

import yaml  # PyYAML
from jsonschema import Draft202012Validator
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from hpmdata.errors import ChipFileError

SCHEMA_PATH = Path(__file__).parent / 'chip.schema.yaml'

_validator = None


def _chip_validator():
    global _validator
    if _validator is None:
        schema = yaml.safe_load(SCHEMA_PATH.read_text(encoding='utf-8'))
        Draft202012Validator.check_schema(schema)
        _validator = Draft202012Validator(schema)
    return _validator


def load_chip(path: Path):
    """Load a chip description with ruamel.yaml (roundtrip-safe)."""
    yaml_rt = YAML()
    with open(path, 'r', encoding='utf-8') as f:
        return yaml_rt.load(f)


def dump_chip(chip, path: Path):
    """Write a chip description back, keeping key order and comments."""
    yaml_rt = YAML()
    yaml_rt.width = 4096
    yaml_rt.indent(mapping=2, sequence=4, offset=2)
    with open(path, 'w', encoding='utf-8') as f:
        yaml_rt.dump(chip, f)


def dump_mapping(mapping: dict, stream):
    """Write a {name: number} table as a plain YAML mapping."""
    yaml_rt = YAML()
    yaml_rt.dump(CommentedMap(mapping), stream)


def validate_chip(chip, source=''):
    """Check the structure of a chip description before it gets modified.

    Raises ChipFileError listing every violation.
    """
    errors = sorted(_chip_validator().iter_errors(chip), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = []
        for e in errors:
            loc = "/".join([str(p) for p in e.path]) or "(root)"
            lines.append(f"   - at {loc}: {e.message}")
        raise ChipFileError(f"{source or 'chip'} failed validation:\n" + "\n".join(lines))
