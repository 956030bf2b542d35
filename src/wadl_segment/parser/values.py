"""Parameter values for rendering path segments.

A values file is read as YAML so that ``true``/``false`` arrive as booleans
(relevant for matrix params). Command line pairs are kept as literal text
apart from the exact words ``true`` and ``false``.
"""

from pathlib import Path
from typing import Any

import yaml

BOOLEAN_WORDS = {"true": True, "false": False}


def load_values(file_path: Path) -> dict[str, Any]:
    """Load a YAML mapping of parameter name to value."""
    data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{file_path} must contain a mapping of parameter values")
    return {str(k): v for k, v in data.items()}


def parse_pairs(pairs: tuple[str, ...] | list[str]) -> dict[str, Any]:
    """Parse ``name=value`` strings, later pairs overriding earlier ones.

    ``007`` stays ``007`` and ``no`` stays ``no``; only ``true``/``false``
    become booleans.
    """
    result: dict[str, Any] = {}
    for pair in pairs:
        name, sep, raw = pair.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Expected name=value, got {pair!r}")
        result[name.strip()] = BOOLEAN_WORDS.get(raw, raw)
    return result
