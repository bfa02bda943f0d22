"""Configuration for logtree registries.

Two sources, applied in this order (later wins for the same logger):
  1. Config file — .logtree.json found by walking up from a directory,
     or an explicit path
  2. Level specs — 'NAME:LEVEL' strings, typically from the command line

Config file schema::

    {
        "hierarchical": true,
        "record_stack_trace_at": "SEVERE",
        "levels": {"": "INFO", "net": "WARNING", "net.http": "FINE"}
    }

Level spec syntax:
    net.http:FINE       # logger 'net.http' at FINE
    :WARNING            # root at WARNING
    WARNING             # root at WARNING (bare level name)
    net.http:           # clear the override on 'net.http' (inherit)
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .levels import Level, parse_level


CONFIG_FILENAME = ".logtree.json"


@dataclass
class LevelSpec:
    """A parsed 'NAME:LEVEL' spec. level=None clears an override."""
    name: str
    level: Optional[Level]


# ---------------------------------------------------------------------------
# Level specs
# ---------------------------------------------------------------------------
def parse_level_spec(spec: str) -> LevelSpec:
    """Parse a level spec string into a LevelSpec.

    Args:
        spec: Spec like "net.http:FINE", ":WARNING" or "WARNING"

    Returns:
        LevelSpec with the logger name and level

    Raises:
        ValueError: If the level part names no known level
    """
    spec = spec.strip()
    name, sep, level_text = spec.rpartition(':')
    if not sep:
        # Bare level name applies to the root
        return LevelSpec(name='', level=_parse_spec_level(spec, spec))
    if not level_text:
        return LevelSpec(name=name, level=None)
    return LevelSpec(name=name, level=_parse_spec_level(level_text, spec))


def _parse_spec_level(text, spec):
    try:
        return parse_level(text)
    except ValueError as e:
        raise ValueError(f"Invalid level spec '{spec}': {e}") from None


def apply_level_specs(registry, specs: Iterable[str]) -> None:
    """Parse and apply level specs to a registry, in order."""
    for spec in specs:
        parsed = parse_level_spec(spec)
        registry.get_logger(parsed.name).set_level(parsed.level)


# ---------------------------------------------------------------------------
# Config files
# ---------------------------------------------------------------------------
def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .logtree.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_json(path):
    """Load a JSON file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def load_config(path=None, start_dir=None) -> dict:
    """Load an explicit config file, or the nearest .logtree.json.

    Returns {} when nothing is found.
    """
    if path is None:
        path = find_project_config(start_dir)
        if path is None:
            return {}
    return load_json(path)


def apply_config(registry, cfg: dict) -> None:
    """Apply a parsed config mapping to a registry.

    Mode switches go first so the level overrides below them are legal.
    Levels are applied root first, then shallow names before deep ones.

    Raises:
        ValueError: If a level value is not a known level, or
            'hierarchical' is not a JSON boolean
        UnsupportedOperationError: If non-root levels are given while
            hierarchical logging stays disabled
    """
    if "hierarchical" in cfg:
        hierarchical = cfg["hierarchical"]
        if not isinstance(hierarchical, bool):
            raise ValueError(
                f"Invalid 'hierarchical' setting {hierarchical!r} (expected true or false)"
            )
        registry.hierarchical_logging_enabled = hierarchical

    threshold = cfg.get("record_stack_trace_at")
    if threshold is not None:
        registry.record_stack_trace_at = parse_level(threshold)

    levels = cfg.get("levels") or {}
    for name in sorted(levels, key=lambda n: (n.count('.') if n else -1, n)):
        value = levels[name]
        level = None if value is None else parse_level(value)
        registry.get_logger(name).set_level(level)
