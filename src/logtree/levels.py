"""
Severity levels for logtree.

A Level is an immutable (name, value) pair. Levels are ordered, compared
and hashed by their integer value only, so two levels that share a value
are interchangeable even if their names differ.

Level assignments:
    ←── quieter ────────────────────────────────────── louder ──→
    2000  1200   1000    900      800   700     500   400    300     0
    OFF   SHOUT  SEVERE  WARNING  INFO  CONFIG  FINE  FINER  FINEST  ALL

A record is emitted when record.level >= effective level of its logger.
Custom levels are allowed; keep their values strictly between ALL and OFF.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, eq=False)
class Level:
    """A named, ordered severity.

    Attributes:
        name: Display name (returned by str()).
        value: Ordering key. Equality and hashing use this alone.
    """
    name: str
    value: int

    def __eq__(self, other):
        if not isinstance(other, Level):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash(self.value)

    def __lt__(self, other):
        if not isinstance(other, Level):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        if not isinstance(other, Level):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        if not isinstance(other, Level):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if not isinstance(other, Level):
            return NotImplemented
        return self.value >= other.value

    def compare_to(self, other: "Level") -> int:
        """Three-way compare: negative, zero or positive."""
        return self.value - other.value

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"Level({self.name!r}, {self.value})"


ALL = Level('ALL', 0)            # Turn on every level
FINEST = Level('FINEST', 300)    # Highly detailed tracing
FINER = Level('FINER', 400)      # Fairly detailed tracing
FINE = Level('FINE', 500)        # Tracing information
CONFIG = Level('CONFIG', 700)    # Static configuration messages
INFO = Level('INFO', 800)        # Informational messages
WARNING = Level('WARNING', 900)  # Potential problems
SEVERE = Level('SEVERE', 1000)   # Serious failures
SHOUT = Level('SHOUT', 1200)     # Extra debugging loudness
OFF = Level('OFF', 2000)         # Turn off all logging

LEVELS = (ALL, FINEST, FINER, FINE, CONFIG, INFO, WARNING, SEVERE, SHOUT, OFF)

DEFAULT_LEVEL = INFO

for _lvl in LEVELS:
    setattr(Level, _lvl.name, _lvl)
Level.LEVELS = LEVELS
del _lvl

_BY_NAME = {lvl.name: lvl for lvl in LEVELS}
_BY_VALUE = {lvl.value: lvl for lvl in LEVELS}


def parse_level(spec: Union[str, int, Level]) -> Level:
    """Resolve a level from a name, a numeric value, or a Level.

    Names are case-insensitive ('fine', 'FINE'). Numbers (int or digit
    strings) map to the predefined level with that value when there is one,
    otherwise to a custom level named 'LEVEL_<n>'.

    Args:
        spec: Level name, numeric value, or an existing Level

    Returns:
        The matching Level

    Raises:
        ValueError: If a name matches no predefined level
    """
    if isinstance(spec, Level):
        return spec
    if isinstance(spec, bool):
        raise ValueError(f"Not a level: {spec!r}")
    if isinstance(spec, int):
        return _BY_VALUE.get(spec) or Level(f"LEVEL_{spec}", spec)

    text = str(spec).strip()
    if text.lstrip('-').isdigit():
        return parse_level(int(text))
    try:
        return _BY_NAME[text.upper()]
    except KeyError:
        known = ', '.join(lvl.name for lvl in LEVELS)
        raise ValueError(f"Unknown level '{spec}' (expected one of: {known})") from None
