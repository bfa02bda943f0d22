"""
logtree — hierarchical, level-filtered loggers with record subscriptions.

A reusable logging core providing:
- Ordered severity levels (ALL < FINEST < ... < SHOUT < OFF)
- A dotted-name logger tree with inherited levels
- Synchronous broadcast channels of immutable LogRecords
- Global (root-only) and hierarchical configuration modes
- Level specs and .logtree.json config files
- Function tracing decorator

Public API:
    Level, LEVELS, parse_level   — severity levels
    LogRecord                    — record delivered to listeners
    Logger                       — tree node with leveled log calls
    LoggerRegistry               — owner of the tree and mode switches
    init_registry, get_registry  — module-level default registry
    get_logger, detached         — shortcuts on the default registry
    RecordChannel, Subscription  — broadcast primitive
    parse_level_spec, apply_config, load_config — configuration
    trace                        — function tracing decorator
"""

from logtree._version import __version__, __app_name__
from .levels import (
    Level, LEVELS, DEFAULT_LEVEL, parse_level,
    ALL, FINEST, FINER, FINE, CONFIG, INFO, WARNING, SEVERE, SHOUT, OFF,
)
from .errors import LogtreeError, InvalidLoggerNameError, UnsupportedOperationError
from .record import LogRecord, current_context
from .channels import RecordChannel, Subscription
from .logger import Logger
from .registry import (
    LoggerRegistry, init_registry, get_registry, get_logger, detached,
)
from .config import (
    LevelSpec, parse_level_spec, apply_level_specs, apply_config, load_config,
)
from .trace import trace

__all__ = [
    '__version__', '__app_name__',
    'Level', 'LEVELS', 'DEFAULT_LEVEL', 'parse_level',
    'ALL', 'FINEST', 'FINER', 'FINE', 'CONFIG', 'INFO', 'WARNING', 'SEVERE',
    'SHOUT', 'OFF',
    'LogtreeError', 'InvalidLoggerNameError', 'UnsupportedOperationError',
    'LogRecord', 'current_context',
    'RecordChannel', 'Subscription',
    'Logger',
    'LoggerRegistry', 'init_registry', 'get_registry', 'get_logger', 'detached',
    'LevelSpec', 'parse_level_spec', 'apply_level_specs', 'apply_config',
    'load_config',
    'trace',
]
