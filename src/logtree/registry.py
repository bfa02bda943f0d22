"""
LoggerRegistry — owner of the logger tree and its mode switches.

A registry maps fully-qualified dotted names to Logger nodes, creating
missing ancestors on demand, and holds the two process-wide settings the
loggers consult on every call:

    hierarchical_logging_enabled   per-logger levels and channels (default off)
    record_stack_trace_at          auto-capture stacks at/above (default OFF)

Most programs use the module-level default registry through get_logger();
tests build their own LoggerRegistry for isolation.

Usage::

    registry = LoggerRegistry(hierarchical=True)
    log = registry.get_logger('net.http')
    log.level = FINE
    registry.root.subscribe(print)
    log.fine('connected')
"""

import threading
from typing import Dict, List, Optional

from .errors import InvalidLoggerNameError
from .levels import DEFAULT_LEVEL, OFF, Level
from .logger import Logger


SEPARATOR = '.'


class LoggerRegistry:
    """Tree of named loggers plus the settings they share.

    Attributes:
        hierarchical_logging_enabled: When False, every named logger defers
            to the root for its level and its channel
        record_stack_trace_at: Records at or above this level get a stack
            trace captured automatically
    """

    def __init__(
        self,
        hierarchical: bool = False,
        record_stack_trace_at: Level = OFF,
        root_level: Level = DEFAULT_LEVEL,
    ):
        self.hierarchical_logging_enabled = hierarchical
        self.record_stack_trace_at = record_stack_trace_at
        self._lock = threading.RLock()
        self._loggers: Dict[str, Logger] = {}
        self.root = Logger('', None, self)
        self.root.set_level(root_level)
        self._loggers[''] = self.root

    def get_logger(self, name: str) -> Logger:
        """Get or create the logger with this fully-qualified name.

        Missing ancestors are created and linked along the way. The same
        name always returns the same Logger.

        Args:
            name: Dotted name like 'net.http'; '' is the root

        Returns:
            The registered Logger

        Raises:
            InvalidLoggerNameError: If the name starts with '.'
        """
        found = self._loggers.get(name)
        if found is not None:
            return found
        if name.startswith(SEPARATOR):
            raise InvalidLoggerNameError(
                f"Logger name shouldn't start with a '{SEPARATOR}': {name!r}"
            )
        with self._lock:
            found = self._loggers.get(name)
            if found is not None:
                return found
            parent_name, sep, simple = name.rpartition(SEPARATOR)
            parent = self.get_logger(parent_name) if sep else self.root
            logger = Logger(simple, parent, self)
            self._loggers[name] = logger
            return logger

    def detached(self, name: str) -> Logger:
        """Create a logger outside the tree.

        The result has no parent and no registered children, its own level
        (default INFO) and its own channel. Each call returns a new Logger,
        collectable once the caller drops it.
        """
        return Logger(name, None, self, detached=True)

    def attached_loggers(self) -> List[Logger]:
        """Every registered logger, root included. Detached ones are not."""
        with self._lock:
            return list(self._loggers.values())

    def reset(self) -> None:
        """Close every channel and go back to a lone root with defaults.

        Loggers handed out before the reset are marked ``orphaned``: they are
        no longer reachable by name and the new tree does not include them.
        """
        with self._lock:
            loggers = list(self._loggers.values())
            self._loggers.clear()
            self.hierarchical_logging_enabled = False
            self.record_stack_trace_at = OFF
            self.root = Logger('', None, self)
            self._loggers[''] = self.root
        for logger in loggers:
            logger.orphaned = True
            logger._close_channel()

    def __contains__(self, name: str) -> bool:
        return name in self._loggers

    def __len__(self):
        return len(self._loggers)

    def __repr__(self):
        mode = 'hierarchical' if self.hierarchical_logging_enabled else 'global'
        return f"<LoggerRegistry {len(self)} loggers, {mode}>"


# =============================================================================
# Module-level default registry
# =============================================================================

_registry: Optional[LoggerRegistry] = None
_registry_lock = threading.Lock()


def init_registry(
    hierarchical: bool = False,
    record_stack_trace_at: Level = OFF,
    root_level: Level = DEFAULT_LEVEL,
    levels: list = None,
    config: dict = None,
) -> LoggerRegistry:
    """Replace the module-level default registry.

    Call once at program startup, after reading CLI arguments.

    Args:
        hierarchical: Enable per-logger levels and channels
        record_stack_trace_at: Auto stack trace threshold
        root_level: Initial level of the root logger
        levels: Level spec strings (e.g., ['net.http:FINE', 'WARNING'])
        config: Parsed config mapping (see logtree.config.apply_config)

    Returns:
        The new default LoggerRegistry
    """
    global _registry
    from .config import apply_config, apply_level_specs

    registry = LoggerRegistry(
        hierarchical=hierarchical,
        record_stack_trace_at=record_stack_trace_at,
        root_level=root_level,
    )
    if config:
        apply_config(registry, config)
    if levels:
        apply_level_specs(registry, levels)

    with _registry_lock:
        _registry = registry
    return registry


def get_registry() -> LoggerRegistry:
    """Get the module-level default registry, creating it if needed."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = LoggerRegistry()
    return _registry


def get_logger(name: str = '') -> Logger:
    """Get or create a logger in the default registry."""
    return get_registry().get_logger(name)


def detached(name: str) -> Logger:
    """Create a detached logger bound to the default registry's settings."""
    return get_registry().detached(name)
