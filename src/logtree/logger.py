"""
Logger — a node in the dotted-name logger tree.

Loggers are normally obtained from a LoggerRegistry (``get_logger('a.b')``)
and are then shared: the same name always yields the same node. Detached
loggers are standalone nodes that behave as their own root.

Two modes, switched on the registry (``hierarchical_logging_enabled``):

    global (default)   every named logger uses the root's level and the
                       root's channel; only the root level may be changed
    hierarchical       each logger may override its level (None inherits
                       from the parent) and a record is published on the
                       issuing logger's channel and on every ancestor's
"""

import functools
import threading
import traceback
from types import FunctionType, MappingProxyType, MethodType
from typing import Any, Callable, Dict, Optional, Union

from .channels import DoneListener, RecordChannel, RecordListener, Subscription, deliver
from .errors import UnsupportedOperationError
from .levels import (
    CONFIG, DEFAULT_LEVEL, FINE, FINER, FINEST, INFO, SEVERE, SHOUT, WARNING,
    Level,
)
from .record import LogRecord, current_context


Message = Union[Any, Callable[[], Any]]

# Only these are treated as deferred messages; classes and other callable
# payloads are logged as values.
_PRODUCER_TYPES = (FunctionType, MethodType, functools.partial)


def _capture_stack() -> traceback.StackSummary:
    """Current call stack, without the frames inside this module."""
    frames = traceback.extract_stack()
    end = len(frames)
    while end and frames[end - 1].filename == __file__:
        end -= 1
    return traceback.StackSummary.from_list(frames[:end])


class Logger:
    """A named logger in a LoggerRegistry's tree.

    Attributes:
        name: Simple (last segment) name
        full_name: Dotted name including every ancestor ('' for the root)
        parent: Parent logger, or None for the root and detached loggers
        registry: Registry holding the mode switches this logger obeys
        orphaned: True once LoggerRegistry.reset() dropped this logger from
            the tree; it still reads the registry settings but can no
            longer be looked up by name
    """

    def __init__(self, name: str, parent: Optional["Logger"], registry,
                 detached: bool = False):
        self.name = name
        self.parent = parent
        self.registry = registry
        self.orphaned = False
        self._detached = detached and parent is None
        if parent is not None and parent.name:
            self.full_name = f"{parent.full_name}.{name}"
        else:
            self.full_name = name
        self._children: Dict[str, "Logger"] = {}
        self.children = MappingProxyType(self._children)
        self._level: Optional[Level] = None
        self._channel: Optional[RecordChannel] = None
        self._channel_lock = threading.Lock()

        if parent is None:
            self._level = DEFAULT_LEVEL
        else:
            parent._children[name] = self

    # -------------------------------------------------------------------------
    # Tree
    # -------------------------------------------------------------------------

    @property
    def is_root(self) -> bool:
        """True for the registry's root logger."""
        return self is self.registry.root

    @property
    def is_detached(self) -> bool:
        """True for loggers living outside the registry's tree."""
        return self._detached

    def get_child(self, suffix: str) -> "Logger":
        """Get or create a descendant, named relative to this logger."""
        if self.is_detached or self.orphaned:
            raise UnsupportedOperationError(
                f"Logger '{self.full_name}' is not part of the registry tree"
            )
        name = f"{self.full_name}.{suffix}" if self.full_name else suffix
        return self.registry.get_logger(name)

    # -------------------------------------------------------------------------
    # Levels
    # -------------------------------------------------------------------------

    @property
    def own_level(self) -> Optional[Level]:
        """Level set directly on this logger; None means inherited."""
        return self._level

    @property
    def level(self) -> Level:
        """Effective level. Assigning sets this logger's override."""
        return self.effective_level()

    @level.setter
    def level(self, value: Optional[Level]) -> None:
        self.set_level(value)

    def effective_level(self) -> Level:
        if self.parent is None:
            return self._level
        if not self.registry.hierarchical_logging_enabled:
            return self.registry.root._level
        if self._level is not None:
            return self._level
        return self.parent.effective_level()

    def set_level(self, value: Optional[Level]) -> None:
        """Override the level for this logger and the children inheriting it.

        Args:
            value: New level, or None to inherit from the parent

        Raises:
            UnsupportedOperationError: If this is a non-root logger and
                hierarchical logging is disabled, or if value is None on a
                logger without a parent
        """
        if self.parent is not None and not self.registry.hierarchical_logging_enabled:
            raise UnsupportedOperationError(
                'Enable hierarchical logging on the registry to change the '
                f"level of non-root logger '{self.full_name}'"
            )
        if self.parent is None and value is None:
            raise UnsupportedOperationError(
                'Cannot set the level to None on a logger with no parent'
            )
        self._level = value

    def is_loggable(self, level: Level) -> bool:
        """Whether a record at this level would be emitted."""
        return level >= self.effective_level()

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def _owns_channel(self) -> bool:
        return self.parent is None or self.registry.hierarchical_logging_enabled

    @property
    def on_record(self) -> RecordChannel:
        """Channel of records published by (or through) this logger.

        In global mode every named logger shares the root's channel.
        """
        if not self._owns_channel():
            return self.registry.root.on_record
        with self._channel_lock:
            if self._channel is None:
                self._channel = RecordChannel()
            return self._channel

    def subscribe(self, on_record: RecordListener,
                  on_done: Optional[DoneListener] = None) -> Subscription:
        """Attach a listener to this logger's channel.

        Attaching happens under the channel lock, so a concurrent
        clear_listeners() either runs first (and the listener lands on the
        fresh channel) or closes the channel with the listener on it.
        """
        if not self._owns_channel():
            return self.registry.root.subscribe(on_record, on_done)
        with self._channel_lock:
            if self._channel is None:
                self._channel = RecordChannel()
            return self._channel.listen(on_record, on_done)

    def clear_listeners(self) -> None:
        """Close this logger's channel, detaching every listener.

        In global mode this closes the root's channel. A fresh channel is
        created on the next subscription.
        """
        if not self._owns_channel():
            self.registry.root.clear_listeners()
            return
        self._close_channel()

    unsubscribe_all = clear_listeners

    def _close_channel(self) -> None:
        with self._channel_lock:
            channel, self._channel = self._channel, None
        if channel is not None:
            channel.close()

    def _publish_targets(self):
        if self.parent is None:
            return [self]
        if not self.registry.hierarchical_logging_enabled:
            return [self.registry.root]
        targets = []
        node = self
        while node is not None:
            targets.append(node)
            node = node.parent
        return targets

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    def log(self, level: Level, message: Message, error: Any = None,
            stack_trace: Optional[traceback.StackSummary] = None,
            context=None) -> None:
        """Log a message at the given level if it is loggable.

        If message is a function, bound method or functools.partial it is
        called (with no arguments) only once the level check has passed.
        Classes and other callable objects are logged as plain values. A non-str message is logged as str(message)
        and the original value is kept on the record as ``object``.

        When no stack_trace is given and the level is at or above the
        registry's ``record_stack_trace_at``, the current stack is captured.

        Args:
            level: Severity of the message
            message: Message, or a zero-argument function producing it
            error: Optional error or cause
            stack_trace: Optional pre-captured stack
            context: Execution context to attach (default: current)
        """
        if not self.is_loggable(level):
            return

        if isinstance(message, _PRODUCER_TYPES):
            message = message()

        obj = None
        if isinstance(message, str):
            msg = message
        else:
            msg = str(message)
            obj = message

        if stack_trace is None and level >= self.registry.record_stack_trace_at:
            stack_trace = _capture_stack()
            if error is None:
                error = f"autogenerated stack trace for {level} {msg}"

        if context is None:
            context = current_context()

        record = LogRecord(
            level=level,
            message=msg,
            logger_name=self.full_name,
            error=error,
            stack_trace=stack_trace,
            context=context,
            object=obj,
        )

        # Freeze every listener set first so late subscribers miss this record
        batches = []
        for target in self._publish_targets():
            channel = target._channel
            if channel is not None:
                batches.append(channel.snapshot())
        for subs in batches:
            deliver(record, subs)

    def finest(self, message: Message, error: Any = None, stack_trace=None) -> None:
        self.log(FINEST, message, error, stack_trace)

    def finer(self, message: Message, error: Any = None, stack_trace=None) -> None:
        self.log(FINER, message, error, stack_trace)

    def fine(self, message: Message, error: Any = None, stack_trace=None) -> None:
        self.log(FINE, message, error, stack_trace)

    def config(self, message: Message, error: Any = None, stack_trace=None) -> None:
        self.log(CONFIG, message, error, stack_trace)

    def info(self, message: Message, error: Any = None, stack_trace=None) -> None:
        self.log(INFO, message, error, stack_trace)

    def warning(self, message: Message, error: Any = None, stack_trace=None) -> None:
        self.log(WARNING, message, error, stack_trace)

    def severe(self, message: Message, error: Any = None, stack_trace=None) -> None:
        self.log(SEVERE, message, error, stack_trace)

    def shout(self, message: Message, error: Any = None, stack_trace=None) -> None:
        self.log(SHOUT, message, error, stack_trace)

    def __repr__(self):
        return f"<Logger {self.full_name!r} level={self.effective_level()}>"
