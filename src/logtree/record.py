"""
LogRecord — the immutable value handed to every subscriber.

One record is built per accepted log call and then shared, unchanged,
across every channel it is delivered to.
"""

import contextvars
import itertools
import threading
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from .levels import Level


_sequence = itertools.count()
_sequence_lock = threading.Lock()


def _next_sequence_number() -> int:
    with _sequence_lock:
        return next(_sequence)


def current_context() -> contextvars.Context:
    """Snapshot the calling task's execution context.

    Listeners can run code inside the snapshot (``record.context.run(fn)``)
    to see the context variables that were set where the record was logged,
    e.g. to group records by request.
    """
    return contextvars.copy_context()


@dataclass(frozen=True)
class LogRecord:
    """A single accepted log entry.

    Attributes:
        level: Severity the entry was logged at
        message: Text of the entry (str() of the payload if it wasn't a str)
        logger_name: Fully-qualified dotted name of the issuing logger
        error: Associated error or cause, if any
        stack_trace: Call stack captured for the entry, if any
        context: Execution context snapshot taken at log time
        object: Original payload when the message was not already a str
        time: Local time the record was created
        sequence_number: Process-wide, strictly increasing record id
    """
    level: Level
    message: str
    logger_name: str
    error: Any = None
    stack_trace: Optional[traceback.StackSummary] = None
    context: Optional[contextvars.Context] = None
    object: Any = None
    time: datetime = field(default_factory=datetime.now)
    sequence_number: int = field(default_factory=_next_sequence_number)

    def __str__(self):
        return f"[{self.level}] {self.logger_name}: {self.message}"
