"""
Broadcast channels for log records.

A RecordChannel is a synchronous publish/subscribe primitive: publish()
calls every attached listener right away, on the caller's thread. Nothing
is buffered; a record published with no listeners attached is dropped.

Listeners may attach and detach while other threads are publishing. The
listener list is copy-on-write, so an in-progress delivery keeps working
from the snapshot it started with.

Usage::

    channel = RecordChannel()
    sub = channel.listen(records.append)
    channel.publish(record)
    sub.cancel()
"""

import threading
from typing import Callable, Optional, Tuple

from .record import LogRecord


RecordListener = Callable[[LogRecord], None]
DoneListener = Callable[[], None]


class Subscription:
    """Handle for one listener attached to a RecordChannel.

    Also a context manager: leaving the ``with`` block cancels it.
    """

    def __init__(self, channel: "RecordChannel", on_record: RecordListener,
                 on_done: Optional[DoneListener] = None):
        self._channel = channel
        self.on_record = on_record
        self.on_done = on_done
        self._active = True

    @property
    def active(self) -> bool:
        """True until cancelled or the channel closes."""
        return self._active

    def cancel(self) -> None:
        """Detach this listener. Safe to call more than once."""
        if self._active:
            self._active = False
            self._channel._remove(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cancel()
        return False


class RecordChannel:
    """Synchronous broadcast channel of LogRecord values."""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscriptions: Tuple[Subscription, ...] = ()
        self._closed = False

    def listen(self, on_record: RecordListener,
               on_done: Optional[DoneListener] = None) -> Subscription:
        """Attach a listener.

        Args:
            on_record: Called with each published record
            on_done: Called once when the channel closes; right away if it
                is already closed

        Returns:
            Subscription used to detach the listener (already inactive
            when the channel was closed)
        """
        sub = Subscription(self, on_record, on_done)
        with self._lock:
            closed = self._closed
            if not closed:
                self._subscriptions = self._subscriptions + (sub,)
        if closed:
            sub._active = False
            if on_done is not None:
                on_done()
        return sub

    def snapshot(self) -> Tuple[Subscription, ...]:
        """Return the listeners attached right now."""
        return self._subscriptions

    def publish(self, record: LogRecord) -> None:
        """Deliver a record to every listener currently attached."""
        deliver(record, self.snapshot())

    def close(self) -> None:
        """Detach every listener. Later listeners end immediately.

        Each detached listener's on_done callback runs once.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            subs = self._subscriptions
            self._subscriptions = ()
        for sub in subs:
            sub._active = False
            if sub.on_done is not None:
                sub.on_done()

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def has_listeners(self) -> bool:
        return bool(self._subscriptions)

    def __len__(self):
        return len(self._subscriptions)

    def _remove(self, sub: Subscription) -> None:
        with self._lock:
            self._subscriptions = tuple(
                s for s in self._subscriptions if s is not sub
            )


def deliver(record: LogRecord, subscriptions: Tuple[Subscription, ...]) -> None:
    """Call each still-active listener in a frozen listener set."""
    for sub in subscriptions:
        if sub._active:
            sub.on_record(record)
