"""Type-keyed event channels shared between the parts of the application."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Hashable
from typing import Any

_log = logging.getLogger(__name__)


def _channel_name(event_type: Hashable) -> str:
    if isinstance(event_type, type):
        return f"{event_type.__module__}.{event_type.__qualname__}"
    return repr(event_type)


class LoggingQueue:
    """Sending end of a channel that logs every message it passes on."""

    def __init__(self, target: queue.Queue, channel_name: str) -> None:
        self.target = target
        self.channel_name = channel_name

    def send(self, message: Any) -> None:
        _log.debug("%s %r", self.channel_name, message)
        self.target.put(message)


class EventAggregator:
    """Routes events to a single receiver per event type.

    Events sent before anybody registers for their type are buffered and
    handed over with the receiver on registration.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._parent_senders: dict[Hashable, LoggingQueue] = {}
        self._unclaimed_receivers: dict[Hashable, queue.Queue] = {}

    def _get_sender(self, event_type: Hashable) -> LoggingQueue:
        with self._lock:
            sender = self._parent_senders.get(event_type)
            if sender is None:
                receiver: queue.Queue = queue.Queue()
                sender = LoggingQueue(receiver, _channel_name(event_type))
                self._parent_senders[event_type] = sender
                self._unclaimed_receivers[event_type] = receiver
            return sender

    def send(self, event: Any, event_type: Hashable | None = None) -> None:
        """Send ``event`` on the channel for ``event_type`` (its type by default)."""
        key = type(event) if event_type is None else event_type
        self._get_sender(key).send(event)

    def register_event(self, event_type: Hashable) -> queue.Queue:
        """Claim the receiving end for ``event_type``.

        Raises ``RuntimeError`` if the type already has a receiver.
        """
        with self._lock:
            receiver = self._unclaimed_receivers.pop(event_type, None)
            if receiver is not None:
                return receiver
            if event_type in self._parent_senders:
                raise RuntimeError("EventAggregator: type already registered")
            receiver = queue.Queue()
            self._parent_senders[event_type] = LoggingQueue(
                receiver, _channel_name(event_type)
            )
            return receiver


EVENT_AGGREGATOR = EventAggregator()