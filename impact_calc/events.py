# MIT License
"""Publish/subscribe notifications between calculators and the dashboard.

One :class:`EventBus` instance connects a calculator to its subscribers.
Subscribers registered for a topic are called synchronously in
registration order.  A subscriber that raises is logged and skipped; the
remaining subscribers still receive the event.
"""
from __future__ import annotations

import dataclasses
import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, Dict, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

R = TypeVar("R")

RESULTS = "results"
RESET = "reset"
ERROR = "error"
DATA_UPDATED = "data_updated"


@dataclasses.dataclass(frozen=True)
class ErrorEvent:
    """Payload of the ``error`` topic."""

    message: str
    field: Optional[str] = None
    context: Dict[str, Any] = dataclasses.field(default_factory=dict)


Callback = Callable[[Any], None]


class EventBus(Generic[R]):
    """Topic to ordered‑subscriber registry, typed by its result payload `R`."""

    def __init__(self) -> None:
        self._subscribers: DefaultDict[str, List[Callback]] = defaultdict(list)

    def subscribe(self, topic: str, callback: Callback) -> None:
        self._subscribers[topic].append(callback)

    def unsubscribe(self, topic: str, callback: Callback) -> None:
        if callback in self._subscribers.get(topic, []):
            self._subscribers[topic].remove(callback)

    def publish(self, topic: str, payload: Any = None) -> None:
        for callback in list(self._subscribers.get(topic, [])):
            try:
                callback(payload)
            except Exception:
                logger.exception("Subscriber %r failed on topic %r", callback, topic)

    # typed helpers for the fixed topics

    def on_results(self, callback: Callable[[R], None]) -> None:
        self.subscribe(RESULTS, callback)

    def on_reset(self, callback: Callable[[None], None]) -> None:
        self.subscribe(RESET, callback)

    def on_error(self, callback: Callable[[ErrorEvent], None]) -> None:
        self.subscribe(ERROR, callback)

    def on_data_updated(self, callback: Callable[[Any], None]) -> None:
        self.subscribe(DATA_UPDATED, callback)

    def emit_results(self, result: R) -> None:
        self.publish(RESULTS, result)

    def emit_reset(self) -> None:
        self.publish(RESET, None)

    def emit_error(self, event: ErrorEvent) -> None:
        self.publish(ERROR, event)

    def emit_data_updated(self, data: Any) -> None:
        self.publish(DATA_UPDATED, data)
