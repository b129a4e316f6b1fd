"""In-process event hooks for graph run progress."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

RUN_STARTED = "run_started"
NODE_STARTED = "node_started"
NODE_RECORDED = "node_recorded"
RUN_COMPLETED = "run_completed"
RUN_FAILED = "run_failed"

RunEventHandler = Callable[[str, dict[str, Any]], None]


class EventBus:
    """Dispatches runner events to subscribers.

    Handlers receive the event name and its payload. Subscribing to ``"*"``
    receives every event.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[RunEventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: RunEventHandler) -> None:
        self._handlers[event_name].append(handler)

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        for handler in [*self._handlers.get(event_name, []), *self._handlers.get("*", [])]:
            handler(event_name, payload)
