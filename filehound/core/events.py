from collections import defaultdict
from typing import Any, Callable, DefaultDict, List
import structlog

log = structlog.get_logger(__name__)

MATCH = "match"
WARNING = "warning"
ERROR = "error"
END = "end"
EVENT_NAMES = (MATCH, WARNING, ERROR, END)

Listener = Callable[..., Any]

class SearchEvents:
    # registry of listeners for search notifications. listener exceptions propagate to the emitter.
    def __init__(self):
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> "SearchEvents":
        if event not in EVENT_NAMES:
            raise ValueError(f"unknown event {event!r}, expected one of {', '.join(EVENT_NAMES)}")
        if not callable(listener):
            raise TypeError(f"listener for {event!r} must be callable")
        self._listeners[event].append(listener)
        return self

    def emit(self, event: str, *args: Any) -> None:
        for listener in list(self._listeners.get(event, ())):
            listener(*args)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))
