from collections import defaultdict
import logging
from typing import Callable, DefaultDict, List, Type


logger = logging.getLogger(__name__)

Handler = Callable[[object], None]


class EventBus:
    """Synchronous fan-out of battle events to registered handlers.

    A failing handler is logged and skipped so one broken listener cannot
    interrupt the battle loop.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[Type[object], List[Handler]] = defaultdict(list)
        self._failures: List[Exception] = []

    def subscribe(self, event_type: Type[object], handler: Handler) -> None:
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)

    def publish(self, event: object) -> List[Exception]:
        self._failures = []
        for handler in list(self._handlers.get(type(event), [])):
            try:
                handler(event)
            except Exception as exc:
                self._failures.append(exc)
                logger.exception(
                    "Battle event handler %s failed on %s",
                    getattr(handler, "__qualname__", repr(handler)),
                    type(event).__name__,
                )
        return list(self._failures)

    def last_publish_errors(self) -> List[Exception]:
        return list(self._failures)
