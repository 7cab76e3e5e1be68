from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List, Type

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class EventBus:
    """In-process publish/subscribe for domain events.

    Handlers run after the publishing state change has been stored. A failing
    handler is logged and never propagates to the publisher or blocks the
    other handlers.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[Type, List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: Type, handler: Handler) -> None:
        self._handlers[event_type].append(handler)

    def publish(self, event: Any) -> None:
        handlers = self._handlers.get(type(event), [])
        if not handlers:
            logger.debug("No handlers for %s", type(event).__name__)
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Handler %r failed for %s", handler, type(event).__name__)
