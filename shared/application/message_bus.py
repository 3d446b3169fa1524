"""
Message Bus

Routes domain events to the handlers registered for them.
Handlers run in-process right after the write that produced the event.
"""

from typing import Callable, Dict, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class MessageBus:
    """
    Message bus for domain events

    Several handlers may subscribe to the same event type (1:N).
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[Callable]] = {}

    def register_event_handler(
        self,
        event_type: Type[DomainEvent],
        handler: Callable[[DomainEvent], None]
    ):
        """
        Register an event handler

        Registering the same handler twice for one event type is ignored,
        so app start-up can run more than once (tests, autoreload).
        """
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug(f"Registered event handler {handler.__name__} for {event_type.__name__}")

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[Callable]:
        return list(self._event_handlers.get(event_type, []))

    def publish_events(self, events: List[DomainEvent]):
        """
        Publish domain events

        All registered handlers for each event type are called.
        Errors in handlers are logged but don't stop other handlers.
        """
        for event in events:
            event_type = type(event)
            handlers = self._event_handlers.get(event_type, [])

            if not handlers:
                logger.warning(f"No handlers registered for event {event_type.__name__}")
                continue

            logger.info(f"Publishing event: {event_type.__name__} (ID: {event.event_id})")

            for handler in handlers:
                try:
                    handler(event)
                    logger.debug(f"Event {event_type.__name__} handled by {handler.__name__}")
                except Exception as e:
                    logger.error(
                        f"Error in event handler {handler.__name__} "
                        f"for event {event_type.__name__}: {e}",
                        exc_info=True
                    )
                    # Don't raise - other handlers should still run


# Global message bus instance
message_bus = MessageBus()
