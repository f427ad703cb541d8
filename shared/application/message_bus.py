"""
Message Bus

Routes booking and ledger commands to the single handler that owns them,
and fans committed domain events out to any number of listeners.
The API layer talks to the booking engine, which dispatches here.
"""

from typing import Any, Callable, Dict, List, Type
import logging

from shared.domain.base import DomainEvent
from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)

CommandHandler = Callable[[Any], Any]
EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    Exactly one handler per command type, zero or more per event type.
    """

    def __init__(self):
        self._command_handlers: Dict[Type, CommandHandler] = {}
        self._event_handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    # ===== Registration =====

    def register_command_handler(self, command_type: Type, handler: CommandHandler):
        if command_type in self._command_handlers:
            raise ValueError(f"{command_type.__name__} already has a handler")
        self._command_handlers[command_type] = handler
        logger.debug(f"{command_type.__name__} -> {getattr(handler, '__qualname__', handler)}")

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        """Subscribe ``handler``; subscribing the same handler twice is ignored"""
        listeners = self._event_handlers.setdefault(event_type, [])
        if handler in listeners:
            return
        listeners.append(handler)
        logger.debug(f"{event_type.__name__} has {len(listeners)} listeners")

    def has_command_handler(self, command_type: Type) -> bool:
        return command_type in self._command_handlers

    def listeners(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._event_handlers.get(event_type, ()))

    # ===== Dispatch =====

    def handle_command(self, command: Any) -> Any:
        """
        Run the command's handler and return its result

        Domain errors are expected outcomes (a rejected booking, an item
        already out) and are logged quietly. Anything else is logged as
        an error. Both propagate unchanged.
        """
        name = type(command).__name__
        handler = self._command_handlers.get(type(command))
        if handler is None:
            raise LookupError(f"Nothing handles {name}")

        logger.debug(f"Dispatching {name}")
        try:
            return handler(command)
        except DomainError as exc:
            logger.info(f"{name} rejected: {exc.code} {exc.message}")
            raise
        except Exception as exc:
            logger.error(f"{name} crashed: {exc}")
            raise

    def publish_events(self, events: List[DomainEvent]):
        """
        Deliver committed events to their listeners

        A failing listener is logged and skipped so the rest still run.
        """
        for event in events:
            listeners = self.listeners(type(event))
            if not listeners:
                logger.debug(f"{type(event).__name__} has no listeners")
                continue
            for listener in listeners:
                try:
                    listener(event)
                except Exception:
                    logger.exception(
                        f"Listener {getattr(listener, '__name__', listener)} failed on "
                        f"{type(event).__name__} {event.event_id}"
                    )


message_bus = MessageBus()
