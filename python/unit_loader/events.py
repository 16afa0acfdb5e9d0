"""In-process event bridge for loader activity.

This module provides the EventBridge class that wraps pyee's EventEmitter
so applications can observe what the loader does: units being materialized,
aliases being bound, deprecated aliases, dynamically registered namespaces,
and library imports.

Each Loader owns one bridge, started when the loader is created.

Example:
    >>> loader = Loader()
    >>>
    >>> def on_deprecated(record):
    ...     print(f"{record.old} is deprecated since {record.version}")
    ...
    >>> loader.events.subscribe(EventNames.ALIAS_DEPRECATED, on_deprecated)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pyee.base import EventEmitter

from .logging import log_debug, log_trace, log_warn


class EventNames:
    """Constants for event names published by the loader.

    Attributes:
        UNIT_MATERIALIZED: A unit file was executed for an identifier.
        ALIAS_BOUND: An alias became a synonym of its canonical unit.
        ALIAS_DEPRECATED: A deprecated alias was registered or bound.
        NAMESPACE_REGISTERED: A namespace mapping was added.
        LIBRARY_IMPORTED: A library key was attempted for the first time.
    """

    UNIT_MATERIALIZED = "unit.materialized"
    ALIAS_BOUND = "alias.bound"
    ALIAS_DEPRECATED = "alias.deprecated"
    NAMESPACE_REGISTERED = "namespace.registered"
    LIBRARY_IMPORTED = "library.imported"


class EventBridge:
    """In-process event bus for loader activity.

    Events:
        unit.materialized: (identifier, path)
        alias.bound: (canonical, alias)
        alias.deprecated: (DeprecatedAlias)
        namespace.registered: (variant, namespace, path)
        library.imported: (key, success)
    """

    def __init__(self) -> None:
        """Initialize the EventBridge with a fresh pyee EventEmitter."""
        self._emitter = EventEmitter()
        self._active = False
        self._event_schema: dict[str, str] = {
            EventNames.UNIT_MATERIALIZED: "tuple[str, str]",
            EventNames.ALIAS_BOUND: "tuple[str, str]",
            EventNames.ALIAS_DEPRECATED: "DeprecatedAlias",
            EventNames.NAMESPACE_REGISTERED: "tuple[NamespaceVariant, str, str]",
            EventNames.LIBRARY_IMPORTED: "tuple[str, bool]",
        }

    def start(self) -> None:
        """Activate the event bridge. No-op if already active."""
        if self._active:
            return
        self._active = True
        log_debug("EventBridge started")

    def stop(self) -> None:
        """Deactivate the event bridge and remove all listeners."""
        if not self._active:
            return
        self._active = False
        self._emitter.remove_all_listeners()
        log_debug("EventBridge stopped")

    def subscribe(self, event: str, handler: Callable[..., Any]) -> None:
        """Subscribe to an event.

        Args:
            event: Event name to subscribe to.
            handler: Callback function to invoke when event is published.
        """
        self._emitter.on(event, handler)
        handler_name = getattr(handler, "__name__", str(handler))
        log_debug(f"Subscribed to {event}: {handler_name}")

    def subscribe_once(self, event: str, handler: Callable[..., Any]) -> None:
        """Subscribe to an event for a single invocation."""
        self._emitter.once(event, handler)

    def unsubscribe(self, event: str, handler: Callable[..., Any]) -> None:
        """Unsubscribe from an event.

        Args:
            event: Event name to unsubscribe from.
            handler: The handler callback to remove.
        """
        self._emitter.remove_listener(event, handler)
        handler_name = getattr(handler, "__name__", str(handler))
        log_debug(f"Unsubscribed from {event}: {handler_name}")

    def publish(self, event: str, *args: Any, **kwargs: Any) -> None:
        """Publish an event to all subscribers.

        Events are dropped with a warning when the bridge is not active.

        Args:
            event: Event name to publish.
            *args: Positional arguments passed to handlers.
            **kwargs: Keyword arguments passed to handlers.
        """
        if not self._active:
            log_warn(f"EventBridge not active, dropping event: {event}")
            return

        log_trace(f"Publishing event: {event}")
        self._emitter.emit(event, *args, **kwargs)

    def listener_count(self, event: str) -> int:
        """Get the number of listeners for an event."""
        return len(self._emitter.listeners(event))

    @property
    def is_active(self) -> bool:
        """Check if the event bridge is active."""
        return self._active

    @property
    def event_schema(self) -> dict[str, str]:
        """Get the event schema documentation.

        Returns:
            Dict mapping event names to their expected payload types.
        """
        return self._event_schema.copy()


__all__ = ["EventBridge", "EventNames"]
