"""Notification port used by the container to report events."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from modulum.context import ResolutionContext
    from modulum.record import ModuleRecord

logger = logging.getLogger(__name__)

MODULE_CREATE = "module:create"
CIRCULAR = "circular"
RESOLVE_ERROR = "resolve:error"
UNRESOLVED = "unresolved"
LOAD = "load"

Handler = Callable[[Any], None]


@dataclass(frozen=True)
class ModuleCreated:
    """Payload of ``module:create``, emitted once per materialized module."""

    module: "ModuleRecord"
    instance: Any


@dataclass(frozen=True)
class CircularDependency:
    """Payload of ``circular``: *module*'s slot for *dependency* closed a cycle."""

    module: "ModuleRecord"
    dependency: str


@dataclass(frozen=True)
class ResolveError:
    """Payload of ``resolve:error``."""

    key: str
    args: Tuple[Any, ...]
    context: "Optional[ResolutionContext]"


class NotificationSink(Protocol):
    """What the container needs from an event mechanism."""

    def emit(self, event: str, payload: Any = None) -> None: ...

    def on(self, event: str, handler: Handler) -> None: ...

    def off(self, event: str, handler: Handler) -> None: ...


class EventEmitter:
    """Synchronous in-process emitter.

    Handlers run in subscription order on the emitting call stack; an
    exception from a handler propagates to whoever emitted.

    Examples:
        >>> seen = []
        >>> emitter = EventEmitter()
        >>> emitter.on("load", seen.append)
        >>> emitter.emit("load")
        >>> seen
        [None]
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = {}

    def on(self, event: str, handler: Handler) -> None:
        if not event:
            raise ValueError("event is required")
        self._handlers.setdefault(event, []).append(handler)

    def off(self, event: str, handler: Handler) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: str, payload: Any = None) -> None:
        handlers = list(self._handlers.get(event, []))
        logger.debug("emit %s to %d handler(s)", event, len(handlers))
        for handler in handlers:
            handler(payload)
