"""Container facade: registration, lazy resolution and bulk initialization."""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union, overload

from modulum.context import ResolutionContext
from modulum.exceptions import RegistrationError
from modulum.factory import InstanceFactory
from modulum.implementation import Factory, Implementation, Value
from modulum.keys import normalize_key
from modulum.notifications import (
    LOAD,
    RESOLVE_ERROR,
    UNRESOLVED,
    EventEmitter,
    Handler,
    NotificationSink,
    ResolveError,
)
from modulum.record import ModuleRecord
from modulum.registry import Registry
from modulum.resolver import Resolver

logger = logging.getLogger(__name__)


class ModuleContainer:
    """A registry of named modules resolved lazily into singletons.

    Modules are registered with ``define`` and obtained with ``instance``
    (or by calling the container). Dependencies are resolved on first
    request; each module is built at most once. Resolution never raises:
    a module that cannot be obtained yields ``None`` and a
    ``resolve:error`` notification.

    Each container is independent; construct one per application (or per
    test) and pass it where it is needed.

    Args:
        sink: Where notifications are emitted. Defaults to a new
            :class:`~modulum.notifications.EventEmitter`.

    Examples:
        >>> container = ModuleContainer()
        >>> container.define("config", Value({"port": 8080}))  # doctest: +ELLIPSIS
        <modulum.container.ModuleContainer object at ...>
        >>> container.define("server", ["config"], Factory(lambda c: c["port"]))  # doctest: +ELLIPSIS
        <modulum.container.ModuleContainer object at ...>
        >>> container("server")
        8080
    """

    def __init__(self, sink: Optional[NotificationSink] = None) -> None:
        self._sink: NotificationSink = sink if sink is not None else EventEmitter()
        self._registry = Registry()
        self._unresolved: List[ModuleRecord] = []
        self._initialized = False
        self._resolver = Resolver(self._fetch, self._sink, self._unresolved)
        self._factory = InstanceFactory(self._resolver, self._sink)

    # Registration

    @overload
    def define(self, key: str, implementation: Implementation, *, force: bool = ...) -> "ModuleContainer": ...

    @overload
    def define(
        self,
        key: str,
        dependencies: Sequence[str],
        implementation: Factory,
        *,
        force: bool = ...,
    ) -> "ModuleContainer": ...

    def define(
        self,
        key: str,
        dependencies_or_implementation: Union[Sequence[str], Implementation],
        implementation: Optional[Implementation] = None,
        *,
        force: bool = False,
    ) -> "ModuleContainer":
        """Register a module.

        Either ``define(key, implementation)`` or
        ``define(key, dependencies, implementation)``. Defining a key that
        already exists does nothing unless ``force=True``.

        Args:
            key: Module key; case-insensitive, ``.``, ``\\`` and ``/`` all
                separate namespaces.
            dependencies_or_implementation: Dependency keys, or the
                implementation when the module has no dependencies.
            implementation: ``Value`` or ``Factory`` when dependencies are
                given.
            force: Replace an existing definition.

        Returns:
            The container, for chaining.

        Raises:
            RegistrationError: If the definition is malformed.
        """
        if implementation is None:
            dependencies: Iterable[str] = ()
            implementation = dependencies_or_implementation  # type: ignore[assignment]
        elif isinstance(dependencies_or_implementation, (Value, Factory)):
            raise RegistrationError(
                "Expected dependency keys before the implementation",
                key=normalize_key(key),
            )
        else:
            dependencies = dependencies_or_implementation

        self._registry.define(key, implementation, dependencies, force=force)  # type: ignore[arg-type]
        return self

    def children(
        self,
        key: str,
        mapping: Mapping[str, Any],
        *,
        filter: Optional[Callable[[str, Any], bool]] = None,
        force: bool = False,
    ) -> "ModuleContainer":
        """Register every item of *mapping* as a value under ``key/name``.

        Args:
            key: Namespace the items are registered beneath.
            mapping: Items to register.
            filter: ``filter(name, value)``; items for which it returns a
                falsy value are skipped.
            force: Replace existing definitions.
        """
        for name, value in mapping.items():
            if filter is not None and not filter(name, value):
                continue
            self._registry.define(f"{key}/{name}", Value(value), force=force)
        return self

    def provides(
        self,
        key: Optional[str] = None,
        dependencies: Sequence[str] = (),
        *,
        force: bool = False,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of ``define`` for factory functions.

        See :func:`modulum.decorators.provides`.
        """
        from modulum.decorators import provides

        return provides(self, key, dependencies, force=force)

    def contains(self, key: str) -> bool:
        return self._registry.contains(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._registry.contains(key)

    def namespace(self, prefix: str = "") -> Dict[str, ModuleRecord]:
        """Return the records beneath *prefix*.

        Examples:
            >>> c = ModuleContainer().define("db/pool", Value(1)).define("db", Value(2)).define("log", Value(3))
            >>> sorted(c.namespace("db"))
            ['db', 'db/pool']
            >>> sorted(c.namespace())
            ['db', 'log']
        """
        return self._registry.namespace(prefix)

    def modules(self) -> Mapping[str, ModuleRecord]:
        return self._registry.modules()

    def clear(self) -> None:
        """Discard every module. Intended for test isolation."""
        self._registry.clear()
        self._unresolved.clear()
        self._initialized = False

    # Resolution

    def instance(
        self,
        key: str,
        args: Optional[Sequence[Any]] = None,
        context: Optional[ResolutionContext] = None,
    ) -> Any:
        """Return the singleton registered under *key*.

        Args:
            key: Module key.
            args: Extra call arguments; reported in ``resolve:error`` payloads.
            context: Resolution context of an enclosing request, if any.

        Returns:
            The instance, or ``None`` if the key is unknown or the module
            cannot be resolved.
        """
        norm = normalize_key(key)
        call_args = tuple(args or ())
        record = self._registry.get(norm)

        obj = None
        if record is None:
            logger.warning("No module registered for %r", norm)
        else:
            obj = self._factory.get_instance(record, call_args, context)

        if obj is None:
            self._sink.emit(RESOLVE_ERROR, ResolveError(norm, call_args, context))
        return obj

    __call__ = instance

    def _fetch(self, key: str, context: ResolutionContext) -> Any:
        return self.instance(key, None, context)

    def unresolved(self) -> List[ModuleRecord]:
        """Records that failed resolution since the last ``initialize``."""
        return list(self._unresolved)

    def initialize(
        self,
        on_success: Optional[Callable[["ModuleContainer"], Any]] = None,
        on_error: Optional[Callable[[List[ModuleRecord]], Any]] = None,
    ) -> None:
        """Resolve every registered module.

        Does nothing once a previous call has succeeded. If any module is
        left unresolved, *on_error* receives the failed records, an
        ``unresolved`` notification is emitted and the container stays
        uninitialized so the call can be retried. Otherwise the container is
        marked initialized, *on_success* receives the container and ``load``
        is emitted.
        """
        if self._initialized:
            return

        self._unresolved.clear()
        for record in self._registry:
            self._resolver.resolve(record, ResolutionContext())

        if self._unresolved:
            failed = list(self._unresolved)
            logger.warning(
                "Initialization failed, unresolved: %s",
                ", ".join(r.key for r in failed),
            )
            if on_error is not None:
                on_error(failed)
            self._sink.emit(UNRESOLVED, failed)
            return

        self._initialized = True
        logger.info("Initialized %d module(s)", len(self._registry))
        if on_success is not None:
            on_success(self)
        self._sink.emit(LOAD)

    def initialized(self) -> bool:
        return self._initialized

    # Notifications

    def on(self, event: str, handler: Handler) -> None:
        self._sink.on(event, handler)

    def off(self, event: str, handler: Handler) -> None:
        self._sink.off(event, handler)
