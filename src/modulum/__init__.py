"""modulum — A lazy, cycle-tolerant module registry for dependency injection."""

from modulum.container import ModuleContainer
from modulum.context import CircularReference, ResolutionContext
from modulum.decorators import provides
from modulum.exceptions import RegistrationError
from modulum.implementation import Factory, Implementation, Value
from modulum.keys import normalize_key
from modulum.notifications import (
    CIRCULAR,
    LOAD,
    MODULE_CREATE,
    RESOLVE_ERROR,
    UNRESOLVED,
    CircularDependency,
    EventEmitter,
    ModuleCreated,
    NotificationSink,
    ResolveError,
)
from modulum.record import ModuleRecord

__all__ = [
    "ModuleContainer",
    "ModuleRecord",
    "ResolutionContext",
    "CircularReference",
    "Value",
    "Factory",
    "Implementation",
    "RegistrationError",
    "EventEmitter",
    "NotificationSink",
    "ModuleCreated",
    "CircularDependency",
    "ResolveError",
    "MODULE_CREATE",
    "CIRCULAR",
    "RESOLVE_ERROR",
    "UNRESOLVED",
    "LOAD",
    "normalize_key",
    "provides",
]
