"""Decorator helpers for modulum.

These decorators provide cleaner syntax for registering factory functions.
"""

from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, TypeVar

from modulum.implementation import Factory

if TYPE_CHECKING:
    from modulum.container import ModuleContainer

F = TypeVar("F", bound=Callable[..., Any])


def _infer_key(name: str) -> str:
    if name.startswith("make_"):
        return name[5:]
    return name


def provides(
    container: "ModuleContainer",
    key: Optional[str] = None,
    dependencies: Sequence[str] = (),
    *,
    force: bool = False,
) -> Callable[[F], F]:
    """Register the decorated function as a ``Factory`` in *container*.

    Args:
        container: The container to register with.
        key: Module key. Defaults to the function name with any ``make_``
            prefix removed.
        dependencies: Dependency keys; their instances are passed to the
            function positionally, in this order.
        force: Replace an existing definition.

    Returns:
        A decorator that returns the function unmodified.

    Raises:
        RegistrationError: If the definition is malformed.

    Examples:
        >>> from modulum import ModuleContainer, Value
        >>> container = ModuleContainer().define("greeting", Value("hello"))
        >>> @provides(container, dependencies=["greeting"])
        ... def make_greeter(greeting):
        ...     return lambda name: f"{greeting} {name}"
        >>> container("greeter")("world")
        'hello world'
    """

    def decorator(fn: F) -> F:
        container.define(
            key or _infer_key(fn.__name__),
            list(dependencies),
            Factory(fn),
            force=force,
        )
        return fn

    return decorator
