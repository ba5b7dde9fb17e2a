"""Implementation variants a module can be defined with."""

from dataclasses import dataclass
from typing import Any, Callable, Union

from modulum.exceptions import RegistrationError


@dataclass(frozen=True)
class Value:
    """A ready-made object, used as the module instance as-is.

    Attributes:
        obj: The object to hand out. It is never called, even if callable.

    Examples:
        >>> Value({"port": 8080}).produce([])
        {'port': 8080}
    """

    obj: Any

    def produce(self, dependencies: "list[Any]") -> Any:
        return self.obj


@dataclass(frozen=True)
class Factory:
    """A callable invoked once to build the module instance.

    The resolved dependency values are passed positionally, in the order
    they were declared.

    Attributes:
        fn: The factory callable.

    Raises:
        RegistrationError: If *fn* is not callable.

    Examples:
        >>> Factory(lambda a, b: a + b).produce([1, 2])
        3
    """

    fn: Callable[..., Any]

    def __post_init__(self) -> None:
        if not callable(self.fn):
            raise RegistrationError(
                f"Factory requires a callable, got {type(self.fn).__name__}"
            )

    def produce(self, dependencies: "list[Any]") -> Any:
        return self.fn(*dependencies)


Implementation = Union[Value, Factory]
