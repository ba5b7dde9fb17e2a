"""The stored description and instance cache of one registered module."""

from typing import Any, Dict, Tuple

from modulum.implementation import Factory, Implementation


class ModuleRecord:
    """One registered module.

    ``resolved`` only ever grows and ``instance`` is written once; both are
    mutated exclusively by the resolver and the instance factory.

    Args:
        key: Normalized module key.
        dependencies: Normalized, distinct dependency keys in declared order.
        implementation: ``Value`` or ``Factory``.
    """

    __slots__ = ("_key", "_dependencies", "implementation", "resolved", "_instance", "_has_instance")

    def __init__(
        self,
        key: str,
        dependencies: Tuple[str, ...],
        implementation: Implementation,
    ) -> None:
        self._key = key
        self._dependencies = tuple(dependencies)
        self.implementation = implementation
        self.resolved: Dict[str, Any] = {}
        self._instance: Any = None
        self._has_instance = False

    @property
    def key(self) -> str:
        return self._key

    @property
    def dependencies(self) -> Tuple[str, ...]:
        return self._dependencies

    @property
    def is_factory(self) -> bool:
        return isinstance(self.implementation, Factory)

    @property
    def is_resolved(self) -> bool:
        """Whether every declared dependency has a slot in ``resolved``.

        Counting is sound because definitions reject duplicate dependency
        keys.
        """
        return len(self.resolved) == len(self._dependencies)

    @property
    def has_instance(self) -> bool:
        return self._has_instance

    @property
    def instance(self) -> Any:
        """The cached singleton, or ``None`` before materialization."""
        return self._instance

    def materialize(self) -> Any:
        """Produce and cache the instance from the resolved dependencies.

        Must only be called once, on a fully resolved record.
        """
        if self._has_instance:
            raise RuntimeError(f"Module {self._key!r} is already materialized")
        values = [self.resolved[dep] for dep in self._dependencies]
        self._instance = self.implementation.produce(values)
        self._has_instance = True
        return self._instance

    def __repr__(self) -> str:
        deps = ", ".join(self._dependencies)
        return f"ModuleRecord({self._key!r}, deps=[{deps}])"
