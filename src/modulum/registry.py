"""Storage of module records by normalized key."""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional

from modulum.exceptions import RegistrationError
from modulum.implementation import Factory, Implementation, Value
from modulum.keys import in_namespace, normalize_key
from modulum.record import ModuleRecord

logger = logging.getLogger(__name__)


class Registry:
    """Mapping of normalized key to :class:`ModuleRecord`.

    Holds at most one record per key. A second definition under the same
    key is ignored unless forced.
    """

    def __init__(self) -> None:
        self._records: Dict[str, ModuleRecord] = {}

    def define(
        self,
        key: str,
        implementation: Implementation,
        dependencies: Iterable[str] = (),
        force: bool = False,
    ) -> Optional[ModuleRecord]:
        """Create a record for *key*.

        Args:
            key: Module key, normalized before use.
            implementation: ``Value`` or ``Factory``.
            dependencies: Dependency keys; only allowed with ``Factory``.
            force: Replace an existing record instead of keeping it.

        Returns:
            The new record, or ``None`` when an existing one was kept.

        Raises:
            RegistrationError: If the definition is malformed.
        """
        norm = normalize_key(key)
        if not norm:
            raise RegistrationError(f"Module key must not be empty, got {key!r}")

        if not isinstance(implementation, (Value, Factory)):
            raise RegistrationError(
                f"implementation must be Value or Factory, got "
                f"{type(implementation).__name__}",
                key=norm,
            )

        if isinstance(dependencies, str):
            dependencies = [dependencies]
        deps = tuple(normalize_key(d) for d in dependencies)
        if deps and isinstance(implementation, Value):
            raise RegistrationError("Dependencies require a Factory", key=norm)
        if "" in deps:
            raise RegistrationError("Dependency keys must not be empty", key=norm)
        duplicates = sorted({d for d in deps if deps.count(d) > 1})
        if duplicates:
            raise RegistrationError(
                f"Duplicate dependencies: {', '.join(duplicates)}", key=norm
            )

        if norm in self._records and not force:
            logger.debug("Module %s already defined, keeping existing", norm)
            return None

        record = ModuleRecord(norm, deps, implementation)
        self._records[norm] = record
        logger.debug("Defined module %s (deps: %s)", norm, list(deps))
        return record

    def get(self, key: str) -> Optional[ModuleRecord]:
        return self._records.get(normalize_key(key))

    def contains(self, key: str) -> bool:
        return normalize_key(key) in self._records

    def namespace(self, prefix: str = "") -> Dict[str, ModuleRecord]:
        """Return the records under *prefix*, or the top-level ones if empty."""
        norm = normalize_key(prefix)
        return {k: r for k, r in self._records.items() if in_namespace(k, norm)}

    def modules(self) -> Mapping[str, ModuleRecord]:
        return MappingProxyType(self._records)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ModuleRecord]:
        return iter(list(self._records.values()))
