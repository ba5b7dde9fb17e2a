"""Per-call resolution context."""

from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from modulum.record import ModuleRecord


class CircularReference:
    """Empty stand-in placed in a dependency slot that closes a cycle.

    A fresh object is created for every circular edge.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "CircularReference()"


class ResolutionContext:
    """State shared by every recursive request under one top-level call.

    ``pending`` maps each key that has started resolving during this call to
    its record. Entries are never removed while the call is running, so
    modules reached again through a different branch are found there.
    ``path`` is the stack of keys currently being resolved, outermost first.

    Examples:
        >>> ctx = ResolutionContext()
        >>> ctx.path
        []
    """

    def __init__(self) -> None:
        self.pending: Dict[str, ModuleRecord] = {}
        self.path: List[str] = []

    def __contains__(self, key: str) -> bool:
        return key in self.pending

    def get(self, key: str) -> Optional[ModuleRecord]:
        return self.pending.get(key)

    def is_circular(self, record: ModuleRecord, dependency: str) -> bool:
        """Tell whether the pending *dependency* declares *record* in turn."""
        ancestor = self.pending.get(dependency)
        return ancestor is not None and record.key in ancestor.dependencies

    @contextmanager
    def entering(self, record: ModuleRecord) -> Iterator["ResolutionContext"]:
        """Mark *record* as pending and keep it on the path while resolving."""
        self.pending.setdefault(record.key, record)
        self.path.append(record.key)
        try:
            yield self
        finally:
            self.path.pop()

    def chain(self) -> str:
        return " -> ".join(self.path)

    def __repr__(self) -> str:
        return f"ResolutionContext(path=[{self.chain()}], pending={list(self.pending)})"
