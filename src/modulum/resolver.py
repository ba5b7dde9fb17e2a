"""Recursive dependency resolution."""

import logging
from typing import Any, Callable, List, Optional

from modulum.context import CircularReference, ResolutionContext
from modulum.notifications import CIRCULAR, CircularDependency, NotificationSink
from modulum.record import ModuleRecord

logger = logging.getLogger(__name__)

Fetch = Callable[[str, ResolutionContext], Optional[Any]]


class Resolver:
    """Fills a record's ``resolved`` slots from the registry.

    Dependencies are requested through *fetch*, which is the container's
    own ``instance`` lookup, so every nested request shares the same
    :class:`ResolutionContext`.

    Args:
        fetch: ``fetch(key, context)`` returning the dependency or ``None``.
        sink: Receives ``circular`` notifications.
        unresolved: List that failed records are appended to.
    """

    def __init__(
        self,
        fetch: Fetch,
        sink: NotificationSink,
        unresolved: List[ModuleRecord],
    ) -> None:
        self._fetch = fetch
        self._sink = sink
        self._unresolved = unresolved

    def resolve(self, record: ModuleRecord, context: ResolutionContext) -> bool:
        """Resolve every missing dependency of *record*.

        A dependency that is already pending in *context* is not requested
        again. If it declares *record* back, the edge is circular and gets a
        new empty :class:`CircularReference`; otherwise the slot receives the
        pending record itself. Remaining dependencies are still attempted
        after a failure so that as much state as possible is filled in.

        Returns:
            ``True`` when every slot is filled, ``False`` otherwise. Failed
            records are appended to the unresolved queue.
        """
        if record.is_resolved:
            return True

        ok = True
        with context.entering(record):
            for dep in record.dependencies:
                if dep in record.resolved:
                    continue

                if dep in context:
                    if context.is_circular(record, dep):
                        record.resolved[dep] = CircularReference()
                        logger.warning(
                            "Circular dependency %s -> %s defused (path: %s)",
                            record.key,
                            dep,
                            context.chain(),
                        )
                        self._sink.emit(CIRCULAR, CircularDependency(record, dep))
                    else:
                        record.resolved[dep] = context.get(dep)
                    continue

                obj = self._fetch(dep, context)
                if obj is None:
                    ok = False
                else:
                    record.resolved[dep] = obj

        if not ok:
            missing = [d for d in record.dependencies if d not in record.resolved]
            logger.debug("Module %s unresolved, missing %s", record.key, missing)
            self._unresolved.append(record)
        return ok
