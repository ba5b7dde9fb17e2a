"""Turns resolved module records into cached singletons."""

import logging
from typing import Any, Optional, Tuple

from modulum.context import ResolutionContext
from modulum.notifications import MODULE_CREATE, ModuleCreated, NotificationSink
from modulum.record import ModuleRecord
from modulum.resolver import Resolver

logger = logging.getLogger(__name__)


class InstanceFactory:
    """Materializes each record at most once."""

    def __init__(self, resolver: Resolver, sink: NotificationSink) -> None:
        self._resolver = resolver
        self._sink = sink

    def get_instance(
        self,
        record: ModuleRecord,
        args: Tuple[Any, ...] = (),
        context: Optional[ResolutionContext] = None,
    ) -> Any:
        """Return the singleton for *record*, building it on first use.

        *args* are carried for notification payloads only; factories receive
        the resolved dependencies and nothing else.

        Returns:
            The instance, or ``None`` when the record cannot be resolved.
        """
        if not record.is_resolved:
            if context is None:
                context = ResolutionContext()
            if not self._resolver.resolve(record, context):
                return None

        if record.has_instance:
            return record.instance

        instance = record.materialize()
        logger.debug("Created module %s", record.key)
        self._sink.emit(MODULE_CREATE, ModuleCreated(record, instance))
        return instance
