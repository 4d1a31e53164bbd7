"""Aggregate root factory."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .entities import Entity, EntityClass, IdentifierExtractor, UpdateValidator, _create
from .schema import SchemaType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False, repr=False)
class AggregateRoot(Entity):
    """Entity carrying the domain events it has not published yet."""

    domain_events: Tuple[Any, ...] = ()

    def add_event(self, event: Any) -> "AggregateRoot":
        """Return a copy of this aggregate with ``event`` appended."""
        return self.entity_class.with_events(self, self.domain_events + (event,))

    def clear_events(self) -> "AggregateRoot":
        """Return a copy of this aggregate without pending events."""
        return self.entity_class.with_events(self, ())

    def pull_events(self) -> Tuple[Tuple[Any, ...], "AggregateRoot"]:
        """Return the pending events together with the cleared aggregate."""
        return self.domain_events, self.clear_events()

    def __repr__(self) -> str:
        return (
            f"<{self.entity_class.name} identifier={self.identifier!r} "
            f"pending_events={len(self.domain_events)}>"
        )


@dataclass(frozen=True, eq=False)
class AggregateRootClass(EntityClass):
    """Factory output for one aggregate root type."""

    instance_type = AggregateRoot
    kind = "aggregate_root"

    def with_events(self, current: AggregateRoot, events: Tuple[Any, ...]) -> AggregateRoot:
        kwargs = self._instance_kwargs(dict(current.properties))
        return AggregateRoot(domain_events=tuple(events), **kwargs)

    def _rebuild(self, current: Entity, properties: Dict[str, Any]) -> AggregateRoot:
        events = current.domain_events  # type: ignore[attr-defined]
        return AggregateRoot(domain_events=events, **self._instance_kwargs(properties))


def create_aggregate_root_class(
    schema: SchemaType,
    update_schema: Optional[SchemaType] = None,
    validate_update: Optional[UpdateValidator] = None,
    identifier_extractor: Optional[IdentifierExtractor] = None,
    name: Optional[str] = None,
) -> AggregateRootClass:
    """Build the factory for aggregate roots validated by ``schema``.

    Takes the same arguments as
    :func:`~pure_domain.entities.create_entity_class`. Instances start with no
    domain events; ``patch`` keeps the pending events of the receiver.
    """
    return _create(
        AggregateRootClass, schema, update_schema, validate_update, identifier_extractor, name
    )
