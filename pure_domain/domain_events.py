"""Domain event factory."""
from __future__ import annotations

import logging
from dataclasses import InitVar, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional
from uuid import UUID, uuid4

from .base import FACTORY_TOKEN, check_token, readonly_copy
from .exceptions import ConfigurationError, SchemaValidationError
from .result import Result
from .schema import SchemaType, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class DomainEvent:
    """Write-once record of something that happened in the domain."""

    event_name: str
    payload: Mapping[str, Any]
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_id: UUID = field(default_factory=uuid4)
    correlation_id: Optional[UUID] = None
    causation_id: Optional[UUID] = None
    _token: InitVar[object] = None

    def __post_init__(self, _token: object) -> None:
        check_token(_token, "DomainEvent")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": str(self.event_id),
            "event_name": self.event_name,
            "occurred_on": self.occurred_on.isoformat(),
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "causation_id": str(self.causation_id) if self.causation_id else None,
            "payload": {key: self._serialize_value(value) for key, value in self.payload.items()},
        }

    @staticmethod
    def _serialize_value(value: Any) -> Any:
        if isinstance(value, UUID):
            return str(value)
        if isinstance(value, datetime):
            return value.isoformat()
        return value


@dataclass(frozen=True, eq=False)
class DomainEventClass:
    """Factory output for one named event."""

    event_name: str
    payload_schema: SchemaType

    def create(
        self,
        payload: Any,
        correlation_id: Optional[UUID] = None,
        causation_id: Optional[UUID] = None,
    ) -> Result[DomainEvent, SchemaValidationError]:
        return validate(self.payload_schema, payload).map(
            lambda validated: DomainEvent(
                event_name=self.event_name,
                payload=readonly_copy(validated),
                correlation_id=correlation_id,
                causation_id=causation_id,
                _token=FACTORY_TOKEN,
            )
        )


def create_domain_event_class(event_name: str, payload_schema: SchemaType) -> DomainEventClass:
    """Build the factory for events named ``event_name``.

    The timestamp is taken when the event is created; callers cannot supply it.
    """
    if not event_name:
        raise ConfigurationError("Domain events need a name")
    logger.debug("Domain event class created", extra={"event_name": event_name})
    return DomainEventClass(event_name=event_name, payload_schema=payload_schema)
