"""Factories for immutable, schema-validated domain objects."""

from .aggregates import AggregateRoot, AggregateRootClass, create_aggregate_root_class
from .domain_events import DomainEvent, DomainEventClass, create_domain_event_class
from .entities import (
    Entity,
    EntityClass,
    IdentifierExtractor,
    UpdateValidator,
    create_entity_class,
)
from .exceptions import (
    BusinessRuleViolation,
    ConfigurationError,
    ConstructionError,
    DomainException,
    FieldIssue,
    PostMergeValidationError,
    SchemaValidationError,
)
from .result import Result
from .schema import Never, NeverSchema, validate
from .value_objects import ValueObject, ValueObjectClass, create_value_object_class

__all__ = [
    "AggregateRoot",
    "AggregateRootClass",
    "create_aggregate_root_class",
    "DomainEvent",
    "DomainEventClass",
    "create_domain_event_class",
    "Entity",
    "EntityClass",
    "IdentifierExtractor",
    "UpdateValidator",
    "create_entity_class",
    "BusinessRuleViolation",
    "ConfigurationError",
    "ConstructionError",
    "DomainException",
    "FieldIssue",
    "PostMergeValidationError",
    "SchemaValidationError",
    "Result",
    "Never",
    "NeverSchema",
    "validate",
    "ValueObject",
    "ValueObjectClass",
    "create_value_object_class",
]
