"""Entity factory.

An entity is identified by a value extracted from its properties. Updates go
through ``patch``, which never touches the receiver:

1. validate the payload against the update schema,
2. run the optional business-rule validator,
3. merge the validated payload over a copy of the current properties,
4. validate the merged whole against the full schema,
5. build a new instance and recompute its identifier.

Any failing step short-circuits and its error is returned in the ``Result``.
"""
from __future__ import annotations

import logging
from dataclasses import InitVar, dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Type

from .base import FACTORY_TOKEN, check_token, readonly_copy
from .core.config import get_settings
from .exceptions import ConfigurationError, DomainException, PostMergeValidationError
from .result import Result
from .schema import (
    STAGE_MERGE,
    STAGE_UPDATE,
    SchemaType,
    field_key,
    has_field,
    schema_name,
    validate,
)

logger = logging.getLogger(__name__)

IdentifierExtractor = Callable[[Mapping[str, Any]], Any]
UpdateValidator = Callable[[Mapping[str, Any], Mapping[str, Any]], Result[None, DomainException]]


def default_identifier(key: str = "id") -> IdentifierExtractor:
    """Extractor reading the identifying field stored under ``key``."""

    def extract(properties: Mapping[str, Any]) -> Any:
        return properties.get(key)

    return extract


@dataclass(frozen=True, eq=False, repr=False)
class Entity:
    """Identity-bearing domain object with copy-on-write updates."""

    properties: Mapping[str, Any]
    identifier: Any
    entity_class: "EntityClass"
    _token: InitVar[object] = None

    def __post_init__(self, _token: object) -> None:
        check_token(_token, type(self).__name__)

    def patch(self, updates: Any) -> Result["Entity", DomainException]:
        return self.entity_class.patch(self, updates)

    def equals(self, other: Any) -> bool:
        if not isinstance(other, Entity):
            return False
        return self.identifier == other.identifier

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __str__(self) -> str:
        return f"{self.entity_class.name}({self.identifier})"

    def __repr__(self) -> str:
        return f"<{self.entity_class.name} identifier={self.identifier!r}>"


@dataclass(frozen=True, eq=False)
class EntityClass:
    """Factory output holding the configuration of one entity type."""

    schema: SchemaType
    update_schema: Optional[SchemaType] = None
    validate_update: Optional[UpdateValidator] = None
    identifier_extractor: Optional[IdentifierExtractor] = None
    name: str = ""

    instance_type = Entity
    kind = "entity"

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", schema_name(self.schema))
        if self.identifier_extractor is None:
            if not has_field(self.schema, "id"):
                if get_settings().STRICT_IDENTIFIER:
                    raise ConfigurationError(
                        f"{self.name} has no 'id' field; pass an identifier_extractor",
                        {"schema": schema_name(self.schema)},
                    )
                extractor = default_identifier()
            else:
                extractor = default_identifier(field_key(self.schema, "id"))
            object.__setattr__(self, "identifier_extractor", extractor)

    @property
    def effective_update_schema(self) -> SchemaType:
        return self.update_schema or self.schema

    def create(self, data: Any) -> Result[Entity, DomainException]:
        return validate(self.schema, data).map(self._build)

    def patch(self, current: Entity, updates: Any) -> Result[Entity, DomainException]:
        properties = current.properties
        result = validate(self.effective_update_schema, updates, partial=True, stage=STAGE_UPDATE)
        if self.validate_update is not None:
            result = result.chain(lambda validated: self._check_rules(properties, validated))
        return (
            result.map(lambda validated: {**properties, **validated})
            .chain(lambda merged: self._validate_merged(merged))
            .map(lambda merged: self._rebuild(current, merged))
        )

    def _check_rules(
        self, properties: Mapping[str, Any], validated: Dict[str, Any]
    ) -> Result[Dict[str, Any], DomainException]:
        outcome = self.validate_update(properties, readonly_copy(validated))  # type: ignore[misc]
        if not isinstance(outcome, Result):
            raise TypeError(
                f"Update validator of {self.name} must return a Result, got {type(outcome).__name__}"
            )
        if outcome.is_failure:
            logger.debug(
                "Update rejected by business rule",
                extra={"entity": self.name, "code": getattr(outcome.error, "code", None)},
            )
        return outcome.map(lambda _: validated)

    def _validate_merged(self, merged: Dict[str, Any]) -> Result[Dict[str, Any], DomainException]:
        result = validate(self.schema, merged, stage=STAGE_MERGE)
        if result.is_failure and isinstance(result.error, PostMergeValidationError):
            logger.info(
                "Merged properties failed validation; update schema is looser than the full schema",
                extra={"entity": self.name, "issues": [str(issue) for issue in result.errors]},
            )
        return result

    def _instance_kwargs(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        frozen = readonly_copy(properties)
        return {
            "properties": frozen,
            "identifier": self.identifier_extractor(frozen),  # type: ignore[misc]
            "entity_class": self,
            "_token": FACTORY_TOKEN,
        }

    def _build(self, properties: Dict[str, Any]) -> Entity:
        return self.instance_type(**self._instance_kwargs(properties))

    def _rebuild(self, current: Entity, properties: Dict[str, Any]) -> Entity:
        return self._build(properties)


def create_entity_class(
    schema: SchemaType,
    update_schema: Optional[SchemaType] = None,
    validate_update: Optional[UpdateValidator] = None,
    identifier_extractor: Optional[IdentifierExtractor] = None,
    name: Optional[str] = None,
) -> EntityClass:
    """Build the factory for entities validated by ``schema``.

    Args:
        schema: pydantic model describing valid properties.
        update_schema: model a ``patch`` payload must satisfy. Defaults to
            ``schema``. Pass :class:`~pure_domain.schema.NeverSchema` to forbid
            every update.
        validate_update: business rule called with the current properties and
            the validated payload; returns a ``Result``.
        identifier_extractor: derives the identifier from the properties.
            Defaults to reading the ``id`` field.
        name: name used in string renderings. Defaults to the schema name.

    Raises:
        ConfigurationError: no extractor was given and ``schema`` has no
            ``id`` field.
    """
    return _create(
        EntityClass, schema, update_schema, validate_update, identifier_extractor, name
    )


def _create(
    factory_type: Type[EntityClass],
    schema: SchemaType,
    update_schema: Optional[SchemaType],
    validate_update: Optional[UpdateValidator],
    identifier_extractor: Optional[IdentifierExtractor],
    name: Optional[str],
) -> Any:
    entity_class = factory_type(
        schema=schema,
        update_schema=update_schema,
        validate_update=validate_update,
        identifier_extractor=identifier_extractor,
        name=name or "",
    )
    logger.debug(
        "Domain class created",
        extra={
            "entity": entity_class.name,
            "kind": factory_type.kind,
            "update_schema": schema_name(entity_class.effective_update_schema),
        },
    )
    return entity_class
