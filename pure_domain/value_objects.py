"""Value object factory."""
from __future__ import annotations

import logging
from dataclasses import InitVar, dataclass
from typing import Any, Dict, Mapping, Optional

from .base import FACTORY_TOKEN, check_token, freeze, readonly_copy
from .exceptions import SchemaValidationError
from .result import Result
from .schema import SchemaType, schema_name, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False, repr=False)
class ValueObject:
    """Immutable, identity-less domain object compared by its properties."""

    properties: Mapping[str, Any]
    value_object_class: "ValueObjectClass"
    _token: InitVar[object] = None

    def __post_init__(self, _token: object) -> None:
        check_token(_token, "ValueObject")

    def equals(self, other: Any) -> bool:
        if not isinstance(other, ValueObject):
            return False
        return dict(self.properties) == dict(other.properties)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueObject):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(freeze(self.properties))

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.properties.items())
        return f"{self.value_object_class.name}({fields})"


@dataclass(frozen=True, eq=False)
class ValueObjectClass:
    """Factory output for one value object schema."""

    schema: SchemaType
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", schema_name(self.schema))

    def create(self, data: Any) -> Result[ValueObject, SchemaValidationError]:
        return validate(self.schema, data).map(self._build)

    def _build(self, properties: Dict[str, Any]) -> ValueObject:
        return ValueObject(
            properties=readonly_copy(properties),
            value_object_class=self,
            _token=FACTORY_TOKEN,
        )


def create_value_object_class(schema: SchemaType, name: Optional[str] = None) -> ValueObjectClass:
    """Build the factory for immutable value objects validated by ``schema``."""
    value_object_class = ValueObjectClass(schema=schema, name=name or "")
    logger.debug("Value object class created", extra={"value_object": value_object_class.name})
    return value_object_class
