"""Schema validation on top of pydantic models.

A schema is any pydantic ``BaseModel`` subclass. Validation never raises for
bad input: the outcome is a :class:`~pure_domain.result.Result` holding either
the validated data as a plain ``dict`` or a :class:`SchemaValidationError`
listing every field issue reported by pydantic.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Type

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import FieldIssue, PostMergeValidationError, SchemaValidationError
from .result import Result

logger = logging.getLogger(__name__)

SchemaType = Type[BaseModel]

STAGE_CREATE = "create"
STAGE_UPDATE = "update"
STAGE_MERGE = "merge"


class NeverSchema(BaseModel):
    """Schema that no value can satisfy.

    Passing it as an entity's update schema makes every ``patch`` fail,
    which turns the entity into an immutable one.
    """

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _reject(cls, data: Any) -> Any:
        raise ValueError("no value satisfies this schema")


Never = NeverSchema


def schema_name(schema: SchemaType) -> str:
    return getattr(schema, "__name__", type(schema).__name__)


def has_field(schema: SchemaType, field_name: str) -> bool:
    return field_name in getattr(schema, "model_fields", {})


def field_key(schema: SchemaType, field_name: str) -> str:
    """Key under which ``field_name`` appears in validated data."""
    info = schema.model_fields[field_name]
    return info.serialization_alias or info.alias or field_name


def to_issues(exc: PydanticValidationError) -> List[FieldIssue]:
    return [
        FieldIssue(".".join(str(part) for part in error["loc"]), error["msg"])
        for error in exc.errors()
    ]


def validate(
    schema: SchemaType,
    candidate: Any,
    partial: bool = False,
    stage: str = STAGE_CREATE,
) -> Result[Dict[str, Any], SchemaValidationError]:
    """Validate ``candidate`` against ``schema``.

    With ``partial`` only the fields present in ``candidate`` end up in the
    validated dict, which is what an update payload needs before merging.
    """
    if isinstance(candidate, Mapping) and not isinstance(candidate, dict):
        candidate = dict(candidate)
    try:
        model = schema.model_validate(candidate)
    except PydanticValidationError as exc:
        issues = to_issues(exc)
        name = schema_name(schema)
        logger.debug(
            "Schema validation failed",
            extra={"schema": name, "stage": stage, "issues": [str(issue) for issue in issues]},
        )
        if stage == STAGE_MERGE:
            return Result.failure(PostMergeValidationError(issues, schema_name=name))
        return Result.failure(SchemaValidationError(issues, schema_name=name, stage=stage))
    return Result.success(model.model_dump(by_alias=True, exclude_unset=partial))
