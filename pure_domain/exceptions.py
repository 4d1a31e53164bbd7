"""Domain exception hierarchy."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence


@dataclass(frozen=True)
class FieldIssue:
    """A single field-level validation message."""

    field_path: str
    message: str

    def __str__(self) -> str:
        if not self.field_path:
            return self.message
        return f"{self.field_path}: {self.message}"


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}

    @property
    def message(self) -> str:
        return str(self)


class SchemaValidationError(DomainException):
    """Raw input or an update payload failed schema validation."""

    default_code = "schemaValidationFailed"

    def __init__(
        self,
        issues: Sequence[FieldIssue],
        schema_name: str = "",
        stage: str = "create",
        code: Optional[str] = None,
    ) -> None:
        self.issues: List[FieldIssue] = list(issues)
        self.schema_name = schema_name
        self.stage = stage
        summary = "; ".join(str(issue) for issue in self.issues) or "invalid value"
        super().__init__(
            f"{schema_name or 'schema'} validation failed ({stage}): {summary}",
            code or self.default_code,
            {"stage": stage, "schema": schema_name, "issues": [asdict(issue) for issue in self.issues]},
        )


class PostMergeValidationError(SchemaValidationError):
    """A valid update produced an invalid whole once merged."""

    default_code = "postMergeValidationFailed"

    def __init__(self, issues: Sequence[FieldIssue], schema_name: str = "") -> None:
        super().__init__(issues, schema_name=schema_name, stage="merge")


class BusinessRuleViolation(DomainException):
    """An update validator rejected a schema-valid update."""

    def __init__(self, code: str, message: str = "", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message or code, code, details)


class ConfigurationError(DomainException):
    """Raised when a factory is configured inconsistently."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "invalidConfiguration", details)


class ConstructionError(TypeError):
    """Raised when a domain object is instantiated outside its factory."""
