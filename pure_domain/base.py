"""Helpers shared by the domain object factories."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from .exceptions import ConstructionError

# Handed to instance constructors by their factories only.
FACTORY_TOKEN = object()


def check_token(token: object, kind: str) -> None:
    if token is not FACTORY_TOKEN:
        raise ConstructionError(
            f"{kind} instances must be built through their factory's create()"
        )


def readonly_copy(data: Mapping[str, Any]) -> Mapping[str, Any]:
    """Shallow copy of ``data`` behind a read-only view."""
    return MappingProxyType(dict(data))


def freeze(value: Any) -> Any:
    """Hashable, order-independent form of nested validated data."""
    if isinstance(value, Mapping):
        return frozenset((key, freeze(item)) for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(item) for item in value)
    return value
