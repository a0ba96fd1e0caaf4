"""JSON serialization capability shared by report objects."""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class JsonSerializable(Protocol):
    """Protocol for objects that know their own JSON representation."""

    def json_serialize(self) -> Any:
        """Return data which ``json.dumps`` can encode."""

        ...


def json_default(value: object) -> Any:
    """``default`` hook for :func:`json.dumps`."""

    if isinstance(value, JsonSerializable):
        return value.json_serialize()
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(value: Any, **kwargs: Any) -> str:
    """Serialize *value*, honouring :class:`JsonSerializable` objects."""

    kwargs.setdefault("default", json_default)
    kwargs.setdefault("ensure_ascii", False)
    return json.dumps(value, **kwargs)


__all__ = ["JsonSerializable", "dumps", "json_default"]
