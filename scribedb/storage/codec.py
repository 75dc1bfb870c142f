"""Record codec: one value <-> one pretty-printed JSON document.

Records are written tab-indented with a trailing newline so that the files stay
readable and diff cleanly. Reads can be bound to the shape the caller expects:

    store.write("users", "zoro", User(name="Zoro", age=23))
    user = store.read("users", "zoro", into=User)

``into`` is anything pydantic can validate against (dataclasses, pydantic
models, ``List[Address]``, ``Optional[...]``, plain JSON types), or a class with
a ``from_dict`` classmethod. Typed reads are strict: ``"23"`` is not an int.
"""
from __future__ import annotations

import dataclasses
import json
from functools import lru_cache
from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, PydanticUserError, TypeAdapter, ValidationError

from .errors import EncodingFailure

INDENT = "\t"


@runtime_checkable
class Serializable(Protocol):
    """Anything that can describe itself as a JSON-compatible mapping."""

    def to_dict(self) -> dict: ...


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Serializable):
        return value.to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def encode(value: Any) -> bytes:
    try:
        text = json.dumps(_to_jsonable(value), indent=INDENT, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise EncodingFailure(f"unable to encode {type(value).__name__}: {exc}") from exc
    return (text + "\n").encode("utf-8")


@lru_cache(maxsize=128)
def _adapter(into: Any) -> TypeAdapter:
    return TypeAdapter(into)


def _loads(data: bytes) -> Any:
    try:
        return json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise EncodingFailure(f"stored record is not valid JSON: {exc}") from exc


def decode(data: bytes, into: Optional[Any] = None) -> Any:
    if into is None:
        return _loads(data)

    name = getattr(into, "__name__", str(into))
    if hasattr(into, "from_dict"):
        obj = _loads(data)
        try:
            return into.from_dict(obj)
        except (TypeError, KeyError, ValueError) as exc:
            raise EncodingFailure(f"unable to build {name}: {exc}") from exc

    try:
        return _adapter(into).validate_json(data, strict=True)
    except ValidationError as exc:
        raise EncodingFailure(f"stored record does not match {name}: {exc}") from exc
    except (PydanticUserError, NameError, TypeError) as exc:
        # annotations pydantic cannot resolve or build a schema for
        raise EncodingFailure(f"cannot decode into {name}: {exc}") from exc
