"""Versioned envelope around every persisted blob.

Blobs are JSON documents of the form ``{"schema_version": N, "data": ...}``.
A document without the envelope is version 0: the bare collection written by
the first browser build, with camelCase keys and epoch-millisecond timestamps.
Each upgrade step lifts data one version; fields a step does not touch fall
back to the model defaults on validation.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable, Dict, TypeVar

from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from ..errors import PersistenceError

SCHEMA_VERSION = 1

T = TypeVar("T")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class Envelope(BaseModel):
    """On-disk wrapper carrying the schema version of its payload."""
    schema_version: int = Field(ge=0, description="Schema version the payload was written with")
    data: Any = Field(description="Serialized collection or record")


def _snake_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {_CAMEL_BOUNDARY.sub("_", k).lower(): _snake_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_snake_keys(v) for v in value]
    return value


def _blank_image_to_none(row: Any) -> None:
    if not isinstance(row, dict):
        return
    if row.get("image") == "":
        row["image"] = None
    for item in row.get("items") or []:
        _blank_image_to_none(item)


def _upgrade_v0(data: Any) -> Any:
    # v0 wrote image as "" for "no image"
    data = _snake_keys(data)
    for row in data if isinstance(data, list) else [data]:
        _blank_image_to_none(row)
    return data


_UPGRADES: Dict[int, Callable[[Any], Any]] = {
    0: _upgrade_v0,
}


def encode(value: T, adapter: TypeAdapter) -> str:
    """Serialize `value` into a current-version envelope."""
    envelope = Envelope(schema_version=SCHEMA_VERSION, data=adapter.dump_python(value, mode="json"))
    return envelope.model_dump_json()


def decode(blob: str, adapter: TypeAdapter) -> Any:
    """Parse an envelope (or a legacy bare document) and validate it with `adapter`."""
    try:
        raw = json.loads(blob)
    except json.JSONDecodeError as e:
        raise PersistenceError(f"Saved state is not valid JSON: {e}") from e

    if isinstance(raw, dict) and "schema_version" in raw:
        try:
            envelope = Envelope.model_validate(raw)
        except SchemaValidationError as e:
            raise PersistenceError(f"Malformed state envelope: {e}") from e
        version, data = envelope.schema_version, envelope.data
    else:
        version, data = 0, raw

    if version > SCHEMA_VERSION:
        raise PersistenceError(
            f"Saved state has schema version {version}, newer than supported version {SCHEMA_VERSION}"
        )

    while version < SCHEMA_VERSION:
        data = _UPGRADES[version](data)
        version += 1

    try:
        return adapter.validate_python(data)
    except SchemaValidationError as e:
        raise PersistenceError(f"Saved state does not match schema version {SCHEMA_VERSION}: {e}") from e
