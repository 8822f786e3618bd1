"""Row decoding shared by the SQLite stores.

Every row is turned into its entity exactly once, here. A row that does not
validate raises MalformedRecordError instead of leaking partial data.
"""

import json
import uuid
from datetime import UTC, datetime
from typing import Any, TypeVar

import aiosqlite
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import MalformedRecordError

ModelT = TypeVar("ModelT", bound=BaseModel)


def new_id() -> str:
    """Opaque 20-character record id."""
    return uuid.uuid4().hex[:20]


def utcnow() -> datetime:
    return datetime.now(UTC)


def to_iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def decode(model: type[ModelT], collection: str, row: aiosqlite.Row | dict[str, Any]) -> ModelT:
    """Validate one stored row into ``model``."""
    data = dict(row)
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise MalformedRecordError(
            collection=collection,
            record_id=data.get("id"),
            reason=f"{e.error_count()} invalid field(s): "
            + ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors()),
        ) from e


def decode_json_list(collection: str, record_id: Any, raw: str | None) -> list[Any]:
    """Decode a JSON array column; NULL reads as empty."""
    if raw is None:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedRecordError(collection, record_id, f"invalid JSON: {e.msg}") from e
    if not isinstance(value, list):
        raise MalformedRecordError(collection, record_id, "expected a JSON array")
    return value
