from __future__ import annotations

from datetime import datetime, timezone

from bson import ObjectId
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def new_object_id() -> str:
    return str(ObjectId())


def is_valid_object_id(value: str) -> bool:
    """True for the 24-hex-char identifiers every stored document carries."""
    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Document(BaseModel):
    """Base for stored documents: camelCase on the wire and in the store."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        protected_namespaces=(),
    )

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
