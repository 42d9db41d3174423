"""JSON-API wire schemas served by the Event API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, JsonValue, field_validator


class EventAttributes(BaseModel):
    """`attributes` member of an event resource object."""

    model_config = ConfigDict(strict=True, frozen=True)

    event_type: str
    data: JsonValue
    metadata: dict[str, JsonValue]

    @field_validator("metadata")
    @classmethod
    def _require_timestamp(cls, value: dict[str, JsonValue]) -> dict[str, JsonValue]:
        if "timestamp" not in value:
            msg = "metadata.timestamp is required"
            raise ValueError(msg)
        if not isinstance(value["timestamp"], str):
            msg = "metadata.timestamp must be a string"
            raise ValueError(msg)
        return value


class EventResource(BaseModel):
    """JSON-API resource object describing one event."""

    model_config = ConfigDict(strict=True, frozen=True)

    id: str
    attributes: EventAttributes


class LinksObject(BaseModel):
    """Top-level `links` of a paginated collection."""

    model_config = ConfigDict(strict=True, frozen=True)

    next: str | None = None
    prev: str | None = None
    first: str | None = None
    last: str | None = None


class EventCollectionDocument(BaseModel):
    """Collection document: a page of a stream."""

    model_config = ConfigDict(strict=True, frozen=True)

    data: list[EventResource]
    links: LinksObject | None = None


class EventDocument(BaseModel):
    """Single resource document: one event."""

    model_config = ConfigDict(strict=True, frozen=True)

    data: EventResource
