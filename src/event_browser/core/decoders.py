"""Decode Event API documents into browser models.

Every decoder validates the whole document first and then builds the target
model, so a document with one bad field never yields a partial `Event`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, JsonValue, ValidationError

from event_browser.api.schemas.jsonapi import (
    EventCollectionDocument,
    EventDocument,
    EventResource,
    LinksObject,
)
from event_browser.core.errors import DecodeError
from event_browser.models.events import Event, PaginatedList, PaginationLinks

type RawDocument = bytes | str | Mapping[str, Any]


def pretty_json(value: JsonValue) -> str:
    """Serialize a captured JSON value with 2-space indentation."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def event_from_resource(resource: EventResource) -> Event:
    attributes = resource.attributes
    return Event(
        event_type=attributes.event_type,
        event_id=resource.id,
        created_at=str(attributes.metadata["timestamp"]),
        raw_data=pretty_json(attributes.data),
        raw_metadata=pretty_json(attributes.metadata),
    )


def links_from_object(links: LinksObject) -> PaginationLinks:
    return PaginationLinks(
        next=links.next,
        prev=links.prev,
        first=links.first,
        last=links.last,
    )


def decode_event_resource(payload: RawDocument, *, url: str = "") -> Event:
    """Decode one bare resource object."""
    resource = _validate(EventResource, payload, url=url)
    return event_from_resource(resource)


def decode_event_document(payload: RawDocument, *, url: str = "") -> Event:
    """Decode a single resource document (`{"data": {...}}`)."""
    document = _validate(EventDocument, payload, url=url)
    return event_from_resource(document.data)


def decode_event_collection(payload: RawDocument, *, url: str = "") -> PaginatedList[Event]:
    """Decode a paginated collection document (`{"data": [...], "links": {...}}`)."""
    document = _validate(EventCollectionDocument, payload, url=url)
    return PaginatedList[Event](
        items=tuple(event_from_resource(resource) for resource in document.data),
        links=links_from_object(document.links or LinksObject()),
    )


def _validate[M: BaseModel](schema: type[M], payload: RawDocument, *, url: str) -> M:
    try:
        if isinstance(payload, bytes | str):
            return schema.model_validate_json(payload)
        return schema.model_validate(payload)
    except ValidationError as exc:
        errors = [_format_error(error) for error in exc.errors()]
        message = f"Invalid {schema.__name__} payload"
        if errors:
            message = f"{message}: {errors[0]}"
        raise DecodeError(message, url=url, errors=errors) from exc


def _format_error(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    detail = str(error.get("msg", "invalid value"))
    return f"{location}: {detail}" if location else detail
