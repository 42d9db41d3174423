"""Error types raised while routing and fetching."""

from __future__ import annotations

from typing import Literal

type FetchErrorCategory = Literal[
    "network_timeout",
    "transport_error",
    "http_status",
    "invalid_payload",
]


class FetchError(RuntimeError):
    """Request to the Event API failed, with explicit category."""

    def __init__(self, message: str, *, category: FetchErrorCategory, url: str) -> None:
        super().__init__(message)
        self.category = category
        self.url = url


class NetworkError(FetchError):
    """Transport failure or timeout before a response arrived."""


class HttpStatusError(FetchError):
    """Event API answered with a non-success status."""

    def __init__(self, message: str, *, status_code: int, url: str) -> None:
        super().__init__(message, category="http_status", url=url)
        self.status_code = status_code


class DecodeError(FetchError):
    """Payload does not match the event resource contract."""

    def __init__(self, message: str, *, url: str, errors: list[str] | None = None) -> None:
        super().__init__(message, category="invalid_payload", url=url)
        self.errors = list(errors or [])


class RouteDecodeError(ValueError):
    """Path segment carries invalid percent-encoding."""

    def __init__(self, segment: str) -> None:
        super().__init__(f"invalid percent-encoding in path segment: {segment!r}")
        self.segment = segment


class ConfigError(ValueError):
    """Startup flags are missing or invalid."""
