"""Startup flags for the event browser."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from event_browser.core.errors import ConfigError

ENV_PREFIX: Final = "EVENT_BROWSER_"


class Flags(BaseModel):
    """Static configuration supplied once at startup.

    Accepts both snake_case names and the camelCase keys used by the flags
    blob embedded in the HTML shell.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    root_url: str = Field(alias="rootUrl", min_length=1)
    streams_url: str = Field(alias="streamsUrl", min_length=1)
    events_url: str = Field(alias="eventsUrl", min_length=1)
    res_version: str = Field(alias="resVersion", min_length=1)


def load_flags(
    source: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, str | None] | None = None,
) -> Flags:
    """Merge flags from a JSON file, the environment and explicit overrides.

    Later sources win. `None` override values are ignored.
    """
    merged: dict[str, Any] = {}

    if source is not None:
        merged.update(_read_flags_file(source))

    env = os.environ if environ is None else environ
    for name in Flags.model_fields:
        value = env.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            merged[name] = value

    for name, value in (overrides or {}).items():
        if value is not None:
            merged[name] = value

    try:
        return Flags.model_validate(merged)
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        raise ConfigError(f"Invalid flags: {', '.join(fields)}") from exc


def _read_flags_file(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Cannot read flags file {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Flags file {path} must contain a JSON object")
    aliases = {field.alias: name for name, field in Flags.model_fields.items() if field.alias}
    return {aliases.get(key, key): value for key, value in payload.items()}
