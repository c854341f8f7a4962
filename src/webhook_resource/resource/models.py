"""Pydantic models for the resource's stdin requests and stdout responses."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from webhook_resource.config.settings import ConfigurationError

DEFAULT_EVENTS = ("push",)
CONTENT_TYPE = "json"


class Source(BaseModel):
    """The ``source`` block of the resource definition."""

    model_config = ConfigDict(extra="ignore")

    github_api: str
    github_token: str
    concourse_url: Optional[str] = None

    @field_validator("concourse_url", mode="after")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty ``concourse_url`` as unset."""
        return v or None


class Params(BaseModel):
    """The ``params`` block of a put step."""

    model_config = ConfigDict(extra="ignore")

    org: str
    repo: str
    operation: Literal["create", "delete"]
    resource_name: str
    webhook_token: str
    pipeline: Optional[str] = None
    events: list[str] = Field(default_factory=lambda: list(DEFAULT_EVENTS))
    pipeline_instance_vars: Optional[dict[str, Any]] = None

    @field_validator("events", mode="before")
    @classmethod
    def default_events(cls, v: Any) -> Any:
        """Fall back to ``push`` when no events are given."""
        if v is None or (isinstance(v, (list, tuple)) and len(v) == 0):
            return list(DEFAULT_EVENTS)
        return v

    @field_validator("events", mode="after")
    @classmethod
    def dedupe_events(cls, v: list[str]) -> list[str]:
        """Remove duplicate events, keeping first-seen order."""
        return list(dict.fromkeys(v))


class PutRequest(BaseModel):
    """Request document read from stdin by ``out``."""

    source: Source
    params: Params


class VersionRequest(BaseModel):
    """Request document read from stdin by ``check`` and ``in``."""

    model_config = ConfigDict(extra="ignore")

    source: dict[str, Any] = Field(default_factory=dict)
    version: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class DesiredHookConfig:
    """Where and how the desired hook delivers; the key hooks are matched on."""

    url: str
    content_type: str = CONTENT_TYPE

    def to_dict(self) -> dict[str, str]:
        """Render the config as sent to GitHub."""
        return {"url": self.url, "content-type": self.content_type}


@dataclass(frozen=True)
class DesiredHook:
    """The hook a put step asks for."""

    config: DesiredHookConfig
    events: tuple[str, ...] = field(default=DEFAULT_EVENTS)

    def to_request_body(self) -> dict[str, Any]:
        """Build the create/update request body."""
        return {
            # GitHub has announced the deprecation of this field but still requires "web"
            "name": "web",
            "config": self.config.to_dict(),
            "events": list(self.events),
        }


@dataclass(frozen=True)
class ReconciliationResult:
    """Identity of the hook after a put, with the build log lines describing it."""

    id: str
    details: tuple[str, ...] = ()

    def to_output(self) -> dict[str, Any]:
        """Render the Concourse version document."""
        return {"version": {"id": self.id}}


def parse_put_request(raw: str) -> PutRequest:
    """Parse and validate the JSON document given to ``out``.

    Raises:
        ConfigurationError: If the document is not valid JSON or fails validation.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse input JSON: {e}") from e

    try:
        return PutRequest.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid resource configuration: {e}") from e


def parse_version_request(raw: str) -> VersionRequest:
    """Parse the JSON document given to ``check`` or ``in``.

    Raises:
        ConfigurationError: If the document is not valid JSON or fails validation.
    """
    try:
        data = json.loads(raw) if raw.strip() else {}
        return VersionRequest.model_validate(data)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse input JSON: {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"Invalid request: {e}") from e
