"""Pydantic models for the GitHub repository hooks API."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class HookConfig(BaseModel):
    """Delivery configuration of a registered hook.

    GitHub reports more keys than we compare on (``insecure_ssl``, ``secret``);
    they are kept as extras so logs show the hook as it was returned.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    url: Optional[str] = None
    content_type: Optional[str] = None
    # The hyphenated key this resource sends; some hooks echo it back as-is
    content_type_sent: Optional[str] = Field(default=None, validation_alias="content-type")


class ExistingHook(BaseModel):
    """A hook as listed by ``GET /repos/{org}/{repo}/hooks``."""

    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    config: HookConfig = Field(default_factory=HookConfig)
    events: list[str] = Field(default_factory=list)
