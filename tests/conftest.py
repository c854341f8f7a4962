"""Shared fixtures for webhook resource tests."""

from typing import Any

import pytest

from webhook_resource.config.settings import BuildEnvironment, reset_settings
from webhook_resource.github.models import ExistingHook
from webhook_resource.resource.models import PutRequest

BUILD_VARS = (
    "BUILD_TEAM_NAME",
    "BUILD_PIPELINE_NAME",
    "ATC_EXTERNAL_URL",
    "BUILD_PIPELINE_INSTANCE_VARS",
    "DEBUG_MODE",
    "GITHUB_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Each test starts without Concourse build metadata or cached settings."""
    for name in BUILD_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def build_env() -> BuildEnvironment:
    return BuildEnvironment(
        team_name="t",
        pipeline_name="p",
        external_url="https://atc.example.com",
    )


def make_request(**params: Any) -> PutRequest:
    """Build a put request with sensible defaults, overridden by ``params``."""
    source = params.pop("source", {})
    data = {
        "source": {
            "github_api": "https://api.github.com",
            "github_token": "secret",
            **source,
        },
        "params": {
            "org": "acme",
            "repo": "widgets",
            "operation": "create",
            "resource_name": "r",
            "webhook_token": "tok",
            **params,
        },
    }
    return PutRequest.model_validate(data)


def make_hook(hook_id: Any, url: str, events: list[str], **config: Any) -> ExistingHook:
    """Build a hook shaped like GitHub's list response."""
    return ExistingHook.model_validate(
        {
            "id": hook_id,
            "name": "web",
            "active": True,
            "events": events,
            "config": {"url": url, "content_type": "json", "insecure_ssl": "0", **config},
        }
    )


class FakeHookRepository:
    """In-memory stand-in for GitHubHooksClient that records every call."""

    def __init__(self, hooks: list[ExistingHook] | None = None, next_id: int = 100):
        self.hooks = list(hooks or [])
        self.next_id = next_id
        self.calls: list[tuple[str, str]] = []

    @property
    def writes(self) -> list[tuple[str, str]]:
        return [c for c in self.calls if c[0] != "list"]

    def list_hooks(self, endpoint: str) -> list[ExistingHook]:
        self.calls.append(("list", endpoint))
        return list(self.hooks)

    def create_hook(self, endpoint: str, body: dict) -> ExistingHook:
        self.calls.append(("create", endpoint))
        hook = ExistingHook.model_validate({"id": self.next_id, **body})
        self.next_id += 1
        self.hooks.append(hook)
        return hook

    def update_hook(self, endpoint: str, body: dict) -> ExistingHook:
        self.calls.append(("update", endpoint))
        hook_id = int(endpoint.rsplit("/", 1)[1])
        hook = ExistingHook.model_validate({"id": hook_id, **body})
        self.hooks = [hook if h.id == hook_id else h for h in self.hooks]
        return hook

    def delete_hook(self, endpoint: str) -> None:
        self.calls.append(("delete", endpoint))
        hook_id = int(endpoint.rsplit("/", 1)[1])
        self.hooks = [h for h in self.hooks if h.id != hook_id]


@pytest.fixture
def repository() -> FakeHookRepository:
    return FakeHookRepository()
