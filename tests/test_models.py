"""Tests for put request parsing and the desired hook body."""

import json

import pytest

from conftest import make_request
from webhook_resource.config.settings import ConfigurationError
from webhook_resource.resource.models import (
    DesiredHook,
    DesiredHookConfig,
    ReconciliationResult,
    parse_put_request,
    parse_version_request,
)


@pytest.mark.parametrize("events", [None, []])
def test_default_events_when_none_given(events):
    request = make_request(events=events)
    assert request.params.events == ["push"]


def test_default_events_when_key_absent():
    assert make_request().params.events == ["push"]


def test_events_are_deduplicated_in_first_seen_order():
    request = make_request(events=["pull_request", "push", "pull_request", "push"])
    assert request.params.events == ["pull_request", "push"]


def test_unknown_operation_is_rejected():
    raw = json.dumps(
        {
            "source": {"github_api": "https://api.github.com", "github_token": "x"},
            "params": {
                "org": "o",
                "repo": "r",
                "operation": "upsert",
                "resource_name": "res",
                "webhook_token": "tok",
            },
        }
    )

    with pytest.raises(ConfigurationError, match="operation"):
        parse_put_request(raw)


def test_missing_required_params_are_rejected():
    raw = json.dumps({"source": {"github_api": "https://api.github.com", "github_token": "x"}, "params": {}})

    with pytest.raises(ConfigurationError, match="Invalid resource configuration"):
        parse_put_request(raw)


def test_malformed_json_is_rejected():
    with pytest.raises(ConfigurationError, match="Failed to parse input JSON"):
        parse_put_request("{not json")


def test_empty_concourse_url_is_unset():
    request = make_request(source={"concourse_url": ""})
    assert request.source.concourse_url is None


def test_request_body_shape():
    hook = DesiredHook(
        config=DesiredHookConfig(url="https://ci/hook"),
        events=("push", "pull_request"),
    )

    assert hook.to_request_body() == {
        "name": "web",
        "config": {"url": "https://ci/hook", "content-type": "json"},
        "events": ["push", "pull_request"],
    }


def test_result_output():
    assert ReconciliationResult(id="42").to_output() == {"version": {"id": "42"}}


def test_version_request_allows_empty_input():
    request = parse_version_request("")
    assert request.version is None


def test_version_request_reads_version():
    request = parse_version_request('{"source": {}, "version": {"id": "7"}}')
    assert request.version == {"id": "7"}
