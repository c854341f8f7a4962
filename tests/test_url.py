"""Tests for callback URL composition."""

import pytest

from conftest import make_request
from webhook_resource.config.settings import BuildEnvironment, ConfigurationError
from webhook_resource.resource.url import compose_callback_url, instance_var_fragments


def test_concourse_url_takes_precedence(build_env):
    request = make_request(source={"concourse_url": "https://ci.example.com"})

    url = compose_callback_url(request.source, request.params, build_env)

    assert url == (
        "https://ci.example.com/api/v1/teams/t/pipelines/p/resources/r/check/webhook"
        "?webhook_token=tok"
    )


def test_falls_back_to_external_url(build_env):
    request = make_request()

    url = compose_callback_url(request.source, request.params, build_env)

    assert url.startswith("https://atc.example.com/api/v1/teams/t/pipelines/p/")


def test_param_pipeline_overrides_build_pipeline(build_env):
    request = make_request(pipeline="other")

    url = compose_callback_url(request.source, request.params, build_env)

    assert "/pipelines/other/resources/r/" in url


def test_instance_vars_are_quoted_and_encoded():
    env = BuildEnvironment(
        team_name="t",
        pipeline_name="p",
        external_url="https://atc.example.com",
        instance_vars={"branch": "feature x"},
    )
    request = make_request()

    url = compose_callback_url(request.source, request.params, env)

    assert url.endswith('?webhook_token=tok&vars.branch=%22feature%20x%22')


def test_duplicate_keys_from_both_sources_are_both_emitted():
    env = BuildEnvironment(
        team_name="t",
        pipeline_name="p",
        external_url="https://atc.example.com",
        instance_vars={"env": "prod"},
    )
    request = make_request(pipeline_instance_vars={"env": "prod"})

    url = compose_callback_url(request.source, request.params, env)

    assert url.count("&vars.env=%22prod%22") == 2
    assert url.endswith("webhook_token=tok&vars.env=%22prod%22&vars.env=%22prod%22")


def test_ambient_vars_come_before_param_vars():
    fragments = instance_var_fragments({"a": "1"}, {"b": "2"})
    assert fragments == '&vars.a="1"&vars.b="2"'


def test_non_string_values_render_as_json_scalars():
    fragments = instance_var_fragments({"n": 3, "flag": True})
    assert fragments == '&vars.n="3"&vars.flag="true"'


def test_no_instance_vars():
    assert instance_var_fragments({}, None) == ""


def test_reserved_characters_are_kept():
    env = BuildEnvironment(team_name="t", pipeline_name="p", external_url="https://atc.example.com:8443")
    request = make_request(webhook_token="a=b&c")

    url = compose_callback_url(request.source, request.params, env)

    assert url.startswith("https://atc.example.com:8443/api/v1/")
    assert url.endswith("?webhook_token=a=b&c")


@pytest.mark.parametrize(
    "env, message",
    [
        (BuildEnvironment(team_name="t", pipeline_name="p"), "ATC_EXTERNAL_URL"),
        (BuildEnvironment(pipeline_name="p", external_url="https://x"), "BUILD_TEAM_NAME"),
        (BuildEnvironment(team_name="t", external_url="https://x"), "BUILD_PIPELINE_NAME"),
    ],
)
def test_missing_build_metadata_is_a_configuration_error(env, message):
    request = make_request()

    with pytest.raises(ConfigurationError, match=message):
        compose_callback_url(request.source, request.params, env)


def test_missing_pipeline_name_is_fine_when_param_given():
    env = BuildEnvironment(team_name="t", external_url="https://x")
    request = make_request(pipeline="given")

    url = compose_callback_url(request.source, request.params, env)

    assert "/pipelines/given/" in url
