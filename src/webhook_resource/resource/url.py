"""Callback URL composition for the Concourse check webhook endpoint."""

import json
from typing import Any, Mapping, Optional
from urllib.parse import quote

from webhook_resource.config.settings import BuildEnvironment, ConfigurationError
from webhook_resource.resource.models import Params, Source

# Reserved and unreserved characters that ECMAScript's encodeURI leaves intact
URI_SAFE = ";,/?:@&=+$!*'()#"

CHECK_WEBHOOK_PATH = (
    "/api/v1/teams/{team}/pipelines/{pipeline}/resources/{resource}/check/webhook"
)


def _render_value(value: Any) -> str:
    """Render an instance variable value the way it appears in the query string."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def instance_var_fragments(*sources: Optional[Mapping[str, Any]]) -> str:
    """Render ``&vars.<key>="<value>"`` fragments for each mapping in turn.

    Mappings are concatenated rather than merged, so a key present in more than
    one of them is emitted once per mapping.
    """
    fragments = ""
    for mapping in sources:
        if not mapping:
            continue
        for key, value in mapping.items():
            fragments += f'&vars.{key}="{_render_value(value)}"'
    return fragments


def compose_callback_url(source: Source, params: Params, build_env: BuildEnvironment) -> str:
    """Build the percent-encoded URL the GitHub hook will call.

    Args:
        source: Resource source configuration.
        params: Put step parameters.
        build_env: Concourse build metadata.

    Returns:
        The check webhook URL for the target resource.

    Raises:
        ConfigurationError: If the base URL, team or pipeline cannot be determined.
    """
    base_url = source.concourse_url or build_env.external_url
    if not base_url:
        raise ConfigurationError("ATC_EXTERNAL_URL is not set and source.concourse_url was not given")

    if not build_env.team_name:
        raise ConfigurationError("BUILD_TEAM_NAME is not set")

    pipeline = params.pipeline or build_env.pipeline_name
    if not pipeline:
        raise ConfigurationError("BUILD_PIPELINE_NAME is not set and params.pipeline was not given")

    path = CHECK_WEBHOOK_PATH.format(
        team=build_env.team_name,
        pipeline=pipeline,
        resource=params.resource_name,
    )
    query = f"webhook_token={params.webhook_token}" + instance_var_fragments(
        build_env.instance_vars,
        params.pipeline_instance_vars,
    )

    return quote(f"{base_url}{path}?{query}", safe=URI_SAFE)
