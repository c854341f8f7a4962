"""GitHub client for the repository hooks API."""

import json
import logging
import ssl
from typing import Any, Optional

import certifi
import httpx

from webhook_resource import __version__
from webhook_resource.github.models import ExistingHook

USER_AGENT = f"github-webhook-resource/{__version__}"
ACCEPT = "application/vnd.github.v3+json"
TOKEN_SCOPE_URL = "https://github.com/settings/tokens/new?scopes=admin:repo_hook"


def _get_ssl_context() -> ssl.SSLContext:
    """Create an SSL context using certifi's CA bundle."""
    return ssl.create_default_context(cafile=certifi.where())


def hooks_endpoint(github_api: str, org: str, repo: str) -> str:
    """Return the hooks collection URL for a repository."""
    return f"{github_api.rstrip('/')}/repos/{org}/{repo}/hooks"


def collaboration_settings_url(uri: str) -> str:
    """Map a hooks API URI to the repository's collaborator settings page.

    ``https://api.github.com/repos/o/r/hooks/1`` becomes
    ``https://github.com/o/r/settings/collaboration``.
    """
    base = uri.split("/hooks", 1)[0]
    return base.replace("//api.", "//").replace("/repos", "", 1) + "/settings/collaboration"


class RemoteCallError(Exception):
    """Raised when a GitHub request fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
        uri: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.uri = uri

    @property
    def hint(self) -> Optional[str]:
        """Remediation hint for the failure, if one is known."""
        if self.status_code != 404:
            return None
        return (
            "Response was 404:\n"
            f"    Your token's account must be an Administrator of your repo. "
            f"{collaboration_settings_url(self.uri)}\n"
            f"    Additionally, your token must have the 'admin:repo_hook' scope. {TOKEN_SCOPE_URL}"
        )

    def __str__(self) -> str:
        message = super().__str__()
        if self.hint:
            return f"{message}\n{self.hint}"
        return message


def _format_body(text: str) -> str:
    """Pretty-print a JSON response body, falling back to the raw text."""
    try:
        return json.dumps(json.loads(text), indent=2)
    except ValueError:
        return text


class GitHubHooksClient:
    """Client for listing, creating, updating and deleting repository hooks."""

    def __init__(
        self,
        token: str,
        timeout: int = 30,
        transport: Optional[httpx.BaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the client.

        Args:
            token: GitHub personal access token.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used by tests.
            logger: Optional logger for debug output.
        """
        self.timeout = timeout
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)
        self.headers = {
            "Accept": ACCEPT,
            "Content-Type": "application/json",
            "Authorization": f"token {token}",
            "User-Agent": USER_AGENT,
        }

    def list_hooks(self, endpoint: str) -> list[ExistingHook]:
        """Fetch every hook registered on the repository.

        Raises:
            RemoteCallError: If the request fails or the response is not a hook list.
        """
        data = self._request("GET", endpoint)
        if not isinstance(data, list):
            raise RemoteCallError(f"Expected a list of hooks from {endpoint}", uri=endpoint)
        try:
            return [ExistingHook.model_validate(item) for item in data]
        except Exception as e:
            raise RemoteCallError(f"Failed to parse hook list: {e}", uri=endpoint) from e

    def create_hook(self, endpoint: str, body: dict[str, Any]) -> ExistingHook:
        """Register a new hook and return it as GitHub reports it."""
        return self._parse_hook(self._request("POST", endpoint, body), endpoint)

    def update_hook(self, endpoint: str, body: dict[str, Any]) -> ExistingHook:
        """Replace the configuration of the hook at ``endpoint``."""
        return self._parse_hook(self._request("PATCH", endpoint, body), endpoint)

    def delete_hook(self, endpoint: str) -> None:
        """Delete the hook at ``endpoint``."""
        self._request("DELETE", endpoint)

    def _parse_hook(self, data: Any, endpoint: str) -> ExistingHook:
        try:
            return ExistingHook.model_validate(data)
        except Exception as e:
            raise RemoteCallError(f"Failed to parse hook response: {e}", uri=endpoint) from e

    def _request(self, method: str, uri: str, body: Optional[dict[str, Any]] = None) -> Any:
        """Issue a single request and return the decoded JSON body (None when empty)."""
        self.logger.debug(f"{method} {uri}")

        with httpx.Client(
            timeout=self.timeout,
            verify=_get_ssl_context(),
            transport=self.transport,
        ) as client:
            try:
                response = client.request(method, uri, headers=self.headers, json=body)
                response.raise_for_status()

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                text = e.response.text or ""
                self.logger.error(
                    f"Error while calling GitHub: {method} {uri}\n"
                    f"Response Status: {status}\n"
                    f"Message: {_format_body(text)}"
                )
                error = RemoteCallError(
                    f"GitHub request failed: status={status}, body={text[:200]}",
                    status_code=status,
                    body=text,
                    uri=uri,
                )
                if error.hint:
                    self.logger.error(error.hint)
                raise error from e

            except httpx.RequestError as e:
                self.logger.error(f"Error while calling GitHub: {method} {uri}: {e}")
                raise RemoteCallError(f"GitHub request failed: {e}", uri=uri) from e

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise RemoteCallError(f"Failed to parse GitHub response: {e}", uri=uri) from e
