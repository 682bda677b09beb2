"""Configuration for the GitLab REST adapter.

The configuration is read once at process start and passed to
:class:`~repo_provisioner.gitlab.client.GitLabRemoteRepository`; nothing
reads the environment after that.

Usage
-----
>>> import os
>>> os.environ["GITLAB_TOKEN"] = "glpat-example"
>>> config = GitLabConfig.from_env()
>>> config.endpoint
'https://gitlab.com'

"""

from __future__ import annotations

import dataclasses as dc
import os

import httpx

from .errors import GitLabConfigError

DEFAULT_ENDPOINT = "https://gitlab.com"
DEFAULT_TIMEOUT_S = 20.0


@dc.dataclass(frozen=True, slots=True)
class GitLabConfig:
    """Connection settings for a GitLab instance.

    Attributes
    ----------
    token
        Personal or project access token sent as ``PRIVATE-TOKEN``.
    endpoint
        Base URL of the instance, without the ``/api/v4`` suffix.
    timeout_s
        Per-request timeout in seconds.
    user_agent
        ``User-Agent`` header value.

    """

    token: str
    endpoint: str = DEFAULT_ENDPOINT
    timeout_s: float = DEFAULT_TIMEOUT_S
    user_agent: str = "repo-provisioner/0.1"

    @property
    def api_url(self) -> str:
        """Return the REST v4 base URL."""
        return f"{self.endpoint.rstrip('/')}/api/v4"

    @staticmethod
    def _parse_timeout(raw: str) -> float:
        if not raw.strip():
            return DEFAULT_TIMEOUT_S
        try:
            value = float(raw)
        except ValueError as exc:
            raise GitLabConfigError.invalid_timeout(raw) from exc
        if value <= 0:
            raise GitLabConfigError.invalid_timeout(raw)
        return value

    @staticmethod
    def _parse_endpoint(raw: str) -> str:
        endpoint = raw.strip() or DEFAULT_ENDPOINT
        try:
            url = httpx.URL(endpoint)
        except httpx.InvalidURL as exc:
            raise GitLabConfigError.invalid_endpoint(endpoint) from exc
        if url.scheme not in {"http", "https"} or not url.host:
            raise GitLabConfigError.invalid_endpoint(endpoint)
        return endpoint

    @classmethod
    def from_env(cls) -> GitLabConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``GITLAB_TOKEN``: access token (required).
        - ``GITLAB_ENDPOINT``: instance URL, default ``https://gitlab.com``.
        - ``GITLAB_TIMEOUT_SECONDS``: positive request timeout, default 20.

        Raises
        ------
        GitLabConfigError
            If the token is missing, the endpoint is not an absolute http(s)
            URL, or the timeout is not a positive number.

        """
        token = os.environ.get("GITLAB_TOKEN", "").strip()
        if not token:
            raise GitLabConfigError.missing_token()

        endpoint = cls._parse_endpoint(os.environ.get("GITLAB_ENDPOINT", ""))
        timeout_s = cls._parse_timeout(os.environ.get("GITLAB_TIMEOUT_SECONDS", ""))
        return cls(token=token, endpoint=endpoint, timeout_s=timeout_s)
