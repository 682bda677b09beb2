"""GitLab REST v4 implementation of the remote repository port."""

from __future__ import annotations

import typing as typ
import urllib.parse

import httpx

from repo_provisioner.domain import (
    BranchName,
    ProjectPath,
    Repository,
    ValidationError,
    Visibility,
)
from repo_provisioner.logging import get_logger, log_debug, log_warning
from repo_provisioner.remote.port import (
    RemoteErrorKind,
    RemoteFailure,
    RemoteOutcome,
    RemoteSuccess,
)

from .errors import GitLabConfigError, GitLabResponseShapeError

if typ.TYPE_CHECKING:
    from .config import GitLabConfig

logger = get_logger(__name__)

_HTTP_NOT_FOUND = 404
_HTTP_ERROR_STATUS_THRESHOLD = 400
_ERROR_BODY_LIMIT = 200


def _encode_project_path(path: str) -> str:
    """Encode ``namespace/project`` as the single URL segment GitLab expects."""
    return urllib.parse.quote(path, safe="")


def _error_detail(response: httpx.Response) -> str:
    """Extract GitLab's ``message``/``error`` text from an error response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:_ERROR_BODY_LIMIT]
    if isinstance(payload, dict):
        for key in ("message", "error"):
            detail = payload.get(key)
            if detail:
                return str(detail)
    return str(payload)[:_ERROR_BODY_LIMIT]


def _http_failure(response: httpx.Response, action: str) -> RemoteFailure:
    return RemoteFailure.api_error(
        f"GitLab API HTTP {response.status_code} while {action}: "
        f"{_error_detail(response)}",
        status_code=response.status_code,
    )


def _project_payload(response: httpx.Response) -> dict[str, typ.Any]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise GitLabResponseShapeError.missing("project") from exc
    if not isinstance(payload, dict):
        raise GitLabResponseShapeError.missing("project")
    return payload


def _required_text(payload: dict[str, typ.Any], field: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value:
        raise GitLabResponseShapeError.missing(field)
    return value


def _repository_from_payload(payload: dict[str, typ.Any]) -> Repository:
    description = payload.get("description")
    return Repository(
        path=ProjectPath.create(_required_text(payload, "path_with_namespace")),
        default_branch=BranchName.create(_required_text(payload, "default_branch")),
        description=description if isinstance(description, str) else None,
        visibility=Visibility.parse(payload.get("visibility")),
    )


class GitLabRemoteRepository:
    """GitLab REST implementation of :class:`RemoteRepositoryPort`.

    Every expected failure is returned as a :class:`RemoteFailure`: HTTP 404
    becomes ``NOT_FOUND``, other HTTP errors, transport errors, and malformed
    payloads become ``API_ERROR``. Nothing is retried.
    """

    def __init__(
        self,
        config: GitLabConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the adapter with the provided API configuration."""
        if not config.token.strip():
            raise GitLabConfigError.empty_token()

        self._config = config
        self._headers = {
            "PRIVATE-TOKEN": config.token,
            "User-Agent": config.user_agent,
            "Accept": "application/json",
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> typ.Self:
        """Return the adapter for use as an async context manager."""
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        """Close owned resources on exit."""
        await self.aclose()

    def _project_url(self, path: str) -> str:
        return f"{self._config.api_url}/projects/{_encode_project_path(path)}"

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, typ.Any] | None = None,
    ) -> httpx.Response | RemoteFailure:
        url = self._project_url(path)
        log_debug(logger, "GitLab %s %s", method, url)
        try:
            return await self._client.request(
                method, url, json=json, headers=self._headers
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log_warning(logger, "GitLab %s %s failed: %s", method, url, exc)
            return RemoteFailure.api_error(
                f"GitLab request failed: {type(exc).__name__}: {exc}"
            )

    async def _fetch_project(self, path: str) -> RemoteOutcome[dict[str, typ.Any]]:
        response = await self._send("GET", path)
        if isinstance(response, RemoteFailure):
            return response
        if response.status_code == _HTTP_NOT_FOUND:
            return RemoteFailure.not_found(path)
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            return _http_failure(response, f"reading {path}")
        try:
            return RemoteSuccess(_project_payload(response))
        except GitLabResponseShapeError as exc:
            return RemoteFailure.api_error(str(exc), status_code=response.status_code)

    async def exists(self, path: str) -> RemoteOutcome[bool]:
        """Report whether the project exists; 404 is a ``False`` success."""
        outcome = await self._fetch_project(path)
        if isinstance(outcome, RemoteFailure):
            if outcome.kind is RemoteErrorKind.NOT_FOUND:
                return RemoteSuccess(False)
            return outcome
        return RemoteSuccess(True)

    async def get_default_branch(self, path: str) -> RemoteOutcome[str]:
        """Return the project's ``default_branch`` field."""
        outcome = await self._fetch_project(path)
        if isinstance(outcome, RemoteFailure):
            return outcome
        try:
            return RemoteSuccess(_required_text(outcome.value, "default_branch"))
        except GitLabResponseShapeError as exc:
            return RemoteFailure.api_error(str(exc))

    async def update_default_branch(
        self, path: str, branch: str
    ) -> RemoteOutcome[None]:
        """Set ``default_branch`` on the project via ``PUT /projects/:id``."""
        response = await self._send("PUT", path, json={"default_branch": branch})
        if isinstance(response, RemoteFailure):
            return response
        if response.status_code == _HTTP_NOT_FOUND:
            return RemoteFailure.not_found(path)
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            return _http_failure(response, f"updating {path}")
        return RemoteSuccess(None)

    async def get_repository(self, path: str) -> RemoteOutcome[Repository]:
        """Return the project's current settings as a domain entity."""
        outcome = await self._fetch_project(path)
        if isinstance(outcome, RemoteFailure):
            return outcome
        try:
            return RemoteSuccess(_repository_from_payload(outcome.value))
        except (GitLabResponseShapeError, ValidationError) as exc:
            return RemoteFailure.api_error(f"Unexpected project payload: {exc}")
