"""In-memory implementation of RemoteRepositoryPort for testing and demos."""

from __future__ import annotations

import dataclasses
import typing as typ

from repo_provisioner.domain import (
    BranchName,
    ProjectPath,
    Repository,
    ValidationError,
    Visibility,
)

from .port import RemoteFailure, RemoteOutcome, RemoteSuccess

type RemoteOperation = typ.Literal[
    "exists", "get_default_branch", "update_default_branch", "get_repository"
]


@dataclasses.dataclass(slots=True)
class RemoteProject:
    """Mutable project record held by :class:`InMemoryRemoteRepository`."""

    default_branch: str
    description: str | None = None
    visibility: str = "private"


class InMemoryRemoteRepository:
    """Deterministic, dict-backed stand-in for a hosting provider.

    Projects are keyed by full path. Branch updates mutate the stored record,
    so a second run against the same instance observes the first run's
    changes. Every call is appended to :attr:`calls` for assertions, and
    :meth:`fail` injects an ``API_ERROR`` for one path and operation.

    Examples
    --------
    >>> import asyncio
    >>> remote = InMemoryRemoteRepository({"g/p1": RemoteProject("develop")})
    >>> asyncio.run(remote.get_default_branch("g/p1")).value
    'develop'

    """

    def __init__(self, projects: typ.Mapping[str, RemoteProject] | None = None) -> None:
        """Seed the store with ``projects``, copying the mapping."""
        self._projects: dict[str, RemoteProject] = dict(projects or {})
        self._failures: dict[tuple[RemoteOperation, str], RemoteFailure] = {}
        self.calls: list[tuple[str, ...]] = []

    @classmethod
    def demo(cls) -> InMemoryRemoteRepository:
        """Return a store seeded with a few sample projects."""
        return cls(
            {
                "mygroup/web-application": RemoteProject(
                    "main", description="Web app", visibility="private"
                ),
                "mygroup/api-service": RemoteProject(
                    "master", description="API service", visibility="internal"
                ),
                "mygroup/mobile-app": RemoteProject(
                    "develop", description="Mobile app", visibility="private"
                ),
            }
        )

    @property
    def projects(self) -> dict[str, RemoteProject]:
        """Return the live project records."""
        return self._projects

    def fail(
        self,
        operation: RemoteOperation,
        path: str,
        *,
        message: str = "simulated API failure",
        status_code: int | None = None,
    ) -> None:
        """Make ``operation`` on ``path`` return an API error."""
        self._failures[(operation, path)] = RemoteFailure.api_error(
            message, status_code=status_code
        )

    def calls_to(self, operation: RemoteOperation) -> list[tuple[str, ...]]:
        """Return the argument tuples recorded for ``operation``."""
        return [call[1:] for call in self.calls if call[0] == operation]

    async def exists(self, path: str) -> RemoteOutcome[bool]:
        """Report whether ``path`` is in the store."""
        self.calls.append(("exists", path))
        if failure := self._failures.get(("exists", path)):
            return failure
        return RemoteSuccess(path in self._projects)

    async def get_default_branch(self, path: str) -> RemoteOutcome[str]:
        """Return the stored default branch for ``path``."""
        self.calls.append(("get_default_branch", path))
        if failure := self._failures.get(("get_default_branch", path)):
            return failure
        project = self._projects.get(path)
        if project is None:
            return RemoteFailure.not_found(path)
        return RemoteSuccess(project.default_branch)

    async def update_default_branch(
        self, path: str, branch: str
    ) -> RemoteOutcome[None]:
        """Overwrite the stored default branch for ``path``."""
        self.calls.append(("update_default_branch", path, branch))
        if failure := self._failures.get(("update_default_branch", path)):
            return failure
        project = self._projects.get(path)
        if project is None:
            return RemoteFailure.not_found(path)
        project.default_branch = branch
        return RemoteSuccess(None)

    async def get_repository(self, path: str) -> RemoteOutcome[Repository]:
        """Return the stored project as a domain entity."""
        self.calls.append(("get_repository", path))
        if failure := self._failures.get(("get_repository", path)):
            return failure
        project = self._projects.get(path)
        if project is None:
            return RemoteFailure.not_found(path)
        try:
            repository = Repository(
                path=ProjectPath.create(path),
                default_branch=BranchName.create(project.default_branch),
                description=project.description,
                visibility=Visibility.parse(project.visibility),
            )
        except ValidationError as exc:
            return RemoteFailure.api_error(f"Stored project is invalid: {exc}")
        return RemoteSuccess(repository)
