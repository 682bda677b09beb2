"""Repository entity and the configuration aggregate that groups them."""

from __future__ import annotations

import collections
import dataclasses
import datetime as dt
import typing as typ

from .errors import DuplicateRepositoryPathError
from .values import BranchName, ProjectPath, Visibility


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


@dataclasses.dataclass(frozen=True, slots=True)
class Repository:
    """Desired settings for one hosted repository.

    Attributes
    ----------
    path : ProjectPath
        Full path identifying the repository on the host.
    default_branch : BranchName
        Branch the repository should point to by default.
    description : str, optional
        Free-form project description.
    visibility : Visibility
        Access level; private unless configured otherwise.

    """

    path: ProjectPath
    default_branch: BranchName
    description: str | None = None
    visibility: Visibility = Visibility.PRIVATE

    def __post_init__(self) -> None:
        """Reject raw strings in place of validated value objects."""
        if not isinstance(self.path, ProjectPath):
            msg = "Repository.path must be a ProjectPath"
            raise TypeError(msg)
        if not isinstance(self.default_branch, BranchName):
            msg = "Repository.default_branch must be a BranchName"
            raise TypeError(msg)
        if not isinstance(self.visibility, Visibility):
            msg = "Repository.visibility must be a Visibility"
            raise TypeError(msg)

    @property
    def full_path(self) -> str:
        """Return the ``namespace/project`` identifier used by the host API."""
        return self.path.value

    @property
    def namespace(self) -> str:
        """Return the namespace segment of the path."""
        return self.path.namespace

    @property
    def project_name(self) -> str:
        """Return the project segment of the path."""
        return self.path.project_name

    def needs_update(self, remote_branch: str) -> bool:
        """Return True when ``remote_branch`` differs from the desired branch.

        The comparison is exact, so ``"Main"`` and ``"main"`` are different
        branches.
        """
        return remote_branch != self.default_branch.value


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryConfiguration:
    """Ordered collection of repositories handled in one synchronisation run.

    Build instances through :meth:`create`, which rejects duplicate full
    paths. The plain constructor accepts any collection so callers can inspect
    an unchecked set with :meth:`has_unique_paths`.
    """

    repositories: tuple[Repository, ...]
    created_at: dt.datetime = dataclasses.field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        """Freeze the repositories into a tuple."""
        object.__setattr__(self, "repositories", tuple(self.repositories))

    @classmethod
    def create(cls, repositories: typ.Iterable[Repository]) -> RepositoryConfiguration:
        """Build a configuration, enforcing unique full paths.

        Raises
        ------
        DuplicateRepositoryPathError
            If two repositories share a full path.

        """
        configuration = cls(tuple(repositories))
        duplicates = configuration.duplicate_paths()
        if duplicates:
            raise DuplicateRepositoryPathError(duplicates)
        return configuration

    @property
    def repository_count(self) -> int:
        """Return the number of configured repositories."""
        return len(self.repositories)

    def duplicate_paths(self) -> list[str]:
        """Return full paths that occur more than once, in first-seen order."""
        counts = collections.Counter(repo.full_path for repo in self.repositories)
        return [path for path, count in counts.items() if count > 1]

    def has_unique_paths(self) -> bool:
        """Return True when no two repositories share a full path."""
        return not self.duplicate_paths()

    def get_repository_by_path(self, path: str) -> Repository | None:
        """Return the first repository whose full path equals ``path``."""
        return next(
            (repo for repo in self.repositories if repo.full_path == path), None
        )

    def get_unique_namespaces(self) -> frozenset[str]:
        """Return the distinct namespaces across all repositories."""
        return frozenset(repo.namespace for repo in self.repositories)
