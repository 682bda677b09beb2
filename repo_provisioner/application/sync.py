"""Use case that reconciles configured default branches with the host."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import datetime as dt
import enum
import typing as typ

from repo_provisioner.config import ConfigurationDocument, decode_configuration
from repo_provisioner.domain import (
    BranchName,
    ConfigurationError,
    ProjectPath,
    Repository,
    RepositoryConfiguration,
    ValidationError,
    Visibility,
)
from repo_provisioner.remote.port import RemoteErrorKind, RemoteFailure

from .observability import SyncEventLogger
from .results import SyncResult

if typ.TYPE_CHECKING:
    from repo_provisioner.remote.port import RemoteRepositoryPort


class ReconcileAction(enum.StrEnum):
    """What happened to a repository that did not fail."""

    UPDATED = "updated"
    SKIPPED = "skipped"


@dataclasses.dataclass(frozen=True, slots=True)
class _Reconciled:
    """Successful reconciliation together with the branch the host reported."""

    action: ReconcileAction
    previous_branch: str


@dataclasses.dataclass(frozen=True, slots=True)
class _ItemFailure:
    """Per-repository failure captured instead of aborting the run."""

    message: str
    kind: str


def build_configuration(
    raw: cabc.Mapping[str, typ.Any] | ConfigurationDocument,
) -> RepositoryConfiguration:
    """Build the validated aggregate for one run.

    Raises
    ------
    ValidationError
        If the document does not decode or any entry fails value-object
        construction.
    DuplicateRepositoryPathError
        If two entries share a full path.

    """
    document = (
        raw if isinstance(raw, ConfigurationDocument) else decode_configuration(raw)
    )
    repositories = [
        Repository(
            path=ProjectPath.create(entry.path),
            default_branch=BranchName.create(entry.default_branch),
            description=entry.description,
            visibility=Visibility.parse(entry.visibility),
        )
        for entry in document.repositories
    ]
    return RepositoryConfiguration.create(repositories)


class SyncRepositoriesUseCase:
    """Reconcile each configured repository's default branch with the host.

    The whole configuration is validated before the first remote call. After
    that, repositories are processed one at a time in input order:

    1. check the path exists;
    2. read the current default branch;
    3. skip when it already matches;
    4. otherwise update it.

    A failure at any step is recorded against that repository and the run
    moves on to the next one. Nothing is retried.

    Parameters
    ----------
    remote
        Adapter implementing :class:`RemoteRepositoryPort`.
    event_logger
        Optional structured event logger; a default one is created otherwise.

    """

    def __init__(
        self,
        remote: RemoteRepositoryPort,
        *,
        event_logger: SyncEventLogger | None = None,
    ) -> None:
        """Store the remote adapter and event logger."""
        self._remote = remote
        self._events = event_logger or SyncEventLogger()

    async def execute(
        self, raw: cabc.Mapping[str, typ.Any] | ConfigurationDocument
    ) -> SyncResult:
        """Synchronise every repository in ``raw``.

        Returns
        -------
        SyncResult
            Totals plus one error entry per failed repository.

        Raises
        ------
        ValidationError
            If any entry is malformed. No remote calls have been made.
        ConfigurationError
            If two entries share a full path. No remote calls have been made.

        """
        try:
            configuration = build_configuration(raw)
        except (ValidationError, ConfigurationError) as exc:
            self._events.log_run_aborted(exc)
            raise

        started_at = dt.datetime.now(dt.UTC)
        result = SyncResult(total_repositories=configuration.repository_count)
        self._events.log_run_started(total_repositories=result.total_repositories)

        for repository in configuration.repositories:
            path = repository.full_path
            desired = repository.default_branch.value
            outcome = await self._reconcile(repository)
            if isinstance(outcome, _ItemFailure):
                result.record_error(path, outcome.message)
                self._events.log_repository_failed(
                    path=path, error_kind=outcome.kind, error=outcome.message
                )
            elif outcome.action is ReconcileAction.UPDATED:
                result.record_updated()
                self._events.log_repository_updated(
                    path=path,
                    previous_branch=outcome.previous_branch,
                    default_branch=desired,
                )
            else:
                result.record_skipped()
                self._events.log_repository_skipped(path=path, default_branch=desired)

        self._events.log_run_completed(result, dt.datetime.now(dt.UTC) - started_at)
        return result

    async def _reconcile(self, repository: Repository) -> _Reconciled | _ItemFailure:
        path = repository.full_path

        exists = await self._remote.exists(path)
        if isinstance(exists, RemoteFailure):
            return _failure("Failed to check repository existence", exists)
        if not exists.value:
            return _ItemFailure(
                f"Repository does not exist: {path}", RemoteErrorKind.NOT_FOUND.value
            )

        current = await self._remote.get_default_branch(path)
        if isinstance(current, RemoteFailure):
            return _failure("Failed to get default branch", current)
        if not current.value:
            return _ItemFailure(
                "Failed to get default branch: no branch reported",
                RemoteErrorKind.API_ERROR.value,
            )

        desired = repository.default_branch.value
        if not repository.needs_update(current.value):
            return _Reconciled(ReconcileAction.SKIPPED, current.value)

        updated = await self._remote.update_default_branch(path, desired)
        if isinstance(updated, RemoteFailure):
            return _failure("Failed to update default branch", updated)
        return _Reconciled(ReconcileAction.UPDATED, current.value)


def _failure(context: str, failure: RemoteFailure) -> _ItemFailure:
    return _ItemFailure(f"{context}: {failure.message}", failure.kind.value)
