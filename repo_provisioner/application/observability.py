"""Structured log events for synchronisation runs.

``SyncRepositoriesUseCase`` reports each run and each repository outcome
through :class:`SyncEventLogger`. Events are single lines of the form
``[event-type] key=value ...`` so log aggregators can parse them.

Usage
-----
>>> events = SyncEventLogger()
>>> events.log_run_started(total_repositories=3)

"""

from __future__ import annotations

import enum
import typing as typ

from repo_provisioner.logging import get_logger, log_error, log_info, log_warning

if typ.TYPE_CHECKING:
    import datetime as dt

    from .results import SyncResult

logger = get_logger(__name__)


class SyncEventType(enum.StrEnum):
    """Structured log event types for synchronisation runs."""

    RUN_STARTED = "sync.run.started"
    RUN_COMPLETED = "sync.run.completed"
    RUN_ABORTED = "sync.run.aborted"
    REPOSITORY_UPDATED = "sync.repository.updated"
    REPOSITORY_SKIPPED = "sync.repository.skipped"
    REPOSITORY_FAILED = "sync.repository.failed"


class SyncEventLogger:
    """Emit structured synchronisation events via femtologging."""

    def log_run_started(self, *, total_repositories: int) -> None:
        """Log the start of a run once the configuration has been accepted."""
        log_info(
            logger,
            "[%s] total_repositories=%d",
            SyncEventType.RUN_STARTED,
            total_repositories,
        )

    def log_run_completed(self, result: SyncResult, duration: dt.timedelta) -> None:
        """Log run totals.

        Parameters
        ----------
        result
            Final result of the run.
        duration
            Wall-clock time between start and completion.

        """
        log_info(
            logger,
            "[%s] duration_seconds=%.3f total_repositories=%d "
            "updated_repositories=%d skipped_repositories=%d failed_repositories=%d",
            SyncEventType.RUN_COMPLETED,
            duration.total_seconds(),
            result.total_repositories,
            result.updated_repositories,
            result.skipped_repositories,
            len(result.errors),
        )

    def log_run_aborted(self, error: BaseException) -> None:
        """Log a run stopped by a fatal configuration problem."""
        log_error(
            logger,
            "[%s] error_type=%s error_message=%s",
            SyncEventType.RUN_ABORTED,
            type(error).__name__,
            str(error),
        )

    def log_repository_updated(
        self, *, path: str, previous_branch: str, default_branch: str
    ) -> None:
        """Log a default branch change."""
        log_info(
            logger,
            "[%s] path=%s previous_branch=%s default_branch=%s",
            SyncEventType.REPOSITORY_UPDATED,
            path,
            previous_branch,
            default_branch,
        )

    def log_repository_skipped(self, *, path: str, default_branch: str) -> None:
        """Log a repository that already matched its configuration."""
        log_info(
            logger,
            "[%s] path=%s default_branch=%s",
            SyncEventType.REPOSITORY_SKIPPED,
            path,
            default_branch,
        )

    def log_repository_failed(self, *, path: str, error_kind: str, error: str) -> None:
        """Log a per-repository failure; the run continues."""
        log_warning(
            logger,
            "[%s] path=%s error_kind=%s error_message=%s",
            SyncEventType.REPOSITORY_FAILED,
            path,
            error_kind,
            error,
        )
