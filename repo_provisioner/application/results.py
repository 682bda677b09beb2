"""Result objects returned by the application use cases."""

from __future__ import annotations

import dataclasses
import typing as typ


@dataclasses.dataclass(frozen=True, slots=True)
class SyncError:
    """Failure recorded for one repository during a sync run."""

    path: str
    error: str


@dataclasses.dataclass(slots=True)
class SyncResult:
    """Summary of a synchronisation run.

    Repositories that fail are recorded in :attr:`errors` and count as
    neither updated nor skipped, so ``updated + skipped + len(errors)``
    always equals ``total_repositories`` once a run finishes.
    """

    total_repositories: int = 0
    updated_repositories: int = 0
    skipped_repositories: int = 0
    errors: list[SyncError] = dataclasses.field(default_factory=list)

    def record_updated(self) -> None:
        """Count a repository whose default branch was changed."""
        self.updated_repositories += 1

    def record_skipped(self) -> None:
        """Count a repository that already matched its configuration."""
        self.skipped_repositories += 1

    def record_error(self, path: str, error: str) -> None:
        """Record a per-repository failure."""
        self.errors.append(SyncError(path=path, error=error))

    @property
    def succeeded(self) -> bool:
        """Return True when no repository failed."""
        return not self.errors

    def as_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase representation used for JSON output."""
        return {
            "totalRepositories": self.total_repositories,
            "updatedRepositories": self.updated_repositories,
            "skippedRepositories": self.skipped_repositories,
            "errors": [{"path": err.path, "error": err.error} for err in self.errors],
        }


@dataclasses.dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single structural problem found in raw configuration.

    Attributes
    ----------
    field
        Location of the problem, e.g. ``repositories[1].path``.
    message
        Human-readable description.
    value
        Offending raw value, when there is one.

    """

    field: str
    message: str
    value: object | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of the validation pass."""

    errors: tuple[ValidationIssue, ...] = ()

    @property
    def is_valid(self) -> bool:
        """Return True when no issues were found."""
        return not self.errors
