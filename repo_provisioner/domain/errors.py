"""Errors raised while building the repository domain model."""

from __future__ import annotations

import typing as typ


class ValidationError(ValueError):
    """Raised when raw input cannot be turned into a domain value."""

    def __init__(self, message: str, *, value: object | None = None) -> None:
        """Initialise with a message and the offending raw value."""
        self.value = value
        super().__init__(message)


class InvalidProjectPathError(ValidationError):
    """Raised when a project path is not in ``namespace/project`` form."""

    @classmethod
    def empty(cls) -> InvalidProjectPathError:
        """Return an error for a blank project path."""
        return cls("Project path cannot be empty", value="")

    @classmethod
    def bad_format(cls, value: str) -> InvalidProjectPathError:
        """Return an error for a path without exactly one separator."""
        return cls(
            f"Invalid project path format: {value}. "
            "Expected format: namespace/project",
            value=value,
        )

    @classmethod
    def empty_segment(cls, value: str) -> InvalidProjectPathError:
        """Return an error for a path with a blank namespace or project."""
        return cls(f"Invalid project path: {value}", value=value)

    @classmethod
    def bad_characters(cls, value: str) -> InvalidProjectPathError:
        """Return an error for a segment with disallowed characters."""
        return cls(f"Invalid characters in project path: {value}", value=value)


class InvalidBranchNameError(ValidationError):
    """Raised when a branch name breaks git ref naming rules."""

    @classmethod
    def empty(cls) -> InvalidBranchNameError:
        """Return an error for a blank branch name."""
        return cls("Branch name cannot be empty", value="")

    @classmethod
    def rejected(cls, value: str, reason: str) -> InvalidBranchNameError:
        """Return an error naming the rule ``value`` violates."""
        return cls(f"Invalid branch name: {value} ({reason})", value=value)


class InvalidVisibilityError(ValidationError):
    """Raised when a visibility is not one of the supported levels."""

    @classmethod
    def unknown(
        cls, value: object, allowed: typ.Iterable[str]
    ) -> InvalidVisibilityError:
        """Return an error listing the accepted visibility levels."""
        return cls(
            f"Visibility must be one of: {', '.join(allowed)}",
            value=value,
        )


class ConfigurationDecodeError(ValidationError):
    """Raised when a configuration document does not match its schema."""

    def __init__(self, issues: list[str]) -> None:
        """Capture decode issues whilst preserving the aggregated message."""
        self.issues = issues
        super().__init__("\n".join(issues))


class ConfigurationError(RuntimeError):
    """Raised when a configuration breaks an aggregate-level rule."""


class DuplicateRepositoryPathError(ConfigurationError):
    """Raised when two configured repositories share a full path."""

    def __init__(self, paths: typ.Sequence[str]) -> None:
        """Initialise with the paths that occur more than once."""
        self.paths = tuple(paths)
        super().__init__(
            "Configuration contains duplicate repository paths: "
            + ", ".join(self.paths)
        )
