"""GitLab adapter errors."""

from __future__ import annotations


class GitLabConfigError(RuntimeError):
    """Raised when GitLab client configuration is invalid."""

    @classmethod
    def missing_token(cls) -> GitLabConfigError:
        """Return an error when no GitLab token is configured."""
        return cls("GITLAB_TOKEN environment variable is required")

    @classmethod
    def empty_token(cls) -> GitLabConfigError:
        """Return an error when the provided token is empty."""
        return cls("GitLab token must be non-empty")

    @classmethod
    def invalid_timeout(cls, raw: str) -> GitLabConfigError:
        """Return an error for a non-positive or non-numeric timeout."""
        return cls(f"GITLAB_TIMEOUT_SECONDS must be a positive number, got: {raw!r}")

    @classmethod
    def invalid_endpoint(cls, raw: str) -> GitLabConfigError:
        """Return an error for an endpoint that is not an absolute HTTP(S) URL."""
        return cls(f"GITLAB_ENDPOINT must be an absolute http(s) URL, got: {raw!r}")


class GitLabResponseShapeError(RuntimeError):
    """Raised when a GitLab response lacks an expected field."""

    @classmethod
    def missing(cls, field: str) -> GitLabResponseShapeError:
        """Return an error for a missing response field."""
        return cls(f"GitLab response missing expected field: {field}")
