"""GitLab REST adapter for the remote repository port."""

from __future__ import annotations

from .client import GitLabRemoteRepository
from .config import GitLabConfig
from .errors import GitLabConfigError, GitLabResponseShapeError

__all__ = [
    "GitLabConfig",
    "GitLabConfigError",
    "GitLabRemoteRepository",
    "GitLabResponseShapeError",
]
