"""Domain model for repository provisioning.

The domain layer holds the validated value objects (:class:`ProjectPath`,
:class:`BranchName`, :class:`Visibility`), the :class:`Repository` entity, and
the :class:`RepositoryConfiguration` aggregate. It has no I/O and no
third-party dependencies.

Examples
--------
Build a configuration from validated values::

    >>> from repo_provisioner.domain import (
    ...     BranchName, ProjectPath, Repository, RepositoryConfiguration,
    ... )
    >>> repo = Repository(
    ...     path=ProjectPath.create("mygroup/api-service"),
    ...     default_branch=BranchName.create("main"),
    ... )
    >>> config = RepositoryConfiguration.create([repo])
    >>> sorted(config.get_unique_namespaces())
    ['mygroup']

"""

from __future__ import annotations

from .errors import (
    ConfigurationDecodeError,
    ConfigurationError,
    DuplicateRepositoryPathError,
    InvalidBranchNameError,
    InvalidProjectPathError,
    InvalidVisibilityError,
    ValidationError,
)
from .models import Repository, RepositoryConfiguration
from .values import BranchName, ProjectPath, Visibility

__all__ = [
    "BranchName",
    "ConfigurationDecodeError",
    "ConfigurationError",
    "DuplicateRepositoryPathError",
    "InvalidBranchNameError",
    "InvalidProjectPathError",
    "InvalidVisibilityError",
    "ProjectPath",
    "Repository",
    "RepositoryConfiguration",
    "ValidationError",
    "Visibility",
]
