"""Application use cases for validating and synchronising repositories.

Usage
-----
Validate raw configuration, then synchronise it against a remote adapter::

    from repo_provisioner.application import (
        SyncRepositoriesUseCase,
        ValidateConfigurationUseCase,
    )
    from repo_provisioner.remote import InMemoryRemoteRepository

    raw = {"repositories": [{"path": "g/p1", "defaultBranch": "main"}]}
    report = ValidateConfigurationUseCase().execute(raw)
    if report.is_valid:
        result = await SyncRepositoriesUseCase(
            InMemoryRemoteRepository.demo()
        ).execute(raw)

"""

from __future__ import annotations

from .observability import SyncEventLogger, SyncEventType
from .results import SyncError, SyncResult, ValidationIssue, ValidationResult
from .sync import ReconcileAction, SyncRepositoriesUseCase, build_configuration
from .validate import ValidateConfigurationUseCase

__all__ = [
    "ReconcileAction",
    "SyncError",
    "SyncEventLogger",
    "SyncEventType",
    "SyncRepositoriesUseCase",
    "SyncResult",
    "ValidateConfigurationUseCase",
    "ValidationIssue",
    "ValidationResult",
    "build_configuration",
]
