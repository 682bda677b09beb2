"""Remote repository port, tagged outcomes, and the in-memory adapter."""

from __future__ import annotations

from .memory import InMemoryRemoteRepository, RemoteProject
from .port import (
    RemoteErrorKind,
    RemoteFailure,
    RemoteOutcome,
    RemoteRepositoryPort,
    RemoteSuccess,
)

__all__ = [
    "InMemoryRemoteRepository",
    "RemoteErrorKind",
    "RemoteFailure",
    "RemoteOutcome",
    "RemoteProject",
    "RemoteRepositoryPort",
    "RemoteSuccess",
]
