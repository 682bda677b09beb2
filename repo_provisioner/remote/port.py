"""Remote repository port and the tagged outcomes its operations return.

Remote operations never raise for expected failures. They return either
:class:`RemoteSuccess` or :class:`RemoteFailure`, so callers must handle both
branches explicitly. The failure's :class:`RemoteErrorKind` is the only thing
callers may branch on; message text is for humans.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

if typ.TYPE_CHECKING:
    from repo_provisioner.domain import Repository


class RemoteErrorKind(enum.StrEnum):
    """Failure categories reported by remote adapters."""

    NOT_FOUND = "NotFound"
    API_ERROR = "ApiError"


@dataclasses.dataclass(frozen=True)
class RemoteSuccess[T]:
    """Successful remote call carrying its value."""

    value: T
    success: typ.ClassVar[bool] = True


@dataclasses.dataclass(frozen=True, slots=True)
class RemoteFailure:
    """Failed remote call.

    Attributes
    ----------
    kind : RemoteErrorKind
        ``NOT_FOUND`` when the path is absent on the host, ``API_ERROR`` for
        transport, protocol, and unexpected failures.
    message : str
        Human-readable description.
    path : str, optional
        Offending full path; set for ``NOT_FOUND`` failures.
    status_code : int, optional
        HTTP status code when the host returned one.

    """

    kind: RemoteErrorKind
    message: str
    path: str | None = None
    status_code: int | None = None
    success: typ.ClassVar[bool] = False

    @classmethod
    def not_found(cls, path: str) -> RemoteFailure:
        """Return a failure for a path the host does not know."""
        return cls(
            kind=RemoteErrorKind.NOT_FOUND,
            message=f"Repository not found: {path}",
            path=path,
        )

    @classmethod
    def api_error(
        cls, message: str, *, status_code: int | None = None
    ) -> RemoteFailure:
        """Return a failure for any other remote problem."""
        return cls(
            kind=RemoteErrorKind.API_ERROR,
            message=message,
            status_code=status_code,
        )


type RemoteOutcome[T] = RemoteSuccess[T] | RemoteFailure


class RemoteRepositoryPort(typ.Protocol):
    """Capabilities the synchronisation use case needs from the host."""

    async def exists(self, path: str) -> RemoteOutcome[bool]:
        """Report whether ``path`` exists on the host."""
        ...

    async def get_default_branch(self, path: str) -> RemoteOutcome[str]:
        """Return the current default branch of ``path``."""
        ...

    async def update_default_branch(
        self, path: str, branch: str
    ) -> RemoteOutcome[None]:
        """Point the default branch of ``path`` at ``branch``."""
        ...

    async def get_repository(self, path: str) -> RemoteOutcome[Repository]:
        """Return the host's view of ``path`` as a domain entity."""
        ...
