"""Unit tests for the repository synchronisation use case."""

from __future__ import annotations

import typing as typ

import pytest

from repo_provisioner.application import (
    SyncRepositoriesUseCase,
    SyncResult,
    build_configuration,
)
from repo_provisioner.config import ConfigurationDocument, RepositoryEntry
from repo_provisioner.domain import (
    ConfigurationDecodeError,
    DuplicateRepositoryPathError,
    InvalidBranchNameError,
    InvalidProjectPathError,
    Visibility,
)
from repo_provisioner.remote import (
    InMemoryRemoteRepository,
    RemoteFailure,
    RemoteOutcome,
    RemoteProject,
    RemoteSuccess,
)


def _config(*entries: tuple[str, str]) -> dict[str, typ.Any]:
    return {
        "repositories": [
            {"path": path, "defaultBranch": branch} for path, branch in entries
        ]
    }


async def _sync(remote: InMemoryRemoteRepository, raw: object) -> SyncResult:
    return await SyncRepositoriesUseCase(remote).execute(raw)  # type: ignore[arg-type]


class TestReconciliation:
    """End-to-end reconciliation against the in-memory remote."""

    @pytest.mark.asyncio
    async def test_updates_branch_that_differs(self) -> None:
        """A differing remote branch is updated to the configured one."""
        remote = InMemoryRemoteRepository({"g/p1": RemoteProject("develop")})

        result = await _sync(remote, _config(("g/p1", "main")))

        assert result.as_dict() == {
            "totalRepositories": 1,
            "updatedRepositories": 1,
            "skippedRepositories": 0,
            "errors": [],
        }
        assert remote.calls_to("update_default_branch") == [("g/p1", "main")]
        assert remote.projects["g/p1"].default_branch == "main"

    @pytest.mark.asyncio
    async def test_skips_branch_that_matches(self) -> None:
        """A matching remote branch is left alone."""
        remote = InMemoryRemoteRepository({"g/p1": RemoteProject("main")})

        result = await _sync(remote, _config(("g/p1", "main")))

        assert (result.total_repositories, result.updated_repositories) == (1, 0)
        assert result.skipped_repositories == 1
        assert result.errors == []
        assert remote.calls_to("update_default_branch") == []

    @pytest.mark.asyncio
    async def test_missing_repository_is_recorded(self) -> None:
        """A path the remote does not know is recorded as an error."""
        remote = InMemoryRemoteRepository()

        result = await _sync(remote, _config(("g/p1", "main")))

        assert result.total_repositories == 1
        assert result.updated_repositories == 0
        assert result.skipped_repositories == 0
        assert len(result.errors) == 1
        assert result.errors[0].path == "g/p1"
        assert "does not exist" in result.errors[0].error
        assert remote.calls_to("get_default_branch") == []

    @pytest.mark.asyncio
    async def test_case_differences_trigger_update(self) -> None:
        """Branch comparison is case-sensitive."""
        remote = InMemoryRemoteRepository({"g/p1": RemoteProject("Main")})

        result = await _sync(remote, _config(("g/p1", "main")))

        assert result.updated_repositories == 1

    @pytest.mark.asyncio
    async def test_second_run_is_idempotent(self) -> None:
        """After one run updates a branch, the next run skips it."""
        remote = InMemoryRemoteRepository({"g/p1": RemoteProject("develop")})
        raw = _config(("g/p1", "main"))

        await _sync(remote, raw)
        second = await _sync(remote, raw)

        assert second.updated_repositories == 0
        assert second.skipped_repositories == 1

    @pytest.mark.asyncio
    async def test_processes_repositories_in_input_order(self) -> None:
        """Calls follow configuration order with existence checked first."""
        remote = InMemoryRemoteRepository(
            {"g/b": RemoteProject("main"), "g/a": RemoteProject("develop")}
        )

        await _sync(remote, _config(("g/b", "main"), ("g/a", "main")))

        assert remote.calls == [
            ("exists", "g/b"),
            ("get_default_branch", "g/b"),
            ("exists", "g/a"),
            ("get_default_branch", "g/a"),
            ("update_default_branch", "g/a", "main"),
        ]

    @pytest.mark.asyncio
    async def test_accepts_decoded_document(self) -> None:
        """A decoded configuration document is accepted as input."""
        remote = InMemoryRemoteRepository({"g/p1": RemoteProject("develop")})
        document = ConfigurationDocument(
            repositories=[RepositoryEntry(path="g/p1", default_branch="main")]
        )

        result = await SyncRepositoriesUseCase(remote).execute(document)

        assert result.updated_repositories == 1


class TestFailureIsolation:
    """Per-repository failures are recorded and processing continues."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("operation", "context"),
        [
            ("exists", "Failed to check repository existence"),
            ("get_default_branch", "Failed to get default branch"),
            ("update_default_branch", "Failed to update default branch"),
        ],
    )
    async def test_api_errors_do_not_stop_the_run(
        self, operation: str, context: str
    ) -> None:
        """An API error on the first item leaves the second item unaffected."""
        remote = InMemoryRemoteRepository(
            {"g/p1": RemoteProject("develop"), "g/p2": RemoteProject("develop")}
        )
        remote.fail(operation, "g/p1", message="boom")  # type: ignore[arg-type]

        result = await _sync(remote, _config(("g/p1", "main"), ("g/p2", "main")))

        assert result.total_repositories == 2
        assert result.updated_repositories == 1
        assert [error.path for error in result.errors] == ["g/p1"]
        assert result.errors[0].error == f"{context}: boom"
        assert remote.projects["g/p2"].default_branch == "main"

    @pytest.mark.asyncio
    async def test_counts_always_add_up(self) -> None:
        """Updated, skipped, and failed repositories sum to the total."""
        remote = InMemoryRemoteRepository(
            {
                "g/update": RemoteProject("develop"),
                "g/skip": RemoteProject("main"),
                "g/broken": RemoteProject("develop"),
            }
        )
        remote.fail("update_default_branch", "g/broken")

        result = await _sync(
            remote,
            _config(
                ("g/update", "main"),
                ("g/skip", "main"),
                ("g/missing", "main"),
                ("g/broken", "main"),
            ),
        )

        assert result.total_repositories == 4
        assert (
            result.updated_repositories
            + result.skipped_repositories
            + len(result.errors)
            == result.total_repositories
        )
        assert [error.path for error in result.errors] == ["g/missing", "g/broken"]
        assert not result.succeeded

    @pytest.mark.asyncio
    async def test_empty_remote_branch_is_an_error(self) -> None:
        """A remote that reports no default branch is recorded as a failure."""

        class _NoBranchRemote(InMemoryRemoteRepository):
            async def get_default_branch(self, path: str) -> RemoteOutcome[str]:
                self.calls.append(("get_default_branch", path))
                return RemoteSuccess("")

        remote = _NoBranchRemote({"g/p1": RemoteProject("develop")})

        result = await _sync(remote, _config(("g/p1", "main")))

        assert result.errors[0].error == (
            "Failed to get default branch: no branch reported"
        )
        assert remote.calls_to("update_default_branch") == []

    @pytest.mark.asyncio
    async def test_not_found_from_branch_lookup_is_recorded(self) -> None:
        """A NotFound outcome after a positive existence check is recorded."""

        class _VanishingRemote(InMemoryRemoteRepository):
            async def get_default_branch(self, path: str) -> RemoteOutcome[str]:
                return RemoteFailure.not_found(path)

        remote = _VanishingRemote({"g/p1": RemoteProject("develop")})

        result = await _sync(remote, _config(("g/p1", "main")))

        assert result.errors[0].error == (
            "Failed to get default branch: Repository not found: g/p1"
        )


class TestFailFast:
    """Fatal configuration problems abort before any remote call."""

    @pytest.mark.asyncio
    async def test_duplicate_paths_abort_without_remote_calls(self) -> None:
        """Duplicate full paths raise and leave the remote untouched."""
        remote = InMemoryRemoteRepository({"g/p1": RemoteProject("develop")})

        with pytest.raises(DuplicateRepositoryPathError):
            await _sync(remote, _config(("g/p1", "main"), ("g/p1", "develop")))

        assert remote.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("raw", "error_type"),
        [
            (
                _config(("g/p1", "main"), ("not-a-path", "main")),
                InvalidProjectPathError,
            ),
            (
                _config(("g/p1", "main"), ("g/p2", "bad..branch")),
                InvalidBranchNameError,
            ),
            ({"repositories": [{"path": "g/p1"}]}, ConfigurationDecodeError),
        ],
    )
    async def test_invalid_entries_abort_without_remote_calls(
        self, raw: dict[str, typ.Any], error_type: type[Exception]
    ) -> None:
        """One malformed entry aborts the whole batch."""
        remote = InMemoryRemoteRepository({"g/p1": RemoteProject("develop")})

        with pytest.raises(error_type):
            await _sync(remote, raw)

        assert remote.calls == []
        assert remote.projects["g/p1"].default_branch == "develop"


class TestBuildConfiguration:
    """Tests for ``build_configuration``."""

    def test_builds_entities_with_defaults(self) -> None:
        """Optional fields fall back to domain defaults."""
        configuration = build_configuration(
            {
                "repositories": [
                    {"path": " g/p1 ", "defaultBranch": "main"},
                    {
                        "path": "g/p2",
                        "defaultBranch": "develop",
                        "description": "Two",
                        "visibility": "public",
                    },
                ]
            }
        )

        first, second = configuration.repositories
        assert first.full_path == "g/p1"
        assert first.visibility is Visibility.PRIVATE
        assert second.description == "Two"
        assert second.visibility is Visibility.PUBLIC

    def test_rejects_unknown_visibility(self) -> None:
        """Visibility outside the enum fails to decode."""
        with pytest.raises(ConfigurationDecodeError):
            build_configuration(
                {
                    "repositories": [
                        {"path": "g/p1", "defaultBranch": "main", "visibility": "x"}
                    ]
                }
            )
