"""Command-line interface for validating and synchronising repository settings."""

from __future__ import annotations

import argparse
import asyncio
import os
import typing as typ
from pathlib import Path

import msgspec

from repo_provisioner.application import (
    SyncRepositoriesUseCase,
    SyncResult,
    ValidateConfigurationUseCase,
    ValidationResult,
    build_configuration,
)
from repo_provisioner.config import (
    ConfigurationLoadError,
    load_configuration,
    write_configuration_schema,
)
from repo_provisioner.domain import ConfigurationError, ValidationError
from repo_provisioner.gitlab import (
    GitLabConfig,
    GitLabConfigError,
    GitLabRemoteRepository,
)
from repo_provisioner.logging import (
    LOG_LEVEL_ENV_VAR,
    configure_logging,
    get_logger,
    log_exception,
    log_warning,
)
from repo_provisioner.remote import InMemoryRemoteRepository

if typ.TYPE_CHECKING:
    from repo_provisioner.remote import RemoteRepositoryPort

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("repositories.yml")


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        default=None,
        help="Log level (defaults to REPO_PROVISIONER_LOG_LEVEL or INFO)",
    )
    parser = argparse.ArgumentParser(
        prog="repo-provisioner",
        description="Synchronise repository settings from a YAML file",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    validate = subcommands.add_parser(
        "validate", parents=[common], help="Validate a configuration file"
    )
    validate.add_argument(
        "config",
        type=Path,
        nargs="?",
        default=DEFAULT_CONFIG_PATH,
        help="YAML configuration to validate",
    )
    validate.add_argument(
        "--schema-out",
        type=Path,
        default=None,
        help="Optional path to write the configuration JSON Schema",
    )
    validate.set_defaults(handler=_run_validate)

    sync = subcommands.add_parser(
        "sync", parents=[common], help="Synchronise repositories"
    )
    sync.add_argument(
        "config",
        type=Path,
        nargs="?",
        default=DEFAULT_CONFIG_PATH,
        help="YAML configuration to synchronise",
    )
    sync.add_argument(
        "--dry-run",
        action="store_true",
        help="List the repositories that would be processed without contacting "
        "the host",
    )
    sync.add_argument(
        "--remote",
        choices=("gitlab", "memory"),
        default="gitlab",
        help="Remote adapter; 'memory' uses a built-in demo data set",
    )
    sync.add_argument(
        "--json-out",
        type=Path,
        default=None,
        help="Optional path to write the sync result as JSON",
    )
    sync.set_defaults(handler=_run_sync)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when validation fails, the run aborts, or
        any repository fails to synchronise.

    """
    args = _build_parser().parse_args(argv)
    normalized_level, invalid_level = configure_logging(args.log_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid log level %r, falling back to %s",
            args.log_level or os.environ.get(LOG_LEVEL_ENV_VAR),
            normalized_level,
        )
    handler: typ.Callable[[argparse.Namespace], int] = args.handler
    return handler(args)


def _load_and_validate(config_path: Path) -> dict[str, typ.Any] | None:
    """Load ``config_path`` and print problems, returning None on failure."""
    try:
        raw = load_configuration(config_path)
    except ConfigurationLoadError as exc:
        print(f"Failed to load configuration {config_path}:")
        for issue in exc.issues:
            print(f"  - {issue}")
        return None

    report = ValidateConfigurationUseCase().execute(raw)
    if not report.is_valid:
        _print_validation_failure(config_path, report)
        return None
    return raw


def _print_validation_failure(config_path: Path, report: ValidationResult) -> None:
    print(f"Configuration validation failed for {config_path}:")
    for issue in report.errors:
        print(f"  - {issue.field}: {issue.message}")


def _run_validate(args: argparse.Namespace) -> int:
    config_path: Path = args.config
    raw = _load_and_validate(config_path)
    if raw is None:
        return 1

    try:
        configuration = build_configuration(raw)
    except (ValidationError, ConfigurationError) as exc:
        print(f"Configuration validation failed for {config_path}: {exc}")
        return 1

    if args.schema_out:
        write_configuration_schema(args.schema_out)

    print(
        f"configuration {config_path} is valid "
        f"({configuration.repository_count} repositories / "
        f"{len(configuration.get_unique_namespaces())} namespaces)"
    )
    return 0


def _build_remote(name: str) -> RemoteRepositoryPort:
    if name == "memory":
        return InMemoryRemoteRepository.demo()
    return GitLabRemoteRepository(GitLabConfig.from_env())


async def _execute_sync(
    remote: RemoteRepositoryPort, raw: dict[str, typ.Any]
) -> SyncResult:
    try:
        return await SyncRepositoriesUseCase(remote).execute(raw)
    finally:
        if isinstance(remote, GitLabRemoteRepository):
            await remote.aclose()


def _run_sync(args: argparse.Namespace) -> int:
    config_path: Path = args.config
    raw = _load_and_validate(config_path)
    if raw is None:
        return 1

    if args.dry_run:
        return _print_dry_run(raw)

    try:
        remote = _build_remote(args.remote)
    except GitLabConfigError as exc:
        log_exception(logger, "GitLab adapter misconfigured", exc)
        print(f"Error: {exc}")
        return 1

    try:
        result = asyncio.run(_execute_sync(remote, raw))
    except (ValidationError, ConfigurationError) as exc:
        print(f"Error: {exc}")
        return 1

    if args.json_out:
        args.json_out.write_bytes(msgspec.json.encode(result.as_dict()))

    _print_sync_result(result)
    return 0 if result.succeeded else 1


def _print_dry_run(raw: dict[str, typ.Any]) -> int:
    try:
        configuration = build_configuration(raw)
    except (ValidationError, ConfigurationError) as exc:
        print(f"Error: {exc}")
        return 1

    print("DRY RUN - no changes will be made")
    print("Would process the following repositories:")
    for repository in configuration.repositories:
        print(
            f"  - {repository.full_path} "
            f"(default branch: {repository.default_branch.value})"
        )
    return 0


def _print_sync_result(result: SyncResult) -> None:
    print("Sync results:")
    print(f"  Total repositories: {result.total_repositories}")
    print(f"  Updated repositories: {result.updated_repositories}")
    print(f"  Skipped repositories: {result.skipped_repositories}")
    if result.errors:
        print("Errors:")
        for error in result.errors:
            print(f"  - {error.path}: {error.error}")


if __name__ == "__main__":
    raise SystemExit(main())
