"""Structural validation of raw repository configuration."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import typing as typ

from repo_provisioner.domain import (
    BranchName,
    ProjectPath,
    ValidationError,
    Visibility,
)

from .results import ValidationIssue, ValidationResult

REPOSITORIES_FIELD = "repositories"


@dataclasses.dataclass(slots=True)
class ValidationState:
    """Mutable validation context shared across helper functions."""

    issues: list[ValidationIssue] = dataclasses.field(default_factory=list)
    seen_paths: set[str] = dataclasses.field(default_factory=set)

    def add(self, field: str, message: str, value: object | None = None) -> None:
        """Append an issue for ``field``."""
        self.issues.append(ValidationIssue(field=field, message=message, value=value))


class ValidateConfigurationUseCase:
    """Check raw configuration without building domain entities.

    Every problem in every entry is reported, each tagged with its field path,
    so one pass gives the user the full list of things to fix.
    """

    def execute(self, raw: object) -> ValidationResult:
        """Validate ``raw`` and return all issues found."""
        state = ValidationState()

        repositories = (
            raw.get(REPOSITORIES_FIELD) if isinstance(raw, cabc.Mapping) else None
        )
        if not isinstance(repositories, list):
            state.add(REPOSITORIES_FIELD, "Repositories must be a list")
            return ValidationResult(tuple(state.issues))

        if not repositories:
            state.add(REPOSITORIES_FIELD, "At least one repository must be specified")

        for index, entry in enumerate(repositories):
            _validate_entry(f"{REPOSITORIES_FIELD}[{index}]", entry, state)

        return ValidationResult(tuple(state.issues))


def _validate_entry(prefix: str, entry: object, state: ValidationState) -> None:
    if not isinstance(entry, cabc.Mapping):
        state.add(prefix, "Repository entry must be a mapping", entry)
        return

    path = _validate_text_field(
        entry, f"{prefix}.path", "path", "Path", ProjectPath.create, state
    )
    if path is not None:
        _check_duplicate_path(f"{prefix}.path", path, state)

    _validate_text_field(
        entry,
        f"{prefix}.defaultBranch",
        "defaultBranch",
        "Default branch",
        BranchName.create,
        state,
    )
    _validate_visibility(f"{prefix}.visibility", entry.get("visibility"), state)

    description = entry.get("description")
    if description is not None and not isinstance(description, str):
        state.add(f"{prefix}.description", "Description must be a string", description)


def _validate_text_field(  # noqa: PLR0913
    entry: cabc.Mapping[str, typ.Any],
    field: str,
    key: str,
    label: str,
    parse: typ.Callable[[str], object],
    state: ValidationState,
) -> str | None:
    """Check a required string field, returning it when it parses."""
    value = entry.get(key)
    if value is None or value == "":
        state.add(field, f"{label} is required")
        return None
    if not isinstance(value, str):
        state.add(field, f"{label} must be a string", value)
        return None
    try:
        parse(value)
    except ValidationError as exc:
        state.add(field, str(exc), value)
        return None
    return value


def _check_duplicate_path(field: str, path: str, state: ValidationState) -> None:
    if path in state.seen_paths:
        state.add(field, f"Duplicate path: {path}", path)
        return
    state.seen_paths.add(path)


def _validate_visibility(field: str, value: object, state: ValidationState) -> None:
    if value is None:
        return
    try:
        Visibility.parse(value)
    except ValidationError as exc:
        state.add(field, str(exc), value)
