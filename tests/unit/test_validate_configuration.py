"""Unit tests for the configuration validation pass."""

from __future__ import annotations

import typing as typ

import pytest

from repo_provisioner.application import ValidateConfigurationUseCase, ValidationIssue


def _validate(raw: object) -> list[ValidationIssue]:
    return list(ValidateConfigurationUseCase().execute(raw).errors)


def _fields(issues: list[ValidationIssue]) -> list[str]:
    return [issue.field for issue in issues]


def test_valid_configuration_has_no_issues() -> None:
    """A well-formed document passes."""
    result = ValidateConfigurationUseCase().execute(
        {
            "repositories": [
                {"path": "g/p1", "defaultBranch": "main"},
                {
                    "path": "g/p2",
                    "defaultBranch": "develop",
                    "description": "Second project",
                    "visibility": "internal",
                },
            ]
        }
    )

    assert result.is_valid
    assert result.errors == ()


def test_empty_list_reports_single_issue() -> None:
    """An empty list yields exactly one error on ``repositories``."""
    issues = _validate({"repositories": []})

    assert len(issues) == 1
    assert issues[0].field == "repositories"
    assert issues[0].message == "At least one repository must be specified"


@pytest.mark.parametrize(
    "raw",
    [{}, {"repositories": "g/p1"}, {"repositories": {"path": "g/p1"}}, None, []],
)
def test_non_list_repositories_reports_single_issue(raw: object) -> None:
    """A missing or non-list ``repositories`` stops validation early."""
    issues = _validate(raw)

    assert len(issues) == 1
    assert issues[0].field == "repositories"
    assert issues[0].message == "Repositories must be a list"


def test_duplicate_path_reported_against_later_entry() -> None:
    """Only the second occurrence of a path is flagged."""
    issues = _validate(
        {
            "repositories": [
                {"path": "g/p1", "defaultBranch": "main"},
                {"path": "g/p1", "defaultBranch": "develop"},
            ]
        }
    )

    assert len(issues) == 1
    assert issues[0].field == "repositories[1].path"
    assert issues[0].message == "Duplicate path: g/p1"
    assert issues[0].value == "g/p1"


def test_reports_every_problem_in_one_pass() -> None:
    """Issues from several entries and fields are accumulated."""
    issues = _validate(
        {
            "repositories": [
                {"path": "bad", "defaultBranch": "a..b"},
                {"defaultBranch": "main"},
                {"path": "g/p3", "visibility": "secret", "description": 7},
            ]
        }
    )

    assert _fields(issues) == [
        "repositories[0].path",
        "repositories[0].defaultBranch",
        "repositories[1].path",
        "repositories[2].defaultBranch",
        "repositories[2].visibility",
        "repositories[2].description",
    ]


@pytest.mark.parametrize(
    ("entry", "field", "message"),
    [
        ({"defaultBranch": "main"}, "repositories[0].path", "Path is required"),
        (
            {"path": "", "defaultBranch": "main"},
            "repositories[0].path",
            "Path is required",
        ),
        (
            {"path": 12, "defaultBranch": "main"},
            "repositories[0].path",
            "Path must be a string",
        ),
        (
            {"path": "g/p1"},
            "repositories[0].defaultBranch",
            "Default branch is required",
        ),
        (
            {"path": "g/p1", "defaultBranch": ["main"]},
            "repositories[0].defaultBranch",
            "Default branch must be a string",
        ),
        (
            {"path": "g/p1", "defaultBranch": "main", "description": 1},
            "repositories[0].description",
            "Description must be a string",
        ),
        (
            {"path": "g/p1", "defaultBranch": "main", "visibility": "hidden"},
            "repositories[0].visibility",
            "Visibility must be one of: private, internal, public",
        ),
    ],
)
def test_field_level_messages(
    entry: dict[str, typ.Any], field: str, message: str
) -> None:
    """Each field problem carries its location and a readable message."""
    issues = _validate({"repositories": [entry]})

    assert len(issues) == 1
    assert issues[0].field == field
    assert issues[0].message == message


def test_parse_errors_carry_value_object_message() -> None:
    """Path and branch failures reuse the value-object error text."""
    issues = _validate({"repositories": [{"path": "a/b/c", "defaultBranch": "x.lock"}]})

    assert issues[0].message.startswith("Invalid project path format: a/b/c")
    assert issues[1].message.startswith("Invalid branch name: x.lock")


def test_non_mapping_entry_is_reported() -> None:
    """List items that are not mappings are flagged and skipped."""
    issues = _validate(
        {"repositories": ["g/p1", {"path": "g/p2", "defaultBranch": "main"}]}
    )

    assert len(issues) == 1
    assert issues[0].field == "repositories[0]"
    assert issues[0].message == "Repository entry must be a mapping"


def test_invalid_path_is_not_tracked_for_duplicates() -> None:
    """Only paths that parse take part in the duplicate check."""
    issues = _validate(
        {
            "repositories": [
                {"path": "bad", "defaultBranch": "main"},
                {"path": "bad", "defaultBranch": "main"},
            ]
        }
    )

    assert [issue.message for issue in issues] == [
        "Invalid project path format: bad. Expected format: namespace/project",
        "Invalid project path format: bad. Expected format: namespace/project",
    ]


@pytest.mark.parametrize("path", ["g\n/p1", "g/p\n1"])
def test_embedded_newline_in_path_is_rejected(path: str) -> None:
    """A newline inside a segment is not a valid path character."""
    issues = _validate({"repositories": [{"path": path, "defaultBranch": "main"}]})

    assert len(issues) == 1
    assert issues[0].field == "repositories[0].path"
    assert issues[0].message.startswith("Invalid characters in project path")
