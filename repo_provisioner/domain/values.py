"""Value objects for project paths, branch names, and visibility levels.

Project paths are GitLab identifiers in ``namespace/project`` format. Like
repository slugs they use ``/`` as a separator but are not filesystem paths,
so they are parsed here rather than with ``pathlib``.

Both value objects validate on every construction path: ``create`` is the
documented entry point, but instantiating the dataclass directly runs the same
checks.
"""

from __future__ import annotations

import dataclasses
import enum
import re

from .errors import (
    InvalidBranchNameError,
    InvalidProjectPathError,
    InvalidVisibilityError,
    ValidationError,
)

PATH_SEPARATOR = "/"
PATH_SEGMENT_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")

BRANCH_FORBIDDEN_CHARACTERS = ("~", "^", ":", "?", "*", "[", "\\", "|")


def _require_text(raw: object, label: str) -> str:
    if not isinstance(raw, str):
        msg = f"{label} must be a string, got {type(raw).__name__}"
        raise ValidationError(msg, value=raw)
    return raw


def _parse_project_path(raw: str) -> str:
    value = raw.strip()
    if not value:
        raise InvalidProjectPathError.empty()

    if value.count(PATH_SEPARATOR) != 1:
        raise InvalidProjectPathError.bad_format(value)

    namespace, project = value.split(PATH_SEPARATOR)
    if not namespace or not project:
        raise InvalidProjectPathError.empty_segment(value)

    if not all(
        PATH_SEGMENT_PATTERN.fullmatch(segment) for segment in (namespace, project)
    ):
        raise InvalidProjectPathError.bad_characters(value)

    return value


def _parse_branch_name(raw: str) -> str:
    value = raw.strip()
    if not value:
        raise InvalidBranchNameError.empty()

    if ".." in value:
        raise InvalidBranchNameError.rejected(value, "contains '..'")

    for char in BRANCH_FORBIDDEN_CHARACTERS:
        if char in value:
            raise InvalidBranchNameError.rejected(value, f"contains {char!r}")

    if value.startswith("/") or value.endswith("/"):
        raise InvalidBranchNameError.rejected(value, "starts or ends with '/'")

    if value.endswith(".lock"):
        raise InvalidBranchNameError.rejected(value, "ends with '.lock'")

    if "@{" in value:
        raise InvalidBranchNameError.rejected(value, "contains '@{'")

    return value


@dataclasses.dataclass(frozen=True, slots=True)
class ProjectPath:
    """Validated ``namespace/project`` identifier.

    Attributes
    ----------
    value : str
        The trimmed full path, e.g. ``"mygroup/web-application"``.

    Examples
    --------
    >>> path = ProjectPath.create("  mygroup/web-application ")
    >>> path.value, path.namespace, path.project_name
    ('mygroup/web-application', 'mygroup', 'web-application')

    """

    value: str

    def __post_init__(self) -> None:
        """Validate and trim the raw value."""
        raw = _require_text(self.value, "Project path")
        object.__setattr__(self, "value", _parse_project_path(raw))

    @classmethod
    def create(cls, raw: str) -> ProjectPath:
        """Parse ``raw`` into a project path.

        Raises
        ------
        InvalidProjectPathError
            If ``raw`` is blank, lacks exactly one ``/``, has an empty segment,
            or contains characters outside ``[A-Za-z0-9_.-]``.

        """
        return cls(raw)

    @property
    def namespace(self) -> str:
        """Return the group or user segment."""
        return self.value.split(PATH_SEPARATOR)[0]

    @property
    def project_name(self) -> str:
        """Return the project segment."""
        return self.value.split(PATH_SEPARATOR)[1]

    def __str__(self) -> str:
        """Return the full path."""
        return self.value


@dataclasses.dataclass(frozen=True, slots=True)
class BranchName:
    """Validated git branch name.

    The rules are checked in a fixed order so the reported reason is
    deterministic when a name breaks several of them: blank, ``..``, a
    forbidden character from ``~^:?*[\\|``, a leading or trailing ``/``, a
    ``.lock`` suffix, and finally ``@{``.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate and trim the raw value."""
        raw = _require_text(self.value, "Branch name")
        object.__setattr__(self, "value", _parse_branch_name(raw))

    @classmethod
    def create(cls, raw: str) -> BranchName:
        """Parse ``raw`` into a branch name, raising InvalidBranchNameError."""
        return cls(raw)

    def __str__(self) -> str:
        """Return the branch name."""
        return self.value


class Visibility(enum.StrEnum):
    """Repository visibility levels understood by the host."""

    PRIVATE = "private"
    INTERNAL = "internal"
    PUBLIC = "public"

    @classmethod
    def parse(cls, raw: object | None) -> Visibility:
        """Return the matching level, defaulting to private for ``None``."""
        if raw is None:
            return cls.PRIVATE
        try:
            return cls(raw)
        except ValueError as exc:
            raise InvalidVisibilityError.unknown(raw, cls.choices()) from exc

    @classmethod
    def choices(cls) -> tuple[str, ...]:
        """Return the accepted raw values in declaration order."""
        return tuple(member.value for member in cls)
