"""Unit tests for configuration JSON Schema export."""

from __future__ import annotations

import json
import typing as typ

from repo_provisioner.config import (
    build_configuration_schema,
    write_configuration_schema,
)
from repo_provisioner.config.schema import SCHEMA_ID

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_schema_uses_file_field_names() -> None:
    """Entry properties use the camelCase spelling of the file format."""
    schema = build_configuration_schema()

    entry = schema["$defs"]["RepositoryEntry"]
    assert schema["$id"] == SCHEMA_ID
    assert set(entry["properties"]) == {
        "path",
        "defaultBranch",
        "description",
        "visibility",
    }
    assert set(entry["required"]) == {"path", "defaultBranch"}


def test_write_schema_creates_parent_directories(tmp_path: Path) -> None:
    """The schema is written as JSON, creating directories as needed."""
    target = tmp_path / "nested" / "schema.json"

    written = write_configuration_schema(target)

    assert written == target
    assert json.loads(target.read_text(encoding="utf-8"))["$id"] == SCHEMA_ID
