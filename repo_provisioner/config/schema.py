"""JSON Schema generation for the repository configuration document."""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path  # noqa: TC003

import msgspec

from .models import ConfigurationDocument

SCHEMA_ID = "https://repo-provisioner.example/schemas/repositories.json"


def build_configuration_schema() -> dict[str, typ.Any]:
    """Build the JSON Schema for the configuration document.

    Returns
    -------
    dict[str, Any]
        JSON Schema with ``$id`` set to ``SCHEMA_ID``. Field names use the
        camelCase spelling expected in configuration files.

    """
    schema = msgspec.json.schema(ConfigurationDocument)
    schema["$id"] = SCHEMA_ID
    return schema


def write_configuration_schema(path: Path) -> Path:
    """Write the generated JSON Schema to ``path``, creating parent directories."""
    schema = build_configuration_schema()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(schema, indent=2), encoding="utf-8")
    return path
