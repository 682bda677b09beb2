"""Loaders for repository configuration files.

Files are read with a YAML 1.2 compliant loader, which also accepts JSON.
:func:`load_configuration` returns the raw mapping so the validation pass can
report every structural problem; :func:`decode_configuration` turns a mapping
into typed :class:`ConfigurationDocument` structs.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from repo_provisioner.domain import ConfigurationDecodeError

from .models import ConfigurationDocument

YAML_VERSION = (1, 2)


class ConfigurationLoadError(ConfigurationDecodeError):
    """Raised when a configuration file cannot be read or parsed."""


def load_configuration(path: Path | str) -> dict[str, typ.Any]:
    """Parse a YAML or JSON configuration file into a raw mapping.

    Raises
    ------
    ConfigurationLoadError
        If the file cannot be read, is not valid YAML, is empty, or its root
        is not a mapping.

    """
    path_obj = Path(path)
    try:
        text = path_obj.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationLoadError([f"failed to read {path_obj}: {exc}"]) from exc
    return parse_configuration(text)


def parse_configuration(text: str) -> dict[str, typ.Any]:
    """Parse configuration ``text`` into a raw mapping."""
    try:
        loaded = _yaml().load(text)
    except YAMLError as exc:
        raise ConfigurationLoadError([f"failed to parse YAML: {exc}"]) from exc

    if loaded is None:
        raise ConfigurationLoadError(["configuration file is empty"])

    if not isinstance(loaded, dict):
        raise ConfigurationLoadError(
            [f"configuration root must be a mapping, got {type(loaded).__name__}"]
        )

    return loaded


def decode_configuration(raw: typ.Mapping[str, typ.Any]) -> ConfigurationDocument:
    """Convert a raw mapping into a typed configuration document.

    Raises
    ------
    ConfigurationDecodeError
        If the mapping does not match :class:`ConfigurationDocument`.

    """
    try:
        return msgspec.convert(raw, type=ConfigurationDocument)
    except msgspec.ValidationError as exc:
        raise ConfigurationDecodeError([f"schema validation failed: {exc}"]) from exc


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = YAML_VERSION
    yaml.allow_duplicate_keys = False
    return yaml
