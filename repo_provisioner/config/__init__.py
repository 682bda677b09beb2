"""Configuration document types, loaders, and JSON Schema export.

Load and decode a configuration file::

    >>> from repo_provisioner.config import decode_configuration, load_configuration
    >>> raw = load_configuration("examples/repositories.yaml")
    >>> document = decode_configuration(raw)
    >>> document.repositories[0].default_branch
    'main'

"""

from __future__ import annotations

from .loader import (
    ConfigurationLoadError,
    decode_configuration,
    load_configuration,
    parse_configuration,
)
from .models import ConfigurationDocument, RepositoryEntry
from .schema import build_configuration_schema, write_configuration_schema

__all__ = [
    "ConfigurationDocument",
    "ConfigurationLoadError",
    "RepositoryEntry",
    "build_configuration_schema",
    "decode_configuration",
    "load_configuration",
    "parse_configuration",
    "write_configuration_schema",
]
