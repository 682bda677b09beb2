"""Typed structures for the repository configuration document."""

from __future__ import annotations

import typing as typ

import msgspec


class RepositoryEntry(msgspec.Struct, kw_only=True, rename="camel"):
    """One repository as written in the configuration file.

    Attributes
    ----------
    path : str
        Full ``namespace/project`` path.
    default_branch : str
        Desired default branch; spelt ``defaultBranch`` in the file.
    description : str, optional
        Optional project description.
    visibility : Literal["private", "internal", "public"], optional
        Optional visibility; the domain defaults it to ``private``.

    """

    path: str
    default_branch: str
    description: str | None = None
    visibility: typ.Literal["private", "internal", "public"] | None = None


class ConfigurationDocument(msgspec.Struct, kw_only=True):
    """Top-level repository configuration document."""

    repositories: list[RepositoryEntry]
