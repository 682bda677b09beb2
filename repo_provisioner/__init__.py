"""Declarative repository settings synchronised against a GitLab host."""

from __future__ import annotations

__version__ = "0.1.0"
