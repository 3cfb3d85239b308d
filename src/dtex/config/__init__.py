"""
Typed configuration package for dtex.

This package exposes ``Settings``: environment-driven toggles (pydantic-settings).
Instances are built once by the CLI and passed down explicitly.
"""

from .settings import DEFAULT_ENGINE, Settings, default_tmp_root

__all__ = [
    "DEFAULT_ENGINE",
    "Settings",
    "default_tmp_root",
]
