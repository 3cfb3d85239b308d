from __future__ import annotations

import tempfile
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ENGINE = "pdflatex"


def default_tmp_root() -> Path:
    return Path(tempfile.gettempdir()) / "dtex"


class Settings(BaseSettings):
    """Environment-driven configuration for the compile wrapper.

    ``TEX`` and ``VERBOSE`` keep their historical unprefixed names; the
    remaining fields are read with prefix ``DTEX_``.
    """

    model_config = SettingsConfigDict(
        env_prefix="DTEX_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # --- Engine ---
    tex: str = Field(
        DEFAULT_ENGINE,
        validation_alias="TEX",
        description="Name of the TeX engine binary to run.",
    )
    output_format: str = Field(
        "pdf",
        description="Extension of the final document written by the engine.",
    )

    # --- Workspace ---
    tmp_root: Path = Field(
        default_factory=default_tmp_root,
        description="Root directory holding one workspace per document.",
    )

    # --- Diagnostics ---
    verbose: bool = Field(
        False,
        validation_alias="VERBOSE",
        description="Trace workspace, hashing and engine activity to stderr.",
    )

    @field_validator("tex", mode="before")
    @classmethod
    def default_engine_when_blank(cls, v):
        if v is None or not str(v).strip():
            return DEFAULT_ENGINE
        return str(v).strip()

    @field_validator("output_format", mode="before")
    @classmethod
    def strip_leading_dot(cls, v):
        if v is None:
            return "pdf"
        v = str(v).strip().lstrip(".")
        return v or "pdf"

    @field_validator("verbose", mode="before")
    @classmethod
    def parse_verbose(cls, v):
        # Any non-empty value turns tracing on, including "0".
        if isinstance(v, str):
            return v != ""
        return bool(v)
