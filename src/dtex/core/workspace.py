"""Per-document workspaces under the temporary root."""
from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..exceptions import WorkspaceIOError
from .logging_setup import get_logger

LOGGER = get_logger(__name__)

SOURCE_SUFFIX = ".tex"


@dataclass(frozen=True)
class DocumentIdentity:
    """Absolute path of the input document without its ``.tex`` extension."""

    path: Path

    @classmethod
    def from_argument(cls, argument: Union[str, Path]) -> "DocumentIdentity":
        text = str(argument)
        if text.endswith(SOURCE_SUFFIX):
            text = text[: -len(SOURCE_SUFFIX)]
        return cls(Path(os.path.abspath(text)))

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def relative(self) -> Path:
        """The identity with its drive and root removed."""
        return Path(*self.path.parts[1:])

    def output_path(self, output_format: str = "pdf") -> Path:
        return self.path.with_name(f"{self.name}.{output_format}")


@dataclass(frozen=True)
class Workspace:
    base: Path
    output_format: str = "pdf"

    @property
    def directory(self) -> Path:
        return self.base.parent

    @property
    def name(self) -> str:
        return self.base.name

    @property
    def output_path(self) -> Path:
        return self.base.with_name(f"{self.name}.{self.output_format}")


def resolve_workspace(
    identity: DocumentIdentity,
    root: Path,
    output_format: str = "pdf",
) -> Workspace:
    """Map ``identity`` to its workspace under ``root`` and create the directory."""
    workspace = Workspace(base=Path(root) / identity.relative, output_format=output_format)
    try:
        workspace.directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WorkspaceIOError(
            f"Create temporary directory ({workspace.directory}): {exc}"
        ) from exc
    return workspace


def clean_root(root: Path) -> None:
    """Remove every workspace under ``root``. A missing root is fine."""
    root = Path(root)
    LOGGER.debug("rm -r", path=str(root))
    if not root.exists():
        return
    try:
        shutil.rmtree(root)
    except OSError as exc:
        raise WorkspaceIOError(f"clean temporary files: {exc}") from exc
