from __future__ import annotations

import os
from pathlib import Path

from ..exceptions import WorkspaceIOError
from .logging_setup import get_logger
from .workspace import DocumentIdentity, Workspace

LOGGER = get_logger(__name__)


def finalize(workspace: Workspace, identity: DocumentIdentity) -> Path:
    """Move the compiled document out of ``workspace`` next to its source.

    The move is a single rename; nothing is copied, so a target on another
    filesystem fails instead of leaving a partial file behind.
    """
    source = workspace.output_path
    target = identity.output_path(workspace.output_format)
    LOGGER.debug("Moving output into place", source=str(source), target=str(target))
    try:
        os.replace(source, target)
    except OSError as exc:
        raise WorkspaceIOError(
            f"Move resulting {workspace.output_format} into place: {exc}"
        ) from exc
    return target
