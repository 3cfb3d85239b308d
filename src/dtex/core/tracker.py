"""Content hashing of a workspace's auxiliary files.

The engine's exit status says nothing about whether cross references have
settled, so convergence is judged from the bytes of the files it leaves
behind: ``.aux``, ``.toc``, ``.out`` and friends. A snapshot maps every such
file to a 64-bit BLAKE2b digest. Entries are only ever added or overwritten;
a file that disappears keeps its last hash.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, List

from ..exceptions import WorkspaceIOError
from .logging_setup import get_logger
from .workspace import Workspace

LOGGER = get_logger(__name__)

DIGEST_SIZE = 8  # 64-bit
_CHUNK_SIZE = 1 << 20

LOG_SUFFIX = ".log"


def content_hash(stream: BinaryIO) -> int:
    digest = hashlib.blake2b(digest_size=DIGEST_SIZE)
    for chunk in iter(lambda: stream.read(_CHUNK_SIZE), b""):
        digest.update(chunk)
    return int.from_bytes(digest.digest(), "big")


def hash_file(path: Path) -> int:
    try:
        with open(path, "rb") as fh:
            return content_hash(fh)
    except OSError as exc:
        raise WorkspaceIOError(f"Read file ({path}): {exc}") from exc


@dataclass
class ArtifactSnapshot:
    hashes: Dict[Path, int] = field(default_factory=dict)
    changed: bool = False


class ConvergenceTracker:
    """Detects whether a compilation pass altered any tracked artifact.

    A freshly built tracker always reports a change so the driver compiles at
    least once, even when the workspace still holds stable artifacts from an
    earlier run.
    """

    def __init__(self, workspace: Workspace) -> None:
        self.workspace = workspace
        self.excluded_suffixes = {f".{workspace.output_format}", LOG_SUFFIX}
        self.snapshot = ArtifactSnapshot()
        self.update()
        self.snapshot.changed = True

    def tracked_files(self) -> List[Path]:
        prefix = f"{self.workspace.name}."
        directory = self.workspace.directory
        if not directory.is_dir():
            return []
        try:
            candidates = sorted(directory.iterdir())
        except OSError as exc:
            raise WorkspaceIOError(f"List directory ({directory}): {exc}") from exc
        return [
            path
            for path in candidates
            if path.name.startswith(prefix)
            and path.suffix not in self.excluded_suffixes
            and path.is_file()
        ]

    def update(self) -> None:
        self.snapshot.changed = False
        hashes = self.snapshot.hashes
        for path in self.tracked_files():
            digest = hash_file(path)
            LOGGER.debug("Hashing", file=str(path), hash=f"{digest:016x}")
            if hashes.get(path) != digest:
                LOGGER.debug("file changed", file=str(path))
                self.snapshot.changed = True
            hashes[path] = digest

    def changed(self) -> bool:
        return self.snapshot.changed
