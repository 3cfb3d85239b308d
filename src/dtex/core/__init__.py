"""Workspace resolution, convergence tracking, compilation and finalization."""

from .driver import MAX_COMPILATIONS, CompilationDriver, CompilationResult, DriverState
from .finalizer import finalize
from .tracker import ArtifactSnapshot, ConvergenceTracker, content_hash, hash_file
from .workspace import DocumentIdentity, Workspace, clean_root, resolve_workspace

__all__ = [
    "ArtifactSnapshot",
    "CompilationDriver",
    "CompilationResult",
    "ConvergenceTracker",
    "DocumentIdentity",
    "DriverState",
    "MAX_COMPILATIONS",
    "Workspace",
    "clean_root",
    "finalize",
    "content_hash",
    "hash_file",
    "resolve_workspace",
]
