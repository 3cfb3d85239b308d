"""dtex: run a TeX engine until its auxiliary files converge."""

from .exceptions import (
    CompileError,
    ConvergenceWarning,
    DtexError,
    UsageError,
    WorkspaceIOError,
)

__version__ = "0.1.0"

__all__ = [
    "CompileError",
    "ConvergenceWarning",
    "DtexError",
    "UsageError",
    "WorkspaceIOError",
]
