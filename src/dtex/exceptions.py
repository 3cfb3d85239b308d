from typing import Optional, Sequence


class DtexError(Exception):
    """Base exception for all fatal dtex errors."""
    pass


class UsageError(DtexError):
    """Raised when the command line is malformed."""

    def __init__(self, message: str = "", show_usage: bool = True):
        super().__init__(message)
        self.show_usage = show_usage


class WorkspaceIOError(DtexError):
    """Raised when a workspace directory or artifact cannot be created, read or moved."""
    pass


class CompileError(DtexError):
    """Raised when the TeX engine exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        output: bytes = b"",
        returncode: Optional[int] = None,
        command: Sequence[str] = (),
    ):
        super().__init__(message)
        self.output = output
        self.returncode = returncode
        self.command = list(command)


class ConvergenceWarning(UserWarning):
    """Issued when the compilation ceiling is reached before artifacts stabilize."""
