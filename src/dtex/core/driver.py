"""Bounded fixed-point compilation loop."""
from __future__ import annotations

import subprocess
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from ..exceptions import CompileError, ConvergenceWarning
from .logging_setup import get_logger
from .tracker import ConvergenceTracker

LOGGER = get_logger(__name__)

MAX_COMPILATIONS = 5


class DriverState(str, Enum):
    IDLE = "IDLE"
    COMPILING = "COMPILING"
    SNAPSHOTTING = "SNAPSHOTTING"
    CONVERGED = "CONVERGED"
    CEILING_REACHED = "CEILING_REACHED"
    FAILED = "FAILED"


@dataclass
class CompilationResult:
    attempts: int
    state: DriverState

    @property
    def converged(self) -> bool:
        return self.state is DriverState.CONVERGED


class CompilationDriver:
    """Re-run the engine until the tracker stops seeing changes.

    Only a successful run is ever repeated. A non-zero exit aborts the loop
    with :class:`CompileError`; a ceiling hit without stabilizing issues a
    :class:`ConvergenceWarning` and still counts as success.
    """

    def __init__(
        self,
        engine: str,
        args: Sequence[str],
        tracker: ConvergenceTracker,
        *,
        max_attempts: int = MAX_COMPILATIONS,
    ) -> None:
        self.engine = engine
        self.args: List[str] = list(args)
        self.tracker = tracker
        self.max_attempts = max_attempts
        self.state = DriverState.IDLE
        self.attempts = 0

    @property
    def command(self) -> List[str]:
        return [self.engine, *self.args]

    def run(self) -> CompilationResult:
        while self.tracker.changed() and self.attempts < self.max_attempts:
            LOGGER.debug("Compile iteration", attempt=self.attempts)
            self.state = DriverState.COMPILING
            self._compile()
            self.state = DriverState.SNAPSHOTTING
            LOGGER.debug("Updating hashes")
            self.tracker.update()
            self.attempts += 1

        if self.tracker.changed():
            self.state = DriverState.CEILING_REACHED
            warnings.warn(
                f"{self.max_attempts} compilations were maybe insufficient",
                ConvergenceWarning,
                stacklevel=2,
            )
        else:
            self.state = DriverState.CONVERGED
        return CompilationResult(attempts=self.attempts, state=self.state)

    def _compile(self) -> None:
        cmd = self.command
        LOGGER.debug("Running", command=cmd)
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as exc:
            self.state = DriverState.FAILED
            raise CompileError(
                f"Compilation error: {exc}",
                output=b"",
                command=cmd,
            ) from exc
        if proc.returncode != 0:
            self.state = DriverState.FAILED
            raise CompileError(
                f"Compilation error: {self.engine} exited with status {proc.returncode}",
                output=proc.stdout or b"",
                returncode=proc.returncode,
                command=cmd,
            )
