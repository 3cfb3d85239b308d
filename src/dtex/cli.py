"""Command line entry point: ``dtex [tex options] file.tex`` and ``dtex -clean``."""
from __future__ import annotations

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .config import Settings
from .core.driver import CompilationDriver
from .core.finalizer import finalize
from .core.logging_setup import configure_logging, get_logger
from .core.tracker import ConvergenceTracker
from .core.workspace import DocumentIdentity, clean_root, resolve_workspace
from .exceptions import CompileError, ConvergenceWarning, DtexError, UsageError

LOGGER = get_logger(__name__)

USAGE = """\
Usage: dtex [tex options] file.tex

will compile file.tex as many times as necessary: until all the generated
temporary files don't change anymore, with a maximum of 5 compilations.

Usage: dtex -clean

will remove all temporary files used by this program.
"""

CLEAN_FLAG = "-clean"
HELP_FLAGS = ("-h", "--help")
RESERVED_OPTION = "output-directory"
# TeX engines accept any unambiguous prefix of a long option; "output-" alone
# still clashes with -output-comment and -output-format.
RESERVED_MIN_PREFIX = len("output-d")


@dataclass
class Invocation:
    clean: bool = False
    help: bool = False
    args: List[str] = field(default_factory=list)

    @property
    def document(self) -> str:
        return self.args[-1]


def is_reserved_option(arg: str) -> bool:
    if not arg.startswith("-"):
        return False
    name = arg.lstrip("-").split("=", 1)[0]
    return len(name) >= RESERVED_MIN_PREFIX and RESERVED_OPTION.startswith(name)


def parse_args(argv: Sequence[str]) -> Invocation:
    argv = list(argv)
    if argv == [CLEAN_FLAG]:
        return Invocation(clean=True)
    if len(argv) == 1 and argv[0] in HELP_FLAGS:
        return Invocation(help=True)
    if not argv:
        raise UsageError()
    for arg in argv:
        if is_reserved_option(arg):
            raise UsageError(f'"{arg}" flag not allowed', show_usage=False)
    return Invocation(args=argv)


def compile_document(invocation: Invocation, settings: Settings) -> Path:
    identity = DocumentIdentity.from_argument(invocation.document)
    workspace = resolve_workspace(identity, settings.tmp_root, settings.output_format)
    args = ["-output-directory", str(workspace.directory), *invocation.args]

    LOGGER.debug("Computing initial hashes", base=str(workspace.base))
    tracker = ConvergenceTracker(workspace)
    driver = CompilationDriver(settings.tex, args, tracker)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ConvergenceWarning)
        driver.run()
    for w in caught:
        if issubclass(w.category, ConvergenceWarning):
            print(f"Warning: {w.message}", file=sys.stderr)
        else:
            warnings.showwarning(w.message, w.category, w.filename, w.lineno)

    return finalize(workspace, identity)


def _dump_engine_output(output: bytes) -> None:
    if not output:
        return
    sys.stdout.flush()
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is not None:
        buffer.write(output)
        buffer.flush()
    else:
        sys.stdout.write(output.decode("utf-8", errors="replace"))


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    settings = Settings()
    configure_logging(settings.verbose)
    LOGGER.debug("Using temporary root", root=str(settings.tmp_root))

    try:
        invocation = parse_args(argv)
        if invocation.help:
            sys.stderr.write(USAGE)
            return 0
        if invocation.clean:
            clean_root(settings.tmp_root)
            return 0
        target = compile_document(invocation, settings)
        LOGGER.debug("Wrote output", path=str(target))
    except UsageError as exc:
        if exc.show_usage:
            sys.stderr.write(USAGE)
        else:
            print(exc, file=sys.stderr)
        return 1
    except CompileError as exc:
        _dump_engine_output(exc.output)
        print(exc, file=sys.stderr)
        return 1
    except DtexError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(main())
