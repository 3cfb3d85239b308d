import json
import sys
from pathlib import Path

import pytest
import structlog

STUB_ENGINE = '''
import json
import os
import pathlib
import sys

mode = os.environ.get("STUB_MODE", "stable")
calls = pathlib.Path(os.environ["STUB_CALLS"])

args = sys.argv[1:]
with calls.open("a") as fh:
    fh.write(json.dumps(args) + "\\n")
count = len(calls.read_text().splitlines())

if mode == "fail":
    sys.stdout.write("! Undefined control sequence.\\n")
    sys.exit(1)

outdir = pathlib.Path(args[args.index("-output-directory") + 1])
name = pathlib.Path(args[-1]).name
if name.endswith(".tex"):
    name = name[: -len(".tex")]

aux = "stable" if mode in ("stable", "nopdf") else "pass %d" % count
(outdir / (name + ".aux")).write_text(aux)
(outdir / (name + ".log")).write_text("log %d" % count)
if mode != "nopdf":
    (outdir / (name + ".pdf")).write_text("PDF pass %d" % count)
'''


class StubEngine:
    """Executable fake TeX engine; every invocation appends its argv to a file."""

    def __init__(self, path: Path, calls_file: Path, monkeypatch):
        self.path = path
        self.calls_file = calls_file
        self._monkeypatch = monkeypatch

    def set_mode(self, mode: str) -> None:
        self._monkeypatch.setenv("STUB_MODE", mode)

    @property
    def calls(self):
        if not self.calls_file.exists():
            return []
        return [json.loads(line) for line in self.calls_file.read_text().splitlines()]


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def stub_engine(tmp_path, monkeypatch):
    script = tmp_path / "bin" / "fake-tex"
    script.parent.mkdir()
    script.write_text(f"#!{sys.executable}\n{STUB_ENGINE}")
    script.chmod(0o755)
    calls = tmp_path / "calls.jsonl"
    monkeypatch.setenv("STUB_CALLS", str(calls))
    monkeypatch.setenv("STUB_MODE", "stable")
    return StubEngine(script, calls, monkeypatch)


@pytest.fixture
def document(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    tex = src / "paper.tex"
    tex.write_text("\\documentclass{article}\\begin{document}x\\end{document}\n")
    return tex


@pytest.fixture
def tmp_root(tmp_path):
    return tmp_path / "root"
