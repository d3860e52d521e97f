"""
Pando toolchain driver.

Runs a ``.pd`` program through the external pipeline::

    program.pd --(pando translator)--> program.rs --(rustc)--> program --> run

This is only ever invoked by an explicit user action (``pando run``); the
analyzer never calls it.  Failures here are reported as
:class:`ToolchainError` exceptions and are never turned into diagnostics.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from .config import ServerConfig

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".pd"


class ToolchainError(Exception):
    """Base class for failures of the external build pipeline."""


class TranslatorNotFoundError(ToolchainError):
    def __init__(self, path: Optional[str]):
        self.path = path
        if path:
            msg = f"Pando translator not found at {path}"
        else:
            msg = "No Pando translator configured (set PANDO_TRANSLATOR)"
        super().__init__(msg)


class ProcessFailedError(ToolchainError):
    def __init__(self, step: str, returncode: int, output: str = ""):
        self.step = step
        self.returncode = returncode
        self.output = output
        super().__init__(f"{step} exited with code {returncode}")


@dataclass
class ToolchainResult:
    source: Path
    rust_file: Path
    executable: Path
    returncode: int
    stdout: str = ""
    stderr: str = ""


Runner = Callable[..., subprocess.CompletedProcess]


def executable_path(rust_file: Path) -> Path:
    exe = rust_file.with_suffix("")
    if sys.platform == "win32":
        exe = exe.with_suffix(".exe")
    return exe


class ToolchainOrchestrator:
    """Drive translator, compiler and program for one source file."""

    def __init__(self, config: Optional[ServerConfig] = None, runner: Runner = subprocess.run):
        self.config = config or ServerConfig()
        self._run = runner

    # -- steps --------------------------------------------------------------

    def translate(self, source: Path) -> Path:
        translator = self._ensure_translator()
        rust_file = source.with_suffix(".rs")
        self._step("translator", [translator, str(source), str(rust_file)])
        logger.info("translated %s -> %s", source, rust_file)
        return rust_file

    def compile(self, rust_file: Path) -> Path:
        exe = executable_path(rust_file)
        self._step("rustc", [self.config.rustc, str(rust_file), "-o", str(exe)],
                   cwd=str(rust_file.parent))
        logger.info("compiled %s", exe)
        return exe

    def execute(self, exe: Path) -> subprocess.CompletedProcess:
        return self._step("program", [str(exe)])

    def run(self, source: Path) -> ToolchainResult:
        """Translate, compile and execute *source*."""
        source = Path(source)
        if source.suffix != SOURCE_SUFFIX:
            raise ToolchainError(f"Only {SOURCE_SUFFIX} files can be compiled: {source}")

        rust_file = self.translate(source)
        exe = self.compile(rust_file)
        completed = self.execute(exe)
        if not self.config.keep_rust:
            rust_file.unlink(missing_ok=True)
        return ToolchainResult(
            source=source,
            rust_file=rust_file,
            executable=exe,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    # -- helpers ------------------------------------------------------------

    def _ensure_translator(self) -> str:
        translator = self.config.translator
        if translator and os.path.exists(translator):
            return translator

        project = self.config.translator_project
        if translator and project and os.path.isdir(project):
            logger.warning("translator missing, building it in %s", project)
            self._step("cargo", ["cargo", "build", "--release"], cwd=project)
            if os.path.exists(translator):
                return translator
        raise TranslatorNotFoundError(translator)

    def _step(self, step: str, cmd: List[str], cwd: Optional[str] = None) -> subprocess.CompletedProcess:
        logger.debug("running %s: %s", step, " ".join(cmd))
        try:
            completed = self._run(cmd, cwd=cwd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise ToolchainError(f"{step}: cannot execute {cmd[0]} ({e})") from e
        if completed.returncode != 0:
            output = (completed.stderr or "") + (completed.stdout or "")
            raise ProcessFailedError(step, completed.returncode, output)
        return completed
