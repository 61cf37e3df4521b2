"""Formatter adapters run over the assembled Go source."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from go_include.config import get_goimports_command
from go_include.errors import FormatError

logger = logging.getLogger(__name__)


class GoimportsFormatter:
    """Normalize imports and layout by piping the source through ``goimports``.

    Implements the ``Formatter`` protocol. ``-srcdir`` points at the source's
    directory so imports resolve against its package.
    """

    def __init__(self, command: str | None = None) -> None:
        self._command = command or get_goimports_command()

    def available(self) -> bool:
        return shutil.which(self._command) is not None

    def format(self, filename: str, source: bytes) -> bytes:
        srcdir = Path(filename).absolute().parent
        args = [self._command, "-srcdir", str(srcdir)]
        logger.debug("Running %s", " ".join(args))
        try:
            result = subprocess.run(args, input=source, capture_output=True, check=False)
        except OSError as e:
            raise FormatError(filename, f"cannot run {self._command}: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise FormatError(filename, stderr or f"{self._command} exited with status {result.returncode}")
        if not result.stdout:
            raise FormatError(filename, f"{self._command} produced no output")
        return result.stdout


class IdentityFormatter:
    """Return the assembled source unchanged."""

    def format(self, filename: str, source: bytes) -> bytes:
        return bytes(source)
