"""Lossless PNG optimisation using external tools.

Each available tool runs against a temporary copy of the image. The original
is only replaced, atomically, when the copy came out smaller.

Notes:
    Tools are optional; install any of them to enable optimisation:
    - optipng: apt-get install optipng / brew install optipng
    - advpng: apt-get install advancecomp / brew install advancecomp
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import shutil
import subprocess
import tempfile

from spritely.core.errors import OptimisationError

logger = logging.getLogger(__name__)

# (binary, arguments before the path)
DEFAULT_TOOLS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("optipng", ("-quiet", "-o7")),
    ("advpng", ("-q", "-z4")),
)


class ExternalToolOptimiser:
    """Runs the installed PNG optimisers over a file.

    Args:
        tools: ``(binary, args)`` pairs, tried in order; missing binaries are skipped
        timeout_s: Timeout per tool invocation (seconds)
    """

    def __init__(
        self,
        tools: tuple[tuple[str, tuple[str, ...]], ...] = DEFAULT_TOOLS,
        timeout_s: float = 120.0,
    ) -> None:
        self._tools = tools
        self._timeout_s = timeout_s

    def available_tools(self) -> list[tuple[str, tuple[str, ...]]]:
        """Return the ``(binary, args)`` pairs whose binary is on PATH."""
        return [(binary, args) for binary, args in self._tools if shutil.which(binary)]

    def optimise(self, path: Path) -> int:
        """Optimise ``path`` in place and return bytes saved.

        Raises:
            OptimisationError: If a tool fails; ``path`` is left untouched
        """
        path = Path(path)
        if path.suffix.lower() != ".png":
            logger.debug(f"Skipping {path}: not a PNG")
            return 0

        tools = self.available_tools()
        if not tools:
            logger.debug("No PNG optimisers installed; skipping optimisation")
            return 0

        before = path.stat().st_size
        fd, tmp_name = tempfile.mkstemp(suffix=".png", dir=path.parent)
        os.close(fd)
        tmp_path = Path(tmp_name)

        try:
            shutil.copyfile(path, tmp_path)
            for binary, args in tools:
                self._run(binary, args, tmp_path)

            after = tmp_path.stat().st_size
            if after >= before:
                return 0

            os.replace(tmp_path, path)
            logger.debug(f"Optimised {path}: {before} -> {after} bytes")
            return before - after
        finally:
            tmp_path.unlink(missing_ok=True)

    def _run(self, binary: str, args: tuple[str, ...], target: Path) -> None:
        try:
            result = subprocess.run(
                [binary, *args, str(target)],
                capture_output=True,
                text=True,
                timeout=self._timeout_s,
                check=False,  # We'll check returncode manually
            )
        except subprocess.TimeoutExpired as e:
            raise OptimisationError(f"{binary} timed out after {self._timeout_s}s") from e
        except OSError as e:
            raise OptimisationError(f"Could not run {binary}: {e}") from e

        if result.returncode != 0:
            detail = result.stderr.strip().splitlines()[-1] if result.stderr.strip() else ""
            raise OptimisationError(
                f"{binary} failed with exit code {result.returncode}" + (f": {detail}" if detail else "")
            )


class NullOptimiser:
    """Optimiser that never changes anything."""

    def optimise(self, path: Path) -> int:
        return 0
