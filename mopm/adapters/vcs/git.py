"""
Git adapter — clone and pull definition repositories.

Uses the git CLI, never a library or raw API calls.  No timeout: a
stalled network fetch blocks ``mopm update``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time

from mopm.adapters.base import VcsAdapter
from mopm.core.models.receipt import Receipt

logger = logging.getLogger(__name__)


class GitAdapter(VcsAdapter):
    """Git operations for repository sync."""

    def __init__(self, git: str = "git"):
        self._binary = git

    @property
    def name(self) -> str:
        return "git"

    def is_available(self) -> bool:
        return shutil.which(self._binary) is not None

    def clone(self, url: str, path: str) -> Receipt:
        return self._git(["clone", url, path], operation="clone")

    def pull(self, path: str) -> Receipt:
        return self._git(["-C", path, "pull", "origin"], operation="pull")

    def _git(self, args: list[str], operation: str) -> Receipt:
        """Run a git command and wrap the result in a receipt."""
        argv = [self._binary, *args]
        logger.debug("Executing: %s", " ".join(argv))
        start = time.monotonic()
        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            return Receipt.not_launched(
                adapter=self.name,
                operation=operation,
                error=f"Cannot launch git: {e}",
                metadata={"argv": argv},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                operation=operation,
                output=result.stdout.strip(),
                duration_ms=elapsed_ms,
                metadata={"argv": argv},
            )
        return Receipt.failure(
            adapter=self.name,
            operation=operation,
            error=result.stderr.strip() or f"git {operation} failed",
            exit_code=result.returncode,
            duration_ms=elapsed_ms,
            metadata={"argv": argv},
        )
