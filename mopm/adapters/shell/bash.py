"""
Bash executor — run definition scripts through bash.

Scripts are piped to ``bash -e`` on stdin, so a definition's script is
a plain sequence of shell lines that stops at the first failure.
Output is not captured: installers print progress and may prompt, so
stdout/stderr go straight to the terminal.  There is no timeout; a
hung installer blocks the command.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time

from mopm.adapters.base import ScriptExecutor
from mopm.core.models.machine import ExecutionIdentity
from mopm.core.models.receipt import Receipt

logger = logging.getLogger(__name__)


class BashExecutor(ScriptExecutor):
    """Execute scripts with the local bash."""

    def __init__(self, bash: str = "bash", sudo: str = "sudo"):
        self._bash = bash
        self._sudo = sudo

    @property
    def name(self) -> str:
        return "bash"

    def is_available(self) -> bool:
        return shutil.which(self._bash) is not None

    def build_argv(self, identity: ExecutionIdentity) -> list[str]:
        """Command line for ``identity``; the script itself goes to stdin."""
        argv = [self._bash, "-e"]
        if identity.kind == "user":
            return [self._sudo, f"--user={identity.user}", *argv]
        return argv

    def run(self, script: str, identity: ExecutionIdentity) -> Receipt:
        argv = self.build_argv(identity)
        logger.info("Running script as %s: %s", identity, " ".join(argv))
        logger.debug("Script:\n%s", script)

        start = time.monotonic()
        try:
            result = subprocess.run(
                argv,
                input=script + "\n",
                text=True,
                check=False,
            )
        except OSError as e:
            logger.error("Cannot launch %s: %s", argv[0], e)
            return Receipt.not_launched(
                adapter=self.name,
                operation="run",
                error=f"Cannot launch {argv[0]}: {e}",
                metadata={"argv": argv, "identity": str(identity)},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        meta = {"argv": argv, "identity": str(identity)}

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                operation="run",
                duration_ms=elapsed_ms,
                metadata=meta,
            )

        logger.debug("Script exited with code %d", result.returncode)
        return Receipt.failure(
            adapter=self.name,
            operation="run",
            error=f"Script exited with code {result.returncode}",
            exit_code=result.returncode,
            duration_ms=elapsed_ms,
            metadata=meta,
        )
