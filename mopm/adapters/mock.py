"""
Mock executor — test double for script execution.

Succeeds for every script by default.  Individual scripts can be set
to fail, to fail to launch, or to follow a sequence of outcomes (e.g.
a verification that fails before install and passes after).
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from mopm.adapters.base import ScriptExecutor
from mopm.core.models.machine import ExecutionIdentity
from mopm.core.models.receipt import Receipt


@dataclass(frozen=True)
class ScriptCall:
    """One recorded ``run`` call."""

    script: str
    identity: ExecutionIdentity


class MockExecutor(ScriptExecutor):
    """Universal mock executor for testing."""

    def __init__(self, executor_name: str = "mock", available: bool = True):
        self._name = executor_name
        self._available = available
        self._outcomes: dict[str, deque[Receipt]] = {}
        self._call_log: list[ScriptCall] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ScriptCall]:
        """Every call this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def scripts(self) -> list[str]:
        """Scripts run so far, in order."""
        return [call.script for call in self._call_log]

    def is_available(self) -> bool:
        return self._available

    def set_failure(self, script: str, exit_code: int = 1) -> None:
        """Make ``script`` exit non-zero on every call."""
        self._outcomes[script] = deque([self._failed(exit_code)])

    def set_not_launched(self, script: str, error: str = "Mock launch failure") -> None:
        self._outcomes[script] = deque(
            [Receipt.not_launched(adapter=self._name, operation="run", error=error)]
        )

    def set_sequence(self, script: str, results: list[bool]) -> None:
        """Successive outcomes for ``script``; the last one repeats."""
        self._outcomes[script] = deque(
            self._ok() if ok else self._failed(1) for ok in results
        )

    def run(self, script: str, identity: ExecutionIdentity) -> Receipt:
        self._call_log.append(ScriptCall(script=script, identity=identity))
        queue = self._outcomes.get(script)
        if not queue:
            return self._ok()
        if len(queue) > 1:
            return queue.popleft()
        return queue[0]

    def reset(self) -> None:
        """Clear configured outcomes and the call log."""
        self._outcomes.clear()
        self._call_log.clear()

    def _ok(self) -> Receipt:
        return Receipt.success(adapter=self._name, operation="run", output="[mock] executed")

    def _failed(self, exit_code: int) -> Receipt:
        return Receipt.failure(
            adapter=self._name,
            operation="run",
            error=f"Script exited with code {exit_code}",
            exit_code=exit_code,
        )
