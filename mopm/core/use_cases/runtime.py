"""
Runtime — collaborators and per-run facts shared by every use case.

The machine context and settings are resolved lazily and at most once:
``lint`` needs neither, ``environment`` needs only the machine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mopm.adapters.base import ScriptExecutor, VcsAdapter
from mopm.core.config.loader import Settings, load_settings
from mopm.core.models.machine import MachineContext
from mopm.core.services.machine import detect_machine


@dataclass
class CommandResult:
    """Outcome of one command, rendered by the CLI.

    ``output`` lines go to stdout, ``message`` to stderr; the process
    exits 1 when ``ok`` is False.
    """

    ok: bool = True
    output: list[str] = field(default_factory=list)
    message: str = ""
    error_code: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, message: str = "", **kwargs: Any) -> CommandResult:
        return cls(ok=True, message=message, **kwargs)

    @classmethod
    def failure(cls, message: str, **kwargs: Any) -> CommandResult:
        return cls(ok=False, message=message, **kwargs)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict[str, Any] = {"ok": self.ok}
        if self.message:
            result["message"] = self.message
        if self.error_code:
            result["error"] = self.error_code
        result.update(self.data)
        return result


@dataclass
class Runtime:
    """Everything a use case may need, injected by the entrypoint."""

    executor: ScriptExecutor
    vcs: VcsAdapter
    machine: MachineContext | None = None
    repos_file: Path | None = None
    environ: Mapping[str, str] | None = None
    _settings: Settings | None = field(default=None, init=False, repr=False)

    def get_machine(self) -> MachineContext:
        if self.machine is None:
            self.machine = detect_machine()
        return self.machine

    def get_settings(self) -> Settings:
        if self._settings is None:
            self._settings = load_settings(
                self.get_machine(),
                repos_file=self.repos_file,
                environ=self.environ,
            )
        return self._settings
