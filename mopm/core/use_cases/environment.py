"""
Environment use case — report the machine environment id.
"""

from __future__ import annotations

from mopm.core.models.command import EnvironmentCommand
from mopm.core.use_cases.runtime import CommandResult, Runtime


def environment(command: EnvironmentCommand, runtime: Runtime) -> CommandResult:
    machine = runtime.get_machine()
    return CommandResult.success(
        output=[machine.environment_id],
        data={
            "environment": machine.environment_id,
            **machine.model_dump(),
        },
    )
