"""
Lint use case — check one definition file.
"""

from __future__ import annotations

from pathlib import Path

from mopm.core.errors import ValidationError
from mopm.core.models.command import LintCommand
from mopm.core.services.package_sources import read_package_file
from mopm.core.use_cases.runtime import CommandResult, Runtime


def lint(command: LintCommand, runtime: Runtime) -> CommandResult:
    try:
        package_file = read_package_file(Path(command.path))
    except ValidationError as e:
        return CommandResult.failure(
            str(e),
            error_code=e.code,
            data={"rule": e.rule, "environment_index": e.environment_index},
        )
    return CommandResult.success(
        "lint passed",
        data={"package": package_file.package.name},
    )
