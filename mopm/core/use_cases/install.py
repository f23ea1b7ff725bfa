"""
Verify and install use cases — resolve the package for this machine,
then hand it to the orchestrator.
"""

from __future__ import annotations

from mopm.core.errors import ExecutionError, NotFoundError
from mopm.core.models.command import InstallCommand, VerifyCommand
from mopm.core.models.package import Environment
from mopm.core.services.orchestrator import (
    TERMINAL_SUCCESS,
    InstallState,
    Orchestrator,
    VerifyOutcome,
)
from mopm.core.services.package_sources import find_package_files
from mopm.core.services.resolver import resolve
from mopm.core.use_cases.runtime import CommandResult, Runtime

_INSTALL_MESSAGES = {
    InstallState.ALREADY_INSTALLED: "The package is already installed",
    InstallState.INSTALLED: "Installed successfully.",
    InstallState.INSTALL_FAILED_VERIFICATION: "Finished installing script but failed to verify",
}


def resolve_package_environment(name: str, runtime: Runtime) -> Environment:
    """The environment of package ``name`` that matches this machine.

    Raises:
        NotFoundError: No definition of ``name``, or none for this machine.
    """
    settings = runtime.get_settings()
    files = find_package_files(name, settings.repositories(), settings.clone_root)
    if not files:
        raise NotFoundError(f"Package not found: {name}")
    return resolve(runtime.get_machine().environment_id, files)


def _orchestrator(runtime: Runtime) -> Orchestrator:
    executor = runtime.executor
    if not executor.is_available():
        raise ExecutionError(f"Script executor '{executor.name}' is not available")
    return Orchestrator(runtime.get_machine(), executor)


def verify(command: VerifyCommand, runtime: Runtime) -> CommandResult:
    env = resolve_package_environment(command.name, runtime)
    orchestrator = _orchestrator(runtime)
    outcome = orchestrator.verify(env)

    data = {"package": command.name, "environment": env.env_id, "result": outcome.value}
    if outcome is VerifyOutcome.VERIFIED:
        return CommandResult.success("The package is installed", data=data)
    if orchestrator.skip_reason:
        data["skipped"] = orchestrator.skip_reason
        return CommandResult.failure(
            f"Could not verify the package: {orchestrator.skip_reason}", data=data
        )
    return CommandResult.failure("The package is not installed", data=data)


def install(command: InstallCommand, runtime: Runtime) -> CommandResult:
    env = resolve_package_environment(command.name, runtime)
    orchestrator = _orchestrator(runtime)
    state = orchestrator.install(env)

    return CommandResult(
        ok=state in TERMINAL_SUCCESS,
        message=_INSTALL_MESSAGES[state],
        data={
            "package": command.name,
            "environment": env.env_id,
            "result": state.value,
            "states": [s.value for s in orchestrator.history],
        },
    )
