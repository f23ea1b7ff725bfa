"""
Search use case — show every definition of a package.
"""

from __future__ import annotations

import click

from mopm.core.errors import NotFoundError
from mopm.core.models.command import SearchCommand
from mopm.core.models.package import Environment, PackageFile
from mopm.core.services.package_sources import find_package_files
from mopm.core.use_cases.runtime import CommandResult, Runtime


def environment_label(env: Environment, machine_id: str, color: bool = False) -> str:
    """``arch@platform``, green when it matches this machine."""
    label = env.label()
    if color and env.env_id == machine_id:
        return click.style(label, fg="green")
    return label


def describe_package_file(
    package_file: PackageFile,
    machine_id: str,
    color: bool = False,
) -> list[str]:
    """Human-readable lines for one search hit."""
    pkg = package_file.package
    envs = ", ".join(environment_label(e, machine_id, color) for e in pkg.environments)
    return [
        f"path:         {package_file.path}",
        f"name:         {pkg.name}",
        f"url:          {pkg.url}",
        f"description:  {pkg.description}",
        f"environments: {envs}",
    ]


def search(command: SearchCommand, runtime: Runtime) -> CommandResult:
    settings = runtime.get_settings()
    machine_id = runtime.get_machine().environment_id

    files = find_package_files(command.name, settings.repositories(), settings.clone_root)
    if not files:
        raise NotFoundError(f"Package not found: {command.name}")

    output: list[str] = []
    for package_file in files:
        output.extend(describe_package_file(package_file, machine_id, command.color))
        output.append("")

    return CommandResult.success(
        output=output,
        data={
            "machine": machine_id,
            "packages": [f.to_dict() for f in files],
        },
    )
