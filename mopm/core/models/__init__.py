"""
Domain models — Pydantic types for mopm.

All models are re-exported here for convenient access:

    from mopm.core.models import Package, Environment, MachineContext, Receipt
"""

from mopm.core.models.command import (
    Command,
    EnvironmentCommand,
    InstallCommand,
    LintCommand,
    SearchCommand,
    UpdateCommand,
    VerifyCommand,
    parse_command,
)
from mopm.core.models.machine import ExecutionIdentity, MachineContext
from mopm.core.models.package import Environment, Package, PackageFile
from mopm.core.models.receipt import Receipt

__all__ = [
    # command.py
    "Command",
    "Environment",
    "EnvironmentCommand",
    # machine.py
    "ExecutionIdentity",
    "InstallCommand",
    "LintCommand",
    "MachineContext",
    # package.py
    "Package",
    "PackageFile",
    # receipt.py
    "Receipt",
    "SearchCommand",
    "UpdateCommand",
    "VerifyCommand",
    "parse_command",
]
