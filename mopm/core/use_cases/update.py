"""
Update use case — clone or pull every definition repository.
"""

from __future__ import annotations

from dataclasses import asdict

from mopm.core.models.command import UpdateCommand
from mopm.core.services.repo_sync import sync_repositories
from mopm.core.use_cases.runtime import CommandResult, Runtime


def update(command: UpdateCommand, runtime: Runtime) -> CommandResult:
    settings = runtime.get_settings()
    records = sync_repositories(settings.repositories(), settings.clone_root, runtime.vcs)
    return CommandResult.success(
        message=f"Updated {len(records)} repositories",
        output=[f"{r.operation}: {r.url}" for r in records],
        data={"repositories": [asdict(r) for r in records]},
    )
