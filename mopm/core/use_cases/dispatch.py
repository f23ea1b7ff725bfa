"""
Command dispatch — one handler per command variant.

Every ``MopmError`` a handler raises becomes a failed CommandResult
carrying the error's message; anything else is a bug and propagates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from mopm.core.errors import MopmError
from mopm.core.models.command import Command
from mopm.core.use_cases.environment import environment
from mopm.core.use_cases.install import install, verify
from mopm.core.use_cases.lint import lint
from mopm.core.use_cases.runtime import CommandResult, Runtime
from mopm.core.use_cases.search import search
from mopm.core.use_cases.update import update

logger = logging.getLogger(__name__)

HANDLERS: dict[str, Callable[[Any, Runtime], CommandResult]] = {
    "search": search,
    "update": update,
    "lint": lint,
    "environment": environment,
    "verify": verify,
    "install": install,
}


def run_command(command: Command, runtime: Runtime) -> CommandResult:
    """Execute ``command`` and return its result.

    Raises:
        TypeError: ``command`` is not a known variant.
    """
    handler = HANDLERS.get(getattr(command, "kind", None))
    if handler is None:
        raise TypeError(f"Unknown command: {command!r}")

    logger.debug("Running %s", command)
    try:
        return handler(command, runtime)
    except MopmError as e:
        logger.debug("%s failed: %s", command.kind, e, exc_info=True)
        return CommandResult.failure(str(e), error_code=e.code)
