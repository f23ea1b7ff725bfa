"""
Error taxonomy — every failure the core can report.

Core services raise these.  The use-case dispatcher turns them into a
failed ``CommandResult`` (one human-readable message, exit code 1), so
the CLI never needs to know which layer failed.

Nothing here retries.  A ``ValidationError`` for one definition file
only excludes that file during aggregation; every other error aborts
the current command.
"""

from __future__ import annotations


class MopmError(Exception):
    """Base class for all reportable mopm failures."""

    code: str = "UNKNOWN"


class ValidationError(MopmError):
    """A package definition violates a lint rule.

    Only the first violated rule is reported, in the fixed rule order
    (name, url, description, environments, then per environment).
    """

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        rule: str,
        detail: str,
        environment_index: int | None = None,
    ) -> None:
        self.rule = rule
        self.detail = detail
        self.environment_index = environment_index
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.environment_index is None:
            return self.detail
        return f"environments[{self.environment_index}]: {self.detail}"


class NotFoundError(MopmError):
    """No package definition, or no environment matching this machine."""

    code = "NOT_FOUND"


class PrivilegeDenied(MopmError):
    """The privilege policy refused to run a script."""

    code = "PRIVILEGE_DENIED"


class ExecutionError(MopmError):
    """An external process could not be launched or reported failure."""

    code = "EXECUTION_ERROR"


class SourceIOError(MopmError):
    """Filesystem or network failure while reading or syncing sources."""

    code = "IO_ERROR"


class ConfigurationError(MopmError):
    """The machine or user configuration cannot be resolved."""

    code = "CONFIGURATION_ERROR"
