"""
Machine context — process-wide facts captured once per run.

Architecture, platform, elevation and the original sudo user are read
a single time by ``services.machine.detect_machine`` and passed
explicitly to the resolver and privilege policy.  Tests build these
directly instead of patching ``os`` or ``platform``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class MachineContext(BaseModel):
    """Immutable snapshot of the running machine and user."""

    model_config = ConfigDict(frozen=True)

    architecture: str
    platform: str
    privileged: bool = False
    sudo_user: str | None = None
    username: str = ""

    @property
    def environment_id(self) -> str:
        """The ``<architecture>@<platform>`` id matched against definitions."""
        return f"{self.architecture}@{self.platform}"


class ExecutionIdentity(BaseModel):
    """Who a script runs as.

    ``current`` and ``elevated`` both run in-process identity (mopm is
    already root for ``elevated``); ``user`` re-targets the script to
    another account through sudo.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["current", "elevated", "user"] = "current"
    user: str | None = None

    @classmethod
    def current(cls) -> ExecutionIdentity:
        return cls(kind="current")

    @classmethod
    def elevated(cls) -> ExecutionIdentity:
        return cls(kind="elevated")

    @classmethod
    def as_user(cls, user: str) -> ExecutionIdentity:
        return cls(kind="user", user=user)

    def __str__(self) -> str:
        if self.kind == "user":
            return f"user:{self.user}"
        return self.kind
