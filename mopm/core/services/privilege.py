"""
Privilege policy — may this script run, and as whom?

    | package \\ mopm | root                   | not root |
    | ----            | ----                   | ----     |
    | privileged      | run                    | deny     |
    | unprivileged    | run as $SUDO_USER (*)  | run      |

    (*) deny when SUDO_USER is unset

Privileged packages only run scripts written for root.  Unprivileged
packages never run with retained elevation; when mopm itself runs
under sudo they are re-targeted to the calling user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from mopm.core.models.machine import ExecutionIdentity, MachineContext

logger = logging.getLogger(__name__)


class ExecutionMode(str, Enum):
    RUN_DIRECT = "run_direct"
    RUN_AS = "run_as"
    DENY = "deny"


@dataclass(frozen=True)
class PrivilegeDecision:
    """Outcome of ``decide``."""

    mode: ExecutionMode
    identity: ExecutionIdentity | None = None
    reason: str = ""

    @property
    def allowed(self) -> bool:
        return self.mode is not ExecutionMode.DENY


def decide(
    requires_privilege: bool,
    is_privileged: bool,
    deescalation_identity: str | None,
) -> PrivilegeDecision:
    """Map (required, current, sudo user) onto an execution mode."""
    if requires_privilege:
        if is_privileged:
            return PrivilegeDecision(ExecutionMode.RUN_DIRECT, ExecutionIdentity.elevated())
        return PrivilegeDecision(
            ExecutionMode.DENY,
            reason="The package requires privilege but mopm is not running as root",
        )

    if not is_privileged:
        return PrivilegeDecision(ExecutionMode.RUN_DIRECT, ExecutionIdentity.current())

    if deescalation_identity:
        return PrivilegeDecision(
            ExecutionMode.RUN_AS,
            ExecutionIdentity.as_user(deescalation_identity),
        )
    return PrivilegeDecision(
        ExecutionMode.DENY,
        reason=(
            "The package must not run as root and the original user is unknown "
            "(run mopm with sudo instead of as root)"
        ),
    )


def decide_for(requires_privilege: bool, machine: MachineContext) -> PrivilegeDecision:
    """``decide`` with the current/identity facts taken from ``machine``."""
    decision = decide(requires_privilege, machine.privileged, machine.sudo_user)
    logger.debug(
        "Privilege: requires=%s privileged=%s sudo_user=%s → %s",
        requires_privilege, machine.privileged, machine.sudo_user, decision.mode.value,
    )
    return decision
