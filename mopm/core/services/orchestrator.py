"""
Install/verify orchestration — the state machine behind verify/install.

    Idle → Verifying → AlreadyInstalled                      (success)
                     → NotInstalled → Installing → Verifying → Installed
                                                           → InstallFailedVerification
    any privilege Deny or script launch failure            → InstallError

``install`` never runs the install script when verification already
passes.  A script that runs but leaves the package unverifiable ends
in ``InstallFailedVerification``, which is reported separately from a
launch failure (``ExecutionError``) and from ``PrivilegeDenied``.
"""

from __future__ import annotations

import logging
from enum import Enum

from mopm.adapters.base import ScriptExecutor
from mopm.core.errors import ExecutionError, PrivilegeDenied
from mopm.core.models.machine import MachineContext
from mopm.core.models.package import Environment
from mopm.core.services.privilege import decide_for

logger = logging.getLogger(__name__)


class InstallState(str, Enum):
    IDLE = "idle"
    VERIFYING = "verifying"
    ALREADY_INSTALLED = "already_installed"
    NOT_INSTALLED = "not_installed"
    INSTALLING = "installing"
    INSTALLED = "installed"
    INSTALL_FAILED_VERIFICATION = "install_failed_verification"
    INSTALL_ERROR = "install_error"


TERMINAL_SUCCESS = frozenset({InstallState.ALREADY_INSTALLED, InstallState.INSTALLED})


class VerifyOutcome(str, Enum):
    VERIFIED = "verified"
    NOT_VERIFIED = "not_verified"


class Orchestrator:
    """Drives verify/install for one environment on one machine."""

    def __init__(self, machine: MachineContext, executor: ScriptExecutor):
        self._machine = machine
        self._executor = executor
        self.state = InstallState.IDLE
        self.history: list[InstallState] = [InstallState.IDLE]
        # Why the last verification was not run, if the policy refused it
        self.skip_reason: str | None = None

    def _transition(self, state: InstallState) -> None:
        logger.debug("State: %s → %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _reset(self) -> None:
        self.state = InstallState.IDLE
        self.history = [InstallState.IDLE]
        self.skip_reason = None

    # ── Verification ────────────────────────────────────────────

    def _run_verification(self, env: Environment) -> VerifyOutcome:
        decision = decide_for(env.privilege, self._machine)
        if not decision.allowed:
            # The verification would need the same rights as the script
            self.skip_reason = decision.reason
            logger.warning("Skipping verification: %s", decision.reason)
            return VerifyOutcome.NOT_VERIFIED

        receipt = self._executor.run(env.verification, decision.identity)
        if not receipt.launched:
            raise ExecutionError(f"Failed to run verification: {receipt.error}")
        return VerifyOutcome.VERIFIED if receipt.ok else VerifyOutcome.NOT_VERIFIED

    def verify(self, env: Environment) -> VerifyOutcome:
        """Run the verification command for ``env``.

        Raises:
            ExecutionError: The verification could not be launched.
        """
        self._reset()
        self._transition(InstallState.VERIFYING)
        try:
            outcome = self._run_verification(env)
        except ExecutionError:
            self._transition(InstallState.INSTALL_ERROR)
            raise
        self._transition(
            InstallState.ALREADY_INSTALLED
            if outcome is VerifyOutcome.VERIFIED
            else InstallState.NOT_INSTALLED
        )
        return outcome

    # ── Installation ────────────────────────────────────────────

    def install(self, env: Environment) -> InstallState:
        """Make ``env`` installed.

        Returns:
            ``ALREADY_INSTALLED``, ``INSTALLED`` or
            ``INSTALL_FAILED_VERIFICATION``.

        Raises:
            PrivilegeDenied: The privilege policy refused the script.
            ExecutionError: A script could not be launched.
        """
        if self.verify(env) is VerifyOutcome.VERIFIED:
            logger.info("%s already verified, skipping install script", env.env_id)
            return self.state

        decision = decide_for(env.privilege, self._machine)
        if not decision.allowed:
            self._transition(InstallState.INSTALL_ERROR)
            raise PrivilegeDenied(f"Check privilege to install this package: {decision.reason}")

        self._transition(InstallState.INSTALLING)
        receipt = self._executor.run(env.script, decision.identity)
        if not receipt.launched:
            self._transition(InstallState.INSTALL_ERROR)
            raise ExecutionError(f"Failed to run install script: {receipt.error}")
        if receipt.failed:
            logger.warning("Install script failed (%s), verifying anyway", receipt.error)

        self._transition(InstallState.VERIFYING)
        try:
            outcome = self._run_verification(env)
        except ExecutionError:
            self._transition(InstallState.INSTALL_ERROR)
            raise

        if outcome is VerifyOutcome.VERIFIED:
            self._transition(InstallState.INSTALLED)
        else:
            self._transition(InstallState.INSTALL_FAILED_VERIFICATION)
        return self.state
