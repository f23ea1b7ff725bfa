"""
Adapter base — the contract between core services and external tools.

Services only talk to the shell and to git through these interfaces,
never through ``subprocess`` directly.  Adapters return Receipts and
never raise for a failing command.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mopm.core.models.machine import ExecutionIdentity
from mopm.core.models.receipt import Receipt


class ScriptExecutor(ABC):
    """Runs a verification or install script under an identity.

    To add an executor:
        1. Subclass ScriptExecutor
        2. Implement name, is_available, run
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The executor identifier (e.g., 'bash', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the underlying interpreter exists.  Never raises."""

    @abstractmethod
    def run(self, script: str, identity: ExecutionIdentity) -> Receipt:
        """Run ``script`` as ``identity`` and return a receipt.

        MUST never raise.  A process that could not be started is a
        failed receipt with ``launched=False``.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class VcsAdapter(ABC):
    """Clones and updates definition repositories."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'git')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the VCS binary exists.  Never raises."""

    @abstractmethod
    def clone(self, url: str, path: str) -> Receipt:
        """Clone ``url`` into ``path``.  Never raises."""

    @abstractmethod
    def pull(self, path: str) -> Receipt:
        """Update the clone at ``path`` from its origin.  Never raises."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
