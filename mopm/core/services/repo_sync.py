"""
Repository sync — bring every definition repository up to date.

Repositories are processed strictly in the user's order.  The first
failure aborts the remaining ones; nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from mopm.adapters.base import VcsAdapter
from mopm.core.config.loader import repository_path
from mopm.core.errors import SourceIOError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncRecord:
    """What happened to one repository."""

    url: str
    path: str
    operation: str  # "clone" | "pull"


def sync_repository(url: str, clone_root: Path, vcs: VcsAdapter) -> SyncRecord:
    """Clone ``url`` if it has no local clone yet, otherwise pull it.

    Raises:
        SourceIOError: git failed or could not be launched.
    """
    path = repository_path(url, clone_root)

    if path.exists():
        logger.info("Pull %s", path)
        receipt = vcs.pull(str(path))
    else:
        logger.info("Directory does not exist: %s, cloning %s", path, url)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SourceIOError(f"Cannot create {path.parent}: {e}") from e
        receipt = vcs.clone(url, str(path))

    if not receipt.ok:
        raise SourceIOError(f"git {receipt.operation} failed for {url}: {receipt.error}")
    return SyncRecord(url=url, path=str(path), operation=receipt.operation)


def sync_repositories(
    repositories: Sequence[str],
    clone_root: Path,
    vcs: VcsAdapter,
) -> list[SyncRecord]:
    """Sync every repository in order, stopping at the first failure.

    Raises:
        SourceIOError: The VCS tool is missing, or a repository failed.
    """
    if not vcs.is_available():
        raise SourceIOError(f"{vcs.name} is not available; install it to update repositories")
    return [sync_repository(url, clone_root, vcs) for url in repositories]
