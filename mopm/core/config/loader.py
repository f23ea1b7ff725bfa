"""
Configuration loader — where definitions come from and where they live.

Resolves the user's home directory (the sudo caller's home when mopm
runs under sudo), reads the repository list file, and maps each
repository URL to its local clone directory.

    ~/.mopm-repos                       one repository URL per line
    ~/.mopm/<host>/<path>               clone of each repository
    ~/.mopm/<host>/<path>/definitions/<name>.yaml
"""

from __future__ import annotations

import logging
import os
import pwd
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from mopm.core.errors import ConfigurationError, SourceIOError
from mopm.core.models.machine import MachineContext

logger = logging.getLogger(__name__)

DEFAULT_REPOSITORY_URL = "https://github.com/basd4g/mopm-defs.git"
REPOS_FILE_NAME = ".mopm-repos"
CLONE_DIR_NAME = ".mopm"
DEFINITIONS_DIR = "definitions"

ENV_REPOS_FILE = "MOPM_REPOS_FILE"
ENV_CLONE_ROOT = "MOPM_ROOT"


class Settings(BaseModel):
    """Resolved per-invocation configuration."""

    model_config = ConfigDict(frozen=True)

    home: Path
    repos_file: Path
    clone_root: Path

    def repositories(self) -> list[str]:
        """Repository URLs in the user's declared order."""
        return load_repositories(self.repos_file)

    def repository_path(self, url: str) -> Path:
        return repository_path(url, self.clone_root)


def resolve_home(machine: MachineContext) -> Path:
    """Home directory of the user mopm acts for.

    Raises:
        ConfigurationError: Running as root without ``SUDO_USER``, or
            the sudo user has no passwd entry.
    """
    if not machine.privileged:
        return Path.home()

    if not machine.sudo_user:
        raise ConfigurationError("Please execute with sudo if you execute mopm as root")
    try:
        return Path(pwd.getpwnam(machine.sudo_user).pw_dir)
    except KeyError as e:
        raise ConfigurationError(f"Unknown sudo user: {machine.sudo_user}") from e


def parse_repositories(text: str) -> list[str]:
    """Repository URLs from the list file: trimmed, no blanks or ``#`` comments."""
    repos: list[str] = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        repos.append(line)
    return repos


def load_repositories(path: Path) -> list[str]:
    """Read the repository list, creating it with the default URL if absent.

    Raises:
        SourceIOError: The file cannot be created or read.
        ConfigurationError: The file is not UTF-8 or lists no repositories.
    """
    if not path.exists():
        logger.warning("Create the file because it does not exist: %s", path)
        try:
            path.write_text(DEFAULT_REPOSITORY_URL + "\n", encoding="utf-8")
        except OSError as e:
            raise SourceIOError(f"Cannot create {path}: {e}") from e

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SourceIOError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Repository list is not valid UTF-8: {path}") from e

    repos = parse_repositories(text)
    if not repos:
        raise ConfigurationError(f"Package repository url is not found in the file: {path}")
    return repos


def normalize_repository_url(url: str) -> str:
    """``https://github.com/a/b.git`` → ``github.com/a/b``."""
    for scheme in ("http://", "https://"):
        if url.startswith(scheme):
            url = url[len(scheme):]
            break
    return url.removesuffix(".git")


def repository_path(url: str, clone_root: Path) -> Path:
    """Local clone directory for a repository URL."""
    return clone_root / normalize_repository_url(url)


def definition_path(repo_dir: Path, package_name: str) -> Path:
    """Path of a package's definition file inside a clone."""
    return repo_dir / DEFINITIONS_DIR / f"{package_name}.yaml"


def load_settings(
    machine: MachineContext,
    repos_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build the settings for this invocation.

    Precedence for each path: explicit argument > environment variable
    > default under the resolved home directory.
    """
    env = os.environ if environ is None else environ
    home = resolve_home(machine)

    if repos_file is None:
        repos_file = Path(env[ENV_REPOS_FILE]) if env.get(ENV_REPOS_FILE) else home / REPOS_FILE_NAME
    clone_root = Path(env[ENV_CLONE_ROOT]) if env.get(ENV_CLONE_ROOT) else home / CLONE_DIR_NAME

    settings = Settings(home=home, repos_file=repos_file, clone_root=clone_root)
    logger.debug("Settings: %s", settings)
    return settings
