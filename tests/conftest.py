"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import copy
from pathlib import Path

import pytest
import yaml

from mopm.adapters.base import VcsAdapter
from mopm.adapters.mock import MockExecutor
from mopm.core.config.loader import definition_path, repository_path
from mopm.core.models.machine import MachineContext
from mopm.core.models.receipt import Receipt

REPO_A = "https://github.com/example/defs-a.git"
REPO_B = "https://github.com/example/defs-b.git"

VALID_DEFINITION = {
    "name": "hello",
    "url": "https://example.com/hello",
    "description": "Prints a greeting",
    "environments": [
        {
            "architecture": "amd64",
            "platform": "darwin",
            "dependencies": ["brew"],
            "verification": "which hello",
            "privilege": False,
            "script": "brew install hello",
        },
        {
            "architecture": "amd64",
            "platform": "linux/ubuntu",
            "dependencies": [],
            "verification": "which hello",
            "privilege": True,
            "script": "apt-get install -y hello",
        },
    ],
}


def definition(**overrides) -> dict:
    """A deep copy of VALID_DEFINITION with top-level overrides."""
    data = copy.deepcopy(VALID_DEFINITION)
    data.update(overrides)
    return data


class FakeVcs(VcsAdapter):
    """Records clone/pull calls; clone creates the target directory."""

    def __init__(self, fail_on: set[str] | None = None, available: bool = True):
        self.calls: list[tuple[str, str]] = []
        self._fail_on = fail_on or set()
        self._available = available

    @property
    def name(self) -> str:
        return "fake-git"

    def is_available(self) -> bool:
        return self._available

    def clone(self, url: str, path: str) -> Receipt:
        self.calls.append(("clone", url))
        if url in self._fail_on:
            return Receipt.failure(adapter=self.name, operation="clone", error="boom")
        Path(path).mkdir(parents=True)
        return Receipt.success(adapter=self.name, operation="clone")

    def pull(self, path: str) -> Receipt:
        self.calls.append(("pull", path))
        if path in self._fail_on:
            return Receipt.failure(adapter=self.name, operation="pull", error="boom")
        return Receipt.success(adapter=self.name, operation="pull")


class DefinitionRepos:
    """Local repository clones populated with definition files."""

    def __init__(self, root: Path):
        self.home = root
        self.clone_root = root / ".mopm"
        self.repos_file = root / ".mopm-repos"

    def add(self, url: str, name: str, data: dict | str) -> Path:
        path = definition_path(repository_path(url, self.clone_root), name)
        path.parent.mkdir(parents=True, exist_ok=True)
        text = data if isinstance(data, str) else yaml.safe_dump(data)
        path.write_text(text)
        return path

    def write_repos(self, *urls: str) -> None:
        self.repos_file.write_text("\n".join(urls) + "\n")


@pytest.fixture
def darwin_machine() -> MachineContext:
    return MachineContext(architecture="amd64", platform="darwin", username="alice")


@pytest.fixture
def ubuntu_root_machine() -> MachineContext:
    """mopm run through sudo on Ubuntu."""
    return MachineContext(
        architecture="amd64",
        platform="linux/ubuntu",
        privileged=True,
        sudo_user="alice",
        username="root",
    )


@pytest.fixture
def executor() -> MockExecutor:
    return MockExecutor()


@pytest.fixture
def fake_vcs() -> FakeVcs:
    return FakeVcs()


@pytest.fixture
def repos(tmp_path: Path, monkeypatch) -> DefinitionRepos:
    """Definition repos under a temporary HOME."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("MOPM_REPOS_FILE", raising=False)
    monkeypatch.delenv("MOPM_ROOT", raising=False)
    return DefinitionRepos(tmp_path)
