"""
Tests for environment resolution — first match across sources and environments.
"""

import pytest

from conftest import definition
from mopm.core.errors import NotFoundError
from mopm.core.models.package import PackageFile
from mopm.core.services.lint import validate_package
from mopm.core.services.resolver import resolve


def _source(path: str, *envs: dict) -> PackageFile:
    return PackageFile(
        package=validate_package(definition(environments=list(envs))),
        path=path,
    )


def _env(platform: str, script: str, privilege: bool = False) -> dict:
    return {
        "architecture": "amd64",
        "platform": platform,
        "verification": "true",
        "privilege": privilege,
        "script": script,
    }


class TestResolve:
    def test_single_match(self):
        source = _source("a.yaml", _env("linux/ubuntu", "apt"), _env("darwin", "brew"))
        env = resolve("amd64@darwin", [source])
        assert env.script == "brew"

    def test_earlier_source_wins(self):
        first = _source("a.yaml", _env("darwin", "from-a"))
        second = _source("b.yaml", _env("darwin", "from-b"))
        assert resolve("amd64@darwin", [first, second]).script == "from-a"
        assert resolve("amd64@darwin", [second, first]).script == "from-b"

    def test_earlier_environment_wins(self):
        source = _source("a.yaml", _env("darwin", "first"), _env("darwin", "second"))
        assert resolve("amd64@darwin", [source]).script == "first"

    def test_falls_through_to_later_source(self):
        first = _source("a.yaml", _env("linux/ubuntu", "apt"))
        second = _source("b.yaml", _env("darwin", "brew"))
        assert resolve("amd64@darwin", [first, second]).script == "brew"

    def test_architecture_mismatch(self):
        source = _source("a.yaml", _env("linux/ubuntu", "apt"))
        with pytest.raises(NotFoundError):
            resolve("arm64@linux/ubuntu", [source])

    def test_no_sources(self):
        with pytest.raises(NotFoundError):
            resolve("amd64@darwin", [])
