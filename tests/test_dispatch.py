"""
Tests for command dispatch — one handler per variant, errors become results.
"""

from typing import get_args

import pytest

from conftest import REPO_A, definition
from mopm.core.models.command import Command, EnvironmentCommand, VerifyCommand
from mopm.core.use_cases.dispatch import HANDLERS, run_command
from mopm.core.use_cases.runtime import CommandResult, Runtime


def _variants():
    union = get_args(Command)[0]
    return get_args(union)


class TestHandlers:
    def test_every_variant_has_a_handler(self):
        kinds = {variant.model_fields["kind"].default for variant in _variants()}
        assert kinds == set(HANDLERS)

    def test_unknown_command(self, executor, fake_vcs):
        with pytest.raises(TypeError):
            run_command(object(), Runtime(executor=executor, vcs=fake_vcs))


class TestRunCommand:
    def test_environment(self, darwin_machine, executor, fake_vcs):
        runtime = Runtime(executor=executor, vcs=fake_vcs, machine=darwin_machine)
        result = run_command(EnvironmentCommand(), runtime)
        assert result.ok
        assert result.output == ["amd64@darwin"]

    def test_errors_become_failed_results(self, repos, darwin_machine, executor, fake_vcs):
        repos.write_repos(REPO_A)
        runtime = Runtime(executor=executor, vcs=fake_vcs, machine=darwin_machine)
        result = run_command(VerifyCommand(name="hello"), runtime)
        assert not result.ok
        assert result.error_code == "NOT_FOUND"

    def test_settings_resolved_once(self, repos, darwin_machine, executor, fake_vcs):
        repos.write_repos(REPO_A)
        repos.add(REPO_A, "hello", definition())
        runtime = Runtime(executor=executor, vcs=fake_vcs, machine=darwin_machine)
        run_command(VerifyCommand(name="hello"), runtime)
        settings = runtime.get_settings()
        run_command(VerifyCommand(name="hello"), runtime)
        assert runtime.get_settings() is settings


class TestCommandResult:
    def test_to_dict(self):
        result = CommandResult.failure("nope", error_code="NOT_FOUND", data={"package": "x"})
        assert result.to_dict() == {
            "ok": False,
            "message": "nope",
            "error": "NOT_FOUND",
            "package": "x",
        }
