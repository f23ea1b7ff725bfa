"""
Tests for package definition lint — rule order, messages, typed output.
"""

import pytest

from conftest import definition
from mopm.core.errors import ValidationError
from mopm.core.models.package import Package
from mopm.core.services.lint import (
    VALID_PLATFORMS,
    check_package,
    is_valid_name,
    validate_package,
)


def _env(**overrides) -> dict:
    env = {
        "architecture": "amd64",
        "platform": "darwin",
        "verification": "true",
        "privilege": False,
        "script": "echo install",
    }
    env.update(overrides)
    return env


class TestCheckPackage:
    def test_valid_definition(self):
        assert check_package(definition()) is None

    def test_not_a_mapping(self):
        error = check_package(["name", "hello"])
        assert error.rule == "format"

    @pytest.mark.parametrize("name", ["Hello", "hello_world", "hello world", "", "héllo", "a/b"])
    def test_bad_name_reported_first(self, name):
        # Every other field is broken too; the name rule still wins
        record = {"name": name, "url": "ftp://x", "description": "", "environments": []}
        error = check_package(record)
        assert error.rule == "name"
        assert "a-z, 0-9" in str(error)

    def test_name_with_trailing_newline_rejected(self):
        assert check_package(definition(name="hello\n")).rule == "name"

    def test_missing_name(self):
        record = definition()
        del record["name"]
        assert check_package(record).rule == "name"

    @pytest.mark.parametrize("url", ["example.com", "ftp://example.com", "", None])
    def test_bad_url(self, url):
        assert check_package(definition(url=url)).rule == "url"

    @pytest.mark.parametrize("url", ["http://example.com", "https://example.com"])
    def test_good_url(self, url):
        assert check_package(definition(url=url)) is None

    def test_missing_description_reports_description(self):
        record = definition()
        del record["description"]
        record["environments"] = []
        error = check_package(record)
        assert error.rule == "description"
        assert str(error) == "Package description must not be empty"

    def test_empty_environments(self):
        assert check_package(definition(environments=[])).rule == "environments"

    def test_missing_environments(self):
        record = definition()
        del record["environments"]
        assert check_package(record).rule == "environments"

    def test_bad_architecture(self):
        error = check_package(definition(environments=[_env(architecture="arm64")]))
        assert error.rule == "architecture"
        assert error.environment_index == 0
        assert "'amd64'" in str(error)

    def test_bad_platform_reports_index(self):
        error = check_package(definition(environments=[_env(), _env(platform="windows")]))
        assert error.rule == "platform"
        assert error.environment_index == 1
        assert str(error).startswith("environments[1]: ")
        for platform in VALID_PLATFORMS:
            assert platform in str(error)

    def test_architecture_checked_before_platform(self):
        error = check_package(
            definition(environments=[_env(architecture="x86", platform="windows")])
        )
        assert error.rule == "architecture"

    def test_bad_dependency(self):
        error = check_package(definition(environments=[_env(dependencies=["ok", "Not-OK"])]))
        assert error.rule == "dependencies"

    def test_null_dependencies_allowed(self):
        assert check_package(definition(environments=[_env(dependencies=None)])) is None

    def test_empty_verification(self):
        assert check_package(definition(environments=[_env(verification="")])).rule == "verification"

    def test_empty_script(self):
        assert check_package(definition(environments=[_env(script="")])).rule == "script"

    def test_verification_checked_before_script(self):
        error = check_package(definition(environments=[_env(verification="", script="")]))
        assert error.rule == "verification"

    def test_first_bad_environment_wins(self):
        error = check_package(
            definition(environments=[_env(), _env(script=""), _env(architecture="arm64")])
        )
        assert error.rule == "script"
        assert error.environment_index == 1


class TestValidatePackage:
    def test_returns_typed_package(self):
        pkg = validate_package(definition())
        assert isinstance(pkg, Package)
        assert pkg.name == "hello"
        assert [e.env_id for e in pkg.environments] == ["amd64@darwin", "amd64@linux/ubuntu"]
        assert pkg.environments[0].dependencies == ("brew",)

    def test_raises_first_rule(self):
        with pytest.raises(ValidationError) as exc:
            validate_package(definition(url="nope"))
        assert exc.value.rule == "url"

    def test_non_boolean_privilege_is_format_error(self):
        with pytest.raises(ValidationError) as exc:
            validate_package(definition(environments=[_env(privilege="yes")]))
        assert exc.value.rule == "format"

    def test_missing_privilege_defaults_false(self):
        env = _env()
        del env["privilege"]
        pkg = validate_package(definition(environments=[env]))
        assert pkg.environments[0].privilege is False


class TestIsValidName:
    def test_valid(self):
        assert is_valid_name("docker-ce")
        assert is_valid_name("7zip")

    def test_invalid(self):
        assert not is_valid_name("../etc/passwd")
        assert not is_valid_name(42)
        assert not is_valid_name(None)
