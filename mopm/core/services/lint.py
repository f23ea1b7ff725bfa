"""
Package definition lint — schema rules for definition files.

Rules are evaluated in a fixed order and stop at the first failure, so
a given malformed file always reports the same rule:

    1. name          ^[0-9a-z-]+$
    2. url           starts with http:// or https://
    3. description   non-empty
    4. environments  non-empty
    5. per environment, in declaration order:
       architecture, platform, dependencies, verification, script

``check_package`` is pure and returns the first violation (or None).
``validate_package`` raises it, or returns the typed ``Package``.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from mopm.core.errors import ValidationError
from mopm.core.models.package import Package

logger = logging.getLogger(__name__)

# ── Allow-lists ─────────────────────────────────────────────────

VALID_ARCHITECTURES = ("amd64",)

# Other linux/<distro> values are added here as definitions appear
VALID_PLATFORMS = ("darwin", "linux/ubuntu")

_NAME_RE = re.compile(r"[0-9a-z-]+")
_URL_RE = re.compile(r"https?://")

_CHARSET = "a-z, 0-9 and -(hyphen) characters"


def is_valid_name(value: Any) -> bool:
    """Whether ``value`` is a package/dependency identifier."""
    return isinstance(value, str) and _NAME_RE.fullmatch(value) is not None


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _quoted(values: tuple[str, ...]) -> str:
    return " or ".join(f"'{v}'" for v in values)


def check_package(record: Any) -> ValidationError | None:
    """Return the first rule ``record`` violates, or None if it passes.

    Args:
        record: Raw mapping from the YAML deserializer.
    """
    if not isinstance(record, dict):
        return ValidationError(
            "format",
            f"Package definition must be a mapping, got {type(record).__name__}",
        )

    if not is_valid_name(record.get("name")):
        return ValidationError("name", f"Package name must consist of {_CHARSET}")

    url = record.get("url")
    if not isinstance(url, str) or not _URL_RE.match(url):
        return ValidationError("url", "Package url must start with http(s)://")

    if not _non_empty(record.get("description")):
        return ValidationError("description", "Package description must not be empty")

    environments = record.get("environments")
    if not isinstance(environments, list) or not environments:
        return ValidationError("environments", "Package environments must not be empty")

    for index, env in enumerate(environments):
        error = _check_environment(env, index)
        if error is not None:
            return error

    return None


def _check_environment(env: Any, index: int) -> ValidationError | None:
    if not isinstance(env, dict):
        return ValidationError("format", "Environment must be a mapping", index)

    if env.get("architecture") not in VALID_ARCHITECTURES:
        return ValidationError(
            "architecture",
            f"Package architecture must be {_quoted(VALID_ARCHITECTURES)}",
            index,
        )

    if env.get("platform") not in VALID_PLATFORMS:
        return ValidationError(
            "platform",
            f"Package platform must be {_quoted(VALID_PLATFORMS)}",
            index,
        )

    dependencies = env.get("dependencies") or []
    if not isinstance(dependencies, list) or not all(
        is_valid_name(d) for d in dependencies
    ):
        return ValidationError(
            "dependencies",
            f"Package dependencies must consist of {_CHARSET}",
            index,
        )

    if not _non_empty(env.get("verification")):
        return ValidationError(
            "verification", "Package verification must not be empty", index,
        )

    if not _non_empty(env.get("script")):
        return ValidationError("script", "Package script must not be empty", index)

    return None


def validate_package(record: Any) -> Package:
    """Lint ``record`` and build the immutable ``Package``.

    Raises:
        ValidationError: First violated rule, or ``format`` when the
            fields have the right values but the wrong types (e.g. a
            non-boolean ``privilege``).
    """
    error = check_package(record)
    if error is not None:
        raise error

    try:
        return Package.model_validate(record)
    except PydanticValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(part) for part in first["loc"])
        raise ValidationError("format", f"Invalid field '{where}': {first['msg']}") from e
