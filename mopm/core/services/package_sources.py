"""
Package sources — read definition files from the repository clones.

A definition that is missing, unreadable or fails lint is excluded
from the match set and the search continues with the next repository.
Invalid ones are logged at WARNING so authoring mistakes are visible
without running ``mopm lint``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import yaml

from mopm.core.config.loader import definition_path, repository_path
from mopm.core.errors import (
    NotFoundError,
    SourceIOError,
    ValidationError,
)
from mopm.core.models.package import PackageFile
from mopm.core.services.lint import is_valid_name, validate_package

logger = logging.getLogger(__name__)


def read_package_file(path: Path) -> PackageFile:
    """Parse and lint one definition file.

    Raises:
        NotFoundError: The file does not exist.
        SourceIOError: The file exists but cannot be read.
        ValidationError: Not UTF-8, invalid YAML, or a lint rule failed.
    """
    if not path.is_file():
        raise NotFoundError(f"The package does not exist: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SourceIOError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ValidationError("format", f"Definition file is not valid UTF-8: {path}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValidationError("format", f"Failed to parse yaml file: {path}: {e}") from e

    package = validate_package(data)
    return PackageFile(package=package, path=str(path))


def check_package_name(name: str) -> None:
    """Reject names that cannot be a definition file name.

    Raises:
        NotFoundError: ``name`` is outside the package name charset.
    """
    if not is_valid_name(name):
        raise NotFoundError(
            f"Invalid package name '{name}': must consist of a-z, 0-9 and -(hyphen)"
        )


def find_package_files(
    name: str,
    repositories: Sequence[str],
    clone_root: Path,
) -> list[PackageFile]:
    """All valid definitions of ``name``, in repository order."""
    check_package_name(name)

    found: list[PackageFile] = []
    for url in repositories:
        path = definition_path(repository_path(url, clone_root), name)
        try:
            found.append(read_package_file(path))
        except NotFoundError:
            logger.debug("No definition of %s in %s", name, url)
        except ValidationError as e:
            logger.warning("Skipping invalid definition %s: %s", path, e)
    return found
