"""
Machine detection — derive the machine environment id.

Read-only probes of the running machine.  Called once per invocation
by the CLI; everything downstream receives the resulting
``MachineContext`` rather than querying ``os`` or ``platform`` again.
"""

from __future__ import annotations

import getpass
import logging
import os
import platform as _platform
from pathlib import Path

from mopm.core.errors import ConfigurationError
from mopm.core.models.machine import MachineContext

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")

# uname -m style → the names definitions use (amd64, arm64, ...)
ARCH_MAP = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "i386": "386",
    "i686": "386",
}


def detect_architecture(machine: str | None = None) -> str:
    """Normalize the instruction-set name; unknown names pass through."""
    raw = (machine if machine is not None else _platform.machine()).lower()
    return ARCH_MAP.get(raw, raw)


def parse_os_release(content: str) -> str | None:
    """Extract the distribution ``NAME`` from os-release content.

    Returns the lower-cased, trimmed name, or None if the field is
    absent or empty.
    """
    for line in content.splitlines():
        line = line.strip()
        if not line.startswith("NAME="):
            continue
        value = line[len("NAME="):].strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        value = value.strip().lower()
        return value or None
    return None


def detect_platform(
    system: str | None = None,
    os_release: Path = OS_RELEASE_PATH,
) -> str:
    """Platform string: ``darwin``, ``linux/<distro>`` or bare ``linux``.

    Raises:
        ConfigurationError: The machine is Linux but os-release cannot
            be read or decoded.
    """
    system = (system if system is not None else _platform.system()).lower()
    if system != "linux":
        return system

    try:
        content = os_release.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read {os_release} in spite of the machine being linux: {e}"
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"{os_release} is not valid UTF-8: {e}") from e

    distro = parse_os_release(content)
    if distro is None:
        logger.warning("No distribution NAME in %s, using plain 'linux'", os_release)
        return "linux"
    return f"linux/{distro}"


def _username() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


def detect_machine(
    os_release: Path = OS_RELEASE_PATH,
    environ: dict[str, str] | None = None,
) -> MachineContext:
    """Capture the machine context for this run."""
    env = os.environ if environ is None else environ
    machine = MachineContext(
        architecture=detect_architecture(),
        platform=detect_platform(os_release=os_release),
        privileged=os.geteuid() == 0,
        sudo_user=env.get("SUDO_USER") or None,
        username=_username(),
    )
    logger.debug(
        "Machine: %s privileged=%s sudo_user=%s",
        machine.environment_id, machine.privileged, machine.sudo_user,
    )
    return machine
