"""
Command variants — the closed set of things mopm can be asked to do.

Each command is a frozen model tagged by a literal ``kind``.  The CLI
builds one and hands it to ``use_cases.dispatch.run_command``, which
has exactly one handler per variant.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True)


class SearchCommand(_Command):
    kind: Literal["search"] = "search"
    name: str
    color: bool = False


class UpdateCommand(_Command):
    kind: Literal["update"] = "update"


class LintCommand(_Command):
    kind: Literal["lint"] = "lint"
    path: str


class EnvironmentCommand(_Command):
    kind: Literal["environment"] = "environment"


class VerifyCommand(_Command):
    kind: Literal["verify"] = "verify"
    name: str


class InstallCommand(_Command):
    kind: Literal["install"] = "install"
    name: str


Command = Annotated[
    Union[
        SearchCommand,
        UpdateCommand,
        LintCommand,
        EnvironmentCommand,
        VerifyCommand,
        InstallCommand,
    ],
    Field(discriminator="kind"),
]

_COMMAND_ADAPTER: TypeAdapter[Command] = TypeAdapter(Command)


def parse_command(data: dict) -> Command:
    """Build a command variant from a ``{"kind": ..., ...}`` mapping."""
    return _COMMAND_ADAPTER.validate_python(data)
