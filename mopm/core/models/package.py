"""
Package definition models — what a definition file declares.

A ``Package`` is only ever built by the lint service after every rule
has passed, so code holding one can trust its fields.  Models are
frozen: definitions are read fresh on each invocation and never
mutated afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


class Environment(BaseModel):
    """One (architecture, platform) install/verify recipe."""

    model_config = ConfigDict(frozen=True)

    architecture: str
    platform: str
    dependencies: tuple[str, ...] = ()
    verification: str
    privilege: StrictBool = False
    script: str

    @field_validator("dependencies", mode="before")
    @classmethod
    def _none_is_empty(cls, value: object) -> object:
        # `dependencies:` with no items parses as null
        return () if value is None else value

    @property
    def env_id(self) -> str:
        """The ``<architecture>@<platform>`` lookup key."""
        return f"{self.architecture}@{self.platform}"

    def label(self) -> str:
        """Short display form, e.g. ``amd64@darwin(need privilege)``."""
        suffix = "(need privilege)" if self.privilege else ""
        return f"{self.env_id}{suffix}"


class Package(BaseModel):
    """A validated package definition."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    description: str
    environments: tuple[Environment, ...] = Field(min_length=1)

    def get_environment(self, env_id: str) -> Environment | None:
        """First environment whose id equals ``env_id`` (declaration order)."""
        for env in self.environments:
            if env.env_id == env_id:
                return env
        return None


class PackageFile(BaseModel):
    """A validated package paired with the path it was read from."""

    model_config = ConfigDict(frozen=True)

    package: Package
    path: str

    def to_dict(self) -> dict:
        """JSON-serializable view used by ``search --json``."""
        return {
            "path": self.path,
            **self.package.model_dump(mode="json"),
        }
