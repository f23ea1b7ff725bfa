"""
Mopm — CLI entrypoint.

Usage:
    mopm --help
    mopm search <name>
    mopm install <name>
    python -m mopm.main environment
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from mopm import __version__
from mopm.core.models.command import (
    Command,
    EnvironmentCommand,
    InstallCommand,
    LintCommand,
    SearchCommand,
    UpdateCommand,
    VerifyCommand,
)
from mopm.core.observability.logging_config import resolve_level, setup_logging
from mopm.core.use_cases.dispatch import run_command
from mopm.core.use_cases.runtime import CommandResult, Runtime


@click.group()
@click.version_option(version=__version__, prog_name="mopm")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--repos-file",
    "repos_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Repository list file (default: ~/.mopm-repos).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    repos_file: str | None,
) -> None:
    """Mopm (Manager Of Package Managers) — meta package manager for cross platform environments."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["repos_file"] = Path(repos_file) if repos_file else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("MOPM_LOG_LEVEL"),
        ),
        log_file=os.environ.get("MOPM_LOG_FILE"),
        log_file_level=os.environ.get("MOPM_LOG_FILE_LEVEL"),
    )


def _runtime(ctx: click.Context) -> Runtime:
    """Build the runtime; tests inject fakes through ``ctx.obj``."""
    obj = ctx.obj
    if "runtime" not in obj:
        from mopm.adapters.shell.bash import BashExecutor
        from mopm.adapters.vcs.git import GitAdapter

        obj["runtime"] = Runtime(
            executor=obj.get("executor") or BashExecutor(),
            vcs=obj.get("vcs") or GitAdapter(),
            machine=obj.get("machine"),
            repos_file=obj.get("repos_file"),
        )
    return obj["runtime"]


def _execute(ctx: click.Context, command: Command, as_json: bool = False) -> None:
    """Run a command, print its result, exit 1 on failure."""
    result = run_command(command, _runtime(ctx))
    _emit(ctx, result, as_json)
    if not result.ok:
        sys.exit(1)


def _emit(ctx: click.Context, result: CommandResult, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    for line in result.output:
        click.echo(line)

    if not result.message:
        return
    if not result.ok:
        click.secho(f"❌ {result.message}", fg="red", err=True)
    elif not ctx.obj.get("quiet", False):
        click.echo(result.message, err=True)


# ── Commands ────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def search(ctx: click.Context, name: str, as_json: bool) -> None:
    """Search package definitions."""
    _execute(ctx, SearchCommand(name=name, color=not as_json), as_json)


@cli.command()
@click.pass_context
def update(ctx: click.Context) -> None:
    """Download the latest package definition files."""
    _execute(ctx, UpdateCommand())


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def lint(ctx: click.Context, path: str, as_json: bool) -> None:
    """Check the format of a package definition file."""
    _execute(ctx, LintCommand(path=path), as_json)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def environment(ctx: click.Context, as_json: bool) -> None:
    """Show the machine environment id."""
    _execute(ctx, EnvironmentCommand(), as_json)


@cli.command()
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def verify(ctx: click.Context, name: str, as_json: bool) -> None:
    """Verify whether the package is installed."""
    _execute(ctx, VerifyCommand(name=name), as_json)


@cli.command()
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, name: str, as_json: bool) -> None:
    """Install the package."""
    _execute(ctx, InstallCommand(name=name), as_json)


cli.add_command(environment, name="env")
cli.add_command(verify, name="vrf")


if __name__ == "__main__":
    cli()
