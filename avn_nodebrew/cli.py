# avn_nodebrew/cli.py
from __future__ import annotations

import json
from pathlib import Path

import typer

from . import __version__
from .config import DEFAULT_CONFIG_PATH, ConfigError, ManagerConfig, load_config
from .manager import ExternalToolError, VersionManager
from .matcher import NoMatchError, find_version, list_versions, match as match_version

app = typer.Typer(help="Pick an installed nodebrew version for a semver range", invoke_without_command=True)

ERR_USAGE = "AVN001"
ERR_CONFIG_NOT_FOUND = "AVN002"
ERR_CONFIG_INVALID = "AVN003"
ERR_TOOL = "AVN101"
ERR_NO_MATCH = "AVN201"

CONFIG_OPTION = typer.Option(None, "--config", help=f"Config file (default: ./{DEFAULT_CONFIG_PATH} if present)")
MANAGER_OPTION = typer.Option(
    None,
    "--manager",
    envvar="AVN_NODEBREW_COMMAND",
    help="Version manager executable (overrides [manager].command)",
)


@app.callback()
def _root(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit", is_eager=True),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def _load_manager(config_path: str | None, manager_command: str | None) -> VersionManager:
    if config_path is None:
        default_path = Path(DEFAULT_CONFIG_PATH)
        path = default_path if default_path.exists() else None
    else:
        path = Path(config_path)

    try:
        cfg = load_config(path) if path is not None else ManagerConfig()
    except FileNotFoundError as e:
        typer.echo(f"[{ERR_CONFIG_NOT_FOUND}] Error: {e}", err=True)
        raise typer.Exit(code=2)
    except ConfigError as e:
        typer.echo(f"[{ERR_CONFIG_INVALID}] Config error: {e}", err=True)
        typer.echo(f"Fix: open {path} and correct the invalid field/type.", err=True)
        raise typer.Exit(code=2)

    if manager_command is not None:
        if not manager_command.strip():
            typer.echo(f"[{ERR_USAGE}] Error: --manager cannot be empty", err=True)
            raise typer.Exit(code=2)
        cfg.command = manager_command
    return VersionManager.from_config(cfg)


def _tool_error(e: ExternalToolError) -> typer.Exit:
    typer.echo(f"[{ERR_TOOL}] {e}", err=True)
    if e.returncode is None:
        typer.echo("Fix: check that the version manager is installed and on PATH.", err=True)
    return typer.Exit(code=3)


@app.command()
def match(
    specifier: str = typer.Argument(..., help='Requested version, e.g. "node@^4.0.0"'),
    json_output: bool = typer.Option(False, "--json", help="Print version and command as JSON"),
    config_path: str | None = CONFIG_OPTION,
    manager_command: str | None = MANAGER_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print diagnostics to stderr"),
) -> None:
    """
    Print the command that activates the best installed match.

    Exit codes:
      0 = matched
      1 = no installed version matches
      2 = config/usage error
      3 = version manager failed
    """
    manager = _load_manager(config_path, manager_command)
    if verbose:
        typer.echo(f"manager: {manager.command} (timeout: {manager.timeout})", err=True)

    try:
        result = match_version(specifier, manager)
    except ExternalToolError as e:
        raise _tool_error(e)
    except NoMatchError as e:
        typer.echo(f"[{ERR_NO_MATCH}] {e}", err=True)
        raise typer.Exit(code=1)

    if verbose:
        typer.echo(f"matched: {result.version}", err=True)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        typer.echo(result.command)
    raise typer.Exit(code=0)


@app.command("list")
def list_command(
    config_path: str | None = CONFIG_OPTION,
    manager_command: str | None = MANAGER_OPTION,
) -> None:
    """
    Print installed versions as the matcher sees them.
    """
    manager = _load_manager(config_path, manager_command)
    try:
        versions = list_versions(manager)
    except ExternalToolError as e:
        raise _tool_error(e)

    for version in versions:
        typer.echo(version)
    raise typer.Exit(code=0)


@app.command()
def find(
    specifier: str = typer.Argument(..., help='Requested version, e.g. "node@^4.0.0"'),
    versions: list[str] = typer.Argument(..., help="Candidate identifiers"),
) -> None:
    """
    Pick the best match from the given identifiers without running nodebrew.
    """
    use = find_version(versions, specifier)
    if use is None:
        typer.echo(f"[{ERR_NO_MATCH}] {NoMatchError(specifier)}", err=True)
        raise typer.Exit(code=1)
    typer.echo(use)
    raise typer.Exit(code=0)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
