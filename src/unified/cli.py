# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from unified.builder import build
from unified.constants import SCRIPTS_FILE
from unified.errors import ScriptsError
from unified.loader import find_scripts_file, load_package_scripts
from unified.model import find_task, iter_tasks
from unified.ui.console import Console, set_console, get_console


def discover_scripts(config_arg: str | None) -> Path | None:
    """
    Resolve the package-scripts file to load.

    Args:
        config_arg: Optional --config argument from CLI

    Returns:
        Path to the file, or None when the defaults should be used

    Raises:
        SystemExit: If an explicit --config does not exist
    """
    console = get_console()

    if config_arg:
        config_path = Path(config_arg)
        if not config_path.exists() and config_path.suffix != ".py":
            config_path = Path(str(config_path) + ".py")
        if not config_path.exists():
            console.print_error(
                "Package scripts file not found",
                f"Could not find package scripts file: {config_arg}",
                suggestion=f"Create {SCRIPTS_FILE} or specify a different path:\n  unified list --config my-scripts.py",
            )
            sys.exit(1)
        return config_path

    found = find_scripts_file(".")
    if found is None:
        console.print_debug(f"No {SCRIPTS_FILE} found, using default scripts")
    return found


def render_tree(config: str | None, self_build: bool | None) -> dict:
    """
    Load (or default) and build the tree for one command.

    self_build is None unless --self-build/--no-self-build was given, in which
    case it overrides SELF_BUILD in the package scripts file.
    """
    console = get_console()
    path = discover_scripts(config)
    if path is None:
        return build(None, self_build=bool(self_build))
    console.print_debug(f"Loading package scripts from {path} (self-build={self_build})")
    return load_package_scripts(path, self_build=self_build)


def _fail(exc: Exception) -> None:
    console = get_console()
    if isinstance(exc, ScriptsError):
        console.print_error(exc.kind, exc.message, details=[f"{k}: {v}" for k, v in exc.details.items()])
    else:
        console.print_exception(exc)
    sys.exit(1)


config_option = click.option(
    "--config",
    default=None,
    help=f"Package scripts file (defaults to {SCRIPTS_FILE} if present)",
)
self_build_option = click.option(
    "--self-build/--no-self-build",
    default=None,
    help="Invoke tools by their plain names instead of the unified.* aliases "
    "(defaults to SELF_BUILD in the package scripts file, else off)",
)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
def cli(debug):
    """unified — generated build, test and release scripts."""
    set_console(Console(debug=debug))


@cli.command("list")
@config_option
@self_build_option
def list_tasks(config, self_build):
    """List every task with its description."""
    try:
        tree = render_tree(config, self_build)
        source = config or (SCRIPTS_FILE if find_scripts_file(".") else "defaults")
        get_console().print_header(f"Tasks ({source})")
        get_console().print_tasks(iter_tasks(tree.get("scripts", {})))
    except Exception as e:
        _fail(e)


@cli.command()
@click.argument("name")
@config_option
@self_build_option
def show(name, config, self_build):
    """Print the command string of task NAME (dotted, e.g. build.watch)."""
    try:
        tree = render_tree(config, self_build)
        descriptor = find_task(tree.get("scripts", {}), name)
        get_console().print_script(descriptor["script"])
    except Exception as e:
        _fail(e)


@cli.command()
@config_option
@self_build_option
def dump(config, self_build):
    """Print the whole rendered tree as JSON."""
    try:
        tree = render_tree(config, self_build)
        get_console().print_json(tree)
    except Exception as e:
        _fail(e)


if __name__ == "__main__":
    cli()
