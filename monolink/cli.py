"""Click CLI with link, clone, grpc, create and menu subcommands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import click

from monolink import __version__
from monolink.config import load_workspace_config
from monolink.context import RunContext
from monolink.errors import MonolinkError
from monolink.models import MaterializeMode, RepoKind
from monolink.pipeline import run_codegen, run_materialize
from monolink.scaffold import create_repo

_MENU = [
    ("link", "Link dependencies (development mode)"),
    ("grpc", "Generate gRPC stubs"),
    ("clone", "Clone dependencies (production mode)"),
    ("create-app", "Create new template app"),
    ("create-package", "Create new template package"),
    ("exit", "Exit"),
]


def _make_context(root: Path, keep_going: bool = False) -> RunContext:
    config = load_workspace_config(root)
    if keep_going:
        config.keep_going = True
    return RunContext(root=root, config=config)


def _report(context: RunContext) -> None:
    for diag in context.diagnostics:
        color = "yellow" if diag.level == "warning" else "red"
        click.echo(click.style(f"  {diag.level}: {diag.message}", fg=color), err=True)
    counts = context.summary()
    if counts["warnings"] or counts["errors"]:
        click.echo(f"{counts['warnings']} warning(s), {counts['errors']} error(s)", err=True)


def _run(root: Path, action: Callable[[RunContext], object], keep_going: bool = False) -> RunContext:
    """Run one pipeline action, turning engine errors into a non-zero exit."""
    try:
        context = _make_context(root, keep_going)
        action(context)
    except MonolinkError as e:
        raise click.ClickException(str(e))
    _report(context)
    if not context.ok:
        raise click.ClickException("Run finished with errors")
    return context


def _create(root: Path, kind: RepoKind, name: str) -> None:
    try:
        context = _make_context(root)
        path = create_repo(kind, name, context)
    except (MonolinkError, ValueError) as e:
        raise click.ClickException(str(e))
    if path is None:
        raise click.ClickException(f'{kind.value} "{name}" already exists')
    click.echo(f"Created {path}")


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option("--root", "-C", type=click.Path(file_okay=False, path_type=Path), default=".",
              help="Monorepo root containing apps/ and packages/")
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
@click.pass_context
def cli(ctx: click.Context, root: Path, verbose: bool):
    """monolink: Link, clone and generate stubs across a polyglot monorepo."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")
    ctx.obj = {"root": root}
    if ctx.invoked_subcommand is None:
        ctx.invoke(menu)


@cli.command()
@click.option("--keep-going", is_flag=True, help="Continue past failed edges")
@click.pass_obj
def link(obj: dict, keep_going: bool):
    """Symlink every dependency into its consumers (development mode)."""
    _run(obj["root"], lambda c: run_materialize(c, MaterializeMode.LINK), keep_going=keep_going)


@cli.command()
@click.option("--keep-going", is_flag=True, help="Continue past failed edges")
@click.pass_obj
def clone(obj: dict, keep_going: bool):
    """Copy every dependency into its consumers (production mode)."""
    _run(obj["root"], lambda c: run_materialize(c, MaterializeMode.COPY), keep_going=keep_going)


@cli.command()
@click.pass_obj
def grpc(obj: dict):
    """Generate gRPC server and client stubs."""
    _run(obj["root"], run_codegen)


@cli.command("create-app")
@click.argument("name")
@click.pass_obj
def create_app(obj: dict, name: str):
    """Scaffold a new app."""
    _create(obj["root"], RepoKind.APP, name)


@cli.command("create-package")
@click.argument("name")
@click.pass_obj
def create_package(obj: dict, name: str):
    """Scaffold a new package."""
    _create(obj["root"], RepoKind.PACKAGE, name)


@cli.command()
@click.pass_context
def menu(ctx: click.Context):
    """Interactive chooser; returns here after every action."""
    root = ctx.obj["root"]
    commands = {
        "link": lambda: _run(root, lambda c: run_materialize(c, MaterializeMode.LINK)),
        "grpc": lambda: _run(root, run_codegen),
        "clone": lambda: _run(root, lambda c: run_materialize(c, MaterializeMode.COPY)),
        "create-app": lambda: _create(root, RepoKind.APP, _prompt_name("app")),
        "create-package": lambda: _create(root, RepoKind.PACKAGE, _prompt_name("package")),
    }

    while True:
        click.echo("\n🛠️  Polyglot Monorepo CLI\n")
        for key, label in _MENU:
            click.echo(f"  {click.style(key, fg='cyan'):<25} {label}")
        action = click.prompt(
            "\nWhat would you like to do?",
            type=click.Choice([key for key, _ in _MENU]),
            show_choices=False,
        )
        if action == "exit":
            click.echo("Goodbye! 👋")
            return
        try:
            commands[action]()
        except click.ClickException as e:
            e.show()


def _prompt_name(kind: str) -> str:
    while True:
        name = click.prompt(f"Enter {kind} name", default="", show_default=False)
        if name.strip():
            return name
        click.echo("Name cannot be empty")


if __name__ == "__main__":
    cli()
