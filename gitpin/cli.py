"""CLI commands for gitpin."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from gitpin.errors import GitPinError
from gitpin.models.state import DriftResult
from gitpin.project import Project

console = Console()

STATUS_STYLES = {
    DriftResult.OK: "green",
    DriftResult.MISMATCH: "yellow",
    DriftResult.OUTDATED: "red",
}


@click.group()
@click.option("--root", default=".", type=click.Path(file_okay=False), help="Project directory")
@click.option("--verbose", "-v", is_flag=True, help="Log git commands")
@click.pass_context
def main(ctx: click.Context, root: str, verbose: bool) -> None:
    """gitpin - Pin git dependencies to exact revisions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["project"] = Project(root)


def _names(project: Project, name: str | None) -> list[str]:
    if name:
        return [name]
    try:
        return project.names
    except GitPinError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show how each dependency relates to its lock entry."""
    project: Project = ctx.obj["project"]

    try:
        results = project.status()
    except GitPinError as e:
        raise click.ClickException(str(e)) from e

    table = Table(title="Dependency Status")
    table.add_column("Name", style="cyan")
    table.add_column("Source")
    table.add_column("Lock")
    table.add_column("Status", justify="center")

    for name, result in results.items():
        style = STATUS_STYLES[result]
        table.add_row(
            name,
            project.scm.format(project.spec(name)),
            project.scm.format_lock(project.lock(name)) or "-",
            f"[{style}]{result.value}[/{style}]",
        )

    console.print(table)


@main.command()
@click.argument("name", required=False)
@click.pass_context
def get(ctx: click.Context, name: str | None) -> None:
    """Fetch dependencies at their locked revisions."""
    project: Project = ctx.obj["project"]

    for dep in _names(project, name):
        try:
            entry = project.get(dep)
        except (GitPinError, KeyError) as e:
            raise click.ClickException(f"{dep}: {e}") from e
        console.print(f"[green]{dep}[/green] {project.scm.format_lock(entry)}")


@main.command()
@click.argument("name", required=False)
@click.pass_context
def update(ctx: click.Context, name: str | None) -> None:
    """Update dependencies to the newest revision their pin allows."""
    project: Project = ctx.obj["project"]

    for dep in _names(project, name):
        try:
            old = project.scm.format_lock(project.lock(dep))
            entry = project.update(dep)
        except (GitPinError, KeyError) as e:
            raise click.ClickException(f"{dep}: {e}") from e
        new = project.scm.format_lock(entry)
        if old == new:
            console.print(f"[dim]{dep} {new} (unchanged)[/dim]")
        else:
            console.print(f"[green]{dep}[/green] {old or '-'} -> {new}")


@main.command()
@click.pass_context
def lock(ctx: click.Context) -> None:
    """Show the lock entries of all dependencies."""
    project: Project = ctx.obj["project"]

    table = Table(title="Lock Entries")
    table.add_column("Name", style="cyan")
    table.add_column("Repository")
    table.add_column("Revision", style="green")

    for name in _names(project, None):
        try:
            entry = project.lock(name)
        except GitPinError as e:
            raise click.ClickException(f"{name}: {e}") from e
        if entry is None:
            table.add_row(name, "-", "[yellow]not locked[/yellow]")
        else:
            table.add_row(name, entry.repository, project.scm.format_lock(entry))

    console.print(table)


if __name__ == "__main__":
    main()
