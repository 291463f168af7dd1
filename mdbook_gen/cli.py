"""
Builds a paginated HTML book from a directory of Markdown chapters.
`init` scaffolds a new project; `build` renders it.
"""

from __future__ import annotations

from pathlib import Path

import click

from .book import init_project, render_book
from .config import ConfigError
from .exceptions import BuildError, ProjectExistsError

__all__ = ["cli"]


@click.group()
@click.version_option(package_name="mdbook-gen")
def cli():
    """Generate a static HTML book from Markdown chapters."""


@cli.command()
@click.argument("name")
def init(name: str):
    """
    Create a new book project in the directory NAME.

    Args:
        name: Directory to create under the current working directory.

    Raises:
        click.ClickException: If the directory already exists or cannot be
            written.

    Examples:
        mdbook-gen init my-book
    """
    click.echo(f"Creating new book project: {name}")
    try:
        project = init_project(name, Path.cwd())
    except ProjectExistsError as error:
        raise click.ClickException(str(error)) from error
    except OSError as error:
        raise click.ClickException(f"Cannot create {name}: {error}") from error

    click.echo("✅ Initialize success!")
    click.echo(f"Run: cd {project.name} && mdbook-gen build")


@cli.command()
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    show_default=True,
    help="Book project directory",
)
@click.option("--output", "output_dir", help="Output directory (overrides book.toml)")
def build(root: str, output_dir: str | None = None):
    """
    Build the book found in the project directory.

    Args:
        root: Project directory holding ``book.toml`` and ``book/``.
        output_dir: Override for the configured output directory.

    Raises:
        click.BadParameter: If the configuration is missing or invalid.
        click.ClickException: If chapters cannot be read or pages written.

    Examples:
        mdbook-gen build --output /tmp/book
    """
    root_path = Path(root).resolve()
    click.echo(f"Building book in: {root_path}")
    try:
        out_dir = render_book(
            root_path,
            output_dir=output_dir,
            warn=lambda message: click.echo(message, err=True),
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error
    except (BuildError, OSError, ValueError) as error:
        raise click.ClickException(str(error)) from error

    click.echo(f"✨ Book written to {out_dir}")


if __name__ == "__main__":
    cli()
