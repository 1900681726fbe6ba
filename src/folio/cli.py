"""CLI interface for folio."""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from folio.config import FolioConfig, load_config, merge_cli_overrides
from folio.content.loader import by_date_desc, load_collection, slugify
from folio.content.parser import serialize_front_matter
from folio.errors import FolioError
from folio.site import build_site

app = typer.Typer(
    name="folio",
    help="Build a static blog and portfolio site from Markdown posts.",
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .folio.toml file."),
]
ContentOption = Annotated[
    Optional[Path],
    typer.Option("--content", help="Content directory (posts, experience.json, about.md)."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from folio import __version__

        console.print(f"folio {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _resolve_config(config_path: Optional[Path], **overrides: object) -> FolioConfig:
    config = load_config(config_path)
    return merge_cli_overrides(config, **overrides)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Folio - static blog and portfolio builder."""
    pass


@app.command()
def build(
    config_path: ConfigOption = None,
    content: ContentOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output directory. Defaults to ./public/"),
    ] = None,
    templates: Annotated[
        Optional[Path],
        typer.Option("--templates", help="Directory of layout templates overriding the defaults."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log every file read and written."),
    ] = False,
) -> None:
    """Render all posts, the index and the About page."""
    _setup_logging(verbose)

    try:
        config = _resolve_config(
            config_path,
            content_directory=content,
            output_directory=output,
            templates_directory=templates,
        )
        report = build_site(config)
    except FolioError as exc:
        console.print(f"[red]Build failed:[/red] {escape(str(exc))}", soft_wrap=True)
        console.print("Nothing was written.")
        raise typer.Exit(1) from exc

    console.print(
        f"[green]Built {report.page_count} page(s)[/green] "
        f"({len(report.posts)} post(s), {report.experience_count} experience record(s))"
    )
    console.print(f"Output written to: {report.output_dir}", soft_wrap=True)


@app.command()
def posts(
    config_path: ConfigOption = None,
    content: ContentOption = None,
) -> None:
    """List posts, newest first."""
    _setup_logging(False)

    try:
        config = _resolve_config(config_path, content_directory=content)
        items = load_collection(
            config.content.posts_path, config.content.extension, sort_key=by_date_desc
        )
    except FolioError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(1) from exc

    if not items:
        console.print("[yellow]No posts found.[/yellow]")
        console.print(f"Searched in: {config.content.posts_path}")
        return

    table = Table(title=f"{len(items)} post(s)")
    table.add_column("Date")
    table.add_column("Slug")
    table.add_column("Title")
    for item in items:
        table.add_row(item.metadata.date_formatted or "-", item.slug, item.metadata.title)
    console.print(table)


@app.command()
def new(
    title: Annotated[str, typer.Argument(help="Post title.")],
    description: Annotated[
        str,
        typer.Option("--description", "-d", help="One-line summary shown on the index."),
    ] = "",
    date_formatted: Annotated[
        Optional[str],
        typer.Option("--date", help="Display date, e.g. 'Jan 1, 2020'. Defaults to today."),
    ] = None,
    config_path: ConfigOption = None,
    content: ContentOption = None,
) -> None:
    """Create a new post file with a front-matter block."""
    try:
        config = _resolve_config(config_path, content_directory=content)
    except FolioError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(1) from exc

    posts_dir = config.content.posts_path
    slug = slugify(title)
    target = posts_dir / f"{slug}{config.content.extension}"

    if target.exists():
        console.print(f"[red]Error:[/red] {target} already exists", soft_wrap=True)
        raise typer.Exit(1)

    today = date.today()
    shown_date = date_formatted or f"{today:%b} {today.day}, {today.year}"
    front_matter = serialize_front_matter(
        {
            "layout": "post",
            "title": title,
            "description": description,
            "dateFormatted": shown_date,
        }
    )
    posts_dir.mkdir(parents=True, exist_ok=True)
    target.write_text(f"{front_matter}\n# {title}\n", encoding="utf-8")
    console.print(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
