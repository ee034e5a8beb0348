"""CLI interface for approute using Typer framework."""

import logging
import time
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from approute import __description__, __version__
from approute.catalog import load_catalog
from approute.config import ApprouteConfig, OutputFormat, load_config
from approute.errors import ApprouteError, CatalogError
from approute.graph import create_default_generator
from approute.graph.models import AppGraph
from approute.query import RouteQuery, budget_from_config, discover_routes, resolve_endpoint

app = typer.Typer(
    name="approute",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"approute version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """approute - discover and diagram business routes between applications."""


def _setup_logging(level: str, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVELS.get(level, logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load(config: Path | None, catalog: Path | None, verbose: bool = False) -> tuple[ApprouteConfig, AppGraph]:
    """Load configuration and catalog, exiting with an error message on failure."""
    try:
        approute_config = load_config(config)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    _setup_logging(approute_config.logging.level, verbose)

    catalog_path = catalog or Path(approute_config.catalog.path)
    try:
        graph = load_catalog(catalog_path)
    except CatalogError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    return approute_config, graph


@app.command()
def routes(
    route: Annotated[
        Optional[str],
        typer.Option("--route", "-r", help="Route tag to follow")
    ] = None,
    start: Annotated[
        Optional[str],
        typer.Option("--start", "-s", help="Start application (name, app id or index)")
    ] = None,
    goal: Annotated[
        Optional[str],
        typer.Option("--goal", "-g", help="Goal application (name, app id or index)")
    ] = None,
    catalog: Annotated[
        Optional[Path],
        typer.Option("--catalog", help="Catalog JSON file (default: catalog.path from config)")
    ] = None,
    format: Annotated[
        Optional[OutputFormat],
        typer.Option("--format", "-f", help="Output format: mermaid, json (default: output.format from config)")
    ] = None,
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output file path, relative to output.dir (default: stdout)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .approute.json)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log traversal details")
    ] = False,
) -> None:
    """Find routes tagged with a route name and render them."""
    approute_config, graph = _load(config, catalog, verbose)
    format_name = format.value if format else approute_config.output.format

    query = RouteQuery(start=start, goal=goal, route_tag=route)
    try:
        found = discover_routes(graph, query, budget_from_config(approute_config.search))
        start_index = resolve_endpoint(graph, start, "start")
        goal_index = resolve_endpoint(graph, goal, "goal")
    except ApprouteError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not found:
        err_console.print("[yellow]No routes found[/yellow]")

    generator = create_default_generator(approute_config)
    rendered = generator.render(
        graph, found, format_name, route_tag=route or None, start=start_index, goal=goal_index
    )

    if out:
        # Relative paths land in output.dir
        output_file = (Path(approute_config.output.dir) / out).resolve()
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(rendered)
        err_console.print(f"[green]Routes written:[/green] {output_file} ({len(found)} routes)")
    else:
        typer.echo(rendered)


@app.command()
def apps(
    catalog: Annotated[
        Optional[Path],
        typer.Option("--catalog", help="Catalog JSON file (default: catalog.path from config)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .approute.json)")
    ] = None,
) -> None:
    """List applications and route tags in the catalog."""
    _, graph = _load(config, catalog)

    table = Table(title=f"Applications ({len(graph)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("App ID")
    table.add_column("Category")
    table.add_column("Outgoing", justify="right")

    for application in graph.applications:
        table.add_row(
            str(application.index),
            application.name,
            application.app_id or "",
            application.category or "",
            str(len(graph.outgoing(application.index))),
        )

    console.print(table)

    tags = sorted(graph.route_tags())
    if tags:
        console.print(f"[blue]Route tags:[/blue] {', '.join(tags)}")
    else:
        console.print("[dim]No route tags in catalog[/dim]")


@app.command()
def api(
    catalog: Annotated[
        Optional[Path],
        typer.Option("--catalog", help="Catalog JSON file (default: catalog.path from config)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .approute.json)")
    ] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Override port from config")] = None,
    bind: Annotated[Optional[str], typer.Option("--bind", help="Override bind address from config")] = None,
) -> None:
    """Serve route queries over HTTP until interrupted."""
    from approute.api import ApiError, start_api_server

    approute_config, graph = _load(config, catalog)

    try:
        if port is not None or bind is not None:
            overrides = approute_config.api.model_dump()
            if port is not None:
                overrides["port"] = port
            if bind is not None:
                overrides["bind"] = bind
            approute_config.api = type(approute_config.api)(**overrides)

        server = start_api_server(approute_config, graph)
    except ApiError as e:
        err_console.print(f"[red]API Error:[/red] {e.detail}")
        raise typer.Exit(e.status_code // 100)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]approute API listening on[/green] http://{approute_config.api.bind}:{server.actual_port}"
    )
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Shutting down API server...[/yellow]")
        server.stop()


if __name__ == "__main__":
    app()
