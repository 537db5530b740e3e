#!/usr/bin/env python3
"""techbadges - SVG badge grids for your tech stack."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from techbadges.config.aliases import aliases_for
from techbadges.config.constants import ICONS_PER_LINE
from techbadges.config.settings import CACHE_BACKENDS, ENVIRONMENTS, ServerConfig
from techbadges.errors import ErrorKind, ValidationError
from techbadges.registry import IconRegistry, load_registry
from techbadges.resolver import resolve_icon_names, validate_per_line, validate_theme
from techbadges.resources import get_sample_registry
from techbadges.svg import generate_svg

app = typer.Typer(
    name="techbadges",
    help="Render and serve SVG badge grids for your tech stack",
    add_completion=True,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()
err_console = Console(stderr=True)


def default_config_path() -> Path:
    return Path.home() / ".techbadges" / "config.yaml"


def info(text: str) -> str:
    return f"[cyan]{text}[/cyan]"


def error(text: str) -> str:
    return f"[red]{text}[/red]"


def success(text: str) -> str:
    return f"[green]{text}[/green]"


def warning(text: str) -> str:
    return f"[yellow]{text}[/yellow]"


def _load_config(config_path: Optional[Path]) -> ServerConfig:
    path = config_path or default_config_path()
    try:
        return ServerConfig.from_yaml(path)
    except (ValueError, yaml.YAMLError) as e:
        err_console.print(error(f"Invalid config {path}: {e}"))
        raise typer.Exit(code=1)


def _load_registry(registry_path: Optional[str]) -> IconRegistry:
    """Load the registry at registry_path, or the bundled sample."""
    if not registry_path:
        return get_sample_registry()
    try:
        return load_registry(Path(registry_path))
    except (FileNotFoundError, ValueError) as e:
        err_console.print(error(str(e)))
        raise typer.Exit(code=1)


async def _run_server(server) -> None:
    """Start the server and keep it running until cancelled."""
    cfg = server.config
    port = await server.start()
    console.print(
        success(f"Serving {len(server.registry)} icons on http://{cfg.host}:{port}")
        + f" [dim]({cfg.environment}, cache={cfg.cache_backend})[/dim]"
    )

    try:
        while True:
            await asyncio.sleep(3600)
    except asyncio.CancelledError:
        pass
    finally:
        await server.stop()


@app.command()
def serve(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", envvar="TECHBADGES_CONFIG", help="YAML config file"
    ),
    host: Optional[str] = typer.Option(None, "--host", envvar="TECHBADGES_HOST", help="Interface to bind"),
    port: Optional[int] = typer.Option(None, "--port", "-p", envvar="TECHBADGES_PORT", help="Port to listen on"),
    registry: Optional[str] = typer.Option(
        None, "--registry", "-r", envvar="TECHBADGES_REGISTRY", help="icons.json file or directory of SVGs"
    ),
    environment: Optional[str] = typer.Option(
        None, "--env", "-e", envvar="TECHBADGES_ENV", help=f"One of: {', '.join(ENVIRONMENTS)}"
    ),
    cache_backend: Optional[str] = typer.Option(
        None, "--cache", envvar="TECHBADGES_CACHE", help=f"One of: {', '.join(CACHE_BACKENDS)}"
    ),
    analytics: Optional[bool] = typer.Option(
        None, "--analytics/--no-analytics", help="Log usage events"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run the badge HTTP server.

    [bold cyan]EXAMPLES[/bold cyan]:
      [dim]$[/dim] techbadges serve
      [dim]$[/dim] techbadges serve -r dist/icons.json -p 8080 --cache redis
    """
    from techbadges.analytics import LoggingAnalytics
    from techbadges.cache import create_svg_cache
    from techbadges.logs import configure_logging
    from techbadges.server import BadgeServer

    cfg = _load_config(config_path)
    overrides = {
        "host": host,
        "port": port,
        "registry_path": registry,
        "environment": environment,
        "cache_backend": cache_backend,
        "analytics_enabled": analytics,
    }
    data = cfg.to_dict()
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        cfg = ServerConfig.from_dict(data)
    except ValueError as e:
        err_console.print(error(str(e)))
        raise typer.Exit(code=1)

    configure_logging(verbose)
    icon_registry = _load_registry(cfg.registry_path)

    server = BadgeServer(
        icon_registry,
        config=cfg,
        svg_cache=create_svg_cache(cfg),
        analytics=LoggingAnalytics() if cfg.analytics_enabled else None,
    )

    try:
        asyncio.run(_run_server(server))
    except KeyboardInterrupt:
        pass
    except OSError as e:
        err_console.print(error(f"Could not start server: {e}"))
        raise typer.Exit(code=1)


@app.command()
def render(
    icons: str = typer.Argument(..., help='Comma-separated icon names, or "all"'),
    theme: Optional[str] = typer.Option(None, "--theme", "-t", help="dark or light"),
    per_line: Optional[str] = typer.Option(None, "--perline", "-n", help="Icons per row (1-50)"),
    registry: Optional[str] = typer.Option(
        None, "--registry", "-r", envvar="TECHBADGES_REGISTRY", help="icons.json file or directory of SVGs"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
) -> None:
    """Render a badge grid to stdout or a file.

    [bold cyan]EXAMPLES[/bold cyan]:
      [dim]$[/dim] techbadges render js,ts,react > stack.svg
      [dim]$[/dim] techbadges render python,docker -t light -n 1 -o stack.svg
    """
    icon_registry = _load_registry(registry)
    index = icon_registry.index
    icon_param = index.all_icons_param() if icons == "all" else icons

    try:
        validated_theme = validate_theme(theme)
        validated_per_line = validate_per_line(per_line, ICONS_PER_LINE)
        icon_names = resolve_icon_names(
            icon_param, validated_theme, index.available_icons, index.themed_icons
        )
        if not icon_names:
            raise ValidationError(ErrorKind.NO_VALID_ICONS)
    except ValidationError as e:
        err_console.print(error(e.message))
        raise typer.Exit(code=1)

    svg = generate_svg(icon_names, icon_registry.icons, validated_per_line)

    if output:
        output.write_text(svg, encoding="utf-8")
        err_console.print(success(f"Wrote {len(icon_names)} icons to {output}"))
    else:
        sys.stdout.write(svg + "\n")


@app.command(name="icons")
def list_icons(
    registry: Optional[str] = typer.Option(
        None, "--registry", "-r", envvar="TECHBADGES_REGISTRY", help="icons.json file or directory of SVGs"
    ),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Only names containing this text"),
) -> None:
    """List available icons with their themes and aliases."""
    icon_registry = _load_registry(registry)
    index = icon_registry.index

    names = [name for name in index.icon_name_list if not search or search.lower() in name]
    if not names:
        console.print(warning("No icons found"))
        return

    table = Table(title=f"Icons ({len(names)})")
    table.add_column("Name", style="cyan")
    table.add_column("Themed")
    table.add_column("Aliases", style="dim")

    for name in names:
        themed = "yes" if name in index.themed_icons else ""
        table.add_row(name, themed, ", ".join(aliases_for(name)))

    console.print(table)


@app.command()
def config(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", envvar="TECHBADGES_CONFIG", help="YAML config file"
    ),
    init: bool = typer.Option(False, "--init", help="Write a config file with default values"),
) -> None:
    """Show the server configuration, or write a default one.

    [bold cyan]EXAMPLES[/bold cyan]:
      [dim]$[/dim] techbadges config
      [dim]$[/dim] techbadges config --init -c ./techbadges.yaml
    """
    path = config_path or default_config_path()

    if init:
        if path.exists():
            console.print(warning(f"{path} already exists, leaving it unchanged"))
            raise typer.Exit(code=1)
        ServerConfig().save_yaml(path)
        console.print(success(f"Wrote default configuration to {path}"))
        return

    cfg = _load_config(path)
    source = str(path) if path.exists() else f"{path} (not found, using defaults)"
    console.print(info(f"Configuration: {source}"))

    table = Table(show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in cfg.to_dict().items():
        table.add_row(key, "[dim]null[/dim]" if value is None else str(value))
    console.print(table)


def cli() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    cli()
