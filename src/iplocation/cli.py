"""CLI interface for iplocation."""

import json
import logging
from pathlib import Path
from typing import List, Optional
import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text

from iplocation.config import IPLocationConfig, load_config, validate_config
from iplocation.errors import InitializationFailure, ResolutionFailure
from iplocation.geo import Location, LookupService, distance as ip_distance, get_database_info

app = typer.Typer(
    name="iplocation",
    help="Look up the location of IP addresses",
    add_completion=False,
)
console = Console()

EXIT_UNRESOLVED = 1
EXIT_CONFIG = 2


def _load_config(config_path: Optional[Path]) -> IPLocationConfig:
    """Load and validate the configuration, exiting on errors."""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(EXIT_CONFIG)

    warnings = validate_config(config)
    if warnings:
        for warning in warnings:
            console.print(f"[red]Config error: {warning}[/red]")
        raise typer.Exit(EXIT_CONFIG)
    return config


def _open_service(config: IPLocationConfig, db: Optional[Path]) -> LookupService:
    """Open the lookup service, exiting with a configuration error on failure."""
    db_path = db or Path(config.database.path)
    try:
        return LookupService(db_path, mode=config.database.mode)
    except InitializationFailure as e:
        console.print(f"[red]Database error: {e}[/red]")
        console.print("[yellow]Check the database path with 'iplocation info'[/yellow]")
        raise typer.Exit(EXIT_CONFIG)


def _output_format(config: IPLocationConfig, output_format: Optional[str]) -> str:
    fmt = output_format or config.output.format
    if fmt not in ("terminal", "json"):
        console.print(f"[red]Error: Unknown format: {fmt}[/red]")
        raise typer.Exit(EXIT_CONFIG)
    return fmt


def _display_locations_table(locations: List[Location]):
    """Display resolved locations in a rich table."""
    table = Table(title="IP Locations", show_lines=False)
    table.add_column("IP", style="yellow", no_wrap=True)
    table.add_column("Country", style="green")
    table.add_column("Region", style="cyan")
    table.add_column("City", style="cyan")
    table.add_column("Latitude", style="blue", justify="right")
    table.add_column("Longitude", style="blue", justify="right")
    table.add_column("Timezone", style="magenta")

    for loc in locations:
        table.add_row(
            loc.ip,
            loc.country or "N/A",
            loc.region or "N/A",
            loc.city or "N/A",
            f"{loc.latitude:.4f}" if loc.latitude is not None else "N/A",
            f"{loc.longitude:.4f}" if loc.longitude is not None else "N/A",
            loc.timezone or "N/A",
        )

    console.print(table)


@app.command()
def lookup(
    ips: List[str] = typer.Argument(..., help="IP addresses in dot format"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal or json"),
    db: Optional[Path] = typer.Option(None, "--db", help="Path to GeoLite2-City.mmdb"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to TOML config file"),
):
    """Look up the location of one or more IP addresses."""
    config = _load_config(config_path)
    fmt = _output_format(config, output_format)

    with _open_service(config, db) as service:
        locations = []
        failures = []
        for ip in ips:
            try:
                locations.append(Location(ip, service=service))
            except ResolutionFailure as e:
                failures.append(e)

        if fmt == "json":
            output = {
                "locations": [loc.to_dict() for loc in locations],
                "unresolved": [e.ip for e in failures],
            }
            console.print_json(json.dumps(output))
        else:
            if locations:
                _display_locations_table(locations)
            for e in failures:
                console.print(f"[red]Error: {e}[/red]")

    if failures:
        raise typer.Exit(EXIT_UNRESOLVED)


@app.command()
def distance(
    ipa: str = typer.Argument(..., help="First IP address"),
    ipb: str = typer.Argument(..., help="Second IP address"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal or json"),
    db: Optional[Path] = typer.Option(None, "--db", help="Path to GeoLite2-City.mmdb"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to TOML config file"),
):
    """Show the great-circle distance between two IP addresses."""
    config = _load_config(config_path)
    fmt = _output_format(config, output_format)

    with _open_service(config, db) as service:
        try:
            km = ip_distance(ipa, ipb, service=service)
        except ResolutionFailure as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(EXIT_UNRESOLVED)

    if fmt == "json":
        console.print_json(json.dumps({"from": ipa, "to": ipb, "distance_km": km}))
    else:
        console.print(f"{ipa} -> {ipb}: [bold]{km:.2f} km[/bold]")


@app.command()
def info(
    db: Optional[Path] = typer.Option(None, "--db", help="Path to GeoLite2-City.mmdb"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to TOML config file"),
):
    """Show the status of the GeoIP database."""
    config = _load_config(config_path)
    db_info = get_database_info(db or Path(config.database.path))

    info_text = Text()
    info_text.append("Path: ", style="bold")
    info_text.append(f"{db_info.path}\n")
    info_text.append("Status: ", style="bold")
    info_text.append(db_info.status, style="green" if db_info.exists else "red")

    if db_info.exists:
        info_text.append("\nSize: ", style="bold")
        info_text.append(f"{db_info.size_mb:.1f} MB")
        info_text.append("\nModified: ", style="bold")
        info_text.append(db_info.modified.strftime("%Y-%m-%d %H:%M:%S"))
        try:
            with LookupService(db_info.path, mode=config.database.mode) as service:
                info_text.append("\nType: ", style="bold")
                info_text.append(service.database_type)
        except InitializationFailure as e:
            info_text.append("\nError: ", style="bold")
            info_text.append(str(e), style="red")

    console.print(Panel(info_text, title="GeoIP Database", border_style="blue"))

    if not db_info.exists:
        raise typer.Exit(EXIT_CONFIG)


@app.command()
def init(
    output: str = typer.Option("iplocation.toml", "--output", help="Output config file path"),
    force: bool = typer.Option(False, "--force", help="Force overwrite existing file"),
):
    """Initialize a default configuration file."""
    output_path = Path(output)

    if output_path.exists() and not force:
        console.print(f"[yellow]Config file already exists: {output}[/yellow]")
        console.print("[yellow]Use --force to overwrite[/yellow]")
        raise typer.Exit(1)

    config = IPLocationConfig()
    config_content = f"""# iplocation configuration

[database]
path = "{config.database.path}"
# index_cache, memory, file or auto
mode = "{config.database.mode}"

[output]
format = "{config.output.format}"
"""

    try:
        output_path.write_text(config_content, encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Created configuration file: {output}[/green]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Look up the location of IP addresses."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


if __name__ == "__main__":
    app()
