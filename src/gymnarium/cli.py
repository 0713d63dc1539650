"""Command line entry point: ``gymnarium seed|describe|validate|sample``."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gymnarium.configs import ConfigValidationError, GymnariumConfig
from gymnarium.seed import SEED_WIDTHS, Seed
from gymnarium.spaces import FormatError, SpaceError
from gymnarium.utils.logging import configure_logging

app = typer.Typer(
    help="Inspect seeds and formats of gymnarium spaces",
    rich_markup_mode="rich",
)
console = Console()


def _load_config(config_file: Path) -> GymnariumConfig:
    try:
        config = GymnariumConfig.from_yaml_file(config_file)
    except ConfigValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e
    configure_logging(config.logging)
    errors = config.validate()
    if errors:
        console.print("[red]✗ Configuration validation failed:[/red]")
        for error in errors:
            console.print(f"  • {error}")
        raise typer.Exit(1)
    return config


@app.command()
def seed(
    value: str = typer.Argument(..., help="Seed text, or an integer with --numeric"),
    width: int = typer.Option(8, "--width", "-w", help="Fold width in bytes (8, 16 or 32)"),
    as_int: bool = typer.Option(False, "--int", help="Print the 64-bit integer instead"),
    numeric: bool = typer.Option(
        False, "--numeric", "-n", help="Treat VALUE as an unsigned 64-bit integer"
    ),
) -> None:
    """Fold a seed and print the resulting bytes."""
    try:
        seed_value = Seed.from_value(int(value) if numeric else value)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    if as_int:
        console.print(int(seed_value))
        return
    if width not in SEED_WIDTHS:
        console.print(f"[red]Error: width must be one of {SEED_WIDTHS}, got {width}[/red]")
        raise typer.Exit(1)
    console.print(list(seed_value.fold(width)))


@app.command()
def validate(
    config_file: Path = typer.Argument(..., help="Path to config file to validate"),
) -> None:
    """Validate a configuration file."""
    _load_config(config_file)
    console.print("[green]✓ Configuration is valid![/green]")


@app.command()
def describe(
    config_file: Path = typer.Argument(..., help="Path to config file"),
) -> None:
    """List the regions of the configured format."""
    config = _load_config(config_file)
    space_format = config.format.build_format()

    table = Table(title=f"Format ({space_format.length} cells)")
    table.add_column("Key", style="cyan")
    table.add_column("Offset", justify="right")
    table.add_column("Shape")
    for key in space_format.keys():
        table.add_row(
            key, str(space_format.offset_of(key)), str(space_format.shape_of(key))
        )
    console.print(table)


@app.command()
def sample(
    config_file: Path = typer.Argument(..., help="Path to config file"),
    seed_text: str | None = typer.Option(
        None, "--seed", "-s", help="Override the configured sampling seed"
    ),
) -> None:
    """Sample one position and print every region of it."""
    config = _load_config(config_file)
    try:
        space_format = config.format.build_format()
        space = config.format.build_space(space_format)
    except (FormatError, SpaceError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    if seed_text is not None:
        key = Seed.from_value(seed_text).to_prng_key()
    else:
        key = config.sampling.prng_key()
    position = space.sample_with(key)

    table = Table(title="Sampled position")
    table.add_column("Key", style="cyan")
    table.add_column("Values")
    for key_name in space_format.keys():
        subposition = space_format.get_subposition(position, key_name)
        values = ", ".join(str(value.value) for value in subposition)
        table.add_row(key_name, values)
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
