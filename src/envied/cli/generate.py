"""CLI commands for generating configuration modules."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from envied.cli.utils import console, fail, resolve_config
from envied.models.generation import EmissionFormat, GenerationResult
from envied.utils.errors import EnviedError


def generate_cmd(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to envied.json / envied.yaml (auto-located if omitted)",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        "-s",
        help="Obfuscation seed (0 randomizes); overrides random_seed",
    ),
    format: Optional[EmissionFormat] = typer.Option(
        None,
        "--format",
        "-f",
        help="Obfuscation layout (arrays, packed); overrides the config",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the generated module instead of writing it",
    ),
) -> None:
    """
    Generate the merged configuration module for all environments.

    Loads every environment file, checks that all environments define the
    same variables, obfuscates String and Float values and writes one
    Python module.

    Example:
        envied generate --config envied.json --seed 12345
    """
    from envied.core.generator import Generator

    _, cfg = resolve_config(config)
    updates = {}
    if seed is not None:
        updates["random_seed"] = seed
    if format is not None:
        updates["format"] = format
    if updates:
        cfg = cfg.model_copy(update=updates)

    generator = Generator(cfg)
    try:
        with console.status("Generating configuration..."):
            result = generator.build()
            if not dry_run:
                generator.write_result(result)
    except EnviedError as e:
        fail(e)

    if dry_run:
        console.print(result.content, markup=False, highlight=False, soft_wrap=True)
        return
    _print_summary(result)


def generate_env_cmd(
    env_file: Path = typer.Argument(
        ...,
        help="Path to the KEY=VALUE definitions file",
    ),
    environment: str = typer.Option(
        ...,
        "--env",
        "-e",
        help="Environment name (dev, prod, ...)",
    ),
    struct_name: str = typer.Option(
        ...,
        "--struct",
        help="Name of the generated configuration class",
    ),
    output_dir: Path = typer.Option(
        Path("."),
        "--output-dir",
        "-o",
        help="Directory for the generated module",
    ),
    package_name: str = typer.Option(
        "config",
        "--package",
        help="Package label used in the module docstring",
    ),
    seed: int = typer.Option(
        0,
        "--seed",
        "-s",
        help="Obfuscation seed (0 randomizes)",
    ),
) -> None:
    """
    Generate a single-environment module from one definitions file.

    Example:
        envied generate-env .env.dev --env dev --struct DevConfig -o config
    """
    from envied.core.generator import Generator
    from envied.utils.config import EnviedConfig, EnvironmentConfig

    try:
        cfg = EnviedConfig(
            package_name=package_name,
            output_dir=output_dir,
            random_seed=seed,
            environments={environment: EnvironmentConfig(env_file=env_file, struct_name=struct_name)},
        )
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    try:
        with console.status("Generating configuration..."):
            result = Generator(cfg).generate_from_env_file(env_file, environment, struct_name)
    except EnviedError as e:
        fail(e)
    _print_summary(result)


def _print_summary(result: GenerationResult) -> None:
    """Print a summary panel for a generation result."""
    table = Table(show_header=False, box=None)
    table.add_column("Property", style="bold", width=14)
    table.add_column("Value")
    table.add_row("Environments", escape(", ".join(result.environments)))
    table.add_row("Format", result.format.value)
    for path in result.output_paths:
        table.add_row("Written", escape(str(path)))
    console.print(Panel(table, title="[green]Configuration generated[/green]"))
