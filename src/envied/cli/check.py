"""CLI commands for checking environment files."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from envied.cli.utils import console, fail, output_json, resolve_config, type_style
from envied.utils.errors import EnviedError


def check_cmd(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to envied.json / envied.yaml (auto-located if omitted)",
    ),
) -> None:
    """
    Check that every environment defines the same variables.

    Example:
        envied check --config envied.json
    """
    from envied.core.consistency import check_definitions, find_type_conflicts
    from envied.core.generator import Generator

    _, cfg = resolve_config(config)
    try:
        with console.status("Loading environments..."):
            definitions = Generator(cfg).load_environments()
        check_definitions(definitions)
    except EnviedError as e:
        fail(e)

    console.print(
        f"[green]OK[/green] {len(definitions)} environments define the same "
        f"{len(definitions[0].fields)} variables"
    )
    for name, types in find_type_conflicts(definitions).items():
        summary = ", ".join(f"{env}={t.value}" for env, t in types.items())
        console.print(f"[yellow]Warning:[/yellow] {escape(name)} has different types: {escape(summary)}")


def inspect_cmd(
    env_file: Path = typer.Argument(
        ...,
        help="Path to the KEY=VALUE definitions file",
    ),
    format: str = typer.Option(
        "terminal",
        "--format",
        "-f",
        help="Output format (terminal, json)",
    ),
) -> None:
    """
    Show the variables of a definitions file and their inferred types.

    Values are not printed.

    Example:
        envied inspect .env.dev
    """
    from envied.core.loader import load_env_file

    try:
        fields = load_env_file(env_file)
    except EnviedError as e:
        fail(e)

    if format == "json":
        output_json(
            [
                {"name": f.name, "type": f.type.value, "obfuscated": f.type.obfuscated and f.value != ""}
                for f in fields
            ]
        )
        return

    table = Table(title=escape(str(env_file)))
    table.add_column("Variable", style="bold")
    table.add_column("Type")
    table.add_column("Obfuscated")
    for f in fields:
        style = type_style(f.type.value)
        obfuscated = f.type.obfuscated and f.value != ""
        table.add_row(escape(f.name), f"[{style}]{f.type.value}[/{style}]", "yes" if obfuscated else "no")
    console.print(table)
    if not fields:
        console.print("[yellow]No variables found.[/yellow]")
