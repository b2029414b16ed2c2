"""Shared utilities for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape

from envied.utils.config import EnviedConfig, find_config_file, load_config
from envied.utils.errors import EnviedError, MalformedConfigError

# Shared console instance
console = Console()


def fail(error: EnviedError) -> NoReturn:
    """Print an error and exit with status 1.

    Args:
        error: Error raised by the library
    """
    console.print(f"[red]Error:[/red] {escape(str(error.to_error_info()))}")
    raise typer.Exit(1)


def resolve_config(config_path: Path | None) -> tuple[Path, EnviedConfig]:
    """Load an explicit configuration file or auto-locate one.

    Args:
        config_path: Path given on the command line, if any

    Returns:
        The configuration path and the loaded configuration
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            fail(MalformedConfigError("No envied configuration file found in this or parent directories"))
        console.print(f"Using configuration file [bold]{escape(str(config_path))}[/bold]")

    try:
        return config_path, load_config(config_path)
    except EnviedError as e:
        fail(e)


def output_json(data: dict[str, Any] | list[Any] | BaseModel) -> None:
    """Print data as JSON.

    Args:
        data: Data to output (dict, list or Pydantic model)
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    console.print_json(json.dumps(data, default=str))


def type_style(type_name: str) -> str:
    """Get Rich style for a field type.

    Args:
        type_name: Field type value (str, int, bool, float)

    Returns:
        Rich style string
    """
    styles = {
        "str": "green",
        "int": "cyan",
        "bool": "magenta",
        "float": "yellow",
    }
    return styles.get(type_name, "white")
