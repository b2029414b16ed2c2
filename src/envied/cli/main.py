"""Main CLI entry point for envied."""

import typer
from rich.console import Console

from envied.cli import check, generate

app = typer.Typer(
    name="envied",
    help="Generate typed, obfuscated configuration modules from environment files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register subcommands
app.command(name="generate")(generate.generate_cmd)
app.command(name="generate-env")(generate.generate_env_cmd)
app.command(name="check")(check.check_cmd)
app.command(name="inspect")(check.inspect_cmd)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
) -> None:
    """
    envied: typed configuration modules from environment files.

    - [bold]generate[/bold]: Generate the merged module for all environments
    - [bold]generate-env[/bold]: Generate a module for a single environment file
    - [bold]check[/bold]: Check that environments define the same variables
    - [bold]inspect[/bold]: Show inferred types of a definitions file
    """
    from envied.utils.logging import configure_logging

    if verbose:
        configure_logging(level="DEBUG")
    elif quiet:
        configure_logging(level="WARNING")
    else:
        configure_logging(level="INFO")


@app.command()
def version() -> None:
    """Show the envied version."""
    from envied import __version__

    console.print(f"envied version {__version__}")


if __name__ == "__main__":
    app()
