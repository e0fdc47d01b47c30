"""CLI package for svcdaemon."""

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from svcdaemon.cli import config_cmd, service_cmd
from svcdaemon.config import get_settings
from svcdaemon.daemon.logging_setup import setup_logging

app = typer.Typer(
    name="svcdaemon",
    help="Install and control a program as a native OS service",
    no_args_is_help=True,
)
console = Console()

app.add_typer(service_cmd.app, name="service", help="Service lifecycle management")
app.add_typer(config_cmd.app, name="config", help="Configuration management")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log native commands"),
    log_file: bool = typer.Option(False, "--log-file", help="Also log to the svcdaemon log file"),
):
    """Configure logging before any subcommand runs."""
    try:
        logging_config = get_settings().logging
    except ValidationError as e:
        console.print(f"[red]Invalid settings:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    setup_logging(
        log_level="DEBUG" if verbose else logging_config.level,
        file=log_file or logging_config.file,
        log_dir=logging_config.log_dir,
    )
    # service --config re-applies logging from its file with these flags
    ctx.obj = {"verbose": verbose, "log_file": log_file}


@app.command()
def version():
    """Show version information."""
    from svcdaemon import __version__
    typer.echo(f"svcdaemon {__version__}")


if __name__ == "__main__":
    app()
