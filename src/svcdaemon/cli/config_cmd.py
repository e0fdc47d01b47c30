"""Config subcommand group for configuration management."""

import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel

from svcdaemon.config import get_settings
from svcdaemon.daemon.config_init import init_config
from svcdaemon.daemon.paths import get_config_file_path

app = typer.Typer(help="Configuration management")
console = Console()


@app.command()
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
    name: str | None = typer.Option(None, "--name", "-n", help="Service name"),
    port: str | None = typer.Option(None, "--port", "-p", help="Service port (informational)"),
    no_interactive: bool = typer.Option(False, "--no-interactive", help="Disable interactive prompts"),
    path: Path | None = typer.Option(None, "--path", help="Config file to write"),
):
    """Initialize default configuration."""
    try:
        config_path = init_config(
            force=force,
            name=name,
            port=port,
            interactive=not no_interactive,
            config_path=path,
        )
        console.print(f"[green]Configuration initialized:[/green] {config_path}")
    except FileExistsError as e:
        console.print(f"[yellow]{e}[/yellow]")
        console.print("[dim]Use --force to overwrite[/dim]")
        raise typer.Exit(code=1)
    except Exception as e:
        console.print(f"[red]Configuration initialization failed:[/red] {e}")
        raise typer.Exit(code=1)


@app.command()
def show(
    path: Path | None = typer.Option(None, "--path", help="Config file to show"),
    json_output: bool = typer.Option(False, "--json", help="Output raw JSON instead of formatted panel"),
):
    """Show current configuration."""
    try:
        config_path = path or get_config_file_path()

        if not config_path.exists():
            console.print(f"[yellow]Config file not found:[/yellow] {config_path}")
            console.print("[dim]Run 'svcdaemon config init' to create one[/dim]")
            raise typer.Exit(code=1)

        with open(config_path, "r", encoding="utf-8") as f:
            config_data = json.load(f)

        if json_output:
            typer.echo(json.dumps(config_data, indent=2))
        else:
            json_obj = JSON(json.dumps(config_data, indent=2))
            panel = Panel(json_obj, title=f"Configuration: {config_path}", border_style="cyan")
            console.print(panel)

    except typer.Exit:
        raise
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in config file:[/red] {e}")
        raise typer.Exit(code=1)
    except Exception as e:
        console.print(f"[red]Failed to read config:[/red] {e}")
        raise typer.Exit(code=1)


@app.command()
def validate(
    path: Path | None = typer.Option(None, "--path", help="Config file to validate"),
):
    """Validate configuration file."""
    try:
        config_path = path or get_config_file_path()

        if not config_path.exists():
            console.print(f"[yellow]Config file not found:[/yellow] {config_path}")
            console.print("[dim]Run 'svcdaemon config init' to create one[/dim]")
            raise typer.Exit(code=1)

        settings = get_settings(config_path)

        console.print("[green]Configuration is valid[/green]")
        console.print(f"[dim]Service: {settings.service.name}[/dim]")
        console.print(f"[dim]Unit dir: {settings.paths.systemd_unit_dir}[/dim]")
        console.print(f"[dim]Init dir: {settings.paths.init_dir}[/dim]")

    except typer.Exit:
        raise
    except ValidationError as e:
        console.print("[red]Configuration validation failed:[/red]")
        for error in e.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            console.print(f"  [yellow]{loc}:[/yellow] {error['msg']}")
        raise typer.Exit(code=1)
    except Exception as e:
        console.print(f"[red]Validation failed:[/red] {e}")
        raise typer.Exit(code=1)
