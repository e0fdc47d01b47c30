"""Service subcommand group for lifecycle management."""

import json
from dataclasses import dataclass, field
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from svcdaemon.config import get_settings
from svcdaemon.daemon.logging_setup import setup_logging
from svcdaemon.daemon.manager import ServiceManager
from svcdaemon.errors import DaemonError
from svcdaemon.models import ActionResult, BackendKind, ServiceDescriptor

app = typer.Typer(help="Service lifecycle management")
console = Console()

_LEXERS = {
    BackendKind.SYSTEMD: "ini",
    BackendKind.SYSV: "bash",
    BackendKind.LAUNCHD: "xml",
}

# Lets ``install -- --flag value`` forward arguments to the installed program.
_PASSTHROUGH = {"allow_extra_args": True, "ignore_unknown_options": True}


@dataclass
class ServiceOptions:
    """Descriptor overrides and root flags collected by the group callbacks."""

    config: Path | None = None
    name: str | None = None
    port: str | None = None
    version: str | None = None
    description: str | None = None
    dependencies: list[str] = field(default_factory=list)
    executable: str | None = None
    verbose: bool = False
    log_file: bool = False


@app.callback()
def main(
    ctx: typer.Context,
    name: str = typer.Option(None, "--name", "-n", help="Service name"),
    port: str = typer.Option(None, "--port", "-p", help="Listening port (informational)"),
    version: str = typer.Option(None, "--service-version", help="Service version string"),
    description: str = typer.Option(None, "--description", "-D", help="Service description"),
    dependency: list[str] = typer.Option(None, "--dependency", "-d", help="Required service (repeatable)"),
    executable: str = typer.Option(
        None,
        "--exec",
        "-e",
        help="Program the service runs (default: the running svcdaemon executable)",
    ),
    config: Path = typer.Option(None, "--config", "-c", help="Path to JSON config file"),
):
    """Manage the service with the host's native service manager."""
    root_flags = ctx.obj if isinstance(ctx.obj, dict) else {}
    ctx.obj = ServiceOptions(
        config=config,
        name=name,
        port=port,
        version=version,
        description=description,
        dependencies=list(dependency or []),
        executable=executable,
        verbose=root_flags.get("verbose", False),
        log_file=root_flags.get("log_file", False),
    )


def _build_manager(ctx: typer.Context) -> ServiceManager:
    """Merge CLI overrides onto configured defaults and build the facade."""
    opts: ServiceOptions = ctx.obj or ServiceOptions()
    if opts.config:
        settings = get_settings(opts.config)
        setup_logging(
            log_level="DEBUG" if opts.verbose else settings.logging.level,
            file=opts.log_file or settings.logging.file,
            log_dir=settings.logging.log_dir,
        )
    else:
        settings = get_settings()
    defaults = settings.service
    descriptor = ServiceDescriptor(
        name=opts.name or defaults.name,
        port=opts.port if opts.port is not None else defaults.port,
        version=opts.version or defaults.version,
        description=opts.description or defaults.description,
        dependencies=tuple(opts.dependencies or defaults.dependencies),
    )
    if opts.executable:
        program = str(Path(opts.executable).absolute())
        return ServiceManager(descriptor, settings, exec_resolver=lambda: program)
    return ServiceManager(descriptor, settings)


def _get_manager(ctx: typer.Context) -> ServiceManager:
    try:
        return _build_manager(ctx)
    except DaemonError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[red]Invalid service settings:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def _report(result: ActionResult) -> None:
    """Print an action result; exit non-zero when it carries an error."""
    if result.error is None:
        console.print(f"[green]{escape(result.message)}[/green]")
        return
    console.print(f"[red]{escape(result.message)}[/red]")
    console.print(f"[red]Error:[/red] {escape(str(result.error))}")
    raise typer.Exit(code=1)


@app.command(context_settings=_PASSTHROUGH)
def install(ctx: typer.Context):
    """Install the service. Extra arguments are passed to the program.

    The program is the running svcdaemon executable unless --exec names one.
    """
    _report(_get_manager(ctx).install(ctx.args))


@app.command()
def remove(ctx: typer.Context):
    """Unregister the service and delete its definition."""
    _report(_get_manager(ctx).remove())


@app.command()
def start(ctx: typer.Context):
    """Start the service."""
    _report(_get_manager(ctx).start())


@app.command()
def stop(ctx: typer.Context):
    """Stop the service."""
    _report(_get_manager(ctx).stop())


@app.command()
def restart(ctx: typer.Context):
    """Restart the service."""
    _report(_get_manager(ctx).restart())


@app.command()
def status(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Show whether the service is running."""
    manager = _get_manager(ctx)
    result = manager.status()

    if json_output:
        typer.echo(json.dumps({
            "service": manager.descriptor.name,
            "backend": str(manager.backend_kind),
            "message": result.message,
            "running": result.running,
            "pid": result.pid,
            "error": str(result.error) if result.error else None,
            "code": str(result.error.code) if result.error else None,
        }, indent=2))
        if result.error is not None:
            raise typer.Exit(code=1)
        return

    if result.error is not None:
        if result.message:
            console.print(f"[yellow]{escape(result.message)}[/yellow]")
        console.print(f"[red]Error:[/red] {escape(str(result.error))}")
        raise typer.Exit(code=1)

    color = "green" if result.running else "yellow"
    lines = [
        f"[{color}]{escape(result.message)}[/{color}]",
        "",
        f"Backend: {manager.backend_kind}",
        f"Definition: {manager.backend.service_path}",
    ]
    if result.pid is not None:
        lines.append(f"PID: {result.pid}")
    console.print(Panel("\n".join(lines), title="Service Status", border_style=color))


@app.command()
def execpath(
    ctx: typer.Context,
    service_name: str = typer.Argument("", help="Service to query (default: this service)"),
):
    """Print the executable path the service manager has on record."""
    result = _get_manager(ctx).exec_path(service_name)
    if result.error is not None:
        console.print(f"[red]Error:[/red] {escape(str(result.error))}")
        raise typer.Exit(code=1)
    typer.echo(result.path)


@app.command(context_settings=_PASSTHROUGH)
def render(ctx: typer.Context):
    """Print the service definition install would write, without writing it."""
    manager = _get_manager(ctx)
    try:
        text = manager.backend.render_definition(ctx.args)
    except DaemonError as e:
        console.print(f"[red]Render failed:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    console.print(f"[dim]# {manager.backend.service_path}[/dim]")
    console.print(Syntax(text, _LEXERS[manager.backend_kind], theme="monokai", line_numbers=False))


@app.command()
def backend(ctx: typer.Context):
    """Show which native service manager was detected."""
    manager = _get_manager(ctx)
    typer.echo(str(manager.backend_kind))
